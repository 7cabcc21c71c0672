"""Tests for scenario aggregation and danger ranges."""

from datetime import date, timedelta

from src.domain.models.entities import Certainty
from src.domain.models.projection import (
    DailySnapshot,
    DangerRange,
    DangerScenario,
    ExpenseEvent,
    ExpenseSourceType,
    IncomeEvent,
    Scenario,
)
from src.domain.services.aggregation import (
    extract_danger_ranges,
    find_minimum_balance,
    generate_scenario_summary,
)

START = date(2025, 3, 1)


def _day(
    offset: int,
    optimistic: int,
    pessimistic: int,
    income: list[IncomeEvent] | None = None,
    expenses: list[ExpenseEvent] | None = None,
) -> DailySnapshot:
    return DailySnapshot(
        date=START + timedelta(days=offset),
        day_offset=offset,
        optimistic_balance=optimistic,
        pessimistic_balance=pessimistic,
        income_events=income or [],
        expense_events=expenses or [],
        is_optimistic_danger=optimistic < 0,
        is_pessimistic_danger=pessimistic < 0,
    )


def test_extract_danger_ranges_splits_on_flag_changes() -> None:
    """Runs should break whenever the danger combination changes."""
    days = [
        _day(0, 100, 100),
        _day(1, -1, -5),
        _day(2, -1, -5),
        _day(3, 10, -5),
        _day(4, 10, -5),
        _day(5, 10, 10),
        _day(6, -3, -3),
    ]

    ranges = extract_danger_ranges(days)

    assert ranges == [
        DangerRange(1, 2, DangerScenario.BOTH),
        DangerRange(3, 4, DangerScenario.PESSIMISTIC),
        DangerRange(6, 6, DangerScenario.BOTH),
    ]


def test_extract_danger_ranges_without_danger_is_empty() -> None:
    """Healthy projections have no ranges."""
    assert extract_danger_ranges([_day(0, 1, 1), _day(1, 0, 0)]) == []
    assert extract_danger_ranges([]) == []


def test_optimistic_only_danger_gets_its_own_scenario() -> None:
    """A day negative only in the optimistic run is labelled optimistic."""
    ranges = extract_danger_ranges([_day(0, -1, 5)])

    assert ranges == [DangerRange(0, 0, DangerScenario.OPTIMISTIC)]


def test_generate_scenario_summary_filters_income_by_certainty() -> None:
    """Pessimistic totals only count guaranteed income."""
    income = [
        IncomeEvent("p1", "Salary", 1000, Certainty.GUARANTEED),
        IncomeEvent("p2", "Gig", 400, Certainty.PROBABLE),
    ]
    expenses = [
        ExpenseEvent(
            source_id="e1",
            source_name="Rent",
            source_type=ExpenseSourceType.EXPENSE,
            amount=1500,
        )
    ]
    days = [
        _day(0, 1400, 1000, income=income),
        _day(1, -100, -500, expenses=expenses),
    ]

    optimistic = generate_scenario_summary(days, Scenario.OPTIMISTIC)
    pessimistic = generate_scenario_summary(days, Scenario.PESSIMISTIC)

    assert optimistic.total_income == 1400
    assert pessimistic.total_income == 1000
    assert optimistic.total_expenses == pessimistic.total_expenses == 1500
    assert optimistic.end_balance == -100
    assert pessimistic.end_balance == -500
    assert pessimistic.danger_day_count == 1
    assert pessimistic.danger_days[0].date == START + timedelta(days=1)
    assert pessimistic.danger_days[0].balance == -500


def test_generate_scenario_summary_of_no_days() -> None:
    """An empty day list sums to zero."""
    summary = generate_scenario_summary([], Scenario.OPTIMISTIC)

    assert summary.end_balance == 0
    assert summary.danger_day_count == 0


def test_find_minimum_balance_returns_first_lowest_day() -> None:
    """The earliest date of the lowest balance should be reported."""
    days = [_day(0, 50, 40), _day(1, 20, 10), _day(2, 30, 10)]

    assert find_minimum_balance(days, Scenario.PESSIMISTIC) == (
        10,
        START + timedelta(days=1),
    )
    assert find_minimum_balance([], Scenario.PESSIMISTIC) is None
