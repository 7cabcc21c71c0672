"""Reduction of daily snapshots into scenario totals and danger ranges."""

from collections.abc import Sequence
from datetime import date

from src.domain.models.entities import Certainty
from src.domain.models.projection import (
    DailySnapshot,
    DangerDay,
    DangerRange,
    DangerScenario,
    Scenario,
    ScenarioSummary,
)


def generate_scenario_summary(
    days: Sequence[DailySnapshot],
    scenario: Scenario,
) -> ScenarioSummary:
    """Sum income, expenses, and danger days of one scenario.

    Args:
        days: Daily snapshots in date order.
        scenario: Scenario to summarize.

    Returns:
        ScenarioSummary: Totals, end balance, and danger days.
    """
    total_income = 0
    total_expenses = 0
    danger_days: list[DangerDay] = []
    for day in days:
        for event in day.income_events:
            if (
                scenario == Scenario.OPTIMISTIC
                or event.certainty == Certainty.GUARANTEED
            ):
                total_income += event.amount
        total_expenses += sum(event.amount for event in day.expense_events)
        if day.is_danger_for(scenario):
            danger_days.append(
                DangerDay(
                    date=day.date,
                    day_offset=day.day_offset,
                    balance=day.balance_for(scenario),
                )
            )

    end_balance = days[-1].balance_for(scenario) if days else 0
    return ScenarioSummary(
        total_income=total_income,
        total_expenses=total_expenses,
        end_balance=end_balance,
        danger_days=danger_days,
        danger_day_count=len(danger_days),
    )


def _danger_scenario(day: DailySnapshot) -> DangerScenario | None:
    if day.is_optimistic_danger and day.is_pessimistic_danger:
        return DangerScenario.BOTH
    if day.is_optimistic_danger:
        return DangerScenario.OPTIMISTIC
    if day.is_pessimistic_danger:
        return DangerScenario.PESSIMISTIC
    return None


def extract_danger_ranges(days: Sequence[DailySnapshot]) -> list[DangerRange]:
    """Compress consecutive danger days into index ranges.

    A range ends whenever the next day has a different danger-flag
    combination, including a day with no danger at all.
    """
    ranges: list[DangerRange] = []
    current: DangerRange | None = None
    for index, day in enumerate(days):
        scenario = _danger_scenario(day)
        if current is not None and scenario == current.scenario:
            current = DangerRange(current.start_index, index, scenario)
            continue
        if current is not None:
            ranges.append(current)
        current = (
            DangerRange(index, index, scenario) if scenario is not None else None
        )
    if current is not None:
        ranges.append(current)
    return ranges


def find_minimum_balance(
    days: Sequence[DailySnapshot],
    scenario: Scenario,
) -> tuple[int, date] | None:
    """Return the lowest balance of a scenario and its first date."""
    if not days:
        return None
    lowest = min(days, key=lambda day: day.balance_for(scenario))
    return lowest.balance_for(scenario), lowest.date


__all__ = [
    "generate_scenario_summary",
    "extract_danger_ranges",
    "find_minimum_balance",
]
