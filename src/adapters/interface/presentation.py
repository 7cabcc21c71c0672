"""Projection presentation logic.

This module contains pure transformations from a ``CashflowProjection`` to
chart-ready points, labelled danger ranges, and summary figures. Amounts are
converted from cents to ``Decimal`` major units; nothing here renders.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Iterable, Sequence

from src.domain.models.entities import BankAccount
from src.domain.models.projection import (
    CashflowProjection,
    DailySnapshot,
    DangerRange,
    DangerScenario,
    ScenarioSummary,
)
from src.domain.services.simulation import (
    calculate_investment_total as _investment_total_cents,
)
from src.utils.decimal_utils import cents_to_major

DEFAULT_LOCALE = "pt-BR"

_MONTH_ABBREVIATIONS = {
    "pt-BR": (
        "jan", "fev", "mar", "abr", "mai", "jun",
        "jul", "ago", "set", "out", "nov", "dez",
    ),
    "en-US": (
        "Jan", "Feb", "Mar", "Apr", "May", "Jun",
        "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
    ),
}


@dataclass(frozen=True)
class ChartDataPoint:
    """One day of the balance chart.

    Attributes:
        label: Short localized date for the x axis.
        date: Calendar day of the point.
        optimistic_balance: Optimistic balance in major units.
        pessimistic_balance: Pessimistic balance in major units.
        investment_inclusive_balance: Optimistic balance plus investments.
        is_optimistic_danger: Optimistic balance is negative.
        is_pessimistic_danger: Pessimistic balance is negative.
        snapshot: Source day, kept for tooltips.
    """

    label: str
    date: date
    optimistic_balance: Decimal
    pessimistic_balance: Decimal
    investment_inclusive_balance: Decimal
    is_optimistic_danger: bool
    is_pessimistic_danger: bool
    snapshot: DailySnapshot


@dataclass(frozen=True)
class LabeledDangerRange:
    """Danger range expressed with chart labels."""

    start: str
    end: str
    scenario: DangerScenario


@dataclass(frozen=True)
class ScenarioStats:
    """Scenario totals in major units.

    ``surplus`` is ``end_balance - starting_balance``; negative is a deficit.
    """

    total_income: Decimal
    total_expenses: Decimal
    end_balance: Decimal
    danger_day_count: int
    surplus: Decimal


@dataclass(frozen=True)
class SummaryStats:
    """Summary panel figures for both scenarios."""

    starting_balance: Decimal
    optimistic: ScenarioStats
    pessimistic: ScenarioStats


def format_chart_date(value: date, locale: str = DEFAULT_LOCALE) -> str:
    """Return a short day-and-month label.

    ``pt-BR`` gives ``"26 de nov."``, ``en-US`` gives ``"Nov 26"``. Unknown
    locales fall back to ``pt-BR``.
    """
    months = _MONTH_ABBREVIATIONS.get(locale, _MONTH_ABBREVIATIONS[DEFAULT_LOCALE])
    month = months[value.month - 1]
    if locale == "en-US":
        return f"{month} {value.day}"
    return f"{value.day} de {month}."


def calculate_investment_total(accounts: Iterable[BankAccount]) -> Decimal:
    """Sum investment account balances in major units."""
    return cents_to_major(_investment_total_cents(accounts))


def transform_to_chart_data(
    days: Sequence[DailySnapshot],
    investment_total: Decimal = Decimal("0"),
    locale: str = DEFAULT_LOCALE,
) -> list[ChartDataPoint]:
    """Convert daily snapshots into chart points.

    Args:
        days: Projection days in date order.
        investment_total: Investment balances in major units, constant
            across the window.
        locale: Locale of the date labels.

    Returns:
        list[ChartDataPoint]: One point per day.
    """
    points = []
    for day in days:
        optimistic = cents_to_major(day.optimistic_balance)
        points.append(
            ChartDataPoint(
                label=format_chart_date(day.date, locale),
                date=day.date,
                optimistic_balance=optimistic,
                pessimistic_balance=cents_to_major(day.pessimistic_balance),
                investment_inclusive_balance=optimistic + investment_total,
                is_optimistic_danger=day.is_optimistic_danger,
                is_pessimistic_danger=day.is_pessimistic_danger,
                snapshot=day,
            )
        )
    return points


def build_danger_ranges(
    points: Sequence[ChartDataPoint],
    ranges: Iterable[DangerRange],
) -> list[LabeledDangerRange]:
    """Attach chart labels to index-based danger ranges."""
    return [
        LabeledDangerRange(
            start=points[danger_range.start_index].label,
            end=points[danger_range.end_index].label,
            scenario=danger_range.scenario,
        )
        for danger_range in ranges
    ]


def _scenario_stats(
    summary: ScenarioSummary,
    starting_balance: Decimal,
) -> ScenarioStats:
    end_balance = cents_to_major(summary.end_balance)
    return ScenarioStats(
        total_income=cents_to_major(summary.total_income),
        total_expenses=cents_to_major(summary.total_expenses),
        end_balance=end_balance,
        danger_day_count=summary.danger_day_count,
        surplus=end_balance - starting_balance,
    )


def transform_to_summary_stats(projection: CashflowProjection) -> SummaryStats:
    """Return the summary panel figures of a projection."""
    starting_balance = cents_to_major(projection.starting_balance)
    return SummaryStats(
        starting_balance=starting_balance,
        optimistic=_scenario_stats(projection.optimistic, starting_balance),
        pessimistic=_scenario_stats(projection.pessimistic, starting_balance),
    )


__all__ = [
    "ChartDataPoint",
    "LabeledDangerRange",
    "ScenarioStats",
    "SummaryStats",
    "format_chart_date",
    "calculate_investment_total",
    "transform_to_chart_data",
    "build_danger_ranges",
    "transform_to_summary_stats",
]
