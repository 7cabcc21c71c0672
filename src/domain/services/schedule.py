"""Schedule expansion from recurrence rules to calendar occurrences.

Every expander works on an inclusive ``[start, end]`` window and returns
occurrences in ascending date order. Days of month beyond the length of a
month are clamped to its last day (day 31 in February lands on the 28th or
29th).
"""

import calendar
from collections.abc import Iterator
from dataclasses import dataclass
from datetime import date, timedelta
from typing import assert_never

from src.domain.models.entities import (
    DayOfMonthSchedule,
    DayOfWeekSchedule,
    Frequency,
    PaymentSchedule,
    RecurringProject,
    TwiceMonthlySchedule,
)


@dataclass(frozen=True)
class Occurrence:
    """Concrete firing of a recurrence rule."""

    date: date
    amount: int


def get_effective_day(day: int, year: int, month: int) -> int:
    """Clamp a configured day of month to the length of that month.

    Args:
        day: Configured day of month (1-31).
        year: Calendar year.
        month: Calendar month (1-12).

    Returns:
        int: ``min(day, days_in_month)``.
    """
    return min(day, calendar.monthrange(year, month)[1])


def _iter_months(start: date, end: date) -> Iterator[tuple[int, int]]:
    year, month = start.year, start.month
    while (year, month) <= (end.year, end.month):
        yield year, month
        if month == 12:
            year, month = year + 1, 1
        else:
            month += 1


def expand_day_of_month(day: int, start: date, end: date) -> list[date]:
    """Return the clamped monthly dates of ``day`` inside the window."""
    dates = []
    for year, month in _iter_months(start, end):
        candidate = date(year, month, get_effective_day(day, year, month))
        if start <= candidate <= end:
            dates.append(candidate)
    return dates


def expand_day_of_week(
    day_of_week: int,
    start: date,
    end: date,
    interval_weeks: int = 1,
    anchor: date | None = None,
) -> list[date]:
    """Return the dates falling on an ISO weekday inside the window.

    Args:
        day_of_week: ISO weekday (1=Monday, 7=Sunday).
        start: First day of the window.
        end: Last day of the window.
        interval_weeks: 1 for weekly, 2 for biweekly.
        anchor: Known payment date fixing the biweekly phase. When missing,
            the first matching weekday of the window is the first payment.

    Returns:
        list[date]: Matching dates in ascending order.
    """
    if start > end:
        return []
    first = start + timedelta(days=(day_of_week - start.isoweekday()) % 7)
    step = 7 * interval_weeks
    if anchor is not None and interval_weeks > 1:
        remainder = (first - anchor).days % step
        if remainder:
            first += timedelta(days=step - remainder)
    dates = []
    current = first
    while current <= end:
        dates.append(current)
        current += timedelta(days=step)
    return dates


def expand_twice_monthly(
    schedule: TwiceMonthlySchedule,
    start: date,
    end: date,
    base_amount: int,
) -> list[Occurrence]:
    """Return both monthly payments of a twice-monthly schedule.

    Each occurrence carries its per-day override when both overrides are
    configured, otherwise ``base_amount``.
    """
    if schedule.has_amount_overrides:
        first_amount = schedule.first_amount
        second_amount = schedule.second_amount
    else:
        first_amount = second_amount = base_amount

    occurrences = []
    for year, month in _iter_months(start, end):
        pair = sorted(
            (
                (get_effective_day(schedule.first_day, year, month), first_amount),
                (get_effective_day(schedule.second_day, year, month), second_amount),
            )
        )
        for day, amount in pair:
            candidate = date(year, month, day)
            if start <= candidate <= end:
                occurrences.append(Occurrence(date=candidate, amount=amount))
    return occurrences


def expand_schedule(
    schedule: PaymentSchedule,
    frequency: Frequency,
    start: date,
    end: date,
    base_amount: int,
) -> list[Occurrence]:
    """Expand a payment schedule into dated occurrences.

    Args:
        schedule: Validated schedule matching ``frequency``.
        frequency: Frequency of the income source.
        start: First day of the window.
        end: Last day of the window.
        base_amount: Amount used when the schedule carries no override.

    Returns:
        list[Occurrence]: Occurrences in ascending date order.
    """
    match schedule:
        case DayOfWeekSchedule():
            interval = 2 if frequency == Frequency.BIWEEKLY else 1
            dates = expand_day_of_week(
                schedule.day_of_week,
                start,
                end,
                interval_weeks=interval,
                anchor=schedule.anchor_date,
            )
            return [Occurrence(date=day, amount=base_amount) for day in dates]
        case DayOfMonthSchedule():
            dates = expand_day_of_month(schedule.day_of_month, start, end)
            return [Occurrence(date=day, amount=base_amount) for day in dates]
        case TwiceMonthlySchedule():
            return expand_twice_monthly(schedule, start, end, base_amount)
        case _:
            assert_never(schedule)


def expand_project(
    project: RecurringProject,
    start: date,
    end: date,
) -> list[Occurrence]:
    """Expand a recurring income source inside the window."""
    return expand_schedule(
        project.payment_schedule,
        project.frequency,
        start,
        end,
        project.amount,
    )


__all__ = [
    "Occurrence",
    "get_effective_day",
    "expand_day_of_month",
    "expand_day_of_week",
    "expand_twice_monthly",
    "expand_schedule",
    "expand_project",
]
