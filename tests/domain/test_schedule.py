"""Tests for schedule expansion."""

from datetime import date

from src.domain.models.entities import (
    Certainty,
    DayOfMonthSchedule,
    DayOfWeekSchedule,
    Frequency,
    RecurringProject,
    TwiceMonthlySchedule,
)
from src.domain.services.schedule import (
    Occurrence,
    expand_day_of_month,
    expand_day_of_week,
    expand_project,
    expand_schedule,
    expand_twice_monthly,
    get_effective_day,
)


def test_get_effective_day_clamps_to_month_length() -> None:
    """Days beyond the month length should land on its last day."""
    assert get_effective_day(31, 2025, 4) == 30
    assert get_effective_day(31, 2025, 2) == 28
    assert get_effective_day(31, 2024, 2) == 29
    assert get_effective_day(15, 2025, 2) == 15


def test_expand_day_of_month_clamps_each_month() -> None:
    """Day 31 should emit the last day of every shorter month."""
    dates = expand_day_of_month(31, date(2025, 1, 1), date(2025, 4, 30))

    assert dates == [
        date(2025, 1, 31),
        date(2025, 2, 28),
        date(2025, 3, 31),
        date(2025, 4, 30),
    ]


def test_expand_day_of_month_excludes_days_outside_window() -> None:
    """A day before the window start or after its end is not emitted."""
    dates = expand_day_of_month(5, date(2025, 1, 10), date(2025, 2, 4))

    assert dates == []


def test_expand_day_of_week_weekly() -> None:
    """Weekly schedules should fire on every matching ISO weekday."""
    dates = expand_day_of_week(1, date(2025, 1, 1), date(2025, 1, 31))

    assert dates == [
        date(2025, 1, 6),
        date(2025, 1, 13),
        date(2025, 1, 20),
        date(2025, 1, 27),
    ]


def test_expand_day_of_week_biweekly_without_anchor() -> None:
    """Biweekly schedules start on the first matching day of the window."""
    dates = expand_day_of_week(
        1,
        date(2025, 1, 1),
        date(2025, 1, 31),
        interval_weeks=2,
    )

    assert dates == [date(2025, 1, 6), date(2025, 1, 20)]


def test_expand_day_of_week_biweekly_follows_anchor_phase() -> None:
    """An anchor date should fix which alternate weeks are paid."""
    dates = expand_day_of_week(
        1,
        date(2025, 1, 1),
        date(2025, 1, 31),
        interval_weeks=2,
        anchor=date(2024, 12, 30),
    )

    assert dates == [date(2025, 1, 13), date(2025, 1, 27)]


def test_expand_twice_monthly_uses_override_amounts() -> None:
    """Each occurrence should carry its own override, in date order."""
    schedule = TwiceMonthlySchedule(
        first_day=20,
        second_day=5,
        first_amount=300,
        second_amount=100,
    )

    occurrences = expand_twice_monthly(
        schedule,
        date(2025, 1, 1),
        date(2025, 1, 31),
        base_amount=999,
    )

    assert occurrences == [
        Occurrence(date=date(2025, 1, 5), amount=100),
        Occurrence(date=date(2025, 1, 20), amount=300),
    ]


def test_expand_twice_monthly_without_overrides_uses_base_amount() -> None:
    """Without overrides both payments use the project amount."""
    schedule = TwiceMonthlySchedule(first_day=15, second_day=31)

    occurrences = expand_twice_monthly(
        schedule,
        date(2025, 2, 1),
        date(2025, 2, 28),
        base_amount=500,
    )

    assert occurrences == [
        Occurrence(date=date(2025, 2, 15), amount=500),
        Occurrence(date=date(2025, 2, 28), amount=500),
    ]


def test_expand_schedule_dispatches_on_schedule_type() -> None:
    """Monthly and weekly schedules should expand with the base amount."""
    monthly = expand_schedule(
        DayOfMonthSchedule(day_of_month=10),
        Frequency.MONTHLY,
        date(2025, 1, 1),
        date(2025, 2, 28),
        base_amount=700,
    )
    weekly = expand_schedule(
        DayOfWeekSchedule(day_of_week=5),
        Frequency.WEEKLY,
        date(2025, 1, 1),
        date(2025, 1, 14),
        base_amount=50,
    )

    assert [item.date for item in monthly] == [
        date(2025, 1, 10),
        date(2025, 2, 10),
    ]
    assert {item.amount for item in monthly} == {700}
    assert weekly == [
        Occurrence(date=date(2025, 1, 3), amount=50),
        Occurrence(date=date(2025, 1, 10), amount=50),
    ]


def test_expand_project_biweekly_uses_frequency_interval() -> None:
    """A biweekly project should fire every other week."""
    project = RecurringProject(
        id="p1",
        name="Freelance",
        amount=1000,
        frequency=Frequency.BIWEEKLY,
        payment_schedule=DayOfWeekSchedule(day_of_week=3),
        certainty=Certainty.PROBABLE,
    )

    occurrences = expand_project(project, date(2025, 1, 1), date(2025, 1, 31))

    assert [item.date for item in occurrences] == [
        date(2025, 1, 1),
        date(2025, 1, 15),
        date(2025, 1, 29),
    ]
