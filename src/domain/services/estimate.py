"""Estimated balance for today, derived from the last balance update.

Account balances are entered by hand and may be days old. Replaying the
scheduled movements between the update day and today gives an estimate of
today's balance, and the projection can then be rebased on that estimate
without counting the same movements twice.
"""

from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from typing import Literal
from zoneinfo import ZoneInfo

from src.domain.models.entities import BankAccount, Certainty
from src.domain.models.projection import (
    CashflowProjection,
    DailySnapshot,
    Scenario,
)
from src.domain.models.snapshot import SnapshotInputState
from src.domain.services.aggregation import generate_scenario_summary
from src.domain.services.simulation import (
    calculate_starting_balance,
    simulate_daily_balances,
)

BaseFailureReason = Literal["no_spendable_accounts", "missing_timestamps"]


@dataclass(frozen=True)
class BalanceUpdateBase:
    """Calendar days on which the spendable balances were last updated.

    ``earliest == latest`` when every account was updated the same day.
    """

    earliest: date
    latest: date

    @property
    def is_single_day(self) -> bool:
        return self.earliest == self.latest


@dataclass(frozen=True)
class EstimatedTodayBalance:
    """Estimated balances for today under both scenarios."""

    today: date
    base: BalanceUpdateBase | None
    base_failure_reason: BaseFailureReason | None
    optimistic_cents: int
    pessimistic_cents: int
    is_optimistic_estimated: bool
    is_pessimistic_estimated: bool

    @property
    def has_base(self) -> bool:
        return self.base is not None

    @property
    def is_estimated(self) -> bool:
        return self.is_optimistic_estimated or self.is_pessimistic_estimated


def to_local_date(moment: datetime, time_zone: str) -> date:
    """Return the calendar day of a timestamp in a time zone.

    Naive timestamps are read as UTC.
    """
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(ZoneInfo(time_zone)).date()


def get_balance_update_base(
    accounts: list[BankAccount],
    time_zone: str,
) -> BalanceUpdateBase | BaseFailureReason:
    """Find the update days of the spendable accounts.

    Returns:
        BalanceUpdateBase | str: The base, or the reason none exists.
    """
    spendable = [account for account in accounts if account.is_spendable]
    if not spendable:
        return "no_spendable_accounts"
    days = []
    for account in spendable:
        if account.balance_updated_at is None:
            return "missing_timestamps"
        days.append(to_local_date(account.balance_updated_at, time_zone))
    return BalanceUpdateBase(earliest=min(days), latest=max(days))


def calculate_estimated_today_balance(
    inputs: SnapshotInputState,
    today: date,
    time_zone: str,
) -> EstimatedTodayBalance:
    """Replay movements since the earliest balance update up to today.

    Args:
        inputs: Validated entities.
        today: Current calendar day in ``time_zone``.
        time_zone: IANA time zone used to read update timestamps.

    Returns:
        EstimatedTodayBalance: Estimated balances, equal to the starting
        balance when there is no base or nothing to replay.
    """
    starting_balance = calculate_starting_balance(inputs.accounts)
    base = get_balance_update_base(inputs.accounts, time_zone)
    if not isinstance(base, BalanceUpdateBase):
        return EstimatedTodayBalance(
            today=today,
            base=None,
            base_failure_reason=base,
            optimistic_cents=starting_balance,
            pessimistic_cents=starting_balance,
            is_optimistic_estimated=False,
            is_pessimistic_estimated=False,
        )

    interval_start = base.earliest + timedelta(days=1)
    if interval_start > today:
        return EstimatedTodayBalance(
            today=today,
            base=base,
            base_failure_reason=None,
            optimistic_cents=starting_balance,
            pessimistic_cents=starting_balance,
            is_optimistic_estimated=False,
            is_pessimistic_estimated=False,
        )

    days = simulate_daily_balances(
        inputs,
        interval_start,
        (today - interval_start).days + 1,
        starting_balance,
    )
    has_expense = any(day.expense_events for day in days)
    has_income = any(day.income_events for day in days)
    has_guaranteed_income = any(
        event.certainty == Certainty.GUARANTEED
        for day in days
        for event in day.income_events
    )
    return EstimatedTodayBalance(
        today=today,
        base=base,
        base_failure_reason=None,
        optimistic_cents=days[-1].optimistic_balance,
        pessimistic_cents=days[-1].pessimistic_balance,
        is_optimistic_estimated=has_expense or has_income,
        is_pessimistic_estimated=has_expense or has_guaranteed_income,
    )


def rebase_projection_from_estimated_today(
    inputs: SnapshotInputState,
    estimated: EstimatedTodayBalance,
    projection_days: int,
) -> CashflowProjection:
    """Project forward from today's estimate instead of the stored balance.

    Day 0 is today with no events, carrying the estimated balances; the
    following days replay the schedule from tomorrow on top of them.
    """
    today = estimated.today
    days = [
        DailySnapshot(
            date=today,
            day_offset=0,
            optimistic_balance=estimated.optimistic_cents,
            pessimistic_balance=estimated.pessimistic_cents,
            income_events=[],
            expense_events=[],
            is_optimistic_danger=estimated.optimistic_cents < 0,
            is_pessimistic_danger=estimated.pessimistic_cents < 0,
        )
    ]
    forward_days = max(0, projection_days - 1)
    if forward_days:
        optimistic_offset = estimated.optimistic_cents - estimated.pessimistic_cents
        forward = simulate_daily_balances(
            inputs,
            today + timedelta(days=1),
            forward_days,
            estimated.pessimistic_cents,
        )
        for day in forward:
            optimistic = day.optimistic_balance + optimistic_offset
            days.append(
                DailySnapshot(
                    date=day.date,
                    day_offset=len(days),
                    optimistic_balance=optimistic,
                    pessimistic_balance=day.pessimistic_balance,
                    income_events=day.income_events,
                    expense_events=day.expense_events,
                    is_optimistic_danger=optimistic < 0,
                    is_pessimistic_danger=day.pessimistic_balance < 0,
                )
            )

    return CashflowProjection(
        start_date=today,
        end_date=days[-1].date,
        starting_balance=estimated.pessimistic_cents,
        days=days,
        optimistic=generate_scenario_summary(days, Scenario.OPTIMISTIC),
        pessimistic=generate_scenario_summary(days, Scenario.PESSIMISTIC),
    )


__all__ = [
    "BalanceUpdateBase",
    "EstimatedTodayBalance",
    "to_local_date",
    "get_balance_update_base",
    "calculate_estimated_today_balance",
    "rebase_projection_from_estimated_today",
]
