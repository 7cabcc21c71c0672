"""Health classification of a projection."""

from collections.abc import Iterable
from datetime import date, datetime, timezone
from decimal import Decimal

from src.domain.constants import (
    NEAR_DANGER_MAX,
    NEAR_DANGER_MIN,
    NEAR_DANGER_RATIO,
    STALE_THRESHOLD_DAYS,
)
from src.domain.models.entities import BankAccount, CreditCard
from src.domain.models.health import (
    BalanceFreshness,
    HealthIndicator,
    HealthStatus,
    StaleEntity,
)
from src.domain.models.projection import CashflowProjection, Scenario
from src.domain.services.aggregation import find_minimum_balance
from src.utils.decimal_utils import cents_to_major, format_major


def calculate_near_danger_threshold(starting_balance: Decimal | int) -> Decimal:
    """Return the safety margin for a starting balance.

    Args:
        starting_balance: Starting balance in major units (reais).

    Returns:
        Decimal: ``|starting_balance| * 0.05`` clamped to [1000, 20000].
    """
    scaled = abs(Decimal(str(starting_balance))) * Decimal(NEAR_DANGER_RATIO)
    return min(max(scaled, Decimal(NEAR_DANGER_MIN)), Decimal(NEAR_DANGER_MAX))


def calculate_health_status(
    optimistic_danger_days: int,
    pessimistic_danger_days: int,
    is_near_danger: bool = False,
    has_stale_data: bool = False,
) -> HealthStatus:
    """Select the health tier in priority order danger > warning > caution."""
    if optimistic_danger_days > 0:
        return HealthStatus.DANGER
    if pessimistic_danger_days > 0:
        return HealthStatus.WARNING
    if is_near_danger or has_stale_data:
        return HealthStatus.CAUTION
    return HealthStatus.GOOD


def _plural(count: int, word: str) -> str:
    return f"{count} {word}{'' if count == 1 else 's'}"


def get_health_message(
    status: HealthStatus,
    optimistic_danger_days: int = 0,
    pessimistic_danger_days: int = 0,
    is_near_danger: bool = False,
    minimum_balance: int | None = None,
    minimum_balance_date: date | None = None,
    stale_count: int = 0,
    threshold_days: int = STALE_THRESHOLD_DAYS,
) -> str:
    """Build the message shown next to a health tier.

    The near-danger reason wins over the staleness reason when both apply.
    """
    if status == HealthStatus.DANGER:
        return (
            f"{_plural(optimistic_danger_days, 'danger day')} "
            "even in best-case scenario"
        )
    if status == HealthStatus.WARNING:
        return (
            f"{_plural(pessimistic_danger_days, 'danger day')} "
            "in worst-case scenario"
        )
    if status == HealthStatus.CAUTION:
        if is_near_danger and minimum_balance is not None:
            when = (
                f" on {minimum_balance_date.isoformat()}"
                if minimum_balance_date
                else ""
            )
            return (
                f"Balance drops to {format_major(minimum_balance)}{when}, "
                "close to the safety margin"
            )
        return (
            f"{_plural(stale_count, 'balance')} not updated "
            f"in over {threshold_days} days"
        )
    return "No issues detected"


def _days_since(updated_at: datetime, now: datetime) -> int:
    if updated_at.tzinfo is None and now.tzinfo is not None:
        updated_at = updated_at.replace(tzinfo=timezone.utc)
    elif updated_at.tzinfo is not None and now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return (now - updated_at).days


def is_stale(
    updated_at: datetime | None,
    now: datetime,
    threshold_days: int = STALE_THRESHOLD_DAYS,
) -> bool:
    """Return True when a balance is missing or older than the threshold."""
    if updated_at is None:
        return True
    return _days_since(updated_at, now) > threshold_days


def get_balance_freshness(
    updated_at: datetime | None,
    now: datetime,
    threshold_days: int = STALE_THRESHOLD_DAYS,
) -> BalanceFreshness:
    """Bucket a balance update: fresh up to 1 day, warning up to threshold."""
    if updated_at is None:
        return BalanceFreshness.STALE
    elapsed = _days_since(updated_at, now)
    if elapsed <= 1:
        return BalanceFreshness.FRESH
    if elapsed <= threshold_days:
        return BalanceFreshness.WARNING
    return BalanceFreshness.STALE


def find_stale_entities(
    accounts: Iterable[BankAccount],
    cards: Iterable[CreditCard],
    now: datetime,
    threshold_days: int = STALE_THRESHOLD_DAYS,
) -> list[StaleEntity]:
    """List accounts and cards whose balances are stale."""
    stale = [
        StaleEntity(id=account.id, name=account.name, entity_type="account")
        for account in accounts
        if is_stale(account.balance_updated_at, now, threshold_days)
    ]
    stale.extend(
        StaleEntity(id=card.id, name=card.name, entity_type="card")
        for card in cards
        if is_stale(card.balance_updated_at, now, threshold_days)
    )
    return stale


def classify_projection_health(
    projection: CashflowProjection,
    accounts: Iterable[BankAccount],
    cards: Iterable[CreditCard],
    now: datetime,
    threshold_days: int = STALE_THRESHOLD_DAYS,
) -> HealthIndicator:
    """Classify a projection and the freshness of its balances.

    Args:
        projection: Computed projection.
        accounts: Accounts the projection started from.
        cards: Credit cards charged in the projection.
        now: Current moment, compared against balance timestamps.
        threshold_days: Age after which a balance is stale.

    Returns:
        HealthIndicator: Tier, message, and supporting figures.
    """
    stale_entities = find_stale_entities(accounts, cards, now, threshold_days)
    optimistic_days = projection.optimistic.danger_day_count
    pessimistic_days = projection.pessimistic.danger_day_count
    threshold = calculate_near_danger_threshold(
        cents_to_major(projection.starting_balance)
    )
    minimum = find_minimum_balance(projection.days, Scenario.PESSIMISTIC)
    minimum_balance, minimum_date = minimum if minimum else (None, None)
    is_near_danger = (
        minimum_balance is not None
        and minimum_balance >= 0
        and cents_to_major(minimum_balance) < threshold
    )

    status = calculate_health_status(
        optimistic_days,
        pessimistic_days,
        is_near_danger=is_near_danger,
        has_stale_data=bool(stale_entities),
    )
    message = get_health_message(
        status,
        optimistic_danger_days=optimistic_days,
        pessimistic_danger_days=pessimistic_days,
        is_near_danger=is_near_danger,
        minimum_balance=minimum_balance,
        minimum_balance_date=minimum_date,
        stale_count=len(stale_entities),
        threshold_days=threshold_days,
    )
    return HealthIndicator(
        status=status,
        message=message,
        optimistic_danger_days=optimistic_days,
        pessimistic_danger_days=pessimistic_days,
        near_danger_threshold=threshold,
        minimum_balance=minimum_balance,
        minimum_balance_date=minimum_date,
        stale_entities=stale_entities,
    )


__all__ = [
    "calculate_near_danger_threshold",
    "calculate_health_status",
    "get_health_message",
    "is_stale",
    "get_balance_freshness",
    "find_stale_entities",
    "classify_projection_health",
]
