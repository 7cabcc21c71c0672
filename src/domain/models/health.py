"""Domain models for projection health classification."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from functools import total_ordering
from typing import Literal


@total_ordering
class HealthStatus(Enum):
    """Health tier of a projection, ordered good < caution < warning < danger."""

    GOOD = "good"
    CAUTION = "caution"
    WARNING = "warning"
    DANGER = "danger"

    @property
    def severity(self) -> int:
        """Return the rank of the status, 0 being the healthiest."""
        return _SEVERITY[self.value]

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, HealthStatus):
            return NotImplemented
        return self.severity < other.severity


_SEVERITY = {"good": 0, "caution": 1, "warning": 2, "danger": 3}


class BalanceFreshness(str, Enum):
    """Age bucket of a balance update."""

    FRESH = "fresh"
    WARNING = "warning"
    STALE = "stale"


@dataclass(frozen=True)
class StaleEntity:
    """Account or card whose balance has not been updated recently."""

    id: str
    name: str
    entity_type: Literal["account", "card"]


@dataclass(frozen=True)
class HealthIndicator:
    """Health classification and the figures that justify it.

    Attributes:
        status: Selected health tier.
        message: Human-readable explanation of the tier.
        optimistic_danger_days: Danger days in the best case.
        pessimistic_danger_days: Danger days in the worst case.
        near_danger_threshold: Safety margin in major units.
        minimum_balance: Lowest pessimistic balance, in cents.
        minimum_balance_date: Date of that lowest balance.
        stale_entities: Accounts and cards with outdated balances.
    """

    status: HealthStatus
    message: str
    optimistic_danger_days: int
    pessimistic_danger_days: int
    near_danger_threshold: Decimal
    minimum_balance: int | None
    minimum_balance_date: date | None
    stale_entities: list[StaleEntity]

    @property
    def is_stale(self) -> bool:
        """Return True when at least one balance is stale."""
        return bool(self.stale_entities)


__all__ = [
    "HealthStatus",
    "BalanceFreshness",
    "StaleEntity",
    "HealthIndicator",
]
