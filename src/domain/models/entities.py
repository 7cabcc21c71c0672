"""Domain models for the financial entities fed into a projection."""

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import ConfigDict, Field
from pydantic.alias_generators import to_camel

# Snapshot documents and input files use camelCase keys.
DOCUMENT_CONFIG = ConfigDict(alias_generator=to_camel)

Cents = Annotated[int, Field(strict=True)]
PositiveCents = Annotated[int, Field(strict=True, gt=0)]
NonNegativeCents = Annotated[int, Field(strict=True, ge=0)]
DayOfMonth = Annotated[int, Field(strict=True, ge=1, le=31)]
IsoWeekday = Annotated[int, Field(strict=True, ge=1, le=7)]
Month = Annotated[int, Field(strict=True, ge=1, le=12)]


class AccountKind(str, Enum):
    """Kind of bank account."""

    CHECKING = "checking"
    SAVINGS = "savings"
    INVESTMENT = "investment"


class Frequency(str, Enum):
    """Payment frequency of a recurring income source."""

    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    TWICE_MONTHLY = "twice-monthly"
    MONTHLY = "monthly"


class Certainty(str, Enum):
    """How likely an income item is to materialize."""

    GUARANTEED = "guaranteed"
    PROBABLE = "probable"
    UNCERTAIN = "uncertain"


@dataclass(frozen=True)
class DayOfWeekSchedule:
    """Weekly or biweekly schedule on an ISO weekday (1=Monday, 7=Sunday).

    Attributes:
        day_of_week: ISO weekday the payment lands on.
        anchor_date: Optional reference payment date for biweekly cadence.
    """

    day_of_week: IsoWeekday
    anchor_date: date | None = None
    type: Literal["dayOfWeek"] = "dayOfWeek"

    __pydantic_config__ = DOCUMENT_CONFIG


@dataclass(frozen=True)
class DayOfMonthSchedule:
    """Monthly schedule on a day of month, clamped to short months."""

    day_of_month: DayOfMonth
    type: Literal["dayOfMonth"] = "dayOfMonth"

    __pydantic_config__ = DOCUMENT_CONFIG


@dataclass(frozen=True)
class TwiceMonthlySchedule:
    """Two payment days per month, optionally with their own amounts.

    Attributes:
        first_day: First payment day of month (1-31).
        second_day: Second payment day of month (1-31).
        first_amount: Optional override for the first payment, in cents.
        second_amount: Optional override for the second payment, in cents.
    """

    first_day: DayOfMonth
    second_day: DayOfMonth
    first_amount: PositiveCents | None = None
    second_amount: PositiveCents | None = None
    type: Literal["twiceMonthly"] = "twiceMonthly"

    __pydantic_config__ = DOCUMENT_CONFIG

    @property
    def has_amount_overrides(self) -> bool:
        """Return True when both per-day amounts are configured."""
        return self.first_amount is not None and self.second_amount is not None


PaymentSchedule = Annotated[
    Union[DayOfWeekSchedule, DayOfMonthSchedule, TwiceMonthlySchedule],
    Field(discriminator="type"),
]


@dataclass(frozen=True)
class BankAccount:
    """Bank account with its last known balance.

    Investment accounts are kept out of the spendable balance.
    """

    id: str
    name: str
    kind: AccountKind
    balance: Cents
    owner: str | None = None
    balance_updated_at: datetime | None = None

    __pydantic_config__ = DOCUMENT_CONFIG

    @property
    def is_spendable(self) -> bool:
        """Return True when the balance counts toward the simulated cash."""
        return self.kind != AccountKind.INVESTMENT


@dataclass(frozen=True)
class RecurringProject:
    """Recurring income source."""

    id: str
    name: str
    amount: PositiveCents
    frequency: Frequency
    payment_schedule: PaymentSchedule
    certainty: Certainty
    is_active: bool = True

    __pydantic_config__ = DOCUMENT_CONFIG


@dataclass(frozen=True)
class SingleShotIncome:
    """One-off income on a single date."""

    id: str
    name: str
    amount: PositiveCents
    date: date
    certainty: Certainty = Certainty.GUARANTEED

    __pydantic_config__ = DOCUMENT_CONFIG


@dataclass(frozen=True)
class SingleShotExpense:
    """One-off expense on a single date."""

    id: str
    name: str
    amount: PositiveCents
    date: date

    __pydantic_config__ = DOCUMENT_CONFIG


@dataclass(frozen=True)
class FixedExpense:
    """Monthly expense due on a day of month."""

    id: str
    name: str
    amount: PositiveCents
    due_day: DayOfMonth
    is_active: bool = True

    __pydantic_config__ = DOCUMENT_CONFIG


@dataclass(frozen=True)
class CreditCard:
    """Credit card charged as an expense on its due day."""

    id: str
    name: str
    statement_balance: NonNegativeCents
    due_day: DayOfMonth
    owner: str | None = None
    balance_updated_at: datetime | None = None

    __pydantic_config__ = DOCUMENT_CONFIG


@dataclass(frozen=True)
class FutureStatement:
    """Statement amount override for one card in one target month."""

    id: str
    credit_card_id: str
    target_month: Month
    target_year: int
    amount: NonNegativeCents

    __pydantic_config__ = DOCUMENT_CONFIG


__all__ = [
    "DOCUMENT_CONFIG",
    "AccountKind",
    "Frequency",
    "Certainty",
    "DayOfWeekSchedule",
    "DayOfMonthSchedule",
    "TwiceMonthlySchedule",
    "PaymentSchedule",
    "BankAccount",
    "RecurringProject",
    "SingleShotIncome",
    "SingleShotExpense",
    "FixedExpense",
    "CreditCard",
    "FutureStatement",
]
