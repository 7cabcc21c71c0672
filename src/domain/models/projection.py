"""Domain models produced by the projection engine."""

from dataclasses import dataclass
from datetime import date
from enum import Enum

from src.domain.models.entities import DOCUMENT_CONFIG, Certainty


class ExpenseSourceType(str, Enum):
    """Origin of an expense event."""

    EXPENSE = "expense"
    CREDIT_CARD = "credit_card"


class Scenario(str, Enum):
    """Projection scenario."""

    OPTIMISTIC = "optimistic"
    PESSIMISTIC = "pessimistic"


class DangerScenario(str, Enum):
    """Which scenarios are below zero over a danger range."""

    OPTIMISTIC = "optimistic"
    PESSIMISTIC = "pessimistic"
    BOTH = "both"


@dataclass(frozen=True)
class IncomeEvent:
    """Income applied on a given day."""

    project_id: str
    project_name: str
    amount: int
    certainty: Certainty

    __pydantic_config__ = DOCUMENT_CONFIG


@dataclass(frozen=True)
class ExpenseEvent:
    """Expense applied on a given day."""

    source_id: str
    source_name: str
    source_type: ExpenseSourceType
    amount: int

    __pydantic_config__ = DOCUMENT_CONFIG


@dataclass(frozen=True)
class DangerDay:
    """Day on which a scenario balance is negative."""

    date: date
    day_offset: int
    balance: int

    __pydantic_config__ = DOCUMENT_CONFIG


@dataclass(frozen=True)
class DailySnapshot:
    """Balances and events of a single projected day.

    Attributes:
        date: Calendar date.
        day_offset: 0-indexed offset from the projection start.
        optimistic_balance: Running balance with every income tier, in cents.
        pessimistic_balance: Running balance with guaranteed income only.
        income_events: Every income event of the day, all tiers.
        expense_events: Expense events of the day, shared by both scenarios.
        is_optimistic_danger: True if optimistic_balance < 0.
        is_pessimistic_danger: True if pessimistic_balance < 0.
    """

    date: date
    day_offset: int
    optimistic_balance: int
    pessimistic_balance: int
    income_events: list[IncomeEvent]
    expense_events: list[ExpenseEvent]
    is_optimistic_danger: bool
    is_pessimistic_danger: bool

    __pydantic_config__ = DOCUMENT_CONFIG

    def balance_for(self, scenario: Scenario) -> int:
        """Return the running balance of the given scenario."""
        if scenario == Scenario.OPTIMISTIC:
            return self.optimistic_balance
        return self.pessimistic_balance

    def is_danger_for(self, scenario: Scenario) -> bool:
        """Return the danger flag of the given scenario."""
        if scenario == Scenario.OPTIMISTIC:
            return self.is_optimistic_danger
        return self.is_pessimistic_danger


@dataclass(frozen=True)
class ScenarioSummary:
    """Totals and danger days for one scenario."""

    total_income: int
    total_expenses: int
    end_balance: int
    danger_days: list[DangerDay]
    danger_day_count: int

    __pydantic_config__ = DOCUMENT_CONFIG


@dataclass(frozen=True)
class CashflowProjection:
    """Complete day-by-day projection under both scenarios."""

    start_date: date
    end_date: date
    starting_balance: int
    days: list[DailySnapshot]
    optimistic: ScenarioSummary
    pessimistic: ScenarioSummary

    __pydantic_config__ = DOCUMENT_CONFIG

    def summary_for(self, scenario: Scenario) -> ScenarioSummary:
        """Return the summary of the given scenario."""
        if scenario == Scenario.OPTIMISTIC:
            return self.optimistic
        return self.pessimistic


@dataclass(frozen=True)
class DangerRange:
    """Contiguous run of days sharing the same danger-flag combination."""

    start_index: int
    end_index: int
    scenario: DangerScenario


__all__ = [
    "ExpenseSourceType",
    "Scenario",
    "DangerScenario",
    "IncomeEvent",
    "ExpenseEvent",
    "DangerDay",
    "DailySnapshot",
    "ScenarioSummary",
    "CashflowProjection",
    "DangerRange",
]
