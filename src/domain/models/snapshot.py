"""Domain models for frozen projection snapshots."""

from dataclasses import dataclass, field
from datetime import datetime

from src.domain.models.entities import (
    DOCUMENT_CONFIG,
    BankAccount,
    CreditCard,
    FixedExpense,
    FutureStatement,
    RecurringProject,
    SingleShotExpense,
    SingleShotIncome,
)
from src.domain.models.projection import CashflowProjection


@dataclass(frozen=True)
class SnapshotInputState:
    """Every entity needed to reproduce a projection."""

    accounts: list[BankAccount] = field(default_factory=list)
    projects: list[RecurringProject] = field(default_factory=list)
    single_shot_income: list[SingleShotIncome] = field(default_factory=list)
    fixed_expenses: list[FixedExpense] = field(default_factory=list)
    single_shot_expenses: list[SingleShotExpense] = field(default_factory=list)
    credit_cards: list[CreditCard] = field(default_factory=list)
    future_statements: list[FutureStatement] = field(default_factory=list)
    projection_days: int = 30

    __pydantic_config__ = DOCUMENT_CONFIG

    @property
    def is_empty(self) -> bool:
        """Return True when no account, income, expense, or card exists."""
        return not (
            self.accounts
            or self.projects
            or self.single_shot_income
            or self.fixed_expenses
            or self.single_shot_expenses
            or self.credit_cards
        )


@dataclass(frozen=True)
class SnapshotSummaryMetrics:
    """Pre-computed figures for snapshot lists."""

    starting_balance: int
    end_balance_optimistic: int
    danger_day_count: int

    __pydantic_config__ = DOCUMENT_CONFIG


@dataclass(frozen=True)
class ProjectionSnapshot:
    """Immutable record of a projection run and its inputs."""

    id: str
    group_id: str
    name: str
    schema_version: int
    inputs: SnapshotInputState
    projection: CashflowProjection
    summary_metrics: SnapshotSummaryMetrics
    created_at: datetime


@dataclass(frozen=True)
class SnapshotListItem:
    """Subset of a snapshot used for history lists."""

    id: str
    name: str
    created_at: datetime
    summary_metrics: SnapshotSummaryMetrics

    __pydantic_config__ = DOCUMENT_CONFIG


__all__ = [
    "SnapshotInputState",
    "SnapshotSummaryMetrics",
    "ProjectionSnapshot",
    "SnapshotListItem",
]
