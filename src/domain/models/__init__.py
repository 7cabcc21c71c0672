"""Domain models package."""

from .entities import (
    AccountKind,
    BankAccount,
    Certainty,
    CreditCard,
    DayOfMonthSchedule,
    DayOfWeekSchedule,
    FixedExpense,
    Frequency,
    FutureStatement,
    PaymentSchedule,
    RecurringProject,
    SingleShotExpense,
    SingleShotIncome,
    TwiceMonthlySchedule,
)
from .health import BalanceFreshness, HealthIndicator, HealthStatus, StaleEntity
from .projection import (
    CashflowProjection,
    DailySnapshot,
    DangerDay,
    DangerRange,
    DangerScenario,
    ExpenseEvent,
    ExpenseSourceType,
    IncomeEvent,
    Scenario,
    ScenarioSummary,
)
from .snapshot import (
    ProjectionSnapshot,
    SnapshotInputState,
    SnapshotListItem,
    SnapshotSummaryMetrics,
)

__all__ = [
    "AccountKind",
    "BankAccount",
    "Certainty",
    "CreditCard",
    "DayOfMonthSchedule",
    "DayOfWeekSchedule",
    "FixedExpense",
    "Frequency",
    "FutureStatement",
    "PaymentSchedule",
    "RecurringProject",
    "SingleShotExpense",
    "SingleShotIncome",
    "TwiceMonthlySchedule",
    "BalanceFreshness",
    "HealthIndicator",
    "HealthStatus",
    "StaleEntity",
    "CashflowProjection",
    "DailySnapshot",
    "DangerDay",
    "DangerRange",
    "DangerScenario",
    "ExpenseEvent",
    "ExpenseSourceType",
    "IncomeEvent",
    "Scenario",
    "ScenarioSummary",
    "ProjectionSnapshot",
    "SnapshotInputState",
    "SnapshotListItem",
    "SnapshotSummaryMetrics",
]
