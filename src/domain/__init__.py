"""Domain package for cashflow projection rules and core models."""

from .constants import CURRENT_SCHEMA_VERSION, PROJECTION_HORIZONS
from .exceptions import (
    CashflowError,
    CashflowErrorCode,
    CashflowValidationError,
    SnapshotFormatError,
)
from .models import (
    BankAccount,
    CashflowProjection,
    CreditCard,
    FixedExpense,
    FutureStatement,
    HealthIndicator,
    HealthStatus,
    ProjectionSnapshot,
    RecurringProject,
    SingleShotExpense,
    SingleShotIncome,
    SnapshotInputState,
)
from .services import (
    classify_projection_health,
    create_snapshot,
    load_snapshot,
    simulate_cashflow,
    validate_inputs,
)

__all__ = [
    "CURRENT_SCHEMA_VERSION",
    "PROJECTION_HORIZONS",
    "CashflowError",
    "CashflowErrorCode",
    "CashflowValidationError",
    "SnapshotFormatError",
    "BankAccount",
    "CashflowProjection",
    "CreditCard",
    "FixedExpense",
    "FutureStatement",
    "HealthIndicator",
    "HealthStatus",
    "ProjectionSnapshot",
    "RecurringProject",
    "SingleShotExpense",
    "SingleShotIncome",
    "SnapshotInputState",
    "classify_projection_health",
    "create_snapshot",
    "load_snapshot",
    "simulate_cashflow",
    "validate_inputs",
]
