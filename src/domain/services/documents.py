"""Pydantic adapters between domain dataclasses and camelCase documents."""

from typing import Any

from pydantic import TypeAdapter, ValidationError

from src.domain.models.entities import (
    BankAccount,
    CreditCard,
    FixedExpense,
    FutureStatement,
    RecurringProject,
    SingleShotExpense,
    SingleShotIncome,
)
from src.domain.models.projection import CashflowProjection
from src.domain.models.snapshot import (
    SnapshotInputState,
    SnapshotListItem,
    SnapshotSummaryMetrics,
)

ACCOUNT_ADAPTER = TypeAdapter(BankAccount)
PROJECT_ADAPTER = TypeAdapter(RecurringProject)
SINGLE_SHOT_INCOME_ADAPTER = TypeAdapter(SingleShotIncome)
SINGLE_SHOT_EXPENSE_ADAPTER = TypeAdapter(SingleShotExpense)
FIXED_EXPENSE_ADAPTER = TypeAdapter(FixedExpense)
CREDIT_CARD_ADAPTER = TypeAdapter(CreditCard)
FUTURE_STATEMENT_ADAPTER = TypeAdapter(FutureStatement)
INPUTS_ADAPTER = TypeAdapter(SnapshotInputState)
PROJECTION_ADAPTER = TypeAdapter(CashflowProjection)
SUMMARY_METRICS_ADAPTER = TypeAdapter(SnapshotSummaryMetrics)
LIST_ITEM_ADAPTER = TypeAdapter(SnapshotListItem)

# Input collections keyed by document field, with a label for log messages.
INPUT_COLLECTIONS: dict[str, tuple[str, TypeAdapter]] = {
    "accounts": ("account", ACCOUNT_ADAPTER),
    "projects": ("project", PROJECT_ADAPTER),
    "singleShotIncome": ("single-shot income", SINGLE_SHOT_INCOME_ADAPTER),
    "fixedExpenses": ("fixed expense", FIXED_EXPENSE_ADAPTER),
    "singleShotExpenses": ("single-shot expense", SINGLE_SHOT_EXPENSE_ADAPTER),
    "creditCards": ("credit card", CREDIT_CARD_ADAPTER),
    "futureStatements": ("future statement", FUTURE_STATEMENT_ADAPTER),
}


def dump_document(adapter: TypeAdapter, value: Any) -> Any:
    """Return the JSON-compatible camelCase document of a domain value."""
    return adapter.dump_python(value, mode="json", by_alias=True)


def revalidate(adapter: TypeAdapter, value: Any) -> Any:
    """Run an already-built dataclass back through its field constraints.

    Raises:
        ValidationError: If any field breaks its declared bounds.
    """
    document = adapter.dump_python(value, by_alias=True, warnings=False)
    return adapter.validate_python(document)


def describe_validation_error(exc: ValidationError) -> str:
    """Flatten a pydantic error into ``field: message`` pairs."""
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"]) or "document"
        parts.append(f"{location}: {error['msg']}")
    return "; ".join(parts)


__all__ = [
    "ACCOUNT_ADAPTER",
    "PROJECT_ADAPTER",
    "SINGLE_SHOT_INCOME_ADAPTER",
    "SINGLE_SHOT_EXPENSE_ADAPTER",
    "FIXED_EXPENSE_ADAPTER",
    "CREDIT_CARD_ADAPTER",
    "FUTURE_STATEMENT_ADAPTER",
    "INPUTS_ADAPTER",
    "PROJECTION_ADAPTER",
    "SUMMARY_METRICS_ADAPTER",
    "LIST_ITEM_ADAPTER",
    "INPUT_COLLECTIONS",
    "dump_document",
    "revalidate",
    "describe_validation_error",
]
