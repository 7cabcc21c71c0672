"""Input validation for projection entities.

Entities are validated once, at the boundary where they enter the engine.
The simulator assumes validated input and does not re-check it.
"""

from collections.abc import Iterable

from pydantic import TypeAdapter, ValidationError

from src.domain.constants import PROJECTION_HORIZONS
from src.domain.exceptions import CashflowErrorCode, CashflowValidationError
from src.domain.models.entities import (
    BankAccount,
    CreditCard,
    DayOfMonthSchedule,
    DayOfWeekSchedule,
    FixedExpense,
    Frequency,
    FutureStatement,
    RecurringProject,
    SingleShotExpense,
    SingleShotIncome,
    TwiceMonthlySchedule,
)
from src.domain.models.snapshot import SnapshotInputState
from src.domain.services.documents import (
    ACCOUNT_ADAPTER,
    CREDIT_CARD_ADAPTER,
    FIXED_EXPENSE_ADAPTER,
    FUTURE_STATEMENT_ADAPTER,
    PROJECT_ADAPTER,
    SINGLE_SHOT_EXPENSE_ADAPTER,
    SINGLE_SHOT_INCOME_ADAPTER,
    describe_validation_error,
    revalidate,
)

# Shortest month length; two days at or beyond it clamp together in February.
_SHORTEST_MONTH = 28

# Document fields whose violations are reported as amount errors.
_AMOUNT_FIELDS = frozenset(
    {"amount", "balance", "statementBalance", "firstAmount", "secondAmount"}
)

_SCHEDULE_TYPE_BY_FREQUENCY = {
    Frequency.WEEKLY: DayOfWeekSchedule,
    Frequency.BIWEEKLY: DayOfWeekSchedule,
    Frequency.MONTHLY: DayOfMonthSchedule,
    Frequency.TWICE_MONTHLY: TwiceMonthlySchedule,
}


def validate_projection_days(projection_days: int) -> None:
    """Reject horizons other than the supported ones."""
    if projection_days not in PROJECTION_HORIZONS:
        raise CashflowValidationError(
            f"Projection days must be one of {PROJECTION_HORIZONS}, "
            f"got {projection_days}",
            details={"projection_days": projection_days},
        )


def _check_fields(adapter: TypeAdapter, entity, label: str) -> None:
    """Re-run the declared field bounds of an already-built entity."""
    try:
        revalidate(adapter, entity)
    except ValidationError as exc:
        error = exc.errors()[0]
        location = error["loc"]
        field = str(location[-1]) if location else ""
        code = (
            CashflowErrorCode.INVALID_AMOUNT
            if field in _AMOUNT_FIELDS
            else CashflowErrorCode.INVALID_INPUT
        )
        raise CashflowValidationError(
            f"{label} is invalid: {describe_validation_error(exc)}",
            code=code,
            details={
                "id": entity.id,
                "field": ".".join(str(part) for part in location),
                "value": error.get("input"),
            },
        ) from exc


def validate_account(account: BankAccount) -> None:
    """Validate a bank account; balances may be negative."""
    _check_fields(ACCOUNT_ADAPTER, account, f'Account "{account.name}"')


def validate_project(project: RecurringProject) -> None:
    """Validate a recurring income source and its payment schedule.

    Field bounds (positive amount, weekday 1-7, days 1-31) come from the
    entity declarations; the rules spanning several fields live here.

    Raises:
        CashflowValidationError: If the schedule does not match the
            frequency or holds out-of-range values.
    """
    _check_fields(PROJECT_ADAPTER, project, f'Project "{project.name}"')
    schedule = project.payment_schedule
    expected = _SCHEDULE_TYPE_BY_FREQUENCY[project.frequency]
    if not isinstance(schedule, expected):
        raise CashflowValidationError(
            f'Project "{project.name}" has a {schedule.type} schedule '
            f"but {project.frequency.value} frequency",
            details={"id": project.id, "frequency": project.frequency.value},
        )

    if isinstance(schedule, DayOfWeekSchedule):
        anchor = schedule.anchor_date
        if anchor is not None and anchor.isoweekday() != schedule.day_of_week:
            raise CashflowValidationError(
                f'Project "{project.name}" anchor date {anchor} does not '
                f"fall on weekday {schedule.day_of_week}",
                details={"id": project.id},
            )
    elif isinstance(schedule, TwiceMonthlySchedule):
        _validate_twice_monthly(project, schedule)


def _validate_twice_monthly(
    project: RecurringProject,
    schedule: TwiceMonthlySchedule,
) -> None:
    if schedule.first_day == schedule.second_day:
        raise CashflowValidationError(
            f'Project "{project.name}" payment days must be different',
            details={"id": project.id},
        )
    if min(schedule.first_day, schedule.second_day) >= _SHORTEST_MONTH:
        raise CashflowValidationError(
            f'Project "{project.name}" payment days {schedule.first_day} and '
            f"{schedule.second_day} fall on the same date in short months",
            details={"id": project.id},
        )
    has_first = schedule.first_amount is not None
    has_second = schedule.second_amount is not None
    if has_first != has_second:
        raise CashflowValidationError(
            f'Project "{project.name}" must set both payment amounts or none',
            code=CashflowErrorCode.INVALID_AMOUNT,
            details={"id": project.id},
        )


def validate_fixed_expense(expense: FixedExpense) -> None:
    """Validate a monthly fixed expense."""
    _check_fields(FIXED_EXPENSE_ADAPTER, expense, f'Expense "{expense.name}"')


def validate_credit_card(card: CreditCard) -> None:
    """Validate a credit card; a zero statement is allowed."""
    _check_fields(CREDIT_CARD_ADAPTER, card, f'Credit card "{card.name}"')


def validate_future_statement(statement: FutureStatement) -> None:
    """Validate a future statement override."""
    _check_fields(
        FUTURE_STATEMENT_ADAPTER,
        statement,
        f'Future statement "{statement.id}"',
    )


def validate_single_shot(item: SingleShotIncome | SingleShotExpense) -> None:
    """Validate a one-off income or expense."""
    adapter = (
        SINGLE_SHOT_INCOME_ADAPTER
        if isinstance(item, SingleShotIncome)
        else SINGLE_SHOT_EXPENSE_ADAPTER
    )
    _check_fields(adapter, item, f'"{item.name}"')


def validate_inputs(inputs: SnapshotInputState) -> None:
    """Validate every entity collection of a projection input.

    Args:
        inputs: Entities about to be projected.

    Raises:
        CashflowValidationError: On the first rejected entity.
    """
    validate_projection_days(inputs.projection_days)
    collections = {
        "accounts": inputs.accounts,
        "projects": inputs.projects,
        "single_shot_income": inputs.single_shot_income,
        "fixed_expenses": inputs.fixed_expenses,
        "single_shot_expenses": inputs.single_shot_expenses,
        "credit_cards": inputs.credit_cards,
        "future_statements": inputs.future_statements,
    }
    for label, items in collections.items():
        _require_unique_ids(label, items)

    for account in inputs.accounts:
        validate_account(account)
    for project in inputs.projects:
        validate_project(project)
    for expense in inputs.fixed_expenses:
        validate_fixed_expense(expense)
    for card in inputs.credit_cards:
        validate_credit_card(card)
    for item in [*inputs.single_shot_income, *inputs.single_shot_expenses]:
        validate_single_shot(item)
    for statement in inputs.future_statements:
        validate_future_statement(statement)


def _require_unique_ids(label: str, items: Iterable) -> None:
    seen: set[str] = set()
    for item in items:
        if item.id in seen:
            raise CashflowValidationError(
                f"Duplicate id {item.id!r} in {label}",
                details={"collection": label, "id": item.id},
            )
        seen.add(item.id)


__all__ = [
    "validate_projection_days",
    "validate_account",
    "validate_project",
    "validate_fixed_expense",
    "validate_credit_card",
    "validate_future_statement",
    "validate_single_shot",
    "validate_inputs",
]
