"""Daily balance simulation under optimistic and pessimistic scenarios."""

from collections import defaultdict
from collections.abc import Iterable
from datetime import date, timedelta

from src.domain.models.entities import (
    BankAccount,
    Certainty,
    CreditCard,
    FutureStatement,
)
from src.domain.models.projection import (
    CashflowProjection,
    DailySnapshot,
    ExpenseEvent,
    ExpenseSourceType,
    IncomeEvent,
    Scenario,
)
from src.domain.models.snapshot import SnapshotInputState
from src.domain.services.aggregation import generate_scenario_summary
from src.domain.services.schedule import expand_day_of_month, expand_project


def calculate_starting_balance(accounts: Iterable[BankAccount]) -> int:
    """Sum the balances of non-investment accounts, in cents."""
    return sum(account.balance for account in accounts if account.is_spendable)


def calculate_investment_total(accounts: Iterable[BankAccount]) -> int:
    """Sum the balances of investment accounts, in cents."""
    return sum(
        account.balance for account in accounts if not account.is_spendable
    )


def get_credit_card_amount(
    card: CreditCard,
    future_statements: Iterable[FutureStatement],
    due_date: date,
) -> int:
    """Return the amount charged for a card on a due date.

    A future statement for the same card, month, and year overrides the
    card's current statement balance.
    """
    for statement in future_statements:
        if (
            statement.credit_card_id == card.id
            and statement.target_month == due_date.month
            and statement.target_year == due_date.year
        ):
            return statement.amount
    return card.statement_balance


def pessimistic_income(events: Iterable[IncomeEvent]) -> int:
    """Sum guaranteed income only."""
    return sum(
        event.amount
        for event in events
        if event.certainty == Certainty.GUARANTEED
    )


def optimistic_income(events: Iterable[IncomeEvent]) -> int:
    """Sum income of every certainty tier."""
    return sum(event.amount for event in events)


def collect_income_events(
    inputs: SnapshotInputState,
    start: date,
    end: date,
) -> dict[date, list[IncomeEvent]]:
    """Group recurring and single-shot income events by date."""
    events: dict[date, list[IncomeEvent]] = defaultdict(list)
    for project in inputs.projects:
        if not project.is_active:
            continue
        for occurrence in expand_project(project, start, end):
            events[occurrence.date].append(
                IncomeEvent(
                    project_id=project.id,
                    project_name=project.name,
                    amount=occurrence.amount,
                    certainty=project.certainty,
                )
            )
    for income in inputs.single_shot_income:
        if start <= income.date <= end:
            events[income.date].append(
                IncomeEvent(
                    project_id=income.id,
                    project_name=income.name,
                    amount=income.amount,
                    certainty=income.certainty,
                )
            )
    return events


def collect_expense_events(
    inputs: SnapshotInputState,
    start: date,
    end: date,
) -> dict[date, list[ExpenseEvent]]:
    """Group fixed, single-shot, and credit card expenses by date."""
    events: dict[date, list[ExpenseEvent]] = defaultdict(list)
    for expense in inputs.fixed_expenses:
        if not expense.is_active:
            continue
        for due_date in expand_day_of_month(expense.due_day, start, end):
            events[due_date].append(
                ExpenseEvent(
                    source_id=expense.id,
                    source_name=expense.name,
                    source_type=ExpenseSourceType.EXPENSE,
                    amount=expense.amount,
                )
            )
    for expense in inputs.single_shot_expenses:
        if start <= expense.date <= end:
            events[expense.date].append(
                ExpenseEvent(
                    source_id=expense.id,
                    source_name=expense.name,
                    source_type=ExpenseSourceType.EXPENSE,
                    amount=expense.amount,
                )
            )
    for card in inputs.credit_cards:
        for due_date in expand_day_of_month(card.due_day, start, end):
            events[due_date].append(
                ExpenseEvent(
                    source_id=card.id,
                    source_name=card.name,
                    source_type=ExpenseSourceType.CREDIT_CARD,
                    amount=get_credit_card_amount(
                        card,
                        inputs.future_statements,
                        due_date,
                    ),
                )
            )
    return events


def simulate_daily_balances(
    inputs: SnapshotInputState,
    start_date: date,
    projection_days: int,
    starting_balance: int,
) -> list[DailySnapshot]:
    """Walk the projection window day by day.

    Args:
        inputs: Validated entities.
        start_date: First projected day.
        projection_days: Number of days to simulate.
        starting_balance: Balance both scenarios start from, in cents.

    Returns:
        list[DailySnapshot]: One snapshot per day, in date order.
    """
    if projection_days <= 0:
        return []
    end_date = start_date + timedelta(days=projection_days - 1)
    income_by_date = collect_income_events(inputs, start_date, end_date)
    expenses_by_date = collect_expense_events(inputs, start_date, end_date)

    optimistic_balance = starting_balance
    pessimistic_balance = starting_balance
    days: list[DailySnapshot] = []
    for day_offset in range(projection_days):
        current = start_date + timedelta(days=day_offset)
        income_events = income_by_date.get(current, [])
        expense_events = expenses_by_date.get(current, [])
        total_expenses = sum(event.amount for event in expense_events)

        optimistic_balance += optimistic_income(income_events) - total_expenses
        pessimistic_balance += pessimistic_income(income_events) - total_expenses

        days.append(
            DailySnapshot(
                date=current,
                day_offset=day_offset,
                optimistic_balance=optimistic_balance,
                pessimistic_balance=pessimistic_balance,
                income_events=list(income_events),
                expense_events=list(expense_events),
                is_optimistic_danger=optimistic_balance < 0,
                is_pessimistic_danger=pessimistic_balance < 0,
            )
        )
    return days


def simulate_cashflow(
    inputs: SnapshotInputState,
    start_date: date,
    projection_days: int | None = None,
) -> CashflowProjection:
    """Project balances for validated inputs.

    Args:
        inputs: Validated entities.
        start_date: First projected day.
        projection_days: Horizon; defaults to ``inputs.projection_days``.

    Returns:
        CashflowProjection: Daily snapshots plus per-scenario summaries.
    """
    days_count = projection_days or inputs.projection_days
    starting_balance = calculate_starting_balance(inputs.accounts)
    days = simulate_daily_balances(
        inputs,
        start_date,
        days_count,
        starting_balance,
    )
    return CashflowProjection(
        start_date=start_date,
        end_date=start_date + timedelta(days=days_count - 1),
        starting_balance=starting_balance,
        days=days,
        optimistic=generate_scenario_summary(days, Scenario.OPTIMISTIC),
        pessimistic=generate_scenario_summary(days, Scenario.PESSIMISTIC),
    )


__all__ = [
    "calculate_starting_balance",
    "calculate_investment_total",
    "get_credit_card_amount",
    "optimistic_income",
    "pessimistic_income",
    "collect_income_events",
    "collect_expense_events",
    "simulate_daily_balances",
    "simulate_cashflow",
]
