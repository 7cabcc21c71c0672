"""Month progression for credit card future statements."""

from dataclasses import dataclass, replace
from datetime import date

from src.domain.models.entities import CreditCard, FutureStatement


@dataclass(frozen=True)
class MonthProgressionResult:
    """Cards and statements after a month progression.

    Attributes:
        credit_cards: Cards with promoted statement balances.
        future_statements: Statements still pending.
        progressed_cards: Number of cards whose balance was promoted.
        cleaned_statements: Number of past-month statements dropped.
    """

    credit_cards: list[CreditCard]
    future_statements: list[FutureStatement]
    progressed_cards: int
    cleaned_statements: int


def find_future_statement(
    statements: list[FutureStatement],
    card_id: str,
    month: int,
    year: int,
) -> FutureStatement | None:
    """Return the statement of a card for a target month, if any."""
    for statement in statements:
        if (
            statement.credit_card_id == card_id
            and statement.target_month == month
            and statement.target_year == year
        ):
            return statement
    return None


def progress_month(
    cards: list[CreditCard],
    statements: list[FutureStatement],
    today: date,
) -> MonthProgressionResult:
    """Promote this month's future statements into card balances.

    A statement targeting the current month becomes the card's
    ``statement_balance`` and is consumed. Statements targeting past months
    are dropped. Inputs are not mutated.
    """
    promoted_ids: set[str] = set()
    updated_cards = []
    for card in cards:
        statement = find_future_statement(
            statements,
            card.id,
            today.month,
            today.year,
        )
        if statement is None:
            updated_cards.append(card)
            continue
        updated_cards.append(replace(card, statement_balance=statement.amount))
        promoted_ids.add(statement.id)

    current = (today.year, today.month)
    remaining = []
    cleaned = 0
    for statement in statements:
        if statement.id in promoted_ids:
            continue
        if (statement.target_year, statement.target_month) < current:
            cleaned += 1
            continue
        remaining.append(statement)

    return MonthProgressionResult(
        credit_cards=updated_cards,
        future_statements=remaining,
        progressed_cards=len(promoted_ids),
        cleaned_statements=cleaned,
    )


__all__ = [
    "MonthProgressionResult",
    "find_future_statement",
    "progress_month",
]
