"""Tests for the GetHealthIndicatorUseCase."""

from datetime import date, datetime, timezone
from unittest.mock import MagicMock

from src.application.use_cases.get_health_indicator import (
    GetHealthIndicatorUseCase,
)
from src.domain.models.entities import (
    AccountKind,
    BankAccount,
    CreditCard,
    SingleShotExpense,
)
from src.domain.models.health import HealthStatus
from src.domain.models.snapshot import SnapshotInputState
from src.domain.services.simulation import simulate_cashflow

NOW = datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)


def _account(updated_at: datetime | None) -> BankAccount:
    return BankAccount(
        id="a1",
        name="Checking",
        kind=AccountKind.CHECKING,
        balance=100000,
        balance_updated_at=updated_at,
    )


def test_execute_reports_good_projection() -> None:
    """Fresh balances with a healthy margin should be good."""
    logger = MagicMock()
    accounts = [_account(NOW)]
    projection = simulate_cashflow(
        SnapshotInputState(accounts=accounts),
        date(2025, 1, 1),
        30,
    )

    indicator = GetHealthIndicatorUseCase(logger=logger).execute(
        projection,
        accounts,
        [],
        now=NOW,
    )

    assert indicator.status == HealthStatus.GOOD
    assert indicator.message == "No issues detected"
    logger.info.assert_called_once_with(
        "Health classified as good: No issues detected"
    )
    logger.warning.assert_not_called()


def test_execute_warns_about_stale_balances() -> None:
    """Stale accounts and cards should be named in a warning."""
    logger = MagicMock()
    accounts = [_account(datetime(2024, 12, 1, tzinfo=timezone.utc))]
    cards = [
        CreditCard(id="c1", name="Visa", statement_balance=0, due_day=10),
    ]
    projection = simulate_cashflow(
        SnapshotInputState(accounts=accounts),
        date(2025, 1, 1),
        30,
    )

    indicator = GetHealthIndicatorUseCase(logger=logger).execute(
        projection,
        accounts,
        cards,
        now=NOW,
    )

    assert indicator.status == HealthStatus.CAUTION
    assert [entity.name for entity in indicator.stale_entities] == [
        "Checking",
        "Visa",
    ]
    logger.warning.assert_called_once_with("Stale balances: Checking, Visa")


def test_execute_uses_configured_threshold() -> None:
    """A longer threshold should accept older balances."""
    accounts = [_account(datetime(2024, 12, 20, tzinfo=timezone.utc))]
    projection = simulate_cashflow(
        SnapshotInputState(accounts=accounts),
        date(2025, 1, 1),
        30,
    )

    indicator = GetHealthIndicatorUseCase(
        logger=MagicMock(),
        stale_threshold_days=30,
    ).execute(projection, accounts, [], now=NOW)

    assert indicator.stale_entities == []


def test_execute_reports_danger_days() -> None:
    """Negative balances in both scenarios should be classified as danger."""
    accounts = [_account(NOW)]
    inputs = SnapshotInputState(
        accounts=accounts,
        single_shot_expenses=[
            SingleShotExpense(
                id="x1",
                name="Car repair",
                amount=150000,
                date=date(2025, 1, 26),
            )
        ],
    )
    projection = simulate_cashflow(inputs, date(2025, 1, 1), 30)

    indicator = GetHealthIndicatorUseCase(logger=MagicMock()).execute(
        projection,
        accounts,
        [],
        now=NOW,
    )

    assert indicator.status == HealthStatus.DANGER
    assert indicator.optimistic_danger_days == 5
    assert indicator.message == "5 danger days even in best-case scenario"
