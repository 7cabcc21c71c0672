"""Tests for the snapshot save, get, and list use cases."""

from datetime import date, datetime, timezone
from unittest.mock import MagicMock

import pytest

from src.application.use_cases.get_snapshot import (
    GetProjectionSnapshotUseCase,
    SnapshotView,
)
from src.application.use_cases.list_snapshots import (
    ListProjectionSnapshotsUseCase,
)
from src.application.use_cases.save_snapshot import (
    SaveProjectionSnapshotUseCase,
)
from src.domain.exceptions import CashflowValidationError
from src.domain.models.entities import (
    AccountKind,
    BankAccount,
    SingleShotExpense,
)
from src.domain.models.projection import DangerScenario
from src.domain.models.snapshot import SnapshotInputState
from src.domain.services.simulation import simulate_cashflow

CREATED_AT = datetime(2025, 1, 2, 9, 0, tzinfo=timezone.utc)


class InMemorySnapshotRepository:
    """Snapshot repository keeping documents in a dict."""

    def __init__(self) -> None:
        self.documents: dict[str, dict] = {}

    def save(self, document: dict) -> None:
        self.documents[document["id"]] = document

    def fetch(self, snapshot_id: str) -> dict | None:
        return self.documents.get(snapshot_id)

    def list_by_group(self, group_id: str) -> list[dict]:
        return [
            {
                "id": document["id"],
                "name": document["name"],
                "createdAt": document["createdAt"],
                "summaryMetrics": document["data"]["summaryMetrics"],
            }
            for document in self.documents.values()
            if document["groupId"] == group_id
        ]


def _inputs() -> SnapshotInputState:
    return SnapshotInputState(
        accounts=[
            BankAccount(
                id="a1",
                name="Checking",
                kind=AccountKind.CHECKING,
                balance=100000,
            ),
            BankAccount(
                id="a2",
                name="Broker",
                kind=AccountKind.INVESTMENT,
                balance=250000,
            ),
        ],
        single_shot_expenses=[
            SingleShotExpense(
                id="x1",
                name="Car repair",
                amount=150000,
                date=date(2025, 1, 28),
            )
        ],
    )


def _save(repository, name="January plan", group_id="family", created_at=None):
    inputs = _inputs()
    projection = simulate_cashflow(inputs, date(2025, 1, 1), 30)
    return SaveProjectionSnapshotUseCase(repository, logger=MagicMock()).execute(
        name,
        inputs,
        projection,
        group_id=group_id,
        created_at=created_at or CREATED_AT,
    )


def test_save_persists_serialized_snapshot() -> None:
    """Saving should store one document with precomputed metrics."""
    repository = InMemorySnapshotRepository()
    logger = MagicMock()
    inputs = _inputs()
    projection = simulate_cashflow(inputs, date(2025, 1, 1), 30)

    snapshot = SaveProjectionSnapshotUseCase(repository, logger=logger).execute(
        "  January plan  ",
        inputs,
        projection,
        group_id="family",
        created_at=CREATED_AT,
    )

    document = repository.documents[snapshot.id]
    assert snapshot.name == "January plan"
    assert document["groupId"] == "family"
    assert document["data"]["summaryMetrics"] == {
        "startingBalance": 100000,
        "endBalanceOptimistic": -50000,
        "dangerDayCount": 3,
    }
    logger.info.assert_called_once()


def test_save_rejects_blank_name() -> None:
    """Invalid names should never reach the repository."""
    repository = MagicMock()
    inputs = _inputs()
    projection = simulate_cashflow(inputs, date(2025, 1, 1), 30)
    use_case = SaveProjectionSnapshotUseCase(repository, logger=MagicMock())

    with pytest.raises(CashflowValidationError):
        use_case.execute("   ", inputs, projection, group_id="family")

    repository.save.assert_not_called()


def test_get_returns_view_without_recomputing() -> None:
    """Loaded snapshots should carry the frozen days and danger ranges."""
    repository = InMemorySnapshotRepository()
    saved = _save(repository)

    view = GetProjectionSnapshotUseCase(repository, logger=MagicMock()).execute(
        saved.id
    )

    assert isinstance(view, SnapshotView)
    assert view.snapshot.projection == saved.projection
    assert view.snapshot.inputs == saved.inputs
    assert view.investment_total == 250000
    assert view.compatibility_warning is None
    assert len(view.danger_ranges) == 1
    assert view.danger_ranges[0].start_index == 27
    assert view.danger_ranges[0].end_index == 29
    assert view.danger_ranges[0].scenario == DangerScenario.BOTH


def test_get_returns_none_for_unknown_id() -> None:
    """Unknown ids should log a warning and return None."""
    logger = MagicMock()

    view = GetProjectionSnapshotUseCase(
        InMemorySnapshotRepository(),
        logger=logger,
    ).execute("missing")

    assert view is None
    logger.warning.assert_called_once_with("Snapshot not found: missing")


def test_list_returns_newest_first_for_group() -> None:
    """Only the group's snapshots are listed, newest first."""
    repository = InMemorySnapshotRepository()
    older = _save(repository, name="Older")
    newer = _save(
        repository,
        name="Newer",
        created_at=datetime(2025, 1, 5, tzinfo=timezone.utc),
    )
    _save(repository, name="Other group", group_id="other")

    items = ListProjectionSnapshotsUseCase(repository, logger=MagicMock()).execute(
        "family"
    )

    assert [item.id for item in items] == [newer.id, older.id]
    assert items[0].summary_metrics.danger_day_count == 3


def test_list_skips_unreadable_rows() -> None:
    """Broken rows should be skipped with a warning."""
    repository = MagicMock()
    repository.list_by_group.return_value = [
        {"name": "No id", "createdAt": "2025-01-01T00:00:00+00:00"},
        {
            "id": "s1",
            "name": "Good",
            "createdAt": "2025-01-01T00:00:00+00:00",
            "summaryMetrics": {
                "startingBalance": 100,
                "endBalanceOptimistic": 50,
                "dangerDayCount": 0,
            },
        },
    ]
    logger = MagicMock()

    items = ListProjectionSnapshotsUseCase(repository, logger=logger).execute(
        "family"
    )

    assert [item.id for item in items] == ["s1"]
    logger.warning.assert_called_once()
