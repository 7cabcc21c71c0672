"""Tests for the save_snapshot_cli and show_snapshots_cli adapters."""

import json
from datetime import date, datetime, timezone
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from src.adapters import save_snapshot_cli, show_snapshots_cli
from src.application.use_cases.get_snapshot import SnapshotView
from src.application.use_cases.project_cashflow import ProjectCashflowUseCase
from src.application.use_cases.save_snapshot import (
    SaveProjectionSnapshotUseCase,
)
from src.domain.exceptions import SnapshotFormatError
from src.domain.models.entities import (
    AccountKind,
    BankAccount,
    SingleShotExpense,
)
from src.domain.models.snapshot import SnapshotInputState, SnapshotListItem
from src.domain.services.aggregation import extract_danger_ranges
from src.domain.services.simulation import simulate_cashflow
from src.domain.services.snapshot_codec import (
    build_summary_metrics,
    create_snapshot,
)
from src.infrastructure.settings import PlannerSettings

CREATED_AT = datetime(2025, 1, 2, 9, 0, tzinfo=timezone.utc)


def _patch_common(monkeypatch, module, settings: PlannerSettings) -> MagicMock:
    logger = MagicMock()
    monkeypatch.setattr(module, "get_app_logger", lambda: logger)
    monkeypatch.setattr(module, "get_usage_logger", lambda: MagicMock())
    monkeypatch.setattr(
        module,
        "PlannerSettings",
        SimpleNamespace(from_env=lambda: settings),
    )
    return logger


def _snapshot():
    inputs = SnapshotInputState(
        accounts=[
            BankAccount(
                id="a1",
                name="Checking",
                kind=AccountKind.CHECKING,
                balance=100000,
            )
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
    projection = simulate_cashflow(inputs, date(2025, 1, 1), 30)
    return create_snapshot(
        "January plan",
        inputs,
        projection,
        group_id="family",
        created_at=CREATED_AT,
        snapshot_id="s1",
    )


@pytest.fixture
def inputs_file(tmp_path: Path) -> Path:
    path = tmp_path / "inputs.json"
    document = {
        "accounts": [
            {
                "id": "a1",
                "name": "Checking",
                "kind": "checking",
                "balance": 100000,
            }
        ]
    }
    path.write_text(json.dumps(document), encoding="utf-8")
    return path


def test_save_cli_saves_named_snapshot(monkeypatch, capsys, inputs_file) -> None:
    """The CLI should project the inputs and store them under the name."""
    settings = PlannerSettings(timezone="UTC", inputs_file=inputs_file)
    logger = _patch_common(monkeypatch, save_snapshot_cli, settings)
    repository = MagicMock()
    monkeypatch.setattr(
        save_snapshot_cli,
        "build_project_cashflow_use_case",
        lambda: ProjectCashflowUseCase(logger=logger),
    )
    monkeypatch.setattr(
        save_snapshot_cli,
        "build_save_snapshot_use_case",
        lambda: SaveProjectionSnapshotUseCase(repository, logger=logger),
    )
    monkeypatch.setenv("PLANNER_SNAPSHOT_NAME", "January plan")
    monkeypatch.setenv("PLANNER_GROUP_ID", "family")

    save_snapshot_cli.main()

    repository.save.assert_called_once()
    document = repository.save.call_args[0][0]
    assert document["name"] == "January plan"
    assert document["groupId"] == "family"
    assert "(January plan): 0 danger days." in capsys.readouterr().out


def test_save_cli_logs_invalid_name(monkeypatch, capsys, inputs_file) -> None:
    """A blank name should be logged and nothing saved."""
    settings = PlannerSettings(timezone="UTC", inputs_file=inputs_file)
    logger = _patch_common(monkeypatch, save_snapshot_cli, settings)
    repository = MagicMock()
    monkeypatch.setattr(
        save_snapshot_cli,
        "build_project_cashflow_use_case",
        lambda: ProjectCashflowUseCase(logger=logger),
    )
    monkeypatch.setattr(
        save_snapshot_cli,
        "build_save_snapshot_use_case",
        lambda: SaveProjectionSnapshotUseCase(repository, logger=logger),
    )
    monkeypatch.setenv("PLANNER_SNAPSHOT_NAME", "  ")

    save_snapshot_cli.main()

    repository.save.assert_not_called()
    assert capsys.readouterr().out == ""
    assert "Snapshot not saved" in logger.error.call_args[0][0]


def test_show_cli_lists_group_snapshots(monkeypatch, capsys) -> None:
    """Without an id the CLI should list the group's snapshots."""
    _patch_common(monkeypatch, show_snapshots_cli, PlannerSettings())
    snapshot = _snapshot()
    use_case = MagicMock()
    use_case.execute.return_value = [
        SnapshotListItem(
            id="s1",
            name="January plan",
            created_at=CREATED_AT,
            summary_metrics=build_summary_metrics(snapshot.projection),
        )
    ]
    monkeypatch.setattr(
        show_snapshots_cli,
        "build_list_snapshots_use_case",
        lambda: use_case,
    )
    monkeypatch.delenv("PLANNER_SNAPSHOT_ID", raising=False)
    monkeypatch.setenv("PLANNER_GROUP_ID", "family")

    show_snapshots_cli.main()

    use_case.execute.assert_called_once_with("family")
    out = capsys.readouterr().out
    assert "s1  2025-01-02 09:00  January plan" in out
    assert "danger_days=3" in out


def test_show_cli_reports_empty_group(monkeypatch, capsys) -> None:
    """An empty group should print a short notice."""
    _patch_common(monkeypatch, show_snapshots_cli, PlannerSettings())
    use_case = MagicMock()
    use_case.execute.return_value = []
    monkeypatch.setattr(
        show_snapshots_cli,
        "build_list_snapshots_use_case",
        lambda: use_case,
    )
    monkeypatch.delenv("PLANNER_SNAPSHOT_ID", raising=False)
    monkeypatch.delenv("PLANNER_GROUP_ID", raising=False)

    show_snapshots_cli.main()

    assert "No snapshots saved for group default." in capsys.readouterr().out


def test_show_cli_prints_one_snapshot(monkeypatch, capsys) -> None:
    """With an id the frozen projection is shown without recomputing."""
    _patch_common(monkeypatch, show_snapshots_cli, PlannerSettings())
    snapshot = _snapshot()
    use_case = MagicMock()
    use_case.execute.return_value = SnapshotView(
        snapshot=snapshot,
        danger_ranges=extract_danger_ranges(snapshot.projection.days),
        investment_total=0,
        compatibility_warning="Snapshot was saved with an older format",
    )
    monkeypatch.setattr(
        show_snapshots_cli,
        "build_get_snapshot_use_case",
        lambda: use_case,
    )
    monkeypatch.setenv("PLANNER_SNAPSHOT_ID", "s1")

    show_snapshots_cli.main()

    use_case.execute.assert_called_once_with("s1")
    out = capsys.readouterr().out
    assert "January plan (saved 2025-01-02T09:00:00+00:00)" in out
    assert "Warning: Snapshot was saved with an older format" in out
    assert "starting=1000.00, optimistic_end=-500.00" in out
    assert "danger (both): 28 de jan. - 30 de jan." in out


def test_show_cli_handles_missing_and_unreadable(monkeypatch, capsys) -> None:
    """Missing ids are reported and unreadable documents are logged."""
    logger = _patch_common(monkeypatch, show_snapshots_cli, PlannerSettings())
    use_case = MagicMock()
    use_case.execute.side_effect = [None, SnapshotFormatError("broken")]
    monkeypatch.setattr(
        show_snapshots_cli,
        "build_get_snapshot_use_case",
        lambda: use_case,
    )
    monkeypatch.setenv("PLANNER_SNAPSHOT_ID", "s9")

    show_snapshots_cli.main()
    show_snapshots_cli.main()

    assert "Snapshot s9 not found." in capsys.readouterr().out
    logger.error.assert_called_once()
