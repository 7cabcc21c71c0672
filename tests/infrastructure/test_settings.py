"""Tests for infrastructure settings."""

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from src.infrastructure import settings as settings_module
from src.infrastructure.settings import PlannerSettings

ENV_VARS = (
    "PLANNER_PROJECTION_DAYS",
    "PLANNER_STALE_THRESHOLD_DAYS",
    "PLANNER_TIMEZONE",
    "PLANNER_DATE_LOCALE",
    "PLANNER_INPUTS_FILE",
)


@pytest.fixture
def logger(monkeypatch, tmp_path: Path) -> MagicMock:
    fake_logger = MagicMock()
    monkeypatch.setattr(settings_module, "get_app_logger", lambda: fake_logger)
    monkeypatch.setattr(settings_module, "get_project_root", lambda: tmp_path)
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return fake_logger


def test_from_env_defaults(logger) -> None:
    """Without variables the defaults apply and nothing is logged."""
    settings = PlannerSettings.from_env()

    assert settings == PlannerSettings()
    assert settings.projection_days == 30
    assert settings.timezone == "America/Sao_Paulo"
    logger.warning.assert_not_called()


def test_from_env_reads_values(logger, monkeypatch) -> None:
    """Valid variables should override the defaults."""
    monkeypatch.setenv("PLANNER_PROJECTION_DAYS", "90")
    monkeypatch.setenv("PLANNER_STALE_THRESHOLD_DAYS", "14")
    monkeypatch.setenv("PLANNER_TIMEZONE", "UTC")
    monkeypatch.setenv("PLANNER_DATE_LOCALE", "en-US")

    settings = PlannerSettings.from_env()

    assert settings.projection_days == 90
    assert settings.stale_threshold_days == 14
    assert settings.timezone == "UTC"
    assert settings.date_locale == "en-US"


@pytest.mark.parametrize(
    ("name", "value"),
    [
        ("PLANNER_PROJECTION_DAYS", "45"),
        ("PLANNER_PROJECTION_DAYS", "thirty"),
        ("PLANNER_TIMEZONE", "Mars/Olympus_Mons"),
        ("PLANNER_DATE_LOCALE", "fr-FR"),
    ],
)
def test_from_env_falls_back_on_invalid_values(
    logger,
    monkeypatch,
    name: str,
    value: str,
) -> None:
    """Invalid values should be logged and replaced by defaults."""
    monkeypatch.setenv(name, value)

    settings = PlannerSettings.from_env()

    assert settings == PlannerSettings()
    logger.warning.assert_called()


def test_from_env_uses_file_path(logger, monkeypatch, tmp_path: Path) -> None:
    """File paths should resolve to absolute Path instances."""
    inputs_file = tmp_path / "inputs.json"
    inputs_file.write_text("{}", encoding="utf-8")
    monkeypatch.setenv("PLANNER_INPUTS_FILE", str(inputs_file))

    settings = PlannerSettings.from_env()

    assert settings.inputs_file == inputs_file.resolve()
    logger.warning.assert_not_called()


def test_from_env_accepts_file_uri(logger, monkeypatch, tmp_path: Path) -> None:
    """file:// URIs should be converted to filesystem paths."""
    inputs_file = tmp_path / "my inputs.json"
    inputs_file.write_text("{}", encoding="utf-8")
    monkeypatch.setenv("PLANNER_INPUTS_FILE", inputs_file.as_uri())

    settings = PlannerSettings.from_env()

    assert settings.inputs_file == inputs_file.resolve()


def test_from_env_warns_on_missing_file(logger, monkeypatch, tmp_path) -> None:
    """A missing inputs file is kept but logged."""
    monkeypatch.setenv("PLANNER_INPUTS_FILE", str(tmp_path / "missing.json"))

    settings = PlannerSettings.from_env()

    assert settings.inputs_file == (tmp_path / "missing.json").resolve()
    logger.warning.assert_called_once()


def test_default_inputs_file_picks_single_json(logger, tmp_path: Path) -> None:
    """A single JSON document in data/ is used by default."""
    data_dir = tmp_path / "data"
    data_dir.mkdir()
    (data_dir / "household.json").write_text("{}", encoding="utf-8")

    settings = PlannerSettings.from_env()

    assert settings.inputs_file == (data_dir / "household.json").resolve()


def test_default_inputs_file_ambiguous(logger, tmp_path: Path) -> None:
    """Several JSON documents in data/ require an explicit choice."""
    data_dir = tmp_path / "data"
    data_dir.mkdir()
    (data_dir / "a.json").write_text("{}", encoding="utf-8")
    (data_dir / "b.json").write_text("{}", encoding="utf-8")

    settings = PlannerSettings.from_env()

    assert settings.inputs_file is None
    logger.warning.assert_called_once()
