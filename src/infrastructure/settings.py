"""Settings helpers for infrastructure adapters."""

from dataclasses import dataclass
import os
from pathlib import Path
from typing import Optional
from urllib.parse import unquote, urlparse
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from src.domain.constants import (
    DEFAULT_PROJECTION_DAYS,
    PROJECTION_HORIZONS,
    STALE_THRESHOLD_DAYS,
)
from src.infrastructure.logging.logger import get_app_logger
from src.utils.utils import get_project_root

DEFAULT_TIMEZONE = "America/Sao_Paulo"
DEFAULT_DATE_LOCALE = "pt-BR"
SUPPORTED_LOCALES = ("pt-BR", "en-US")


@dataclass(frozen=True)
class PlannerSettings:
    """Settings for running projections.

    Attributes:
        projection_days: Default horizon, one of 7, 14, 30, 60, or 90.
        stale_threshold_days: Age in days after which a balance is stale.
        timezone: IANA zone used to decide which calendar day is today.
        date_locale: Locale of chart date labels (pt-BR or en-US).
        inputs_file: Optional path to the JSON document of entities.
    """

    projection_days: int = DEFAULT_PROJECTION_DAYS
    stale_threshold_days: int = STALE_THRESHOLD_DAYS
    timezone: str = DEFAULT_TIMEZONE
    date_locale: str = DEFAULT_DATE_LOCALE
    inputs_file: Optional[Path] = None

    @classmethod
    def from_env(cls) -> "PlannerSettings":
        """Build settings from environment variables.

        Invalid values are logged and replaced by their defaults.

        Returns:
            PlannerSettings: Settings sourced from environment variables.
        """
        logger = get_app_logger()
        projection_days = cls._read_int(
            "PLANNER_PROJECTION_DAYS",
            DEFAULT_PROJECTION_DAYS,
            logger=logger,
        )
        if projection_days not in PROJECTION_HORIZONS:
            logger.warning(
                f"PLANNER_PROJECTION_DAYS={projection_days} is not one of "
                f"{PROJECTION_HORIZONS}; using {DEFAULT_PROJECTION_DAYS}"
            )
            projection_days = DEFAULT_PROJECTION_DAYS
        stale_threshold_days = cls._read_int(
            "PLANNER_STALE_THRESHOLD_DAYS",
            STALE_THRESHOLD_DAYS,
            logger=logger,
        )

        timezone = os.getenv("PLANNER_TIMEZONE", DEFAULT_TIMEZONE).strip()
        try:
            ZoneInfo(timezone)
        except (ZoneInfoNotFoundError, ValueError):
            logger.warning(
                f"Unknown time zone {timezone!r}; using {DEFAULT_TIMEZONE}"
            )
            timezone = DEFAULT_TIMEZONE

        date_locale = os.getenv("PLANNER_DATE_LOCALE", DEFAULT_DATE_LOCALE).strip()
        if date_locale not in SUPPORTED_LOCALES:
            logger.warning(
                f"Unsupported locale {date_locale!r}; using {DEFAULT_DATE_LOCALE}"
            )
            date_locale = DEFAULT_DATE_LOCALE

        raw_inputs = os.getenv("PLANNER_INPUTS_FILE")
        if raw_inputs:
            inputs_file = cls._normalize_path(raw_inputs, logger=logger)
        else:
            inputs_file = cls._default_inputs_file(logger=logger)

        return cls(
            projection_days=projection_days,
            stale_threshold_days=stale_threshold_days,
            timezone=timezone,
            date_locale=date_locale,
            inputs_file=inputs_file,
        )

    @staticmethod
    def _read_int(name: str, default: int, logger) -> int:
        raw = os.getenv(name)
        if raw is None or not raw.strip():
            return default
        try:
            return int(raw)
        except ValueError:
            logger.warning(f"{name}={raw!r} is not an integer; using {default}")
            return default

    @staticmethod
    def _normalize_path(raw_path: str, logger) -> Path:
        """Normalize the inputs file path.

        Args:
            raw_path: Raw file path or ``file://`` URI.
            logger: Logger used for warnings.

        Returns:
            Path: Absolute filesystem path.
        """
        parsed = urlparse(raw_path)
        if parsed.scheme == "file":
            raw_path = unquote(parsed.path)
        path = Path(raw_path).expanduser().resolve()
        if not path.exists():
            logger.warning(f"Inputs file does not exist at {path}")
        return path

    @staticmethod
    def _default_inputs_file(logger) -> Path | None:
        """Return a default inputs file when available.

        Args:
            logger: Logger used for warnings.

        Returns:
            Path | None: Default path if a single JSON file is found in data/.
        """
        data_dir = get_project_root() / "data"
        if not data_dir.exists():
            return None
        matches = sorted(data_dir.glob("*.json"))
        if len(matches) == 1:
            return matches[0].resolve()
        if len(matches) > 1:
            logger.warning(
                "Multiple .json files found in data/. "
                "Set PLANNER_INPUTS_FILE to choose one."
            )
        return None


__all__ = ["PlannerSettings", "SUPPORTED_LOCALES"]
