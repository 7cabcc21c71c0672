"""CLI adapter to project the configured inputs and save a snapshot."""

from datetime import datetime
import os
from zoneinfo import ZoneInfo

from src.adapters.project_cashflow_cli import (
    load_inputs_file,
    progress_inputs_month,
)
from src.domain.exceptions import CashflowValidationError
from src.infrastructure.container import (
    build_project_cashflow_use_case,
    build_save_snapshot_use_case,
)
from src.infrastructure.logging.logger import get_app_logger, get_usage_logger
from src.infrastructure.settings import PlannerSettings

DEFAULT_GROUP_ID = "default"


def main() -> None:
    """Freeze the current projection under ``PLANNER_SNAPSHOT_NAME``."""
    logger = get_app_logger()
    get_usage_logger().info("save_snapshot_cli invoked")
    settings = PlannerSettings.from_env()
    name = os.getenv("PLANNER_SNAPSHOT_NAME", "")
    group_id = os.getenv("PLANNER_GROUP_ID", DEFAULT_GROUP_ID)
    if settings.inputs_file is None:
        logger.warning("PLANNER_INPUTS_FILE is required to save a snapshot.")
        return

    inputs = load_inputs_file(settings.inputs_file, logger)
    if inputs is None:
        return
    today = datetime.now(ZoneInfo(settings.timezone)).date()
    inputs = progress_inputs_month(inputs, today)

    try:
        projection = build_project_cashflow_use_case().execute(
            inputs,
            projection_days=settings.projection_days,
            start_date=today,
        )
        snapshot = build_save_snapshot_use_case().execute(
            name,
            inputs,
            projection,
            group_id=group_id,
        )
    except CashflowValidationError as exc:
        logger.error(f"Snapshot not saved ({exc.code.value}): {exc}")
        return

    print(
        f"Saved snapshot {snapshot.id} ({snapshot.name}): "
        f"{snapshot.summary_metrics.danger_day_count} danger days."
    )


if __name__ == "__main__":  # pragma: no cover
    main()
