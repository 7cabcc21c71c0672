"""CLI adapter to list saved snapshots or show one of them."""

import os

from src.adapters.interface.presentation import (
    build_danger_ranges,
    transform_to_chart_data,
    transform_to_summary_stats,
)
from src.domain.exceptions import SnapshotFormatError
from src.infrastructure.container import (
    build_get_snapshot_use_case,
    build_list_snapshots_use_case,
)
from src.infrastructure.logging.logger import get_app_logger, get_usage_logger
from src.infrastructure.settings import PlannerSettings
from src.utils.decimal_utils import cents_to_major, format_major

DEFAULT_GROUP_ID = "default"


def _show_snapshot(snapshot_id: str, settings: PlannerSettings, logger) -> None:
    try:
        view = build_get_snapshot_use_case().execute(snapshot_id)
    except SnapshotFormatError as exc:
        logger.error(f"Snapshot {snapshot_id} is unreadable: {exc}")
        return
    if view is None:
        print(f"Snapshot {snapshot_id} not found.")
        return

    snapshot = view.snapshot
    stats = transform_to_summary_stats(snapshot.projection)
    points = transform_to_chart_data(
        snapshot.projection.days,
        cents_to_major(view.investment_total),
        settings.date_locale,
    )
    print(f"{snapshot.name} (saved {snapshot.created_at.isoformat()})")
    if view.compatibility_warning:
        print(f"Warning: {view.compatibility_warning}")
    print(
        f"starting={stats.starting_balance}, "
        f"optimistic_end={stats.optimistic.end_balance}, "
        f"pessimistic_end={stats.pessimistic.end_balance}"
    )
    for danger_range in build_danger_ranges(points, view.danger_ranges):
        print(
            f"danger ({danger_range.scenario.value}): "
            f"{danger_range.start} - {danger_range.end}"
        )


def main() -> None:
    """Show ``PLANNER_SNAPSHOT_ID`` or list the group's snapshots."""
    logger = get_app_logger()
    get_usage_logger().info("show_snapshots_cli invoked")
    settings = PlannerSettings.from_env()
    snapshot_id = os.getenv("PLANNER_SNAPSHOT_ID")
    if snapshot_id:
        _show_snapshot(snapshot_id, settings, logger)
        return

    group_id = os.getenv("PLANNER_GROUP_ID", DEFAULT_GROUP_ID)
    items = build_list_snapshots_use_case().execute(group_id)
    if not items:
        print(f"No snapshots saved for group {group_id}.")
        return
    for item in items:
        metrics = item.summary_metrics
        print(
            f"{item.id}  {item.created_at:%Y-%m-%d %H:%M}  {item.name}  "
            f"end={format_major(metrics.end_balance_optimistic)}  "
            f"danger_days={metrics.danger_day_count}"
        )


if __name__ == "__main__":  # pragma: no cover
    main()
