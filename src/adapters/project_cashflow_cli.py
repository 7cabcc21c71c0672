"""CLI adapter to project daily balances from an inputs document.

The inputs document is the camelCase JSON shape of the entity collections
(``accounts``, ``projects``, ``singleShotIncome``, ``fixedExpenses``,
``singleShotExpenses``, ``creditCards``, ``futureStatements``). Its path comes
from ``PLANNER_INPUTS_FILE``.
"""

from dataclasses import replace
from datetime import date, datetime
import json
import os
from pathlib import Path
from zoneinfo import ZoneInfo

from pydantic import ValidationError

from src.adapters.interface.presentation import (
    build_danger_ranges,
    calculate_investment_total,
    transform_to_chart_data,
    transform_to_summary_stats,
)
from src.domain.exceptions import CashflowValidationError
from src.domain.models.snapshot import SnapshotInputState
from src.domain.services.aggregation import extract_danger_ranges
from src.domain.services.future_statements import progress_month
from src.domain.services.documents import describe_validation_error
from src.domain.services.snapshot_codec import parse_inputs
from src.infrastructure.container import (
    build_health_indicator_use_case,
    build_project_cashflow_use_case,
)
from src.infrastructure.logging.logger import get_app_logger, get_usage_logger
from src.infrastructure.settings import PlannerSettings
from src.utils.decimal_utils import format_major

TRUTHY_VALUES = ("1", "true", "yes")


def _parse_date(value: str | None, logger) -> date | None:
    """Parse an ISO date string into a date.

    Args:
        value: Date string in YYYY-MM-DD format.
        logger: Logger used for warnings.

    Returns:
        date | None: Parsed date or None when invalid.
    """
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        logger.warning(
            f"Invalid date '{value}'. Expected format YYYY-MM-DD."
        )
        return None


def load_inputs_file(path: Path, logger) -> SnapshotInputState | None:
    """Read and decode an inputs document.

    Args:
        path: Path to the JSON document.
        logger: Logger used for errors.

    Returns:
        SnapshotInputState | None: Decoded inputs, or None when unreadable.
    """
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        logger.error(f"Cannot read inputs file {path}: {exc}")
        return None
    try:
        return parse_inputs(raw)
    except ValidationError as exc:
        logger.error(
            f"Inputs file {path} has an invalid entry: "
            f"{describe_validation_error(exc)}"
        )
        return None


def progress_inputs_month(
    inputs: SnapshotInputState,
    today: date,
) -> SnapshotInputState:
    """Promote this month's future statements into the card balances."""
    result = progress_month(inputs.credit_cards, inputs.future_statements, today)
    if result.progressed_cards or result.cleaned_statements:
        print(
            f"Month progression: {result.progressed_cards} cards updated, "
            f"{result.cleaned_statements} past statements removed."
        )
    return replace(
        inputs,
        credit_cards=result.credit_cards,
        future_statements=result.future_statements,
    )


def main() -> None:
    """Project the configured inputs and print totals and health."""
    logger = get_app_logger()
    get_usage_logger().info("project_cashflow_cli invoked")
    settings = PlannerSettings.from_env()
    if settings.inputs_file is None:
        logger.warning("PLANNER_INPUTS_FILE is required to run a projection.")
        return

    inputs = load_inputs_file(settings.inputs_file, logger)
    if inputs is None:
        return

    today = datetime.now(ZoneInfo(settings.timezone)).date()
    inputs = progress_inputs_month(inputs, today)
    start_date = _parse_date(os.getenv("PLANNER_START_DATE"), logger) or today
    estimate_today = os.getenv("PLANNER_ESTIMATE_TODAY", "").strip().lower()

    use_case = build_project_cashflow_use_case()
    try:
        if estimate_today in TRUTHY_VALUES:
            rebased = use_case.execute_from_today(
                inputs,
                today,
                settings.timezone,
                projection_days=settings.projection_days,
            )
            projection = rebased.projection
            estimate = rebased.estimate
            if estimate.is_estimated:
                print(
                    "Estimated today: "
                    f"optimistic={format_major(estimate.optimistic_cents)}, "
                    f"pessimistic={format_major(estimate.pessimistic_cents)}"
                )
        else:
            projection = use_case.execute(
                inputs,
                projection_days=settings.projection_days,
                start_date=start_date,
            )
    except CashflowValidationError as exc:
        logger.error(f"Invalid inputs ({exc.code.value}): {exc}")
        return

    health = build_health_indicator_use_case(settings).execute(
        projection,
        inputs.accounts,
        inputs.credit_cards,
    )
    stats = transform_to_summary_stats(projection)
    points = transform_to_chart_data(
        projection.days,
        calculate_investment_total(inputs.accounts),
        settings.date_locale,
    )
    ranges = build_danger_ranges(points, extract_danger_ranges(projection.days))

    print(
        f"Projection {projection.start_date} to {projection.end_date} "
        f"(starting balance {stats.starting_balance})"
    )
    for label, scenario in (
        ("optimistic", stats.optimistic),
        ("pessimistic", stats.pessimistic),
    ):
        print(
            f"{label}: income={scenario.total_income}, "
            f"expenses={scenario.total_expenses}, "
            f"end={scenario.end_balance}, surplus={scenario.surplus}, "
            f"danger_days={scenario.danger_day_count}"
        )
    for danger_range in ranges:
        print(
            f"danger ({danger_range.scenario.value}): "
            f"{danger_range.start} - {danger_range.end}"
        )
    print(f"Health: {health.status.value} - {health.message}")


if __name__ == "__main__":  # pragma: no cover
    main()
