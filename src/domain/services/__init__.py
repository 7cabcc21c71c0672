"""Domain services package."""

from .aggregation import (
    extract_danger_ranges,
    find_minimum_balance,
    generate_scenario_summary,
)
from .estimate import (
    calculate_estimated_today_balance,
    get_balance_update_base,
    rebase_projection_from_estimated_today,
)
from .future_statements import progress_month
from .health import (
    calculate_health_status,
    calculate_near_danger_threshold,
    classify_projection_health,
    find_stale_entities,
    get_health_message,
    is_stale,
)
from .schedule import expand_project, expand_schedule, get_effective_day
from .simulation import (
    calculate_investment_total,
    calculate_starting_balance,
    simulate_cashflow,
)
from .snapshot_codec import (
    create_snapshot,
    is_schema_version_compatible,
    load_snapshot,
    serialize_snapshot,
)
from .validation import validate_inputs, validate_projection_days

__all__ = [
    "extract_danger_ranges",
    "find_minimum_balance",
    "generate_scenario_summary",
    "calculate_estimated_today_balance",
    "get_balance_update_base",
    "rebase_projection_from_estimated_today",
    "progress_month",
    "calculate_health_status",
    "calculate_near_danger_threshold",
    "classify_projection_health",
    "find_stale_entities",
    "get_health_message",
    "is_stale",
    "expand_project",
    "expand_schedule",
    "get_effective_day",
    "calculate_investment_total",
    "calculate_starting_balance",
    "simulate_cashflow",
    "create_snapshot",
    "is_schema_version_compatible",
    "load_snapshot",
    "serialize_snapshot",
    "validate_inputs",
    "validate_projection_days",
]
