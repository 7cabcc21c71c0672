"""Domain constants for cashflow projections."""

PROJECTION_HORIZONS = (7, 14, 30, 60, 90)
DEFAULT_PROJECTION_DAYS = 30

STALE_THRESHOLD_DAYS = 7

NEAR_DANGER_RATIO = "0.05"
NEAR_DANGER_MIN = 1000
NEAR_DANGER_MAX = 20000

CURRENT_SCHEMA_VERSION = 1

SNAPSHOT_NAME_MAX_LENGTH = 100


__all__ = [
    "PROJECTION_HORIZONS",
    "DEFAULT_PROJECTION_DAYS",
    "STALE_THRESHOLD_DAYS",
    "NEAR_DANGER_RATIO",
    "NEAR_DANGER_MIN",
    "NEAR_DANGER_MAX",
    "CURRENT_SCHEMA_VERSION",
    "SNAPSHOT_NAME_MAX_LENGTH",
]
