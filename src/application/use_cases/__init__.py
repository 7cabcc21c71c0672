"""Application use cases package."""

from .get_health_indicator import GetHealthIndicatorUseCase
from .get_snapshot import GetProjectionSnapshotUseCase, SnapshotView
from .list_snapshots import ListProjectionSnapshotsUseCase
from .project_cashflow import ProjectCashflowUseCase, RebasedProjection
from .projection_cache import ProjectionCache
from .save_snapshot import SaveProjectionSnapshotUseCase

__all__ = [
    "GetHealthIndicatorUseCase",
    "GetProjectionSnapshotUseCase",
    "SnapshotView",
    "ListProjectionSnapshotsUseCase",
    "ProjectCashflowUseCase",
    "RebasedProjection",
    "ProjectionCache",
    "SaveProjectionSnapshotUseCase",
]
