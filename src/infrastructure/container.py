"""Composition root for wiring infrastructure adapters."""

from src.application.ports.database import DatabaseEnginePort
from src.application.ports.snapshot_repository import SnapshotRepositoryPort
from src.application.use_cases.get_health_indicator import (
    GetHealthIndicatorUseCase,
)
from src.application.use_cases.get_snapshot import GetProjectionSnapshotUseCase
from src.application.use_cases.list_snapshots import (
    ListProjectionSnapshotsUseCase,
)
from src.application.use_cases.project_cashflow import ProjectCashflowUseCase
from src.application.use_cases.projection_cache import ProjectionCache
from src.application.use_cases.save_snapshot import (
    SaveProjectionSnapshotUseCase,
)
from src.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from src.infrastructure.logging.logger import get_app_logger
from src.infrastructure.settings import PlannerSettings
from src.infrastructure.snapshot_repository import SqlAlchemySnapshotRepository

_projection_cache: ProjectionCache | None = None


def build_database_adapter() -> DatabaseEnginePort:
    """Return the database adapter instance."""
    return SqlAlchemyDatabaseEngineAdapter()


def build_snapshot_repository(
    db_port: DatabaseEnginePort | None = None,
) -> SnapshotRepositoryPort:
    """Return the snapshot repository."""
    resolved_db = db_port or build_database_adapter()
    return SqlAlchemySnapshotRepository(resolved_db)


def build_projection_cache() -> ProjectionCache:
    """Return the process-wide projection cache."""
    global _projection_cache
    if _projection_cache is None:
        _projection_cache = ProjectionCache()
    return _projection_cache


def build_project_cashflow_use_case() -> ProjectCashflowUseCase:
    """Return the projection use case backed by the shared cache."""
    return ProjectCashflowUseCase(
        logger=get_app_logger(),
        cache=build_projection_cache(),
    )


def build_health_indicator_use_case(
    settings: PlannerSettings | None = None,
) -> GetHealthIndicatorUseCase:
    """Return the health use case configured from settings."""
    resolved = settings or PlannerSettings.from_env()
    return GetHealthIndicatorUseCase(
        logger=get_app_logger(),
        stale_threshold_days=resolved.stale_threshold_days,
    )


def build_save_snapshot_use_case(
    db_port: DatabaseEnginePort | None = None,
) -> SaveProjectionSnapshotUseCase:
    """Return the snapshot save use case."""
    return SaveProjectionSnapshotUseCase(
        build_snapshot_repository(db_port),
        logger=get_app_logger(),
    )


def build_get_snapshot_use_case(
    db_port: DatabaseEnginePort | None = None,
) -> GetProjectionSnapshotUseCase:
    """Return the snapshot load use case."""
    return GetProjectionSnapshotUseCase(
        build_snapshot_repository(db_port),
        logger=get_app_logger(),
    )


def build_list_snapshots_use_case(
    db_port: DatabaseEnginePort | None = None,
) -> ListProjectionSnapshotsUseCase:
    """Return the snapshot listing use case."""
    return ListProjectionSnapshotsUseCase(
        build_snapshot_repository(db_port),
        logger=get_app_logger(),
    )


__all__ = [
    "build_database_adapter",
    "build_snapshot_repository",
    "build_projection_cache",
    "build_project_cashflow_use_case",
    "build_health_indicator_use_case",
    "build_save_snapshot_use_case",
    "build_get_snapshot_use_case",
    "build_list_snapshots_use_case",
]
