"""Use case to freeze a projection into a named snapshot."""

from datetime import datetime, timezone

from src.application.ports.snapshot_repository import SnapshotRepositoryPort
from src.domain.models.projection import CashflowProjection
from src.domain.models.snapshot import ProjectionSnapshot, SnapshotInputState
from src.domain.services.snapshot_codec import create_snapshot, serialize_snapshot
from src.infrastructure.logging.logger import get_app_logger


class SaveProjectionSnapshotUseCase:
    """Persist a projection together with the inputs that produced it."""

    def __init__(
        self,
        snapshot_repository: SnapshotRepositoryPort,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            snapshot_repository: Port persisting snapshot documents.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._snapshot_repository = snapshot_repository
        self._logger = logger or get_app_logger()

    def execute(
        self,
        name: str,
        inputs: SnapshotInputState,
        projection: CashflowProjection,
        group_id: str,
        created_at: datetime | None = None,
    ) -> ProjectionSnapshot:
        """Freeze and store a snapshot.

        Args:
            name: Display name, 1 to 100 characters after trimming.
            inputs: Entities the projection was computed from.
            projection: Projection to freeze.
            group_id: Owner group of the snapshot.
            created_at: Creation moment; defaults to the current UTC time.

        Returns:
            ProjectionSnapshot: The stored snapshot.

        Raises:
            CashflowValidationError: If the name is empty or too long.
        """
        snapshot = create_snapshot(
            name,
            inputs,
            projection,
            group_id=group_id,
            created_at=created_at or datetime.now(timezone.utc),
        )
        self._snapshot_repository.save(serialize_snapshot(snapshot))
        self._logger.info(
            f"Snapshot saved: id={snapshot.id}, name={snapshot.name!r}, "
            f"group={group_id}"
        )
        return snapshot


__all__ = ["SaveProjectionSnapshotUseCase"]
