"""Use case to load a frozen projection snapshot."""

from dataclasses import dataclass

from src.application.ports.snapshot_repository import SnapshotRepositoryPort
from src.domain.models.projection import DangerRange
from src.domain.models.snapshot import ProjectionSnapshot
from src.domain.services.aggregation import extract_danger_ranges
from src.domain.services.simulation import calculate_investment_total
from src.domain.services.snapshot_codec import (
    check_schema_compatibility,
    load_snapshot,
)
from src.infrastructure.logging.logger import get_app_logger


@dataclass(frozen=True)
class SnapshotView:
    """Snapshot ready for display.

    Attributes:
        snapshot: Re-hydrated snapshot.
        danger_ranges: Consecutive danger days of the frozen projection.
        investment_total: Investment balances at freeze time, in cents.
        compatibility_warning: Set when the document used another schema
            version.
    """

    snapshot: ProjectionSnapshot
    danger_ranges: list[DangerRange]
    investment_total: int
    compatibility_warning: str | None = None


class GetProjectionSnapshotUseCase:
    """Load a snapshot by id without recomputing its projection."""

    def __init__(
        self,
        snapshot_repository: SnapshotRepositoryPort,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            snapshot_repository: Port reading snapshot documents.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._snapshot_repository = snapshot_repository
        self._logger = logger or get_app_logger()

    def execute(self, snapshot_id: str) -> SnapshotView | None:
        """Return the snapshot view, or None when the id is unknown.

        Raises:
            SnapshotFormatError: If the stored document has no projection.
        """
        document = self._snapshot_repository.fetch(snapshot_id)
        if document is None:
            self._logger.warning(f"Snapshot not found: {snapshot_id}")
            return None

        snapshot = load_snapshot(document, logger=self._logger)
        return SnapshotView(
            snapshot=snapshot,
            danger_ranges=extract_danger_ranges(snapshot.projection.days),
            investment_total=calculate_investment_total(snapshot.inputs.accounts),
            compatibility_warning=check_schema_compatibility(
                snapshot.schema_version
            ),
        )


__all__ = ["GetProjectionSnapshotUseCase", "SnapshotView"]
