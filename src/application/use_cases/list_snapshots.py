"""Use case to list the snapshots of a group."""

from datetime import datetime, timezone

from pydantic import ValidationError

from src.application.ports.snapshot_repository import SnapshotRepositoryPort
from src.domain.models.snapshot import SnapshotListItem
from src.domain.services.documents import describe_validation_error
from src.domain.services.snapshot_codec import load_list_item
from src.infrastructure.logging.logger import get_app_logger


def _sort_key(item: SnapshotListItem) -> datetime:
    created_at = item.created_at
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=timezone.utc)
    return created_at


class ListProjectionSnapshotsUseCase:
    """List snapshot summaries, newest first."""

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

    def execute(self, group_id: str) -> list[SnapshotListItem]:
        """Return the group's snapshots with their summary metrics only."""
        items = []
        for row in self._snapshot_repository.list_by_group(group_id):
            try:
                items.append(load_list_item(row))
            except ValidationError as exc:
                self._logger.warning(
                    "Skipping unreadable snapshot row: "
                    f"{describe_validation_error(exc)}"
                )
        items.sort(key=_sort_key, reverse=True)
        self._logger.info(f"Listed {len(items)} snapshots for group {group_id}")
        return items


__all__ = ["ListProjectionSnapshotsUseCase"]
