"""Port for persisting projection snapshot documents."""

from typing import Any, Protocol


class SnapshotRepositoryPort(Protocol):
    """Port exposing storage of frozen projection documents.

    Documents use the persisted camelCase shape
    ``{id, groupId, name, schemaVersion, data, createdAt}``.
    """

    def save(self, document: dict[str, Any]) -> None:
        """Persist a snapshot document."""

    def fetch(self, snapshot_id: str) -> dict[str, Any] | None:
        """Return a full snapshot document, or None when absent."""

    def list_by_group(self, group_id: str) -> list[dict[str, Any]]:
        """Return ``{id, name, createdAt, summaryMetrics}`` rows, newest first."""


__all__ = ["SnapshotRepositoryPort"]
