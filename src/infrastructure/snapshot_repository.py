"""SQLAlchemy-backed repository for projection snapshots."""

import json
from typing import Any

from sqlalchemy import text

from src.application.ports.database import DatabaseEnginePort
from src.application.ports.snapshot_repository import SnapshotRepositoryPort

CREATE_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS projection_snapshots (
    id TEXT PRIMARY KEY,
    group_id TEXT NOT NULL,
    name TEXT NOT NULL,
    schema_version INTEGER NOT NULL,
    data TEXT NOT NULL,
    summary_metrics TEXT NOT NULL,
    created_at TEXT NOT NULL
)
"""


class SqlAlchemySnapshotRepository(SnapshotRepositoryPort):
    """Repository storing snapshot documents as JSON text.

    The ``data`` envelope is kept verbatim; ``summary_metrics`` is duplicated
    in its own column so listings never read the frozen projection.
    """

    def __init__(self, db_port: DatabaseEnginePort) -> None:
        """Initialize the repository.

        Args:
            db_port: Port providing access to the planner engine.
        """
        self._db_port = db_port
        self._schema_ready = False

    def ensure_schema(self) -> None:
        """Create the snapshots table when it does not exist."""
        if self._schema_ready:
            return
        engine = self._db_port.get_planner_engine()
        with engine.begin() as conn:
            conn.execute(text(CREATE_TABLE_SQL))
        self._schema_ready = True

    def save(self, document: dict[str, Any]) -> None:
        """Insert a snapshot document."""
        self.ensure_schema()
        data = document["data"]
        query = text(
            """
            INSERT INTO projection_snapshots
                (id, group_id, name, schema_version, data,
                 summary_metrics, created_at)
            VALUES
                (:id, :group_id, :name, :schema_version, :data,
                 :summary_metrics, :created_at)
            """
        )
        params = {
            "id": document["id"],
            "group_id": document["groupId"],
            "name": document["name"],
            "schema_version": document["schemaVersion"],
            "data": json.dumps(data),
            "summary_metrics": json.dumps(data.get("summaryMetrics") or {}),
            "created_at": document["createdAt"],
        }
        engine = self._db_port.get_planner_engine()
        with engine.begin() as conn:
            conn.execute(query, params)

    def fetch(self, snapshot_id: str) -> dict[str, Any] | None:
        """Return the full document of a snapshot, or None."""
        self.ensure_schema()
        query = text(
            """
            SELECT id, group_id, name, schema_version, data, created_at
            FROM projection_snapshots
            WHERE id = :id
            """
        )
        engine = self._db_port.get_planner_engine()
        with engine.connect() as conn:
            row = conn.execute(query, {"id": snapshot_id}).first()
        if row is None:
            return None
        return {
            "id": row.id,
            "groupId": row.group_id,
            "name": row.name,
            "schemaVersion": row.schema_version,
            "data": json.loads(row.data),
            "createdAt": row.created_at,
        }

    def list_by_group(self, group_id: str) -> list[dict[str, Any]]:
        """Return summary rows of a group, newest first."""
        self.ensure_schema()
        query = text(
            """
            SELECT id, name, summary_metrics, created_at
            FROM projection_snapshots
            WHERE group_id = :group_id
            ORDER BY created_at DESC
            """
        )
        engine = self._db_port.get_planner_engine()
        with engine.connect() as conn:
            rows = conn.execute(query, {"group_id": group_id}).all()
        return [
            {
                "id": row.id,
                "name": row.name,
                "createdAt": row.created_at,
                "summaryMetrics": json.loads(row.summary_metrics),
            }
            for row in rows
        ]


__all__ = ["SqlAlchemySnapshotRepository"]
