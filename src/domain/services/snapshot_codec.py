"""Freezing and re-hydrating projection snapshots.

A snapshot is persisted as a single JSON document::

    {id, groupId, name, schemaVersion,
     data: {inputs, projection, summaryMetrics}, createdAt}

Entities go through pydantic adapters, so dates travel as ISO strings and
come back as ``date``/``datetime`` values on load. Documents written by an
older schema version go through the registered migrations and load on a
best-effort basis with a warning.
"""

import copy
import json
import uuid
from collections.abc import Callable, Mapping
from datetime import datetime
from logging import Logger
from typing import Any

from pydantic import TypeAdapter, ValidationError

from src.domain.constants import CURRENT_SCHEMA_VERSION, SNAPSHOT_NAME_MAX_LENGTH
from src.domain.exceptions import CashflowValidationError, SnapshotFormatError
from src.domain.models.projection import CashflowProjection
from src.domain.models.snapshot import (
    ProjectionSnapshot,
    SnapshotInputState,
    SnapshotListItem,
    SnapshotSummaryMetrics,
)
from src.domain.services.documents import (
    INPUT_COLLECTIONS,
    INPUTS_ADAPTER,
    LIST_ITEM_ADAPTER,
    PROJECTION_ADAPTER,
    SUMMARY_METRICS_ADAPTER,
    describe_validation_error,
    dump_document,
)

_CREATED_AT_ADAPTER = TypeAdapter(datetime)


def serialize_inputs(inputs: SnapshotInputState) -> dict[str, Any]:
    """Return the camelCase document of an input state."""
    return dump_document(INPUTS_ADAPTER, inputs)


def is_schema_version_compatible(version: int) -> bool:
    """Return True when a document can be read without migration."""
    return version == CURRENT_SCHEMA_VERSION


def check_schema_compatibility(version: int) -> str | None:
    """Return a warning for documents written by another schema version."""
    if is_schema_version_compatible(version):
        return None
    if version < CURRENT_SCHEMA_VERSION:
        return (
            f"Snapshot schema version {version} is older than current "
            f"version {CURRENT_SCHEMA_VERSION}; loaded on a best-effort basis"
        )
    return (
        f"Snapshot schema version {version} is newer than current "
        f"version {CURRENT_SCHEMA_VERSION}; unknown fields are ignored"
    )


def _migrate_v0_to_v1(data: dict) -> dict:
    """Rename account ``type`` to ``kind`` and lift legacy ``paymentDay``."""
    inputs = dict(data.get("inputs") or {})
    accounts = []
    for account in inputs.get("accounts") or []:
        account = dict(account)
        if "kind" not in account and "type" in account:
            account["kind"] = account.pop("type")
        accounts.append(account)
    projects = []
    for project in inputs.get("projects") or []:
        project = dict(project)
        if "paymentSchedule" not in project and "paymentDay" in project:
            project["paymentSchedule"] = {
                "type": "dayOfMonth",
                "dayOfMonth": project.pop("paymentDay"),
            }
        projects.append(project)
    inputs["accounts"] = accounts
    inputs["projects"] = projects
    return {**data, "inputs": inputs}


# Keyed by the version a migration upgrades from.
_MIGRATIONS: dict[int, Callable[[dict], dict]] = {
    0: _migrate_v0_to_v1,
}


def migrate_snapshot_data(data: dict, version: int) -> dict:
    """Apply every registered migration from ``version`` up to current."""
    for step in range(version, CURRENT_SCHEMA_VERSION):
        migrate = _MIGRATIONS.get(step)
        if migrate is not None:
            data = migrate(data)
    return data



def _parse_items(
    raw_items: Any,
    adapter: TypeAdapter,
    label: str,
    logger: Logger,
) -> list:
    items = []
    for raw in raw_items or []:
        try:
            items.append(adapter.validate_python(raw))
        except ValidationError as exc:
            logger.warning(
                f"Skipping unreadable {label} entry: "
                f"{describe_validation_error(exc)}"
            )
    return items


def parse_inputs(
    raw: Mapping[str, Any],
    logger: Logger | None = None,
) -> SnapshotInputState:
    """Decode an input-state document.

    Args:
        raw: camelCase document with one list per entity collection.
        logger: When given, unreadable entries are skipped with a warning
            instead of failing the whole document.

    Raises:
        pydantic.ValidationError: If the document is unreadable, or an
            entry is unreadable and no logger was given.
    """
    if logger is None:
        return INPUTS_ADAPTER.validate_python(raw)
    document = dict(raw)
    for key, (label, adapter) in INPUT_COLLECTIONS.items():
        document[key] = _parse_items(raw.get(key), adapter, label, logger)
    return INPUTS_ADAPTER.validate_python(document)


def parse_projection(raw: Mapping[str, Any]) -> CashflowProjection:
    """Decode a projection document, re-hydrating every date."""
    return PROJECTION_ADAPTER.validate_python(raw)


def build_summary_metrics(projection: CashflowProjection) -> SnapshotSummaryMetrics:
    """Derive list metrics from a projection."""
    return SnapshotSummaryMetrics(
        starting_balance=projection.starting_balance,
        end_balance_optimistic=projection.optimistic.end_balance,
        danger_day_count=projection.optimistic.danger_day_count,
    )


def create_snapshot(
    name: str,
    inputs: SnapshotInputState,
    projection: CashflowProjection,
    *,
    group_id: str,
    created_at: datetime,
    snapshot_id: str | None = None,
) -> ProjectionSnapshot:
    """Freeze a projection and its inputs under the current schema version.

    The snapshot holds its own deep copies, so later edits to the caller's
    inputs or projection lists do not reach it.

    Raises:
        CashflowValidationError: If the name is empty or too long.
    """
    cleaned = name.strip()
    if not cleaned or len(cleaned) > SNAPSHOT_NAME_MAX_LENGTH:
        raise CashflowValidationError(
            f"Snapshot name must have 1 to {SNAPSHOT_NAME_MAX_LENGTH} characters",
            details={"name": name},
        )
    frozen_projection = copy.deepcopy(projection)
    return ProjectionSnapshot(
        id=snapshot_id or str(uuid.uuid4()),
        group_id=group_id,
        name=cleaned,
        schema_version=CURRENT_SCHEMA_VERSION,
        inputs=copy.deepcopy(inputs),
        projection=frozen_projection,
        summary_metrics=build_summary_metrics(frozen_projection),
        created_at=created_at,
    )


def serialize_snapshot(snapshot: ProjectionSnapshot) -> dict[str, Any]:
    """Return the persisted document of a snapshot."""
    return {
        "id": snapshot.id,
        "groupId": snapshot.group_id,
        "name": snapshot.name,
        "schemaVersion": snapshot.schema_version,
        "data": {
            "inputs": serialize_inputs(snapshot.inputs),
            "projection": dump_document(PROJECTION_ADAPTER, snapshot.projection),
            "summaryMetrics": dump_document(
                SUMMARY_METRICS_ADAPTER, snapshot.summary_metrics
            ),
        },
        "createdAt": snapshot.created_at.isoformat(),
    }


def dumps_snapshot(snapshot: ProjectionSnapshot) -> str:
    """Serialize a snapshot to JSON text."""
    return json.dumps(serialize_snapshot(snapshot))


def _as_mapping(raw: Mapping[str, Any] | str | bytes) -> Mapping[str, Any]:
    if isinstance(raw, (str, bytes)):
        try:
            raw = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise SnapshotFormatError(f"Snapshot is not valid JSON: {exc}") from exc
    if not isinstance(raw, Mapping):
        raise SnapshotFormatError("Snapshot document must be an object")
    return raw


def load_snapshot(
    raw: Mapping[str, Any] | str | bytes,
    *,
    logger: Logger,
) -> ProjectionSnapshot:
    """Re-hydrate a persisted snapshot document.

    Args:
        raw: Persisted document or its JSON text.
        logger: Logger used for compatibility warnings.

    Returns:
        ProjectionSnapshot: Typed snapshot with every date restored.

    Raises:
        SnapshotFormatError: If the document has no readable projection.
    """
    document = _as_mapping(raw)
    data = document.get("data")
    if isinstance(data, str):
        data = _as_mapping(data)
    if not isinstance(data, Mapping) or "projection" not in data:
        raise SnapshotFormatError("Snapshot document has no projection data")

    version = int(document.get("schemaVersion", CURRENT_SCHEMA_VERSION))
    warning = check_schema_compatibility(version)
    if warning:
        logger.warning(warning)
        data = migrate_snapshot_data(dict(data), version)

    try:
        projection = parse_projection(data["projection"])
        inputs = parse_inputs(data.get("inputs") or {}, logger=logger)
        metrics = data.get("summaryMetrics")
        summary_metrics = (
            SUMMARY_METRICS_ADAPTER.validate_python(metrics)
            if metrics
            else build_summary_metrics(projection)
        )
        created_at = document.get("createdAt")
        created_at = (
            _CREATED_AT_ADAPTER.validate_python(created_at)
            if created_at
            else datetime.min
        )
    except ValidationError as exc:
        raise SnapshotFormatError(
            f"Snapshot is unreadable: {describe_validation_error(exc)}"
        ) from exc

    return ProjectionSnapshot(
        id=str(document.get("id", "")),
        group_id=str(document.get("groupId", "")),
        name=document.get("name", ""),
        schema_version=version,
        inputs=inputs,
        projection=projection,
        summary_metrics=summary_metrics,
        created_at=created_at,
    )


def load_list_item(raw: Mapping[str, Any]) -> SnapshotListItem:
    """Decode a list row holding only summary metrics.

    Raises:
        pydantic.ValidationError: If the row misses a field.
    """
    return LIST_ITEM_ADAPTER.validate_python(raw)


__all__ = [
    "serialize_inputs",
    "is_schema_version_compatible",
    "check_schema_compatibility",
    "migrate_snapshot_data",
    "parse_inputs",
    "parse_projection",
    "build_summary_metrics",
    "create_snapshot",
    "serialize_snapshot",
    "dumps_snapshot",
    "load_snapshot",
    "load_list_item",
]
