"""In-memory implementation of the :class:`~housetab.store.base.Store` protocol.

Records live in per-kind dictionaries keyed by id.  The store enforces the
same lifecycle rules a database-backed store would:

- a record cannot be soft-deleted while live children still reference it;
- a record cannot be restored (or updated back to life) while a parent it
  references is deleted or missing;
- soft-deleting a deleted record, or restoring a live one, is reported as
  "not found".

Usage
-----
::

    from housetab.store import MemoryStore

    store = MemoryStore()
    type_id = store.add_lookup(LookupKind.PROJECT_TYPE, "Remodel")
    project_id = store.create(Project(id=0, title="Kitchen", project_type_id=type_id))
    store.soft_delete(EntityKind.PROJECT, project_id)
"""
from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import replace
from datetime import datetime, timezone

from housetab.entities.models import (
    EntityKind,
    LookupKind,
    LookupValue,
    Record,
)
from housetab.store.errors import GuardViolationError, RecordNotFoundError

logger = logging.getLogger(__name__)

# Foreign keys per child kind: (field name, parent kind).  Order matters for
# the order in which guard violations are reported.
_PARENTS: dict[EntityKind, tuple[tuple[str, EntityKind], ...]] = {
    EntityKind.QUOTE: (("project_id", EntityKind.PROJECT), ("vendor_id", EntityKind.VENDOR)),
    EntityKind.MAINTENANCE: (("appliance_id", EntityKind.APPLIANCE),),
    EntityKind.INCIDENT: (
        ("appliance_id", EntityKind.APPLIANCE),
        ("vendor_id", EntityKind.VENDOR),
    ),
}

_LOOKUP_FIELDS: dict[EntityKind, tuple[str, LookupKind, str]] = {
    EntityKind.PROJECT: ("project_type_id", LookupKind.PROJECT_TYPE, "project type"),
    EntityKind.MAINTENANCE: ("category_id", LookupKind.MAINTENANCE_CATEGORY, "category"),
}


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class MemoryStore:
    """Dictionary-backed record store.

    Parameters
    ----------
    clock:
        Zero-argument callable returning the timestamp written into
        ``deleted_at``.  Defaults to the current UTC time.
    """

    def __init__(self, clock: Callable[[], datetime] = _utc_now) -> None:
        self._clock = clock
        self._records: dict[EntityKind, dict[int, Record]] = {kind: {} for kind in EntityKind}
        self._next_ids: dict[EntityKind, int] = {kind: 1 for kind in EntityKind}
        self._lookups: dict[LookupKind, dict[int, LookupValue]] = {kind: {} for kind in LookupKind}

    def __repr__(self) -> str:
        counts = ", ".join(f"{kind.value}={len(rows)}" for kind, rows in self._records.items())
        return f"MemoryStore({counts})"

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def add_lookup(self, kind: LookupKind, name: str) -> int:
        """Add a lookup-table row and return its id."""
        table = self._lookups[kind]
        new_id = max(table, default=0) + 1
        table[new_id] = LookupValue(id=new_id, name=name)
        return new_id

    def lookup(self, kind: LookupKind) -> list[LookupValue]:
        return sorted(self._lookups[kind].values(), key=lambda value: value.name)

    def lookup_name(self, kind: LookupKind, lookup_id: int) -> str:
        """Return the name of a lookup row, or ``""`` if it does not exist."""
        value = self._lookups[kind].get(lookup_id)
        return value.name if value is not None else ""

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def list(self, kind: EntityKind, include_deleted: bool = False) -> list[Record]:
        table = self._records[kind]
        return [
            table[record_id]
            for record_id in sorted(table)
            if include_deleted or table[record_id].deleted_at is None
        ]

    def get(self, kind: EntityKind, record_id: int) -> Record:
        try:
            return self._records[kind][record_id]
        except KeyError:
            raise RecordNotFoundError(f"{kind.label} {record_id} not found") from None

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def create(self, record: Record) -> int:
        kind = record.kind
        self._check_lookups(record)
        if record.deleted_at is None:
            self._require_parents_alive(record)
        new_id = self._next_ids[kind]
        self._next_ids[kind] = new_id + 1
        self._records[kind][new_id] = replace(record, id=new_id)
        logger.debug("Created %s %d", kind.label, new_id)
        return new_id

    def update(self, record: Record) -> None:
        kind = record.kind
        current = self._records[kind].get(record.id)
        if current is None:
            raise RecordNotFoundError(f"{kind.label} {record.id} not found")
        self._check_lookups(record)
        if record.deleted_at is None:
            self._require_parents_alive(record)
        elif current.deleted_at is None:
            self._ensure_can_delete(kind, record.id)
        self._records[kind][record.id] = record
        logger.debug("Updated %s %d", kind.label, record.id)

    def soft_delete(self, kind: EntityKind, record_id: int) -> None:
        current = self._records[kind].get(record_id)
        if current is None or current.deleted_at is not None:
            raise RecordNotFoundError(f"{kind.label} {record_id} not found or already deleted")
        self._ensure_can_delete(kind, record_id)
        self._records[kind][record_id] = replace(current, deleted_at=self._clock())
        logger.debug("Soft-deleted %s %d", kind.label, record_id)

    def restore(self, kind: EntityKind, record_id: int) -> None:
        current = self._records[kind].get(record_id)
        if current is None or current.deleted_at is None:
            raise RecordNotFoundError(f"{kind.label} {record_id} is not deleted or does not exist")
        self._require_parents_alive(current)
        self._records[kind][record_id] = replace(current, deleted_at=None)
        logger.debug("Restored %s %d", kind.label, record_id)

    # ------------------------------------------------------------------
    # Guards
    # ------------------------------------------------------------------

    def _ensure_can_delete(self, kind: EntityKind, record_id: int) -> None:
        for child_kind, parents in _PARENTS.items():
            for field_name, parent_kind in parents:
                if parent_kind is not kind:
                    continue
                count = sum(
                    1
                    for child in self._records[child_kind].values()
                    if child.deleted_at is None and getattr(child, field_name) == record_id
                )
                if count:
                    raise GuardViolationError(
                        f"{kind.label} {record_id} has {count} active "
                        f"{child_kind.label}(s); delete them first"
                    )

    def _require_parents_alive(self, record: Record) -> None:
        for field_name, parent_kind in _PARENTS.get(record.kind, ()):
            parent_id = getattr(record, field_name)
            if parent_id is None:
                continue
            parent = self._records[parent_kind].get(parent_id)
            if parent is None:
                raise GuardViolationError(f"{parent_kind.label} no longer exists")
            if parent.deleted_at is not None:
                raise GuardViolationError(f"{parent_kind.label} is deleted; restore it first")

    def _check_lookups(self, record: Record) -> None:
        spec = _LOOKUP_FIELDS.get(record.kind)
        if spec is None:
            return
        field_name, lookup_kind, label = spec
        lookup_id = getattr(record, field_name)
        if lookup_id not in self._lookups[lookup_kind]:
            raise GuardViolationError(f"{label} {lookup_id} does not exist")
