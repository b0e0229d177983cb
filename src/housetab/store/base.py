"""The ``Store`` protocol consumed by entity handlers.

Any object providing these methods can back the table view.  The
protocol is :func:`runtime-checkable <typing.runtime_checkable>` so
``isinstance`` tests work.

Implementations
---------------
- :class:`~housetab.store.memory.MemoryStore`: in-process store with
  soft-delete and parent/child guards, used by the CLI and the tests.
- Database-backed stores must be injected by callers; this package ships
  no database driver.
"""
from __future__ import annotations

from typing import Protocol, runtime_checkable

from housetab.entities.models import EntityKind, LookupKind, LookupValue, Record


@runtime_checkable
class Store(Protocol):
    """Persistence collaborator for entity records.

    All methods raise subclasses of
    :class:`~housetab.store.errors.StoreError` on failure.
    """

    def list(self, kind: EntityKind, include_deleted: bool = False) -> list[Record]:
        """Return records of ``kind`` in primary-key ascending order."""
        ...  # pragma: no cover

    def get(self, kind: EntityKind, record_id: int) -> Record:
        """Return one record, deleted or not.

        Raises
        ------
        RecordNotFoundError
            If no record of ``kind`` has ``record_id``.
        """
        ...  # pragma: no cover

    def create(self, record: Record) -> int:
        """Insert ``record`` under a fresh id and return that id."""
        ...  # pragma: no cover

    def update(self, record: Record) -> None:
        """Replace the stored record with the same kind and id.

        Every field is written, ``deleted_at`` included, so an update can
        bring a soft-deleted record back to life.
        """
        ...  # pragma: no cover

    def soft_delete(self, kind: EntityKind, record_id: int) -> None:
        """Mark a live record deleted."""
        ...  # pragma: no cover

    def restore(self, kind: EntityKind, record_id: int) -> None:
        """Clear the deleted mark of a soft-deleted record."""
        ...  # pragma: no cover

    def lookup(self, kind: LookupKind) -> list[LookupValue]:
        """Return lookup-table rows ordered by name."""
        ...  # pragma: no cover
