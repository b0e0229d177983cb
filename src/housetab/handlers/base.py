"""Abstract base class for entity handlers.

One handler exists per entity type.  The view never branches on the
entity type itself: it resolves a handler for the active tab's
:class:`FormKind` and calls the operations below.  Subclasses describe
their entity declaratively (columns, cells, form values) and inherit the
store round-trips, error translation and undo snapshots from
:class:`EntityHandler`.

Usage
-----
::

    from housetab.handlers import FormKind, handler_for

    handler = handler_for(FormKind.PROJECT, store)
    rows, meta = handler.load(include_deleted=False)
    entry, found = handler.snapshot(meta[0].id)
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterator, Mapping
from contextlib import contextmanager
from dataclasses import dataclass, replace
from enum import Enum, auto
from typing import TYPE_CHECKING, Any, ClassVar

from rich.text import Text

from housetab.columns.spec import ColumnModel, ColumnSpec
from housetab.entities.models import EntityKind, Record, TabKind
from housetab.handlers.forms import FormField, FormState, FormValueError
from housetab.render.cells import Row, styled_row
from housetab.store.base import Store
from housetab.store.errors import (
    GuardViolationError,
    RecordNotFoundError,
    StoreError,
    StoreIOError,
)

if TYPE_CHECKING:
    from housetab.app.session import Session

logger = logging.getLogger(__name__)


class FormKind(Enum):
    """Closed set of entity types that own a tab and a form."""

    PROJECT = "project"
    QUOTE = "quote"
    MAINTENANCE = "maintenance"
    APPLIANCE = "appliance"
    VENDOR = "vendor"
    INCIDENT = "incident"


class ErrorKind(Enum):
    """Coarse classification of a handler failure."""

    VALIDATION = auto()
    NOT_FOUND = auto()
    IO = auto()


class HandlerError(Exception):
    """A handler operation failed.

    Parameters
    ----------
    kind:
        Failure classification.
    message:
        Human-readable reason, e.g. ``"project is deleted; restore it first"``.
    action:
        The user action that failed (``"delete"``, ``"undo"``, ...).
    """

    def __init__(self, kind: ErrorKind, message: str, action: str = "") -> None:
        self.kind = kind
        self.message = message
        self.action = action
        super().__init__(f"{action}: {message}" if action else message)

    @classmethod
    def from_store_error(cls, exc: StoreError, action: str) -> HandlerError:
        """Classify a store failure."""
        if isinstance(exc, GuardViolationError):
            kind = ErrorKind.VALIDATION
        elif isinstance(exc, RecordNotFoundError):
            kind = ErrorKind.NOT_FOUND
        else:
            kind = ErrorKind.IO
        return cls(kind, str(exc), action)


@contextmanager
def translate_store_errors(action: str) -> Iterator[None]:
    """Re-raise store and OS failures inside the block as :class:`HandlerError`."""
    try:
        yield
    except StoreError as exc:
        raise HandlerError.from_store_error(exc, action) from exc
    except OSError as exc:
        raise HandlerError.from_store_error(StoreIOError(str(exc)), action) from exc


@dataclass(frozen=True, slots=True)
class RowMeta:
    """Identity of a loaded row."""

    id: int
    deleted: bool


@dataclass(frozen=True)
class UndoEntry:
    """Snapshot of an entity taken before a destructive mutation.

    Parameters
    ----------
    description:
        Label shown to the user, e.g. ``"project 'Kitchen remodel'"``.
    entity_kind:
        Entity type the snapshot belongs to.
    entity_id:
        Id of the snapshotted record.
    restore:
        Writes the captured record back to the store.  Raises
        :class:`HandlerError` when a guard blocks it.
    """

    description: str
    entity_kind: FormKind
    entity_id: int
    restore: Callable[[], None]


def assemble(record_type: type, base: Record | None, fields: Mapping[str, Any]) -> Record:
    """Build a new record of ``record_type`` or overlay ``fields`` on ``base``."""
    if base is None:
        return record_type(id=0, **fields)
    return replace(base, **fields)


# A column paired with the form field it edits (``None`` for read-only).
ColumnDef = tuple[ColumnSpec, str | None]


class EntityHandler(ABC):
    """Per-entity-type behaviour behind a tab.

    Subclasses set the class attributes and implement :meth:`cells`,
    :meth:`describe`, :meth:`to_values` and :meth:`build`.

    Parameters
    ----------
    store:
        Persistence collaborator.
    """

    form_kind: ClassVar[FormKind]
    entity_kind: ClassVar[EntityKind]
    tab_kind: ClassVar[TabKind]
    tab_name: ClassVar[str]
    column_defs: ClassVar[tuple[ColumnDef, ...]]
    fields: ClassVar[tuple[FormField, ...]]

    def __init__(self, store: Store) -> None:
        self._store = store

    def __repr__(self) -> str:
        return f"{type(self).__name__}(form_kind={self.form_kind.value!r})"

    @property
    def store(self) -> Store:
        return self._store

    @property
    def label(self) -> str:
        return self.entity_kind.label

    # ------------------------------------------------------------------
    # Declarative hooks
    # ------------------------------------------------------------------

    def columns(self) -> list[ColumnSpec]:
        """Fresh column specs for this entity's tab, all visible."""
        return [spec for spec, _ in self.column_defs]

    def column_field(self, column: int) -> str | None:
        """Form field edited by the column at full index ``column``."""
        if not 0 <= column < len(self.column_defs):
            return None
        return self.column_defs[column][1]

    def row_context(self) -> Mapping[str, Any]:
        """Lookup data shared by every row of one load (related names, ...)."""
        return {}

    @abstractmethod
    def cells(self, record: Record, context: Mapping[str, Any]) -> list[Text]:
        """One cell per column, in column order."""

    @abstractmethod
    def describe(self, record: Record) -> str:
        """Undo label for ``record``."""

    @abstractmethod
    def to_values(self, record: Record) -> dict[str, str]:
        """Form values for editing ``record``."""

    @abstractmethod
    def build(self, values: Mapping[str, str], base: Record | None) -> Record:
        """Parse form values into a record.

        ``base`` is the stored record when editing; fields not present on
        the form (``deleted_at`` among them) are carried over from it.

        Raises
        ------
        FormValueError
            If a value does not parse.
        """

    def default_values(self) -> dict[str, str]:
        """Initial values of an add form."""
        return {}

    def sync_fixed_values(self, session: Session, columns: ColumnModel) -> None:
        """Refresh lookup-sourced column labels so widths stay stable."""

    # ------------------------------------------------------------------
    # Store round-trips
    # ------------------------------------------------------------------

    def load(self, include_deleted: bool = False) -> tuple[list[Row], list[RowMeta]]:
        """Load rows, primary-key ascending, with their metadata.

        Raises
        ------
        HandlerError
            If the store cannot be read.
        """
        with translate_store_errors("load"):
            records = self._store.list(self.entity_kind, include_deleted)
            context = self.row_context()
        rows: list[Row] = []
        meta: list[RowMeta] = []
        for record in records:
            deleted = record.deleted_at is not None
            rows.append(styled_row(self.cells(record, context), deleted))
            meta.append(RowMeta(id=record.id, deleted=deleted))
        logger.debug("Loaded %d %s row(s)", len(rows), self.label)
        return rows, meta

    def delete(self, record_id: int) -> None:
        with translate_store_errors("delete"):
            self._store.soft_delete(self.entity_kind, record_id)

    def restore(self, record_id: int) -> None:
        with translate_store_errors("restore"):
            self._store.restore(self.entity_kind, record_id)

    def snapshot(self, record_id: int) -> tuple[UndoEntry | None, bool]:
        """Capture the current state of a record for undo.

        Returns
        -------
        tuple[UndoEntry | None, bool]
            The entry and ``True``, or ``(None, False)`` when the record no
            longer resolves.
        """
        try:
            record = self._store.get(self.entity_kind, record_id)
        except RecordNotFoundError:
            logger.debug("Snapshot skipped: %s %d not found", self.label, record_id)
            return None, False
        except StoreError as exc:
            raise HandlerError.from_store_error(exc, "snapshot") from exc

        store = self._store

        def restore() -> None:
            with translate_store_errors("undo"):
                store.update(record)

        entry = UndoEntry(
            description=self.describe(record),
            entity_kind=self.form_kind,
            entity_id=record.id,
            restore=restore,
        )
        return entry, True

    def _get(self, record_id: int, action: str) -> Record:
        with translate_store_errors(action):
            return self._store.get(self.entity_kind, record_id)

    # ------------------------------------------------------------------
    # Forms
    # ------------------------------------------------------------------

    def start_add_form(self, session: Session) -> FormState:
        form = FormState(kind=self.form_kind, values=self.default_values())
        session.open_form(form)
        return form

    def start_edit_form(self, session: Session, record_id: int) -> FormState:
        record = self._get(record_id, "edit")
        form = FormState(kind=self.form_kind, edit_id=record.id, values=self.to_values(record))
        session.open_form(form)
        return form

    def inline_edit(self, session: Session, record_id: int, column: int) -> FormState:
        """Open an edit form focused on the field behind ``column``.

        Raises
        ------
        HandlerError
            With kind ``VALIDATION`` if the column is read-only.
        """
        field_name = self.column_field(column)
        if field_name is None:
            raise HandlerError(ErrorKind.VALIDATION, "column is read-only", "edit")
        form = self.start_edit_form(session, record_id)
        form.focus = field_name
        return form

    def submit_form(self, session: Session) -> int:
        """Save the session's open form and return the record id.

        Edits go through :meth:`Session.mutate` so that an undo entry is
        pushed before the record is overwritten.
        """
        form = session.form
        if form is None or form.kind is not self.form_kind:
            raise HandlerError(ErrorKind.VALIDATION, f"no open {self.label} form", "save")
        action = "edit" if form.is_edit else "add"
        base = self._get(form.edit_id, action) if form.edit_id is not None else None
        try:
            record = self.build(form.values, base)
        except FormValueError as exc:
            raise HandlerError(ErrorKind.VALIDATION, str(exc), action) from exc

        if base is None:
            with translate_store_errors(action):
                record_id = self._store.create(record)
        else:
            record = replace(record, id=base.id)
            session.mutate(self, base.id, action, lambda: self._store.update(record))
            record_id = base.id
        session.close_form()
        logger.debug("Saved %s %d", self.label, record_id)
        return record_id
