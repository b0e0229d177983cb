"""The view session: tabs, undo history, the open form and a status line.

A :class:`Session` is the single owner of mutable UI state.  Every user
action is a method here; failures never propagate out of an action.
Instead they become an ``ERROR`` :class:`StatusMessage` naming the action
and the action returns ``False``.

Usage
-----
::

    from housetab.app import Session
    from housetab.store import demo_store

    session = Session(demo_store())
    projects = session.tab("projects")
    session.hide_column(projects, "Budget")
    for line in session.frame(projects, width=100):
        console.print(line)
"""
from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum, auto

from rich.text import Text

from housetab.app.tabs import SortDirection, SortSpec, Tab, build_tab
from housetab.entities.models import LookupKind, TabKind
from housetab.handlers import (
    EntityHandler,
    ErrorKind,
    FormState,
    HandlerError,
    UndoEntry,
    handler_for,
    registry,
    translate_store_errors,
)
from housetab.layout.engine import LayoutEngine, TableLayout
from housetab.render.frame import render_frame
from housetab.render.stacks import StackRenderer
from housetab.render.theme import DEFAULT_PALETTE
from housetab.store.base import Store
from housetab.undo.stack import (
    DEFAULT_UNDO_LIMIT,
    NothingToUndoError,
    UndoRestoreError,
    UndoStack,
)

logger = logging.getLogger(__name__)

KEEP_ONE_VISIBLE = "keep one column visible"
LADLE_SIDE_WIDTH = 2


class StatusKind(Enum):
    INFO = auto()
    ERROR = auto()


@dataclass(frozen=True, slots=True)
class StatusMessage:
    """One line of user feedback."""

    text: str
    kind: StatusKind = StatusKind.INFO

    @property
    def is_error(self) -> bool:
        return self.kind is StatusKind.ERROR


class Session:
    """Interactive state over a store.

    Parameters
    ----------
    store:
        Persistence collaborator shared by all handlers.
    undo_limit:
        Capacity of the undo stack.
    palette:
        Badge colours for collapsed stacks.
    show_deleted:
        Initial soft-deleted row visibility of every tab.
    engine:
        Layout engine; defaults to one with standard geometry.
    """

    def __init__(
        self,
        store: Store,
        undo_limit: int = DEFAULT_UNDO_LIMIT,
        palette: Sequence[str] = DEFAULT_PALETTE,
        show_deleted: bool = False,
        engine: LayoutEngine | None = None,
    ) -> None:
        self.store = store
        self.undo_stack = UndoStack(undo_limit)
        self.renderer = StackRenderer(palette)
        self.engine = engine or LayoutEngine()
        self.status: StatusMessage | None = None
        self._form: FormState | None = None
        self._lookups: dict[LookupKind, list[str]] = {}
        self.tabs: list[Tab] = [
            build_tab(handler_for(kind, store), show_deleted) for kind in registry().kinds()
        ]
        self.active = 0
        self.reload()

    def __repr__(self) -> str:
        return f"Session(tabs={[tab.name for tab in self.tabs]}, undo={len(self.undo_stack)})"

    # ------------------------------------------------------------------
    # Tabs
    # ------------------------------------------------------------------

    @property
    def active_tab(self) -> Tab:
        return self.tabs[self.active]

    def tab(self, key: TabKind | str) -> Tab:
        """Return the tab for a :class:`TabKind` or a case-insensitive name.

        Raises
        ------
        KeyError
            If no tab matches.
        """
        for tab in self.tabs:
            if key is tab.kind:
                return tab
            if isinstance(key, str) and key.casefold() in (tab.kind.value, tab.name.casefold()):
                return tab
        raise KeyError(key)

    def switch_tab(self, key: TabKind | str) -> Tab:
        tab = self.tab(key)
        self.active = self.tabs.index(tab)
        return tab

    def lookup_names(self, kind: LookupKind) -> list[str]:
        """Lookup labels as of the last reload."""
        return list(self._lookups.get(kind, ()))

    # ------------------------------------------------------------------
    # Status
    # ------------------------------------------------------------------

    def info(self, text: str) -> None:
        self.status = StatusMessage(text, StatusKind.INFO)
        logger.info("%s", text)

    def error(self, text: str) -> None:
        self.status = StatusMessage(text, StatusKind.ERROR)
        logger.warning("%s", text)

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def reload(self, tab: Tab | None = None) -> bool:
        """Reload one tab, or every tab when ``tab`` is ``None``."""
        try:
            with translate_store_errors("reload"):
                self._lookups = {
                    kind: [value.name for value in self.store.lookup(kind)] for kind in LookupKind
                }
            for target in [tab] if tab is not None else self.tabs:
                target.handler.sync_fixed_values(self, target.columns)
                target.rows, target.meta = target.handler.load(target.show_deleted)
                target.apply_sort()
        except HandlerError as exc:
            self.error(str(exc))
            return False
        return True

    # ------------------------------------------------------------------
    # Columns
    # ------------------------------------------------------------------

    def hide_column(self, tab: Tab, column: int | str) -> bool:
        """Hide a column by full index or title.

        Hiding the last visible column is refused with an error status.
        """
        try:
            index = column if isinstance(column, int) else tab.columns.index_of(column)
            spec = tab.columns[index]
        except (KeyError, IndexError):
            self.error(f"hide: no column {column!r}")
            return False
        if spec.hidden:
            self.info(f"{spec.title} is already hidden")
            return False
        if not tab.columns.hide(index):
            self.error(KEEP_ONE_VISIBLE)
            return False
        self.info(f"hid {spec.title}")
        return True

    def sort(self, tab: Tab, column: int | str) -> bool:
        """Cycle the sort on a column: ascending, descending, then off.

        Sorting a different column starts again at ascending.
        """
        try:
            index = column if isinstance(column, int) else tab.columns.index_of(column)
            title = tab.columns[index].title
        except (KeyError, IndexError):
            self.error(f"sort: no column {column!r}")
            return False
        current = tab.sort
        if current is None or current.column != index:
            tab.sort = SortSpec(index)
        elif current.direction is SortDirection.ASC:
            tab.sort = SortSpec(index, SortDirection.DESC)
        else:
            tab.sort = None
        tab.apply_sort()
        if tab.sort is None:
            self.info("sort cleared")
        else:
            self.info(f"sorted by {title} ({tab.sort.direction.value})")
        return True

    def show_all_columns(self, tab: Tab) -> int:
        count = tab.columns.show_all()
        self.info(f"showed {count} column(s)" if count else "all columns visible")
        return count

    def toggle_deleted(self, tab: Tab) -> bool:
        tab.show_deleted = not tab.show_deleted
        self.info("showing deleted rows" if tab.show_deleted else "hiding deleted rows")
        return self.reload(tab)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def mutate(
        self,
        handler: EntityHandler,
        record_id: int,
        action: str,
        operation: Callable[[], None],
    ) -> UndoEntry | None:
        """Snapshot a record, push the snapshot, then run ``operation``.

        If ``operation`` fails the pushed entry is discarded again and the
        :class:`HandlerError` propagates.
        """
        entry, found = handler.snapshot(record_id)
        if found:
            self.undo_stack.push(entry)
        try:
            with translate_store_errors(action):
                operation()
        except HandlerError:
            if entry is not None:
                self.undo_stack.discard(entry)
            raise
        return entry

    def delete(self, tab: Tab, record_id: int) -> bool:
        return self._destructive(tab, record_id, "delete", tab.handler.delete, "deleted")

    def restore(self, tab: Tab, record_id: int) -> bool:
        return self._destructive(tab, record_id, "restore", tab.handler.restore, "restored")

    def _destructive(
        self,
        tab: Tab,
        record_id: int,
        action: str,
        operation: Callable[[int], None],
        done: str,
    ) -> bool:
        try:
            entry = self.mutate(tab.handler, record_id, action, lambda: operation(record_id))
        except HandlerError as exc:
            self.error(str(exc))
            return False
        subject = entry.description if entry is not None else f"{tab.handler.label} {record_id}"
        self.info(f"{done} {subject}")
        return self.reload()

    def undo(self) -> bool:
        """Undo the newest entry and reload every tab."""
        try:
            entry = self.undo_stack.undo()
        except NothingToUndoError:
            self.info("nothing to undo")
            return False
        except UndoRestoreError as exc:
            self.error(f"undo: {exc.reason}")
            return False
        self.info(f"undo: restored {entry.description}")
        return self.reload()

    # ------------------------------------------------------------------
    # Forms
    # ------------------------------------------------------------------

    @property
    def form(self) -> FormState | None:
        return self._form

    def open_form(self, form: FormState) -> None:
        self._form = form

    def close_form(self) -> None:
        self._form = None

    def start_add(self, tab: Tab) -> FormState | None:
        return self._open(lambda: tab.handler.start_add_form(self))

    def start_edit(self, tab: Tab, record_id: int) -> FormState | None:
        return self._open(lambda: tab.handler.start_edit_form(self, record_id))

    def inline_edit(self, tab: Tab, record_id: int, column: int) -> FormState | None:
        return self._open(lambda: tab.handler.inline_edit(self, record_id, column))

    def _open(self, opener: Callable[[], FormState]) -> FormState | None:
        try:
            return opener()
        except HandlerError as exc:
            self.error(str(exc))
            return None

    def submit_form(self) -> int | None:
        """Save the open form; returns the record id or ``None`` on failure."""
        form = self._form
        if form is None:
            self.error("save: no open form")
            return None
        try:
            handler = self._handler_for_form(form)
            record_id = handler.submit_form(self)
        except HandlerError as exc:
            self.error(str(exc))
            return None
        self.info(f"saved {handler.label} {record_id}")
        self.reload()
        return record_id

    def _handler_for_form(self, form: FormState) -> EntityHandler:
        for tab in self.tabs:
            if tab.handler.form_kind is form.kind:
                return tab.handler
        raise HandlerError(ErrorKind.VALIDATION, f"no tab for {form.kind.value}", "save")

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def layout(self, tab: Tab, width: int | None = None) -> TableLayout:
        return self.engine.compute(tab.columns.specs, width)

    def frame(self, tab: Tab, width: int | None = None) -> list[Text]:
        """Render ``tab`` as printable lines at most ``width`` cells wide.

        Room for both ladle side borders is reserved out of ``width``.
        """
        target = None if width is None else max(width - 2 * LADLE_SIDE_WIDTH, 1)
        marks = {} if tab.sort is None else {tab.sort.column: tab.sort.direction.mark}
        return render_frame(self.layout(tab, target), tab.rows, self.renderer, marks)
