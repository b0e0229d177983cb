"""Tab state: one per entity handler."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from housetab.columns.spec import ColumnModel
from housetab.entities.models import TabKind
from housetab.handlers.base import EntityHandler, RowMeta
from housetab.render.cells import Row, cell_sort_value


class SortDirection(Enum):
    ASC = "asc"
    DESC = "desc"

    @property
    def mark(self) -> str:
        return " ↑" if self is SortDirection.ASC else " ↓"


@dataclass(frozen=True, slots=True)
class SortSpec:
    """Sort the rows of a tab by one column, given by full index."""

    column: int
    direction: SortDirection = SortDirection.ASC


@dataclass
class Tab:
    """A table tab.

    Parameters
    ----------
    kind:
        Which tab this is.
    name:
        Display name, e.g. ``"Projects"``.
    handler:
        Entity handler backing the tab.
    columns:
        Mutable column model; only visibility changes at runtime.
    rows, meta:
        Rows from the last load, parallel to each other.
    show_deleted:
        Whether soft-deleted rows are loaded.
    sort:
        Active row ordering, or ``None`` for id order.
    """

    kind: TabKind
    name: str
    handler: EntityHandler
    columns: ColumnModel
    rows: list[Row] = field(default_factory=list)
    meta: list[RowMeta] = field(default_factory=list)
    show_deleted: bool = False
    sort: SortSpec | None = None

    def __repr__(self) -> str:
        return f"Tab({self.name!r}, rows={len(self.rows)}, columns={self.columns!r})"

    def row_index(self, record_id: int) -> int | None:
        """Position of the row holding ``record_id``, or ``None``."""
        for index, meta in enumerate(self.meta):
            if meta.id == record_id:
                return index
        return None

    def is_deleted(self, record_id: int) -> bool:
        index = self.row_index(record_id)
        return index is not None and self.meta[index].deleted

    def apply_sort(self) -> None:
        """Reorder ``rows`` and ``meta`` together by the active sort.

        Rows with an empty cell in the sort column always go last.  Ties,
        and every row when no sort is active, fall back to ascending id.
        """
        order = sorted(range(len(self.meta)), key=lambda i: self.meta[i].id)
        if self.sort is not None:
            column = self.sort.column
            keyed = [(cell_sort_value(self.rows[i][column]), i) for i in order]
            present = [pair for pair in keyed if pair[0] is not None]
            descending = self.sort.direction is SortDirection.DESC
            present.sort(key=lambda pair: pair[0], reverse=descending)
            order = [i for _, i in present] + [i for key, i in keyed if key is None]
        self.rows = [self.rows[i] for i in order]
        self.meta = [self.meta[i] for i in order]


def build_tab(handler: EntityHandler, show_deleted: bool = False) -> Tab:
    """Create an empty tab with fresh, all-visible columns."""
    return Tab(
        kind=handler.tab_kind,
        name=handler.tab_name,
        handler=handler,
        columns=ColumnModel(handler.columns()),
        show_deleted=show_deleted,
    )
