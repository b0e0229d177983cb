"""Column specs and the per-tab column model.

A tab's columns are a static, ordered list of :class:`ColumnSpec` values
created when the tab is built.  The only runtime mutation is toggling
visibility: hiding a column stamps it with the next *hide order*, showing
it resets the order to ``0``.
"""
from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field, replace

from rich.cells import cell_len

from housetab.entities.models import TabKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class LinkKind:
    """Relation from a column's value to a row in another tab.

    Parameters
    ----------
    target:
        The tab holding the referenced records.
    relation:
        Cardinality descriptor, e.g. ``"m:1"`` for a foreign key.
    """

    target: TabKind
    relation: str = "m:1"


@dataclass(frozen=True, slots=True)
class ColumnSpec:
    """Static description of one table column.

    Parameters
    ----------
    title:
        Header label.
    base_width:
        Minimum rendered width in terminal cells; must be at least 1.
    hide_order:
        ``0`` for a visible column; a positive value for a hidden one,
        higher meaning hidden more recently.
    link:
        Optional relation descriptor for foreign-key columns.
    fixed_values:
        Known labels for lookup-sourced columns, used so the column width
        does not change as rows come and go.
    """

    title: str
    base_width: int
    hide_order: int = 0
    link: LinkKind | None = None
    fixed_values: tuple[str, ...] = field(default=())

    @property
    def hidden(self) -> bool:
        return self.hide_order > 0

    @property
    def natural_width(self) -> int:
        """Width wide enough for the base width, title and fixed values."""
        widths = [self.base_width, cell_len(self.title)]
        widths.extend(cell_len(value) for value in self.fixed_values)
        return max(widths)


class ColumnModel:
    """Mutable column list for one tab.

    Parameters
    ----------
    specs:
        Initial column specs in display order.

    Raises
    ------
    LayoutError
        If ``specs`` is malformed (see
        :func:`housetab.layout.engine.validate_specs`).
    """

    def __init__(self, specs: Iterable[ColumnSpec]) -> None:
        from housetab.layout.engine import validate_specs

        self._specs: list[ColumnSpec] = list(specs)
        validate_specs(self._specs)

    def __len__(self) -> int:
        return len(self._specs)

    def __getitem__(self, index: int) -> ColumnSpec:
        return self._specs[self._check_index(index)]

    def __repr__(self) -> str:
        titles = [spec.title + ("*" if spec.hidden else "") for spec in self._specs]
        return f"ColumnModel({titles})"

    @property
    def specs(self) -> tuple[ColumnSpec, ...]:
        """Snapshot of the current specs."""
        return tuple(self._specs)

    def index_of(self, title: str) -> int:
        """Return the full index of the column titled ``title``.

        Matching is case-insensitive.

        Raises
        ------
        KeyError
            If no column has that title.
        """
        wanted = title.casefold()
        for index, spec in enumerate(self._specs):
            if spec.title.casefold() == wanted:
                return index
        raise KeyError(title)

    def natural_width(self, index: int) -> int:
        return self._specs[index].natural_width

    def visibility(self) -> tuple[int, ...]:
        """Full indices of the visible columns, in display order."""
        return tuple(i for i, spec in enumerate(self._specs) if not spec.hidden)

    def hidden_titles(self) -> list[str]:
        """Titles of all hidden columns, in display order."""
        return [spec.title for spec in self._specs if spec.hidden]

    # ------------------------------------------------------------------
    # Toggles
    # ------------------------------------------------------------------

    def hide(self, index: int) -> bool:
        """Hide the column at ``index``.

        Returns ``False`` without changing anything if the column is
        already hidden or is the last visible column.

        Raises
        ------
        IndexError
            If ``index`` is not a full index of this model.
        """
        spec = self._specs[self._check_index(index)]
        if spec.hidden:
            return False
        if len(self.visibility()) <= 1:
            return False
        order = max((s.hide_order for s in self._specs), default=0) + 1
        self._specs[index] = replace(spec, hide_order=order)
        logger.debug("Hid column %r (order %d)", spec.title, order)
        return True

    def show(self, index: int) -> bool:
        """Show the column at ``index``; return ``False`` if it was visible."""
        spec = self._specs[self._check_index(index)]
        if not spec.hidden:
            return False
        self._specs[index] = replace(spec, hide_order=0)
        logger.debug("Showed column %r", spec.title)
        return True

    def show_all(self) -> int:
        """Show every column and return how many were hidden."""
        count = 0
        for index in range(len(self._specs)):
            if self.show(index):
                count += 1
        return count

    def _check_index(self, index: int) -> int:
        if not 0 <= index < len(self._specs):
            raise IndexError(f"column index {index} out of range 0..{len(self._specs) - 1}")
        return index

    def set_fixed_values(self, title: str, values: Sequence[str]) -> None:
        """Replace the fixed values of the column titled ``title``.

        Unknown titles are ignored so handlers can sync columns that a
        given tab layout may not have.
        """
        try:
            index = self.index_of(title)
        except KeyError:
            return
        self._specs[index] = replace(self._specs[index], fixed_values=tuple(values))
