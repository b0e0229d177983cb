"""Column layout: visible/hidden partition and collapsed-stack geometry.

The ``LayoutEngine`` turns a tab's column specs into a :class:`TableLayout`:

1. Visible columns (``hide_order == 0``) keep their order; their full
   indices form the *visibility mapping* (``vis_to_full``).
2. Each visible column gets a rendered width.  When a target width is
   given and the row does not fit, the widest column is narrowed one cell
   at a time (rightmost first on ties) down to a small floor.
3. Every gap between adjacent visible columns gets a separator, marked
   ``COLLAPSED`` when hidden columns sit in that gap.
4. Each run of adjacent hidden columns becomes a :class:`CollapsedStack`:
   a leading run is anchored at offset 0, a trailing run at the right
   edge, and an interior run is centred under its gap's separator.
5. Stack widths and offsets are clamped to the row width, then stacks
   whose ranges overlap are merged.

The computation is pure: the same specs and target width always yield an
equal ``TableLayout``.

Usage
-----
::

    from housetab.layout import LayoutEngine

    layout = LayoutEngine().compute(column_model.specs, target_width=100)
    for stack in layout.stacks:
        print(stack.offset, [entry.title for entry in stack.entries])
"""
from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum, auto

from rich.cells import cell_len

from housetab.columns.spec import ColumnSpec
from housetab.layout.errors import LayoutError

logger = logging.getLogger(__name__)

DEFAULT_SEPARATOR_WIDTH = 3
STACK_PADDING = 2
MIN_COLUMN_WIDTH = 3


class SeparatorKind(Enum):
    """Separator drawn between two adjacent visible columns."""

    PLAIN = auto()
    COLLAPSED = auto()


@dataclass(frozen=True, slots=True)
class StackEntry:
    """One hidden column inside a collapsed stack."""

    title: str
    full_index: int
    hide_order: int


@dataclass(frozen=True, slots=True)
class CollapsedStack:
    """A run of hidden columns drawn as a vertical stack of badges.

    Parameters
    ----------
    entries:
        Hidden columns, top of the stack first (highest full index first).
    offset:
        Horizontal cell offset of the stack's left edge within the row.
    width:
        Badge width in cells, padding included.
    edge:
        ``True`` for stacks anchored at the row's leading or trailing edge.
    """

    entries: tuple[StackEntry, ...]
    offset: int
    width: int
    edge: bool = False

    @property
    def end(self) -> int:
        """Offset one past the stack's right edge."""
        return self.offset + self.width

    @property
    def titles(self) -> list[str]:
        return [entry.title for entry in self.entries]


@dataclass(frozen=True, slots=True)
class VisibleColumn:
    """A column that is drawn, with its rendered width."""

    full_index: int
    title: str
    width: int


@dataclass(frozen=True)
class TableLayout:
    """Result of :meth:`LayoutEngine.compute`.

    Parameters
    ----------
    columns:
        Visible columns in display order.
    separators:
        One separator per gap between adjacent visible columns.
    stacks:
        Collapsed stacks, ordered by offset, no two overlapping.
    total_width:
        Width of a data row: column widths plus separators.
    separator_width:
        Cell width of each separator.
    has_leading:
        Whether hidden columns precede the first visible column.
    has_trailing:
        Whether hidden columns follow the last visible column.
    hidden_count:
        Number of hidden columns.
    """

    columns: tuple[VisibleColumn, ...]
    separators: tuple[SeparatorKind, ...]
    stacks: tuple[CollapsedStack, ...]
    total_width: int
    separator_width: int
    has_leading: bool
    has_trailing: bool
    hidden_count: int

    @property
    def vis_to_full(self) -> tuple[int, ...]:
        """Full spec index of each visible column."""
        return tuple(column.full_index for column in self.columns)

    @property
    def widths(self) -> tuple[int, ...]:
        return tuple(column.width for column in self.columns)

    @property
    def is_empty(self) -> bool:
        """``True`` when every column is hidden."""
        return not self.columns


def validate_specs(specs: Sequence[ColumnSpec]) -> None:
    """Check the structural invariants of a column spec list.

    Raises
    ------
    LayoutError
        If a base width is below 1, a hide order is negative, or two
        hidden columns share the same hide order.
    """
    seen: dict[int, int] = {}
    for index, spec in enumerate(specs):
        if spec.base_width < 1:
            raise LayoutError(f"base width must be at least 1, got {spec.base_width}", index)
        if spec.hide_order < 0:
            raise LayoutError(f"hide order must not be negative, got {spec.hide_order}", index)
        if spec.hide_order > 0:
            if spec.hide_order in seen:
                raise LayoutError(
                    f"hide order {spec.hide_order} is already used by column "
                    f"{seen[spec.hide_order]}",
                    index,
                )
            seen[spec.hide_order] = index


class LayoutEngine:
    """Computes :class:`TableLayout` values from column specs.

    Parameters
    ----------
    separator_width:
        Cell width of the separator between two visible columns.
    stack_padding:
        Cells added to the widest label to get a stack's badge width.
    min_column_width:
        Floor applied when narrowing columns to fit a target width.
    """

    def __init__(
        self,
        separator_width: int = DEFAULT_SEPARATOR_WIDTH,
        stack_padding: int = STACK_PADDING,
        min_column_width: int = MIN_COLUMN_WIDTH,
    ) -> None:
        self._sep = separator_width
        self._padding = stack_padding
        self._min_width = min_column_width

    def compute(
        self,
        specs: Sequence[ColumnSpec],
        target_width: int | None = None,
    ) -> TableLayout:
        """Lay out ``specs`` within ``target_width`` cells.

        Parameters
        ----------
        specs:
            Full column list of the tab, hidden columns included.
        target_width:
            Width available for the row, or ``None`` to use natural
            widths unchanged.

        Returns
        -------
        TableLayout
            Geometry for the header, separators and collapsed stacks.

        Raises
        ------
        LayoutError
            If ``specs`` violates an invariant.
        """
        validate_specs(specs)
        vis_to_full = [i for i, spec in enumerate(specs) if not spec.hidden]
        hidden_count = len(specs) - len(vis_to_full)

        if not vis_to_full:
            return TableLayout(
                columns=(),
                separators=(),
                stacks=(),
                total_width=0,
                separator_width=self._sep,
                has_leading=False,
                has_trailing=False,
                hidden_count=hidden_count,
            )

        widths = self._fit_widths([specs[i] for i in vis_to_full], target_width)
        columns = tuple(
            VisibleColumn(full_index=full, title=specs[full].title, width=width)
            for full, width in zip(vis_to_full, widths)
        )
        separators = tuple(
            SeparatorKind.COLLAPSED if vis_to_full[i + 1] > vis_to_full[i] + 1 else SeparatorKind.PLAIN
            for i in range(len(vis_to_full) - 1)
        )
        total_width = sum(widths) + (len(widths) - 1) * self._sep

        stacks = self._build_stacks(specs, vis_to_full, widths)
        stacks = self._clamp(stacks, total_width)
        stacks = self._merge(stacks, total_width)

        return TableLayout(
            columns=columns,
            separators=separators,
            stacks=tuple(stacks),
            total_width=total_width,
            separator_width=self._sep,
            has_leading=vis_to_full[0] > 0,
            has_trailing=vis_to_full[-1] < len(specs) - 1,
            hidden_count=hidden_count,
        )

    # ------------------------------------------------------------------
    # Widths
    # ------------------------------------------------------------------

    def _fit_widths(self, visible: Sequence[ColumnSpec], target_width: int | None) -> list[int]:
        widths = [spec.natural_width for spec in visible]
        if target_width is None:
            return widths
        floors = [min(width, self._min_width) for width in widths]
        excess = sum(widths) + (len(widths) - 1) * self._sep - target_width
        while excess > 0:
            candidates = [i for i, width in enumerate(widths) if width > floors[i]]
            if not candidates:
                break
            widest = max(candidates, key=lambda i: (widths[i], i))
            widths[widest] -= 1
            excess -= 1
        return widths

    # ------------------------------------------------------------------
    # Stacks
    # ------------------------------------------------------------------

    def _build_stacks(
        self,
        specs: Sequence[ColumnSpec],
        vis_to_full: Sequence[int],
        widths: Sequence[int],
    ) -> list[CollapsedStack]:
        stacks: list[CollapsedStack] = []

        if vis_to_full[0] > 0:
            entries = _hidden_entries(specs, 0, vis_to_full[0])
            stacks.append(
                CollapsedStack(entries=entries, offset=0, width=self._stack_width(entries), edge=True)
            )

        offset = 0
        for i, width in enumerate(widths):
            if i > 0:
                lo, hi = vis_to_full[i - 1] + 1, vis_to_full[i]
                if hi > lo:
                    entries = _hidden_entries(specs, lo, hi)
                    stack_width = self._stack_width(entries)
                    gap_center = offset + self._sep // 2
                    stacks.append(
                        CollapsedStack(
                            entries=entries,
                            offset=max(0, gap_center - stack_width // 2),
                            width=stack_width,
                        )
                    )
                offset += self._sep
            offset += width

        last = vis_to_full[-1]
        if last < len(specs) - 1:
            entries = _hidden_entries(specs, last + 1, len(specs))
            stack_width = self._stack_width(entries)
            stacks.append(
                CollapsedStack(
                    entries=entries,
                    offset=max(0, offset - stack_width),
                    width=stack_width,
                    edge=True,
                )
            )
        return stacks

    def _stack_width(self, entries: Sequence[StackEntry]) -> int:
        return max(cell_len(entry.title) for entry in entries) + self._padding

    @staticmethod
    def _clamp(stacks: list[CollapsedStack], total_width: int) -> list[CollapsedStack]:
        clamped: list[CollapsedStack] = []
        for stack in stacks:
            width = min(stack.width, total_width)
            offset = max(0, min(stack.offset, total_width - width))
            clamped.append(CollapsedStack(stack.entries, offset, width, stack.edge))
        return clamped

    @staticmethod
    def _merge(stacks: list[CollapsedStack], total_width: int) -> list[CollapsedStack]:
        merged: list[CollapsedStack] = []
        for stack in sorted(stacks, key=lambda s: s.offset):
            if merged and stack.offset < merged[-1].end:
                last = merged[-1]
                end = max(last.end, stack.end)
                logger.debug(
                    "Merging overlapping stacks %s and %s", last.titles, stack.titles
                )
                merged[-1] = CollapsedStack(
                    entries=last.entries + stack.entries,
                    offset=last.offset,
                    width=min(end - last.offset, total_width),
                    edge=last.edge or stack.edge,
                )
                continue
            merged.append(stack)
        return [
            CollapsedStack(
                entries=tuple(sorted(stack.entries, key=lambda e: e.full_index, reverse=True)),
                offset=stack.offset,
                width=stack.width,
                edge=stack.edge,
            )
            for stack in merged
        ]


def _hidden_entries(specs: Sequence[ColumnSpec], lo: int, hi: int) -> tuple[StackEntry, ...]:
    """Hidden columns in ``[lo, hi)``, the column nearest ``hi`` first."""
    return tuple(
        StackEntry(title=specs[i].title, full_index=i, hide_order=specs[i].hide_order)
        for i in range(hi - 1, lo - 1, -1)
        if specs[i].hidden
    )


def compute_layout(specs: Sequence[ColumnSpec], target_width: int | None = None) -> TableLayout:
    """Compute a layout with the default engine settings."""
    return LayoutEngine().compute(specs, target_width)
