"""Collapsed-stack rendering: positioned, coloured badges per stack depth.

``StackRenderer.render`` is a pure function of the stack list and the
palette.  Depth 0 is the top of every stack (the row nearest the table
body); each depth produces one ``rich.text.Text`` line holding one styled
span per badge, padded with unstyled spaces up to each stack's offset.

A badge's colour is ``palette[full_index % len(palette)]``: it depends only
on the column's position in the tab, so a column keeps its colour across
repeated hide/show toggles.
"""
from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from rich.cells import cell_len, set_cell_size
from rich.text import Text

from housetab.layout.engine import CollapsedStack
from housetab.render.theme import CHROME_STYLE, DEFAULT_PALETTE, badge_style

CONNECTOR = "│"


@dataclass(frozen=True)
class RenderedStacks:
    """Printable output for a list of collapsed stacks.

    Parameters
    ----------
    lines:
        One line per stack depth, top of the stacks first.
    connector:
        Line of thin vertical connectors under each non-edge stack, or
        ``None`` when every stack is an edge stack.
    """

    lines: tuple[Text, ...]
    connector: Text | None

    @property
    def depth(self) -> int:
        return len(self.lines)


class StackRenderer:
    """Renders :class:`~housetab.layout.engine.CollapsedStack` lists.

    Parameters
    ----------
    palette:
        Badge background colours.  Must not be empty.
    """

    def __init__(self, palette: Sequence[str] = DEFAULT_PALETTE) -> None:
        if not palette:
            raise ValueError("palette must contain at least one colour")
        self._palette = tuple(palette)

    @property
    def palette(self) -> tuple[str, ...]:
        return self._palette

    def badge_color(self, full_index: int) -> str:
        """Colour slot for the column at ``full_index``."""
        return self._palette[full_index % len(self._palette)]

    def render(self, stacks: Sequence[CollapsedStack]) -> RenderedStacks:
        """Render every depth of ``stacks`` plus the connector line."""
        max_depth = max((len(stack.entries) for stack in stacks), default=0)
        lines = tuple(self.render_line(stacks, depth) for depth in range(max_depth))
        return RenderedStacks(lines=lines, connector=render_connector(stacks))

    def render_line(self, stacks: Sequence[CollapsedStack], depth: int) -> Text:
        """Render the badges found at ``depth`` across all stacks."""
        line = Text()
        cursor = 0
        present = [stack for stack in stacks if depth < len(stack.entries)]
        for stack in sorted(present, key=lambda s: s.offset):
            entry = stack.entries[depth]
            if stack.offset > cursor:
                line.append(" " * (stack.offset - cursor))
                cursor = stack.offset
            line.append(
                _center(entry.title, stack.width),
                style=badge_style(self.badge_color(entry.full_index)),
            )
            cursor += stack.width
        return line


def render_connector(stacks: Sequence[CollapsedStack]) -> Text | None:
    """Draw a ``│`` under the centre of each non-edge stack.

    Edge stacks are joined to the table by the ladle border instead, so a
    list holding only edge stacks yields ``None``.
    """
    line = Text()
    cursor = 0
    drawn = False
    for stack in sorted(stacks, key=lambda s: s.offset):
        if stack.edge:
            continue
        drawn = True
        center = stack.offset + stack.width // 2
        if center > cursor:
            line.append(" " * (center - cursor))
            cursor = center
        line.append(CONNECTOR, style=CHROME_STYLE)
        cursor += 1
    return line if drawn else None


def _center(label: str, width: int) -> str:
    if cell_len(label) >= width:
        return set_cell_size(label, width)
    gap = width - cell_len(label)
    left = gap // 2
    return " " * left + label + " " * (gap - left)
