"""Ladle chrome: the border that ties edge stacks to the table body.

When hidden columns sit before the first or after the last visible column,
their stack hangs below the table at the row's edge.  A vertical border on
that side runs down the body and the stack lines, and a bottom curve closes
it off, giving an L (or U) shape::

    │ ID │ Title        │
    │ Type             │
    ╰──────────────────╯
"""
from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from rich.text import Text

from housetab.layout.engine import CollapsedStack
from housetab.render.theme import CHROME_STYLE

_SIDE_WIDTH = 2


@dataclass(frozen=True)
class LadleChrome:
    """Border prefix and suffix wrapped around every framed line.

    Parameters
    ----------
    left:
        ``"│ "`` when hidden columns lead the row, otherwise empty.
    right:
        ``" │"`` when hidden columns trail the row, otherwise empty.
    width:
        Total cells consumed by both sides.
    """

    left: Text = field(default_factory=Text)
    right: Text = field(default_factory=Text)
    width: int = 0

    @property
    def left_width(self) -> int:
        return self.left.cell_len


def ladle_chrome(has_leading: bool, has_trailing: bool) -> LadleChrome:
    """Return the side borders for the given edge-stack combination."""
    left = Text()
    right = Text()
    width = 0
    if has_leading:
        left.append("│", style=CHROME_STYLE)
        left.append(" ")
        width += _SIDE_WIDTH
    if has_trailing:
        right.append(" ")
        right.append("│", style=CHROME_STYLE)
        width += _SIDE_WIDTH
    return LadleChrome(left=left, right=right, width=width)


def ladle_bottom(
    stacks: Sequence[CollapsedStack],
    has_leading: bool,
    has_trailing: bool,
    left_width: int,
    col_space_width: int,
) -> Text | None:
    """Draw the horizontal base of the ladle.

    Parameters
    ----------
    stacks:
        The positioned stacks of the layout.
    has_leading, has_trailing:
        Which edges carry hidden columns.
    left_width:
        Cells taken by the left border (``0`` or ``2``).
    col_space_width:
        Width of the column area between the borders.

    Returns
    -------
    Text | None
        ``╰───╯`` spanning the full line when both edges are present,
        ``╰──`` under the leading stack, ``──╯`` under the trailing one,
        or ``None`` when there are no edge stacks.
    """
    if not has_leading and not has_trailing:
        return None

    right_width = _SIDE_WIDTH if has_trailing else 0
    full_width = left_width + col_space_width + right_width

    if has_leading and has_trailing:
        if full_width < 2:
            return None
        return Text("╰" + "─" * (full_width - 2) + "╯", style=CHROME_STYLE)

    if has_leading:
        lead = next((s for s in stacks if s.edge and s.offset == 0), None)
        if lead is None or lead.width <= 0:
            return None
        return Text("╰" + "─" * (1 + lead.width), style=CHROME_STYLE)

    trail = next((s for s in stacks if s.edge), None)
    trail_offset = trail.offset if trail is not None else 0
    line = Text(" " * (left_width + trail_offset))
    line.append("─" * (col_space_width - trail_offset + 1) + "╯", style=CHROME_STYLE)
    return line


def wrap_lines(lines: Sequence[Text], chrome: LadleChrome) -> list[Text]:
    """Prefix and suffix every line with the chrome's side borders."""
    if not chrome.width:
        return list(lines)
    wrapped: list[Text] = []
    for line in lines:
        framed = chrome.left.copy()
        framed.append_text(line)
        framed.append_text(chrome.right)
        wrapped.append(framed)
    return wrapped
