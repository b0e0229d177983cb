"""Rendering sub-package.

Turns layouts into printable ``rich.text.Text`` lines: collapsed-stack
badges and connectors, the ladle border chrome, styled cells, and full
table frames.
"""
from __future__ import annotations

from housetab.render.cells import (
    Row,
    cell_sort_value,
    date_or_empty,
    empty_or,
    format_cents,
    id_cell,
    money_cell,
    money_or_empty,
    styled_row,
)
from housetab.render.frame import ALL_HIDDEN_MESSAGE, render_frame, separator_text
from housetab.render.ladle import LadleChrome, ladle_bottom, ladle_chrome, wrap_lines
from housetab.render.stacks import RenderedStacks, StackRenderer, render_connector
from housetab.render.theme import DEFAULT_PALETTE

__all__ = [
    "ALL_HIDDEN_MESSAGE",
    "DEFAULT_PALETTE",
    "LadleChrome",
    "RenderedStacks",
    "Row",
    "StackRenderer",
    "cell_sort_value",
    "date_or_empty",
    "empty_or",
    "format_cents",
    "id_cell",
    "ladle_bottom",
    "ladle_chrome",
    "money_cell",
    "money_or_empty",
    "render_connector",
    "render_frame",
    "separator_text",
    "styled_row",
    "wrap_lines",
]
