"""Compose a complete table frame from a layout and styled rows.

The frame is a list of ``rich.text.Text`` lines, top to bottom:

- header (visible column titles),
- divider,
- one line per data row,
- the stack connector line (if any interior stacks exist),
- one badge line per stack depth,
- the ladle bottom curve (if any edge stacks exist).

Every line is padded to the row width, then wrapped in the ladle side
borders so the edges line up.
"""
from __future__ import annotations

from collections.abc import Mapping, Sequence

from rich.text import Text

from housetab.layout.engine import SeparatorKind, TableLayout
from housetab.render.cells import Row
from housetab.render.ladle import ladle_bottom, ladle_chrome, wrap_lines
from housetab.render.stacks import StackRenderer
from housetab.render.theme import (
    COLLAPSED_MARK_STYLE,
    EMPTY_STYLE,
    HEADER_STYLE,
    SEPARATOR_STYLE,
)

ALL_HIDDEN_MESSAGE = "all columns hidden"


def separator_text(kind: SeparatorKind, width: int) -> Text:
    """Separator between two cells: ``" │ "`` or the collapsed ``" ⋯ "``."""
    mark = "⋯" if kind is SeparatorKind.COLLAPSED else "│"
    style = COLLAPSED_MARK_STYLE if kind is SeparatorKind.COLLAPSED else SEPARATOR_STYLE
    left = (width - 1) // 2
    text = Text(" " * left)
    text.append(mark, style=style)
    text.append(" " * (width - 1 - left))
    return text


def render_frame(
    layout: TableLayout,
    rows: Sequence[Row],
    renderer: StackRenderer,
    sort_marks: Mapping[int, str] | None = None,
) -> list[Text]:
    """Render ``rows`` under ``layout`` as a list of printable lines.

    Parameters
    ----------
    layout:
        Geometry computed by :class:`~housetab.layout.engine.LayoutEngine`.
    rows:
        Full rows (one cell per column spec, hidden ones included).
    renderer:
        Renderer used for the collapsed stacks.
    sort_marks:
        Suffix appended to a header title, keyed by full column index.

    Returns
    -------
    list[Text]
        The frame lines.  An all-hidden layout yields a single fallback
        line.
    """
    if layout.is_empty:
        return [Text(ALL_HIDDEN_MESSAGE, style=EMPTY_STYLE)]
    marks = sort_marks or {}

    header = [_header_cell(column.title, column.full_index, marks) for column in layout.columns]
    lines: list[Text] = [
        _join_cells(layout, header),
        _divider(layout),
    ]
    for row in rows:
        lines.append(_join_cells(layout, [row[column.full_index] for column in layout.columns]))

    rendered = renderer.render(layout.stacks)
    if rendered.connector is not None:
        lines.append(rendered.connector)
    lines.extend(rendered.lines)

    for line in lines:
        missing = layout.total_width - line.cell_len
        if missing > 0:
            line.pad_right(missing)

    chrome = ladle_chrome(layout.has_leading, layout.has_trailing)
    framed = wrap_lines(lines, chrome)
    bottom = ladle_bottom(
        layout.stacks,
        layout.has_leading,
        layout.has_trailing,
        chrome.left_width,
        layout.total_width,
    )
    if bottom is not None:
        framed.append(bottom)
    return framed


def _header_cell(title: str, full_index: int, marks: Mapping[int, str]) -> Text:
    return Text(title + marks.get(full_index, ""), style=HEADER_STYLE)


def _join_cells(layout: TableLayout, cells: Sequence[Text]) -> Text:
    line = Text()
    for index, (column, cell) in enumerate(zip(layout.columns, cells)):
        if index > 0:
            line.append_text(separator_text(layout.separators[index - 1], layout.separator_width))
        fitted = cell.copy()
        fitted.truncate(column.width, overflow="ellipsis", pad=True)
        line.append_text(fitted)
    return line


def _divider(layout: TableLayout) -> Text:
    sep = layout.separator_width
    left = (sep - 1) // 2
    joint = "─" * left + "┼" + "─" * (sep - 1 - left)
    return Text(joint.join("─" * width for width in layout.widths), style=SEPARATOR_STYLE)
