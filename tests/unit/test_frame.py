"""Unit tests for housetab.render: ladle chrome, cells and frame composition."""
from __future__ import annotations

from rich.text import Text

from housetab.columns.spec import ColumnSpec
from housetab.layout import CollapsedStack, SeparatorKind, StackEntry, compute_layout
from housetab.render import (
    ALL_HIDDEN_MESSAGE,
    StackRenderer,
    cell_sort_value,
    format_cents,
    ladle_bottom,
    ladle_chrome,
    money_or_empty,
    render_frame,
    separator_text,
    styled_row,
    wrap_lines,
)
from housetab.render.theme import DELETED_STYLE


def _row(*values: str) -> tuple[Text, ...]:
    return tuple(Text(value) for value in values)


# ===========================================================================
# Ladle chrome
# ===========================================================================


class TestLadleChrome:
    def test_no_edges_means_no_chrome(self) -> None:
        chrome = ladle_chrome(False, False)
        assert chrome.width == 0
        assert chrome.left.plain == ""
        assert chrome.right.plain == ""

    def test_leading_only(self) -> None:
        chrome = ladle_chrome(True, False)
        assert chrome.left.plain == "│ "
        assert chrome.right.plain == ""
        assert chrome.left_width == 2

    def test_both_edges(self) -> None:
        chrome = ladle_chrome(True, True)
        assert chrome.right.plain == " │"
        assert chrome.width == 4

    def test_wrap_lines_without_chrome_is_identity(self) -> None:
        lines = [Text("abc")]
        assert wrap_lines(lines, ladle_chrome(False, False)) == lines

    def test_wrap_lines_adds_borders(self) -> None:
        wrapped = wrap_lines([Text("abc")], ladle_chrome(True, True))
        assert wrapped[0].plain == "│ abc │"


class TestLadleBottom:
    def test_none_without_edge_stacks(self) -> None:
        assert ladle_bottom([], False, False, 0, 20) is None

    def test_both_edges_span_full_width(self) -> None:
        bottom = ladle_bottom([], True, True, 2, 6)
        assert bottom is not None
        assert bottom.plain == "╰" + "─" * 8 + "╯"

    def test_leading_curve_under_stack(self) -> None:
        lead = CollapsedStack((StackEntry("ID", 0, 1),), offset=0, width=4, edge=True)
        bottom = ladle_bottom([lead], True, False, 2, 15)
        assert bottom is not None
        assert bottom.plain == "╰─────"

    def test_trailing_curve_from_stack_offset(self) -> None:
        trail = CollapsedStack((StackEntry("C", 1, 1),), offset=3, width=3, edge=True)
        bottom = ladle_bottom([trail], False, True, 0, 6)
        assert bottom is not None
        assert bottom.plain == "   ────╯"
        assert bottom.cell_len == 6 + 2


# ===========================================================================
# Cells
# ===========================================================================


class TestCells:
    def test_format_cents(self) -> None:
        assert format_cents(123456) == "$1,234.56"
        assert format_cents(0) == "$0.00"
        assert format_cents(-5) == "-$0.05"

    def test_money_or_empty(self) -> None:
        assert money_or_empty(None).plain == "n/a"
        assert money_or_empty(2500).plain == "$25.00"

    def test_styled_row_strikes_deleted(self) -> None:
        original = Text("Kitchen")
        row = styled_row([original], deleted=True)
        assert row[0].plain == "Kitchen"
        assert any(span.style == DELETED_STYLE for span in row[0].spans)
        assert original.spans == []

    def test_styled_row_live_is_unchanged(self) -> None:
        cells = [Text("a"), Text("b")]
        assert styled_row(cells, deleted=False) == tuple(cells)

    def test_sort_value_empty_cells(self) -> None:
        assert cell_sort_value(Text("")) is None
        assert cell_sort_value(money_or_empty(None)) is None

    def test_sort_value_money_by_amount(self) -> None:
        values = [money_or_empty(c) for c in (250000, -5, 99)]
        ordered = sorted(values, key=cell_sort_value)
        assert [cell.plain for cell in ordered] == ["-$0.05", "$0.99", "$2,500.00"]

    def test_sort_value_ids_numeric(self) -> None:
        assert cell_sort_value(Text("10")) > cell_sort_value(Text("9"))

    def test_sort_value_text_ignores_case(self) -> None:
        assert cell_sort_value(Text("attic")) == cell_sort_value(Text("Attic"))
        assert cell_sort_value(Text("2025-03-01")) < cell_sort_value(Text("2025-11-01"))
        assert cell_sort_value(Text("5")) < cell_sort_value(Text("Attic"))


# ===========================================================================
# Frames
# ===========================================================================


class TestSeparatorText:
    def test_plain(self) -> None:
        assert separator_text(SeparatorKind.PLAIN, 3).plain == " │ "

    def test_collapsed(self) -> None:
        assert separator_text(SeparatorKind.COLLAPSED, 3).plain == " ⋯ "


class TestRenderFrame:
    def test_all_hidden_fallback(self) -> None:
        specs = [ColumnSpec("A", 3, hide_order=1), ColumnSpec("B", 3, hide_order=2)]
        lines = render_frame(compute_layout(specs), [], StackRenderer())
        assert [line.plain for line in lines] == [ALL_HIDDEN_MESSAGE]

    def test_plain_table(self) -> None:
        specs = [ColumnSpec("Name", 6), ColumnSpec("Cost", 6)]
        lines = render_frame(compute_layout(specs), [_row("Sink", "$10")], StackRenderer())
        assert [line.plain for line in lines] == [
            "Name   │ Cost  ",
            "───────┼───────",
            "Sink   │ $10   ",
        ]

    def test_leading_edge_stack_gets_ladle(self) -> None:
        specs = [ColumnSpec("ID", 2, hide_order=1), ColumnSpec("Name", 6), ColumnSpec("Cost", 6)]
        lines = render_frame(
            compute_layout(specs), [_row("1", "Sink", "$10")], StackRenderer()
        )
        plain = [line.plain for line in lines]
        assert plain[0] == "│ Name   │ Cost  "
        assert plain[2] == "│ Sink   │ $10   "
        assert plain[3] == "│  ID " + " " * 11
        assert plain[4] == "╰─────"
        assert len(lines) == 5

    def test_both_edges_close_the_ladle(self) -> None:
        specs = [
            ColumnSpec("A", 1, hide_order=1),
            ColumnSpec("Body", 6),
            ColumnSpec("C", 1, hide_order=2),
        ]
        lines = render_frame(compute_layout(specs), [], StackRenderer())
        plain = [line.plain for line in lines]
        assert plain[0] == "│ Body   │"
        assert plain[2] == "│  A  C  │"
        assert plain[-1] == "╰────────╯"

    def test_interior_stack_has_connector_and_marker(self) -> None:
        specs = [
            ColumnSpec("Name", 8),
            ColumnSpec("Type", 4, hide_order=1),
            ColumnSpec("Cost", 8),
        ]
        lines = render_frame(compute_layout(specs), [], StackRenderer())
        plain = [line.plain for line in lines]
        assert plain[0] == "Name     ⋯ Cost    "
        assert plain[2].strip() == "│"
        assert plain[3].strip() == "Type"
        assert all(len(line) == 19 for line in plain)

    def test_long_cells_are_truncated(self) -> None:
        specs = [ColumnSpec("Name", 6)]
        lines = render_frame(compute_layout(specs), [_row("Dishwasher")], StackRenderer())
        assert lines[2].plain == "Dishw…"

    def test_sort_mark_on_header(self) -> None:
        specs = [ColumnSpec("Name", 6), ColumnSpec("Cost", 6)]
        lines = render_frame(
            compute_layout(specs), [_row("Sink", "$10")], StackRenderer(), {1: " ↓"}
        )
        assert lines[0].plain == "Name   │ Cost ↓"

    def test_rows_use_full_index(self) -> None:
        specs = [ColumnSpec("A", 3), ColumnSpec("B", 3, hide_order=1), ColumnSpec("C", 3)]
        lines = render_frame(compute_layout(specs), [_row("a", "b", "c")], StackRenderer())
        assert lines[2].plain.startswith("a   ⋯ c")
