"""Cell formatting helpers used by entity handlers to build styled rows."""
from __future__ import annotations

import re
from collections.abc import Sequence
from datetime import date

from rich.text import Text

from housetab.render.theme import DELETED_STYLE, EMPTY_STYLE, MONEY_STYLE, READONLY_STYLE

DATE_FORMAT = "%Y-%m-%d"
EMPTY_MARK = "n/a"

Row = tuple[Text, ...]
SortKey = tuple[int, float, str]

_NUMBER_RE = re.compile(r"^-?\$?\d[\d,]*(\.\d+)?$")


def format_cents(cents: int) -> str:
    """Format integer cents as dollars, e.g. ``123456`` -> ``"$1,234.56"``."""
    sign = "-" if cents < 0 else ""
    dollars, remainder = divmod(abs(cents), 100)
    return f"{sign}${dollars:,}.{remainder:02d}"


def id_cell(record_id: int) -> Text:
    return Text(str(record_id), style=READONLY_STYLE)


def empty_or(value: str) -> Text:
    """The value as plain text, or a muted ``n/a`` when it is empty."""
    if not value:
        return Text(EMPTY_MARK, style=EMPTY_STYLE)
    return Text(value)


def money_cell(cents: int) -> Text:
    return Text(format_cents(cents), style=MONEY_STYLE)


def money_or_empty(cents: int | None) -> Text:
    if cents is None:
        return Text(EMPTY_MARK, style=EMPTY_STYLE)
    return money_cell(cents)


def date_or_empty(value: date | None) -> Text:
    if value is None:
        return Text(EMPTY_MARK, style=EMPTY_STYLE)
    return Text(value.strftime(DATE_FORMAT))


def styled_row(cells: Sequence[Text], deleted: bool) -> Row:
    """Return ``cells`` as a row, struck through when the record is deleted."""
    if not deleted:
        return tuple(cells)
    row = []
    for cell in cells:
        struck = cell.copy()
        struck.stylize(DELETED_STYLE)
        row.append(struck)
    return tuple(row)


def cell_sort_value(cell: Text) -> SortKey | None:
    """Key for ordering a column by ``cell``, or ``None`` for an empty cell.

    Money and integer cells compare by value.  Everything else compares
    as case-insensitive text, after all numeric cells.
    """
    plain = cell.plain.strip()
    if not plain or plain == EMPTY_MARK:
        return None
    if _NUMBER_RE.match(plain):
        negative = "-" in plain
        value = float(plain.replace("-", "").replace("$", "").replace(",", ""))
        return (0, -value if negative else value, "")
    return (1, 0.0, plain.casefold())
