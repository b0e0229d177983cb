"""Colours and styles shared by the table renderers.

Colours are plain Rich colour strings so they can be overridden from the
configuration file.
"""
from __future__ import annotations

from rich.style import Style

ACCENT = "#7c6ff7"
SECONDARY = "#3fa9c9"
WARNING = "#e5a50a"
SUCCESS = "#57b85c"
TEXT_MID = "#9a9a9a"
ON_ACCENT = "#101010"

#: Badge colours, indexed by ``full_index % len(DEFAULT_PALETTE)``.
DEFAULT_PALETTE: tuple[str, ...] = (ACCENT, SECONDARY, WARNING, SUCCESS, TEXT_MID)

CHROME_STYLE = Style(color=SECONDARY)
HEADER_STYLE = Style(bold=True)
SEPARATOR_STYLE = Style(color=TEXT_MID)
COLLAPSED_MARK_STYLE = Style(color=SECONDARY)
READONLY_STYLE = Style(color=TEXT_MID)
MONEY_STYLE = Style(color=SUCCESS)
EMPTY_STYLE = Style(color=TEXT_MID, italic=True)
DELETED_STYLE = Style(strike=True, dim=True)


def badge_style(color: str) -> Style:
    """Style of a collapsed-column badge drawn on ``color``."""
    return Style(bgcolor=color, color=ON_ACCENT, bold=True)
