"""Application sub-package: the interactive session over a store."""
from __future__ import annotations

from housetab.app.session import (
    KEEP_ONE_VISIBLE,
    Session,
    StatusKind,
    StatusMessage,
)
from housetab.app.tabs import SortDirection, SortSpec, Tab, build_tab

__all__ = [
    "KEEP_ONE_VISIBLE",
    "Session",
    "SortDirection",
    "SortSpec",
    "StatusKind",
    "StatusMessage",
    "Tab",
    "build_tab",
]
