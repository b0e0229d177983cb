"""Undo sub-package."""
from __future__ import annotations

from housetab.undo.stack import (
    DEFAULT_UNDO_LIMIT,
    NothingToUndoError,
    UndoRestoreError,
    UndoStack,
)

__all__ = [
    "DEFAULT_UNDO_LIMIT",
    "NothingToUndoError",
    "UndoRestoreError",
    "UndoStack",
]
