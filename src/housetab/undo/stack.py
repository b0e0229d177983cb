"""Bounded LIFO of undo entries.

Entries are pushed immediately before a destructive mutation (edit,
delete, restore) runs.  Undoing pops the newest entry and writes the
captured record back.  If the write-back fails, for example because a
parent was deleted in the meantime, the entry goes back on top so the
user can fix the blocker and retry.

There is no redo.

Usage
-----
::

    from housetab.undo import UndoStack

    stack = UndoStack(limit=50)
    entry, found = handler.snapshot(record_id)
    if found:
        stack.push(entry)
    ...
    stack.undo()
"""
from __future__ import annotations

import logging
from collections import deque
from typing import TYPE_CHECKING

from housetab.handlers.base import HandlerError

if TYPE_CHECKING:
    from housetab.handlers.base import UndoEntry

logger = logging.getLogger(__name__)

DEFAULT_UNDO_LIMIT = 50


class NothingToUndoError(IndexError):
    """Raised by :meth:`UndoStack.undo` when the stack is empty."""

    def __init__(self) -> None:
        super().__init__("nothing to undo")


class UndoRestoreError(Exception):
    """Restoring an undo entry failed; the entry is back on the stack.

    Parameters
    ----------
    entry:
        The entry that could not be restored.
    reason:
        The blocking condition, e.g. ``"project is deleted; restore it first"``.
    """

    def __init__(self, entry: UndoEntry, reason: str) -> None:
        self.entry = entry
        self.reason = reason
        super().__init__(f"cannot restore {entry.description}: {reason}")


class UndoStack:
    """LIFO of :class:`~housetab.handlers.base.UndoEntry` with a size cap.

    Parameters
    ----------
    limit:
        Maximum number of retained entries.  Pushing past the limit
        silently drops the oldest entry.

    Raises
    ------
    ValueError
        If ``limit`` is less than 1.
    """

    def __init__(self, limit: int = DEFAULT_UNDO_LIMIT) -> None:
        if limit < 1:
            raise ValueError(f"undo limit must be at least 1, got {limit}")
        self._limit = limit
        self._entries: deque[UndoEntry] = deque(maxlen=limit)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"UndoStack(size={len(self._entries)}, limit={self._limit})"

    @property
    def limit(self) -> int:
        return self._limit

    def push(self, entry: UndoEntry) -> None:
        if len(self._entries) == self._limit:
            dropped = self._entries[0]
            logger.debug("Undo limit %d reached; dropping %s", self._limit, dropped.description)
        self._entries.append(entry)

    def peek(self) -> UndoEntry | None:
        """Return the newest entry without removing it."""
        return self._entries[-1] if self._entries else None

    def discard(self, entry: UndoEntry) -> bool:
        """Remove ``entry`` if it is the newest one.

        Used when the mutation an entry was pushed for fails, so that the
        stack never offers to undo something that did not happen.
        """
        if self._entries and self._entries[-1] is entry:
            self._entries.pop()
            return True
        return False

    def undo(self) -> UndoEntry:
        """Pop the newest entry and restore it.

        Returns
        -------
        UndoEntry
            The entry that was restored.

        Raises
        ------
        NothingToUndoError
            If the stack is empty.
        UndoRestoreError
            If the entry's restore failed.  The entry is pushed back, so
            the stack is unchanged.

        Any other exception from the restore propagates with the entry
        already popped.
        """
        if not self._entries:
            raise NothingToUndoError()
        entry = self._entries.pop()
        try:
            entry.restore()
        except HandlerError as exc:
            self._entries.append(entry)
            reason = exc.message
            logger.debug("Undo of %s failed: %s", entry.description, reason)
            raise UndoRestoreError(entry, reason) from exc
        logger.debug("Undid %s", entry.description)
        return entry

    def descriptions(self) -> list[str]:
        """Entry descriptions, newest first."""
        return [entry.description for entry in reversed(self._entries)]

    def clear(self) -> None:
        self._entries.clear()
