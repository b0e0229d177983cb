"""Error types raised by store implementations.

Handlers translate these into ``HandlerError`` values; only the coarse
classification (guard violation, missing record, I/O) matters to callers.
"""
from __future__ import annotations


class StoreError(Exception):
    """Base class for all store failures."""


class GuardViolationError(StoreError):
    """A referential guard blocked the mutation.

    The message names the blocking condition, e.g.
    ``"project is deleted; restore it first"``.
    """


class RecordNotFoundError(StoreError, LookupError):
    """The target record does not exist or is in the wrong lifecycle state."""


class StoreIOError(StoreError):
    """The backing medium could not be read or written."""
