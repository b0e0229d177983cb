"""Error types for column specs and layout computation."""
from __future__ import annotations


class LayoutError(ValueError):
    """A column spec list violates a structural invariant.

    This signals a programming error (for example two hidden columns
    sharing the same hide order), not a runtime condition to recover
    from.  It is always raised, never logged and ignored.

    Parameters
    ----------
    message:
        Description of the violated invariant.
    column:
        Full index of the offending column, if a single column is at fault.
    """

    def __init__(self, message: str, column: int | None = None) -> None:
        self.column = column
        prefix = f"column {column}: " if column is not None else ""
        super().__init__(f"{prefix}{message}")
