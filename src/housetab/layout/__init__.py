"""Layout engine sub-package.

Public API
----------
``LayoutEngine`` and ``compute_layout`` produce a ``TableLayout``: the
visible columns with rendered widths, one separator per gap and the
positioned ``CollapsedStack`` list for hidden columns.
"""
from __future__ import annotations

from housetab.layout.engine import (
    CollapsedStack,
    LayoutEngine,
    SeparatorKind,
    StackEntry,
    TableLayout,
    VisibleColumn,
    compute_layout,
    validate_specs,
)
from housetab.layout.errors import LayoutError

__all__ = [
    "CollapsedStack",
    "LayoutEngine",
    "LayoutError",
    "SeparatorKind",
    "StackEntry",
    "TableLayout",
    "VisibleColumn",
    "compute_layout",
    "validate_specs",
]
