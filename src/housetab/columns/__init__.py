"""Column model sub-package.

Re-exports the static column descriptors and the per-tab model that
tracks which columns are hidden.
"""
from __future__ import annotations

from housetab.columns.spec import ColumnModel, ColumnSpec, LinkKind

__all__ = [
    "ColumnModel",
    "ColumnSpec",
    "LinkKind",
]
