"""housetab: home-management tables with collapsible columns.

Public API
----------
The stable public surface is everything exported from this module.
Anything inside submodules not re-exported here is considered private
and may change without notice.

Example
-------
::

    import housetab

    # Lay out columns, two of them hidden
    layout = housetab.layout(specs, width=80)
    layout.stacks        # positioned collapsed stacks

    # Drive a session over the built-in demo data
    session = housetab.open_session()
    quotes = session.tab("quotes")
    session.delete(quotes, 1)
    session.undo()
    lines = session.frame(quotes, width=100)

    housetab.__version__
    '0.1.0'
"""
from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING

__version__: str = "0.1.0"

if TYPE_CHECKING:
    from housetab.app.session import Session
    from housetab.columns.spec import ColumnSpec
    from housetab.layout.engine import TableLayout


def layout(specs: Sequence["ColumnSpec"], width: int | None = None) -> "TableLayout":
    """Compute the table layout for ``specs``.

    Parameters
    ----------
    specs:
        Full column list, hidden columns included.
    width:
        Available row width, or ``None`` for natural widths.

    Returns
    -------
    TableLayout
        Visible columns, separators and collapsed stacks.

    Raises
    ------
    housetab.layout.LayoutError
        If ``specs`` is malformed.
    """
    from housetab.layout.engine import compute_layout

    return compute_layout(specs, width)


def open_session(seed_path: str | Path | None = None, undo_limit: int = 50) -> "Session":
    """Open a session over a seed file, or over the demo data.

    Parameters
    ----------
    seed_path:
        YAML seed file to load into a fresh in-memory store.
    undo_limit:
        Capacity of the session's undo stack.

    Raises
    ------
    housetab.store.SeedError
        If the seed file is malformed.
    housetab.store.StoreError
        If the seed file cannot be read.
    """
    from housetab.app.session import Session
    from housetab.store import MemoryStore, demo_store, load_seed_file

    if seed_path is None:
        store = demo_store()
    else:
        store = MemoryStore()
        load_seed_file(seed_path, store)
    return Session(store, undo_limit=undo_limit)


__all__ = ["__version__", "layout", "open_session"]
