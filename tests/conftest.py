"""Shared test fixtures for housetab.

Fixtures defined here are available to all tests in the suite without
needing an explicit import. Add project-wide fixtures here; keep
domain-specific fixtures close to the tests that use them.
"""
from __future__ import annotations

from datetime import datetime, timezone

import pytest

from housetab.app.session import Session
from housetab.columns.spec import ColumnSpec
from housetab.store import MemoryStore, demo_store

FIXED_NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture()
def expected_version() -> str:
    """Return the current expected version string.

    Update this fixture when cutting a release so that the version
    test immediately catches stale ``__version__`` values.
    """
    return "0.1.0"


@pytest.fixture()
def fixed_now() -> datetime:
    """The timestamp the ``store`` fixture writes into ``deleted_at``."""
    return FIXED_NOW


@pytest.fixture()
def store() -> MemoryStore:
    """An empty store whose deletion timestamps are deterministic."""
    return MemoryStore(clock=lambda: FIXED_NOW)


@pytest.fixture()
def demo() -> MemoryStore:
    """The demo household: 4 projects, 2 quotes, 3 vendors and so on."""
    return demo_store()


@pytest.fixture()
def session(demo: MemoryStore) -> Session:
    return Session(demo)


@pytest.fixture()
def five_specs() -> list[ColumnSpec]:
    """``[ID, Title, Type, Status, Start]``, all visible."""
    return [
        ColumnSpec("ID", 4),
        ColumnSpec("Title", 16),
        ColumnSpec("Type", 8),
        ColumnSpec("Status", 8),
        ColumnSpec("Start", 10),
    ]
