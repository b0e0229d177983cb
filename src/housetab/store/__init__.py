"""Store collaborator sub-package.

Defines the :class:`Store` protocol consumed by entity handlers, the error
hierarchy handlers classify, an in-memory implementation and YAML seed
loading.
"""
from __future__ import annotations

from housetab.store.base import Store
from housetab.store.errors import (
    GuardViolationError,
    RecordNotFoundError,
    StoreError,
    StoreIOError,
)
from housetab.store.memory import MemoryStore
from housetab.store.seed import SeedError, demo_store, load_seed_file, load_seed_text

__all__ = [
    "Store",
    "StoreError",
    "GuardViolationError",
    "RecordNotFoundError",
    "StoreIOError",
    "MemoryStore",
    "SeedError",
    "demo_store",
    "load_seed_file",
    "load_seed_text",
]
