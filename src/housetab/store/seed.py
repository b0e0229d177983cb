"""YAML seed loading for :class:`~housetab.store.memory.MemoryStore`.

A seed document is a mapping of section name to a list of records::

    project_types: [Remodel, Plumbing]
    maintenance_categories: [HVAC]
    vendors:
      - name: Acme Builders
    projects:
      - title: Kitchen remodel
        type: Remodel
        status: underway
        budget_cents: 2500000
    quotes:
      - project_id: 1
        vendor_id: 1
        total_cents: 2300000

Sections are loaded in dependency order (vendors, projects, quotes,
appliances, maintenance, incidents), so ids are assigned 1, 2, 3, ... in
document order within each section and foreign keys refer to those ids.
``type`` (projects) and ``category`` (maintenance) name a lookup row,
which is created on first use.  ``deleted: true`` soft-deletes the record
once every section is loaded.  Those deletes run children first (incidents
back to vendors), so a deleted project may keep its deleted quotes.
"""
from __future__ import annotations

import logging
from datetime import date
from enum import Enum
from pathlib import Path
from typing import Any

import yaml

from housetab.entities.models import (
    Appliance,
    EntityKind,
    Incident,
    IncidentSeverity,
    IncidentStatus,
    LookupKind,
    MaintenanceItem,
    Project,
    ProjectStatus,
    Quote,
    Vendor,
)
from housetab.store.errors import StoreError, StoreIOError
from housetab.store.memory import MemoryStore

logger = logging.getLogger(__name__)

_SECTIONS: tuple[tuple[str, type], ...] = (
    ("vendors", Vendor),
    ("projects", Project),
    ("quotes", Quote),
    ("appliances", Appliance),
    ("maintenance", MaintenanceItem),
    ("incidents", Incident),
)

_ENUM_FIELDS: dict[type, dict[str, type[Enum]]] = {
    Project: {"status": ProjectStatus},
    Incident: {"status": IncidentStatus, "severity": IncidentSeverity},
}

_LOOKUP_KEYS: dict[type, tuple[str, str, LookupKind]] = {
    Project: ("type", "project_type_id", LookupKind.PROJECT_TYPE),
    MaintenanceItem: ("category", "category_id", LookupKind.MAINTENANCE_CATEGORY),
}

_DATE_FIELDS = frozenset(
    {
        "start_date",
        "end_date",
        "received_date",
        "purchase_date",
        "warranty_expiry",
        "last_serviced_at",
        "date_noticed",
        "date_resolved",
    }
)


class SeedError(ValueError):
    """Raised when a seed document cannot be loaded.

    Parameters
    ----------
    message:
        Description of the problem.
    section:
        The seed section being loaded, if known.
    index:
        0-based position of the offending record within ``section``.
    """

    def __init__(self, message: str, section: str | None = None, index: int | None = None) -> None:
        self.section = section
        self.index = index
        location = ""
        if section is not None:
            location = f"{section}[{index}]: " if index is not None else f"{section}: "
        super().__init__(f"{location}{message}")


def load_seed_file(path: str | Path, store: MemoryStore) -> dict[str, int]:
    """Load a YAML seed file into ``store``.

    Returns
    -------
    dict[str, int]
        Number of records created per section.

    Raises
    ------
    StoreIOError
        If the file cannot be read.
    SeedError
        If the document is malformed.
    """
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise StoreIOError(f"cannot read seed file {path}: {exc}") from exc
    return load_seed_text(text, store)


def load_seed_text(text: str, store: MemoryStore) -> dict[str, int]:
    """Load a YAML seed document held in ``text`` into ``store``."""
    try:
        document = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise SeedError(f"invalid YAML: {exc}") from exc
    if document is None:
        return {}
    if not isinstance(document, dict):
        raise SeedError("seed document must be a mapping of section name to records")

    known = {"project_types", "maintenance_categories"} | {name for name, _ in _SECTIONS}
    unknown = sorted(set(document) - known)
    if unknown:
        raise SeedError(f"unknown section(s): {', '.join(map(str, unknown))}")

    for name in document.get("project_types") or []:
        _lookup_id(store, LookupKind.PROJECT_TYPE, str(name))
    for name in document.get("maintenance_categories") or []:
        _lookup_id(store, LookupKind.MAINTENANCE_CATEGORY, str(name))

    counts: dict[str, int] = {}
    pending: list[tuple[str, int, EntityKind, int]] = []
    for section, record_type in _SECTIONS:
        entries = document.get(section) or []
        if not isinstance(entries, list):
            raise SeedError("expected a list of records", section)
        for index, raw in enumerate(entries):
            if not isinstance(raw, dict):
                raise SeedError("expected a mapping", section, index)
            new_id, deleted = _load_record(store, section, index, record_type, raw)
            if deleted:
                pending.append((section, index, record_type.kind, new_id))
        counts[section] = len(entries)

    for section, index, kind, new_id in reversed(pending):
        try:
            store.soft_delete(kind, new_id)
        except StoreError as exc:
            raise SeedError(str(exc), section, index) from exc
    logger.debug("Loaded seed: %s", counts)
    return counts


def _load_record(
    store: MemoryStore,
    section: str,
    index: int,
    record_type: type,
    raw: dict[str, Any],
) -> tuple[int, bool]:
    fields = dict(raw)
    fields.pop("id", None)
    deleted = bool(fields.pop("deleted", False))

    lookup = _LOOKUP_KEYS.get(record_type)
    if lookup is not None:
        key, field_name, lookup_kind = lookup
        if key in fields:
            fields[field_name] = _lookup_id(store, lookup_kind, str(fields.pop(key)))

    try:
        for field_name, enum_type in _ENUM_FIELDS.get(record_type, {}).items():
            if field_name in fields:
                fields[field_name] = enum_type(fields[field_name])
        for field_name in _DATE_FIELDS & set(fields):
            fields[field_name] = _coerce_date(fields[field_name])
        record = record_type(id=0, **fields)
    except (TypeError, ValueError) as exc:
        raise SeedError(str(exc), section, index) from exc

    try:
        new_id = store.create(record)
    except StoreError as exc:
        raise SeedError(str(exc), section, index) from exc
    return new_id, deleted


def _lookup_id(store: MemoryStore, kind: LookupKind, name: str) -> int:
    for value in store.lookup(kind):
        if value.name == name:
            return value.id
    return store.add_lookup(kind, name)


def _coerce_date(value: object) -> date | None:
    if value is None or isinstance(value, date):
        return value
    return date.fromisoformat(str(value))


# ---------------------------------------------------------------------------
# Demo data
# ---------------------------------------------------------------------------

DEMO_SEED = """\
project_types: [Electrical, HVAC, Landscaping, Plumbing, Remodel, Roof]
maintenance_categories: [Appliance, Exterior, HVAC, Plumbing, Safety]
vendors:
  - name: Acme Builders
    contact_name: Dana Ortiz
    phone: 555-0100
  - name: Northside Plumbing
    email: office@northside.example
  - name: Cool Air HVAC
projects:
  - title: Kitchen remodel
    type: Remodel
    status: underway
    budget_cents: 2500000
    actual_cents: 1875050
    start_date: 2025-03-01
  - title: Replace water heater
    type: Plumbing
    status: quoted
    budget_cents: 180000
  - title: Attic insulation
    type: HVAC
    status: ideating
  - title: Re-shingle garage
    type: Roof
    status: completed
    budget_cents: 420000
    actual_cents: 397500
    start_date: 2024-09-10
    end_date: 2024-09-14
quotes:
  - project_id: 1
    vendor_id: 1
    total_cents: 2300000
    labor_cents: 1200000
    materials_cents: 1100000
    received_date: 2025-02-10
  - project_id: 2
    vendor_id: 2
    total_cents: 165000
    received_date: 2025-04-02
appliances:
  - name: Furnace
    brand: Carrier
    model_number: 59SC5
    location: Basement
    purchase_date: 2019-11-02
    warranty_expiry: 2029-11-02
  - name: Dishwasher
    brand: Bosch
    location: Kitchen
    cost_cents: 89900
maintenance:
  - name: Replace furnace filter
    category: HVAC
    appliance_id: 1
    last_serviced_at: 2025-01-15
    interval_months: 3
  - name: Test smoke detectors
    category: Safety
    last_serviced_at: 2024-12-01
    interval_months: 6
  - name: Clean gutters
    category: Exterior
    interval_months: 12
incidents:
  - title: Dishwasher leak
    date_noticed: 2025-05-04
    severity: urgent
    appliance_id: 2
    location: Kitchen
  - title: Cracked driveway
    date_noticed: 2024-10-20
    severity: whenever
    status: in_progress
"""


def demo_store() -> MemoryStore:
    """Return a :class:`MemoryStore` populated with sample household data."""
    store = MemoryStore()
    load_seed_text(DEMO_SEED, store)
    return store


__all__ = [
    "DEMO_SEED",
    "SeedError",
    "demo_store",
    "load_seed_file",
    "load_seed_text",
]

