"""Record types for the entities shown in housetab tables.

Every record is a frozen dataclass.  Mutations produce a new record via
``dataclasses.replace`` so that a snapshot taken before an edit can never be
changed behind the undo stack's back.

Money is stored as integer cents; dates are ``datetime.date``; soft-deleted
records carry a ``deleted_at`` timestamp.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum, auto
from typing import Union


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class EntityKind(Enum):
    """Storage-level identity of a record type."""

    PROJECT = "project"
    VENDOR = "vendor"
    QUOTE = "quote"
    APPLIANCE = "appliance"
    MAINTENANCE = "maintenance"
    INCIDENT = "incident"

    @property
    def label(self) -> str:
        """Human-readable singular label used in messages."""
        return _ENTITY_LABELS[self]


_ENTITY_LABELS: dict[EntityKind, str] = {
    EntityKind.PROJECT: "project",
    EntityKind.VENDOR: "vendor",
    EntityKind.QUOTE: "quote",
    EntityKind.APPLIANCE: "appliance",
    EntityKind.MAINTENANCE: "maintenance item",
    EntityKind.INCIDENT: "incident",
}


class LookupKind(Enum):
    """Lookup tables whose names feed column labels."""

    PROJECT_TYPE = auto()
    MAINTENANCE_CATEGORY = auto()


class TabKind(Enum):
    """Tabs in the table view, in display order."""

    PROJECTS = "projects"
    QUOTES = "quotes"
    MAINTENANCE = "maintenance"
    APPLIANCES = "appliances"
    VENDORS = "vendors"
    INCIDENTS = "incidents"


class ProjectStatus(Enum):
    IDEATING = "ideating"
    PLANNED = "planned"
    QUOTED = "quoted"
    UNDERWAY = "underway"
    DELAYED = "delayed"
    COMPLETED = "completed"
    ABANDONED = "abandoned"


class IncidentStatus(Enum):
    OPEN = "open"
    IN_PROGRESS = "in_progress"
    RESOLVED = "resolved"


class IncidentSeverity(Enum):
    URGENT = "urgent"
    SOON = "soon"
    WHENEVER = "whenever"


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class LookupValue:
    """A row from a lookup table (project type, maintenance category)."""

    id: int
    name: str


@dataclass(frozen=True, slots=True)
class Vendor:
    id: int
    name: str
    contact_name: str = ""
    email: str = ""
    phone: str = ""
    website: str = ""
    notes: str = ""
    deleted_at: datetime | None = None

    kind = EntityKind.VENDOR


@dataclass(frozen=True, slots=True)
class Project:
    id: int
    title: str
    project_type_id: int
    status: ProjectStatus = ProjectStatus.PLANNED
    description: str = ""
    start_date: date | None = None
    end_date: date | None = None
    budget_cents: int | None = None
    actual_cents: int | None = None
    deleted_at: datetime | None = None

    kind = EntityKind.PROJECT


@dataclass(frozen=True, slots=True)
class Quote:
    id: int
    project_id: int
    vendor_id: int
    total_cents: int
    labor_cents: int | None = None
    materials_cents: int | None = None
    other_cents: int | None = None
    received_date: date | None = None
    notes: str = ""
    deleted_at: datetime | None = None

    kind = EntityKind.QUOTE


@dataclass(frozen=True, slots=True)
class Appliance:
    id: int
    name: str
    brand: str = ""
    model_number: str = ""
    serial_number: str = ""
    purchase_date: date | None = None
    warranty_expiry: date | None = None
    location: str = ""
    cost_cents: int | None = None
    notes: str = ""
    deleted_at: datetime | None = None

    kind = EntityKind.APPLIANCE


@dataclass(frozen=True, slots=True)
class MaintenanceItem:
    id: int
    name: str
    category_id: int
    appliance_id: int | None = None
    last_serviced_at: date | None = None
    interval_months: int = 0
    manual_url: str = ""
    manual_text: str = ""
    notes: str = ""
    cost_cents: int | None = None
    deleted_at: datetime | None = None

    kind = EntityKind.MAINTENANCE

    @property
    def next_due(self) -> date | None:
        """Date the item is next due, or ``None`` without a schedule."""
        if self.last_serviced_at is None or self.interval_months <= 0:
            return None
        return add_months(self.last_serviced_at, self.interval_months)


@dataclass(frozen=True, slots=True)
class Incident:
    id: int
    title: str
    date_noticed: date
    description: str = ""
    status: IncidentStatus = IncidentStatus.OPEN
    severity: IncidentSeverity = IncidentSeverity.SOON
    date_resolved: date | None = None
    location: str = ""
    cost_cents: int | None = None
    appliance_id: int | None = None
    vendor_id: int | None = None
    notes: str = ""
    deleted_at: datetime | None = None

    kind = EntityKind.INCIDENT


Record = Union[Project, Vendor, Quote, Appliance, MaintenanceItem, Incident]

RECORD_TYPES: dict[EntityKind, type] = {
    EntityKind.PROJECT: Project,
    EntityKind.VENDOR: Vendor,
    EntityKind.QUOTE: Quote,
    EntityKind.APPLIANCE: Appliance,
    EntityKind.MAINTENANCE: MaintenanceItem,
    EntityKind.INCIDENT: Incident,
}


def add_months(start: date, months: int) -> date:
    """Return ``start`` shifted by ``months``, clamping the day to month end."""
    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    day = min(start.day, _days_in_month(year, month))
    return date(year, month, day)


def _days_in_month(year: int, month: int) -> int:
    if month == 12:
        return 31
    return (date(year, month + 1, 1) - date(year, month, 1)).days
