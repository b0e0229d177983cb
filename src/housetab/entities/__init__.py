"""Entity records sub-package.

Re-exports the frozen record dataclasses and the enums shared between the
store, the handlers and the table view.
"""
from __future__ import annotations

from housetab.entities.models import (
    RECORD_TYPES,
    Appliance,
    EntityKind,
    Incident,
    IncidentSeverity,
    IncidentStatus,
    LookupKind,
    LookupValue,
    MaintenanceItem,
    Project,
    ProjectStatus,
    Quote,
    Record,
    TabKind,
    Vendor,
    add_months,
)

__all__ = [
    "RECORD_TYPES",
    "Appliance",
    "EntityKind",
    "Incident",
    "IncidentSeverity",
    "IncidentStatus",
    "LookupKind",
    "LookupValue",
    "MaintenanceItem",
    "Project",
    "ProjectStatus",
    "Quote",
    "Record",
    "TabKind",
    "Vendor",
    "add_months",
]
