"""Handler for the incidents tab."""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from rich.text import Text

from housetab.columns.spec import ColumnSpec, LinkKind
from housetab.entities.models import (
    EntityKind,
    Incident,
    IncidentSeverity,
    IncidentStatus,
    TabKind,
)
from housetab.handlers import forms
from housetab.handlers.base import EntityHandler, FormKind, assemble
from housetab.handlers.forms import FormField, FormValueError
from housetab.handlers.registry import register
from housetab.render.cells import date_or_empty, empty_or, id_cell, money_or_empty
from housetab.render.theme import WARNING


@register(FormKind.INCIDENT)
class IncidentHandler(EntityHandler):
    entity_kind = EntityKind.INCIDENT
    tab_kind = TabKind.INCIDENTS
    tab_name = "Incidents"
    column_defs = (
        (ColumnSpec("ID", 4), None),
        (ColumnSpec("Title", 16), "title"),
        (ColumnSpec("Status", 6, fixed_values=tuple(s.value for s in IncidentStatus)), "status"),
        (ColumnSpec("Severity", 8, fixed_values=tuple(s.value for s in IncidentSeverity)), "severity"),
        (ColumnSpec("Location", 10), "location"),
        (ColumnSpec("Noticed", 10), "date_noticed"),
        (ColumnSpec("Resolved", 10), "date_resolved"),
        (ColumnSpec("Cost", 10), "cost"),
        (ColumnSpec("Appliance", 12, link=LinkKind(TabKind.APPLIANCES)), "appliance"),
        (ColumnSpec("Vendor", 12, link=LinkKind(TabKind.VENDORS)), "vendor"),
    )
    fields = (
        FormField("title", "Title", required=True),
        FormField("date_noticed", "Date noticed", required=True),
        FormField("status", "Status"),
        FormField("severity", "Severity"),
        FormField("description", "Description"),
        FormField("location", "Location"),
        FormField("date_resolved", "Date resolved"),
        FormField("cost", "Cost"),
        FormField("appliance", "Appliance ID"),
        FormField("vendor", "Vendor ID"),
        FormField("notes", "Notes"),
    )

    def row_context(self) -> Mapping[str, Any]:
        appliances = self._store.list(EntityKind.APPLIANCE, include_deleted=True)
        vendors = self._store.list(EntityKind.VENDOR, include_deleted=True)
        return {
            "appliances": {appliance.id: appliance.name for appliance in appliances},
            "vendors": {vendor.id: vendor.name for vendor in vendors},
        }

    def cells(self, record: Incident, context: Mapping[str, Any]) -> list[Text]:
        severity = Text(record.severity.value)
        if record.severity is IncidentSeverity.URGENT:
            severity.stylize(f"bold {WARNING}")
        return [
            id_cell(record.id),
            Text(record.title),
            Text(record.status.value),
            severity,
            empty_or(record.location),
            date_or_empty(record.date_noticed),
            date_or_empty(record.date_resolved),
            money_or_empty(record.cost_cents),
            empty_or(_related(context["appliances"], record.appliance_id)),
            empty_or(_related(context["vendors"], record.vendor_id)),
        ]

    def describe(self, record: Incident) -> str:
        return f"incident {record.title!r}"

    def default_values(self) -> dict[str, str]:
        return {
            "status": IncidentStatus.OPEN.value,
            "severity": IncidentSeverity.SOON.value,
        }

    def to_values(self, record: Incident) -> dict[str, str]:
        return {
            "title": record.title,
            "date_noticed": forms.date_value(record.date_noticed),
            "status": record.status.value,
            "severity": record.severity.value,
            "description": record.description,
            "location": record.location,
            "date_resolved": forms.date_value(record.date_resolved),
            "cost": forms.cents_value(record.cost_cents),
            "appliance": forms.int_value(record.appliance_id),
            "vendor": forms.int_value(record.vendor_id),
            "notes": record.notes,
        }

    def build(self, values: Mapping[str, str], base: Incident | None) -> Incident:
        noticed = forms.required_date(values, "date_noticed")
        resolved = forms.optional_date(values, "date_resolved")
        if resolved is not None and resolved < noticed:
            raise FormValueError("date_resolved", "is before the date noticed")
        fields = {
            "title": forms.parse_text(values, "title", required=True),
            "date_noticed": noticed,
            "status": forms.parse_enum(values, "status", IncidentStatus, IncidentStatus.OPEN),
            "severity": forms.parse_enum(
                values, "severity", IncidentSeverity, IncidentSeverity.SOON
            ),
            "description": forms.parse_text(values, "description"),
            "location": forms.parse_text(values, "location"),
            "date_resolved": resolved,
            "cost_cents": forms.optional_cents(values, "cost"),
            "appliance_id": forms.optional_int(values, "appliance"),
            "vendor_id": forms.optional_int(values, "vendor"),
            "notes": forms.parse_text(values, "notes"),
        }
        return assemble(Incident, base, fields)


def _related(names: Mapping[int, str], related_id: int | None) -> str:
    if related_id is None:
        return ""
    return names.get(related_id, "")
