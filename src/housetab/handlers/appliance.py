"""Handler for the appliances tab."""
from __future__ import annotations

from collections import Counter
from collections.abc import Mapping
from typing import Any

from rich.text import Text

from housetab.columns.spec import ColumnSpec
from housetab.entities.models import Appliance, EntityKind, TabKind
from housetab.handlers import forms
from housetab.handlers.base import EntityHandler, FormKind, assemble
from housetab.handlers.forms import FormField
from housetab.handlers.registry import register
from housetab.render.cells import date_or_empty, empty_or, id_cell, money_or_empty


@register(FormKind.APPLIANCE)
class ApplianceHandler(EntityHandler):
    entity_kind = EntityKind.APPLIANCE
    tab_kind = TabKind.APPLIANCES
    tab_name = "Appliances"
    column_defs = (
        (ColumnSpec("ID", 4), None),
        (ColumnSpec("Name", 14), "name"),
        (ColumnSpec("Brand", 10), "brand"),
        (ColumnSpec("Model", 10), "model_number"),
        (ColumnSpec("Serial", 10), "serial_number"),
        (ColumnSpec("Location", 10), "location"),
        (ColumnSpec("Purchased", 10), "purchase_date"),
        (ColumnSpec("Warranty", 10), "warranty_expiry"),
        (ColumnSpec("Cost", 10), "cost"),
        (ColumnSpec("Maint", 5), None),
    )
    fields = (
        FormField("name", "Name", required=True),
        FormField("brand", "Brand"),
        FormField("model_number", "Model number"),
        FormField("serial_number", "Serial number"),
        FormField("location", "Location"),
        FormField("purchase_date", "Purchase date"),
        FormField("warranty_expiry", "Warranty expiry"),
        FormField("cost", "Cost"),
        FormField("notes", "Notes"),
    )

    def row_context(self) -> Mapping[str, Any]:
        items = self._store.list(EntityKind.MAINTENANCE)
        return {"maintenance": Counter(item.appliance_id for item in items)}

    def cells(self, record: Appliance, context: Mapping[str, Any]) -> list[Text]:
        count = context["maintenance"].get(record.id, 0)
        return [
            id_cell(record.id),
            Text(record.name),
            empty_or(record.brand),
            empty_or(record.model_number),
            empty_or(record.serial_number),
            empty_or(record.location),
            date_or_empty(record.purchase_date),
            date_or_empty(record.warranty_expiry),
            money_or_empty(record.cost_cents),
            empty_or(str(count) if count else ""),
        ]

    def describe(self, record: Appliance) -> str:
        return f"appliance {record.name!r}"

    def to_values(self, record: Appliance) -> dict[str, str]:
        return {
            "name": record.name,
            "brand": record.brand,
            "model_number": record.model_number,
            "serial_number": record.serial_number,
            "location": record.location,
            "purchase_date": forms.date_value(record.purchase_date),
            "warranty_expiry": forms.date_value(record.warranty_expiry),
            "cost": forms.cents_value(record.cost_cents),
            "notes": record.notes,
        }

    def build(self, values: Mapping[str, str], base: Appliance | None) -> Appliance:
        fields = {
            "name": forms.parse_text(values, "name", required=True),
            "brand": forms.parse_text(values, "brand"),
            "model_number": forms.parse_text(values, "model_number"),
            "serial_number": forms.parse_text(values, "serial_number"),
            "location": forms.parse_text(values, "location"),
            "purchase_date": forms.optional_date(values, "purchase_date"),
            "warranty_expiry": forms.optional_date(values, "warranty_expiry"),
            "cost_cents": forms.optional_cents(values, "cost"),
            "notes": forms.parse_text(values, "notes"),
        }
        return assemble(Appliance, base, fields)
