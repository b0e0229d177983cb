"""Handler for the maintenance tab."""
from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from rich.text import Text

from housetab.columns.spec import ColumnModel, ColumnSpec, LinkKind
from housetab.entities.models import EntityKind, LookupKind, MaintenanceItem, TabKind
from housetab.handlers import forms
from housetab.handlers.base import EntityHandler, FormKind, assemble
from housetab.handlers.forms import FormField, FormValueError
from housetab.handlers.registry import register
from housetab.render.cells import date_or_empty, empty_or, id_cell, money_or_empty

if TYPE_CHECKING:
    from housetab.app.session import Session

CATEGORY_TITLE = "Category"


@register(FormKind.MAINTENANCE)
class MaintenanceHandler(EntityHandler):
    entity_kind = EntityKind.MAINTENANCE
    tab_kind = TabKind.MAINTENANCE
    tab_name = "Maintenance"
    column_defs = (
        (ColumnSpec("ID", 4), None),
        (ColumnSpec("Item", 16), "name"),
        (ColumnSpec(CATEGORY_TITLE, 10), "category"),
        (ColumnSpec("Appliance", 12, link=LinkKind(TabKind.APPLIANCES)), "appliance"),
        (ColumnSpec("Last", 10), "last_serviced"),
        (ColumnSpec("Next", 10), None),
        (ColumnSpec("Every", 5), "interval"),
        (ColumnSpec("Cost", 10), "cost"),
    )
    fields = (
        FormField("name", "Item", required=True),
        FormField("category", "Category", required=True),
        FormField("appliance", "Appliance ID"),
        FormField("last_serviced", "Last serviced"),
        FormField("interval", "Interval (months)"),
        FormField("manual_url", "Manual URL"),
        FormField("manual_text", "Manual notes"),
        FormField("cost", "Cost"),
        FormField("notes", "Notes"),
    )

    def row_context(self) -> Mapping[str, Any]:
        categories = self._store.lookup(LookupKind.MAINTENANCE_CATEGORY)
        appliances = self._store.list(EntityKind.APPLIANCE, include_deleted=True)
        return {
            "categories": {value.id: value.name for value in categories},
            "appliances": {appliance.id: appliance.name for appliance in appliances},
        }

    def cells(self, record: MaintenanceItem, context: Mapping[str, Any]) -> list[Text]:
        appliance = ""
        if record.appliance_id is not None:
            appliance = context["appliances"].get(record.appliance_id, "")
        interval = f"{record.interval_months}m" if record.interval_months > 0 else ""
        return [
            id_cell(record.id),
            Text(record.name),
            empty_or(context["categories"].get(record.category_id, "")),
            empty_or(appliance),
            date_or_empty(record.last_serviced_at),
            date_or_empty(record.next_due),
            empty_or(interval),
            money_or_empty(record.cost_cents),
        ]

    def describe(self, record: MaintenanceItem) -> str:
        return f"maintenance item {record.name!r}"

    def default_values(self) -> dict[str, str]:
        categories = self._store.lookup(LookupKind.MAINTENANCE_CATEGORY)
        return {"category": categories[0].name if categories else ""}

    def to_values(self, record: MaintenanceItem) -> dict[str, str]:
        categories = self._store.lookup(LookupKind.MAINTENANCE_CATEGORY)
        names = {value.id: value.name for value in categories}
        return {
            "name": record.name,
            "category": names.get(record.category_id, ""),
            "appliance": forms.int_value(record.appliance_id),
            "last_serviced": forms.date_value(record.last_serviced_at),
            "interval": forms.int_value(record.interval_months or None),
            "manual_url": record.manual_url,
            "manual_text": record.manual_text,
            "cost": forms.cents_value(record.cost_cents),
            "notes": record.notes,
        }

    def build(self, values: Mapping[str, str], base: MaintenanceItem | None) -> MaintenanceItem:
        interval = forms.optional_int(values, "interval") or 0
        if interval < 0:
            raise FormValueError("interval", "must not be negative")
        fields = {
            "name": forms.parse_text(values, "name", required=True),
            "category_id": self._category_id(forms.parse_text(values, "category", required=True)),
            "appliance_id": forms.optional_int(values, "appliance"),
            "last_serviced_at": forms.optional_date(values, "last_serviced"),
            "interval_months": interval,
            "manual_url": forms.parse_text(values, "manual_url"),
            "manual_text": forms.parse_text(values, "manual_text"),
            "cost_cents": forms.optional_cents(values, "cost"),
            "notes": forms.parse_text(values, "notes"),
        }
        return assemble(MaintenanceItem, base, fields)

    def sync_fixed_values(self, session: Session, columns: ColumnModel) -> None:
        columns.set_fixed_values(
            CATEGORY_TITLE, session.lookup_names(LookupKind.MAINTENANCE_CATEGORY)
        )

    def _category_id(self, name: str) -> int:
        for value in self._store.lookup(LookupKind.MAINTENANCE_CATEGORY):
            if value.name.casefold() == name.casefold():
                return value.id
        raise FormValueError("category", f"unknown category {name!r}")
