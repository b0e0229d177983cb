"""Handler for the vendors tab."""
from __future__ import annotations

from collections import Counter
from collections.abc import Mapping
from typing import Any

from rich.text import Text

from housetab.columns.spec import ColumnSpec
from housetab.entities.models import EntityKind, TabKind, Vendor
from housetab.handlers import forms
from housetab.handlers.base import EntityHandler, FormKind, assemble
from housetab.handlers.forms import FormField
from housetab.handlers.registry import register
from housetab.render.cells import empty_or, id_cell


@register(FormKind.VENDOR)
class VendorHandler(EntityHandler):
    entity_kind = EntityKind.VENDOR
    tab_kind = TabKind.VENDORS
    tab_name = "Vendors"
    column_defs = (
        (ColumnSpec("ID", 4), None),
        (ColumnSpec("Name", 14), "name"),
        (ColumnSpec("Contact", 12), "contact_name"),
        (ColumnSpec("Email", 16), "email"),
        (ColumnSpec("Phone", 12), "phone"),
        (ColumnSpec("Website", 16), "website"),
        (ColumnSpec("Quotes", 6), None),
    )
    fields = (
        FormField("name", "Name", required=True),
        FormField("contact_name", "Contact name"),
        FormField("email", "Email"),
        FormField("phone", "Phone"),
        FormField("website", "Website"),
        FormField("notes", "Notes"),
    )

    def row_context(self) -> Mapping[str, Any]:
        quotes = self._store.list(EntityKind.QUOTE)
        return {"quotes": Counter(quote.vendor_id for quote in quotes)}

    def cells(self, record: Vendor, context: Mapping[str, Any]) -> list[Text]:
        count = context["quotes"].get(record.id, 0)
        return [
            id_cell(record.id),
            Text(record.name),
            empty_or(record.contact_name),
            empty_or(record.email),
            empty_or(record.phone),
            empty_or(record.website),
            empty_or(str(count) if count else ""),
        ]

    def describe(self, record: Vendor) -> str:
        return f"vendor {record.name!r}"

    def to_values(self, record: Vendor) -> dict[str, str]:
        return {
            "name": record.name,
            "contact_name": record.contact_name,
            "email": record.email,
            "phone": record.phone,
            "website": record.website,
            "notes": record.notes,
        }

    def build(self, values: Mapping[str, str], base: Vendor | None) -> Vendor:
        fields = {
            field.name: forms.parse_text(values, field.name, required=field.required)
            for field in self.fields
        }
        return assemble(Vendor, base, fields)
