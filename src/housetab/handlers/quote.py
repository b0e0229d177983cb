"""Handler for the quotes tab.

Quotes reference a project and a vendor; both columns carry a ``m:1``
link so the view can jump to the referenced row.
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from rich.text import Text

from housetab.columns.spec import ColumnSpec, LinkKind
from housetab.entities.models import EntityKind, Quote, TabKind
from housetab.handlers import forms
from housetab.handlers.base import EntityHandler, FormKind, assemble
from housetab.handlers.forms import FormField
from housetab.handlers.registry import register
from housetab.render.cells import date_or_empty, empty_or, id_cell, money_cell, money_or_empty


@register(FormKind.QUOTE)
class QuoteHandler(EntityHandler):
    entity_kind = EntityKind.QUOTE
    tab_kind = TabKind.QUOTES
    tab_name = "Quotes"
    column_defs = (
        (ColumnSpec("ID", 4), None),
        (ColumnSpec("Project", 14, link=LinkKind(TabKind.PROJECTS)), "project"),
        (ColumnSpec("Vendor", 12, link=LinkKind(TabKind.VENDORS)), "vendor"),
        (ColumnSpec("Total", 10), "total"),
        (ColumnSpec("Labor", 10), "labor"),
        (ColumnSpec("Mat", 10), "materials"),
        (ColumnSpec("Other", 10), "other"),
        (ColumnSpec("Recv", 10), "received"),
    )
    fields = (
        FormField("project", "Project ID", required=True),
        FormField("vendor", "Vendor ID", required=True),
        FormField("total", "Total", required=True),
        FormField("labor", "Labor"),
        FormField("materials", "Materials"),
        FormField("other", "Other"),
        FormField("received", "Received date"),
        FormField("notes", "Notes"),
    )

    def row_context(self) -> Mapping[str, Any]:
        projects = self._store.list(EntityKind.PROJECT, include_deleted=True)
        vendors = self._store.list(EntityKind.VENDOR, include_deleted=True)
        return {
            "projects": {project.id: project.title for project in projects},
            "vendors": {vendor.id: vendor.name for vendor in vendors},
        }

    def cells(self, record: Quote, context: Mapping[str, Any]) -> list[Text]:
        return [
            id_cell(record.id),
            empty_or(context["projects"].get(record.project_id, "")),
            empty_or(context["vendors"].get(record.vendor_id, "")),
            money_cell(record.total_cents),
            money_or_empty(record.labor_cents),
            money_or_empty(record.materials_cents),
            money_or_empty(record.other_cents),
            date_or_empty(record.received_date),
        ]

    def describe(self, record: Quote) -> str:
        return f"quote {record.id}"

    def to_values(self, record: Quote) -> dict[str, str]:
        return {
            "project": str(record.project_id),
            "vendor": str(record.vendor_id),
            "total": forms.cents_value(record.total_cents),
            "labor": forms.cents_value(record.labor_cents),
            "materials": forms.cents_value(record.materials_cents),
            "other": forms.cents_value(record.other_cents),
            "received": forms.date_value(record.received_date),
            "notes": record.notes,
        }

    def build(self, values: Mapping[str, str], base: Quote | None) -> Quote:
        fields = {
            "project_id": forms.required_int(values, "project"),
            "vendor_id": forms.required_int(values, "vendor"),
            "total_cents": forms.required_cents(values, "total"),
            "labor_cents": forms.optional_cents(values, "labor"),
            "materials_cents": forms.optional_cents(values, "materials"),
            "other_cents": forms.optional_cents(values, "other"),
            "received_date": forms.optional_date(values, "received"),
            "notes": forms.parse_text(values, "notes"),
        }
        return assemble(Quote, base, fields)
