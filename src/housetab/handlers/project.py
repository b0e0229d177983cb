"""Handler for the projects tab."""
from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from rich.text import Text

from housetab.columns.spec import ColumnModel, ColumnSpec
from housetab.entities.models import (
    EntityKind,
    LookupKind,
    Project,
    ProjectStatus,
    TabKind,
)
from housetab.handlers import forms
from housetab.handlers.base import EntityHandler, FormKind, assemble
from housetab.handlers.forms import FormField, FormValueError
from housetab.handlers.registry import register
from housetab.render.cells import date_or_empty, empty_or, id_cell, money_or_empty

if TYPE_CHECKING:
    from housetab.app.session import Session

TYPE_TITLE = "Type"


@register(FormKind.PROJECT)
class ProjectHandler(EntityHandler):
    entity_kind = EntityKind.PROJECT
    tab_kind = TabKind.PROJECTS
    tab_name = "Projects"
    column_defs = (
        (ColumnSpec("ID", 4), None),
        (ColumnSpec(TYPE_TITLE, 8), "type"),
        (ColumnSpec("Title", 16), "title"),
        (ColumnSpec("Status", 8, fixed_values=tuple(s.value for s in ProjectStatus)), "status"),
        (ColumnSpec("Budget", 10), "budget"),
        (ColumnSpec("Actual", 10), "actual"),
        (ColumnSpec("Start", 10), "start_date"),
        (ColumnSpec("End", 10), "end_date"),
    )
    fields = (
        FormField("type", "Type", required=True),
        FormField("title", "Title", required=True),
        FormField("status", "Status"),
        FormField("description", "Description"),
        FormField("budget", "Budget"),
        FormField("actual", "Actual cost"),
        FormField("start_date", "Start date"),
        FormField("end_date", "End date"),
    )

    def row_context(self) -> Mapping[str, Any]:
        types = self._store.lookup(LookupKind.PROJECT_TYPE)
        return {"types": {value.id: value.name for value in types}}

    def cells(self, record: Project, context: Mapping[str, Any]) -> list[Text]:
        return [
            id_cell(record.id),
            empty_or(context["types"].get(record.project_type_id, "")),
            Text(record.title),
            Text(record.status.value),
            money_or_empty(record.budget_cents),
            money_or_empty(record.actual_cents),
            date_or_empty(record.start_date),
            date_or_empty(record.end_date),
        ]

    def describe(self, record: Project) -> str:
        return f"project {record.title!r}"

    def default_values(self) -> dict[str, str]:
        types = self._store.lookup(LookupKind.PROJECT_TYPE)
        return {
            "type": types[0].name if types else "",
            "status": ProjectStatus.PLANNED.value,
        }

    def to_values(self, record: Project) -> dict[str, str]:
        names = {value.id: value.name for value in self._store.lookup(LookupKind.PROJECT_TYPE)}
        return {
            "type": names.get(record.project_type_id, ""),
            "title": record.title,
            "status": record.status.value,
            "description": record.description,
            "budget": forms.cents_value(record.budget_cents),
            "actual": forms.cents_value(record.actual_cents),
            "start_date": forms.date_value(record.start_date),
            "end_date": forms.date_value(record.end_date),
        }

    def build(self, values: Mapping[str, str], base: Project | None) -> Project:
        start = forms.optional_date(values, "start_date")
        end = forms.optional_date(values, "end_date")
        if start is not None and end is not None and end < start:
            raise FormValueError("end_date", "is before the start date")
        fields = {
            "project_type_id": self._type_id(forms.parse_text(values, "type", required=True)),
            "title": forms.parse_text(values, "title", required=True),
            "status": forms.parse_enum(values, "status", ProjectStatus, ProjectStatus.PLANNED),
            "description": forms.parse_text(values, "description"),
            "budget_cents": forms.optional_cents(values, "budget"),
            "actual_cents": forms.optional_cents(values, "actual"),
            "start_date": start,
            "end_date": end,
        }
        return assemble(Project, base, fields)

    def sync_fixed_values(self, session: Session, columns: ColumnModel) -> None:
        columns.set_fixed_values(TYPE_TITLE, session.lookup_names(LookupKind.PROJECT_TYPE))

    def _type_id(self, name: str) -> int:
        for value in self._store.lookup(LookupKind.PROJECT_TYPE):
            if value.name.casefold() == name.casefold():
                return value.id
        raise FormValueError("type", f"unknown project type {name!r}")
