"""Form state and value parsing for entity forms.

Forms are plain data: a :class:`FormState` holds the raw string value of
every field.  Handlers convert records to values when a form opens and
parse values back into records on submit.  Widgets and per-keystroke
validation live outside this package.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import TYPE_CHECKING, TypeVar

if TYPE_CHECKING:
    from housetab.handlers.base import FormKind

E = TypeVar("E", bound=Enum)

_MONEY_RE = re.compile(r"^-?\$?\d{1,3}(,\d{3})*(\.\d{1,2})?$|^-?\$?\d+(\.\d{1,2})?$")


class FormValueError(ValueError):
    """A submitted field value could not be parsed.

    Parameters
    ----------
    field_name:
        The form field holding the bad value.
    message:
        What is wrong with it.
    """

    def __init__(self, field_name: str, message: str) -> None:
        self.field_name = field_name
        super().__init__(f"{field_name}: {message}")


@dataclass(frozen=True, slots=True)
class FormField:
    """Descriptor of one form field."""

    name: str
    label: str
    required: bool = False


@dataclass
class FormState:
    """An open add or edit form.

    Parameters
    ----------
    kind:
        Entity type the form belongs to.
    edit_id:
        Id of the record being edited, or ``None`` for a new record.
    values:
        Raw field values keyed by field name.
    focus:
        Field to focus first; set by inline edits.
    """

    kind: FormKind
    edit_id: int | None = None
    values: dict[str, str] = field(default_factory=dict)
    focus: str | None = None

    @property
    def is_edit(self) -> bool:
        return self.edit_id is not None

    def set(self, name: str, value: str) -> None:
        self.values[name] = value


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


def parse_text(values: dict[str, str], name: str, required: bool = False) -> str:
    value = values.get(name, "").strip()
    if required and not value:
        raise FormValueError(name, "is required")
    return value


def parse_cents(raw: str) -> int:
    """Parse a dollar amount into integer cents.

    Accepts ``"1234"``, ``"1,234.5"``, ``"$1,234.56"`` and a leading minus.
    """
    text = raw.strip()
    if not _MONEY_RE.match(text):
        raise ValueError(f"not a dollar amount: {raw!r}")
    negative = text.startswith("-")
    digits = text.lstrip("-").replace("$", "").replace(",", "")
    whole, _, fraction = digits.partition(".")
    cents = int(whole) * 100 + int(fraction.ljust(2, "0"))
    return -cents if negative else cents


def optional_cents(values: dict[str, str], name: str) -> int | None:
    raw = values.get(name, "").strip()
    if not raw:
        return None
    try:
        return parse_cents(raw)
    except ValueError as exc:
        raise FormValueError(name, str(exc)) from exc


def required_cents(values: dict[str, str], name: str) -> int:
    cents = optional_cents(values, name)
    if cents is None:
        raise FormValueError(name, "is required")
    return cents


def parse_date(raw: str) -> date:
    """Parse an ISO ``YYYY-MM-DD`` date."""
    try:
        return date.fromisoformat(raw.strip())
    except ValueError:
        raise ValueError(f"expected YYYY-MM-DD, got {raw!r}") from None


def optional_date(values: dict[str, str], name: str) -> date | None:
    raw = values.get(name, "").strip()
    if not raw:
        return None
    try:
        return parse_date(raw)
    except ValueError as exc:
        raise FormValueError(name, str(exc)) from exc


def required_date(values: dict[str, str], name: str) -> date:
    parsed = optional_date(values, name)
    if parsed is None:
        raise FormValueError(name, "is required")
    return parsed


def parse_int(raw: str) -> int:
    try:
        return int(raw.strip())
    except ValueError:
        raise ValueError(f"expected a whole number, got {raw!r}") from None


def optional_int(values: dict[str, str], name: str) -> int | None:
    raw = values.get(name, "").strip()
    if not raw:
        return None
    try:
        return parse_int(raw)
    except ValueError as exc:
        raise FormValueError(name, str(exc)) from exc


def required_int(values: dict[str, str], name: str) -> int:
    parsed = optional_int(values, name)
    if parsed is None:
        raise FormValueError(name, "is required")
    return parsed


def parse_enum(values: dict[str, str], name: str, enum_type: type[E], default: E) -> E:
    raw = values.get(name, "").strip().lower()
    if not raw:
        return default
    try:
        return enum_type(raw)
    except ValueError:
        choices = ", ".join(member.value for member in enum_type)
        raise FormValueError(name, f"expected one of {choices}, got {raw!r}") from None


# ---------------------------------------------------------------------------
# Formatting (record -> form values)
# ---------------------------------------------------------------------------


def cents_value(cents: int | None) -> str:
    if cents is None:
        return ""
    sign = "-" if cents < 0 else ""
    dollars, remainder = divmod(abs(cents), 100)
    return f"{sign}{dollars}.{remainder:02d}"


def date_value(value: date | None) -> str:
    return value.isoformat() if value is not None else ""


def int_value(value: int | None) -> str:
    return str(value) if value is not None else ""
