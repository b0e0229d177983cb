"""Entity handlers sub-package.

Importing this package registers one handler per :class:`FormKind`.
"""
from __future__ import annotations

from housetab.handlers.base import (
    EntityHandler,
    ErrorKind,
    FormKind,
    HandlerError,
    RowMeta,
    UndoEntry,
    translate_store_errors,
)
from housetab.handlers.forms import FormField, FormState, FormValueError
from housetab.handlers.registry import (
    HandlerAlreadyRegisteredError,
    HandlerNotRegisteredError,
    HandlerRegistry,
    handler_for,
    register,
    registry,
)

# Imported for their registration side effect.
from housetab.handlers.project import ProjectHandler
from housetab.handlers.quote import QuoteHandler
from housetab.handlers.maintenance import MaintenanceHandler
from housetab.handlers.appliance import ApplianceHandler
from housetab.handlers.vendor import VendorHandler
from housetab.handlers.incident import IncidentHandler

__all__ = [
    "ApplianceHandler",
    "EntityHandler",
    "ErrorKind",
    "FormField",
    "FormKind",
    "FormState",
    "FormValueError",
    "HandlerAlreadyRegisteredError",
    "HandlerError",
    "HandlerNotRegisteredError",
    "HandlerRegistry",
    "IncidentHandler",
    "MaintenanceHandler",
    "ProjectHandler",
    "QuoteHandler",
    "RowMeta",
    "UndoEntry",
    "VendorHandler",
    "handler_for",
    "register",
    "registry",
    "translate_store_errors",
]
