"""Handler registry keyed by :class:`~housetab.handlers.base.FormKind`.

Handler classes register themselves with a decorator at import time::

    from housetab.handlers.registry import register

    @register(FormKind.PROJECT)
    class ProjectHandler(EntityHandler):
        ...

and the view resolves an instance for a tab::

    handler = handler_for(FormKind.PROJECT, store)

Every :class:`FormKind` member must have exactly one registered handler;
``housetab.handlers`` imports all implementations so the registry is
complete once the package is imported.
"""
from __future__ import annotations

import logging
from collections.abc import Callable

from housetab.handlers.base import EntityHandler, FormKind
from housetab.store.base import Store

logger = logging.getLogger(__name__)


class HandlerNotRegisteredError(KeyError):
    """Raised when no handler is registered for a form kind."""

    def __init__(self, kind: FormKind) -> None:
        self.kind = kind
        super().__init__(f"No handler is registered for form kind {kind.value!r}.")


class HandlerAlreadyRegisteredError(ValueError):
    """Raised when a second handler is registered for the same form kind."""

    def __init__(self, kind: FormKind, existing: type[EntityHandler]) -> None:
        self.kind = kind
        self.existing = existing
        super().__init__(
            f"Form kind {kind.value!r} is already handled by {existing.__qualname__}. "
            "Deregister the existing handler first."
        )


class HandlerRegistry:
    """Mapping from form kind to handler class."""

    def __init__(self) -> None:
        self._handlers: dict[FormKind, type[EntityHandler]] = {}

    def register(self, kind: FormKind) -> Callable[[type[EntityHandler]], type[EntityHandler]]:
        """Return a class decorator registering the class for ``kind``.

        Raises
        ------
        HandlerAlreadyRegisteredError
            If ``kind`` already has a handler.
        TypeError
            If the decorated class is not an :class:`EntityHandler`.
        ValueError
            If the class already handles a different kind.
        """

        def decorator(cls: type[EntityHandler]) -> type[EntityHandler]:
            self.register_class(kind, cls)
            return cls

        return decorator

    def register_class(self, kind: FormKind, cls: type[EntityHandler]) -> None:
        existing = self._handlers.get(kind)
        if existing is not None:
            raise HandlerAlreadyRegisteredError(kind, existing)
        if not (isinstance(cls, type) and issubclass(cls, EntityHandler)):
            raise TypeError(
                f"Cannot register {cls!r} for {kind.value!r}: "
                "it must be a subclass of EntityHandler."
            )
        declared = cls.__dict__.get("form_kind")
        if declared is not None and declared is not kind:
            raise ValueError(
                f"Cannot register {cls.__qualname__} for {kind.value!r}: "
                f"it already handles {declared.value!r}."
            )
        if declared is None:
            cls.form_kind = kind
        self._handlers[kind] = cls
        logger.debug("Registered handler %s for %r", cls.__qualname__, kind.value)

    def deregister(self, kind: FormKind) -> type[EntityHandler]:
        try:
            return self._handlers.pop(kind)
        except KeyError:
            raise HandlerNotRegisteredError(kind) from None

    def get(self, kind: FormKind) -> type[EntityHandler]:
        try:
            return self._handlers[kind]
        except KeyError:
            raise HandlerNotRegisteredError(kind) from None

    def kinds(self) -> list[FormKind]:
        """Registered form kinds in :class:`FormKind` declaration order."""
        return [kind for kind in FormKind if kind in self._handlers]

    def __contains__(self, kind: object) -> bool:
        return kind in self._handlers

    def __len__(self) -> int:
        return len(self._handlers)

    def __repr__(self) -> str:
        return f"HandlerRegistry(kinds={[kind.value for kind in self.kinds()]})"


_REGISTRY = HandlerRegistry()

register = _REGISTRY.register


def registry() -> HandlerRegistry:
    """Return the process-wide handler registry."""
    return _REGISTRY


def handler_for(kind: FormKind, store: Store) -> EntityHandler:
    """Instantiate the handler registered for ``kind``.

    Raises
    ------
    HandlerNotRegisteredError
        If no handler is registered for ``kind``.
    """
    return _REGISTRY.get(kind)(store)
