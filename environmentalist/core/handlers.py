# environmentalist/core/handlers.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import importlib
import logging
from typing import Any, Callable, Iterable, List, Optional

from environmentalist.core.collection import OrderedUniqueList
from environmentalist.core.errors import HandlerResolutionError
from environmentalist.core.events import FaultEvent
from environmentalist.interfaces.protocols import Handler
from environmentalist.interfaces.types import NOT_HANDLED
from environmentalist.runtime.concurrency import with_lock

logger = logging.getLogger(__name__)


class CallableHandler:
    """
    Wraps a function, bound method or closure. Two wrappers are equal when the
    wrapped callables are equal, so ``obj.method`` registered twice is one
    handler.
    """

    __slots__ = ("func",)

    def __init__(self, func: Callable[[FaultEvent], Any]) -> None:
        self.func = func

    def handle(self, event: FaultEvent) -> Any:
        return self.func(event)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CallableHandler):
            return NotImplemented
        return self.func == other.func

    def __hash__(self) -> int:
        return hash(self.func)

    def __repr__(self) -> str:
        return f"CallableHandler({self.func!r})"


class NamedHandler:
    """
    Refers to a function by ``"package.module:function"`` (or the dotted form
    ``"package.module.function"``). The target is imported on first use, so a
    handler can be registered before its module is importable.
    """

    __slots__ = ("reference", "_target")

    def __init__(self, reference: str) -> None:
        self.reference = reference
        self._target: Optional[Callable[[FaultEvent], Any]] = None

    def resolve(self) -> Callable[[FaultEvent], Any]:
        """
        Import and return the referenced callable.

        :raises HandlerResolutionError: If the module or attribute is missing
            or the attribute is not callable.
        """
        if self._target is not None:
            return self._target

        if ":" in self.reference:
            module_name, _, attribute_path = self.reference.partition(":")
        else:
            module_name, _, attribute_path = self.reference.rpartition(".")
        if not module_name or not attribute_path:
            raise HandlerResolutionError(f"Invalid handler reference '{self.reference}'", self.reference)

        try:
            target: Any = importlib.import_module(module_name)
            for attribute in attribute_path.split("."):
                target = getattr(target, attribute)
        except (ImportError, AttributeError) as exc:
            raise HandlerResolutionError(
                f"Cannot resolve handler '{self.reference}': {exc}", self.reference
            ) from exc

        if not callable(target):
            raise HandlerResolutionError(f"Handler '{self.reference}' is not callable", self.reference)
        self._target = target
        return target

    def handle(self, event: FaultEvent) -> Any:
        return self.resolve()(event)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NamedHandler):
            return NotImplemented
        return self.reference == other.reference

    def __hash__(self) -> int:
        return hash(self.reference)

    def __repr__(self) -> str:
        return f"NamedHandler({self.reference!r})"


def as_handler(obj: Any) -> Handler:
    """
    Coerce ``obj`` into a Handler.

    Objects already providing ``handle`` are returned unchanged, strings become
    NamedHandlers and any other callable is wrapped in a CallableHandler.

    :raises TypeError: If ``obj`` is none of these.
    """
    if isinstance(obj, str):
        return NamedHandler(obj)
    if isinstance(obj, Handler):
        return obj
    if callable(obj):
        return CallableHandler(obj)
    raise TypeError(f"{obj!r} cannot be used as a fault handler")


class _HandlerInvoker:
    """
    Internal helper that walks a snapshot of handlers and stops at the first
    one that does not decline.
    """

    def __init__(self, handlers: List[Handler]) -> None:
        self._handlers = handlers

    def invoke(self, event: FaultEvent) -> Optional[Handler]:
        """
        Call each handler in order.

        :return: The handler that claimed the event, or None.
        """
        for handler in self._handlers:
            if handler.handle(event) is not NOT_HANDLED:
                return handler
        return None


class HandlerChain(OrderedUniqueList[Handler]):
    """
    Ordered fault handlers. The first handler whose result is not ``False``
    claims the event; if every handler declines, the ``default`` handler
    (usually the one displaced when the environment was enabled) gets it.

    Handler exceptions propagate to the caller of ``dispatch``.
    """

    def __init__(
        self, handlers: Iterable[Any] = (), default: Optional[Any] = None, lock: Optional[Any] = None
    ) -> None:
        super().__init__(handlers, lock=lock)
        self._default: Optional[Handler] = as_handler(default) if default is not None else None

    def _coerce(self, item: Any) -> Handler:
        return as_handler(item)

    def handlers(self) -> List[Handler]:
        """Return the registered handlers in dispatch order."""
        return self.list()

    @property
    def default(self) -> Optional[Handler]:
        with with_lock(self._lock):
            return self._default

    @default.setter
    def default(self, handler: Optional[Any]) -> None:
        with with_lock(self._lock):
            self._default = as_handler(handler) if handler is not None else None

    def dispatch(self, event: FaultEvent) -> bool:
        """
        Offer ``event`` to each handler in order, then to the default.

        :return: True if some handler claimed the event, False if it remains
            unhandled and the host should apply its own fallback.
        """
        with with_lock(self._lock):
            handlers = self._load()
            default = self._default

        claimed_by = _HandlerInvoker(handlers).invoke(event)
        if claimed_by is not None:
            logger.debug("Fault %r handled by %r", event.message, claimed_by)
            return True

        if default is None:
            logger.debug("Fault %r not handled", event.message)
            return False
        return default.handle(event) is not NOT_HANDLED
