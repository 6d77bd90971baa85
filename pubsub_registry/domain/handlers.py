"""Handler identity and subscription tokens."""

from __future__ import annotations

import types
from collections.abc import Hashable
from typing import Any, Callable

from pydantic import BaseModel, ConfigDict, Field

from pubsub_registry.domain.errors import InvalidHandlerError

EventHandler = Callable[[Any], None]


def handler_key(handler: EventHandler) -> Hashable:
    """Return the identity key the registry stores ``handler`` under.

    Handlers are compared by identity, never by value. Bound methods are the
    exception: every ``obj.method`` access builds a new method object, so they
    are keyed on the (instance, function) pair they wrap. That covers methods
    of builtin types too, such as ``seen.append``. Keys are only stable
    while the handler is alive, which the registry guarantees by holding a
    reference to every handler it has a key for.
    """
    if not callable(handler):
        raise InvalidHandlerError(f"Handler must be callable, got {handler!r}")
    if isinstance(handler, types.MethodType):
        return (id(handler.__self__), id(handler.__func__))
    if isinstance(handler, types.BuiltinMethodType) and not (
        handler.__self__ is None or isinstance(handler.__self__, types.ModuleType)
    ):
        return (id(handler.__self__), handler.__name__)
    return id(handler)


class Subscription(BaseModel):
    """One handler registered under one event name.

    Returned by ``Registry.subscribe``; ``cancel`` removes exactly this pair.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: Hashable
    handler: Callable[..., Any]
    registry: Any = Field(default=None, repr=False, exclude=True)

    def cancel(self) -> None:
        if self.registry is not None:
            self.registry.unsubscribe(self.handler, self.name)
