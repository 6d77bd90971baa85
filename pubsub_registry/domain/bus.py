"""Synchronous in-process publish/subscribe registry."""

from __future__ import annotations

from collections.abc import Hashable
from threading import RLock
from typing import Any, Generic, TypeVar

from pubsub_registry.core.logging import get_logger
from pubsub_registry.domain.errors import UnknownEventError
from pubsub_registry.domain.events import Event, EventCatalog
from pubsub_registry.domain.handlers import EventHandler, Subscription, handler_key

logger = get_logger(__name__)

EventT = TypeVar("EventT", bound=Event)


class Registry(Generic[EventT]):
    """Publish/subscribe registry keyed by event name.

    Handlers are called synchronously in the order they were first subscribed.
    ``publish`` dispatches to a snapshot of the handler set taken when the call
    starts: handlers added during dispatch wait for the next publish, handlers
    removed during dispatch still receive the event in flight. A handler that
    raises stops the dispatch and the exception reaches the publisher.

    A handler may be subscribed under several names. ``unsubscribe`` without a
    name removes it from all of them.
    """

    def __init__(self, catalog: EventCatalog | None = None) -> None:
        self._catalog = catalog
        # name -> {handler key: handler}, dicts keep insertion order
        self._handlers: dict[Hashable, dict[Hashable, EventHandler]] = {}
        # handler key -> {name: None}
        self._names: dict[Hashable, dict[Hashable, None]] = {}
        self._lock = RLock()

    @property
    def catalog(self) -> EventCatalog | None:
        return self._catalog

    def subscribe(self, event_name: Hashable, handler: EventHandler) -> Subscription:
        """Register ``handler`` for events named ``event_name``.

        Subscribing the same pair again changes nothing.
        """
        key = handler_key(handler)
        if self._catalog is not None and event_name not in self._catalog:
            raise UnknownEventError(event_name)
        with self._lock:
            handlers = self._handlers.setdefault(event_name, {})
            if key not in handlers:
                handlers[key] = handler
                self._names.setdefault(key, {})[event_name] = None
                logger.debug(
                    "handler_subscribed", event_name=event_name, handler=handler
                )
        return Subscription(name=event_name, handler=handler, registry=self)

    def unsubscribe(
        self, handler: EventHandler, event_name: Hashable | None = None
    ) -> None:
        """Remove ``handler`` from ``event_name``, or from every name if omitted.

        Unknown handlers are ignored.
        """
        key = handler_key(handler)
        with self._lock:
            names = self._names.get(key)
            if names is None:
                return
            targets = list(names) if event_name is None else [event_name]
            for name in targets:
                if name not in names:
                    continue
                del names[name]
                handlers = self._handlers[name]
                del handlers[key]
                if not handlers:
                    del self._handlers[name]
                logger.debug(
                    "handler_unsubscribed", event_name=name, handler=handler
                )
            if not names:
                del self._names[key]

    def publish(self, event: EventT) -> None:
        """Call every handler subscribed to ``event.name`` with ``event``."""
        with self._lock:
            handlers = list(self._handlers.get(event.name, {}).values())
        if not handlers:
            logger.debug("event_published", event_name=event.name, handlers=0)
            return
        logger.debug("event_published", event_name=event.name, handlers=len(handlers))
        for handler in handlers:
            try:
                handler(event)
            except Exception:
                logger.error(
                    "handler_failed",
                    event_name=event.name,
                    handler=handler,
                    exc_info=True,
                )
                raise

    def handlers(self, event_name: Hashable) -> tuple[EventHandler, ...]:
        """Handlers for ``event_name`` in dispatch order."""
        with self._lock:
            return tuple(self._handlers.get(event_name, {}).values())

    def names_for(self, handler: EventHandler) -> tuple[Hashable, ...]:
        key = handler_key(handler)
        with self._lock:
            return tuple(self._names.get(key, {}))

    def is_subscribed(
        self, handler: EventHandler, event_name: Hashable | None = None
    ) -> bool:
        names = self.names_for(handler)
        if event_name is None:
            return bool(names)
        return event_name in names

    @property
    def event_names(self) -> tuple[Hashable, ...]:
        with self._lock:
            return tuple(self._handlers)

    def clear(self) -> None:
        """Remove every subscription (useful in tests)."""
        with self._lock:
            self._handlers.clear()
            self._names.clear()

    def __len__(self) -> int:
        with self._lock:
            return sum(len(handlers) for handlers in self._handlers.values())


def create_registry(catalog: EventCatalog | None = None) -> Registry[Any]:
    """Return a fresh, empty registry."""
    return Registry(catalog)
