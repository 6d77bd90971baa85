"""In-process publish/subscribe registry."""

from pubsub_registry.core.config import Settings, get_settings
from pubsub_registry.core.logging import get_logger, setup_logging
from pubsub_registry.domain.bus import Registry, create_registry
from pubsub_registry.domain.errors import (
    CatalogError,
    InvalidHandlerError,
    PubSubError,
    UnknownEventError,
)
from pubsub_registry.domain.events import Event, EventCatalog
from pubsub_registry.domain.handlers import EventHandler, Subscription, handler_key

__all__ = [
    "CatalogError",
    "Event",
    "EventCatalog",
    "EventHandler",
    "InvalidHandlerError",
    "PubSubError",
    "Registry",
    "Settings",
    "Subscription",
    "UnknownEventError",
    "create_registry",
    "get_logger",
    "get_settings",
    "handler_key",
    "setup_logging",
]
