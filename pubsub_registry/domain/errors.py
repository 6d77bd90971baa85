"""Exceptions raised by the registry and the event catalog."""

from __future__ import annotations


class PubSubError(Exception):
    """Base class for every error raised by this package."""


class InvalidHandlerError(PubSubError, TypeError):
    """Raised when something that is not callable is offered as a handler."""


class UnknownEventError(PubSubError, KeyError):
    """Raised when an event name is not part of a catalog."""

    def __init__(self, name: object) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Unknown event name: {self.name!r}"


class CatalogError(PubSubError, ValueError):
    """Raised when an event class cannot be registered in a catalog."""
