"""Event models and the runtime catalog of event shapes."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any, Literal, TypeVar, get_args, get_origin

from pydantic import BaseModel, ConfigDict

from pubsub_registry.domain.errors import CatalogError, UnknownEventError


class Event(BaseModel):
    """Base event: a ``name`` discriminator plus a payload.

    Subclasses narrow ``name`` to a ``Literal`` and ``payload`` to a model,
    e.g.::

        class UserRenamed(Event):
            name: Literal["UserRenamed"] = "UserRenamed"
            payload: UserRenamedPayload
    """

    model_config = ConfigDict(frozen=True)

    name: str
    payload: Any = None


EventT = TypeVar("EventT", bound=type[Event])


def _literal_name(event_type: type[Event]) -> str:
    field = event_type.model_fields.get("name")
    if field is None or get_origin(field.annotation) is not Literal:
        raise CatalogError(
            f"{event_type.__name__} must declare 'name' as a Literal to be catalogued"
        )
    values = get_args(field.annotation)
    if len(values) != 1:
        raise CatalogError(
            f"{event_type.__name__} must declare exactly one literal name, "
            f"got {values!r}"
        )
    return values[0]


class EventCatalog:
    """Closed set of event shapes, keyed by event name."""

    def __init__(self, *event_types: type[Event]) -> None:
        self._types: dict[str, type[Event]] = {}
        for event_type in event_types:
            self.register(event_type)

    def register(self, event_type: EventT) -> EventT:
        """Add ``event_type`` to the catalog. Usable as a class decorator."""
        if not (isinstance(event_type, type) and issubclass(event_type, Event)):
            raise CatalogError(f"{event_type!r} is not an Event subclass")
        name = _literal_name(event_type)
        existing = self._types.get(name)
        if existing is not None and existing is not event_type:
            raise CatalogError(
                f"Event name {name!r} is already registered to {existing.__name__}"
            )
        self._types[name] = event_type
        return event_type

    def get(self, name: str) -> type[Event] | None:
        return self._types.get(name)

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(self._types)

    def parse(self, data: Mapping[str, Any]) -> Event:
        """Validate a raw ``{"name": ..., "payload": ...}`` mapping.

        Raises ``UnknownEventError`` for a name outside the catalog; payload
        problems surface as pydantic's ``ValidationError``.
        """
        name = data.get("name") if isinstance(data, Mapping) else None
        event_type = self._types.get(name) if isinstance(name, str) else None
        if event_type is None:
            raise UnknownEventError(name)
        return event_type.model_validate(data)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name in self._types

    def __iter__(self) -> Iterator[type[Event]]:
        return iter(self._types.values())

    def __len__(self) -> int:
        return len(self._types)
