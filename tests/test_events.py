"""Tests for event models and the event catalog."""

from __future__ import annotations

from typing import Literal

import pytest
from pydantic import BaseModel, ValidationError

from pubsub_registry.domain.errors import CatalogError, UnknownEventError
from pubsub_registry.domain.events import Event, EventCatalog


class OrderPlacedPayload(BaseModel):
    order_id: str
    quantity: int


class OrderPlaced(Event):
    name: Literal["OrderPlaced"] = "OrderPlaced"
    payload: OrderPlacedPayload


class OrderCancelled(Event):
    name: Literal["OrderCancelled"] = "OrderCancelled"
    payload: dict[str, str]


def test_event_is_immutable():
    """Events cannot be mutated once built."""
    event = OrderPlaced(payload=OrderPlacedPayload(order_id="o-1", quantity=2))

    with pytest.raises(ValidationError):
        event.name = "Other"


def test_typed_event_rejects_other_name():
    """A typed event refuses a name other than its literal."""
    with pytest.raises(ValidationError):
        OrderPlaced(name="OrderCancelled", payload={"order_id": "o-1", "quantity": 1})


def test_catalog_registers_and_lists_names():
    """The catalog exposes names, membership, length and lookup."""
    catalog = EventCatalog(OrderPlaced, OrderCancelled)

    assert catalog.names == ("OrderPlaced", "OrderCancelled")
    assert "OrderPlaced" in catalog
    assert "Unknown" not in catalog
    assert len(catalog) == 2
    assert list(catalog) == [OrderPlaced, OrderCancelled]
    assert catalog.get("OrderCancelled") is OrderCancelled
    assert catalog.get("Unknown") is None


def test_register_works_as_decorator():
    """``register`` can decorate an event class."""
    catalog = EventCatalog()

    @catalog.register
    class Pinged(Event):
        name: Literal["Pinged"] = "Pinged"

    assert catalog.get("Pinged") is Pinged


def test_register_same_class_twice_is_idempotent():
    """Registering the same class again is accepted."""
    catalog = EventCatalog(OrderPlaced)

    catalog.register(OrderPlaced)

    assert len(catalog) == 1


def test_register_conflicting_name_raises():
    """A second class cannot claim an existing name."""
    catalog = EventCatalog(OrderPlaced)

    class Impostor(Event):
        name: Literal["OrderPlaced"] = "OrderPlaced"

    with pytest.raises(CatalogError):
        catalog.register(Impostor)
    assert catalog.get("OrderPlaced") is OrderPlaced


def test_register_requires_literal_name():
    """The base ``Event`` has no literal name and cannot be catalogued."""
    with pytest.raises(CatalogError):
        EventCatalog(Event)


def test_register_requires_single_literal():
    """A literal with several names is ambiguous and refused."""
    class Either(Event):
        name: Literal["A", "B"] = "A"

    with pytest.raises(CatalogError):
        EventCatalog(Either)


def test_register_rejects_non_event_class():
    """Only ``Event`` subclasses can be registered."""
    with pytest.raises(CatalogError):
        EventCatalog().register(OrderPlacedPayload)


def test_parse_builds_registered_variant():
    """Raw mappings are validated into the matching event class."""
    catalog = EventCatalog(OrderPlaced, OrderCancelled)

    event = catalog.parse(
        {"name": "OrderPlaced", "payload": {"order_id": "o-1", "quantity": "3"}}
    )

    assert isinstance(event, OrderPlaced)
    assert event.payload == OrderPlacedPayload(order_id="o-1", quantity=3)


def test_parse_unknown_name_raises():
    """Parsing an uncatalogued name raises ``UnknownEventError``."""
    catalog = EventCatalog(OrderPlaced)

    with pytest.raises(UnknownEventError) as exc_info:
        catalog.parse({"name": "Nope", "payload": {}})

    assert exc_info.value.name == "Nope"
    assert "Nope" in str(exc_info.value)


def test_parse_missing_name_raises():
    """A mapping without a name cannot be parsed."""
    with pytest.raises(UnknownEventError):
        EventCatalog(OrderPlaced).parse({"payload": {}})


def test_parse_bad_payload_raises_validation_error():
    """Payload errors surface as pydantic validation errors."""
    catalog = EventCatalog(OrderPlaced)

    with pytest.raises(ValidationError):
        catalog.parse({"name": "OrderPlaced", "payload": {"order_id": "o-1"}})
