"""Cross-domain event contracts for the commerce host's lifecycle events.

The commerce host publishes thin notifications on its event bus: each
message names the event (``cart.created``, ``order.placed``, ...) and
carries only the id of the entity that changed. Consumers look the
entity up themselves.

These classes give those messages a Protean event shape so they can be
registered as external events via domain.register_external_event() with
matching __type__ strings.
"""

from protean.core.event import BaseEvent
from protean.fields import Identifier


class CartCreated(BaseEvent):
    """A shopping cart was created."""

    __version__ = 1

    cart_id = Identifier(required=True)


class CartUpdated(BaseEvent):
    """Items, totals or the owner of a cart changed."""

    __version__ = 1

    cart_id = Identifier(required=True)


class CustomerCreated(BaseEvent):
    """A customer record was created (guest or registered)."""

    __version__ = 1

    customer_id = Identifier(required=True)


class CustomerUpdated(BaseEvent):
    """A customer record was updated."""

    __version__ = 1

    customer_id = Identifier(required=True)


class OrderPlaced(BaseEvent):
    """A cart was completed into an order."""

    __version__ = 1

    order_id = Identifier(required=True)


class UserCreated(BaseEvent):
    """An admin/back-office user was created."""

    __version__ = 1

    user_id = Identifier(required=True)


# Bus event name -> (event class, Protean __type__ string, id field)
COMMERCE_EVENTS: dict[str, tuple[type[BaseEvent], str, str]] = {
    "cart.created": (CartCreated, "Commerce.CartCreated.v1", "cart_id"),
    "cart.updated": (CartUpdated, "Commerce.CartUpdated.v1", "cart_id"),
    "customer.created": (CustomerCreated, "Commerce.CustomerCreated.v1", "customer_id"),
    "customer.updated": (CustomerUpdated, "Commerce.CustomerUpdated.v1", "customer_id"),
    "order.placed": (OrderPlaced, "Commerce.OrderPlaced.v1", "order_id"),
    "user.created": (UserCreated, "Commerce.UserCreated.v1", "user_id"),
}


def event_from_bus(name: str, data: dict) -> BaseEvent:
    """Build the event object for a raw bus message such as ``{"id": "cart_01"}``.

    Raises:
        KeyError: if ``name`` is not a known commerce event or ``data`` has no ``id``.
    """
    event_cls, _, id_field = COMMERCE_EVENTS[name]
    return event_cls(**{id_field: data["id"]})
