"""Inbound cross-domain event handler — Engagement reacts to Cart events.

Listens for CartCreated and CartUpdated to email the cart's customer and
track the cart in analytics.
"""

from protean.utils.mixins import handle
from shared.events.commerce import CartCreated, CartUpdated

from engagement.domain import engagement
from engagement.subscribers.helpers import process_commerce_event
from engagement.tracking.workflows import full_name, retrieve_entity, track_cart_created, track_cart_updated

engagement.register_external_event(CartCreated, "Commerce.CartCreated.v1")
engagement.register_external_event(CartUpdated, "Commerce.CartUpdated.v1")


def cart_notification(cart_id: str) -> tuple[str | None, dict]:
    cart = retrieve_entity("cart", cart_id, ("customer",))
    customer = cart.get("customer") or {}
    return customer.get("email"), {"cart_id": cart["id"], "customer_name": full_name(customer)}


@engagement.event_handler(stream_category="commerce::cart")
class CartEventsHandler:
    """Forwards cart lifecycle events to Bloomreach."""

    @handle(CartCreated)
    def on_cart_created(self, event: CartCreated) -> None:
        process_commerce_event(
            "cart.created",
            str(event.cart_id),
            template="cart-created",
            load_notification=cart_notification,
            tracking=track_cart_created,
        )

    @handle(CartUpdated)
    def on_cart_updated(self, event: CartUpdated) -> None:
        process_commerce_event(
            "cart.updated",
            str(event.cart_id),
            template="cart-updated",
            load_notification=cart_notification,
            tracking=track_cart_updated,
        )
