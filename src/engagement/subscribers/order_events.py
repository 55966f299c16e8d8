"""Inbound cross-domain event handler — Engagement reacts to Order events.

Listens for OrderPlaced to send the order confirmation through Bloomreach
and record the purchase as an ``order_placed`` event.
"""

from protean.utils.mixins import handle
from shared.events.commerce import OrderPlaced

from engagement.domain import engagement
from engagement.subscribers.helpers import process_commerce_event
from engagement.tracking.workflows import full_name, retrieve_entity, track_order_placed

engagement.register_external_event(OrderPlaced, "Commerce.OrderPlaced.v1")


def order_notification(order_id: str) -> tuple[str | None, dict]:
    order = retrieve_entity("order", order_id, ("customer",))
    customer = order.get("customer") or {}
    return customer.get("email"), {
        "order_id": order["id"],
        "order_number": order.get("display_id"),
        "customer_name": full_name(customer),
    }


@engagement.event_handler(stream_category="commerce::order")
class OrderEventsHandler:
    """Forwards placed orders to Bloomreach."""

    @handle(OrderPlaced)
    def on_order_placed(self, event: OrderPlaced) -> None:
        process_commerce_event(
            "order.placed",
            str(event.order_id),
            template="order-placed",
            load_notification=order_notification,
            tracking=track_order_placed,
        )
