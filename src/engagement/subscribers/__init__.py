"""Commerce event subscriptions, keyed by the host's event-bus names.

The Protean handlers in this package are registered with the engagement
domain and fire from the ``commerce::*`` streams. Hosts that deliver raw
bus messages instead (``("order.placed", {"id": "order_01"})``) call
handle_commerce_event(), which routes to the same handler methods.
"""

from collections.abc import Mapping

import structlog
from shared.events.commerce import event_from_bus

from engagement.subscribers.cart_events import CartEventsHandler
from engagement.subscribers.customer_events import CustomerEventsHandler
from engagement.subscribers.order_events import OrderEventsHandler
from engagement.subscribers.user_events import UserEventsHandler

logger = structlog.get_logger(__name__)

SUBSCRIPTIONS: dict[str, tuple[type, str]] = {
    "cart.created": (CartEventsHandler, "on_cart_created"),
    "cart.updated": (CartEventsHandler, "on_cart_updated"),
    "customer.created": (CustomerEventsHandler, "on_customer_created"),
    "customer.updated": (CustomerEventsHandler, "on_customer_updated"),
    "order.placed": (OrderEventsHandler, "on_order_placed"),
    "user.created": (UserEventsHandler, "on_user_created"),
}


def handle_commerce_event(name: str, data: Mapping | None) -> bool:
    """Deliver a raw bus message to its subscriber.

    Never raises: malformed messages and subscriber failures are logged
    and reported as not handled, so they cannot reach the host's bus.

    Returns:
        True if a subscriber handled the message, False if it was ignored.
    """
    subscription = SUBSCRIPTIONS.get(name) if isinstance(name, str) else None
    if subscription is None:
        logger.info("No subscriber for commerce event, ignoring", commerce_event=name)
        return False

    if not isinstance(data, Mapping) or not data.get("id"):
        logger.warning("Commerce event without entity id, ignoring", commerce_event=name, data=data)
        return False

    handler_cls, method_name = subscription
    try:
        getattr(handler_cls(), method_name)(event_from_bus(name, data))
    except Exception as exc:
        logger.error("Commerce event dispatch failed", commerce_event=name, error=str(exc), exc_info=True)
        return False
    return True
