"""Inbound cross-domain event handler — Engagement reacts to Customer events."""

from protean.utils.mixins import handle
from shared.events.commerce import CustomerCreated, CustomerUpdated

from engagement.domain import engagement
from engagement.subscribers.helpers import process_commerce_event
from engagement.tracking.workflows import (
    full_name,
    retrieve_entity,
    track_customer_created,
    track_customer_updated,
)

engagement.register_external_event(CustomerCreated, "Commerce.CustomerCreated.v1")
engagement.register_external_event(CustomerUpdated, "Commerce.CustomerUpdated.v1")


def customer_notification(customer_id: str) -> tuple[str | None, dict]:
    customer = retrieve_entity("customer", customer_id)
    return customer.get("email"), {"customer_id": customer["id"], "customer_name": full_name(customer)}


@engagement.event_handler(stream_category="commerce::customer")
class CustomerEventsHandler:
    """Forwards customer lifecycle events to Bloomreach."""

    @handle(CustomerCreated)
    def on_customer_created(self, event: CustomerCreated) -> None:
        process_commerce_event(
            "customer.created",
            str(event.customer_id),
            template="customer-created",
            load_notification=customer_notification,
            tracking=track_customer_created,
        )

    @handle(CustomerUpdated)
    def on_customer_updated(self, event: CustomerUpdated) -> None:
        process_commerce_event(
            "customer.updated",
            str(event.customer_id),
            template="customer-updated",
            load_notification=customer_notification,
            tracking=track_customer_updated,
        )
