"""Tracking workflows — retrieve a commerce entity, then track it in analytics.

Each workflow runs two steps: fetch the entity (with the relations the
event needs) through the commerce query port, then hand a flattened
property bag to the analytics provider. The actor is the entity's
customer (or the customer/user itself); guest carts and orders have no
actor and are skipped by the provider.
"""

from datetime import date, datetime

import structlog

from engagement.analytics import get_analytics_provider
from engagement.analytics.port import TrackedEvent
from engagement.commerce import get_commerce_query
from engagement.exceptions import EntityNotFoundError

logger = structlog.get_logger(__name__)


def full_name(record: dict | None) -> str:
    """``"first last"`` from a customer/user record, tolerating missing parts."""
    if not record:
        return ""
    return f"{record.get('first_name') or ''} {record.get('last_name') or ''}".strip()


def retrieve_entity(entity: str, entity_id: str, relations: tuple[str, ...] = ()) -> dict:
    """Fetch an entity through the commerce query port or raise ``EntityNotFoundError``."""
    record = get_commerce_query().retrieve(entity, entity_id, relations)
    if record is None:
        raise EntityNotFoundError(entity, entity_id)
    return record


def track_cart_created(cart_id: str) -> None:
    cart = retrieve_entity("cart", cart_id, ("customer", "items"))
    customer = cart.get("customer") or {}

    _track(
        "cart_created",
        actor_id=customer.get("id"),
        properties={
            "cart_id": cart["id"],
            "customer_email": customer.get("email"),
            "customer_name": full_name(customer),
            "items_count": len(cart.get("items") or []),
            "currency": cart.get("currency_code"),
        },
    )


def track_cart_updated(cart_id: str) -> None:
    cart = retrieve_entity("cart", cart_id, ("customer", "items"))
    customer = cart.get("customer") or {}
    items = cart.get("items") or []

    _track(
        "cart_updated",
        actor_id=customer.get("id"),
        properties={
            "cart_id": cart["id"],
            "customer_email": customer.get("email"),
            "customer_name": full_name(customer),
            "items_count": len(items),
            "subtotal": cart.get("subtotal"),
            "total": cart.get("total"),
            "currency": cart.get("currency_code"),
            "items": [
                {
                    "variant_id": item.get("variant_id"),
                    "product_id": item.get("product_id"),
                    "quantity": item.get("quantity"),
                    "unit_price": item.get("unit_price"),
                }
                for item in items
            ],
        },
    )


def track_customer_created(customer_id: str) -> None:
    customer = retrieve_entity("customer", customer_id)
    _track(
        "customer_created",
        actor_id=customer["id"],
        properties={**_customer_properties(customer), "created_at": _iso(customer.get("created_at"))},
    )


def track_customer_updated(customer_id: str) -> None:
    customer = retrieve_entity("customer", customer_id)
    _track(
        "customer_updated",
        actor_id=customer["id"],
        properties={**_customer_properties(customer), "updated_at": _iso(customer.get("updated_at"))},
    )


def track_order_placed(order_id: str) -> None:
    order = retrieve_entity("order", order_id, ("customer", "items"))
    customer = order.get("customer") or {}
    items = order.get("items") or []

    _track(
        "order_placed",
        actor_id=customer.get("id"),
        properties={
            "order_id": order["id"],
            "order_number": order.get("display_id"),
            "customer_email": customer.get("email"),
            "customer_name": full_name(customer),
            "subtotal": order.get("subtotal"),
            "total": order.get("total"),
            "tax_total": order.get("tax_total"),
            "shipping_total": order.get("shipping_total"),
            "currency": order.get("currency_code"),
            "status": order.get("status"),
            "items_count": len(items),
            "items": [
                {
                    "id": item.get("id"),
                    "variant_id": item.get("variant_id"),
                    "product_id": item.get("product_id"),
                    "quantity": item.get("quantity"),
                    "unit_price": item.get("unit_price"),
                    "total": item.get("total"),
                }
                for item in items
            ],
        },
    )


def track_user_created(user_id: str) -> None:
    user = retrieve_entity("user", user_id)
    _track(
        "user_created",
        actor_id=user["id"],
        properties={
            "user_id": user["id"],
            "email": user.get("email"),
            "user_name": full_name(user),
            "first_name": user.get("first_name"),
            "last_name": user.get("last_name"),
            "created_at": _iso(user.get("created_at")),
        },
    )


def _customer_properties(customer: dict) -> dict:
    return {
        "customer_id": customer["id"],
        "email": customer.get("email"),
        "customer_name": full_name(customer),
        "first_name": customer.get("first_name"),
        "last_name": customer.get("last_name"),
        "has_account": customer.get("has_account"),
    }


def _track(event: str, actor_id: str | None, properties: dict) -> None:
    get_analytics_provider().track(TrackedEvent(event=event, actor_id=actor_id, properties=properties))
    logger.debug("Tracking workflow completed", tracked_event=event, actor_id=actor_id)


def _iso(value):
    if isinstance(value, datetime | date):
        return value.isoformat()
    return value
