"""Shared helpers for commerce event subscribers.

Every subscriber does the same two things for its event: email the
customer through the notification provider, and run the tracking
workflow for the entity. The two branches are isolated from each other:
an exception in one is logged and never stops the other, and nothing is
raised back to the host's event dispatch.
"""

from collections.abc import Callable

import structlog

from engagement.notification import get_notification_provider
from engagement.notification.port import OutboundNotification
from engagement.utils.logging import bind_event_context, clear_event_context

logger = structlog.get_logger(__name__)

# entity id -> (recipient email or None, template data)
NotificationLoader = Callable[[str], tuple[str | None, dict]]


def process_commerce_event(
    event_name: str,
    entity_id: str,
    template: str,
    load_notification: NotificationLoader,
    tracking: Callable[[str], None] | None = None,
) -> None:
    """Run the notification and tracking branches for one commerce event."""
    bind_event_context(commerce_event=event_name, entity_id=entity_id)
    try:
        logger.info("Commerce event received")
        dispatch_notification(entity_id, template, load_notification)
        if tracking is not None:
            dispatch_tracking(entity_id, tracking)
    finally:
        clear_event_context()


def dispatch_notification(entity_id: str, template: str, load_notification: NotificationLoader) -> dict:
    """Email the entity's customer with ``template``. Returns the provider result, ``{}`` if nothing was sent."""
    try:
        recipient, data = load_notification(entity_id)
        if not recipient:
            logger.info("Skipping notification, no recipient email", template=template)
            return {}

        result = get_notification_provider().send(
            OutboundNotification(channel="email", to=recipient, template=template, data=data)
        )
        logger.info("Notification dispatched", template=template, notification_id=result.get("id"))
        return result
    except Exception as exc:
        logger.error("Notification dispatch failed", template=template, error=str(exc), exc_info=True)
        return {}


def dispatch_tracking(entity_id: str, tracking: Callable[[str], None]) -> bool:
    """Run a tracking workflow. Returns False if it raised."""
    try:
        tracking(entity_id)
    except Exception as exc:
        logger.error("Analytics tracking failed", workflow=tracking.__name__, error=str(exc), exc_info=True)
        return False
    return True
