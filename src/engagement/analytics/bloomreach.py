"""Bloomreach analytics provider — forwards tracked events to the Tracking API.

Events are timestamped with the time they are forwarded, rendered as an
HTTP date (``Mon, 19 Oct 2026 10:00:00 GMT``), not with the time the
commerce change happened.
"""

import dataclasses
from collections.abc import Mapping
from datetime import UTC, datetime
from email.utils import format_datetime

import requests
import structlog

from engagement.analytics.port import ActorReference, AnalyticsProvider, TrackedEvent
from engagement.bloomreach.client import add_event
from engagement.config import BloomreachOptions

logger = structlog.get_logger(__name__)


class BloomreachAnalyticsProvider(AnalyticsProvider):
    identifier = "bloomreach-analytics"

    def __init__(self, options: BloomreachOptions, session: requests.Session | None = None) -> None:
        self.options = options
        self.session = session

    def track(self, event: TrackedEvent) -> None:
        identifier = event.actor_id if event.actor_id is not None else event.group
        if identifier is None:
            logger.warning(
                "Missing actor_id or group in track event, event not tracked",
                event_name=event.event,
                event_data=dataclasses.asdict(event),
            )
            return

        add_event(
            self.options.credentials,
            self.options.project_id,
            customer_ids_for(identifier),
            event.event,
            event.properties or {},
            format_datetime(datetime.now(UTC), usegmt=True),
            api_url=self.options.api_url,
            timeout=self.options.timeout,
            session=self.session,
        )


def customer_ids_for(identifier: ActorReference) -> dict[str, str]:
    """Map an actor/group reference to Bloomreach ``customer_ids``."""
    if isinstance(identifier, Mapping):
        return {"type": identifier.get("type") or "", "id": identifier.get("id") or ""}
    return {"id": identifier}
