"""Inbound cross-domain event handler — Engagement reacts to back-office User events."""

from protean.utils.mixins import handle
from shared.events.commerce import UserCreated

from engagement.domain import engagement
from engagement.subscribers.helpers import process_commerce_event
from engagement.tracking.workflows import full_name, retrieve_entity, track_user_created

engagement.register_external_event(UserCreated, "Commerce.UserCreated.v1")


def user_notification(user_id: str) -> tuple[str | None, dict]:
    user = retrieve_entity("user", user_id)
    return user.get("email"), {"user_id": user["id"], "user_name": full_name(user)}


@engagement.event_handler(stream_category="commerce::user")
class UserEventsHandler:
    @handle(UserCreated)
    def on_user_created(self, event: UserCreated) -> None:
        process_commerce_event(
            "user.created",
            str(event.user_id),
            template="user-created",
            load_notification=user_notification,
            tracking=track_user_created,
        )
