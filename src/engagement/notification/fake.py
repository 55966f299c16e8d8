"""Fake notification provider — records notifications for testing."""

from uuid import uuid4

from engagement.notification.port import NotificationProvider, OutboundNotification


class FakeNotificationProvider(NotificationProvider):
    """Notification provider that records sends in memory for test assertions."""

    def __init__(self):
        self.sent: list[OutboundNotification] = []
        self.should_succeed = True
        self.failure_reason = "Notification delivery failed"

    def configure(self, should_succeed: bool = True, failure_reason: str = "Notification delivery failed"):
        """Configure the fake provider behavior for testing."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def send(self, notification: OutboundNotification) -> dict:
        if not self.should_succeed:
            raise RuntimeError(self.failure_reason)

        self.sent.append(notification)
        return {"id": f"{notification.channel}-{uuid4().hex[:12]}"}

    def reset(self):
        """Clear recorded notifications (useful between tests)."""
        self.sent.clear()
        self.should_succeed = True
        self.failure_reason = "Notification delivery failed"
