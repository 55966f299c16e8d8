"""Fake analytics provider — records tracked events for testing."""

from engagement.analytics.port import AnalyticsProvider, TrackedEvent


class FakeAnalyticsProvider(AnalyticsProvider):
    """Analytics provider that records events in memory for test assertions."""

    def __init__(self):
        self.tracked: list[TrackedEvent] = []
        self.should_succeed = True
        self.failure_reason = "Event tracking failed"

    def configure(self, should_succeed: bool = True, failure_reason: str = "Event tracking failed"):
        """Configure the fake provider behavior for testing."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def track(self, event: TrackedEvent) -> None:
        if not self.should_succeed:
            raise RuntimeError(self.failure_reason)
        self.tracked.append(event)

    def events_named(self, name: str) -> list[TrackedEvent]:
        return [event for event in self.tracked if event.event == name]

    def reset(self):
        """Clear tracked events (useful between tests)."""
        self.tracked.clear()
        self.should_succeed = True
        self.failure_reason = "Event tracking failed"
