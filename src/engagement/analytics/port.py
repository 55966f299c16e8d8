"""Analytics provider port — abstract interface for event tracking."""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass

# A customer reference is either a bare id or a mapping with optional "type" and "id"
ActorReference = str | Mapping[str, str | None]


@dataclass(frozen=True)
class TrackedEvent:
    """A behavioral event attributed to an actor or, failing that, a group."""

    event: str
    actor_id: ActorReference | None = None
    group: ActorReference | None = None
    properties: dict | None = None


class AnalyticsProvider(ABC):
    """Abstract interface for analytics provider adapters."""

    @abstractmethod
    def track(self, event: TrackedEvent) -> None:
        """Record an event. Raises on delivery failure."""
        ...
