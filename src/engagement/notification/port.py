"""Notification provider port — abstract interface for notification dispatch."""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class OutboundNotification:
    """A notification as the commerce host describes it.

    ``template`` is the host's abstract template name (``order-placed``);
    providers translate it to their own template identifiers.
    """

    channel: str
    to: str | None
    template: str
    data: dict | None = None


class NotificationProvider(ABC):
    """Abstract interface for notification provider adapters."""

    @abstractmethod
    def send(self, notification: OutboundNotification) -> dict:
        """Send a notification.

        Returns:
            ``{"id": <provider message id>}``, or ``{}`` when the provider
            chose not to send it.
        """
        ...
