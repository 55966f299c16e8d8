"""Notification provider registry.

Uses FakeNotificationProvider by default. Set ENGAGEMENT_PROVIDER=bloomreach
to build the Bloomreach provider from BLOOMREACH_* environment variables,
or install a provider explicitly with set_notification_provider().
"""

import os

from engagement.notification.port import NotificationProvider

_provider_instance: NotificationProvider | None = None


def get_notification_provider() -> NotificationProvider:
    """Return the configured notification provider (singleton)."""
    global _provider_instance
    if _provider_instance is None:
        adapter = os.environ.get("ENGAGEMENT_PROVIDER", "fake")
        if adapter == "fake":
            from engagement.notification.fake import FakeNotificationProvider

            _provider_instance = FakeNotificationProvider()
        elif adapter == "bloomreach":
            from engagement.config import BloomreachOptions
            from engagement.notification.bloomreach import BloomreachNotificationProvider

            _provider_instance = BloomreachNotificationProvider(BloomreachOptions.from_env())
        else:
            raise ValueError(f"Unknown notification provider: {adapter}")
    return _provider_instance


def set_notification_provider(provider: NotificationProvider) -> None:
    """Install a notification provider (startup wiring, tests)."""
    global _provider_instance
    _provider_instance = provider


def reset_notification_provider() -> None:
    """Reset the provider singleton (useful for testing)."""
    global _provider_instance
    _provider_instance = None
