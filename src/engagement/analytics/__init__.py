"""Analytics provider registry.

Uses FakeAnalyticsProvider by default. Set ENGAGEMENT_PROVIDER=bloomreach
to build the Bloomreach provider from BLOOMREACH_* environment variables,
or install a provider explicitly with set_analytics_provider().
"""

import os

from engagement.analytics.port import AnalyticsProvider

_provider_instance: AnalyticsProvider | None = None


def get_analytics_provider() -> AnalyticsProvider:
    """Return the configured analytics provider (singleton)."""
    global _provider_instance
    if _provider_instance is None:
        adapter = os.environ.get("ENGAGEMENT_PROVIDER", "fake")
        if adapter == "fake":
            from engagement.analytics.fake import FakeAnalyticsProvider

            _provider_instance = FakeAnalyticsProvider()
        elif adapter == "bloomreach":
            from engagement.analytics.bloomreach import BloomreachAnalyticsProvider
            from engagement.config import BloomreachOptions

            _provider_instance = BloomreachAnalyticsProvider(BloomreachOptions.from_env())
        else:
            raise ValueError(f"Unknown analytics provider: {adapter}")
    return _provider_instance


def set_analytics_provider(provider: AnalyticsProvider) -> None:
    """Install an analytics provider (startup wiring, tests)."""
    global _provider_instance
    _provider_instance = provider


def reset_analytics_provider() -> None:
    """Reset the provider singleton (useful for testing)."""
    global _provider_instance
    _provider_instance = None
