"""Commerce query registry — how the Engagement domain reaches host entities.

Uses FakeCommerceQuery by default. The host installs its own query
adapter at startup with set_commerce_query().
"""

from engagement.commerce.fake import FakeCommerceQuery
from engagement.commerce.port import CommerceQuery

_current_query: CommerceQuery | None = None


def get_commerce_query() -> CommerceQuery:
    """Return the current commerce query adapter. Defaults to FakeCommerceQuery."""
    global _current_query
    if _current_query is None:
        _current_query = FakeCommerceQuery()
    return _current_query


def set_commerce_query(query: CommerceQuery) -> None:
    """Override the active commerce query adapter."""
    global _current_query
    _current_query = query


def reset_commerce_query() -> None:
    """Reset to the default adapter."""
    global _current_query
    _current_query = None
