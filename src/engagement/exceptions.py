"""Errors raised by the Engagement domain.

Client failures (``ApiError`` and its subclasses) propagate unchanged
through the provider adapters; the subscribers catch them per side effect.
A missing template mapping or a track call without any customer
identifier is not an error: those are logged and skipped.
"""


class EngagementError(Exception):
    """Base class for all Engagement errors."""


class ApiError(EngagementError):
    """A Bloomreach API call did not produce the expected result."""

    def __init__(self, message: str, status_code: int | None = None, body: str | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class TransportError(ApiError):
    """The request never got a response (DNS, connect, TLS, timeout)."""


class ApiBusinessError(ApiError):
    """The API answered but the body reports a failure (e.g. ``success: false``)."""


class InvalidConfigurationError(EngagementError):
    """Required provider options are missing or malformed."""


class UnsupportedChannelError(EngagementError):
    """The notification channel is neither ``email`` nor ``sms``."""

    def __init__(self, channel: str) -> None:
        super().__init__(f"Channel {channel} is not supported by Bloomreach provider.")
        self.channel = channel


class EntityNotFoundError(EngagementError, LookupError):
    """The commerce host returned nothing for the requested entity."""

    def __init__(self, entity: str, entity_id: str) -> None:
        super().__init__(f"{entity} {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id
