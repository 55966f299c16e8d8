"""Bloomreach provider options.

Options are supplied once at startup, either by the host (``from_mapping``)
or from ``BLOOMREACH_*`` environment variables (``from_env``), and never
change afterwards.
"""

import json
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType

from engagement.exceptions import InvalidConfigurationError

DEFAULT_API_URL = "https://api.exponea.com"
DEFAULT_TIMEOUT = 10.0


class TransferIdentity(Enum):
    ENABLED = "enabled"
    DISABLED = "disabled"
    FIRST_CLICK = "first_click"


# Options checked when a provider is constructed, with the label used in errors.
# ``from_sms`` is only checked when an SMS is actually sent.
REQUIRED_OPTIONS = {
    "key_id": "Key ID",
    "secret": "Secret",
    "project_id": "Project ID",
    "integration_id": "Integration ID",
    "from_email": "From email",
    "from_name": "From name",
}


@dataclass(frozen=True)
class Credentials:
    """API key pair used for HTTP Basic authentication."""

    key_id: str
    secret: str


@dataclass(frozen=True)
class BloomreachOptions:
    key_id: str | None = None
    secret: str | None = None
    project_id: str | None = None
    integration_id: str | None = None
    from_email: str | None = None
    from_name: str | None = None
    from_sms: str | None = None
    transfer_identity: str | None = None
    template_mappings: Mapping[str, str] = field(default_factory=dict)
    campaign_mappings: Mapping[str, str] = field(default_factory=dict)
    language: str | None = None
    api_url: str = DEFAULT_API_URL
    timeout: float = DEFAULT_TIMEOUT

    def __post_init__(self):
        if self.transfer_identity is not None:
            valid = {member.value for member in TransferIdentity}
            if self.transfer_identity not in valid:
                raise InvalidConfigurationError(
                    f"transfer_identity must be one of {sorted(valid)}, got {self.transfer_identity!r}."
                )
        # Freeze the lookup tables along with the rest of the options
        object.__setattr__(self, "template_mappings", MappingProxyType(dict(self.template_mappings or {})))
        object.__setattr__(self, "campaign_mappings", MappingProxyType(dict(self.campaign_mappings or {})))

    @property
    def credentials(self) -> Credentials:
        return Credentials(key_id=self.key_id or "", secret=self.secret or "")

    def missing_required(self) -> list[str]:
        """Names of the required options that are unset or empty, in declaration order."""
        return [name for name in REQUIRED_OPTIONS if not getattr(self, name)]

    def validate(self) -> None:
        """Raise ``InvalidConfigurationError`` for the first missing required option."""
        missing = self.missing_required()
        if missing:
            raise InvalidConfigurationError(f"{REQUIRED_OPTIONS[missing[0]]} is required in the provider's options.")

    @classmethod
    def from_mapping(cls, options: Mapping) -> "BloomreachOptions":
        """Build options from a host-supplied mapping.

        Accepts the flat form as well as the form nested under a
        ``notifications`` key. Unknown keys are ignored.
        """
        if isinstance(options.get("notifications"), Mapping):
            options = options["notifications"]

        known = set(cls.__dataclass_fields__)
        return cls(**{key: value for key, value in options.items() if key in known and value is not None})

    @classmethod
    def from_env(cls) -> "BloomreachOptions":
        """Build options from ``BLOOMREACH_*`` environment variables."""
        timeout = os.environ.get("BLOOMREACH_TIMEOUT")
        try:
            timeout_value = float(timeout) if timeout else DEFAULT_TIMEOUT
        except ValueError as exc:
            raise InvalidConfigurationError(f"BLOOMREACH_TIMEOUT must be a number, got {timeout!r}.") from exc

        return cls(
            key_id=os.environ.get("BLOOMREACH_KEY_ID"),
            secret=os.environ.get("BLOOMREACH_SECRET"),
            project_id=os.environ.get("BLOOMREACH_PROJECT_ID"),
            integration_id=os.environ.get("BLOOMREACH_INTEGRATION_ID"),
            from_email=os.environ.get("BLOOMREACH_FROM_EMAIL"),
            from_name=os.environ.get("BLOOMREACH_FROM_NAME"),
            from_sms=os.environ.get("BLOOMREACH_FROM_SMS"),
            transfer_identity=os.environ.get("BLOOMREACH_TRANSFER_IDENTITY") or None,
            template_mappings=_json_mapping("BLOOMREACH_TEMPLATE_MAPPINGS"),
            campaign_mappings=_json_mapping("BLOOMREACH_CAMPAIGN_MAPPINGS"),
            language=os.environ.get("BLOOMREACH_LANGUAGE") or None,
            api_url=os.environ.get("BLOOMREACH_API_URL", DEFAULT_API_URL),
            timeout=timeout_value,
        )


def _json_mapping(variable: str) -> dict[str, str]:
    raw = os.environ.get(variable)
    if not raw:
        return {}
    try:
        value = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise InvalidConfigurationError(f"{variable} must be a JSON object: {exc}") from exc
    if not isinstance(value, dict):
        raise InvalidConfigurationError(f"{variable} must be a JSON object, got {type(value).__name__}.")
    return value
