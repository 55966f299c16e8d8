"""Bloomreach (Exponea) HTTP client.

Three endpoints are used, all ``POST`` with a JSON body and HTTP Basic
authentication built from the API key pair:

    /email/v2/projects/{project_id}/sync                transactional email
    /sms/v1/projects/{project_id}/sync                  transactional SMS
    /track/v2/projects/{project_id}/customers/events    event ingestion

Optional arguments left as ``None`` are omitted from the request body
entirely. Bloomreach treats an omitted key differently from an empty one
(an omitted ``sender_address`` falls back to the template's sender), so
``None`` is never serialized.

No retries are attempted; every failure surfaces as an ``ApiError``.
Network failures and non-2xx answers raise ``TransportError``; a 2xx
answer whose body reports a failure raises ``ApiBusinessError``.
"""

import base64
import json

import requests
import structlog

from engagement.config import DEFAULT_API_URL, DEFAULT_TIMEOUT, Credentials
from engagement.exceptions import ApiBusinessError, ApiError, TransportError

logger = structlog.get_logger(__name__)

MAX_SMS_MESSAGE_PARTS = 8


def build_auth_header(key_id: str, secret: str) -> str:
    """Return the ``Authorization`` value for a key pair.

    >>> build_auth_header("myKeyId", "mySecret")
    'Basic bXlLZXlJZDpteVNlY3JldA=='
    """
    token = base64.b64encode(f"{key_id}:{secret}".encode()).decode("ascii")
    return f"Basic {token}"


def send_transactional_email(
    credentials: Credentials,
    project_id: str,
    integration_id: str,
    template_id: str,
    campaign_name: str,
    recipient: dict,
    params: dict | None = None,
    sender_address: str | None = None,
    sender_name: str | None = None,
    transfer_identity: str | None = None,
    settings: dict | None = None,
    *,
    api_url: str = DEFAULT_API_URL,
    timeout: float = DEFAULT_TIMEOUT,
    session: requests.Session | None = None,
) -> str:
    """Send one transactional email and return the Bloomreach message id.

    Args:
        recipient: ``{"email", "customer_ids", "language"?}``
        params: template parameters
        sender_address, sender_name: override the template's sender
        transfer_identity: ``enabled``, ``disabled`` or ``first_click``
    """
    payload = _compact(
        {
            "integration_id": integration_id,
            "email_content": _compact(
                {
                    "template_id": template_id,
                    "sender_address": sender_address,
                    "sender_name": sender_name,
                    "params": params,
                }
            ),
            "campaign_name": campaign_name,
            "recipient": _compact(recipient),
            "transfer_identity": transfer_identity,
            "settings": settings,
        }
    )

    data = _post(
        credentials,
        f"{api_url}/email/v2/projects/{project_id}/sync",
        payload,
        timeout=timeout,
        session=session,
    )
    return _message_id(data, "email")


def send_transactional_sms(
    credentials: Credentials,
    project_id: str,
    campaign_name: str,
    content: dict,
    recipient: dict,
    integration_id: str | None = None,
    settings: dict | None = None,
    *,
    api_url: str = DEFAULT_API_URL,
    timeout: float = DEFAULT_TIMEOUT,
    session: requests.Session | None = None,
) -> str:
    """Send one transactional SMS and return the Bloomreach message id.

    ``content`` is either template based (``template_id`` + ``params``) or
    raw (``message`` + ``sender``); whichever keys are present are passed
    through. ``max_message_parts`` must lie between 1 and 8 when given.
    """
    parts = content.get("max_message_parts")
    if parts is not None and (
        not isinstance(parts, int) or isinstance(parts, bool) or not 1 <= parts <= MAX_SMS_MESSAGE_PARTS
    ):
        raise ValueError(f"max_message_parts must be between 1 and {MAX_SMS_MESSAGE_PARTS}, got {parts}")

    payload = _compact(
        {
            "integration_id": integration_id,
            "content": _compact(
                {
                    "template_id": content.get("template_id"),
                    "params": content.get("params"),
                    "message": content.get("message"),
                    "sender": content.get("sender"),
                    "max_message_parts": parts,
                }
            ),
            "campaign_name": campaign_name,
            "recipient": _compact(recipient),
            "settings": settings,
        }
    )

    data = _post(
        credentials,
        f"{api_url}/sms/v1/projects/{project_id}/sync",
        payload,
        timeout=timeout,
        session=session,
    )
    return _message_id(data, "sms")


def add_event(
    credentials: Credentials,
    project_id: str,
    customer_ids: dict[str, str],
    event_type: str,
    properties: dict | None = None,
    timestamp: int | float | str | None = None,
    *,
    api_url: str = DEFAULT_API_URL,
    timeout: float = DEFAULT_TIMEOUT,
    session: requests.Session | None = None,
) -> bool:
    """Record an event on a customer profile.

    ``timestamp`` may be Unix seconds or a date string and is sent as is.
    A ``success: false`` answer raises ``ApiBusinessError`` even though the
    HTTP exchange itself succeeded.
    """
    payload = _compact(
        {
            "customer_ids": customer_ids,
            "event_type": event_type,
            "properties": properties,
            "timestamp": timestamp,
        }
    )

    data = _post(
        credentials,
        f"{api_url}/track/v2/projects/{project_id}/customers/events",
        payload,
        timeout=timeout,
        session=session,
    )

    if not data.get("success"):
        raise ApiBusinessError(f"Failed to add event: {json.dumps(data)}", body=json.dumps(data))

    logger.debug("Bloomreach event recorded", event_type=event_type, project_id=project_id)
    return True


def _compact(values: dict) -> dict:
    """Drop keys whose value is ``None``."""
    return {key: value for key, value in values.items() if value is not None}


def _post(
    credentials: Credentials,
    url: str,
    payload: dict,
    *,
    timeout: float,
    session: requests.Session | None,
) -> dict:
    headers = {
        "Accept": "application/json",
        "Authorization": build_auth_header(credentials.key_id, credentials.secret),
        "Content-Type": "application/json",
    }
    sender = session if session is not None else requests

    try:
        response = sender.post(url, data=json.dumps(payload, default=str), headers=headers, timeout=timeout)
    except requests.RequestException as exc:
        logger.error("Bloomreach request failed", url=url, error=str(exc))
        raise TransportError(f"Request to {url} failed: {exc}") from exc

    if not 200 <= response.status_code < 300:
        logger.error("Bloomreach answered with an HTTP error", url=url, status_code=response.status_code)
        raise TransportError(
            f"Bloomreach answered HTTP {response.status_code} for {url}: {response.text}",
            status_code=response.status_code,
            body=response.text,
        )

    try:
        data = response.json()
    except ValueError as exc:
        raise ApiError(
            f"Bloomreach returned a non-JSON response (HTTP {response.status_code})",
            status_code=response.status_code,
            body=response.text,
        ) from exc

    if not isinstance(data, dict):
        raise ApiError(
            f"Bloomreach returned an unexpected response (HTTP {response.status_code})",
            status_code=response.status_code,
            body=response.text,
        )
    return data


def _message_id(data: dict, channel: str) -> str:
    message_id = data.get("message_id")
    if not message_id:
        raise ApiBusinessError(f"Bloomreach did not accept the {channel} send: {json.dumps(data)}", body=json.dumps(data))
    return message_id
