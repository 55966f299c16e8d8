"""Bloomreach notification provider — transactional email and SMS.

The host's abstract template name selects both the Bloomreach template id
(``template_mappings``) and the campaign name (``campaign_mappings``).
A template without both mappings is skipped: the provider logs it and
returns an empty result, so a partially configured deployment can ignore
templates it has not set up in Bloomreach yet.
"""

import requests
import structlog

from engagement.bloomreach.client import send_transactional_email, send_transactional_sms
from engagement.config import BloomreachOptions
from engagement.exceptions import InvalidConfigurationError, UnsupportedChannelError
from engagement.notification.port import NotificationProvider, OutboundNotification

logger = structlog.get_logger(__name__)


class BloomreachNotificationProvider(NotificationProvider):
    identifier = "bloomreach-notification"

    def __init__(self, options: BloomreachOptions, session: requests.Session | None = None) -> None:
        self.validate_options(options)
        self.options = options
        self.session = session

    @classmethod
    def validate_options(cls, options: BloomreachOptions) -> None:
        """Reject options missing credentials, project, integration or sender identity."""
        options.validate()

    def send(self, notification: OutboundNotification) -> dict:
        mapped_template = self.options.template_mappings.get(notification.template)
        mapped_campaign = self.options.campaign_mappings.get(notification.template)

        if not mapped_template or not mapped_campaign:
            logger.info(
                "Missing template or campaign mapping, notification skipped",
                template=notification.template,
                channel=notification.channel,
            )
            return {}

        if notification.channel == "email":
            message_id = send_transactional_email(
                self.options.credentials,
                self.options.project_id,
                self.options.integration_id,
                mapped_template,
                mapped_campaign,
                {
                    "email": notification.to,
                    "customer_ids": self._customer_ids(notification),
                    "language": self.options.language,
                },
                params=notification.data,
                sender_address=self.options.from_email,
                sender_name=self.options.from_name,
                transfer_identity=self.options.transfer_identity,
                **self._transport(),
            )
        elif notification.channel == "sms":
            if not self.options.from_sms:
                raise InvalidConfigurationError(
                    "From SMS is required in the provider's options to send SMS notifications."
                )

            message_id = send_transactional_sms(
                self.options.credentials,
                self.options.project_id,
                mapped_campaign,
                {"template_id": mapped_template, "params": notification.data},
                {
                    "phone": notification.to,
                    "customer_ids": self._customer_ids(notification),
                    "language": self.options.language,
                },
                integration_id=self.options.integration_id,
                **self._transport(),
            )
        else:
            raise UnsupportedChannelError(notification.channel)

        logger.info(
            "Bloomreach notification sent",
            channel=notification.channel,
            template=notification.template,
            message_id=message_id,
        )
        return {"id": message_id}

    @staticmethod
    def _customer_ids(notification: OutboundNotification) -> dict[str, str]:
        return {"registered": notification.to} if notification.to else {}

    def _transport(self) -> dict:
        return {"api_url": self.options.api_url, "timeout": self.options.timeout, "session": self.session}
