from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from medtracker.core.config import Settings

logger = logging.getLogger(__name__)


class EmailDeliveryError(RuntimeError):
    pass


@dataclass(frozen=True)
class EmailMessage:
    recipient: str
    subject: str
    body: str


class SesMailer:
    def __init__(self, client: Any, *, sender: str) -> None:
        self._client = client
        self._sender = sender

    @classmethod
    def from_settings(cls, settings: Settings) -> SesMailer:
        client = boto3.client("ses", region_name=settings.aws_region)
        return cls(client, sender=settings.sender_email)

    def send(self, message: EmailMessage) -> str | None:
        try:
            response = self._client.send_email(
                Source=self._sender,
                Destination={"ToAddresses": [message.recipient]},
                Message={
                    "Subject": {"Data": message.subject},
                    "Body": {"Text": {"Data": message.body}},
                },
            )
        except (BotoCoreError, ClientError) as exc:
            raise EmailDeliveryError(f"Failed to send '{message.subject}'") from exc
        message_id = response.get("MessageId")
        logger.info("Sent '%s' (message id %s)", message.subject, message_id)
        return message_id
