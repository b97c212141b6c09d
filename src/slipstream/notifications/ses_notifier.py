"""Amazon SES notifier implementing INotifier."""

from __future__ import annotations

import boto3
from botocore.exceptions import ClientError

from slipstream.core.exceptions import NotificationError
from slipstream.models.delivery import EmailMessageSpec
from slipstream.notifications import to_mime


class SESNotifier:
    """Production INotifier that sends raw MIME through SES."""

    def __init__(self, sender: str, sender_name: str = "", region: str = "us-east-1",
                 endpoint_url: str | None = None) -> None:
        self._sender = sender
        self._sender_name = sender_name
        kwargs: dict = {"region_name": region}
        if endpoint_url:
            kwargs["endpoint_url"] = endpoint_url
        self._client = boto3.client("ses", **kwargs)

    def send(self, message: EmailMessageSpec) -> str:
        mime = to_mime(message, self._sender, self._sender_name)
        try:
            resp = self._client.send_raw_email(
                Source=self._sender,
                Destinations=[message.to],
                RawMessage={"Data": mime.as_bytes()},
            )
        except ClientError as exc:
            raise NotificationError(f"SES send to {message.to} failed: {exc}") from exc
        return resp["MessageId"]
