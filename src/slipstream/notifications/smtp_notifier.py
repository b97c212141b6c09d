"""SMTP notifier implementing INotifier."""

from __future__ import annotations

import smtplib

from slipstream.core.exceptions import NotificationError
from slipstream.models.delivery import EmailMessageSpec
from slipstream.notifications import to_mime


class SMTPNotifier:
    """INotifier over a plain SMTP relay. One connection per message."""

    def __init__(self, host: str, port: int = 587, user: str = "", password: str = "",
                 sender: str = "", sender_name: str = "", use_tls: bool = True,
                 timeout: int = 30) -> None:
        self._host = host
        self._port = port
        self._user = user
        self._password = password
        self._sender = sender or user
        self._sender_name = sender_name
        self._use_tls = use_tls
        self._timeout = timeout

    def send(self, message: EmailMessageSpec) -> str:
        mime = to_mime(message, self._sender, self._sender_name)
        try:
            with smtplib.SMTP(self._host, self._port, timeout=self._timeout) as smtp:
                if self._use_tls:
                    smtp.starttls()
                if self._user:
                    smtp.login(self._user, self._password)
                smtp.send_message(mime)
        except (smtplib.SMTPException, OSError) as exc:
            raise NotificationError(f"SMTP send to {message.to} failed: {exc}") from exc
        return mime.get("Message-ID", "")
