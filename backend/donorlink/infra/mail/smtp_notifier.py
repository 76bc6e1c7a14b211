"""SMTP delivery for lifecycle notifications."""

from __future__ import annotations

import logging
import smtplib
from email.message import EmailMessage

from donorlink.services._shared.errors import NotificationError
from donorlink.services._shared.ports import EmailMessageOut, Notifier

log = logging.getLogger(__name__)


class SMTPNotifier(Notifier):
    """
    Send plain-text mail through an SMTP relay.

    A connection is opened per message; the notifier itself holds only
    settings and is safe to share across requests.
    """

    def __init__(
        self,
        *,
        host: str,
        port: int = 25,
        username: str | None = None,
        password: str | None = None,
        use_tls: bool = False,
        sender: str = "no-reply@donorlink.local",
        timeout: float = 10.0,
    ) -> None:
        self._host = host
        self._port = port
        self._username = username
        self._password = password
        self._use_tls = use_tls
        self.sender = sender
        self._timeout = timeout

    def _new_connection(self) -> smtplib.SMTP:
        return smtplib.SMTP(host=self._host, port=self._port, timeout=self._timeout)

    def _build(self, message: EmailMessageOut) -> EmailMessage:
        email = EmailMessage()
        email["From"] = self.sender
        email["To"] = message.to
        email["Subject"] = message.subject
        email.set_content(message.body)
        return email

    def send(self, message: EmailMessageOut) -> None:
        """Deliver ``message``; raise :class:`NotificationError` on any SMTP/socket failure."""
        try:
            with self._new_connection() as conn:
                if self._use_tls:
                    conn.starttls()
                if self._username:
                    conn.login(self._username, self._password or "")
                conn.send_message(self._build(message))
        except (smtplib.SMTPException, OSError) as exc:
            raise NotificationError(f"SMTP delivery to {message.to} failed") from exc
        log.info("mail.sent", extra={"recipient": message.to})
