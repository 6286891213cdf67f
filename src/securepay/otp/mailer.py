"""
Mail transports for OTP delivery.
"""

import logging
import smtplib
from abc import ABC, abstractmethod
from email.message import EmailMessage
from typing import Any, Dict, Optional
from urllib.parse import unquote, urlsplit


class Mailer(ABC):
    """Sends a single email."""

    @abstractmethod
    def send(
        self, to: str, subject: str, text: str, html: Optional[str] = None
    ) -> Optional[str]:
        """Send a message. Returns a preview URL when the transport has one."""


class LoggingMailer(Mailer):
    """Development transport that writes messages to the log instead of sending."""

    def __init__(self, sender: str = "no-reply@securepay.local"):
        self.sender = sender
        self.logger = logging.getLogger(__name__)
        self.sent = []

    def send(
        self, to: str, subject: str, text: str, html: Optional[str] = None
    ) -> Optional[str]:
        self.sent.append({"to": to, "subject": subject, "text": text})
        self.logger.info(f"[dev mail] from={self.sender} to={to} subject={subject!r}: {text}")
        return None


class SMTPMailer(Mailer):
    """Sends mail through an SMTP server."""

    def __init__(self, config: Dict[str, Any]):
        """Initialize the SMTP mailer from the smtp config section."""
        self.config = config
        self.logger = logging.getLogger(__name__)

        url = config.get("url")
        if url:
            parts = urlsplit(url)
            self.secure = parts.scheme == "smtps"
            self.host = parts.hostname
            self.port = parts.port or (465 if self.secure else 587)
            self.user = unquote(parts.username) if parts.username else None
            self.password = unquote(parts.password) if parts.password else None
        else:
            self.host = config.get("host")
            self.port = int(config.get("port", 587))
            self.user = config.get("user")
            self.password = config.get("password")
            self.secure = str(config.get("secure", False)).lower() == "true"

        self.sender = config.get("from") or self.user or "no-reply@securepay.local"
        self.timeout = config.get("timeout", 10)

    def _connect(self) -> smtplib.SMTP:
        if self.secure:
            return smtplib.SMTP_SSL(self.host, self.port, timeout=self.timeout)

        connection = smtplib.SMTP(self.host, self.port, timeout=self.timeout)
        connection.ehlo()
        if connection.has_extn("starttls"):
            connection.starttls()
            connection.ehlo()
        return connection

    def send(
        self, to: str, subject: str, text: str, html: Optional[str] = None
    ) -> Optional[str]:
        message = EmailMessage()
        message["From"] = self.sender
        message["To"] = to
        message["Subject"] = subject
        message.set_content(text)
        if html:
            message.add_alternative(html, subtype="html")

        with self._connect() as connection:
            if self.user and self.password:
                connection.login(self.user, self.password)
            connection.send_message(message)

        self.logger.info(f"OTP email sent to {to} via {self.host}:{self.port}")
        return None


def create_mailer(config: Dict[str, Any]) -> Mailer:
    """Use SMTP when configured, otherwise log messages."""
    if config.get("url") or (
        config.get("host") and config.get("user") and config.get("password")
    ):
        return SMTPMailer(config)

    logging.getLogger(__name__).warning(
        "SMTP not configured, OTP emails will only be logged"
    )
    return LoggingMailer(config.get("from") or "no-reply@securepay.local")
