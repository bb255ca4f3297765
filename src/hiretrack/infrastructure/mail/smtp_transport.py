"""
SMTP delivery transport for the notification worker.

Error classification:
- connection problems, timeouts and 4xx replies -> TransientDeliveryError
- refused recipients, auth failures and other 5xx replies -> PermanentDeliveryError
"""

from __future__ import annotations

import logging
import smtplib
from email.message import EmailMessage
from typing import Optional, Union

from hiretrack.config.settings import MailConfig
from hiretrack.core.errors import PermanentDeliveryError, TransientDeliveryError

logger = logging.getLogger(__name__)


def build_message(*, sender: str, recipient: str, subject: str, body: str) -> EmailMessage:
    msg = EmailMessage()
    msg["From"] = sender
    msg["To"] = recipient
    msg["Subject"] = subject
    msg.set_content(body)
    return msg


class SmtpMailTransport:
    def __init__(
        self,
        host: str,
        port: int = 587,
        *,
        username: Optional[str] = None,
        password: Optional[str] = None,
        use_tls: bool = True,
        use_ssl: bool = False,
        timeout: int = 30,
    ):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.use_tls = use_tls
        self.use_ssl = use_ssl
        self.timeout = timeout

    @classmethod
    def from_config(cls, config: MailConfig) -> "SmtpMailTransport":
        return cls(
            config.smtp_host or "localhost",
            config.smtp_port,
            username=config.username,
            password=config.password,
            use_tls=config.use_tls,
            use_ssl=config.use_ssl,
            timeout=config.timeout,
        )

    def _connect(self) -> Union[smtplib.SMTP, smtplib.SMTP_SSL]:
        if self.use_ssl:
            return smtplib.SMTP_SSL(self.host, self.port, timeout=self.timeout)
        return smtplib.SMTP(self.host, self.port, timeout=self.timeout)

    @staticmethod
    def _close(server: smtplib.SMTP) -> None:
        try:
            server.quit()
        except OSError:
            server.close()

    def send(self, *, sender: str, recipient: str, subject: str, body: str) -> str:
        msg = build_message(sender=sender, recipient=recipient, subject=subject, body=body)
        context = {"recipient": recipient, "host": self.host}
        try:
            server = self._connect()
            try:
                if self.use_tls and not self.use_ssl:
                    server.starttls()
                if self.username:
                    server.login(self.username, self.password or "")
                server.send_message(msg)
            finally:
                self._close(server)
        except smtplib.SMTPRecipientsRefused as e:
            raise PermanentDeliveryError(message=f"Recipient refused: {recipient}", context=context) from e
        except smtplib.SMTPAuthenticationError as e:
            raise PermanentDeliveryError(message="SMTP authentication failed", context=context) from e
        except smtplib.SMTPConnectError as e:
            raise TransientDeliveryError(message=f"SMTP connect failed: {e}", context=context) from e
        except smtplib.SMTPResponseException as e:
            context["smtp_code"] = e.smtp_code
            if 400 <= e.smtp_code < 500:
                raise TransientDeliveryError(message=f"SMTP temporary failure: {e.smtp_error!r}", context=context) from e
            raise PermanentDeliveryError(message=f"SMTP rejected message: {e.smtp_error!r}", context=context) from e
        except smtplib.SMTPServerDisconnected as e:
            raise TransientDeliveryError(message="SMTP server disconnected", context=context) from e
        except smtplib.SMTPException as e:
            raise PermanentDeliveryError(message=f"SMTP error: {e}", context=context) from e
        except OSError as e:
            raise TransientDeliveryError(message=f"SMTP connection error: {e}", context=context) from e

        return f"250 accepted for {recipient}"


class LoggingMailTransport:
    """Development transport: writes the message to the log instead of sending it."""

    def __init__(self, logger_: Optional[logging.Logger] = None):
        self._logger = logger_ or logging.getLogger("hiretrack.mail")

    def send(self, *, sender: str, recipient: str, subject: str, body: str) -> str:
        self._logger.info("Email from %s to %s: %s\n%s", sender, recipient, subject, body)
        return f"logged for {recipient}"
