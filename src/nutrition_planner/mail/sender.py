"""SMTP mail sender. One sender mailbox, many recipients."""

import asyncio
import logging
import smtplib
import ssl
from email.message import EmailMessage

from nutrition_planner.config import get_settings

logger = logging.getLogger(__name__)

SMTP_TIMEOUT_SECONDS = 30.0


class MailSender:
    """Send plain-text mail. Configured only when host, user and password are set."""

    def __init__(
        self,
        *,
        host: str | None = None,
        port: int | None = None,
        use_ssl: bool | None = None,
        user: str | None = None,
        password: str | None = None,
        mail_from: str | None = None,
    ) -> None:
        settings = get_settings()
        self._host = host or settings.smtp_host
        self._port = port or settings.smtp_port
        self._ssl = settings.smtp_ssl if use_ssl is None else use_ssl
        self._user = user or settings.smtp_user
        self._password = password or settings.smtp_password
        self._from = mail_from or settings.mail_from or self._user

    @property
    def is_configured(self) -> bool:
        return bool(self._host and self._user and self._password)

    def _build_message(self, to: str, subject: str, body: str) -> EmailMessage:
        msg = EmailMessage()
        msg["Subject"] = subject
        msg["From"] = self._from
        msg["To"] = to
        msg.set_content(body)
        return msg

    def _send_blocking(self, msg: EmailMessage) -> None:
        context = ssl.create_default_context()
        if self._ssl:
            with smtplib.SMTP_SSL(self._host, self._port, context=context, timeout=SMTP_TIMEOUT_SECONDS) as server:
                server.login(self._user, self._password)
                server.send_message(msg)
        else:
            with smtplib.SMTP(self._host, self._port, timeout=SMTP_TIMEOUT_SECONDS) as server:
                server.starttls(context=context)
                server.login(self._user, self._password)
                server.send_message(msg)

    async def send(self, to: str, subject: str, body: str) -> bool:
        """
        Send a plain-text message. Returns True on success, never raises.
        """
        if not self.is_configured:
            logger.warning("SMTP is not configured, skipping send to %s", to)
            return False
        msg = self._build_message(to, subject, body)
        try:
            await asyncio.to_thread(self._send_blocking, msg)
        except (smtplib.SMTPException, OSError) as e:
            logger.error("Email send to %s failed: %s", to, e)
            return False
        logger.info("Email sent to %s", to)
        return True
