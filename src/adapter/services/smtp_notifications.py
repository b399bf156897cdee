import asyncio
import logging
import smtplib
import ssl
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

from libs.result import Error, Result, Return
from src.app.services.notifications import INotificationDispatcher

logger = logging.getLogger(__name__)


class SmtpNotificationDispatcher(INotificationDispatcher):
    """
    Sends email over SMTP.

    With SMTP_ENABLED off the message is only logged (console backend), which
    counts as delivered.
    """

    def __init__(self, config):
        self._config = config

    def _create_message(
        self, to_address: str, subject: str, text_body: str, html_body: str
    ) -> MIMEMultipart:
        msg = MIMEMultipart("alternative")
        msg["Subject"] = subject
        msg["From"] = f"{self._config.SMTP_FROM_NAME} <{self._config.SMTP_FROM_EMAIL}>"
        msg["To"] = to_address

        msg.attach(MIMEText(text_body, "plain"))
        if html_body:
            msg.attach(MIMEText(html_body, "html"))

        return msg

    def _deliver(self, message: MIMEMultipart) -> None:
        config = self._config
        if config.SMTP_USE_TLS and not config.SMTP_STARTTLS:
            # Implicit TLS (port 465)
            context = ssl.create_default_context()
            with smtplib.SMTP_SSL(
                config.SMTP_HOST,
                config.SMTP_PORT,
                timeout=config.SMTP_TIMEOUT_SECONDS,
                context=context,
            ) as server:
                if config.SMTP_USER:
                    server.login(config.SMTP_USER, config.SMTP_PASSWORD)
                server.send_message(message)
        else:
            # STARTTLS (port 587) or plain
            with smtplib.SMTP(
                config.SMTP_HOST, config.SMTP_PORT, timeout=config.SMTP_TIMEOUT_SECONDS
            ) as server:
                if config.SMTP_STARTTLS:
                    server.starttls(context=ssl.create_default_context())
                if config.SMTP_USER:
                    server.login(config.SMTP_USER, config.SMTP_PASSWORD)
                server.send_message(message)

    async def send(
        self, to_address: str, subject: str, text_body: str, html_body: str
    ) -> Result[None]:
        if not self._config.SMTP_ENABLED:
            logger.warning("SMTP disabled, email %r to %s not sent", subject, to_address)
            return Return.ok(None)

        if not self._config.SMTP_HOST:
            logger.error("SMTP host not configured")
            return Return.err(Error("NOTIFICATION_FAILED", "Email could not be sent"))

        message = self._create_message(to_address, subject, text_body, html_body)
        try:
            # smtplib blocks, keep it off the event loop
            await asyncio.to_thread(self._deliver, message)
        except (smtplib.SMTPException, OSError) as e:
            logger.error("Failed to send email %r to %s: %s", subject, to_address, e)
            return Return.err(Error("NOTIFICATION_FAILED", "Email could not be sent"))

        logger.info("Email %r sent to %s", subject, to_address)
        return Return.ok(None)
