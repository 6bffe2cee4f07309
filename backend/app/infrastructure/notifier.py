"""Email Notifier: outbound verification mail over SMTP, or logged links when SMTP is not configured.

Invariants:
    - send_verification() never raises: delivery failures are logged and reported as False
    - SMTP work runs in a worker thread (smtplib is blocking)
    - The verification link is logged only by LoggingNotifier (development, no SMTP host)

Design Decisions:
    - stdlib smtplib + EmailMessage, plain-text body (HTML templating is out of scope)
    - Notifier chosen once at startup from Settings (build_notifier)
"""

import asyncio
import logging
import smtplib
import ssl
from dataclasses import dataclass
from email.message import EmailMessage

from app.config import Settings
from app.core.boundary_protocols import Notifier

logger = logging.getLogger(__name__)

VERIFICATION_SUBJECT = "Verify your Household Ledger account"


def render_verification_text(name: str | None, link: str, ttl_hours: int) -> str:
    return (
        f"Hi {name or 'there'},\n\n"
        "Welcome to Household Ledger. Confirm your email address by opening this link:\n\n"
        f"{link}\n\n"
        f"The link expires in {ttl_hours} hours. "
        "If you did not create this account you can ignore this message.\n"
    )


@dataclass
class SmtpConfig:
    host: str
    port: int
    user: str
    password: str
    use_tls: bool
    use_ssl: bool
    timeout: int
    sender: str


class SmtpNotifier:
    """Sends verification mail through an SMTP relay."""

    def __init__(self, config: SmtpConfig, ttl_hours: int):
        self.config = config
        self.ttl_hours = ttl_hours

    def _deliver(self, msg: EmailMessage) -> None:
        cfg = self.config
        if cfg.use_ssl:
            context = ssl.create_default_context()
            with smtplib.SMTP_SSL(cfg.host, cfg.port, context=context, timeout=cfg.timeout) as smtp:
                if cfg.user:
                    smtp.login(cfg.user, cfg.password)
                smtp.send_message(msg)
            return
        with smtplib.SMTP(cfg.host, cfg.port, timeout=cfg.timeout) as smtp:
            smtp.ehlo()
            if cfg.use_tls:
                smtp.starttls(context=ssl.create_default_context())
                smtp.ehlo()
            if cfg.user:
                smtp.login(cfg.user, cfg.password)
            smtp.send_message(msg)

    async def send_verification(self, to: str, name: str | None, link: str) -> bool:
        msg = EmailMessage()
        msg["Subject"] = VERIFICATION_SUBJECT
        msg["From"] = self.config.sender
        msg["To"] = to
        msg.set_content(render_verification_text(name, link, self.ttl_hours))
        try:
            await asyncio.to_thread(self._deliver, msg)
        except (smtplib.SMTPException, OSError):
            logger.exception("Verification email delivery failed")
            return False
        logger.info("Verification email sent")
        return True


class LoggingNotifier:
    """Development notifier: writes the link to the log instead of sending mail."""

    async def send_verification(self, to: str, name: str | None, link: str) -> bool:
        logger.info(f"SMTP not configured; verification link for {to}: {link}")
        return False


def build_notifier(settings: Settings) -> Notifier:
    if not settings.smtp_host:
        return LoggingNotifier()
    return SmtpNotifier(
        SmtpConfig(
            host=settings.smtp_host,
            port=settings.smtp_port,
            user=settings.smtp_user,
            password=settings.smtp_password,
            use_tls=settings.smtp_use_tls,
            use_ssl=settings.smtp_use_ssl,
            timeout=settings.smtp_timeout_seconds,
            sender=settings.mail_from,
        ),
        ttl_hours=settings.verification_ttl_hours,
    )
