"""Email Notifier: message composition, failure reporting, notifier selection."""

import smtplib

from app.config import Settings
from app.infrastructure import notifier as notifier_module
from app.infrastructure.notifier import (
    LoggingNotifier, SmtpConfig, SmtpNotifier, build_notifier, render_verification_text,
)

CONFIG = SmtpConfig(
    host="smtp.test", port=587, user="mailer", password="pw",
    use_tls=True, use_ssl=False, timeout=5, sender="noreply@test",
)


class _FakeSMTP:
    instances: list["_FakeSMTP"] = []

    def __init__(self, host, port, timeout=None):
        self.host, self.port = host, port
        self.calls: list[str] = []
        self.messages = []
        _FakeSMTP.instances.append(self)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def ehlo(self):
        self.calls.append("ehlo")

    def starttls(self, context=None):
        self.calls.append("starttls")

    def login(self, user, password):
        self.calls.append(f"login:{user}")

    def send_message(self, msg):
        self.messages.append(msg)


def test_body_contains_link_and_expiry():
    text = render_verification_text("Ana", "http://app/verify-email?token=t", 24)
    assert "Hi Ana" in text
    assert "http://app/verify-email?token=t" in text
    assert "24 hours" in text


async def test_smtp_notifier_sends_over_starttls(monkeypatch):
    _FakeSMTP.instances.clear()
    monkeypatch.setattr(notifier_module.smtplib, "SMTP", _FakeSMTP)

    sent = await SmtpNotifier(CONFIG, ttl_hours=24).send_verification(
        "a@x.com", "Ana", "http://app/verify-email?token=t",
    )
    assert sent is True
    smtp = _FakeSMTP.instances[0]
    assert (smtp.host, smtp.port) == ("smtp.test", 587)
    assert smtp.calls == ["ehlo", "starttls", "ehlo", "login:mailer"]
    assert smtp.messages[0]["To"] == "a@x.com"
    assert smtp.messages[0]["From"] == "noreply@test"


async def test_smtp_failure_is_reported_not_raised(monkeypatch):
    def _refuse(self, msg):
        raise smtplib.SMTPException("relay down")

    monkeypatch.setattr(SmtpNotifier, "_deliver", _refuse)
    sent = await SmtpNotifier(CONFIG, ttl_hours=24).send_verification("a@x.com", None, "link")
    assert sent is False


async def test_logging_notifier_reports_not_delivered():
    assert await LoggingNotifier().send_verification("a@x.com", None, "link") is False


def test_build_notifier_without_smtp_host():
    assert isinstance(build_notifier(Settings(smtp_host="")), LoggingNotifier)


def test_build_notifier_with_smtp_host():
    built = build_notifier(Settings(smtp_host="smtp.test", verification_ttl_hours=12))
    assert isinstance(built, SmtpNotifier)
    assert built.ttl_hours == 12
