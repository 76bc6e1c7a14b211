"""Tests for the SMTP notifier adapter and notifier selection."""

from __future__ import annotations

import smtplib

import pytest

from donorlink.core.mail import build_notifier
from donorlink.infra.mail.smtp_notifier import SMTPNotifier
from donorlink.services._shared.errors import NotificationError
from donorlink.services._shared.ports import EmailMessageOut, InMemoryNotifier


class FakeSMTP:
    """Records the calls a real ``smtplib.SMTP`` session would receive."""

    instances: list[FakeSMTP] = []
    fail_on_send = False

    def __init__(self, host, port, timeout):
        self.host = host
        self.port = port
        self.timeout = timeout
        self.calls: list[tuple] = []
        FakeSMTP.instances.append(self)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.calls.append(("quit",))
        return False

    def starttls(self):
        self.calls.append(("starttls",))

    def login(self, user, password):
        self.calls.append(("login", user, password))

    def send_message(self, msg):
        if FakeSMTP.fail_on_send:
            raise smtplib.SMTPRecipientsRefused({msg["To"]: (550, b"no such user")})
        self.calls.append(("send", msg))


@pytest.fixture(autouse=True)
def fake_smtp(monkeypatch):
    FakeSMTP.instances = []
    FakeSMTP.fail_on_send = False
    monkeypatch.setattr(smtplib, "SMTP", FakeSMTP)
    return FakeSMTP


MESSAGE = EmailMessageOut(to="dc@x.com", subject="Approved", body="Welcome aboard.")


def test_send_builds_plain_text_email(fake_smtp):
    notifier = SMTPNotifier(host="mail.local", port=2525, sender="noreply@donorlink.test")

    notifier.send(MESSAGE)

    [conn] = fake_smtp.instances
    assert (conn.host, conn.port) == ("mail.local", 2525)
    kind, sent = conn.calls[0]
    assert kind == "send"
    assert sent["From"] == "noreply@donorlink.test"
    assert sent["To"] == "dc@x.com"
    assert sent["Subject"] == "Approved"
    assert sent.get_content().strip() == "Welcome aboard."
    assert conn.calls[-1] == ("quit",)


def test_tls_and_login_when_configured(fake_smtp):
    notifier = SMTPNotifier(host="mail.local", username="relay", password="s3cret", use_tls=True)

    notifier.send(MESSAGE)

    calls = [c[0] for c in fake_smtp.instances[0].calls]
    assert calls[:3] == ["starttls", "login", "send"]
    assert fake_smtp.instances[0].calls[1] == ("login", "relay", "s3cret")


def test_smtp_failure_becomes_notification_error(fake_smtp):
    fake_smtp.fail_on_send = True
    notifier = SMTPNotifier(host="mail.local")

    with pytest.raises(NotificationError) as err:
        notifier.send(MESSAGE)

    assert isinstance(err.value.__cause__, smtplib.SMTPException)


def test_connection_error_becomes_notification_error(monkeypatch):
    def _refuse(*args, **kwargs):
        raise ConnectionRefusedError("no relay")

    monkeypatch.setattr(smtplib, "SMTP", _refuse)

    with pytest.raises(NotificationError):
        SMTPNotifier(host="mail.local").send(MESSAGE)


def test_build_notifier_selects_backend():
    assert isinstance(build_notifier({"MAIL_BACKEND": "memory"}), InMemoryNotifier)

    smtp = build_notifier({"MAIL_BACKEND": "smtp", "MAIL_DEFAULT_SENDER": "a@donorlink.test"})
    assert isinstance(smtp, SMTPNotifier)
    assert smtp.sender == "a@donorlink.test"

    with pytest.raises(RuntimeError):
        build_notifier({"MAIL_BACKEND": "carrier-pigeon"})
