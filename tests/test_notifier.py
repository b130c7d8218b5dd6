import smtplib

import pytest
import requests

from utils.notifier import (
    BREVO_SEND_URL,
    BrevoSender,
    NotificationError,
    NullSender,
    SmtpSender,
    build_notifier,
)


class FakeResponse:

    def __init__(self, status_code, text=""):
        self.status_code = status_code
        self.text = text


class FakeSession:

    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def post(self, url, **kwargs):
        self.calls.append((url, kwargs))
        if self.error:
            raise self.error
        return self.response


def brevo(session):
    return BrevoSender("api-key", "hr@example.com", "admin@example.com", session=session)


def test_brevo_posts_transactional_email():
    session = FakeSession(FakeResponse(201))

    brevo(session).send("Subject", "<p>Body</p>")

    url, kwargs = session.calls[0]
    assert url == BREVO_SEND_URL
    assert kwargs["headers"]["api-key"] == "api-key"
    assert kwargs["json"]["to"] == [{"email": "admin@example.com"}]
    assert kwargs["json"]["sender"]["email"] == "hr@example.com"
    assert kwargs["json"]["htmlContent"] == "<p>Body</p>"


def test_brevo_error_status_raises():
    with pytest.raises(NotificationError):
        brevo(FakeSession(FakeResponse(401, "unauthorized"))).send("s", "h")


def test_brevo_transport_error_raises():
    with pytest.raises(NotificationError):
        brevo(FakeSession(error=requests.ConnectionError("down"))).send("s", "h")


def test_build_notifier():
    assert isinstance(build_notifier({"NOTIFIER": "none"}), NullSender)
    assert isinstance(build_notifier({"NOTIFIER": "brevo"}), BrevoSender)
    assert isinstance(build_notifier({
        "NOTIFIER": "smtp", "SMTP_HOST": "localhost", "SMTP_PORT": 25,
    }), SmtpSender)
    with pytest.raises(ValueError):
        build_notifier({"NOTIFIER": "pigeon"})


class FakeSMTP:
    instances = []
    error = None

    def __init__(self, host, port, timeout=None):
        if FakeSMTP.error:
            raise FakeSMTP.error
        self.host = host
        self.port = port
        self.calls = []
        FakeSMTP.instances.append(self)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def starttls(self):
        self.calls.append("starttls")

    def login(self, username, password):
        self.calls.append(("login", username, password))

    def sendmail(self, sender, recipients, message):
        self.calls.append(("sendmail", sender, recipients, message))


@pytest.fixture
def fake_smtp(monkeypatch):
    FakeSMTP.instances = []
    FakeSMTP.error = None
    monkeypatch.setattr(smtplib, "SMTP", FakeSMTP)
    return FakeSMTP


def smtp_sender():
    return SmtpSender("smtp.example.com", 587, "hr@example.com", "pw", "admin@example.com")


def test_smtp_sends_html_mail(fake_smtp):
    smtp_sender().send("Leave request", "<p>Jane Doe</p>")

    smtp = fake_smtp.instances[0]
    assert (smtp.host, smtp.port) == ("smtp.example.com", 587)
    assert smtp.calls[0] == "starttls"
    assert smtp.calls[1] == ("login", "hr@example.com", "pw")
    _, sender, recipients, message = smtp.calls[2]
    assert sender == "hr@example.com"
    assert recipients == ["admin@example.com"]
    assert "Subject: Leave request" in message
    assert "text/html" in message


@pytest.mark.parametrize("error", [
    smtplib.SMTPAuthenticationError(535, b"bad credentials"),
    OSError("connection refused"),
])
def test_smtp_failure_raises_notification_error(fake_smtp, error):
    fake_smtp.error = error

    with pytest.raises(NotificationError):
        smtp_sender().send("s", "<p>h</p>")
