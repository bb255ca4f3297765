"""
SMTP transport error classification tests (smtplib is monkeypatched)
"""

import smtplib

import pytest

from hiretrack.config.settings import MailConfig
from hiretrack.core.errors import PermanentDeliveryError, TransientDeliveryError
from hiretrack.infrastructure.mail import LoggingMailTransport, SmtpMailTransport, build_mail_transport
from hiretrack.infrastructure.mail import smtp_transport


class FakeSMTP:
    instances = []
    send_error = None
    connect_error = None
    starttls_error = None

    def __init__(self, host, port, timeout=None):
        if FakeSMTP.connect_error is not None:
            raise FakeSMTP.connect_error
        self.host = host
        self.port = port
        self.started_tls = False
        self.logged_in = None
        self.messages = []
        self.quit_called = False
        FakeSMTP.instances.append(self)

    def starttls(self):
        if FakeSMTP.starttls_error is not None:
            raise FakeSMTP.starttls_error
        self.started_tls = True

    def login(self, user, password):
        self.logged_in = (user, password)

    def send_message(self, msg):
        if FakeSMTP.send_error is not None:
            raise FakeSMTP.send_error
        self.messages.append(msg)

    def quit(self):
        self.quit_called = True

    def close(self):
        pass


@pytest.fixture
def fake_smtp(monkeypatch):
    FakeSMTP.instances = []
    FakeSMTP.send_error = None
    FakeSMTP.connect_error = None
    FakeSMTP.starttls_error = None
    monkeypatch.setattr(smtp_transport.smtplib, "SMTP", FakeSMTP)
    return FakeSMTP


def _send(transport):
    return transport.send(sender="from@x.test", recipient="to@x.test", subject="Hello", body="Body text")


def test_send_builds_message_and_uses_tls(fake_smtp):
    transport = SmtpMailTransport("smtp.x.test", 587, username="user", password="pw")
    response = _send(transport)

    server = fake_smtp.instances[0]
    assert response == "250 accepted for to@x.test"
    assert server.started_tls is True
    assert server.logged_in == ("user", "pw")
    assert server.quit_called is True
    msg = server.messages[0]
    assert msg["To"] == "to@x.test"
    assert msg["From"] == "from@x.test"
    assert msg["Subject"] == "Hello"
    assert msg.get_content().strip() == "Body text"


@pytest.mark.parametrize(
    "error",
    [
        smtplib.SMTPServerDisconnected("gone"),
        smtplib.SMTPResponseException(421, b"try again later"),
        smtplib.SMTPConnectError(421, b"busy"),
    ],
)
def test_transient_errors(fake_smtp, error):
    fake_smtp.send_error = error
    with pytest.raises(TransientDeliveryError):
        _send(SmtpMailTransport("smtp.x.test"))


@pytest.mark.parametrize(
    "error",
    [
        smtplib.SMTPRecipientsRefused({"to@x.test": (550, b"no such user")}),
        smtplib.SMTPAuthenticationError(535, b"bad credentials"),
        smtplib.SMTPResponseException(554, b"rejected"),
    ],
)
def test_permanent_errors(fake_smtp, error):
    fake_smtp.send_error = error
    with pytest.raises(PermanentDeliveryError):
        _send(SmtpMailTransport("smtp.x.test"))


@pytest.mark.parametrize(
    "error,expected",
    [
        (smtplib.SMTPNotSupportedError("STARTTLS extension not supported by server."), PermanentDeliveryError),
        (smtplib.SMTPResponseException(454, b"TLS not available"), TransientDeliveryError),
    ],
)
def test_failed_starttls_closes_connection(fake_smtp, error, expected):
    fake_smtp.starttls_error = error
    with pytest.raises(expected):
        _send(SmtpMailTransport("smtp.x.test"))
    server = fake_smtp.instances[0]
    assert server.quit_called is True
    assert server.messages == []


def test_ssl_transport_skips_starttls(monkeypatch, fake_smtp):
    monkeypatch.setattr(smtp_transport.smtplib, "SMTP_SSL", FakeSMTP)
    _send(SmtpMailTransport("smtp.x.test", 465, use_ssl=True))
    assert fake_smtp.instances[0].started_tls is False


def test_connection_refused_is_transient(fake_smtp):
    fake_smtp.connect_error = ConnectionRefusedError("refused")
    with pytest.raises(TransientDeliveryError):
        _send(SmtpMailTransport("smtp.x.test"))


def test_build_mail_transport_selects_backend():
    assert isinstance(build_mail_transport(MailConfig()), LoggingMailTransport)
    smtp = build_mail_transport(MailConfig(smtp_host="smtp.x.test", smtp_port=2525))
    assert isinstance(smtp, SmtpMailTransport)
    assert smtp.port == 2525


def test_logging_transport_logs(caplog):
    caplog.set_level("INFO", logger="hiretrack.mail")
    response = _send(LoggingMailTransport())
    assert response == "logged for to@x.test"
    assert "to@x.test" in caplog.text
