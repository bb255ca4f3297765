"""
Settings loading tests
"""

import logging

import pytest

from hiretrack.config import settings as settings_module
from hiretrack.config.logging import configure_logging
from hiretrack.config.settings import LoggingConfig, Settings, get_settings, reset_settings


@pytest.fixture(autouse=True)
def _reset():
    reset_settings()
    yield
    reset_settings()


def test_defaults_when_file_missing(tmp_path):
    settings = Settings.load_from_file(str(tmp_path / "missing.yaml"))
    assert settings.queue.queue_name == "hiretrack:notifications"
    assert settings.mail.smtp_host is None
    assert settings.auth.algorithm == "HS256"


def test_load_from_yaml(tmp_path):
    path = tmp_path / "hiretrack.yaml"
    path.write_text(
        "database:\n"
        "  url: sqlite:///tmp/test.db\n"
        "queue:\n"
        "  max_tries: 3\n"
        "mail:\n"
        "  smtp_host: smtp.example.test\n"
        "  sender: jobs@example.test\n",
        encoding="utf-8",
    )
    settings = Settings.load_from_file(str(path))
    assert settings.database.url == "sqlite:///tmp/test.db"
    assert settings.queue.max_tries == 3
    assert settings.queue.retry_delay == 30
    assert settings.mail.smtp_host == "smtp.example.test"
    assert settings.mail.sender == "jobs@example.test"


def test_environment_overrides_file(tmp_path, monkeypatch):
    path = tmp_path / "hiretrack.yaml"
    path.write_text("redis:\n  host: redis.internal\n", encoding="utf-8")
    monkeypatch.setenv("HIRETRACK_REDIS_PORT", "6380")
    monkeypatch.setenv("HIRETRACK_JWT_SECRET", "s3cret")
    monkeypatch.setenv("HIRETRACK_SMTP_TLS", "false")

    settings = Settings.load_from_file(str(path)).load_environment_variables()

    assert settings.redis.host == "redis.internal"
    assert settings.redis.port == 6380
    assert settings.auth.jwt_secret == "s3cret"
    assert settings.mail.use_tls is False


def test_get_settings_is_cached(monkeypatch, tmp_path):
    monkeypatch.setenv("HIRETRACK_CONFIG", str(tmp_path / "none.yaml"))
    monkeypatch.setenv("HIRETRACK_QUEUE_NAME", "custom")
    first = get_settings()
    assert first.queue.queue_name == "custom"
    assert get_settings() is first
    assert settings_module._settings is first


def test_configure_logging_with_file(tmp_path):
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    log_file = tmp_path / "logs" / "hiretrack.log"
    try:
        configure_logging(LoggingConfig(level="debug", file=str(log_file)))
        logging.getLogger("hiretrack.test").debug("hello file")
        assert root.level == logging.DEBUG
        for handler in root.handlers:
            handler.flush()
        assert "hello file" in log_file.read_text(encoding="utf-8")
    finally:
        for handler in root.handlers:
            handler.close()
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)
