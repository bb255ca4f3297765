"""
CLI tests
"""

import pytest

from hiretrack import __version__
from hiretrack.config.settings import Settings
from hiretrack.infrastructure.auth import TokenService
from hiretrack.presentation.cli import create_parser, run_cli


@pytest.fixture(autouse=True)
def _quiet_logging(monkeypatch):
    monkeypatch.setattr("hiretrack.presentation.cli.main.configure_logging", lambda config: None)


def _settings(tmp_path, secret="cli-secret"):
    settings = Settings()
    settings.database.url = f"sqlite:///{tmp_path / 'cli.db'}"
    settings.auth.jwt_secret = secret
    return settings


def test_version(capsys):
    assert run_cli(["--version"]) == 0
    assert __version__ in capsys.readouterr().out


def test_no_command_prints_help(capsys):
    assert run_cli([]) == 0
    assert "usage" in capsys.readouterr().out.lower()


def test_parser_subcommands():
    parsed = create_parser().parse_args(["send-test-email", "a@x.test", "--subject", "Hi"])
    assert parsed.command == "send-test-email"
    assert parsed.to == "a@x.test"
    assert parsed.subject == "Hi"


def test_init_db_creates_schema(tmp_path, capsys):
    assert run_cli(["init-db"], settings=_settings(tmp_path)) == 0
    assert (tmp_path / "cli.db").exists()
    assert "Database ready" in capsys.readouterr().out


def test_token_command(tmp_path, capsys):
    assert run_cli(["token", "12", "--role", "RECRUITER"], settings=_settings(tmp_path)) == 0
    token = capsys.readouterr().out.strip()
    identity = TokenService("cli-secret").identity(token)
    assert identity.user_id == 12
    assert identity.role.value == "RECRUITER"


def test_token_without_secret_fails(tmp_path, capsys):
    assert run_cli(["token", "1"], settings=_settings(tmp_path, secret=None)) == 1
    assert "JWT secret" in capsys.readouterr().err
