# hiretrack/config/settings.py

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.lower() in ("1", "true", "yes", "y")


@dataclass
class DatabaseConfig:
    """Database settings"""
    url: str = ""
    auto_create_schema: bool = True


@dataclass
class RedisConfig:
    """Redis connection used by the notification queue"""
    host: str = "127.0.0.1"
    port: int = 6379
    database: int = 0
    password: Optional[str] = None


@dataclass
class QueueConfig:
    """Notification queue / worker settings"""
    queue_name: str = "hiretrack:notifications"
    max_jobs: int = 10           # deliveries in flight per worker
    max_tries: int = 5
    retry_delay: int = 30        # seconds, multiplied by the attempt number
    job_timeout: int = 60


@dataclass
class MailConfig:
    """Outbound e-mail settings"""
    smtp_host: Optional[str] = None
    smtp_port: int = 587
    username: Optional[str] = None
    password: Optional[str] = None
    use_tls: bool = True
    use_ssl: bool = False
    timeout: int = 30
    sender: str = "no-reply@hiretrack.local"


@dataclass
class AuthConfig:
    """Token settings"""
    jwt_secret: Optional[str] = None
    algorithm: str = "HS256"
    token_ttl_seconds: int = 3600


@dataclass
class LoggingConfig:
    """Logging settings"""
    level: str = "INFO"
    file: Optional[str] = None
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass
class Settings:
    """Top-level settings"""
    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    redis: RedisConfig = field(default_factory=RedisConfig)
    queue: QueueConfig = field(default_factory=QueueConfig)
    mail: MailConfig = field(default_factory=MailConfig)
    auth: AuthConfig = field(default_factory=AuthConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def load_from_file(cls, config_path: Optional[str] = None) -> "Settings":
        """Load settings from YAML; missing file means defaults."""
        if config_path is None:
            config_path = os.getenv("HIRETRACK_CONFIG") or "config/hiretrack.yaml"

        path = Path(config_path)
        if not path.exists():
            return cls()

        with open(path, "r", encoding="utf-8") as f:
            config_data = yaml.safe_load(f) or {}

        return cls.from_dict(config_data)

    @classmethod
    def from_dict(cls, config_data: Dict[str, Any]) -> "Settings":
        settings = cls()

        if "database" in config_data:
            settings.database = DatabaseConfig(**config_data["database"])
        if "redis" in config_data:
            settings.redis = RedisConfig(**config_data["redis"])
        if "queue" in config_data:
            settings.queue = QueueConfig(**config_data["queue"])
        if "mail" in config_data:
            settings.mail = MailConfig(**config_data["mail"])
        if "auth" in config_data:
            settings.auth = AuthConfig(**config_data["auth"])
        if "logging" in config_data:
            settings.logging = LoggingConfig(**config_data["logging"])

        return settings

    def load_environment_variables(self) -> "Settings":
        """Environment overrides (HIRETRACK_*) take precedence over the file."""
        self.database.url = os.getenv("HIRETRACK_DB_URL", self.database.url)
        self.database.auto_create_schema = _env_flag("HIRETRACK_DB_AUTO_CREATE", self.database.auto_create_schema)

        self.redis.host = os.getenv("HIRETRACK_REDIS_HOST", self.redis.host)
        self.redis.port = int(os.getenv("HIRETRACK_REDIS_PORT", str(self.redis.port)))
        self.redis.database = int(os.getenv("HIRETRACK_REDIS_DB", str(self.redis.database)))
        self.redis.password = os.getenv("HIRETRACK_REDIS_PASSWORD") or self.redis.password

        self.queue.queue_name = os.getenv("HIRETRACK_QUEUE_NAME", self.queue.queue_name)
        self.queue.max_jobs = int(os.getenv("HIRETRACK_QUEUE_MAX_JOBS", str(self.queue.max_jobs)))
        self.queue.max_tries = int(os.getenv("HIRETRACK_QUEUE_MAX_TRIES", str(self.queue.max_tries)))
        self.queue.retry_delay = int(os.getenv("HIRETRACK_QUEUE_RETRY_DELAY", str(self.queue.retry_delay)))

        self.mail.smtp_host = os.getenv("HIRETRACK_SMTP_HOST") or self.mail.smtp_host
        self.mail.smtp_port = int(os.getenv("HIRETRACK_SMTP_PORT", str(self.mail.smtp_port)))
        self.mail.username = os.getenv("HIRETRACK_SMTP_USER") or self.mail.username
        self.mail.password = os.getenv("HIRETRACK_SMTP_PASSWORD") or self.mail.password
        self.mail.use_tls = _env_flag("HIRETRACK_SMTP_TLS", self.mail.use_tls)
        self.mail.use_ssl = _env_flag("HIRETRACK_SMTP_SSL", self.mail.use_ssl)
        self.mail.sender = os.getenv("HIRETRACK_MAIL_FROM") or self.mail.sender

        self.auth.jwt_secret = os.getenv("HIRETRACK_JWT_SECRET") or self.auth.jwt_secret
        self.auth.token_ttl_seconds = int(os.getenv("HIRETRACK_TOKEN_TTL", str(self.auth.token_ttl_seconds)))

        self.logging.level = os.getenv("HIRETRACK_LOG_LEVEL", self.logging.level)
        self.logging.file = os.getenv("HIRETRACK_LOG_FILE") or self.logging.file
        return self


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Process-wide settings, loaded once from file + environment."""
    global _settings
    if _settings is None:
        _settings = Settings.load_from_file().load_environment_variables()
    return _settings


def reset_settings() -> None:
    global _settings
    _settings = None
