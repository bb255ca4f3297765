from .settings import (
    AuthConfig,
    DatabaseConfig,
    LoggingConfig,
    MailConfig,
    QueueConfig,
    RedisConfig,
    Settings,
    get_settings,
    reset_settings,
)

__all__ = [
    "AuthConfig",
    "DatabaseConfig",
    "LoggingConfig",
    "MailConfig",
    "QueueConfig",
    "RedisConfig",
    "Settings",
    "get_settings",
    "reset_settings",
]
