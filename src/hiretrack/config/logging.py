"""
Logging setup shared by the API process, the worker and the CLI.
"""

from __future__ import annotations

import logging
import logging.handlers
from pathlib import Path
from typing import Optional

from hiretrack.config.settings import LoggingConfig


def configure_logging(config: Optional[LoggingConfig] = None) -> None:
    config = config or LoggingConfig()
    level = getattr(logging, str(config.level).upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if config.file:
        Path(config.file).expanduser().resolve().parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            logging.handlers.RotatingFileHandler(
                config.file, maxBytes=10 * 1024 * 1024, backupCount=5, encoding="utf-8"
            )
        )

    logging.basicConfig(level=level, format=config.format, handlers=handlers, force=True)
