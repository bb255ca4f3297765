"""
Alembic environment for the HireTrack schema.

The database URL comes from HIRETRACK_DB_URL, falling back to ``sqlalchemy.url``
in alembic.ini.
"""

from __future__ import annotations

import os
from logging.config import fileConfig

from alembic import context

from hiretrack.infrastructure.stores.models import Base
from hiretrack.infrastructure.stores.sqlalchemy_db import create_db_engine

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name, disable_existing_loggers=False)

DB_URL = os.getenv("HIRETRACK_DB_URL") or config.get_main_option("sqlalchemy.url")


def run_offline() -> None:
    context.configure(url=DB_URL, target_metadata=Base.metadata, literal_binds=True)
    with context.begin_transaction():
        context.run_migrations()


def run_online() -> None:
    engine = create_db_engine(DB_URL)
    try:
        with engine.connect() as connection:
            # SQLite cannot ALTER most constraints in place.
            context.configure(
                connection=connection,
                target_metadata=Base.metadata,
                render_as_batch=connection.dialect.name == "sqlite",
            )
            with context.begin_transaction():
                context.run_migrations()
    finally:
        engine.dispose()


if context.is_offline_mode():
    run_offline()
else:
    run_online()
