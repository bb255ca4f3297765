from .application_store import SqlAlchemyApplicationStore
from .memory_store import InMemoryApplicationStore
from .sqlalchemy_db import SessionProvider, create_db_engine, get_db_url

__all__ = [
    "SqlAlchemyApplicationStore",
    "InMemoryApplicationStore",
    "SessionProvider",
    "create_db_engine",
    "get_db_url",
]
