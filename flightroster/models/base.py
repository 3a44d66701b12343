"""
SQLAlchemy base configuration and the document store handle.

Uses SQLAlchemy 2.0 style with type hints and declarative base.
Designed to be portable between SQLite (dev) and PostgreSQL (prod).

The store is an explicit object: the bootstrap builds one from config,
connects it, and hands it to the repository. Nothing connects at import.
"""

import logging
from contextlib import contextmanager
from typing import Generator, Optional

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker, Session

from flightroster.errors import StoreNotConnectedError

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Base class for all models."""
    pass


def _set_sqlite_pragma(dbapi_connection, connection_record):
    """
    Configure SQLite for concurrent request handling.

    WAL mode allows concurrent reads while a request is writing.
    """
    cursor = dbapi_connection.cursor()
    cursor.execute('PRAGMA journal_mode=WAL')
    cursor.execute('PRAGMA synchronous=NORMAL')
    cursor.execute('PRAGMA foreign_keys=ON')
    cursor.close()


class FlightStore:
    """
    Handle on the flight document store.

    Wraps the engine and session factory behind an explicit
    connect/disconnect lifecycle. connect() is idempotent.

    Usage:
        store = FlightStore('sqlite:///flightroster.db')
        store.connect()
        with store.session() as session:
            session.scalars(...)
        store.disconnect()
    """

    def __init__(self, url: str, echo: bool = False):
        self.url = url
        self.echo = echo
        self._engine: Optional[Engine] = None
        self._session_factory: Optional[sessionmaker] = None
        self._connected = False

    @property
    def is_connected(self) -> bool:
        return self._connected

    @property
    def is_sqlite(self) -> bool:
        return self.url.startswith('sqlite')

    @property
    def engine(self) -> Engine:
        if not self._connected:
            raise StoreNotConnectedError('Document store is not connected')
        return self._engine

    def connect(self) -> None:
        """Create the engine, ensure the schema exists and open the session factory."""
        if self._connected:
            return

        engine_kwargs = {'echo': self.echo}
        if self.is_sqlite:
            engine_kwargs['connect_args'] = {'check_same_thread': False}

        engine = create_engine(self.url, **engine_kwargs)
        if self.is_sqlite:
            event.listen(engine, 'connect', _set_sqlite_pragma)

        # For production, use Alembic migrations instead
        Base.metadata.create_all(bind=engine)

        self._engine = engine
        self._session_factory = sessionmaker(
            bind=engine,
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,  # Records are serialized after commit
        )
        self._connected = True
        logger.info(f'Connected to document store ({engine.url.get_backend_name()})')

    def disconnect(self) -> None:
        """Dispose of pooled connections. Safe to call when not connected."""
        if not self._connected:
            return
        self._engine.dispose()
        self._engine = None
        self._session_factory = None
        self._connected = False
        logger.info('Disconnected from document store')

    @contextmanager
    def session(self) -> Generator[Session, None, None]:
        """
        Context manager for store sessions.

        Automatically handles commit/rollback and session cleanup.
        """
        if not self._connected:
            raise StoreNotConnectedError('Document store is not connected')
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

