"""
SQLAlchemy engine and sessions for the event log.

Flight and weather data never touch the database; only dashboard
events are persisted.
"""

from contextlib import contextmanager
from typing import Generator

from sqlalchemy import create_engine, event
from sqlalchemy.orm import DeclarativeBase, sessionmaker, Session

from skyguard.config import config


class Base(DeclarativeBase):
    pass


def _build_engine():
    if not config.database.is_sqlite:
        return create_engine(config.database.url)

    # Requests append from Flask worker threads
    sqlite_engine = create_engine(
        config.database.url,
        connect_args={'check_same_thread': False},
    )

    @event.listens_for(sqlite_engine, 'connect')
    def enable_wal(dbapi_connection, connection_record):
        # Listing reads while another request appends
        cursor = dbapi_connection.cursor()
        cursor.execute('PRAGMA journal_mode=WAL')
        cursor.execute('PRAGMA synchronous=NORMAL')
        cursor.close()

    return sqlite_engine


engine = _build_engine()

SessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@contextmanager
def get_session() -> Generator[Session, None, None]:
    """Session that commits on success and rolls back on error."""
    session = SessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def init_db() -> None:
    """Create the event log table if it doesn't exist."""
    Base.metadata.create_all(bind=engine)
