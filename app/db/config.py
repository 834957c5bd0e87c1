"""Database configuration for the Kanban task tracker."""
from typing import Generator
from sqlmodel import create_engine, Session
from sqlalchemy import event
from sqlalchemy.engine import Engine

from app.config import DATABASE_URL, SQL_ECHO
from app.utils.logger import get_logger

logger = get_logger(__name__)


def build_engine(database_url: str = DATABASE_URL, echo: bool = SQL_ECHO, **kwargs) -> Engine:
    """Create an engine, enabling foreign keys for SQLite connections."""
    is_sqlite = database_url.startswith("sqlite")
    connect_args = {"check_same_thread": False} if is_sqlite else {}
    new_engine = create_engine(database_url, echo=echo, connect_args=connect_args, **kwargs)

    if is_sqlite:
        @event.listens_for(new_engine, "connect")
        def set_sqlite_pragma(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    logger.info("Database engine created", backend=new_engine.dialect.name)
    return new_engine


engine = build_engine()


def get_session() -> Generator[Session, None, None]:
    """Dependency for getting a request-scoped database session."""
    with Session(engine) as session:
        yield session
