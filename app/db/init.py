"""Initialize database tables."""
from typing import Optional

from sqlalchemy.engine import Engine
from sqlmodel import SQLModel

from app.models.user import User  # noqa: F401
from app.models.task import Task  # noqa: F401
from app.db.config import engine as default_engine
from app.utils.logger import get_logger

logger = get_logger(__name__)


def init_db(engine: Optional[Engine] = None):
    """Create the users and tasks tables if they do not exist."""
    target = engine or default_engine
    logger.info("Creating database tables")
    SQLModel.metadata.create_all(target)
    logger.info("Database tables ready", tables=sorted(SQLModel.metadata.tables))


if __name__ == "__main__":
    init_db()
