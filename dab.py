# init_db.py

import logging

from app.config import settings
from app.core.logging import setup_logging
from app.db.session import Base, engine
from app.db.models.user import User  # noqa: F401
from app.db.models.todo import Task, Tag, TaskTag  # noqa: F401

logger = logging.getLogger("init_db")


def init():
    setup_logging(settings.LOG_LEVEL, settings.LOG_FORMAT)
    logger.info("Creating tables (if not exist)...")
    Base.metadata.create_all(bind=engine)
    logger.info("Done.")


if __name__ == "__main__":
    init()
