import logging

from peewee import Database
from playhouse.db_url import connect

from infrastructure.peewee.model.models import MODELS

logger = logging.getLogger(__name__)


def open_database(database_url: str) -> Database:
    """
    Open the shared database handle.

    SQLite gets a single connection shared between worker threads; SQLite
    serializes the writes itself.
    """
    params: dict = {}
    if database_url.startswith("sqlite"):
        params = {
            "thread_safe": False,
            "check_same_thread": False,
            "pragmas": {"foreign_keys": 1},
        }

    db = connect(database_url, **params)
    db.connect(reuse_if_open=True)
    logger.info("Connected to database: %s", database_url)
    return db


def init_db(db: Database) -> None:
    with db.bind_ctx(MODELS):
        db.create_tables(MODELS, safe=True)
    logger.info("Database tables and indexes initialized")


def close_database(db: Database) -> None:
    if not db.is_closed():
        db.close()
        logger.info("Database connection closed")
