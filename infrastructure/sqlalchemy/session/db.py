import logging

from sqlalchemy import Engine, create_engine, make_url
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    pass


def is_memory_url(database_url: str) -> bool:
    database = make_url(database_url).database
    return not database or database == ":memory:" or "mode=memory" in database_url


def open_engine(database_url: str) -> Engine:
    """
    Create the shared engine.

    An in-memory SQLite database only lives as long as its connection, so it
    gets a single connection (StaticPool) for every thread. File databases
    keep the default pool and a connection per session.
    """
    kwargs: dict = {}
    if database_url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if is_memory_url(database_url):
            kwargs["poolclass"] = StaticPool
    engine = create_engine(database_url, **kwargs)
    logger.info("Connected to database: %s", database_url)
    return engine


def init_db(engine: Engine) -> None:
    from infrastructure.sqlalchemy.model import models  # noqa: F401  registers tables

    Base.metadata.create_all(bind=engine)
    logger.info("Database tables and indexes initialized")


def session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=engine, expire_on_commit=False)


def close_engine(engine: Engine) -> None:
    engine.dispose()
    logger.info("Database connection closed")
