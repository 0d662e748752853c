import logging
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_HANDLER_NAME = "tasks-console"


def configure_logging(level: str = "info") -> None:
    """
    Configure the root logger with a single console handler.

    Handlers that are already installed (pytest, uvicorn) are kept.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    if not any(h.get_name() == _HANDLER_NAME for h in root_logger.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
        root_logger.addHandler(handler)

    for name, third_party_level in {
        "uvicorn": logging.INFO,
        "uvicorn.access": logging.WARNING,
        "peewee": logging.WARNING,
        "sqlalchemy.engine": logging.WARNING,
    }.items():
        logging.getLogger(name).setLevel(third_party_level)
