import logging
import sys
import threading

import uvicorn

from backend_fastapi.main import terminate_process
from infrastructure.config import load_settings
from infrastructure.logging_config import configure_logging

logger = logging.getLogger(__name__)


def _log_uncaught(exc_type, exc_value, exc_tb) -> None:
    logger.critical("Uncaught exception", exc_info=(exc_type, exc_value, exc_tb))


def _log_thread_exception(args: threading.ExceptHookArgs) -> None:
    logger.critical(
        "Uncaught exception in thread %s",
        args.thread.name if args.thread else "?",
        exc_info=(args.exc_type, args.exc_value, args.exc_traceback),
    )
    terminate_process(repr(args.exc_value))


def install_fail_fast_hooks() -> None:
    sys.excepthook = _log_uncaught
    threading.excepthook = _log_thread_exception


def run() -> None:
    settings = load_settings()
    configure_logging(settings.log_level)
    install_fail_fast_hooks()

    logger.info(
        "Starting server at http://%s:%s (Reload: %s)",
        settings.host,
        settings.port,
        settings.reload,
    )

    uvicorn.run(
        "backend_fastapi.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
