import logging
import sys
from loguru import logger

from config.settings import settings


class InterceptHandler(logging.Handler):
    """
    Default handler from examples in loguru documention.
    It intercepts standard logging messages and routes them to loguru.
    """
    def emit(self, record):
        # Get corresponding Loguru level if it exists
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Find caller from where originated the logged message
        frame, depth = logging.currentframe(), 2
        while frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def setup_logging(level: str | None = None):
    level = level or settings.LOG_LEVEL

    # Remove standard loguru handlers (e.g., default console)
    logger.remove()

    # JSON to stdout for log collectors, plain text when running locally
    logger.add(
        sys.stdout,
        serialize=settings.LOG_JSON,
        enqueue=True,
        level=level,
    )

    if settings.LOG_FILE:
        logger.add(
            settings.LOG_FILE,
            rotation="10 MB",
            retention="10 days",
            level=level,
            enqueue=True,
            serialize=False,
        )

    # Intercept existing standard loggers (uvicorn, fastapi, sqlalchemy and our own modules)
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)

    for _log in ["uvicorn", "uvicorn.error", "uvicorn.access", "fastapi"]:
        _logger = logging.getLogger(_log)
        _logger.handlers = [InterceptHandler()]
        _logger.propagate = False

    logger.info("Structured logging (Loguru) initialized successfully.")
