"""Process-level logging configuration.

Engine modules log through stdlib `logging.getLogger(__name__)`; entry
points call `configure_logging` once to set the level and install the
structlog pipeline used for their own output.
"""

import logging

import structlog

from euromatch.config.settings import Environment, Settings

_LOG_NAME_TO_LEVEL: dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def configure_logging(settings: Settings) -> structlog.stdlib.BoundLogger:
    """Configure stdlib logging and structlog from settings.

    Returns:
        A bound structlog logger for the calling entry point.
    """
    level = _LOG_NAME_TO_LEVEL[settings.LOG_LEVEL.value]
    logging.basicConfig(format="%(levelname)s %(name)s: %(message)s", level=level)
    logging.getLogger("euromatch").setLevel(level)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer() if settings.ENVIRONMENT == Environment.DEV
            else structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )
    return structlog.get_logger()
