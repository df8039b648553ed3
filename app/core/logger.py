import logging
import sys
from colorlog import ColoredFormatter
from app.core.settings import settings

LOGGER_NAME = "devstore"

LOG_FORMAT = (
    "%(log_color)s[%(asctime)s] [%(levelname)-8s] "
    "%(reset)s%(blue)s%(name)s:%(reset)s %(message)s"
)

LOG_COLORS = {
    "DEBUG": "cyan",
    "INFO": "green",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "bold_red",
}


def build_handler(stream=None) -> logging.Handler:
    stream = stream or sys.stderr
    formatter = ColoredFormatter(
        LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        reset=True,
        log_colors=LOG_COLORS,
        # sin colores fuera de una terminal (docker logs, CI)
        no_color=not stream.isatty(),
    )
    handler = logging.StreamHandler(stream)
    handler.setFormatter(formatter)
    return handler


def configure_logging(level: str, *, debug: bool = False) -> logging.Logger:
    handler = build_handler()

    log = logging.getLogger(LOGGER_NAME)
    log.handlers.clear()
    log.setLevel(level.upper())
    log.addHandler(handler)
    log.propagate = False

    # SQL echo goes through the same formatter when DEBUG is on
    if debug:
        sa_log = logging.getLogger("sqlalchemy.engine")
        sa_log.handlers.clear()
        sa_log.addHandler(handler)
        sa_log.setLevel(logging.INFO)
        sa_log.propagate = False
    return log


logger = configure_logging(settings.LOG_LEVEL, debug=settings.DEBUG)
