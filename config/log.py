"""
Logging for the standings service.

Everything goes through the stdlib `logging` tree so Django, asgiref and our own
structlog loggers end up on one handler. `WORLDCUP_LOG_FORMAT=json` switches the
handler from the coloured console renderer to JSON lines.
"""

import logging
import os

import structlog
from structlog.contextvars import merge_contextvars
from structlog.processors import StackInfoRenderer, TimeStamper, format_exc_info
from structlog.stdlib import ProcessorFormatter, add_log_level, add_logger_name

LOG_FORMAT = os.getenv("WORLDCUP_LOG_FORMAT", "console").lower()
LOG_LEVEL = os.getenv("WORLDCUP_LOG_LEVEL", "INFO").upper()

PRE_CHAIN = [
    merge_contextvars,
    add_log_level,
    add_logger_name,
    TimeStamper(fmt="iso", utc=True),
    StackInfoRenderer(),
    format_exc_info,
]


def _formatter(renderer) -> dict:
    return {"()": ProcessorFormatter, "processor": renderer, "foreign_pre_chain": PRE_CHAIN}


def _logger(level: str) -> dict:
    return {"handlers": ["stream"], "level": level, "propagate": False}


LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "console": _formatter(structlog.dev.ConsoleRenderer(colors=True, pad_event=0, pad_level=False)),
        "json": _formatter(structlog.processors.JSONRenderer()),
    },
    "handlers": {
        "stream": {
            "class": "logging.StreamHandler",
            "formatter": "json" if LOG_FORMAT == "json" else "console",
        },
    },
    "loggers": {
        "": _logger(LOG_LEVEL),
        "django": _logger("INFO"),
        "django.db.backends": _logger("WARNING"),
        "apps": _logger("DEBUG"),
        "config": _logger(LOG_LEVEL),
    },
}

structlog.configure(
    processors=[*PRE_CHAIN, ProcessorFormatter.wrap_for_formatter],
    wrapper_class=structlog.make_filtering_bound_logger(logging.DEBUG),
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)
