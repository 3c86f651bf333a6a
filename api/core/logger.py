"""Structured logging for the Nibash API, built on structlog.

- Console rendering locally, one JSON object per line with LOG_FORMAT=json
- stdlib loggers (uvicorn, sqlalchemy, slowapi) share the same pipeline
- request_id, vendor_id and customer_id ride along via contextvars
- Credentials never reach the output: see ``redact_credentials``

Usage:
    from core import get_logger
    logger = get_logger(__name__)
    logger.info("vendor.location.updated", vendor_id=7, latitude=23.8)
"""

import logging
import os
import sys

import structlog
from structlog.types import EventDict, Processor

bind_contextvars = structlog.contextvars.bind_contextvars
clear_contextvars = structlog.contextvars.clear_contextvars

REDACTED = "[redacted]"
SENSITIVE_KEYS = frozenset(
    {"password", "password_hash", "token", "authorization", "jwt_secret", "api_key"}
)

# Third-party loggers that are chatty at INFO
QUIET_LOGGERS = ("httpx", "httpcore", "uvicorn.access")


def redact_credentials(
    _logger: logging.Logger, _method_name: str, event_dict: EventDict
) -> EventDict:
    """Mask values logged under credential-like keys."""
    for key in SENSITIVE_KEYS.intersection(event_dict):
        if event_dict[key] is not None:
            event_dict[key] = REDACTED
    return event_dict


def _log_level() -> int:
    level_name = os.environ.get("LOG_LEVEL", "INFO").upper()
    level = logging.getLevelName(level_name)
    return level if isinstance(level, int) else logging.INFO


def _renderer() -> Processor:
    if os.environ.get("LOG_FORMAT", "").lower() == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(
        colors=sys.stdout.isatty(), exception_formatter=structlog.dev.plain_traceback
    )


def _pre_chain() -> list[Processor]:
    """Processors applied to both structlog and stdlib records."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        redact_credentials,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def configure_logging() -> None:
    """Route structlog and stdlib logging through one formatter on stdout.

    Safe to call more than once; the root handler is replaced each time.
    """
    pre_chain = _pre_chain()

    structlog.configure(
        processors=[
            *pre_chain,
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                structlog.processors.format_exc_info,
                _renderer(),
            ],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(_log_level())

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Return a structlog logger; events are dotted names plus key-values.

    Example:
        logger = get_logger(__name__)
        logger.info("vendor.registered", vendor_id=7)
        logger.warning("chat.upstream.error", status_code=502)
    """
    return structlog.stdlib.get_logger(name)
