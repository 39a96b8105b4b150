"""Structured logging for the error handlers.

Loggers are structlog wrappers around stdlib loggers under the ``apierrors``
namespace. Each event is rendered to a JSON string before it reaches stdlib,
so it reads correctly through whatever handlers the host application has
installed. Context bound through structlog.contextvars (a request id, for
example) is included in every event.

Global structlog configuration and the root logger belong to the host and are
never touched here.
"""

import logging
import sys
from datetime import UTC, datetime
from typing import Any

import structlog
from structlog.stdlib import BoundLogger

from apierrors.config import Settings

LOGGER_NAME = "apierrors"


def _add_timestamp(
    _logger: object,
    _method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Add ISO 8601 UTC timestamp with timezone offset."""
    event_dict["timestamp"] = datetime.now(UTC).isoformat()
    return event_dict


_PROCESSORS: list[Any] = [
    structlog.stdlib.filter_by_level,
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    _add_timestamp,
    structlog.stdlib.PositionalArgumentsFormatter(),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.format_exc_info,
    structlog.processors.JSONRenderer(),
]


def configure_logging(settings: Settings) -> None:
    """Send ``apierrors`` events to stdout at ``settings.log_level``.

    Opt-in, for hosts without logging of their own. Only the ``apierrors``
    logger is configured and it stops propagating, so root handlers and levels
    are left as they are. Safe to call again; the last call wins.
    """
    logger = logging.getLogger(LOGGER_NAME)
    for old in [h for h in logger.handlers if getattr(h, "_apierrors", False)]:
        logger.removeHandler(old)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter("%(message)s"))
    handler._apierrors = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    logger.setLevel(settings.log_level)
    logger.propagate = False


def get_logger(name: str) -> BoundLogger:
    """Get a structured logger.

    Args:
        name: Logger name, typically __name__ (always under ``apierrors``)

    Example:
        logger = get_logger(__name__)
        logger.warning("validation_error", category="Validation", path="/users")
        # Output: {"event": "validation_error", "level": "warning", ...}
    """
    return structlog.wrap_logger(  # type: ignore[no-any-return]
        logging.getLogger(name),
        processors=_PROCESSORS,
        wrapper_class=BoundLogger,
    )
