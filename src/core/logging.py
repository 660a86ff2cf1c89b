"""
ZEE Search Service - Structured Logging

structlog is configured once, at import of the app. Events are snake_case
(``search_aggregated``, ``hadith_lookup_failed``) and every entry carries the
service name. JSON output keeps Arabic text readable (no ASCII escaping).
"""

import logging
import sys
from typing import Any

import structlog
from structlog.typing import EventDict, Processor

_configured: bool = False

DEFAULT_SERVICE_NAME = "zee-search-service"

# Third-party loggers that are chatty at INFO
QUIET_LOGGERS = ("httpx", "httpcore")


def service_stamp(service_name: str) -> Processor:
    """Processor that tags each entry with ``service``."""

    def stamp(_logger: Any, _method: str, event_dict: EventDict) -> EventDict:
        event_dict.setdefault("service", service_name)
        return event_dict

    return stamp


def configure_logging(
    log_level: str = "INFO",
    json_output: bool = True,
    service_name: str = DEFAULT_SERVICE_NAME,
) -> None:
    """Configure structlog and the stdlib root logger; later calls are no-ops.

    Args:
        log_level: Level name; unknown names fall back to INFO
        json_output: JSON lines when True, console renderer otherwise
        service_name: Value of the ``service`` field
    """
    global _configured

    if _configured:
        return

    level = getattr(logging, log_level.upper(), logging.INFO)

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    renderer: Processor
    if json_output:
        renderer = structlog.processors.JSONRenderer(ensure_ascii=False)
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            service_stamp(service_name),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    _configured = True


def get_logger(name: str) -> Any:
    return structlog.get_logger(name)


def reset_logging() -> None:
    """Forget the configuration (tests only)."""
    global _configured
    _configured = False
    structlog.reset_defaults()
