"""
Structured Logging (structlog).

Every event carries:
- service / environment: which process wrote it (core API or dispatch server)
- request_id: bound per HTTP request by RequestIDMiddleware

Pipeline events add their own keys (tool, provider, completed_steps) so a
single sanitize run can be followed across both processes.
"""

import logging
import sys

import structlog
from structlog.types import EventDict, Processor

from sanitize_config.settings import Settings


def add_service_context(service: str, environment: str) -> Processor:
    """Processor stamping the emitting service on every event."""

    def processor(logger: logging.Logger, method_name: str, event_dict: EventDict) -> EventDict:
        event_dict.setdefault("service", service)
        event_dict.setdefault("environment", environment)
        return event_dict

    return processor


def setup_logging(settings: Settings, service: str | None = None) -> None:
    """
    Configure structlog for the current process.

    Args:
        settings: LOG_LEVEL and LOG_FORMAT (json, or text for local dev)
        service: Service name on each event (defaults to OTEL_SERVICE_NAME)
    """
    logging.basicConfig(
        format="%(message)s", stream=sys.stdout, level=settings.LOG_LEVEL.upper()
    )

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        add_service_context(service or settings.OTEL_SERVICE_NAME, settings.ENVIRONMENT),
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.format_exc_info,
    ]

    if settings.LOG_FORMAT == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get configured logger."""
    return structlog.get_logger(name)
