"""Structured logging configuration for code-pulse."""

import sys
import uuid
import structlog
from typing import Any, Dict


def configure_logging(log_level: str = "INFO") -> None:
    """Configure structured logging with JSON output and request ID tracking.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """
    import logging
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)
    logging.basicConfig(level=numeric_level, stream=sys.stderr, format="%(message)s")
    logging.getLogger().setLevel(numeric_level)

    structlog.configure(
        processors=[
            _add_request_id,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer()
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        cache_logger_on_first_use=True,
    )


def _add_request_id(logger: Any, method_name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
    """Add request_id to log event if available in context."""
    from structlog.contextvars import get_contextvars

    context = get_contextvars()
    if "request_id" in context:
        event_dict["request_id"] = context["request_id"]

    return event_dict


def get_logger(name: str) -> Any:
    """Get a structured logger instance.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Configured logger instance
    """
    return structlog.get_logger(name)


def generate_request_id() -> str:
    """Generate a unique request ID."""
    return str(uuid.uuid4())


class RequestContext:
    """Context manager for setting request ID in logging context."""

    def __init__(self, request_id: str | None = None):
        self.request_id = request_id or generate_request_id()
        self.tokens = None

    def __enter__(self):
        from structlog.contextvars import bind_contextvars
        self.tokens = bind_contextvars(request_id=self.request_id)
        return self.request_id

    def __exit__(self, exc_type, exc_val, exc_tb):
        from structlog.contextvars import reset_contextvars
        if self.tokens:
            reset_contextvars(**self.tokens)
