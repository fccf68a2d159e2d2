"""
Structured logging for custom event construction.

Builders, resolvers and sinks log through structlog with dotted event
names. A rejected setter call, rendered as JSON, looks like:
{
    "ts": "2026-10-19T04:30:00.123456Z",
    "level": "warning",
    "service": "custom-events",
    "env": "dev",
    "event": "event.validation_failed",
    "field": "event_value",
    "error": "NotANumber",
    "module": "custom_events.builder",
    "function": "_validate",
    "line": 42
}
"""
import structlog
import logging
from typing import Any, Callable


def service_context(service_name: str, env: str | None = None) -> Callable:
    """Processor stamping the service name (and environment, if given) on each entry."""

    def add_service_context(logger: Any, method_name: str, event_dict: dict) -> dict:
        event_dict.setdefault("service", service_name)
        if env is not None:
            event_dict.setdefault("env", env)
        return event_dict

    return add_service_context


def add_module_info(logger: Any, method_name: str, event_dict: dict) -> dict:
    """Add the calling module, function, and line, skipping structlog and this module."""
    frame, _ = structlog._frames._find_first_app_frame_and_name([__name__])
    if frame:
        event_dict["module"] = frame.f_globals.get("__name__", "unknown")
        event_dict["function"] = frame.f_code.co_name
        event_dict["line"] = frame.f_lineno
    return event_dict


def setup_logging(
    json_output: bool = True,
    service_name: str = "custom-events",
    level: str = "info",
    env: str | None = None,
):
    """
    Configure structured logging.

    Args:
        json_output: Render JSON lines; otherwise use the console renderer.
        service_name: Value of the ``service`` field.
        level: Minimum log level name, e.g. "debug" to see attribution decisions.
        env: Deployment environment added as the ``env`` field.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    processors = [
        structlog.contextvars.merge_contextvars,
        service_context(service_name, env),
        structlog.processors.TimeStamper(fmt="iso", key="ts"),
        structlog.processors.add_log_level,
        add_module_info,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer() if json_output else structlog.dev.ConsoleRenderer(),
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(format="%(message)s", level=log_level)


def get_logger():
    """Get a configured structlog logger."""
    return structlog.get_logger()
