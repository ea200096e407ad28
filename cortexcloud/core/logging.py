"""Structured logging configuration and helpers."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, cast

import structlog
from asgi_correlation_id.context import correlation_id

if TYPE_CHECKING:
    from structlog.stdlib import BoundLogger
    from structlog.typing import EventDict, Processor, WrappedLogger

REDACTED_VALUE = "***REDACTED***"
SENSITIVE_FIELD_FRAGMENTS = (
    "password",
    "secret",
    "token",
    "authorization",
    "jwt",
)
# Third-party loggers that should flow through the root handler.
PROPAGATED_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access", "fastapi")

_LOGGING_CONFIGURED = False


def _resolve_log_level(log_level: str) -> int:
    normalized = log_level.strip().upper()
    resolved = logging.getLevelName(normalized)
    return resolved if isinstance(resolved, int) else logging.INFO


def _is_sensitive(field_name: str) -> bool:
    lowered = field_name.lower()
    return any(fragment in lowered for fragment in SENSITIVE_FIELD_FRAGMENTS)


def _redact(field_name: str, value: object) -> object:
    """Mask sensitive values, descending into nested dicts and lists."""
    if _is_sensitive(field_name):
        return REDACTED_VALUE
    if isinstance(value, dict):
        return {str(key): _redact(str(key), nested) for key, nested in value.items()}
    if isinstance(value, (list, tuple)):
        return [_redact(field_name, item) for item in value]
    return value


def redact_sensitive_fields(
    _logger: WrappedLogger,
    _method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Structlog processor that masks credentials before rendering."""
    return {key: _redact(key, value) for key, value in event_dict.items()}


def add_service_context(service_name: str, environment: str) -> Processor:
    """Build a processor that stamps service metadata and the request id."""

    def _processor(
        _logger: WrappedLogger,
        _method_name: str,
        event_dict: EventDict,
    ) -> EventDict:
        event_dict.setdefault("service", service_name)
        event_dict.setdefault("environment", environment)
        request_id = correlation_id.get()
        if request_id:
            event_dict.setdefault("request_id", request_id)
        return event_dict

    return _processor


def configure_logging(
    *,
    log_level: str,
    log_format: str,
    service_name: str,
    environment: str,
) -> None:
    """Configure stdlib and structlog once for the current process."""
    global _LOGGING_CONFIGURED
    if _LOGGING_CONFIGURED:
        return

    json_output = log_format.strip().lower() == "json"
    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        add_service_context(service_name, environment),
        redact_sensitive_fields,
    ]
    renderer: Processor = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer(colors=True)
    )

    handler = logging.StreamHandler()
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared_processors,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(_resolve_log_level(log_level))

    for logger_name in PROPAGATED_LOGGERS:
        third_party = logging.getLogger(logger_name)
        third_party.handlers.clear()
        third_party.propagate = True

    processors: list[Processor] = [
        *shared_processors,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
    ]
    if json_output:
        processors.append(structlog.processors.format_exc_info)
    processors.append(structlog.stdlib.ProcessorFormatter.wrap_for_formatter)

    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    _LOGGING_CONFIGURED = True


def get_logger(name: str | None = None) -> BoundLogger:
    """Return a configured structured logger."""
    return cast("BoundLogger", structlog.get_logger(name))


def bind_context(**values: object) -> None:
    """Bind values to every log event emitted in the current context."""
    structlog.contextvars.bind_contextvars(**values)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()
