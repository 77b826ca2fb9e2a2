"""
Observability Infrastructure

Structured logging with correlation tracking and Prometheus counters for
the employee service operations.
"""

import contextvars
import functools
import logging
import sys
import time
import uuid
from collections.abc import Callable
from typing import Any, TypeVar

import structlog
from prometheus_client import Counter, Histogram

from .config import Settings, settings

# Context variables for correlation tracking
correlation_id_var: contextvars.ContextVar[str] = contextvars.ContextVar(
    "correlation_id", default=""
)
tenant_id_var: contextvars.ContextVar[str] = contextvars.ContextVar(
    "tenant_id", default=""
)

F = TypeVar("F", bound=Callable[..., Any])

SERVICE_OPERATIONS = Counter(
    "rostering_service_operations_total",
    "Total employee service operations",
    ["operation", "status"],
)

SERVICE_DURATION = Histogram(
    "rostering_service_operation_duration_seconds",
    "Employee service operation duration",
    ["operation"],
)

IMPORTED_EMPLOYEES = Counter(
    "rostering_imported_employees_total",
    "Employee records processed by list imports",
    ["outcome"],
)


class CorrelationIdProcessor:
    """Structlog processor to add correlation and tenant ids to all log entries."""

    def __call__(
        self, logger: Any, name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        correlation_id = correlation_id_var.get("")
        tenant_id = tenant_id_var.get("")

        if correlation_id:
            event_dict["correlation_id"] = correlation_id
        if tenant_id and "tenant_id" not in event_dict:
            event_dict["tenant_id"] = tenant_id

        return event_dict


def setup_structured_logging(config: Settings | None = None) -> None:
    """Configure structured logging with JSON output and correlation tracking."""
    config = config or settings
    log_level = getattr(logging, config.LOG_LEVEL.upper(), logging.INFO)

    processors = [
        structlog.contextvars.merge_contextvars,
        CorrelationIdProcessor(),
        structlog.processors.TimeStamper(fmt="ISO"),
        structlog.processors.add_log_level,
        structlog.stdlib.add_logger_name,
    ]

    if config.LOG_FORMAT == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(colors=config.ENVIRONMENT == "local")
        )

    # add_logger_name needs a stdlib logger underneath
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=log_level,
    )

    if config.LOG_SQL:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO)
    else:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)


def set_correlation_id(correlation_id: str | None = None) -> str:
    """Set correlation ID for request tracking."""
    if correlation_id is None:
        correlation_id = str(uuid.uuid4())

    correlation_id_var.set(correlation_id)
    return correlation_id


def get_correlation_id() -> str:
    """Get current correlation ID."""
    return correlation_id_var.get("")


def monitor_operation(operation: str):
    """
    Decorator recording count, duration and outcome of a service operation.

    Failures are labelled with the ``error_type`` of the raised domain error
    (or ``error`` for anything else) and re-raised unchanged.
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            logger = get_logger(func.__module__)
            start_time = time.perf_counter()

            try:
                result = func(*args, **kwargs)
            except Exception as e:
                error_type = getattr(e, "error_type", None)
                status = getattr(error_type, "value", "error")
                SERVICE_OPERATIONS.labels(operation=operation, status=status).inc()
                logger.warning(
                    "Operation failed",
                    operation=operation,
                    error_type=status,
                    error=str(e),
                    duration_seconds=time.perf_counter() - start_time,
                )
                raise

            duration = time.perf_counter() - start_time
            SERVICE_OPERATIONS.labels(operation=operation, status="success").inc()
            SERVICE_DURATION.labels(operation=operation).observe(duration)
            logger.debug(
                "Operation completed", operation=operation, duration_seconds=duration
            )
            return result

        return wrapper  # type: ignore[return-value]

    return decorator
