"""
Structured logging configuration for the Quote Builder.

Uses structlog for consistent, machine-parseable log output.
"""

import logging
import sys
from typing import Any

import structlog
from structlog.types import Processor

from quote_builder.config.settings import Settings, settings as default_settings


def setup_logging(app_settings: Settings | None = None) -> None:
    """
    Configure structured logging for the application.

    Sets up structlog with the renderer selected by ``log_format``.
    """
    app_settings = app_settings or default_settings

    # Common processors
    shared_processors: list[Processor] = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if app_settings.log_format == "json":
        processors = shared_processors + [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(ensure_ascii=False),
        ]
    else:
        processors = shared_processors + [
            structlog.dev.ConsoleRenderer(colors=True),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, app_settings.log_level.upper()),
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """
    Get a structured logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger
    """
    return structlog.get_logger(name)


class ServiceLogger:
    """
    Service-level logging for quote operations.

    Provides consistent event names across the pricing, assembly and
    history services.
    """

    def __init__(self, service_name: str):
        self.logger = get_logger(f"service.{service_name}")
        self.service_name = service_name

    def log_operation_start(self, operation: str, **kwargs: Any) -> None:
        """Log start of a business operation."""
        self.logger.info(
            f"{operation}_started",
            service=self.service_name,
            **kwargs,
        )

    def log_operation_complete(
        self,
        operation: str,
        duration_ms: float | None = None,
        **kwargs: Any,
    ) -> None:
        """Log successful completion of an operation."""
        if duration_ms is not None:
            kwargs["duration_ms"] = round(duration_ms, 2)
        self.logger.info(
            f"{operation}_completed",
            service=self.service_name,
            **kwargs,
        )

    def log_operation_failed(
        self,
        operation: str,
        error: Exception,
        **kwargs: Any,
    ) -> None:
        """Log failed operation with error details."""
        self.logger.error(
            f"{operation}_failed",
            service=self.service_name,
            error_type=type(error).__name__,
            error_message=str(error),
            **kwargs,
        )

    def log_debug(self, event: str, **kwargs: Any) -> None:
        """Log a high-frequency event at debug level."""
        self.logger.debug(event, service=self.service_name, **kwargs)

    def log_recovered(
        self,
        operation: str,
        error: Exception,
        **kwargs: Any,
    ) -> None:
        """Log a failure that was handled locally without propagating."""
        self.logger.warning(
            f"{operation}_recovered",
            service=self.service_name,
            error_type=type(error).__name__,
            error_message=str(error),
            **kwargs,
        )
