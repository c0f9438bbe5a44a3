"""Shared utilities."""

from quote_builder.utils.logging import ServiceLogger, get_logger, setup_logging

__all__ = ["ServiceLogger", "get_logger", "setup_logging"]
