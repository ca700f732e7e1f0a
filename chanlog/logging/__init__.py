"""Logging configuration for chanlog's own diagnostics."""

from chanlog.logging.logger import LogContext, get_logger, reset_logging, setup_logging

__all__ = ["LogContext", "get_logger", "reset_logging", "setup_logging"]
