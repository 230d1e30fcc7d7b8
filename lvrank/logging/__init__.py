"""Logging configuration for the ranking pipeline."""

from lvrank.logging.config import LoggingConfig, LogLevel, get_logging_config

__all__ = [
    "LogLevel",
    "LoggingConfig",
    "get_logging_config",
]
