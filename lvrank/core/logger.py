"""Loguru logging configuration.

All logging in the application goes through the configured loguru logger.

Features:
    - Console sink (human-readable, colorized)
    - File sink with rotation (text) or JSON serialized lines
    - Context binding for batch kind / symbol
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import TYPE_CHECKING

from loguru import logger

from lvrank.logging.config import LoggingConfig, get_logging_config

if TYPE_CHECKING:
    from loguru import Logger

CONSOLE_FORMAT_DEFAULT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)

FILE_NAME_TEMPLATE = "ranker_{time:YYYY-MM-DD}.log"
JSON_FILE_NAME_TEMPLATE = "ranker_{time:YYYY-MM-DD}.json"


def setup_logger_from_config(config: LoggingConfig | None = None) -> None:
    """Initialize logger from Pydantic config model.

    Args:
        config: LoggingConfig instance (loads from LOG_* env vars if None)
    """
    if config is None:
        config = get_logging_config()

    _setup_logger_internal(config)


def setup_logger(
    log_dir: Path | str = Path("logs"),
    console_level: str = "INFO",
    file_level: str = "DEBUG",
    *,
    enable_file: bool = True,
) -> None:
    """Initialize the logger with minimal configuration.

    Args:
        log_dir: Directory for log files (default: "logs")
        console_level: Console output level (default: "INFO")
        file_level: File output level (default: "DEBUG")
        enable_file: Write a rotating log file in log_dir

    Example:
        >>> from lvrank.core.logger import setup_logger, logger
        >>> setup_logger(log_dir="logs", console_level="DEBUG")
        >>> logger.info("Ranking started")
    """
    config = LoggingConfig(
        log_dir=Path(log_dir),
        console_level=console_level,  # type: ignore[arg-type]
        file_level=file_level,  # type: ignore[arg-type]
        enable_file=enable_file,
    )
    setup_logger_from_config(config)


def _setup_logger_internal(config: LoggingConfig) -> None:
    """Internal logger setup using config object."""
    logger.remove()

    # 1. Console Handler
    logger.add(
        sys.stderr,
        format=CONSOLE_FORMAT_DEFAULT,
        level=config.console_level,
        colorize=True,
        backtrace=config.backtrace,
        diagnose=config.diagnose,
    )

    # 2. File Handler (optional)
    if config.enable_file:
        log_path = Path(config.log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        if config.json_logs:
            logger.add(
                log_path / JSON_FILE_NAME_TEMPLATE,
                level=config.file_level,
                rotation=config.rotation,
                retention=config.retention,
                serialize=True,
                enqueue=True,
                backtrace=config.backtrace,
                diagnose=False,
            )
        else:
            logger.add(
                log_path / FILE_NAME_TEMPLATE,
                format=CONSOLE_FORMAT_DEFAULT,
                level=config.file_level,
                rotation=config.rotation,
                retention=config.retention,
                compression=config.compression,
                enqueue=True,
                backtrace=config.backtrace,
                diagnose=False,
            )

    logger.debug(
        "Logger initialized (console={}, file={}, dir={})",
        config.console_level,
        config.file_level if config.enable_file else "off",
        config.log_dir,
    )


def get_context_logger(
    *,
    symbol: str | None = None,
    kind: str | None = None,
    **extra: str,
) -> Logger:
    """Get a context-bound logger.

    Args:
        symbol: Trading symbol (e.g., "BTCUSDT")
        kind: Batch kind (e.g., "kline")
        **extra: Additional context key-values

    Returns:
        Logger with context bound

    Example:
        >>> log = get_context_logger(kind="price")
        >>> log.info("Fetching prices...")
    """
    ctx: dict[str, str] = {}
    if symbol:
        ctx["symbol"] = symbol
    if kind:
        ctx["kind"] = kind
    ctx.update(extra)
    return logger.bind(**ctx)


__all__ = [
    "get_context_logger",
    "logger",
    "setup_logger",
    "setup_logger_from_config",
]
