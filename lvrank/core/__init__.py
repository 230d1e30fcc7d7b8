"""Core module - exceptions and logging shared by every component."""

from lvrank.core.exceptions import (
    BatchTimeoutError,
    ConfigurationError,
    DataValidationError,
    ExchangeError,
    NetworkError,
    NumericError,
    ParseError,
    RankerError,
    RateLimitError,
)

__all__ = [
    "BatchTimeoutError",
    "ConfigurationError",
    "DataValidationError",
    "ExchangeError",
    "NetworkError",
    "NumericError",
    "ParseError",
    "RankerError",
    "RateLimitError",
]
