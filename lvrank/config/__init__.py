"""Configuration management with Pydantic Settings."""

from lvrank.config.settings import RankerSettings, clear_settings_cache, get_settings
from lvrank.config.universe import DEFAULT_SYMBOLS, REFERENCE_SYMBOL, load_universe

__all__ = [
    "DEFAULT_SYMBOLS",
    "REFERENCE_SYMBOL",
    "RankerSettings",
    "clear_settings_cache",
    "get_settings",
    "load_universe",
]
