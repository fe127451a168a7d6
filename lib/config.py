"""
Runtime Configuration

Settings are read from environment variables once and cached:

- LOG_LEVEL: DEBUG, INFO, WARNING, ERROR (default INFO)
- TAX_MESSAGE_LOCALE: language of result messages, "es" or "en" (default es)
- TAX_CURRENCY_SYMBOL: symbol used in messages and display (default RD$)
- TAX_DISPLAY_DECIMALS: decimals shown for amounts (default 2)
- TAX_SLOW_BATCH_MS: batch duration that triggers a SLOW warning (default 1000)

Copyright (c) 2026 Andreas Wagner. All rights reserved.
"""

import os
from dataclasses import dataclass
from functools import lru_cache


SUPPORTED_LOCALES = ("es", "en")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class Settings:
    """Immutable application settings."""

    log_level: str = "INFO"
    message_locale: str = "es"
    currency_symbol: str = "RD$"
    display_decimals: int = 2
    slow_batch_ms: float = 1000.0

    @classmethod
    def from_env(cls) -> "Settings":
        """
        Build settings from the process environment.

        Raises:
            ValueError: If a variable holds an unsupported value
        """
        log_level = os.getenv('LOG_LEVEL', 'INFO').strip().upper()
        if log_level not in LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {LOG_LEVELS}, got '{log_level}'")

        locale = os.getenv('TAX_MESSAGE_LOCALE', 'es').strip().lower()
        if locale not in SUPPORTED_LOCALES:
            raise ValueError(
                f"TAX_MESSAGE_LOCALE must be one of {SUPPORTED_LOCALES}, got '{locale}'"
            )

        decimals_raw = os.getenv('TAX_DISPLAY_DECIMALS', '2')
        try:
            decimals = int(decimals_raw)
        except ValueError:
            raise ValueError(f"TAX_DISPLAY_DECIMALS must be an integer, got '{decimals_raw}'")
        if decimals < 0:
            raise ValueError("TAX_DISPLAY_DECIMALS must be >= 0")

        slow_raw = os.getenv('TAX_SLOW_BATCH_MS', '1000')
        try:
            slow_batch_ms = float(slow_raw)
        except ValueError:
            raise ValueError(f"TAX_SLOW_BATCH_MS must be a number, got '{slow_raw}'")

        return cls(
            log_level=log_level,
            message_locale=locale,
            currency_symbol=os.getenv('TAX_CURRENCY_SYMBOL', 'RD$'),
            display_decimals=decimals,
            slow_batch_ms=slow_batch_ms,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide settings, parsed on first use."""
    return Settings.from_env()
