"""Configuration management for the budgeting engine.

This module centralizes the few values that callers may want to change
without touching code, each with an environment variable override.
Business thresholds (budget status bands, trend band, recurring
detector constants) live as module constants next to
the code that uses them.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

# Display currency used by suggestion and comparison texts
CURRENCY_SYMBOL = os.getenv("BUDGETWISE_CURRENCY_SYMBOL", "₱")

# Logging
LOG_LEVEL = os.getenv("BUDGETWISE_LOG_LEVEL", "WARNING").upper()
_LOG_DIR = os.getenv("BUDGETWISE_LOG_DIR")
LOG_DIR: Optional[Path] = Path(_LOG_DIR).resolve() if _LOG_DIR else None

# How far back the recurring suggestion helper looks, in months
RECURRING_LOOKBACK_MONTHS = int(os.getenv("BUDGETWISE_RECURRING_LOOKBACK_MONTHS", "6"))


def get_currency_symbol() -> str:
    """Get the currency symbol, re-reading the environment so tests can override it."""
    return os.getenv("BUDGETWISE_CURRENCY_SYMBOL", CURRENCY_SYMBOL)


def get_log_dir() -> Optional[Path]:
    """Get the log directory, or ``None`` when file logging is disabled."""
    value = os.getenv("BUDGETWISE_LOG_DIR")
    if value:
        return Path(value).resolve()
    return LOG_DIR


def ensure_log_directory() -> Optional[Path]:
    """Create the log directory if file logging is configured."""
    directory = get_log_dir()
    if directory is not None:
        directory.mkdir(parents=True, exist_ok=True)
    return directory
