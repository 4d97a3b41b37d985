"""Formatting utilities for currency and percentage text."""

from __future__ import annotations

from typing import Optional, Union

from .config import get_currency_symbol


def format_currency(amount: Union[float, int], include_sign: bool = True, symbol: Optional[str] = None) -> str:
    """Format a currency amount with thousands separators and two decimals.

    Args:
        amount: The amount to format
        include_sign: Whether to include the currency symbol
        symbol: Currency symbol override; defaults to the configured one

    Returns:
        Formatted currency string (e.g., "₱1,234.56" or "1,234.56")

    Example:
        >>> format_currency(1234.56)
        '₱1,234.56'
        >>> format_currency(-50, symbol='$')
        '-$50.00'
    """
    formatted = f"{abs(amount):,.2f}"
    prefix = '-' if amount < 0 and round(abs(amount), 2) != 0 else ''
    if not include_sign:
        return f"{prefix}{formatted}"
    currency = symbol if symbol is not None else get_currency_symbol()
    return f"{prefix}{currency}{formatted}"


def format_percentage(value: float, decimals: int = 0) -> str:
    """Format a percentage value, e.g. ``format_percentage(12.345, 1) == '12.3%'``."""
    return f"{value:.{decimals}f}%"
