#!/usr/bin/env python3
"""
Utility functions and helpers used across the application.
Formatting for money and probabilities.
"""

from typing import Optional


def format_currency(amount: Optional[float], thousands_sep: bool = True) -> str:
    """
    Format amount as currency string.

    Args:
        amount: Amount to format (None renders as a dash)
        thousands_sep: Whether to include thousands separator

    Returns:
        Formatted currency string
    """
    if amount is None:
        return "—"
    if thousands_sep:
        return f"${amount:,.0f}"
    else:
        return f"${amount:.0f}"


def format_percentage(value: Optional[float], decimal_places: int = 1) -> str:
    """
    Format value as percentage string.

    Args:
        value: Value to format (0.15 = 15%)
        decimal_places: Number of decimal places

    Returns:
        Formatted percentage string
    """
    if value is None:
        return "—"
    return f"{value*100:.{decimal_places}f}%"
