"""
Data formatting utilities for the status line.
"""

from datetime import datetime
from typing import Iterable, Tuple

from ...simulation.speed import Speed

COLUMN_SEPARATOR = " " * 4


def format_balance(amount: float, currency_symbol: str = "$") -> str:
    """
    Format a money amount with thousands separators.

    Args:
        amount: Amount in currency units
        currency_symbol: Prefix symbol

    Returns:
        Formatted amount, e.g. ``$10,000,000.00`` or ``-$12.50``
    """
    sign = "-" if amount < 0 else ""
    return f"{sign}{currency_symbol}{abs(amount):,.2f}"


def format_simulated_date(moment: datetime) -> str:
    """Format simulated time to minute precision."""
    return moment.strftime("%Y-%m-%d %H:%M")


def format_speed(speed: Speed) -> str:
    return speed.label


def format_columns(columns: Iterable[Tuple[str, str]]) -> str:
    """Join ``(label, value)`` pairs into a single status line."""
    return COLUMN_SEPARATOR.join(f"{label}: {value}" for label, value in columns)
