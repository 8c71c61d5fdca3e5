"""
Helper Utilities
Common helper functions
"""

from datetime import date, datetime

from src.config.settings import settings


def format_currency(amount: int, symbol: str = None) -> str:
    """
    Format an amount held in minor currency units

    Args:
        amount: Amount in minor units (cents)
        symbol: Currency symbol, defaults to CURRENCY_SYMBOL

    Returns:
        str: Formatted currency string, e.g. 50000 -> "$500.00"
    """
    symbol = settings.CURRENCY_SYMBOL if symbol is None else symbol
    major, minor = divmod(abs(amount), 100)
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{major:,}.{minor:02d}"


def today() -> date:
    """Current date; patched in tests that need a fixed clock"""
    return datetime.now().date()

