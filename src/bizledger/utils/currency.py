"""Currency formatting utilities."""

from decimal import Decimal

from babel.numbers import format_currency

DEFAULT_CURRENCY = "INR"
DEFAULT_LOCALE = "en_IN"


def format_inr(amount: Decimal | int | float) -> str:
    """Format an amount as Indian rupees, e.g. ``₹1,00,000.00``."""
    return format_currency(amount, DEFAULT_CURRENCY, locale=DEFAULT_LOCALE)
