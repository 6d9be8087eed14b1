"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
import re
from typing import Optional

# Largest amount that fits the NUMERIC(14, 2) money columns
MAX_AMOUNT = Decimal("999999999999.99")
CENT = Decimal("0.01")

_RUPEE_MARKS = re.compile(r"₹|\bINR\b|\bRs\.?")


def parse_amount(value: str | int | float | Decimal) -> Decimal:
    """Parse an amount into a finite Decimal.

    Handles numbers as well as rupee strings:
    - "123.45"
    - "₹123.45", "INR 123.45", "Rs. 123.45"
    - "1,234.56" and "1,00,000"

    A leading minus sign is kept; callers decide whether negatives are allowed.

    Args:
        value: Amount as a number or string

    Returns:
        Decimal amount

    Raises:
        ValueError: If the value cannot be parsed or is not finite
    """
    # bool is an int subclass; True is not an amount
    if isinstance(value, bool) or value is None:
        raise ValueError(f"Could not parse amount {value!r}")

    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, (int, float)):
        # Go through str so 0.1 stays 0.1 instead of its binary expansion
        amount = Decimal(str(value))
    elif isinstance(value, str):
        amount = _parse_amount_string(value)
    else:
        raise ValueError(f"Could not parse amount {value!r}")

    if not amount.is_finite():
        raise ValueError(f"Amount must be a finite number, got {value!r}")
    return amount


def money_error(amount: Decimal) -> Optional[str]:
    """Return why amount cannot be stored in a money column, or None if it can."""
    if abs(amount) > MAX_AMOUNT:
        return "is too large"
    if amount != amount.quantize(CENT):
        return "must have at most two decimal places"
    return None


def _parse_amount_string(amount_str: str) -> Decimal:
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    amount_str = _RUPEE_MARKS.sub("", amount_str.strip())
    amount_str = amount_str.replace(",", "").strip()

    try:
        return Decimal(amount_str)
    except InvalidOperation as e:
        raise ValueError(f"Could not parse amount '{amount_str}'") from e
