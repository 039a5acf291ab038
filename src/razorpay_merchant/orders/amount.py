"""
Major-to-minor currency unit conversion.

The Orders API only accepts integer amounts in the smallest currency unit
(paise for INR). Conversion goes through Decimal so a float such as 1.005 is
read as the decimal the user typed, not its binary approximation, and rounds
half away from zero:

    >>> to_minor_units("1.005")
    101
    >>> to_minor_units(100)
    10000
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

from razorpay_merchant.core.exceptions import InvalidAmountError

MINOR_UNITS_PER_MAJOR = Decimal(100)


def parse_amount(amount: Any) -> Decimal:
    """Validate a major-unit amount and return it as a finite, positive Decimal."""
    if amount is None or isinstance(amount, bool):
        raise InvalidAmountError(value=amount)

    if isinstance(amount, str):
        amount = amount.strip()
        if not amount:
            raise InvalidAmountError(value=amount)

    if not isinstance(amount, (Decimal, int, float, str)):
        raise InvalidAmountError(value=amount)

    try:
        value = amount if isinstance(amount, Decimal) else Decimal(str(amount))
    except (InvalidOperation, ValueError):
        raise InvalidAmountError(value=amount) from None

    if not value.is_finite() or value <= 0:
        raise InvalidAmountError(value=amount)

    return value


def to_minor_units(amount: Any) -> int:
    """
    Convert a major-unit amount to integer minor units.

    Args:
        amount: Decimal, int, float or numeric string greater than zero

    Returns:
        round(amount * 100), rounding half away from zero

    Raises:
        InvalidAmountError: If the amount is missing, non-numeric, NaN,
            infinite or not greater than zero
    """
    value = parse_amount(amount)
    try:
        minor = (value * MINOR_UNITS_PER_MAJOR).quantize(Decimal(1), rounding=ROUND_HALF_UP)
    except InvalidOperation:
        # More digits than the decimal context can hold
        raise InvalidAmountError(value=amount) from None
    return int(minor)
