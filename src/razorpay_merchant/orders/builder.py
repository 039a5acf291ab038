"""
Order request builder.

Turns loosely-typed storefront input into an OrderRequest, applying the
currency and receipt defaults. The clock used for receipts is injectable so
tests can produce deterministic receipts.
"""

from __future__ import annotations

import secrets
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any, Protocol

from razorpay_merchant.core.types import OrderRequest
from razorpay_merchant.orders.amount import to_minor_units

DEFAULT_CURRENCY = "INR"

# Orders API limit
MAX_RECEIPT_LENGTH = 40


class ReceiptClock(Protocol):
    """Time and randomness source for generated receipts."""

    def now(self) -> datetime: ...

    def random_suffix(self) -> str: ...


class SystemReceiptClock:
    """Wall clock plus 8 random hex characters."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)

    def random_suffix(self) -> str:
        return secrets.token_hex(4)


def generate_receipt(clock: ReceiptClock | None = None) -> str:
    """
    Generate a receipt id such as ``receipt_1760870400000_9f86d081``.

    The random suffix keeps two receipts minted in the same millisecond apart.
    """
    clock = clock or SystemReceiptClock()
    millis = int(clock.now().timestamp() * 1000)
    return f"receipt_{millis}_{clock.random_suffix()}"[:MAX_RECEIPT_LENGTH]


def _is_blank(value: Any) -> bool:
    return not isinstance(value, str) or not value.strip()


def build_order_request(
    amount: Any,
    currency: Any = None,
    receipt: Any = None,
    notes: Any = None,
    *,
    default_currency: str = DEFAULT_CURRENCY,
    clock: ReceiptClock | None = None,
) -> OrderRequest:
    """
    Build an OrderRequest ready for transmission.

    Args:
        amount: Amount in major units, validated by to_minor_units
        currency: ISO 4217 code; default_currency when absent or blank
        receipt: Merchant receipt id; generated when absent or blank
        notes: Passed through only when it is a mapping
        default_currency: Fallback currency code
        clock: Receipt clock (defaults to SystemReceiptClock)

    Returns:
        OrderRequest

    Raises:
        InvalidAmountError: If the amount is invalid
    """
    amount_minor = to_minor_units(amount)

    return OrderRequest(
        amount=amount_minor,
        currency=default_currency if _is_blank(currency) else currency,
        receipt=generate_receipt(clock) if _is_blank(receipt) else receipt,
        notes=dict(notes) if isinstance(notes, Mapping) else None,
    )
