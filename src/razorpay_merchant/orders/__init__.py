"""
Order request construction.

Amount normalization and defaulting for Orders API payloads.
"""

from razorpay_merchant.orders.amount import to_minor_units
from razorpay_merchant.orders.builder import (
    ReceiptClock,
    SystemReceiptClock,
    build_order_request,
    generate_receipt,
)

__all__ = [
    "to_minor_units",
    "build_order_request",
    "generate_receipt",
    "ReceiptClock",
    "SystemReceiptClock",
]
