"""
Event handler interface.

The dispatcher calls exactly one method per recognized event with the typed
entity. What a handler does (typically persisting payment state) lives
outside this SDK.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from razorpay_merchant.core.logging import get_logger
from razorpay_merchant.core.types import (
    Payment,
    PaymentAuthorized,
    PaymentCaptured,
    PaymentFailed,
    Refund,
    RefundCreated,
)


class EventHandler(ABC):
    """
    Abstract base class for webhook event handlers.

    The gateway may deliver the same event more than once, so every method
    must be idempotent for a given entity id.
    """

    @abstractmethod
    async def handle_payment_authorized(self, payment: Payment, event: PaymentAuthorized) -> None:
        """Payment authorized but not yet captured."""
        ...

    @abstractmethod
    async def handle_payment_failed(self, payment: Payment, event: PaymentFailed) -> None:
        """Payment attempt failed; error_code/error_description say why."""
        ...

    @abstractmethod
    async def handle_payment_captured(self, payment: Payment, event: PaymentCaptured) -> None:
        """Payment captured (completed)."""
        ...

    @abstractmethod
    async def handle_refund_created(self, refund: Refund, event: RefundCreated) -> None:
        """Refund created against a payment."""
        ...


class LoggingEventHandler(EventHandler):
    """Default handler: records each event in the log and nothing else."""

    def __init__(self) -> None:
        self._logger = get_logger("webhooks.handler")

    async def handle_payment_authorized(self, payment: Payment, event: PaymentAuthorized) -> None:
        self._logger.info(f"Payment authorized: {payment.id}")

    async def handle_payment_failed(self, payment: Payment, event: PaymentFailed) -> None:
        self._logger.info(
            f"Payment failed: {payment.id} {payment.error_code} {payment.error_description}"
        )

    async def handle_payment_captured(self, payment: Payment, event: PaymentCaptured) -> None:
        self._logger.info(f"Payment captured: {payment.id} {payment.amount}")

    async def handle_refund_created(self, refund: Refund, event: RefundCreated) -> None:
        self._logger.info(f"Refund created: {refund.id} {refund.payment_id}")
