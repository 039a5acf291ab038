"""
Webhook dispatcher.

Authenticates a delivery, decodes it and routes it to the EventHandler:

    Received -> Authenticated | Rejected
    Authenticated -> Parsed | Malformed
    Parsed -> Handled | Unhandled

A rejected delivery is never decoded, so unauthenticated data cannot reach
business logic. Unknown event kinds are accepted; the gateway adds new kinds
without notice.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum

from razorpay_merchant.core.logging import get_logger
from razorpay_merchant.core.types import (
    MalformedPayload,
    PaymentAuthorized,
    PaymentCaptured,
    PaymentFailed,
    RefundCreated,
    WebhookEvent,
)
from razorpay_merchant.signing.verifier import WebhookVerifier
from razorpay_merchant.webhooks.events import decode_event
from razorpay_merchant.webhooks.handler import EventHandler, LoggingEventHandler

SIGNATURE_HEADER = "x-razorpay-signature"


class DispatchOutcome(str, Enum):
    """Terminal state of a webhook delivery."""

    HANDLED = "handled"
    UNHANDLED = "unhandled"
    REJECTED = "rejected"
    MALFORMED = "malformed"
    FAILED = "failed"

    @property
    def status_code(self) -> int:
        """HTTP status an endpoint should answer with."""
        return _STATUS_CODES[self]

    @property
    def success(self) -> bool:
        return self in (DispatchOutcome.HANDLED, DispatchOutcome.UNHANDLED)


_STATUS_CODES = {
    DispatchOutcome.HANDLED: 200,
    DispatchOutcome.UNHANDLED: 200,
    DispatchOutcome.REJECTED: 401,
    DispatchOutcome.MALFORMED: 400,
    DispatchOutcome.FAILED: 500,
}


@dataclass(frozen=True)
class DispatchResult:
    """What happened to one delivery."""

    outcome: DispatchOutcome
    message: str
    event: WebhookEvent | None = None

    @property
    def status_code(self) -> int:
        return self.outcome.status_code

    @property
    def success(self) -> bool:
        return self.outcome.success


def get_signature(headers: Mapping[str, str]) -> str | None:
    """Case-insensitive lookup of the signature header."""
    value = headers.get(SIGNATURE_HEADER)
    if value is not None:
        return value
    for name, value in headers.items():
        if name.lower() == SIGNATURE_HEADER:
            return value
    return None


class WebhookDispatcher:
    """
    Framework-agnostic webhook endpoint core.

    Does NOT handle HTTP transport; hand it the raw body and the signature
    header and map the result's status_code onto your response.

    Example:
        >>> dispatcher = WebhookDispatcher(WebhookVerifier(secret), MyHandler())
        >>> result = await dispatcher.dispatch(raw_body, signature)
        >>> result.status_code
        200
    """

    def __init__(self, verifier: WebhookVerifier, handler: EventHandler | None = None) -> None:
        self._verifier = verifier
        self._handler = handler or LoggingEventHandler()
        self._logger = get_logger("webhooks")

    async def dispatch_request(self, body: bytes | str, headers: Mapping[str, str]) -> DispatchResult:
        """Dispatch using the signature found in the request headers."""
        return await self.dispatch(body, get_signature(headers))

    async def dispatch(self, body: bytes | str, signature: str | None) -> DispatchResult:
        """
        Authenticate, decode and route one delivery.

        Args:
            body: Raw request body, exactly as received
            signature: x-razorpay-signature header value

        Returns:
            DispatchResult; handler exceptions are reported as FAILED, never raised
        """
        verification = self._verifier.verify(body, signature)
        if not verification.valid:
            self._logger.warning(f"Rejected webhook delivery: {verification.error}")
            return DispatchResult(DispatchOutcome.REJECTED, verification.error or "Invalid signature")

        decoded = decode_event(body)
        if isinstance(decoded, MalformedPayload):
            self._logger.warning(f"Malformed webhook payload: {decoded.reason}")
            return DispatchResult(DispatchOutcome.MALFORMED, f"Malformed payload: {decoded.reason}")

        self._logger.debug(f"Processing webhook event: {decoded.kind}")

        try:
            return await self._route(decoded)
        except Exception:
            self._logger.exception(f"Handler failed for webhook event {decoded.kind}")
            return DispatchResult(DispatchOutcome.FAILED, "Failed to process webhook", decoded)

    async def _route(self, event: WebhookEvent) -> DispatchResult:
        if isinstance(event, PaymentAuthorized):
            await self._handler.handle_payment_authorized(event.payment, event)
            message = "Payment authorized successfully"
        elif isinstance(event, PaymentFailed):
            await self._handler.handle_payment_failed(event.payment, event)
            message = "Payment failure recorded"
        elif isinstance(event, PaymentCaptured):
            await self._handler.handle_payment_captured(event.payment, event)
            message = "Payment captured successfully"
        elif isinstance(event, RefundCreated):
            await self._handler.handle_refund_created(event.refund, event)
            message = "Refund created successfully"
        else:
            self._logger.info(f"Unhandled webhook event type: {event.kind}")
            return DispatchResult(
                DispatchOutcome.UNHANDLED, f"Received unhandled event: {event.kind}", event
            )

        return DispatchResult(DispatchOutcome.HANDLED, message, event)
