"""
Type definitions for the Razorpay merchant SDK.

This module contains the enums and value objects exchanged between the
order builder, the gateway client, the verifiers and the webhook dispatcher.
None of them has a lifecycle: they are built, used and discarded within a
single operation.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any, TypeAlias

from razorpay_merchant.core.exceptions import MalformedPayloadError, SignatureInvalidError

# Type alias for flexible amount input (major currency units)
AmountType: TypeAlias = Decimal | int | float | str


def from_unix(value: Any) -> datetime | None:
    """Convert gateway unix seconds to an aware UTC datetime."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    try:
        if not math.isfinite(value):
            return None
        return datetime.fromtimestamp(value, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        # Outside the platform time_t range
        return None


class OrderStatus(str, Enum):
    """Order status as reported by the Orders API."""

    CREATED = "created"
    ATTEMPTED = "attempted"
    PAID = "paid"

    @classmethod
    def parse(cls, value: Any) -> OrderStatus | str:
        """Map to a known status, keeping unknown strings verbatim."""
        try:
            return cls(value)
        except ValueError:
            return str(value) if value is not None else ""


class EventKind(str, Enum):
    """Webhook event kinds with a dedicated handler."""

    PAYMENT_AUTHORIZED = "payment.authorized"
    PAYMENT_FAILED = "payment.failed"
    PAYMENT_CAPTURED = "payment.captured"
    REFUND_CREATED = "refund.created"


@dataclass(frozen=True)
class OrderRequest:
    """Order-creation payload, amount already in minor units."""

    amount: int
    currency: str
    receipt: str
    notes: dict[str, Any] | None = None

    def to_api_dict(self) -> dict[str, Any]:
        """Convert to Orders API request body."""
        body: dict[str, Any] = {
            "amount": self.amount,
            "currency": self.currency,
            "receipt": self.receipt,
        }
        if self.notes is not None:
            body["notes"] = self.notes
        return body


@dataclass(frozen=True)
class OrderResult:
    """Order as returned by the gateway."""

    id: str
    amount: int
    currency: str
    receipt: str | None
    status: OrderStatus | str
    created_at: datetime | None = None
    notes: Any = None
    entity: str = "order"
    amount_paid: int = 0
    amount_due: int = 0
    attempts: int = 0

    @classmethod
    def from_api_response(cls, data: dict[str, Any]) -> OrderResult:
        """Create from Orders API response."""
        return cls(
            id=str(data.get("id", "")),
            amount=int(data.get("amount") or 0),
            currency=str(data.get("currency", "")),
            receipt=data.get("receipt"),
            status=OrderStatus.parse(data.get("status")),
            created_at=from_unix(data.get("created_at")),
            notes=data.get("notes"),
            entity=str(data.get("entity", "order")),
            amount_paid=int(data.get("amount_paid") or 0),
            amount_due=int(data.get("amount_due") or 0),
            attempts=int(data.get("attempts") or 0),
        )


@dataclass(frozen=True)
class CreatedOrder:
    """Successful order creation plus the public key id the checkout widget needs."""

    order: OrderResult
    key_id: str

    def to_response_dict(self) -> dict[str, Any]:
        """Body returned to the storefront."""
        status = self.order.status
        return {
            "id": self.order.id,
            "amount": self.order.amount,
            "currency": self.order.currency,
            "key": self.key_id,
            "receipt": self.order.receipt,
            "status": status.value if isinstance(status, OrderStatus) else status,
            "created_at": int(self.order.created_at.timestamp()) if self.order.created_at else None,
            "notes": self.order.notes,
        }


@dataclass(frozen=True)
class CallbackPayload:
    """Triple handed to the storefront by the checkout widget after payment."""

    order_id: str
    payment_id: str
    signature: str

    @classmethod
    def from_dict(cls, data: Any) -> CallbackPayload:
        """Read the widget's razorpay_* keys; anything absent or non-string becomes empty."""
        if not isinstance(data, Mapping):
            data = {}

        def _text(key: str) -> str:
            value = data.get(key)
            return value if isinstance(value, str) else ""

        return cls(
            order_id=_text("razorpay_order_id"),
            payment_id=_text("razorpay_payment_id"),
            signature=_text("razorpay_signature"),
        )


@dataclass(frozen=True)
class VerificationResult:
    """Outcome of a signature check. Never raised, always returned."""

    valid: bool
    order_id: str = ""
    payment_id: str = ""
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {
            "valid": self.valid,
            "orderId": self.order_id,
            "paymentId": self.payment_id,
        }
        if self.error is not None:
            body["error"] = self.error
        return body

    def raise_for_invalid(self) -> None:
        """Raise SignatureInvalidError when not valid."""
        if not self.valid:
            raise SignatureInvalidError(self.error or "Invalid signature")


@dataclass(frozen=True)
class Payment:
    """Payment entity carried by payment.* webhooks."""

    id: str
    amount: int
    currency: str
    status: str
    order_id: str | None = None
    method: str | None = None
    error_code: str | None = None
    error_description: str | None = None
    created_at: datetime | None = None

    @classmethod
    def from_entity(cls, data: dict[str, Any]) -> Payment:
        return cls(
            id=data["id"],
            amount=int(data.get("amount") or 0),
            currency=str(data.get("currency", "")),
            status=str(data.get("status", "")),
            order_id=data.get("order_id"),
            method=data.get("method"),
            error_code=data.get("error_code"),
            error_description=data.get("error_description"),
            created_at=from_unix(data.get("created_at")),
        )


@dataclass(frozen=True)
class Refund:
    """Refund entity carried by refund.* webhooks."""

    id: str
    payment_id: str
    amount: int
    status: str
    created_at: datetime | None = None

    @classmethod
    def from_entity(cls, data: dict[str, Any]) -> Refund:
        return cls(
            id=data["id"],
            payment_id=str(data.get("payment_id", "")),
            amount=int(data.get("amount") or 0),
            status=str(data.get("status", "")),
            created_at=from_unix(data.get("created_at")),
        )


@dataclass(frozen=True)
class MalformedPayload:
    """Decoding failure, returned as a value rather than raised."""

    reason: str

    def to_exception(self) -> MalformedPayloadError:
        return MalformedPayloadError(f"Malformed webhook payload: {self.reason}")


@dataclass(frozen=True)
class WebhookEventBase:
    """Fields shared by every webhook event variant."""

    kind: str
    account_id: str | None = None
    created_at: datetime | None = None
    raw: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)


@dataclass(frozen=True, kw_only=True)
class PaymentAuthorized(WebhookEventBase):
    payment: Payment


@dataclass(frozen=True, kw_only=True)
class PaymentFailed(WebhookEventBase):
    payment: Payment


@dataclass(frozen=True, kw_only=True)
class PaymentCaptured(WebhookEventBase):
    payment: Payment


@dataclass(frozen=True, kw_only=True)
class RefundCreated(WebhookEventBase):
    refund: Refund


@dataclass(frozen=True)
class UnrecognizedEvent(WebhookEventBase):
    """Any event kind without a dedicated handler. Accepted, never an error."""

    pass


WebhookEvent: TypeAlias = (
    PaymentAuthorized | PaymentFailed | PaymentCaptured | RefundCreated | UnrecognizedEvent
)
