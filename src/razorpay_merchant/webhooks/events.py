"""
Webhook payload decoding.

Maps an authenticated body onto one of the typed event variants. Decoding
never raises: anything that does not fit comes back as MalformedPayload.
"""

from __future__ import annotations

import json
from typing import Any

from razorpay_merchant.core.types import (
    EventKind,
    MalformedPayload,
    Payment,
    PaymentAuthorized,
    PaymentCaptured,
    PaymentFailed,
    Refund,
    RefundCreated,
    UnrecognizedEvent,
    WebhookEvent,
    from_unix,
)

# kind -> (event class, payload key, entity class, event field)
_VARIANTS: dict[str, tuple[type, str, type, str]] = {
    EventKind.PAYMENT_AUTHORIZED.value: (PaymentAuthorized, "payment", Payment, "payment"),
    EventKind.PAYMENT_FAILED.value: (PaymentFailed, "payment", Payment, "payment"),
    EventKind.PAYMENT_CAPTURED.value: (PaymentCaptured, "payment", Payment, "payment"),
    EventKind.REFUND_CREATED.value: (RefundCreated, "refund", Refund, "refund"),
}


def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-standard JSON constant {name}")


def _load(body: str | bytes) -> Any:
    if isinstance(body, bytes):
        body = body.decode("utf-8")
    # NaN and Infinity are not JSON; the gateway never sends them
    return json.loads(body, parse_constant=_reject_constant)


def decode_event(body: str | bytes) -> WebhookEvent | MalformedPayload:
    """
    Decode a webhook body into a typed event.

    Args:
        body: Raw request body, already authenticated

    Returns:
        The matching event variant, UnrecognizedEvent for kinds without a
        handler, or MalformedPayload describing why decoding failed
    """
    try:
        data = _load(body)
    except (ValueError, RecursionError) as e:
        return MalformedPayload(f"invalid JSON: {e}")

    if not isinstance(data, dict):
        return MalformedPayload("body is not a JSON object")

    kind = data.get("event")
    if not isinstance(kind, str) or not kind:
        return MalformedPayload("missing 'event'")

    payload = data.get("payload", {})
    if not isinstance(payload, dict):
        return MalformedPayload("'payload' is not an object")

    common: dict[str, Any] = {
        "kind": kind,
        "account_id": data.get("account_id"),
        "created_at": from_unix(data.get("created_at")),
        "raw": data,
    }

    variant = _VARIANTS.get(kind)
    if variant is None:
        return UnrecognizedEvent(**common)

    event_cls, payload_key, entity_cls, field_name = variant
    wrapper = payload.get(payload_key)
    entity = wrapper.get("entity") if isinstance(wrapper, dict) else None
    if not isinstance(entity, dict) or not isinstance(entity.get("id"), str):
        return MalformedPayload(f"{kind} without a {payload_key} entity")

    try:
        decoded = entity_cls.from_entity(entity)
    except (TypeError, ValueError, OverflowError) as e:
        return MalformedPayload(f"invalid {payload_key} entity: {e}")

    return event_cls(**common, **{field_name: decoded})
