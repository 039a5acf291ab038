import json
import logging
from datetime import datetime, timezone

import httpx
import pytest

from razorpay_merchant.core.config import Config
from razorpay_merchant.core.types import (
    Payment,
    PaymentAuthorized,
    PaymentCaptured,
    PaymentFailed,
    Refund,
    RefundCreated,
)
from razorpay_merchant.webhooks.handler import EventHandler

KEY_ID = "rzp_test_1234567890abcd"
KEY_SECRET = "s3cr3t"
WEBHOOK_SECRET = "whsec_test_abcdef"


class FixedClock:
    """Deterministic receipt clock."""

    def __init__(self, now: datetime, suffix: str = "deadbeef") -> None:
        self._now = now
        self._suffix = suffix

    def now(self) -> datetime:
        return self._now

    def random_suffix(self) -> str:
        return self._suffix


class RecordingHandler(EventHandler):
    """Collects every handler call as (method name, entity, event)."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, object, object]] = []

    async def handle_payment_authorized(self, payment: Payment, event: PaymentAuthorized) -> None:
        self.calls.append(("payment_authorized", payment, event))

    async def handle_payment_failed(self, payment: Payment, event: PaymentFailed) -> None:
        self.calls.append(("payment_failed", payment, event))

    async def handle_payment_captured(self, payment: Payment, event: PaymentCaptured) -> None:
        self.calls.append(("payment_captured", payment, event))

    async def handle_refund_created(self, refund: Refund, event: RefundCreated) -> None:
        self.calls.append(("refund_created", refund, event))


class GatewayStub:
    """httpx.MockTransport handler that records requests and replays one response."""

    def __init__(self, status_code: int = 200, body: object = None, raw: bytes | None = None):
        self.status_code = status_code
        self.body = body
        self.raw = raw
        self.requests: list[httpx.Request] = []
        self.error: Exception | None = None

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if self.raw is not None:
            return httpx.Response(self.status_code, content=self.raw)
        return httpx.Response(self.status_code, json=self.body)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self))


def order_response(**overrides) -> dict:
    body = {
        "id": "order_EKwxwAgItmmXdp",
        "entity": "order",
        "amount": 10000,
        "amount_paid": 0,
        "amount_due": 10000,
        "currency": "INR",
        "receipt": "receipt_1760870400000_deadbeef",
        "status": "created",
        "attempts": 0,
        "notes": {},
        "created_at": 1760870400,
    }
    body.update(overrides)
    return body


def webhook_body(event: str, payload: dict | None = None) -> bytes:
    return json.dumps(
        {
            "entity": "event",
            "account_id": "acc_BFQ7uQEaa7j2z7",
            "event": event,
            "contains": list((payload or {}).keys()),
            "payload": payload or {},
            "created_at": 1760870400,
        }
    ).encode("utf-8")


def payment_entity(**overrides) -> dict:
    entity = {
        "id": "pay_xyz",
        "entity": "payment",
        "amount": 10000,
        "currency": "INR",
        "status": "captured",
        "order_id": "order_abc",
        "method": "upi",
        "created_at": 1760870400,
    }
    entity.update(overrides)
    return entity


def refund_entity(**overrides) -> dict:
    entity = {
        "id": "rfnd_123",
        "entity": "refund",
        "payment_id": "pay_xyz",
        "amount": 5000,
        "status": "processed",
        "created_at": 1760870400,
    }
    entity.update(overrides)
    return entity


@pytest.fixture
def config() -> Config:
    return Config(key_id=KEY_ID, key_secret=KEY_SECRET, webhook_secret=WEBHOOK_SECRET)


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(datetime(2025, 10, 19, 10, 40, tzinfo=timezone.utc))


@pytest.fixture
def handler() -> RecordingHandler:
    return RecordingHandler()


@pytest.fixture(autouse=True)
def reset_sdk_logger():
    """Undo configure_logging so caplog sees SDK records."""
    yield
    logger = logging.getLogger("razorpay_merchant")
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
