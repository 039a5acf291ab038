"""
Webhook authentication, decoding and routing.
"""

from razorpay_merchant.webhooks.dispatcher import (
    SIGNATURE_HEADER,
    DispatchOutcome,
    DispatchResult,
    WebhookDispatcher,
)
from razorpay_merchant.webhooks.events import decode_event
from razorpay_merchant.webhooks.handler import EventHandler, LoggingEventHandler

__all__ = [
    "WebhookDispatcher",
    "DispatchOutcome",
    "DispatchResult",
    "SIGNATURE_HEADER",
    "EventHandler",
    "LoggingEventHandler",
    "decode_event",
]
