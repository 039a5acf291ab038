"""
HMAC signature verification for checkout callbacks and webhooks.
"""

from razorpay_merchant.signing.verifier import (
    CallbackVerifier,
    WebhookVerifier,
    hmac_hex,
    sign_callback,
    sign_webhook,
)

__all__ = [
    "hmac_hex",
    "sign_callback",
    "sign_webhook",
    "CallbackVerifier",
    "WebhookVerifier",
]
