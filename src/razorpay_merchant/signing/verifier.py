"""
HMAC-SHA256 signature verification.

Two modes share one primitive:

- Checkout callbacks are signed over ``order_id|payment_id`` with the API
  key secret.
- Webhook deliveries are signed over the raw request body with the separate
  webhook secret. Verification must run on the exact bytes received, before
  any JSON parsing.

Verifiers never raise for bad input; they always return a VerificationResult.
"""

from __future__ import annotations

from cryptography.hazmat.primitives import constant_time, hashes, hmac

from razorpay_merchant.core.exceptions import ConfigurationError
from razorpay_merchant.core.logging import get_logger
from razorpay_merchant.core.types import CallbackPayload, VerificationResult

MISSING_FIELDS_ERROR = "Missing required payment verification fields"
INVALID_PAYMENT_SIGNATURE_ERROR = "Invalid payment signature"
MISSING_SIGNATURE_ERROR = "Missing signature header"
INVALID_SIGNATURE_ERROR = "Invalid signature"
VERIFICATION_ERROR = "Verification error"

logger = get_logger("signing")


def _to_bytes(value: str | bytes) -> bytes:
    return value.encode("utf-8") if isinstance(value, str) else value


def hmac_hex(secret: str | bytes, message: str | bytes) -> str:
    """Lowercase hex HMAC-SHA256 of message under secret."""
    h = hmac.HMAC(_to_bytes(secret), hashes.SHA256())
    h.update(_to_bytes(message))
    return h.finalize().hex()


def _signatures_match(expected: str, candidate: str) -> bool:
    # Constant-time; different lengths simply compare unequal
    return constant_time.bytes_eq(expected.encode("ascii"), candidate.encode("utf-8"))


def callback_message(order_id: str, payment_id: str) -> str:
    return f"{order_id}|{payment_id}"


def sign_callback(secret: str | bytes, order_id: str, payment_id: str) -> str:
    """Signature the checkout widget would hand back for this order/payment pair."""
    return hmac_hex(secret, callback_message(order_id, payment_id))


def sign_webhook(secret: str | bytes, body: str | bytes) -> str:
    """Value the gateway would send in x-razorpay-signature for this body."""
    return hmac_hex(secret, body)


class CallbackVerifier:
    """Verifies the (order id, payment id, signature) triple returned after checkout."""

    def __init__(self, key_secret: str) -> None:
        if not key_secret:
            raise ConfigurationError("key_secret is required for callback verification")
        self._secret = key_secret

    def verify(self, payload: CallbackPayload) -> VerificationResult:
        """
        Verify a checkout callback.

        Args:
            payload: The widget's callback triple

        Returns:
            VerificationResult; on failure error holds a generic message and
            the expected signature is never disclosed
        """
        order_id = payload.order_id
        payment_id = payload.payment_id

        if not order_id or not payment_id or not payload.signature:
            return VerificationResult(
                valid=False, order_id=order_id, payment_id=payment_id, error=MISSING_FIELDS_ERROR
            )

        try:
            expected = sign_callback(self._secret, order_id, payment_id)
            valid = _signatures_match(expected, payload.signature)
        except Exception:
            logger.exception(f"Callback verification failed for order {order_id}")
            return VerificationResult(
                valid=False, order_id=order_id, payment_id=payment_id, error=VERIFICATION_ERROR
            )

        if not valid:
            logger.warning(f"Invalid payment signature for order {order_id}, payment {payment_id}")
            return VerificationResult(
                valid=False,
                order_id=order_id,
                payment_id=payment_id,
                error=INVALID_PAYMENT_SIGNATURE_ERROR,
            )

        return VerificationResult(valid=True, order_id=order_id, payment_id=payment_id)


class WebhookVerifier:
    """Authenticates webhook deliveries against the webhook secret."""

    def __init__(self, webhook_secret: str) -> None:
        if not webhook_secret:
            raise ConfigurationError("webhook_secret is required for webhook verification")
        self._secret = webhook_secret

    def verify(self, body: str | bytes, signature: str | None) -> VerificationResult:
        """
        Verify a webhook delivery.

        Args:
            body: Raw, unparsed request body
            signature: Value of the x-razorpay-signature header

        Returns:
            VerificationResult
        """
        if not signature:
            return VerificationResult(valid=False, error=MISSING_SIGNATURE_ERROR)

        try:
            expected = sign_webhook(self._secret, body)
            valid = _signatures_match(expected, signature)
        except Exception:
            logger.exception("Webhook signature verification failed")
            return VerificationResult(valid=False, error=VERIFICATION_ERROR)

        if not valid:
            logger.warning("Webhook signature mismatch")
            return VerificationResult(valid=False, error=INVALID_SIGNATURE_ERROR)

        return VerificationResult(valid=True)
