"""
razorpay_merchant - merchant-side Razorpay integration.

Creates orders, verifies checkout callback signatures and authenticates
webhook deliveries.

Usage:
    >>> from razorpay_merchant import RazorpayMerchant
    >>>
    >>> merchant = RazorpayMerchant.from_env()
    >>> response = await merchant.create_order({"amount": "499.00"})
    >>> response = await merchant.verify_payment(callback_body)
    >>> response = await merchant.handle_webhook(raw_body, request_headers)
"""

from razorpay_merchant.core.config import Config
from razorpay_merchant.core.exceptions import (
    ConfigurationError,
    GatewayError,
    GatewayRejectedError,
    GatewayUnreachableError,
    InternalError,
    InvalidAmountError,
    MalformedPayloadError,
    RazorpayMerchantError,
    SignatureInvalidError,
    ValidationError,
)
from razorpay_merchant.core.logging import configure_logging, get_logger
from razorpay_merchant.core.types import (
    CallbackPayload,
    CreatedOrder,
    EventKind,
    MalformedPayload,
    OrderRequest,
    OrderResult,
    OrderStatus,
    Payment,
    PaymentAuthorized,
    PaymentCaptured,
    PaymentFailed,
    Refund,
    RefundCreated,
    UnrecognizedEvent,
    VerificationResult,
    WebhookEvent,
)
from razorpay_merchant.gateway import RazorpayClient
from razorpay_merchant.merchant import ApiResponse, RazorpayMerchant
from razorpay_merchant.orders import (
    ReceiptClock,
    SystemReceiptClock,
    build_order_request,
    generate_receipt,
    to_minor_units,
)
from razorpay_merchant.signing import (
    CallbackVerifier,
    WebhookVerifier,
    hmac_hex,
    sign_callback,
    sign_webhook,
)
from razorpay_merchant.webhooks import (
    DispatchOutcome,
    DispatchResult,
    EventHandler,
    LoggingEventHandler,
    WebhookDispatcher,
    decode_event,
)

__version__ = "0.1.0"
__all__ = [
    # Main entry point
    "RazorpayMerchant",
    "ApiResponse",
    # Config & logging
    "Config",
    "configure_logging",
    "get_logger",
    # Orders
    "to_minor_units",
    "build_order_request",
    "generate_receipt",
    "ReceiptClock",
    "SystemReceiptClock",
    "RazorpayClient",
    # Signatures
    "hmac_hex",
    "sign_callback",
    "sign_webhook",
    "CallbackVerifier",
    "WebhookVerifier",
    # Webhooks
    "WebhookDispatcher",
    "DispatchOutcome",
    "DispatchResult",
    "EventHandler",
    "LoggingEventHandler",
    "decode_event",
    # Types
    "OrderRequest",
    "OrderResult",
    "OrderStatus",
    "CreatedOrder",
    "CallbackPayload",
    "VerificationResult",
    "EventKind",
    "Payment",
    "Refund",
    "PaymentAuthorized",
    "PaymentFailed",
    "PaymentCaptured",
    "RefundCreated",
    "UnrecognizedEvent",
    "WebhookEvent",
    "MalformedPayload",
    # Exceptions
    "RazorpayMerchantError",
    "ConfigurationError",
    "ValidationError",
    "InvalidAmountError",
    "GatewayError",
    "GatewayRejectedError",
    "GatewayUnreachableError",
    "SignatureInvalidError",
    "MalformedPayloadError",
    "InternalError",
]
