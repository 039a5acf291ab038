"""RazorpayMerchant - framework-agnostic entry point for the three storefront endpoints."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import httpx

from razorpay_merchant.core.config import Config
from razorpay_merchant.core.exceptions import (
    GatewayRejectedError,
    GatewayUnreachableError,
    InternalError,
    InvalidAmountError,
)
from razorpay_merchant.core.logging import configure_logging, get_logger
from razorpay_merchant.core.types import CallbackPayload, CreatedOrder
from razorpay_merchant.gateway.client import RazorpayClient
from razorpay_merchant.orders.builder import ReceiptClock, build_order_request
from razorpay_merchant.signing.verifier import CallbackVerifier, WebhookVerifier
from razorpay_merchant.webhooks.dispatcher import DispatchOutcome, WebhookDispatcher
from razorpay_merchant.webhooks.handler import EventHandler

INTERNAL_ERROR_MESSAGE = "Internal server error"
UNREACHABLE_MESSAGE = "Payment gateway unreachable"
VERIFIED_MESSAGE = "Payment verified successfully"
WEBHOOK_ERRORS = {
    DispatchOutcome.REJECTED: "Invalid signature",
    DispatchOutcome.MALFORMED: "Malformed webhook payload",
    DispatchOutcome.FAILED: "Failed to process webhook",
}


@dataclass(frozen=True)
class ApiResponse:
    """Status code plus JSON-ready body for an inbound endpoint."""

    status_code: int
    body: dict[str, Any] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


class RazorpayMerchant:
    """
    Main entry point for a storefront backend.

    Wires the order builder, the Orders API client, the callback verifier and
    the webhook dispatcher from one immutable Config. Every endpoint method
    returns an ApiResponse and never raises; errors become the matching
    status code with a generic, secret-free message.

    Example:
        >>> merchant = RazorpayMerchant.from_env()
        >>> response = await merchant.create_order({"amount": 100})
        >>> response.status_code, response.body["currency"]
        (200, 'INR')
    """

    def __init__(
        self,
        config: Config,
        handler: EventHandler | None = None,
        http_client: httpx.AsyncClient | None = None,
        clock: ReceiptClock | None = None,
        require_webhooks: bool = False,
        log_level: int | str | None = None,
    ) -> None:
        """
        Initialize the merchant integration.

        Args:
            config: SDK configuration
            handler: Webhook event handler (defaults to LoggingEventHandler)
            http_client: Optional httpx.AsyncClient for the Orders API
            clock: Receipt clock for generated receipts
            require_webhooks: Fail now, rather than on first delivery, when
                no webhook secret is configured
            log_level: Configure SDK logging at this level when given
        """
        if log_level is not None:
            configure_logging(
                level=log_level, secrets=(config.key_secret, config.webhook_secret)
            )
        self._logger = get_logger("merchant")

        self._config = config
        self._clock = clock
        self._client = RazorpayClient(config, http_client=http_client)
        self._callback_verifier = CallbackVerifier(config.key_secret)

        self._dispatcher: WebhookDispatcher | None = None
        if config.webhook_secret:
            self._dispatcher = WebhookDispatcher(WebhookVerifier(config.webhook_secret), handler)
        elif require_webhooks:
            config.require_webhook_secret()
        else:
            self._logger.warning("RAZORPAY_WEBHOOK_SECRET not set; webhook endpoint disabled")

        self._logger.info(f"Razorpay merchant ready (key {config.masked_key_id()})")

    @classmethod
    def from_env(cls, **kwargs: Any) -> RazorpayMerchant:
        """Build from RAZORPAY_* environment variables."""
        config = Config.from_env()
        kwargs.setdefault("log_level", config.log_level)
        return cls(config, **kwargs)

    @property
    def config(self) -> Config:
        return self._config

    @property
    def client(self) -> RazorpayClient:
        """Orders API client."""
        return self._client

    @property
    def webhooks(self) -> WebhookDispatcher:
        """Webhook dispatcher; raises ConfigurationError without a webhook secret."""
        if self._dispatcher is None:
            self._config.require_webhook_secret()
        return self._dispatcher  # type: ignore[return-value]

    async def __aenter__(self) -> RazorpayMerchant:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def close(self) -> None:
        await self._client.close()

    def _internal_error(
        self, operation: str, cause: Exception, message: str = INTERNAL_ERROR_MESSAGE
    ) -> InternalError:
        """Log an unexpected failure with its traceback and wrap it as InternalError."""
        self._logger.exception(f"Unexpected error in {operation}")
        error = InternalError(message, details={"operation": operation, "cause": type(cause).__name__})
        error.__cause__ = cause
        return error

    async def create_order(self, data: Any) -> ApiResponse:
        """
        Create-order endpoint.

        Args:
            data: Decoded JSON body {amount, currency?, receipt?, notes?}

        Returns:
            200 with the order and public key id, 400 on an invalid amount,
            the gateway's status on rejection, 502 when unreachable, 500 otherwise
        """
        if not isinstance(data, Mapping):
            data = {}

        try:
            request = build_order_request(
                data.get("amount"),
                currency=data.get("currency"),
                receipt=data.get("receipt"),
                notes=data.get("notes"),
                default_currency=self._config.default_currency,
                clock=self._clock,
            )
            created: CreatedOrder = await self._client.create_order(request)
        except InvalidAmountError as e:
            self._logger.info(f"Invalid amount provided: {e.value!r}")
            return ApiResponse(e.status_code, {"success": False, "error": e.message})
        except GatewayRejectedError as e:
            return ApiResponse(e.status_code, {"success": False, "error": e.message})
        except GatewayUnreachableError as e:
            return ApiResponse(e.status_code, {"success": False, "error": UNREACHABLE_MESSAGE})
        except Exception as e:
            error = self._internal_error("create_order", e)
            return ApiResponse(error.status_code, {"success": False, "error": error.message})

        return ApiResponse(200, created.to_response_dict())

    async def verify_payment(self, data: Any) -> ApiResponse:
        """
        Verify-callback endpoint.

        Args:
            data: Decoded JSON body {razorpay_order_id, razorpay_payment_id, razorpay_signature}

        Returns:
            200 {valid: true, message, orderId, paymentId} or 400 {valid: false, error, ...}
        """
        try:
            result = self._callback_verifier.verify(CallbackPayload.from_dict(data))
        except Exception as e:
            error = self._internal_error("verify_payment", e)
            return ApiResponse(error.status_code, {"valid": False, "error": error.message})

        if not result.valid:
            return ApiResponse(400, result.to_dict())

        self._logger.info(
            f"Payment verified: order {result.order_id}, payment {result.payment_id}"
        )
        return ApiResponse(
            200,
            {
                "valid": True,
                "message": VERIFIED_MESSAGE,
                "orderId": result.order_id,
                "paymentId": result.payment_id,
            },
        )

    async def handle_webhook(self, body: bytes | str, headers: Mapping[str, str]) -> ApiResponse:
        """
        Webhook endpoint.

        Args:
            body: Raw request body, exactly as received
            headers: Request headers (x-razorpay-signature looked up case-insensitively)

        Returns:
            200 {success: true, message} for handled and unhandled kinds,
            401 on a bad signature, 400 on a malformed payload, 500 on handler failure

        Raises:
            ConfigurationError: If no webhook secret is configured
        """
        dispatcher = self.webhooks

        try:
            result = await dispatcher.dispatch_request(body, headers)
        except Exception as e:
            error = self._internal_error(
                "handle_webhook", e, message=WEBHOOK_ERRORS[DispatchOutcome.FAILED]
            )
            return ApiResponse(error.status_code, {"success": False, "error": error.message})

        if result.success:
            return ApiResponse(result.status_code, {"success": True, "message": result.message})
        return ApiResponse(
            result.status_code, {"success": False, "error": WEBHOOK_ERRORS[result.outcome]}
        )
