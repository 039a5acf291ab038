"""
Exception hierarchy for the Razorpay merchant SDK.

All SDK-specific exceptions inherit from RazorpayMerchantError for easy catching.
Each class carries the HTTP status an inbound endpoint should answer with.
"""

from __future__ import annotations

from typing import Any


class RazorpayMerchantError(Exception):
    """
    Base exception for all SDK errors.

    Catch this to handle any SDK-related exception.

    Example:
        >>> try:
        ...     await client.create_order(request)
        ... except RazorpayMerchantError as e:
        ...     print(f"Order failed: {e}")
    """

    status_code: int = 500

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ConfigurationError(RazorpayMerchantError):
    """
    Configuration is missing or invalid.

    Raised when:
    - Required configuration values are not provided
    - The webhook endpoint is used without a webhook secret
    """

    pass


class ValidationError(RazorpayMerchantError):
    """
    Input validation error (client-correctable).

    Raised when:
    - Required parameters are missing
    - Parameter values are invalid
    """

    status_code = 400


class InvalidAmountError(ValidationError):
    """The amount is missing, not numeric, NaN/infinite or not greater than zero."""

    def __init__(
        self,
        message: str = "Please provide a valid amount greater than 0",
        value: Any = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.value = value


class GatewayError(RazorpayMerchantError):
    """Base exception for failures talking to the payment gateway."""

    status_code = 502


class GatewayRejectedError(GatewayError):
    """
    The gateway answered with a non-success status.

    The gateway's own status code is mirrored and the message is taken
    from its structured error body.

    Example:
        >>> try:
        ...     await client.create_order(request)
        ... except GatewayRejectedError as e:
        ...     print(e.status_code, e.message)
        401 Authentication failed
    """

    def __init__(
        self,
        message: str,
        status_code: int,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.status_code = status_code
        self.error_code = error_code

    def __str__(self) -> str:
        return f"[{self.status_code}] {self.message}"


class GatewayUnreachableError(GatewayError):
    """
    Network or transport failure talking to the gateway.

    Raised when:
    - The request times out
    - The connection fails
    - The response body is not a JSON object

    Safe for the caller to retry; the SDK itself never does.
    """

    def __init__(
        self,
        message: str,
        url: str | None = None,
        is_timeout: bool = False,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.url = url
        self.is_timeout = is_timeout


class SignatureInvalidError(RazorpayMerchantError):
    """A callback or webhook signature did not verify. Not retryable without new data."""

    status_code = 401


class MalformedPayloadError(RazorpayMerchantError):
    """An authenticated webhook body could not be decoded into a known event shape."""

    status_code = 400


class InternalError(RazorpayMerchantError):
    """Unexpected failure. Logged with detail; callers only see a generic message."""

    pass
