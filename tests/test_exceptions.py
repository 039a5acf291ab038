"""Unit tests for exceptions module."""

import pytest

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


class TestRazorpayMerchantError:
    """Tests for base exception."""

    def test_basic_error(self) -> None:
        error = RazorpayMerchantError("Something went wrong")

        assert str(error) == "Something went wrong"
        assert error.message == "Something went wrong"
        assert error.details == {}
        assert error.status_code == 500

    def test_error_with_details(self) -> None:
        error = RazorpayMerchantError("API failed", details={"status_code": 500})

        assert "API failed" in str(error)
        assert "Details:" in str(error)
        assert error.details["status_code"] == 500

    @pytest.mark.parametrize(
        "error",
        [
            ConfigurationError("x"),
            ValidationError("x"),
            InvalidAmountError(),
            GatewayRejectedError("x", status_code=400),
            GatewayUnreachableError("x"),
            SignatureInvalidError("x"),
            MalformedPayloadError("x"),
            InternalError("x"),
        ],
    )
    def test_is_catchable_as_base_type(self, error) -> None:
        with pytest.raises(RazorpayMerchantError):
            raise error


class TestStatusCodes:
    """Each error class maps onto an HTTP status."""

    @pytest.mark.parametrize(
        "error, status_code",
        [
            (ValidationError("x"), 400),
            (InvalidAmountError(), 400),
            (GatewayUnreachableError("x"), 502),
            (SignatureInvalidError("x"), 401),
            (MalformedPayloadError("x"), 400),
            (InternalError("x"), 500),
            (ConfigurationError("x"), 500),
        ],
    )
    def test_status_code(self, error, status_code) -> None:
        assert error.status_code == status_code


class TestGatewayRejectedError:
    def test_mirrors_status(self) -> None:
        error = GatewayRejectedError(
            "Authentication failed", status_code=401, error_code="BAD_REQUEST_ERROR"
        )

        assert error.status_code == 401
        assert error.error_code == "BAD_REQUEST_ERROR"
        assert isinstance(error, GatewayError)
        assert str(error) == "[401] Authentication failed"

    def test_instance_status_does_not_leak_to_class(self) -> None:
        GatewayRejectedError("x", status_code=418)

        assert GatewayRejectedError("y", status_code=400).status_code == 400
        assert GatewayError.status_code == 502


class TestInvalidAmountError:
    def test_default_message(self) -> None:
        error = InvalidAmountError(value="abc")

        assert error.message == "Please provide a valid amount greater than 0"
        assert error.value == "abc"
        assert isinstance(error, ValidationError)


class TestGatewayUnreachableError:
    def test_timeout_flag(self) -> None:
        error = GatewayUnreachableError("timed out", url="https://api.razorpay.com/v1/orders", is_timeout=True)

        assert error.is_timeout is True
        assert error.url == "https://api.razorpay.com/v1/orders"
