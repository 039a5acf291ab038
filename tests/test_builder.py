"""Unit tests for the order request builder."""

from datetime import datetime, timezone

import pytest
from conftest import FixedClock

from razorpay_merchant.core.exceptions import InvalidAmountError
from razorpay_merchant.orders.builder import (
    MAX_RECEIPT_LENGTH,
    SystemReceiptClock,
    build_order_request,
    generate_receipt,
)


class TestBuildOrderRequest:
    """Defaulting and pass-through rules."""

    def test_defaults_currency_to_inr(self, clock) -> None:
        request = build_order_request(100, clock=clock)

        assert request.amount == 10000
        assert request.currency == "INR"

    @pytest.mark.parametrize("currency", [None, "", "   ", 42])
    def test_blank_or_non_string_currency_uses_default(self, currency, clock) -> None:
        request = build_order_request(1, currency=currency, default_currency="USD", clock=clock)

        assert request.currency == "USD"

    def test_explicit_currency_kept(self, clock) -> None:
        assert build_order_request(1, currency="EUR", clock=clock).currency == "EUR"

    def test_generated_receipt_uses_clock(self, clock) -> None:
        request = build_order_request(1, clock=clock)

        millis = int(clock.now().timestamp() * 1000)
        assert request.receipt == f"receipt_{millis}_deadbeef"

    @pytest.mark.parametrize("receipt", [None, "", "  ", 123])
    def test_blank_receipt_is_generated(self, receipt, clock) -> None:
        request = build_order_request(1, receipt=receipt, clock=clock)

        assert request.receipt.startswith("receipt_")

    def test_explicit_receipt_kept(self, clock) -> None:
        assert build_order_request(1, receipt="inv-42", clock=clock).receipt == "inv-42"

    def test_notes_mapping_passes_through(self, clock) -> None:
        notes = {"customer": "Asha", "sku": "tee-m"}
        request = build_order_request(1, notes=notes, clock=clock)

        assert request.notes == notes
        assert request.notes is not notes

    @pytest.mark.parametrize("notes", [None, "text", ["a"], 3])
    def test_non_mapping_notes_dropped(self, notes, clock) -> None:
        assert build_order_request(1, notes=notes, clock=clock).notes is None

    def test_invalid_amount_raises(self, clock) -> None:
        with pytest.raises(InvalidAmountError):
            build_order_request(0, clock=clock)

    def test_explicit_values_are_idempotent(self) -> None:
        first = build_order_request("250.50", currency="INR", receipt="r-1", notes={"a": "b"})
        second = build_order_request("250.50", currency="INR", receipt="r-1", notes={"a": "b"})

        assert first == second

    def test_omitted_receipt_is_fresh_each_call(self) -> None:
        first = build_order_request(10)
        second = build_order_request(10)

        assert first.receipt != second.receipt

    def test_api_dict_omits_missing_notes(self, clock) -> None:
        body = build_order_request(100, clock=clock).to_api_dict()

        assert body == {
            "amount": 10000,
            "currency": "INR",
            "receipt": f"receipt_{int(clock.now().timestamp() * 1000)}_deadbeef",
        }

    def test_api_dict_includes_notes(self, clock) -> None:
        body = build_order_request(100, notes={"k": "v"}, clock=clock).to_api_dict()

        assert body["notes"] == {"k": "v"}


class TestGenerateReceipt:
    def test_same_millisecond_differs_by_suffix(self) -> None:
        now = datetime(2025, 1, 1, tzinfo=timezone.utc)

        first = generate_receipt(FixedClock(now, "aaaa0000"))
        second = generate_receipt(FixedClock(now, "bbbb1111"))

        assert first != second
        assert first.split("_")[1] == second.split("_")[1]

    def test_fits_gateway_limit(self) -> None:
        assert len(generate_receipt()) <= MAX_RECEIPT_LENGTH

    def test_system_clock_suffix_is_hex(self) -> None:
        suffix = SystemReceiptClock().random_suffix()

        assert len(suffix) == 8
        int(suffix, 16)
