"""
Razorpay Orders API client.

Creates orders with Basic auth built from the configured key id and secret.
The response body is always parsed before the status code is looked at, since
the gateway returns structured error bodies on failure as well.
"""

from __future__ import annotations

from typing import Any

import httpx

from razorpay_merchant.core.config import Config
from razorpay_merchant.core.exceptions import GatewayRejectedError, GatewayUnreachableError
from razorpay_merchant.core.logging import get_logger
from razorpay_merchant.core.types import CreatedOrder, OrderRequest, OrderResult

DEFAULT_REJECTION_MESSAGE = "Failed to create Razorpay order"


def extract_error_message(data: dict[str, Any]) -> tuple[str, str | None]:
    """Pull (message, code) from a gateway error body."""
    error = data.get("error")
    if not isinstance(error, dict):
        return DEFAULT_REJECTION_MESSAGE, None
    message = error.get("description") or error.get("message") or DEFAULT_REJECTION_MESSAGE
    code = error.get("code")
    return str(message), str(code) if code is not None else None


class RazorpayClient:
    """
    Client for the Razorpay Orders API.

    Performs exactly one request per call; retry policy belongs to the caller.

    Example:
        >>> async with RazorpayClient(config) as client:
        ...     created = await client.create_order(request)
        ...     print(created.order.id, created.key_id)
    """

    def __init__(
        self,
        config: Config,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Initialize Orders API client.

        Args:
            config: SDK configuration holding credentials, base URL and timeout
            http_client: Optional pre-built client (its lifetime stays with the caller)
        """
        self._config = config
        self._base_url = config.api_base_url.rstrip("/")
        self._timeout = config.request_timeout
        self._logger = get_logger("gateway")
        self._http_client = http_client
        self._owns_client = http_client is None

    async def __aenter__(self) -> RazorpayClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(timeout=self._timeout)
            self._owns_client = True
        return self._http_client

    async def close(self) -> None:
        """Close HTTP client if this instance created it."""
        if self._http_client is not None and self._owns_client:
            await self._http_client.aclose()
            self._http_client = None

    async def _post(self, path: str, body: dict[str, Any]) -> tuple[int, dict[str, Any]]:
        """POST to the gateway and return (status, parsed body)."""
        client = await self._get_client()
        url = f"{self._base_url}{path}"
        self._logger.debug(f"POST {url} (key {self._config.masked_key_id()})")

        try:
            response = await client.post(
                url,
                json=body,
                auth=(self._config.key_id, self._config.key_secret),
                timeout=self._timeout,
            )
        except httpx.TimeoutException as e:
            self._logger.warning(f"Timed out after {self._timeout}s calling {url}")
            raise GatewayUnreachableError(
                "Payment gateway timed out", url=url, is_timeout=True
            ) from e
        except httpx.HTTPError as e:
            self._logger.warning(f"Transport error calling {url}: {e}")
            raise GatewayUnreachableError(
                "Payment gateway unreachable", url=url, details={"error": str(e)}
            ) from e

        try:
            data = response.json()
        except ValueError as e:
            self._logger.warning(f"Non-JSON response from {url} (status {response.status_code})")
            raise GatewayUnreachableError(
                "Payment gateway returned a malformed response",
                url=url,
                details={"status_code": response.status_code},
            ) from e

        if not isinstance(data, dict):
            raise GatewayUnreachableError(
                "Payment gateway returned a malformed response",
                url=url,
                details={"status_code": response.status_code},
            )

        self._logger.debug(f"Gateway responded {response.status_code}")
        return response.status_code, data

    async def create_order(self, request: OrderRequest) -> CreatedOrder:
        """
        Create an order.

        Args:
            request: Validated order request (amount in minor units)

        Returns:
            CreatedOrder with the gateway's order and the public key id

        Raises:
            GatewayRejectedError: Gateway answered with a non-success status
            GatewayUnreachableError: Timeout, transport failure or malformed body
        """
        status_code, data = await self._post("/orders", request.to_api_dict())

        if not 200 <= status_code < 300:
            message, code = extract_error_message(data)
            self._logger.warning(f"Order creation rejected ({status_code}): {message}")
            raise GatewayRejectedError(
                message,
                status_code=status_code,
                error_code=code,
                details={"error": data.get("error")},
            )

        order = OrderResult.from_api_response(data)
        self._logger.info(f"Created order {order.id} for {order.amount} {order.currency}")
        return CreatedOrder(order=order, key_id=self._config.key_id)
