"""
Configuration management for the Razorpay merchant SDK.

Handles loading configuration from environment variables and validation.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any

from razorpay_merchant.core.exceptions import ConfigurationError


def _get_env_var(name: str, default: str | None = None, required: bool = False) -> str | None:
    """Get environment variable with optional default."""
    value = os.environ.get(name, default)
    if required and not value:
        raise ValueError(f"Required environment variable {name} is not set")
    return value


@dataclass(frozen=True)
class Config:
    """SDK configuration. Loaded once at startup and never mutated."""

    key_id: str
    key_secret: str = field(repr=False)
    webhook_secret: str | None = field(default=None, repr=False)
    api_base_url: str = "https://api.razorpay.com/v1"
    # Timeout for the outbound order call, in seconds
    request_timeout: float = 10.0
    default_currency: str = "INR"
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if not self.key_id:
            raise ValueError("key_id is required")
        if not self.key_secret:
            raise ValueError("key_secret is required")
        if self.request_timeout <= 0:
            raise ValueError("request_timeout must be positive")

    @classmethod
    def from_env(cls, **overrides: Any) -> Config:
        """Load configuration from environment variables."""
        key_id = overrides.get("key_id") or _get_env_var("RAZORPAY_KEY_ID", required=True)
        key_secret = overrides.get("key_secret") or _get_env_var(
            "RAZORPAY_KEY_SECRET", required=True
        )
        webhook_secret = overrides.get("webhook_secret") or _get_env_var(
            "RAZORPAY_WEBHOOK_SECRET"
        )

        timeout = overrides.get("request_timeout")
        if timeout is None:
            timeout_str = _get_env_var("RAZORPAY_REQUEST_TIMEOUT")
            timeout = float(timeout_str) if timeout_str else cls.request_timeout

        return cls(
            key_id=key_id,  # type: ignore
            key_secret=key_secret,  # type: ignore
            webhook_secret=webhook_secret or None,
            api_base_url=overrides.get("api_base_url")
            or _get_env_var("RAZORPAY_API_BASE_URL", default=cls.api_base_url),  # type: ignore
            request_timeout=timeout,
            default_currency=overrides.get("default_currency")
            or _get_env_var("RAZORPAY_DEFAULT_CURRENCY", default=cls.default_currency),  # type: ignore
            log_level=overrides.get("log_level")
            or _get_env_var("RAZORPAY_LOG_LEVEL", default=cls.log_level),  # type: ignore
        )

    def with_updates(self, **updates: Any) -> Config:
        """Create a new Config with updated values."""
        current = {
            "key_id": self.key_id,
            "key_secret": self.key_secret,
            "webhook_secret": self.webhook_secret,
            "api_base_url": self.api_base_url,
            "request_timeout": self.request_timeout,
            "default_currency": self.default_currency,
            "log_level": self.log_level,
        }
        current.update(updates)
        return Config(**current)

    def require_webhook_secret(self) -> str:
        """Return the webhook secret or fail; the webhook endpoint cannot run without it."""
        if not self.webhook_secret:
            raise ConfigurationError(
                "RAZORPAY_WEBHOOK_SECRET is not set; webhook deliveries cannot be authenticated"
            )
        return self.webhook_secret

    def masked_key_id(self) -> str:
        """Return key id with most characters masked for safe logging."""
        if len(self.key_id) <= 8:
            return "****"
        return self.key_id[:4] + "..." + self.key_id[-4:]
