"""
Razorpay REST API access.
"""

from razorpay_merchant.gateway.client import RazorpayClient

__all__ = ["RazorpayClient"]
