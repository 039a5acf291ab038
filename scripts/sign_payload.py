#!/usr/bin/env python
"""
Produce Razorpay signatures for local testing.

Usage:
    python scripts/sign_payload.py callback --order-id order_abc --payment-id pay_xyz
    python scripts/sign_payload.py webhook --file delivery.json

Secrets are read from RAZORPAY_KEY_SECRET / RAZORPAY_WEBHOOK_SECRET unless
--secret is given.
"""

import argparse
import os
import sys

from razorpay_merchant.signing.verifier import sign_callback, sign_webhook


def main():
    parser = argparse.ArgumentParser(description="Sign a checkout callback or webhook body")
    subparsers = parser.add_subparsers(dest="kind", required=True)

    callback = subparsers.add_parser("callback", help="Sign order_id|payment_id with the key secret")
    callback.add_argument("--order-id", required=True)
    callback.add_argument("--payment-id", required=True)
    callback.add_argument("--secret", help="Key secret (default: $RAZORPAY_KEY_SECRET)")

    webhook = subparsers.add_parser("webhook", help="Sign a raw body with the webhook secret")
    webhook.add_argument("--file", help="File holding the exact body (default: stdin)")
    webhook.add_argument("--secret", help="Webhook secret (default: $RAZORPAY_WEBHOOK_SECRET)")

    args = parser.parse_args()

    if args.kind == "callback":
        secret = args.secret or os.environ.get("RAZORPAY_KEY_SECRET")
        if not secret:
            parser.error("no key secret given")
        print(sign_callback(secret, args.order_id, args.payment_id))
        return

    secret = args.secret or os.environ.get("RAZORPAY_WEBHOOK_SECRET")
    if not secret:
        parser.error("no webhook secret given")
    if args.file:
        with open(args.file, "rb") as f:
            body = f.read()
    else:
        body = sys.stdin.buffer.read()
    print(sign_webhook(secret, body))


if __name__ == "__main__":
    main()
