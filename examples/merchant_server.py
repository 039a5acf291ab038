"""
Minimal storefront backend exposing the three Razorpay endpoints.

    RAZORPAY_KEY_ID=rzp_test_... RAZORPAY_KEY_SECRET=... RAZORPAY_WEBHOOK_SECRET=... \
        python examples/merchant_server.py

Endpoints:
    POST /api/razorpay          create an order
    POST /api/razorpay/verify   verify the checkout callback
    POST /api/razorpay/webhook  receive webhook deliveries
"""

import asyncio
import http.server
import json
import socketserver

from razorpay_merchant import ApiResponse, ConfigurationError, RazorpayMerchant

PORT = 8000


def parse_json(raw_body):
    try:
        return json.loads(raw_body or b"{}")
    except ValueError:
        return None


async def route(merchant, path, raw_body, headers):
    """Map one POST onto the merchant; None for unknown paths."""
    if path == "/api/razorpay":
        return await merchant.create_order(parse_json(raw_body))
    if path == "/api/razorpay/verify":
        return await merchant.verify_payment(parse_json(raw_body))
    if path == "/api/razorpay/webhook":
        try:
            # Signature is computed over the exact bytes received
            return await merchant.handle_webhook(raw_body, headers)
        except ConfigurationError as e:
            print(f"[Server] Webhook endpoint not configured: {e}")
            return ApiResponse(500, {"success": False, "error": "Webhook endpoint not configured"})
    return None


class MerchantHandler(http.server.BaseHTTPRequestHandler):
    merchant = None
    # One loop for the life of the server; the merchant's HTTP client is bound to it
    loop = None

    def do_POST(self):
        length = int(self.headers.get("Content-Length") or 0)
        raw_body = self.rfile.read(length)

        response = self.loop.run_until_complete(
            route(self.merchant, self.path, raw_body, dict(self.headers.items()))
        )
        if response is None:
            self.send_error(404, "Not Found")
            return

        payload = json.dumps(response.body).encode()
        self.send_response(response.status_code)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(payload)))
        self.end_headers()
        self.wfile.write(payload)


if __name__ == "__main__":
    MerchantHandler.loop = asyncio.new_event_loop()
    MerchantHandler.merchant = RazorpayMerchant.from_env()

    socketserver.TCPServer.allow_reuse_address = True
    with socketserver.TCPServer(("", PORT), MerchantHandler) as httpd:
        print(f"Serving Razorpay endpoints at port {PORT}")
        print(f"Key: {MerchantHandler.merchant.config.masked_key_id()}")
        try:
            httpd.serve_forever()
        except KeyboardInterrupt:
            print("\nShutting down...")
            MerchantHandler.loop.run_until_complete(MerchantHandler.merchant.close())
            httpd.server_close()
