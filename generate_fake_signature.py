import argparse
import json
import sys

from app.config import Settings
from app.mockGateway import MockRazorpayClient


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Print a signed /api/verify-payment body for an order (uses RAZORPAY_KEY_SECRET)."
    )
    parser.add_argument("order_id", help="the orderId you got from /api/create-order")
    parser.add_argument("--payment-id", help="defaults to a random pay_ id")
    parser.add_argument("--secret", help="overrides RAZORPAY_KEY_SECRET")
    args = parser.parse_args(argv)

    settings = Settings()
    secret = args.secret or settings.RAZORPAY_KEY_SECRET
    if not secret:
        parser.error("no secret: set RAZORPAY_KEY_SECRET or pass --secret")

    client = MockRazorpayClient(auth=(settings.RAZORPAY_KEY_ID, secret))
    body = client.complete_payment(args.order_id, args.payment_id)

    print("--- POST THIS TO /api/verify-payment ---", file=sys.stderr)
    print(json.dumps(body, indent=2))
    return body


if __name__ == "__main__":
    main()
