import uuid
from typing import Any, Dict, Optional

from .signature import sign_payment


# --- THE FAKE BANK (Simulation Layer) ---
# Mimics the parts of the 'razorpay' SDK we call, so the API can run
# locally (PAYMENT_GATEWAY=mock) and in tests without real keys.
class MockRazorpayClient:
    def __init__(self, auth):
        self.key_id = auth[0]
        self.key_secret = auth[1]
        self.order = self.Order(self)  # Nested class to mimic client.order.create

    class Order:
        def __init__(self, client):
            self.client = client

        def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
            # Razorpay-like order id
            fake_id = f"order_{uuid.uuid4().hex[:14]}"
            return {
                "id": fake_id,
                "entity": "order",
                "amount": data["amount"],
                "currency": data.get("currency", "INR"),
                "receipt": data.get("receipt"),
                "notes": data.get("notes", {}),
                "status": "created",
            }

    def complete_payment(self, order_id: str, payment_id: Optional[str] = None) -> Dict[str, str]:
        """Simulate a finished checkout: what the storefront posts to /api/verify-payment."""
        payment_id = payment_id or f"pay_{uuid.uuid4().hex[:14]}"

        return {
            "razorpay_order_id": order_id,
            "razorpay_payment_id": payment_id,
            "razorpay_signature": sign_payment(order_id, payment_id, self.key_secret or ""),
        }
