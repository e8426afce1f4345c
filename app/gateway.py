import logging
import math
import random
import string
import time
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import Request

from .config import Settings
from .errors import ConfigurationError
from .mockGateway import MockRazorpayClient

logger = logging.getLogger(__name__)

GATEWAY_MODES = ("razorpay", "mock")

_BASE36 = string.digits + string.ascii_lowercase


def build_gateway(settings: Settings):
    """Construct the gateway client once, at app creation."""
    mode = settings.PAYMENT_GATEWAY
    auth = (settings.RAZORPAY_KEY_ID, settings.RAZORPAY_KEY_SECRET)

    if mode == "mock":
        logger.warning("Using the mock payment gateway, no real orders will be created")
        return MockRazorpayClient(auth=auth)

    if mode == "razorpay":
        import razorpay

        if not settings.RAZORPAY_KEY_ID or not settings.RAZORPAY_KEY_SECRET:
            logger.error("RAZORPAY_KEY_ID / RAZORPAY_KEY_SECRET not set, gateway calls will fail")
        return razorpay.Client(auth=auth)

    raise ConfigurationError(
        f"Unknown PAYMENT_GATEWAY {mode!r}, expected one of {', '.join(GATEWAY_MODES)}"
    )


def get_gateway(request: Request):
    return request.app.state.gateway


def to_minor_units(amount: float) -> int:
    # Rupees -> paise, half-up like the storefront does
    paise = amount * 100
    if not math.isfinite(paise):
        raise ValueError(f"amount out of range: {amount!r}")
    return int(math.floor(paise + 0.5))


def generate_receipt() -> str:
    millis = int(time.time() * 1000)
    suffix = "".join(random.choice(_BASE36) for _ in range(9))
    return f"order_{millis}_{suffix}"


def create_order(
    client,
    amount: float,
    currency: str = "INR",
    customer: Optional[Dict[str, Optional[str]]] = None,
) -> Dict[str, Any]:
    customer = customer or {}

    data = {
        "amount": to_minor_units(amount),
        "currency": currency,
        "receipt": generate_receipt(),
        "notes": {
            "customer_name": customer.get("name") or "",
            "customer_email": customer.get("email") or "",
            "customer_phone": customer.get("phone") or "",
            "created_at": datetime.now(timezone.utc).isoformat(),
        },
    }

    return client.order.create(data=data)
