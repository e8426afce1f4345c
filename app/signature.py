import hashlib
import hmac
from typing import Optional


def sign_payment(order_id: str, payment_id: str, secret: str) -> str:
    """HMAC_SHA256(secret, "<order_id>|<payment_id>") as lowercase hex.

    This is what the gateway sends back to the storefront after checkout.
    """
    msg = f"{order_id}|{payment_id}"

    return hmac.new(
        bytes(secret, "utf-8"),
        bytes(msg, "utf-8"),
        hashlib.sha256,
    ).hexdigest()


def verify_payment_signature(
    order_id: str,
    payment_id: str,
    signature: str,
    secret: Optional[str],
) -> bool:
    # no secret configured -> nothing is authentic
    if not secret:
        return False

    expected = sign_payment(order_id, payment_id, secret)

    # compare bytes, compare_digest refuses non-ascii str
    return hmac.compare_digest(
        bytes(expected, "utf-8"),
        bytes(signature, "utf-8"),
    )
