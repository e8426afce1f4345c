import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, status
from pydantic import ValidationError

from .. import schemas
from ..config import Settings, get_settings
from ..errors import PaymentAPIError
from ..gateway import create_order as create_gateway_order, get_gateway
from ..signature import verify_payment_signature
from ..utils import read_payload

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Payments"])


def _amount_is_invalid(err: ValidationError) -> bool:
    return any(e["loc"] and e["loc"][0] == "amount" for e in err.errors())


# --- ACT 1: CREATE ORDER (Server-Side) ---
@router.post(
    "/create-order",
    status_code=status.HTTP_200_OK,
    response_model=schemas.OrderResponse,
    openapi_extra=schemas.request_body(schemas.OrderCreate),
)
def create_order(payload: Dict[str, Any] = Depends(read_payload), client=Depends(get_gateway)):
    try:
        request = schemas.OrderCreate.model_validate(payload)
    except ValidationError as e:
        if _amount_is_invalid(e):
            raise PaymentAPIError(
                status.HTTP_400_BAD_REQUEST, error="Valid amount is required", include_success=False
            )
        raise PaymentAPIError(
            status.HTTP_400_BAD_REQUEST,
            error="Invalid request",
            message="; ".join(f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()),
        )

    customer = request.customerDetails.model_dump() if request.customerDetails else None

    try:
        order = create_gateway_order(client, request.amount, request.currency, customer)
    except Exception as e:
        logger.exception("Error creating order")
        raise PaymentAPIError(
            status.HTTP_500_INTERNAL_SERVER_ERROR, error="Failed to create order", message=str(e)
        )

    logger.info("Order created: %s", order["id"])

    return {
        "success": True,
        "orderId": order["id"],
        "amount": order["amount"],
        "currency": order["currency"],
        "receipt": order.get("receipt"),
    }


# --- ACT 2: VERIFY PAYMENT (after checkout) ---
@router.post(
    "/verify-payment",
    status_code=status.HTTP_200_OK,
    response_model=schemas.PaymentVerificationResponse,
    openapi_extra=schemas.request_body(schemas.PaymentVerification),
)
def verify_payment(payload: Dict[str, Any] = Depends(read_payload), settings: Settings = Depends(get_settings)):
    logger.info("Payment verification request received")

    try:
        request = schemas.PaymentVerification.model_validate(payload)
    except ValidationError:
        request = None

    if request is None or not request.is_complete():
        logger.info("Invalid payment verification request - missing required fields")
        raise PaymentAPIError(
            status.HTTP_400_BAD_REQUEST,
            error="Missing required payment verification data",
            message="razorpay_order_id, razorpay_payment_id, and razorpay_signature are required",
            verified=False,
        )

    try:
        if not settings.has_secret:
            logger.error("RAZORPAY_KEY_SECRET is not configured, rejecting payment %s", request.razorpay_payment_id)

        authentic = verify_payment_signature(
            request.razorpay_order_id,
            request.razorpay_payment_id,
            request.razorpay_signature,
            settings.RAZORPAY_KEY_SECRET,
        )
    except Exception as e:
        logger.exception("Error verifying payment")
        raise PaymentAPIError(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            error="Payment verification error",
            message=str(e),
            verified=False,
        )

    if not authentic:
        logger.info("Payment verification failed: %s", request.razorpay_payment_id)
        raise PaymentAPIError(
            status.HTTP_400_BAD_REQUEST,
            error="Payment verification failed",
            message="Invalid payment signature",
            verified=False,
        )

    logger.info("Payment verified successfully: %s", request.razorpay_payment_id)

    return {
        "success": True,
        "verified": True,
        "paymentId": request.razorpay_payment_id,
        "orderId": request.razorpay_order_id,
        "message": "Payment verified successfully",
    }
