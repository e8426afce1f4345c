import math
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Any, Dict, Optional, Type


#------------------------HEALTH------------------------
class HealthResponse(BaseModel):
    message: str
    status: str
    timestamp: str


#------------------------ORDER------------------------
class CustomerDetails(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)    # phone numbers often arrive as numbers

    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None


class OrderCreate(BaseModel):
    amount: float = Field(gt=0, allow_inf_nan=False)        # in rupees
    currency: str = "INR"
    customerDetails: Optional[CustomerDetails] = None

    @field_validator("amount")
    @classmethod
    def fits_in_paise(cls, v: float) -> float:
        if not math.isfinite(v * 100):
            raise ValueError("amount is too large")
        return v


class OrderResponse(BaseModel):
    success: bool = True
    orderId: str
    amount: int                                              # in paise
    currency: str
    receipt: Optional[str] = None


#------------------------PAYMENT------------------------
class PaymentVerification(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    razorpay_order_id: Optional[str] = None
    razorpay_payment_id: Optional[str] = None
    razorpay_signature: Optional[str] = None

    def is_complete(self) -> bool:
        return bool(self.razorpay_order_id and self.razorpay_payment_id and self.razorpay_signature)


class PaymentVerificationResponse(BaseModel):
    success: bool = True
    verified: bool = True
    paymentId: str
    orderId: str
    message: str


#------------------------OPENAPI------------------------
def _inline_refs(node: Any, defs: Dict[str, Any]) -> Any:
    if isinstance(node, dict):
        if "$ref" in node:
            return _inline_refs(defs[node["$ref"].split("/")[-1]], defs)
        return {k: _inline_refs(v, defs) for k, v in node.items()}
    if isinstance(node, list):
        return [_inline_refs(v, defs) for v in node]
    return node


def request_body(model: Type[BaseModel]) -> Dict[str, Any]:
    """openapi_extra for routes that read JSON or form bodies themselves."""
    schema = model.model_json_schema()
    schema = _inline_refs(schema, schema.pop("$defs", {}))

    return {
        "requestBody": {
            "required": True,
            "content": {
                "application/json": {"schema": schema},
                "application/x-www-form-urlencoded": {"schema": schema},
            },
        }
    }
