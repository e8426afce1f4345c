from typing import Any, Dict, Optional
from fastapi import status


class ConfigurationError(RuntimeError):
    """Raised at startup when the environment can't produce a working app."""


class PaymentAPIError(Exception):
    """An error that ends the request with a flat JSON body.

    `success` is always false; `extra` fields (like `verified`) are merged
    into the body before `error`/`message`.
    """

    def __init__(
        self,
        status_code: int,
        error: str,
        message: Optional[str] = None,
        include_success: bool = True,
        **extra: Any,
    ):
        super().__init__(message or error)
        self.status_code = status_code
        self.error = error
        self.message = message
        self.include_success = include_success
        self.extra = extra

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {}
        if self.include_success:
            body["success"] = False
        body.update(self.extra)
        body["error"] = self.error
        if self.message is not None:
            body["message"] = self.message
        return body


class InvalidJSONError(PaymentAPIError):
    def __init__(self):
        super().__init__(
            status.HTTP_400_BAD_REQUEST,
            error="Invalid JSON format",
            message="Request body contains malformed JSON",
        )
