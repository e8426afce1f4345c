import json
import logging
from typing import Any, Dict

from fastapi import Request

from .errors import InvalidJSONError

logger = logging.getLogger(__name__)

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


def media_type(request: Request) -> str:
    return request.headers.get("content-type", "").split(";")[0].strip().lower()


def is_json(request: Request) -> bool:
    ct = media_type(request)
    return ct == "application/json" or ct.endswith("+json")


async def parse_json_body(request: Request) -> Any:
    """Decoded JSON body, None when empty. Bad JSON raises InvalidJSONError."""
    raw = await request.body()
    if not raw.strip():
        return None

    try:
        return json.loads(raw)
    except ValueError as e:
        logger.warning("JSON parse error on %s %s: %s", request.method, request.url, e)
        raise InvalidJSONError()


async def read_payload(request: Request) -> Dict[str, Any]:
    """Body as a dict: JSON or url-encoded form (gateway checkout redirects post forms).

    Other content types, empty bodies and JSON that isn't an object come back as {}.
    """
    if media_type(request) == FORM_CONTENT_TYPE:
        form = await request.form()
        return {key: value for key, value in form.items()}

    if not is_json(request):
        return {}

    payload = await parse_json_body(request)
    if not isinstance(payload, dict):
        return {}
    return payload
