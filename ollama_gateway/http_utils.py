"""HTTP helpers for gateway route handlers."""

import json
from typing import Any, TypeVar

from fastapi.responses import JSONResponse
from pydantic import BaseModel, ValidationError

from .errors import MalformedBody

ModelT = TypeVar("ModelT", bound=BaseModel)


def error_response(status_code: int, message: str) -> JSONResponse:
    """Stable gateway error envelope."""
    return JSONResponse(status_code=status_code, content={"error": message})


def parse_json_object(body: bytes) -> dict[str, Any]:
    # An empty body reads as an empty object.
    if not body:
        return {}
    try:
        payload = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise MalformedBody(f"Invalid JSON body: {e}") from e
    if not isinstance(payload, dict):
        raise MalformedBody("JSON body must be an object")
    return payload


def parse_body(body: bytes, model: type[ModelT]) -> ModelT:
    """Parse raw request bytes into ``model`` or raise :class:`MalformedBody`."""
    payload = parse_json_object(body)
    try:
        return model.model_validate(payload)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or 'body'}: {err['msg']}" for err in e.errors()
        )
        raise MalformedBody(f"Invalid request body: {problems}") from e
