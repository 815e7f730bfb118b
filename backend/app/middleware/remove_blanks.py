"""
Shopfront Backend: Blank-Field Stripping
=========================================

What:  Removes empty-string fields from a JSON request body before it is
       validated and written, so a form that submits `""` for an untouched
       input leaves the stored value alone.

    {"product": {"name": "", "category": "tools"}}
        → {"product": {"category": "tools"}}

How:   `remove_blank_fields` is the pure transformation. `blank_stripped_body`
       wraps it as a FastAPI dependency: the route declares it after
       `require_token`, and receives the stripped body as a dict.

Only dict values are recursed into. Lists, numbers, booleans, None and
non-empty strings are kept as they are.
"""

import json
from typing import Any, Dict, Mapping

from fastapi import Request
from fastapi.exceptions import RequestValidationError


def remove_blank_fields(payload: Mapping[str, Any]) -> Dict[str, Any]:
    """Return a copy of `payload` without keys whose value is an empty string, at any depth."""
    stripped: Dict[str, Any] = {}
    for key, value in payload.items():
        if isinstance(value, str) and value == "":
            continue
        if isinstance(value, Mapping):
            value = remove_blank_fields(value)
        stripped[key] = value
    return stripped


async def blank_stripped_body(request: Request) -> Dict[str, Any]:
    """
    Dependency returning the request's JSON object body with blanks removed.

    A body that is not valid JSON, or is not a JSON object, is reported as a
    422 through FastAPI's RequestValidationError.
    """
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise RequestValidationError(
            [{"type": "json_invalid", "loc": ("body",), "msg": "Request body is not valid JSON", "input": None}]
        )
    if not isinstance(body, dict):
        raise RequestValidationError(
            [{"type": "dict_type", "loc": ("body",), "msg": "Request body must be a JSON object", "input": body}]
        )
    return remove_blank_fields(body)
