from __future__ import annotations

"""Utility functions for authentication API routes.

Routes parse their JSON bodies themselves instead of declaring a body
parameter: the rate limit guards must run before validation, and a malformed
body has to be counted as a failed attempt.
"""

import json
from typing import Dict, List, Type, TypeVar

import pydantic
from fastapi import Request

from src.core.exceptions import ValidationError

ModelT = TypeVar("ModelT", bound=pydantic.BaseModel)

BODY_FIELD = "body"
_VALUE_ERROR_PREFIX = "Value error, "


def validation_details(error: pydantic.ValidationError) -> Dict[str, List[str]]:
    """Group pydantic errors by top-level field, keeping only their messages."""
    details: Dict[str, List[str]] = {}
    for item in error.errors(include_url=False):
        field = str(item["loc"][0]) if item["loc"] else BODY_FIELD
        message = item["msg"]
        if message.startswith(_VALUE_ERROR_PREFIX):
            message = message[len(_VALUE_ERROR_PREFIX):]
        details.setdefault(field, []).append(message)
    return details


async def parse_body(request: Request, model: Type[ModelT]) -> ModelT:
    """Read the JSON body of ``request`` into ``model``.

    Raises:
        ValidationError: If the body is not JSON or does not fit ``model``
    """
    try:
        payload = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ValidationError(details={BODY_FIELD: ["Request body must be valid JSON"]}) from e

    try:
        return model.model_validate(payload)
    except pydantic.ValidationError as e:
        raise ValidationError(details=validation_details(e)) from e
