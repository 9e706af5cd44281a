# wildseries/utils/forms.py
"""
Late form binding.

Most handlers let FastAPI validate the body before they run. Edit handlers
must authorize first and only then look at the submission, so they bind the
body themselves with `bind_form`, which raises the same 422 a declared body
parameter would.
"""

import json
from typing import Type, TypeVar

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ValidationError

M = TypeVar("M", bound=BaseModel)


async def bind_form(request: Request, model: Type[M]) -> M:
    """Validate the JSON body of `request` against `model` (empty body → `{}`)."""
    raw = await request.body()
    try:
        data = json.loads(raw) if raw.strip() else {}
    except ValueError:
        raise RequestValidationError(
            [{"type": "json_invalid", "loc": ("body",), "msg": "JSON decode error", "input": {}}]
        )
    try:
        return model.model_validate(data)
    except ValidationError as e:
        errors = [{**err, "loc": ("body", *err.get("loc", ()))} for err in e.errors(include_url=False)]
        raise RequestValidationError(errors)
