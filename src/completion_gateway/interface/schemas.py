"""Pydantic request / response DTOs for the API boundary."""

from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel, ValidationError, field_validator


class TextCompletionRequest(BaseModel):
    """Request body for ``POST /generate-text``.

    Any JSON value is accepted for ``prompt``; non-string values are
    forwarded as their JSON text.
    """

    prompt: str | None = None

    @field_validator("prompt", mode="before")
    @classmethod
    def _stringify(cls, v: Any) -> str | None:
        if v is None or isinstance(v, str):
            return v
        return json.dumps(v)

    @classmethod
    def from_raw(cls, raw: bytes) -> TextCompletionRequest:
        """Parse a raw body, treating anything but a JSON object as no prompt."""
        try:
            return cls.model_validate_json(raw or b"{}")
        except ValidationError:
            return cls()


class CompletionResponse(BaseModel):
    """Successful response from every generation route."""

    result: str


class ErrorResponse(BaseModel):
    """Error envelope returned on all failure paths."""

    error: str
