"""Rendering of completion outcomes as JSON responses."""

from __future__ import annotations

from fastapi.responses import JSONResponse

from completion_gateway.domain.entities import CompletionResult
from completion_gateway.interface.schemas import CompletionResponse, ErrorResponse


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump(),
    )


def result_response(result: CompletionResult) -> JSONResponse:
    """``200 {"result": ...}`` on success, ``500 {"error": ...}`` otherwise."""
    if result.ok:
        assert result.text is not None
        return JSONResponse(content=CompletionResponse(result=result.text).model_dump())
    assert result.error is not None
    return error_response(500, result.error)
