"""Exception handlers for errors raised outside the completion use case.

Model failures never reach these: the use case returns them as failure
results. What remains is malformed multipart input and programming errors.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from completion_gateway.interface.responses import error_response

logger = logging.getLogger(__name__)


def _describe(err: dict) -> str:
    # loc is ("body", "<field>") for form fields
    field = err.get("loc", ("body",))[-1]
    return f"{field}: {err.get('msg', 'invalid value')}"


async def _on_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    message = "; ".join(_describe(err) for err in exc.errors())
    logger.info("Rejected %s: %s", request.url.path, message)
    return error_response(422, message)


async def _on_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s", request.url.path)
    return error_response(500, "An unexpected error occurred. Please try again later.")


def register_error_handlers(app: FastAPI) -> None:
    """Attach the gateway's exception handlers to *app*."""
    app.add_exception_handler(RequestValidationError, _on_validation_error)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, _on_unexpected_error)
