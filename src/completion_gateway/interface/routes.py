"""API routes — thin controllers that delegate to the use case.

Every upload is held in a scoped temporary file that is removed before the
response is built, whether the model call succeeded or not.
"""

from __future__ import annotations

from pathlib import Path

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile
from fastapi.responses import JSONResponse

from completion_gateway.infrastructure.upload_storage import temporary_upload
from completion_gateway.interface.dependencies import get_upload_dir, get_use_case
from completion_gateway.interface.responses import result_response
from completion_gateway.interface.schemas import (
    CompletionResponse,
    ErrorResponse,
    TextCompletionRequest,
)
from completion_gateway.services.complete import CompleteUseCase

router = APIRouter()

_RESPONSES = {
    200: {"model": CompletionResponse},
    500: {"model": ErrorResponse, "description": "Model provider error"},
}
_UPLOAD_RESPONSES = {
    **_RESPONSES,
    422: {"model": ErrorResponse, "description": "Missing file field"},
}


@router.post(
    "/generate-text",
    responses=_RESPONSES,
    openapi_extra={
        "requestBody": {
            "content": {
                "application/json": {"schema": TextCompletionRequest.model_json_schema()}
            }
        }
    },
)
async def generate_text(
    request: Request,
    use_case: CompleteUseCase = Depends(get_use_case),
) -> JSONResponse:
    """Generate text from a prompt. The body is never rejected."""
    body = TextCompletionRequest.from_raw(await request.body())
    return result_response(await use_case.complete_text(body.prompt))


@router.post("/generate-from-image", responses=_UPLOAD_RESPONSES)
async def generate_from_image(
    image: UploadFile = File(...),
    prompt: str | None = Form(None),
    use_case: CompleteUseCase = Depends(get_use_case),
    upload_dir: Path = Depends(get_upload_dir),
) -> JSONResponse:
    """Describe an uploaded image, optionally guided by a prompt."""
    async with temporary_upload(image, upload_dir) as upload:
        result = await use_case.complete_image(upload, prompt)
    return result_response(result)


@router.post("/generate-from-document", responses=_UPLOAD_RESPONSES)
async def generate_from_document(
    document: UploadFile = File(...),
    use_case: CompleteUseCase = Depends(get_use_case),
    upload_dir: Path = Depends(get_upload_dir),
) -> JSONResponse:
    """Summarise an uploaded document of any media type."""
    async with temporary_upload(document, upload_dir) as upload:
        result = await use_case.complete_document(upload)
    return result_response(result)


@router.post("/generate-from-audio", responses=_UPLOAD_RESPONSES)
async def generate_from_audio(
    audio: UploadFile = File(...),
    use_case: CompleteUseCase = Depends(get_use_case),
    upload_dir: Path = Depends(get_upload_dir),
) -> JSONResponse:
    """Summarise an uploaded audio clip."""
    async with temporary_upload(audio, upload_dir) as upload:
        result = await use_case.complete_audio(upload)
    return result_response(result)


@router.get("/health", include_in_schema=False)
async def health() -> dict[str, str]:
    return {"status": "ok"}
