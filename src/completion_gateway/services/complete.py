"""Completion use case — shapes each input modality into one model call.

The use case depends only on the :class:`ModelCapability` port. It never
retries: every request makes exactly one attempt, and the outcome is a
:class:`CompletionResult` holding either the text or the error message.
"""

from __future__ import annotations

import asyncio
import logging

from completion_gateway.domain.entities import (
    CompletionRequest,
    CompletionResult,
    InlineMediaPart,
    TemporaryUpload,
)
from completion_gateway.domain.exceptions import CapabilityInvocationError
from completion_gateway.domain.ports.model_capability import ModelCapability

logger = logging.getLogger(__name__)

# ── Route defaults ──────────────────────────────────────────────────────────

DEFAULT_IMAGE_PROMPT = "Describe the image"
DOCUMENT_PROMPT = "Summarize this document"
AUDIO_PROMPT = "Summarize this audio"
IMAGE_MEDIA_TYPE = "image/png"

# ── Use case ────────────────────────────────────────────────────────────────


class CompleteUseCase:
    """Turns text, image, document and audio inputs into model completions.

    Parameters
    ----------
    capability:
        Adapter that forwards content parts to the remote model.
    """

    def __init__(self, capability: ModelCapability) -> None:
        self._capability = capability

    async def complete_text(self, prompt: str | None) -> CompletionResult:
        """Forward a bare prompt. A missing prompt is sent as empty text."""
        return await self.execute(CompletionRequest(prompt=prompt or ""))

    async def complete_image(
        self, upload: TemporaryUpload, prompt: str | None = None
    ) -> CompletionResult:
        """Describe an image; the media type is always sent as PNG."""
        media = await _load(upload, media_type=IMAGE_MEDIA_TYPE)
        request = CompletionRequest(
            prompt=prompt or DEFAULT_IMAGE_PROMPT,
            media=media,
            media_first=True,
        )
        return await self.execute(request)

    async def complete_document(self, upload: TemporaryUpload) -> CompletionResult:
        media = await _load(upload, media_type=upload.media_type)
        return await self.execute(CompletionRequest(prompt=DOCUMENT_PROMPT, media=media))

    async def complete_audio(self, upload: TemporaryUpload) -> CompletionResult:
        media = await _load(upload, media_type=upload.media_type)
        return await self.execute(CompletionRequest(prompt=AUDIO_PROMPT, media=media))

    async def execute(self, request: CompletionRequest) -> CompletionResult:
        """Make the single capability call for *request*.

        Any failure is converted here into a failure result carrying the
        thrown message.
        """
        parts = request.to_parts()
        logger.debug(
            "Invoking model: %d part(s), media_type=%s",
            len(parts),
            request.media.media_type if request.media else None,
        )
        try:
            text = await self._capability.generate(parts)
        except CapabilityInvocationError as exc:
            logger.warning("Model call failed: %s", exc)
            return CompletionResult.failure(str(exc))
        except Exception as exc:
            logger.warning("Model call failed (%s): %s", type(exc).__name__, exc)
            return CompletionResult.failure(str(exc))
        return CompletionResult.success(text)


async def _load(upload: TemporaryUpload, *, media_type: str) -> InlineMediaPart:
    data = await asyncio.to_thread(upload.path.read_bytes)
    return InlineMediaPart(data=data, media_type=media_type, filename=upload.filename)
