"""OpenAI adapter — implements the ModelCapability port."""

from __future__ import annotations

import logging
from typing import Any, Sequence

from openai import AsyncOpenAI, AuthenticationError, RateLimitError

from completion_gateway.domain.entities import ContentPart, InlineMediaPart
from completion_gateway.domain.exceptions import CapabilityInvocationError

logger = logging.getLogger(__name__)

_AUDIO_FORMATS = {
    "audio/wav": "wav",
    "audio/x-wav": "wav",
    "audio/wave": "wav",
    "audio/mpeg": "mp3",
    "audio/mp3": "mp3",
}


def _to_openai_part(part: ContentPart) -> dict[str, Any]:
    if not isinstance(part, InlineMediaPart):
        return {"type": "text", "text": part.text}

    if part.media_type.startswith("image/"):
        return {"type": "image_url", "image_url": {"url": part.data_url}}

    if part.media_type.startswith("audio/"):
        fmt = _AUDIO_FORMATS.get(part.media_type)
        if fmt is None:
            raise CapabilityInvocationError(
                f"Unsupported audio media type for OpenAI: '{part.media_type}'."
            )
        return {
            "type": "input_audio",
            "input_audio": {"data": part.base64_data, "format": fmt},
        }

    return {
        "type": "file",
        "file": {"filename": part.filename or "upload", "file_data": part.data_url},
    }


class OpenAIAdapter:
    """Concrete ``ModelCapability`` backed by the OpenAI chat-completions API."""

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        *,
        timeout_seconds: float | None = None,
        client: AsyncOpenAI | None = None,
    ) -> None:
        if client is None:
            kwargs: dict[str, Any] = {"api_key": api_key, "max_retries": 0}
            if timeout_seconds is not None:
                kwargs["timeout"] = timeout_seconds
            client = AsyncOpenAI(**kwargs)
        self._client = client
        self._model = model

    @property
    def model(self) -> str:
        return self._model

    async def generate(self, parts: Sequence[ContentPart]) -> str:
        """Send the content parts as one user message and return the completion text."""
        content = [_to_openai_part(p) for p in parts]
        try:
            response = await self._client.chat.completions.create(
                model=self._model,
                messages=[{"role": "user", "content": content}],  # type: ignore[list-item]
            )
        except AuthenticationError as exc:
            logger.error("OpenAI AuthenticationError: %s", exc)
            raise CapabilityInvocationError(str(exc)) from exc
        except RateLimitError as exc:
            logger.error("OpenAI RateLimitError: %s", exc)
            raise CapabilityInvocationError(str(exc)) from exc
        except Exception as exc:
            logger.error("OpenAI call failed (%s): %s", type(exc).__name__, exc)
            raise CapabilityInvocationError(str(exc)) from exc

        content_text = response.choices[0].message.content
        if not content_text:
            raise CapabilityInvocationError("Model returned an empty response.")
        return content_text

    async def close(self) -> None:
        """Release underlying HTTP resources."""
        await self._client.close()
