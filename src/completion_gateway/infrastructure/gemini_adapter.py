"""Gemini adapter — implements the ModelCapability port."""

from __future__ import annotations

import logging
from typing import Sequence

from google import genai
from google.genai import errors, types

from completion_gateway.domain.entities import ContentPart, InlineMediaPart
from completion_gateway.domain.exceptions import CapabilityInvocationError

logger = logging.getLogger(__name__)


def _to_gemini_part(part: ContentPart) -> types.Part:
    if isinstance(part, InlineMediaPart):
        return types.Part.from_bytes(data=part.data, mime_type=part.media_type)
    return types.Part.from_text(text=part.text)


class GeminiAdapter:
    """Concrete ``ModelCapability`` backed by the Gemini ``generateContent`` API."""

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-2.5-flash",
        *,
        timeout_seconds: float | None = None,
        client: genai.Client | None = None,
    ) -> None:
        if client is None:
            http_options = None
            if timeout_seconds is not None:
                http_options = types.HttpOptions(timeout=int(timeout_seconds * 1000))
            client = genai.Client(api_key=api_key, http_options=http_options)
        self._client = client
        self._model = model

    @property
    def model(self) -> str:
        return self._model

    async def generate(self, parts: Sequence[ContentPart]) -> str:
        """Send the content parts as a single user turn and return the text."""
        contents = [
            types.Content(role="user", parts=[_to_gemini_part(p) for p in parts])
        ]
        try:
            response = await self._client.aio.models.generate_content(
                model=self._model,
                contents=contents,
            )
        except errors.APIError as exc:
            logger.error("Gemini API error (code=%s): %s", exc.code, exc)
            raise CapabilityInvocationError(str(exc)) from exc
        except Exception as exc:
            logger.error("Gemini call failed (%s): %s", type(exc).__name__, exc)
            raise CapabilityInvocationError(str(exc)) from exc

        text = response.text
        if not text:
            raise CapabilityInvocationError("Model returned an empty response.")
        return text

    async def close(self) -> None:
        """Release underlying HTTP resources."""
        await self._client.aio.aclose()
