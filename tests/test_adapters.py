"""Provider adapters translate content parts into each SDK's wire shape."""

from __future__ import annotations

import logging
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from google.genai import errors, types

from completion_gateway.domain.entities import InlineMediaPart, TextPart
from completion_gateway.domain.exceptions import CapabilityInvocationError
from completion_gateway.infrastructure import gemini_adapter, openai_adapter
from completion_gateway.infrastructure.gemini_adapter import GeminiAdapter
from completion_gateway.infrastructure.openai_adapter import OpenAIAdapter

IMAGE = InlineMediaPart(data=b"\x89PNG", media_type="image/png", filename="a.png")


def _gemini(response=None, error=None) -> tuple[GeminiAdapter, AsyncMock]:
    client = MagicMock()
    client.aio.models.generate_content = AsyncMock(return_value=response, side_effect=error)
    client.aio.aclose = AsyncMock()
    return GeminiAdapter(api_key="unused", client=client), client


def _openai(content="answer", error=None) -> tuple[OpenAIAdapter, MagicMock]:
    client = MagicMock()
    response = SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content=content))]
    )
    client.chat.completions.create = AsyncMock(return_value=response, side_effect=error)
    client.close = AsyncMock()
    return OpenAIAdapter(api_key="unused", client=client), client


class TestGeminiAdapter:
    @pytest.mark.asyncio
    async def test_sends_parts_in_one_user_turn(self):
        adapter, client = _gemini(SimpleNamespace(text="a cat"))

        result = await adapter.generate([IMAGE, TextPart(text="Describe the image")])

        assert result == "a cat"
        kwargs = client.aio.models.generate_content.await_args.kwargs
        assert kwargs["model"] == "gemini-2.5-flash"
        (content,) = kwargs["contents"]
        assert content.role == "user"
        media, text = content.parts
        assert media.inline_data.mime_type == "image/png"
        assert media.inline_data.data == b"\x89PNG"
        assert text.text == "Describe the image"

    @pytest.mark.asyncio
    async def test_api_error_is_wrapped(self):
        api_error = errors.ClientError(
            429,
            {"error": {"code": 429, "message": "quota exhausted", "status": "RESOURCE_EXHAUSTED"}},
        )
        adapter, _ = _gemini(error=api_error)

        with pytest.raises(CapabilityInvocationError, match="quota exhausted"):
            await adapter.generate([TextPart(text="hi")])

    @pytest.mark.asyncio
    async def test_network_error_is_wrapped_and_logged(self, caplog):
        adapter, _ = _gemini(error=ConnectionError("connection reset"))
        caplog.set_level(logging.ERROR, logger=gemini_adapter.__name__)

        with pytest.raises(CapabilityInvocationError, match="connection reset"):
            await adapter.generate([TextPart(text="hi")])

        assert any("ConnectionError" in r.getMessage() for r in caplog.records)

    @pytest.mark.asyncio
    async def test_empty_response_is_an_error(self):
        adapter, _ = _gemini(SimpleNamespace(text=None))

        with pytest.raises(CapabilityInvocationError, match="empty response"):
            await adapter.generate([TextPart(text="hi")])

    @pytest.mark.asyncio
    async def test_close(self):
        adapter, client = _gemini()

        await adapter.close()

        client.aio.aclose.assert_awaited_once()


class TestOpenAIAdapter:
    @pytest.mark.asyncio
    async def test_maps_media_types(self):
        adapter, client = _openai()
        pdf = InlineMediaPart(data=b"%PDF", media_type="application/pdf", filename="r.pdf")
        wav = InlineMediaPart(data=b"RIFF", media_type="audio/wav")

        result = await adapter.generate([TextPart(text="Summarize"), IMAGE, pdf, wav])

        assert result == "answer"
        kwargs = client.chat.completions.create.await_args.kwargs
        assert kwargs["model"] == "gpt-4o-mini"
        (message,) = kwargs["messages"]
        assert message["role"] == "user"
        assert message["content"] == [
            {"type": "text", "text": "Summarize"},
            {"type": "image_url", "image_url": {"url": IMAGE.data_url}},
            {"type": "file", "file": {"filename": "r.pdf", "file_data": pdf.data_url}},
            {"type": "input_audio", "input_audio": {"data": wav.base64_data, "format": "wav"}},
        ]

    @pytest.mark.asyncio
    async def test_unsupported_audio_is_rejected_before_call(self):
        adapter, client = _openai()
        ogg = InlineMediaPart(data=b"OggS", media_type="audio/ogg")

        with pytest.raises(CapabilityInvocationError, match="audio/ogg"):
            await adapter.generate([TextPart(text="Summarize this audio"), ogg])

        client.chat.completions.create.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_sdk_error_is_wrapped_and_logged(self, caplog):
        adapter, _ = _openai(error=RuntimeError("upstream 503"))
        caplog.set_level(logging.ERROR, logger=openai_adapter.__name__)

        with pytest.raises(CapabilityInvocationError, match="upstream 503"):
            await adapter.generate([TextPart(text="hi")])

        assert any("upstream 503" in r.getMessage() for r in caplog.records)

    @pytest.mark.asyncio
    async def test_empty_response_is_an_error(self):
        adapter, _ = _openai(content="")

        with pytest.raises(CapabilityInvocationError, match="empty response"):
            await adapter.generate([TextPart(text="hi")])


class TestClientConstruction:
    def test_gemini_timeout_becomes_http_options(self, monkeypatch):
        factory = MagicMock()
        monkeypatch.setattr(gemini_adapter.genai, "Client", factory)

        GeminiAdapter(api_key="key", timeout_seconds=2.5)

        factory.assert_called_once_with(
            api_key="key", http_options=types.HttpOptions(timeout=2500)
        )

    def test_gemini_without_timeout(self, monkeypatch):
        factory = MagicMock()
        monkeypatch.setattr(gemini_adapter.genai, "Client", factory)

        GeminiAdapter(api_key="key")

        factory.assert_called_once_with(api_key="key", http_options=None)

    def test_openai_timeout_and_no_retries(self, monkeypatch):
        factory = MagicMock()
        monkeypatch.setattr(openai_adapter, "AsyncOpenAI", factory)

        OpenAIAdapter(api_key="sk", timeout_seconds=2.5)

        factory.assert_called_once_with(api_key="sk", max_retries=0, timeout=2.5)

    def test_openai_without_timeout(self, monkeypatch):
        factory = MagicMock()
        monkeypatch.setattr(openai_adapter, "AsyncOpenAI", factory)

        OpenAIAdapter(api_key="sk")

        factory.assert_called_once_with(api_key="sk", max_retries=0)
