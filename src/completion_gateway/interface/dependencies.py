"""FastAPI dependency injection wiring."""

from __future__ import annotations

from pathlib import Path

from fastapi import Depends, Request

from completion_gateway.domain.ports.model_capability import ModelCapability
from completion_gateway.infrastructure.config import Settings, get_settings
from completion_gateway.infrastructure.gemini_adapter import GeminiAdapter
from completion_gateway.infrastructure.openai_adapter import OpenAIAdapter
from completion_gateway.services.complete import CompleteUseCase


def build_capability(settings: Settings) -> ModelCapability:
    """Construct the model adapter selected by ``settings.provider``."""
    if settings.provider == "openai":
        assert settings.openai_api_key is not None
        return OpenAIAdapter(
            api_key=settings.openai_api_key.get_secret_value(),
            model=settings.openai_model,
            timeout_seconds=settings.request_timeout_seconds,
        )
    assert settings.gemini_api_key is not None
    return GeminiAdapter(
        api_key=settings.gemini_api_key.get_secret_value(),
        model=settings.gemini_model,
        timeout_seconds=settings.request_timeout_seconds,
    )


def get_capability(request: Request) -> ModelCapability:
    """Return the process-wide model client created by the app lifespan."""
    capability = getattr(request.app.state, "capability", None)
    assert capability is not None, "application lifespan has not started"
    return capability


def get_upload_dir() -> Path:
    return get_settings().upload_dir


def get_use_case(
    capability: ModelCapability = Depends(get_capability),
) -> CompleteUseCase:
    return CompleteUseCase(capability=capability)
