"""Shared fixtures for Completion Gateway tests."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

import pytest
from fastapi.testclient import TestClient

from completion_gateway.domain.entities import ContentPart
from completion_gateway.infrastructure.config import get_settings
from completion_gateway.interface.app import create_app
from completion_gateway.interface.dependencies import get_capability, get_upload_dir

PNG_BYTES = (
    b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR\x00\x00\x00\x01\x00\x00\x00\x01"
    b"\x08\x06\x00\x00\x00\x1f\x15\xc4\x89\x00\x00\x00\rIDATx\x9cc\xf8\x0f"
    b"\x00\x00\x01\x01\x00\x05\x18\xd8N\x00\x00\x00\x00IEND\xaeB`\x82"
)


class StubCapability:
    """Deterministic stand-in for the remote model."""

    def __init__(self, reply: str = "hi there", error: Exception | None = None) -> None:
        self.reply = reply
        self.error = error
        self.calls: list[tuple[ContentPart, ...]] = []
        self.seen_files: list[list[Path]] = []
        self.upload_dir: Path | None = None
        self.closed = False

    async def generate(self, parts: Sequence[ContentPart]) -> str:
        self.calls.append(tuple(parts))
        if self.upload_dir is not None and self.upload_dir.exists():
            self.seen_files.append(list(self.upload_dir.iterdir()))
        if self.error is not None:
            raise self.error
        return self.reply

    async def close(self) -> None:
        self.closed = True


@pytest.fixture(autouse=True)
def _env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    monkeypatch.setenv("PROVIDER", "gemini")
    monkeypatch.setenv("GEMINI_API_KEY", "test-key")
    monkeypatch.setenv("UPLOAD_DIR", str(tmp_path / "uploads"))
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def upload_dir(tmp_path: Path) -> Path:
    return tmp_path / "uploads"


@pytest.fixture
def capability(upload_dir: Path) -> StubCapability:
    stub = StubCapability()
    stub.upload_dir = upload_dir
    return stub


@pytest.fixture
def client(capability: StubCapability, upload_dir: Path) -> TestClient:
    app = create_app()
    app.dependency_overrides[get_capability] = lambda: capability
    app.dependency_overrides[get_upload_dir] = lambda: upload_dir
    return TestClient(app)
