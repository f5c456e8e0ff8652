"""Port: model capability — defined by the domain, implemented by infrastructure."""

from __future__ import annotations

from typing import Protocol, Sequence

from completion_gateway.domain.entities import ContentPart


class ModelCapability(Protocol):
    """Abstract contract for a remote generative model."""

    async def generate(self, parts: Sequence[ContentPart]) -> str:
        """Send the ordered content parts and return the generated text."""
        ...

    async def close(self) -> None:
        """Release underlying HTTP resources."""
        ...
