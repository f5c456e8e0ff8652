"""Domain entities — pure, request-scoped data structures."""

from __future__ import annotations

import base64
from dataclasses import dataclass
from pathlib import Path
from typing import Union


@dataclass(frozen=True, slots=True)
class TextPart:
    """A plain-text unit of model input."""

    text: str


@dataclass(frozen=True, slots=True)
class InlineMediaPart:
    """Inline binary media with its declared media type."""

    data: bytes
    media_type: str
    filename: str | None = None

    def __post_init__(self) -> None:
        if not self.media_type:
            raise ValueError("Inline media requires a non-empty media type.")

    @property
    def base64_data(self) -> str:
        return base64.b64encode(self.data).decode("ascii")

    @property
    def data_url(self) -> str:
        return f"data:{self.media_type};base64,{self.base64_data}"


ContentPart = Union[TextPart, InlineMediaPart]


@dataclass(frozen=True, slots=True)
class CompletionRequest:
    """A prompt plus an optional attachment, ready to be sent to the model.

    ``media_first`` controls whether the attachment precedes the prompt text
    in the outgoing content sequence.
    """

    prompt: str
    media: InlineMediaPart | None = None
    media_first: bool = False

    def to_parts(self) -> tuple[ContentPart, ...]:
        """Translate the request into an ordered sequence of content parts."""
        text = TextPart(text=self.prompt)
        if self.media is None:
            return (text,)
        if self.media_first:
            return (self.media, text)
        return (text, self.media)


@dataclass(frozen=True, slots=True)
class CompletionResult:
    """Either the model's answer or an error description, never both."""

    text: str | None = None
    error: str | None = None

    def __post_init__(self) -> None:
        if (self.text is None) == (self.error is None):
            raise ValueError("Exactly one of text or error must be set.")

    @classmethod
    def success(cls, text: str) -> CompletionResult:
        return cls(text=text)

    @classmethod
    def failure(cls, error: str) -> CompletionResult:
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True, slots=True)
class TemporaryUpload:
    """An uploaded file persisted to local storage for one request."""

    path: Path
    media_type: str
    filename: str | None = None
