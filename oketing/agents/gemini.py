"""Utility wrapper around the google-genai client."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional, Sequence, Union

from google import genai
from google.genai import types

DEFAULT_TEXT_MODEL = "gemini-3-flash-preview"
DEFAULT_IMAGE_MODEL = "gemini-2.5-flash-image"
LOGGER = logging.getLogger(__name__)


class GenerationError(RuntimeError):
    """Base class for failures raised locally by the content generators."""


class InvalidImageFormatError(GenerationError, ValueError):
    """Raised when an image is not a ``data:<mime>;base64,<payload>`` URI."""


class ResponseParseError(GenerationError, ValueError):
    """Raised when Gemini returns text that does not fit the requested shape."""

    def __init__(self, message: str, raw_text: str = "") -> None:
        super().__init__(message)
        self.raw_text = raw_text


@dataclass(frozen=True)
class GeminiSettings:
    """Connection settings shared by every generation call."""

    api_key: Optional[str] = None
    text_model: str = DEFAULT_TEXT_MODEL
    image_model: str = DEFAULT_IMAGE_MODEL


def create_client(settings: GeminiSettings) -> genai.Client:
    """Build a fresh Gemini client from explicit settings.

    A missing key is not checked here; the SDK raises when it cannot
    authenticate and that error reaches the caller untouched.
    """

    return genai.Client(api_key=settings.api_key)


async def generate_gemini_content(
    client: genai.Client,
    contents: Union[str, Sequence[Any]],
    *,
    model: str,
    system_instruction: Optional[str] = None,
    response_mime_type: Optional[str] = None,
    response_schema: Optional[types.Schema] = None,
    response_modalities: Optional[Sequence[str]] = None,
) -> types.GenerateContentResponse:
    """Send a single request to Gemini and return the raw response."""

    config = types.GenerateContentConfig(
        system_instruction=system_instruction,
        response_mime_type=response_mime_type,
        response_schema=response_schema,
        response_modalities=list(response_modalities) if response_modalities else None,
    )
    LOGGER.debug(
        "Gemini request (%s): mime=%s schema=%s",
        model,
        response_mime_type,
        response_schema is not None,
    )
    return await client.aio.models.generate_content(
        model=model,
        contents=contents,
        config=config,
    )


def response_text(response: Any) -> str:
    """Return the response text, or an empty string when Gemini sent none."""

    text = getattr(response, "text", None)
    return text or ""


def total_token_count(response: Any) -> int:
    usage = getattr(response, "usage_metadata", None)
    count = getattr(usage, "total_token_count", None) if usage is not None else None
    return count or 0
