"""Gemini image editing for product photos."""

from __future__ import annotations

import base64
import binascii
import logging
import re
from typing import Any, Optional, Tuple

from google import genai
from google.genai import types

from .gemini import (
    GeminiSettings,
    InvalidImageFormatError,
    create_client,
    generate_gemini_content,
)

LOGGER = logging.getLogger(__name__)
DATA_URI_PATTERN = re.compile(r"data:([^;]+);base64,(.+)")
ENHANCE_INSTRUCTION = (
    "이 제품 이미지의 조명과 선명도를 전문 쇼핑몰 수준으로 보정해 주세요. "
    "배경을 정리하고 제품이 돋보이도록 개선해 주세요. "
    "보정된 이미지를 응답으로 보내주세요."
)


def parse_data_uri(data_uri: str) -> Tuple[str, bytes]:
    """Split a ``data:<mime>;base64,<payload>`` URI into MIME type and bytes."""

    match = DATA_URI_PATTERN.fullmatch(data_uri)
    if not match:
        raise InvalidImageFormatError("Invalid image format: expected data:<mime>;base64,<data>.")
    mime_type, payload = match.groups()
    payload = payload.replace("-", "+").replace("_", "/")
    payload += "=" * (-len(payload) % 4)
    try:
        return mime_type, base64.b64decode(payload, validate=True)
    except binascii.Error as exc:
        raise InvalidImageFormatError(f"Invalid image format: {exc}") from exc


def to_data_uri(mime_type: str, data: bytes) -> str:
    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{mime_type};base64,{encoded}"


async def enhance_product_image(
    data_uri: str,
    *,
    client: Optional[genai.Client] = None,
    settings: Optional[GeminiSettings] = None,
) -> str:
    """Return a studio-quality version of the image, or the input unchanged.

    The input is validated before any client is created, so a malformed URI
    never reaches the network. When Gemini answers without an image part the
    original URI is returned as-is.
    """

    mime_type, image_bytes = parse_data_uri(data_uri)
    settings = settings or GeminiSettings()
    client = client or create_client(settings)
    response = await generate_gemini_content(
        client,
        [
            types.Part.from_bytes(data=image_bytes, mime_type=mime_type),
            types.Part.from_text(text=ENHANCE_INSTRUCTION),
        ],
        model=settings.image_model,
        response_modalities=["TEXT", "IMAGE"],
    )

    enhanced = _first_inline_image(response, fallback_mime_type=mime_type)
    if enhanced is None:
        LOGGER.info("No image part in Gemini response; returning original image.")
        return data_uri
    return enhanced


def _first_inline_image(response: Any, *, fallback_mime_type: str) -> Optional[str]:
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return None
    content = getattr(candidates[0], "content", None)
    for part in getattr(content, "parts", None) or []:
        inline = getattr(part, "inline_data", None)
        if inline:
            mime_type = getattr(inline, "mime_type", None) or fallback_mime_type
            return to_data_uri(mime_type, getattr(inline, "data", None) or b"")
    return None
