"""Configuration helpers for the server and CLI."""

from __future__ import annotations

import os
from functools import lru_cache

from ..agents.gemini import DEFAULT_IMAGE_MODEL, DEFAULT_TEXT_MODEL, GeminiSettings


@lru_cache(maxsize=1)
def get_settings() -> GeminiSettings:
    """Return Gemini settings resolved from the environment (cached)."""

    return GeminiSettings(
        api_key=os.environ.get("OKETING_API_KEY") or os.environ.get("GOOGLE_API_KEY"),
        text_model=os.environ.get("OKETING_TEXT_MODEL", DEFAULT_TEXT_MODEL),
        image_model=os.environ.get("OKETING_IMAGE_MODEL", DEFAULT_IMAGE_MODEL),
    )
