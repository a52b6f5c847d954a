from __future__ import annotations

from types import SimpleNamespace
from typing import Any, Optional
from unittest.mock import AsyncMock, MagicMock

import pytest

from oketing.agents import GeminiSettings, Product


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def product() -> Product:
    return Product(id="p1", name="Wireless Earbuds", description="Noise-cancelling, 30h battery")


@pytest.fixture
def settings() -> GeminiSettings:
    return GeminiSettings(api_key="test-key", text_model="text-model", image_model="image-model")


def text_response(text: Optional[str], total_tokens: Optional[int] = None) -> SimpleNamespace:
    usage = SimpleNamespace(total_token_count=total_tokens) if total_tokens is not None else None
    return SimpleNamespace(text=text, usage_metadata=usage, candidates=[])


def image_part(mime_type: Optional[str], data: bytes) -> SimpleNamespace:
    return SimpleNamespace(inline_data=SimpleNamespace(mime_type=mime_type, data=data), text=None)


def text_part(text: str) -> SimpleNamespace:
    return SimpleNamespace(inline_data=None, text=text)


def image_response(*parts: Any) -> SimpleNamespace:
    candidate = SimpleNamespace(content=SimpleNamespace(parts=list(parts)))
    return SimpleNamespace(text=None, usage_metadata=None, candidates=[candidate])


def fake_client(response: Any = None, side_effect: Any = None) -> MagicMock:
    client = MagicMock()
    client.aio.models.generate_content = AsyncMock(return_value=response, side_effect=side_effect)
    return client


@pytest.fixture
def responses() -> SimpleNamespace:
    """Builders for fake Gemini clients and responses."""

    return SimpleNamespace(
        text=text_response,
        image=image_response,
        image_part=image_part,
        text_part=text_part,
        client=fake_client,
    )
