"""High-level Gemini-powered marketing flows."""

from __future__ import annotations

import json
import logging
import textwrap
import time
from typing import Any, Dict, List, Optional

from google import genai
from google.genai import types
from pydantic import ValidationError

from .gemini import (
    GeminiSettings,
    ResponseParseError,
    create_client,
    generate_gemini_content,
    response_text,
    total_token_count,
)
from .models import MarketingPack, MarketingPackResult, Product

LOGGER = logging.getLogger(__name__)
JSON_MIME_TYPE = "application/json"

PACK_SYSTEM_INSTRUCTION = textwrap.dedent(
    """
    당신은 대한민국 최고의 트렌드 마케터 '오케팅 AI'입니다.
    사용자의 제품을 기반으로 [인스타, X, 블로그, 숏폼] 콘텐츠를 '각 채널별 5개씩' 생성하세요.
    단순 나열이 아닌, 각 플랫폼에서 조회수가 터지는 힙하고 트렌디한 문체를 사용하세요.
    반드시 JSON 형식으로 응답하세요.
    """
).strip()


def _string_list() -> types.Schema:
    return types.Schema(type=types.Type.ARRAY, items=types.Schema(type=types.Type.STRING))


def _object(properties: dict, required: Optional[List[str]] = None) -> types.Schema:
    return types.Schema(type=types.Type.OBJECT, properties=properties, required=required)


def _string() -> types.Schema:
    return types.Schema(type=types.Type.STRING)


MARKETING_PACK_SCHEMA = _object(
    {
        "instagram": types.Schema(
            type=types.Type.ARRAY,
            items=_object({"type": _string(), "content": _string()}, ["type", "content"]),
        ),
        "xPosts": _string_list(),
        "blogs": types.Schema(
            type=types.Type.ARRAY,
            items=_object(
                {
                    "title": _string(),
                    "summary": _string(),
                    "content": _string(),
                    "faq": types.Schema(
                        type=types.Type.ARRAY,
                        items=_object({"q": _string(), "a": _string()}),
                    ),
                    "cta": _string(),
                }
            ),
        ),
        "hashtags": _object(
            {"instagram": _string_list(), "x": _string_list(), "blog": _string_list()}
        ),
        "shortForms": types.Schema(
            type=types.Type.ARRAY,
            items=_object({"script": _string(), "srt": _string()}),
        ),
    }
)


async def generate_marketing_pack(
    product: Product,
    *,
    client: Optional[genai.Client] = None,
    settings: Optional[GeminiSettings] = None,
    validate: bool = False,
) -> MarketingPackResult:
    """Generate five pieces of content per channel for ``product``.

    The pack is the parsed JSON object as returned, plus ``productId`` and
    ``createdAt``. With ``validate=True`` it must also fit
    :class:`MarketingPack`. Failures are logged and re-raised unchanged,
    except that undecodable or ill-shaped response text is reported as
    :class:`ResponseParseError`.
    """

    settings = settings or GeminiSettings()
    try:
        client = client or create_client(settings)
        response = await generate_gemini_content(
            client,
            _build_pack_prompt(product),
            model=settings.text_model,
            system_instruction=PACK_SYSTEM_INSTRUCTION,
            response_mime_type=JSON_MIME_TYPE,
            response_schema=MARKETING_PACK_SCHEMA,
        )
        payload = _load_json(response_text(response) or "{}")
        if not isinstance(payload, dict):
            raise ResponseParseError(
                f"Expected a JSON object, got {type(payload).__name__}.",
                raw_text=response_text(response),
            )
        pack = _build_pack(payload, product, validate=validate)
    except Exception:
        LOGGER.error("Marketing pack generation failed for product %s", product.id, exc_info=True)
        raise

    tokens = total_token_count(response)
    LOGGER.info("Generated marketing pack for product %s (%d tokens)", product.id, tokens)
    return MarketingPackResult(pack=pack, tokens=tokens)


async def generate_more_content(
    product: Product,
    channel: str,
    *,
    client: Optional[genai.Client] = None,
    settings: Optional[GeminiSettings] = None,
) -> List[Any]:
    """Ask Gemini for five more, bolder items for a single channel."""

    settings = settings or GeminiSettings()
    client = client or create_client(settings)
    response = await generate_gemini_content(
        client,
        f"제품: {product.name}",
        model=settings.text_model,
        system_instruction=_build_channel_instruction(channel),
        response_mime_type=JSON_MIME_TYPE,
    )
    raw = response_text(response)
    items = _load_json(strip_json_fences(raw or "[]"))
    if not isinstance(items, list):
        raise ResponseParseError(
            f"Expected a JSON array, got {type(items).__name__}.", raw_text=raw
        )
    return items


def strip_json_fences(text: str) -> str:
    """Remove markdown ```json / ``` fences around a JSON payload."""

    return text.replace("```json", "").replace("```", "").strip()


def _build_pack_prompt(product: Product) -> str:
    return f"제품명: {product.name}, 설명: {product.description}"


def _build_channel_instruction(channel: str) -> str:
    return (
        f"[{channel}]용 마케팅 콘텐츠 5개를 추가로 더 만드세요. "
        "더 파격적이고 트렌디하게 작성하세요. JSON 배열 형식으로 응답하세요."
    )


def _build_pack(payload: dict, product: Product, *, validate: bool) -> Dict[str, Any]:
    pack = {**payload, "productId": product.id, "createdAt": _now_millis()}
    if not validate:
        return pack
    try:
        MarketingPack.model_validate(pack)
    except ValidationError as exc:
        raise ResponseParseError(
            f"Gemini response does not fit the marketing pack shape: {exc}",
            raw_text=json.dumps(payload, ensure_ascii=False),
        ) from exc
    return pack


def _load_json(text: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise ResponseParseError(f"Gemini returned invalid JSON: {exc}", raw_text=text) from exc


def _now_millis() -> int:
    return int(time.time() * 1000)
