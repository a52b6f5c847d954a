"""FastAPI app that exposes the marketing content generators."""

from __future__ import annotations

import logging
from typing import NoReturn, Optional

from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from google import genai

from .. import __version__
from ..agents import (
    GeminiSettings,
    InvalidImageFormatError,
    Product,
    ResponseParseError,
    enhance_product_image,
    generate_marketing_pack,
    generate_more_content,
)
from .config import get_settings
from .schemas import (
    EnhanceImageRequest,
    EnhanceImageResponse,
    MoreContentRequest,
    MoreContentResponse,
    PackResponse,
)

LOGGER = logging.getLogger(__name__)

app = FastAPI(title="Oketing AI", version=__version__)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_gemini_client() -> Optional[genai.Client]:
    """Client shared by a request; ``None`` lets each generator build its own."""

    return None


@app.get("/health")
async def health() -> dict:
    return {"status": "ok"}


@app.post("/packs", response_model=PackResponse)
async def create_pack(
    product: Product,
    settings: GeminiSettings = Depends(get_settings),
    client: Optional[genai.Client] = Depends(get_gemini_client),
) -> PackResponse:
    """Generate the full multi-channel marketing pack for a product."""

    try:
        result = await generate_marketing_pack(product, client=client, settings=settings)
    except Exception as exc:
        _raise_http(exc)
    return PackResponse(pack=result.pack, tokens=result.tokens)


@app.post("/packs/more", response_model=MoreContentResponse)
async def create_more_content(
    payload: MoreContentRequest,
    settings: GeminiSettings = Depends(get_settings),
    client: Optional[genai.Client] = Depends(get_gemini_client),
) -> MoreContentResponse:
    """Generate five additional items for one channel."""

    try:
        items = await generate_more_content(
            payload.product, payload.channel, client=client, settings=settings
        )
    except Exception as exc:
        _raise_http(exc)
    return MoreContentResponse(channel=payload.channel, items=items)


@app.post("/images/enhance", response_model=EnhanceImageResponse)
async def enhance_image(
    payload: EnhanceImageRequest,
    settings: GeminiSettings = Depends(get_settings),
    client: Optional[genai.Client] = Depends(get_gemini_client),
) -> EnhanceImageResponse:
    """Return an enhanced product photo as a data URI."""

    try:
        image = await enhance_product_image(payload.image, client=client, settings=settings)
    except Exception as exc:
        _raise_http(exc)
    return EnhanceImageResponse(image=image)


def _raise_http(exc: Exception) -> NoReturn:
    """Translate a generator failure into an HTTP error."""

    if isinstance(exc, InvalidImageFormatError):
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    if isinstance(exc, ResponseParseError):
        raise HTTPException(status_code=502, detail=str(exc)) from exc
    LOGGER.warning("Gemini request failed: %s", exc)
    raise HTTPException(status_code=502, detail=f"Gemini request failed: {exc}") from exc
