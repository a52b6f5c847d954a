"""Pydantic models for the FastAPI requests and responses."""

from __future__ import annotations

from typing import Any, Dict, List

from pydantic import BaseModel

from ..agents.models import Product


class MoreContentRequest(BaseModel):
    product: Product
    channel: str


class EnhanceImageRequest(BaseModel):
    image: str


class PackResponse(BaseModel):
    pack: Dict[str, Any]
    tokens: int


class MoreContentResponse(BaseModel):
    channel: str
    items: List[Any]


class EnhanceImageResponse(BaseModel):
    image: str
