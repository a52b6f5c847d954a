"""Pydantic models for products and the content generated for them."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Product(BaseModel):
    """Product supplied by the caller; never persisted."""

    id: str
    name: str
    description: str


class InstagramPost(BaseModel):
    model_config = ConfigDict(extra="allow")

    type: str
    content: str


class FaqEntry(BaseModel):
    model_config = ConfigDict(extra="allow")

    q: Optional[str] = None
    a: Optional[str] = None


class BlogPost(BaseModel):
    model_config = ConfigDict(extra="allow")

    title: Optional[str] = None
    summary: Optional[str] = None
    content: Optional[str] = None
    faq: Optional[List[FaqEntry]] = None
    cta: Optional[str] = None


class Hashtags(BaseModel):
    model_config = ConfigDict(extra="allow")

    instagram: Optional[List[str]] = None
    x: Optional[List[str]] = None
    blog: Optional[List[str]] = None


class ShortForm(BaseModel):
    model_config = ConfigDict(extra="allow")

    script: Optional[str] = None
    srt: Optional[str] = None


class MarketingPack(BaseModel):
    """Per-channel content bundle tagged with its product and creation time.

    Channel fields are optional because the response schema is only a hint
    to Gemini. Keys are matched by their wire (camelCase) names only; any
    other key is kept as an extra.
    """

    model_config = ConfigDict(extra="allow")

    instagram: Optional[List[InstagramPost]] = None
    x_posts: Optional[List[str]] = Field(default=None, alias="xPosts")
    blogs: Optional[List[BlogPost]] = None
    hashtags: Optional[Hashtags] = None
    short_forms: Optional[List[ShortForm]] = Field(default=None, alias="shortForms")
    product_id: str = Field(alias="productId")
    created_at: int = Field(alias="createdAt")


class MarketingPackResult(BaseModel):
    """Parsed Gemini object merged with ``productId`` and ``createdAt``."""

    pack: Dict[str, Any]
    tokens: int = 0

    def as_model(self) -> MarketingPack:
        """Return a typed view of the pack; raises ``ValidationError`` on a misfit."""

        return MarketingPack.model_validate(self.pack)
