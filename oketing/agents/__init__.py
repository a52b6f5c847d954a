"""Gemini-powered content flows for product marketing."""

from .flows import generate_marketing_pack, generate_more_content, strip_json_fences
from .gemini import (
    GeminiSettings,
    GenerationError,
    InvalidImageFormatError,
    ResponseParseError,
    create_client,
)
from .image import enhance_product_image
from .models import MarketingPack, MarketingPackResult, Product

__all__ = [
    "generate_marketing_pack",
    "generate_more_content",
    "strip_json_fences",
    "enhance_product_image",
    "GeminiSettings",
    "GenerationError",
    "InvalidImageFormatError",
    "ResponseParseError",
    "create_client",
    "MarketingPack",
    "MarketingPackResult",
    "Product",
]
