"""CLI for generating marketing content and enhancing product photos."""

from __future__ import annotations

import asyncio
import json
import logging
import mimetypes
from pathlib import Path
from typing import Any, NoReturn, Optional

import typer

from .agents import (
    Product,
    enhance_product_image,
    generate_marketing_pack,
    generate_more_content,
)
from .agents.image import parse_data_uri, to_data_uri
from .server.config import get_settings

LOGGER = logging.getLogger(__name__)
app = typer.Typer(help="Generate marketing content for a product with Gemini.")


def _configure_logging(verbose: bool) -> None:
    """Initialize logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def _echo_json(payload: Any) -> None:
    typer.echo(json.dumps(payload, ensure_ascii=False, indent=2))


def _fail(exc: Exception) -> NoReturn:
    typer.echo(f"Error: {exc}", err=True)
    raise typer.Exit(code=1)


@app.command()
def generate(
    name: str = typer.Option(..., help="Product display name."),
    description: str = typer.Option(..., help="Free-text product description."),
    product_id: str = typer.Option("cli", "--id", help="Identifier stamped on the pack."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Generate the full multi-channel marketing pack."""

    _configure_logging(verbose)
    product = Product(id=product_id, name=name, description=description)
    try:
        result = asyncio.run(generate_marketing_pack(product, settings=get_settings()))
    except Exception as exc:
        _fail(exc)
    _echo_json({"pack": result.pack, "tokens": result.tokens})


@app.command()
def more(
    channel: str = typer.Argument(..., help="Channel to extend, e.g. instagram or xPosts."),
    name: str = typer.Option(..., help="Product display name."),
    description: str = typer.Option("", help="Free-text product description."),
    product_id: str = typer.Option("cli", "--id", help="Product identifier."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Generate five more items for a single channel."""

    _configure_logging(verbose)
    product = Product(id=product_id, name=name, description=description)
    try:
        items = asyncio.run(generate_more_content(product, channel, settings=get_settings()))
    except Exception as exc:
        _fail(exc)
    _echo_json(items)


@app.command()
def enhance(
    image: Path = typer.Argument(..., exists=True, dir_okay=False, help="Product photo to enhance."),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Write the enhanced image here instead of printing a data URI."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Enhance a product photo to storefront quality."""

    _configure_logging(verbose)
    mime_type, _ = mimetypes.guess_type(image.name)
    if not mime_type or not mime_type.startswith("image/"):
        raise typer.BadParameter(f"Cannot determine an image MIME type for {image}")

    data_uri = to_data_uri(mime_type, image.read_bytes())
    try:
        enhanced = asyncio.run(enhance_product_image(data_uri, settings=get_settings()))
    except Exception as exc:
        _fail(exc)

    if output is None:
        typer.echo(enhanced)
        return
    _, data = parse_data_uri(enhanced)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_bytes(data)
    LOGGER.info("Wrote enhanced image to %s", output)


if __name__ == "__main__":
    app()
