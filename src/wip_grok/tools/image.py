# SPDX-License-Identifier: MIT
"""Image generation and editing tools using xAI's Images API (Grok Imagine).

Both endpoints are synchronous: the response carries the finished images
as temporary URLs or inline base64, depending on ``response_format``.
"""

from typing import Any

import anyio
from openai import AsyncOpenAI

from ..config import default_model, get_client, logger
from ..exceptions import (
    InvalidCountError,
    MissingImageError,
    MissingPromptError,
    PromptTooLongError,
    TooManyImagesError,
)
from ..transport import post_json
from ..types import GeneratedImage, ImageResult, ResponseFormat
from ..utils import resolve_image_source

MAX_PROMPT_CHARS = 8000
MAX_IMAGES = 10
MAX_EDIT_SOURCES = 3


def _check_count(n: int) -> None:
    if n < 1 or n > MAX_IMAGES:
        raise InvalidCountError(f"n must be 1-{MAX_IMAGES} (got {n})")


def _normalize(data: dict[str, Any]) -> ImageResult:
    images: list[GeneratedImage] = [
        {
            "url": img.get("url") or None,
            "b64_json": img.get("b64_json") or None,
            "revised_prompt": img.get("revised_prompt") or None,
        }
        for img in data.get("data") or []
    ]
    return {"images": images}


async def generate_image(
    prompt: str,
    *,
    n: int = 1,
    response_format: ResponseFormat = "url",
    aspect_ratio: str | None = None,
    model: str | None = None,
    client: AsyncOpenAI | None = None,
) -> ImageResult:
    """Generate images from a text prompt.

    Args:
        prompt: Description of the desired image (max 8000 chars)
        n: Number of images, 1-10. Default: 1
        response_format: "url" (temporary URL) or "b64_json" (inline). Default: "url"
        aspect_ratio: e.g. "1:1", "16:9", "9:16", "4:3" (optional)
        model: Image model. Default: GROK_IMAGE_MODEL or grok-imagine-image
        client: xAI client (defaults to :func:`~wip_grok.config.get_client`)

    Returns:
        ImageResult with one entry per generated image

    Raises:
        MissingPromptError: If prompt is empty
        PromptTooLongError: If prompt exceeds 8000 characters
        InvalidCountError: If n is outside 1-10
        UpstreamError: If the API returns an error
    """
    if not prompt:
        raise MissingPromptError("prompt is required")
    if len(prompt) > MAX_PROMPT_CHARS:
        raise PromptTooLongError(f"prompt must be at most {MAX_PROMPT_CHARS} characters (got {len(prompt)})")
    _check_count(n)

    model = model or default_model("image")
    body: dict[str, Any] = {"model": model, "prompt": prompt, "n": n, "response_format": response_format}
    if aspect_ratio:
        body["aspect_ratio"] = aspect_ratio

    logger.info("Generating %d image(s) with %s", n, model)
    client = client or get_client()
    result = _normalize(await post_json(client, "/images/generations", body))
    logger.info("Received %d image(s)", len(result["images"]))
    return result


async def edit_image(
    prompt: str,
    image: str | list[str],
    *,
    n: int = 1,
    response_format: ResponseFormat = "url",
    model: str | None = None,
    client: AsyncOpenAI | None = None,
) -> ImageResult:
    """Edit an image with a natural-language instruction.

    Each source may be an http(s) URL, a data URI, or a local file path;
    local files are inlined as base64 data URIs.

    Only the first source is transmitted: the edits endpoint takes a single
    ``image`` field. Extra sources are validated and encoded but dropped,
    with a warning.

    Args:
        prompt: Edit instruction (required)
        image: Source image, or a list of up to 3 sources
        n: Number of outputs, 1-10. Default: 1
        response_format: "url" or "b64_json". Default: "url"
        model: Image model. Default: GROK_IMAGE_MODEL or grok-imagine-image
        client: xAI client (defaults to :func:`~wip_grok.config.get_client`)

    Returns:
        ImageResult with one entry per edited image

    Raises:
        MissingPromptError: If prompt is empty
        MissingImageError: If no source image is given
        TooManyImagesError: If more than 3 sources are given
        InvalidCountError: If n is outside 1-10
        GrokValidationError: If a local source file cannot be read
        UpstreamError: If the API returns an error
    """
    if not prompt:
        raise MissingPromptError("prompt is required")
    if not image:
        raise MissingImageError("image is required (URL, data URI, or file path)")

    sources = [image] if isinstance(image, str) else list(image)
    if len(sources) > MAX_EDIT_SOURCES:
        raise TooManyImagesError(f"Maximum {MAX_EDIT_SOURCES} source images (got {len(sources)})")
    _check_count(n)

    # File reads off the event loop
    resolved = [await anyio.to_thread.run_sync(resolve_image_source, src) for src in sources]
    if len(resolved) > 1:
        logger.warning("Edit endpoint accepts one image; sending the first of %d sources", len(resolved))

    model = model or default_model("image")
    body: dict[str, Any] = {
        "model": model,
        "image": resolved[0],
        "prompt": prompt,
        "n": n,
        "response_format": response_format,
    }

    logger.info("Editing image with %s", model)
    client = client or get_client()
    result = _normalize(await post_json(client, "/images/edits", body))
    logger.info("Received %d edited image(s)", len(result["images"]))
    return result
