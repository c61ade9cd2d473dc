# SPDX-License-Identifier: MIT
"""Saving generated artifacts to local disk.

Image and video URLs returned by the API are temporary, so the CLI
downloads them right away when ``--output`` is given.
"""

import base64
import binascii
import functools
import io
import pathlib

import aiofiles
import anyio
import httpx
from PIL import Image, UnidentifiedImageError

from .config import logger
from .exceptions import UpstreamError
from .types import SavedFile

DOWNLOAD_TIMEOUT = 300.0


def _describe(data: bytes) -> tuple[tuple[int, int] | None, str | None]:
    """Dimensions and format of image bytes, or (None, None) for non-images."""
    try:
        with Image.open(io.BytesIO(data)) as img:
            return img.size, img.format.lower() if img.format else None
    except UnidentifiedImageError:
        return None, None


async def _saved(path: pathlib.Path, size_bytes: int, data: bytes, is_image: bool) -> SavedFile:
    dimensions, fmt = (None, None)
    if is_image:
        # PIL decode in thread pool
        dimensions, fmt = await anyio.to_thread.run_sync(_describe, data)
    return {"path": str(path.resolve()), "size_bytes": size_bytes, "dimensions": dimensions, "format": fmt}


async def download_url(url: str, path: str | pathlib.Path, *, is_image: bool = True) -> SavedFile:
    """Stream ``url`` to ``path``.

    Args:
        url: Temporary artifact URL from the API
        path: Destination file
        is_image: Inspect the result with Pillow (skip for videos)

    Returns:
        SavedFile describing what was written

    Raises:
        UpstreamError: If the download fails
    """
    out_path = pathlib.Path(path)
    size = 0
    buffer = bytearray()
    try:
        async with httpx.AsyncClient(timeout=DOWNLOAD_TIMEOUT, follow_redirects=True) as client:
            async with client.stream("GET", url) as response:
                if response.is_error:
                    raise UpstreamError(f"Download failed: {response.reason_phrase}", status_code=response.status_code)
                async with aiofiles.open(out_path, "wb") as f:
                    async for chunk in response.aiter_bytes():
                        await f.write(chunk)
                        size += len(chunk)
                        if is_image:
                            buffer.extend(chunk)
    except httpx.HTTPError as e:
        out_path.unlink(missing_ok=True)
        raise UpstreamError(f"Download failed: {e}") from e

    logger.info("Wrote %s (%d bytes)", out_path, size)
    return await _saved(out_path, size, bytes(buffer), is_image)


async def save_b64(payload: str, path: str | pathlib.Path) -> SavedFile:
    """Decode an inline base64 image and write it to ``path``.

    Raises:
        UpstreamError: If the payload is not valid base64
    """
    out_path = pathlib.Path(path)
    # Decode base64 in thread pool (CPU-bound)
    decode = functools.partial(base64.b64decode, payload, validate=True)
    try:
        data = await anyio.to_thread.run_sync(decode)
    except binascii.Error as e:
        raise UpstreamError("Invalid base64 image data") from e
    async with aiofiles.open(out_path, "wb") as f:
        await f.write(data)
    logger.info("Wrote %s (%d bytes)", out_path, len(data))
    return await _saved(out_path, len(data), data, True)
