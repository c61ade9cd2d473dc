# SPDX-License-Identifier: MIT
"""Shared helpers: image source encoding, vendor field lookup, output paths."""

import base64
import pathlib
from collections.abc import Mapping
from typing import Any

from .exceptions import GrokValidationError

_MIME_TYPES = {
    ".png": "image/png",
    ".webp": "image/webp",
}


def first_present(data: Mapping[str, Any], *keys: str) -> Any:
    """Return the value of the first key that is present and non-empty.

    The xAI API is inconsistent about field names (``request_id``/``id``,
    ``state``/``status``, ``video_url``/``url``); callers list the preferred
    name first.
    """
    for key in keys:
        value = data.get(key)
        if value is not None and value != "":
            return value
    return None


def is_remote_image(source: str) -> bool:
    """True if ``source`` is a URL or data URI rather than a local path."""
    return source.startswith("http") or source.startswith("data:")


def mime_type_for(path: str | pathlib.Path) -> str:
    """MIME type from file extension: png, webp, everything else jpeg."""
    return _MIME_TYPES.get(pathlib.PurePath(path).suffix.lower(), "image/jpeg")


def encode_image_data_uri(path: str | pathlib.Path) -> str:
    """Read a local image and return it as a ``data:<mime>;base64,...`` URI.

    Raises:
        GrokValidationError: If the file cannot be read
    """
    image_path = pathlib.Path(path)
    try:
        image_bytes = image_path.read_bytes()
    except FileNotFoundError as e:
        raise GrokValidationError(f"Image file not found: {image_path}") from e
    except PermissionError as e:
        raise GrokValidationError(f"Permission denied reading image: {image_path}") from e
    except OSError as e:
        raise GrokValidationError(f"Error reading image file {image_path}: {e}") from e

    payload = base64.b64encode(image_bytes).decode("ascii")
    return f"data:{mime_type_for(image_path)};base64,{payload}"


def resolve_image_source(source: str) -> str:
    """Pass URLs and data URIs through; inline local files as data URIs."""
    if is_remote_image(source):
        return source
    return encode_image_data_uri(source)


def indexed_output_path(output: str | pathlib.Path, index: int, total: int) -> pathlib.Path:
    """Output path for the ``index``-th (0-based) of ``total`` saved files.

    A single file keeps the requested name; several get ``-1``, ``-2``... suffixes.
    """
    path = pathlib.Path(output)
    if total <= 1:
        return path
    return path.with_name(f"{path.stem}-{index + 1}{path.suffix}")
