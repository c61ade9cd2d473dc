# SPDX-License-Identifier: MIT
"""Result shapes returned by wip-grok operations."""

from typing import Any, Literal, TypedDict

ResponseFormat = Literal["url", "b64_json"]
VideoResolution = Literal["480p", "720p"]


class Citation(TypedDict):
    """A source cited by a search answer."""

    title: str | None
    url: str | None


class SearchResult(TypedDict):
    """Synthesized answer from web or X search."""

    content: str
    citations: list[Citation]
    usage: dict[str, Any]
    raw_response: dict[str, Any]


class GeneratedImage(TypedDict):
    """One generated or edited image. Usually exactly one of url/b64_json is set."""

    url: str | None
    b64_json: str | None
    revised_prompt: str | None


class ImageResult(TypedDict):
    """Images returned by a generation or edit call."""

    images: list[GeneratedImage]


class VideoSubmission(TypedDict):
    """Handle for an asynchronous video job."""

    request_id: str


class VideoStatus(TypedDict):
    """Normalized status of a video job."""

    status: str
    url: str | None
    duration: float | None
    error: str | None


class SavedFile(TypedDict):
    """A downloaded artifact written to local disk."""

    path: str
    size_bytes: int
    dimensions: tuple[int, int] | None
    format: str | None
