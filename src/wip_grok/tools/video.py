# SPDX-License-Identifier: MIT
"""Video generation tools using xAI's Grok Imagine video API.

Video generation is asynchronous:
- generate_video() submits a job and returns its request_id
- poll_video() performs one status check
- wait_for_video() polls at a fixed interval until a terminal state or timeout

Job lifecycle (state lives server-side)::

    submitted -> pending/queued -> completed|succeeded   (success)
                                -> failed                (failure)
                                -> timed out             (client-side deadline)
"""

import time
from collections.abc import Awaitable, Callable
from enum import Enum
from typing import Any

import anyio
from openai import AsyncOpenAI

from ..config import default_model, get_client, logger
from ..exceptions import (
    InvalidDurationError,
    MissingPromptError,
    MissingRequestIdError,
    UpstreamError,
    VideoGenerationFailed,
    VideoGenerationTimedOut,
)
from ..transport import get_json, post_json
from ..types import VideoResolution, VideoStatus, VideoSubmission
from ..utils import first_present

MIN_DURATION = 1
MAX_DURATION = 15
DEFAULT_POLL_INTERVAL = 5.0
DEFAULT_WAIT_TIMEOUT = 300.0


class VideoJobState(str, Enum):
    """Client-side view of a video job."""

    PENDING = "pending"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    TIMED_OUT = "timed_out"


_SUCCESS_STATUSES = frozenset({"completed", "succeeded"})
_FAILURE_STATUSES = frozenset({"failed"})


def classify_status(status: str) -> VideoJobState:
    """Map a vendor status string to a job state.

    Anything unrecognized (including "unknown") counts as still pending, so
    the wait loop keeps polling until its deadline.
    """
    normalized = (status or "").strip().lower()
    if normalized in _SUCCESS_STATUSES:
        return VideoJobState.SUCCEEDED
    if normalized in _FAILURE_STATUSES:
        return VideoJobState.FAILED
    return VideoJobState.PENDING


def _error_text(error: Any) -> str | None:
    if error is None or error == "":
        return None
    if isinstance(error, dict):
        return str(error.get("message") or error)
    return str(error)


async def generate_video(
    prompt: str,
    *,
    duration: int = 5,
    resolution: VideoResolution = "720p",
    aspect_ratio: str | None = None,
    image: str | None = None,
    model: str | None = None,
    client: AsyncOpenAI | None = None,
) -> VideoSubmission:
    """Start an asynchronous video generation job.

    Args:
        prompt: Description of the desired video (required)
        duration: Length in seconds, 1-15. Default: 5
        resolution: "480p" or "720p". Default: "720p"
        aspect_ratio: e.g. "16:9", "9:16", "1:1" (optional)
        image: Seed image URL for image-to-video (optional)
        model: Video model. Default: GROK_VIDEO_MODEL or grok-imagine-video
        client: xAI client (defaults to :func:`~wip_grok.config.get_client`)

    Returns:
        VideoSubmission with the request_id to poll

    Raises:
        MissingPromptError: If prompt is empty
        InvalidDurationError: If duration is outside 1-15 seconds
        UpstreamError: If the API returns an error or no request id
    """
    if not prompt:
        raise MissingPromptError("prompt is required")
    if duration < MIN_DURATION or duration > MAX_DURATION:
        raise InvalidDurationError(f"duration must be {MIN_DURATION}-{MAX_DURATION} seconds (got {duration})")

    model = model or default_model("video")
    body: dict[str, Any] = {"model": model, "prompt": prompt, "duration": duration, "resolution": resolution}
    if aspect_ratio:
        body["aspect_ratio"] = aspect_ratio
    if image:
        body["image_url"] = image

    client = client or get_client()
    data = await post_json(client, "/video/generations", body)

    request_id = first_present(data, "request_id", "id")
    if not request_id:
        raise UpstreamError("Video generation response did not include a request id")

    logger.info("Started video job %s (%ss, %s) with %s", request_id, duration, resolution, model)
    return {"request_id": str(request_id)}


async def poll_video(request_id: str, *, client: AsyncOpenAI | None = None) -> VideoStatus:
    """Check the status of a video job once.

    Args:
        request_id: The request ID from generate_video
        client: xAI client (defaults to :func:`~wip_grok.config.get_client`)

    Returns:
        VideoStatus with status, url (once complete), duration and error

    Raises:
        MissingRequestIdError: If request_id is empty
        UpstreamError: If the API returns an error
    """
    if not request_id:
        raise MissingRequestIdError("request_id is required")

    client = client or get_client()
    data = await get_json(client, f"/video/generations/{request_id}")

    return {
        "status": str(first_present(data, "state", "status") or "unknown"),
        "url": first_present(data, "video_url", "url"),
        "duration": data.get("duration") or None,
        "error": _error_text(data.get("error")),
    }


async def wait_for_video(
    request_id: str,
    *,
    interval: float = DEFAULT_POLL_INTERVAL,
    timeout: float = DEFAULT_WAIT_TIMEOUT,
    client: AsyncOpenAI | None = None,
    clock: Callable[[], float] = time.monotonic,
    sleep: Callable[[float], Awaitable[Any]] = anyio.sleep,
) -> VideoStatus:
    """Poll a video job at a fixed interval until it finishes.

    One poll is in flight at a time. There is no backoff; the deadline is
    checked before each poll, so no poll starts after ``timeout`` elapses.

    Args:
        request_id: The request ID from generate_video
        interval: Seconds between polls. Default: 5
        timeout: Maximum seconds to wait. Default: 300
        client: xAI client (defaults to :func:`~wip_grok.config.get_client`)
        clock: Monotonic time source, in seconds
        sleep: Awaitable sleep used between polls

    Returns:
        The final VideoStatus (status completed or succeeded)

    Raises:
        MissingRequestIdError: If request_id is empty
        VideoGenerationFailed: If the job reports status "failed"
        VideoGenerationTimedOut: If the deadline passes first
        UpstreamError: If a status check fails
    """
    if not request_id:
        raise MissingRequestIdError("request_id is required")

    client = client or get_client()
    start = clock()
    polls = 0

    while clock() - start < timeout:
        result = await poll_video(request_id, client=client)
        polls += 1
        state = classify_status(result["status"])
        logger.debug("Video %s poll #%d: %s", request_id, polls, result["status"])

        if state is VideoJobState.SUCCEEDED:
            logger.info("Video %s completed after %d poll(s)", request_id, polls)
            return result
        if state is VideoJobState.FAILED:
            logger.info("Video %s failed: %s", request_id, result["error"])
            raise VideoGenerationFailed(request_id, result["error"])

        await sleep(interval)

    logger.info("Video %s %s after %gs (%d polls)", request_id, VideoJobState.TIMED_OUT.value, timeout, polls)
    raise VideoGenerationTimedOut(request_id, timeout)
