# SPDX-License-Identifier: MIT
"""JSON request helpers over the xAI API.

Every call is a single round trip: no retries, no backoff. Non-2xx responses
and connection failures surface as :class:`~wip_grok.exceptions.UpstreamError`.
"""

from collections.abc import Awaitable
from typing import Any

import httpx
from openai import APIConnectionError, APIStatusError, AsyncOpenAI

from .config import logger
from .exceptions import UpstreamError


def _error_message(exc: APIStatusError) -> str:
    """Pick the vendor's error text, falling back to the HTTP reason phrase.

    The SDK stores the ``error`` member of the JSON body on ``exc.body`` when
    present, otherwise the whole body (or raw text if it was not JSON).
    """
    body = exc.body
    if isinstance(body, dict):
        error = body.get("error", body)
        if isinstance(error, dict):
            message = error.get("message")
        else:
            message = error if isinstance(error, str) else body.get("message")
        if message:
            return str(message)
    elif isinstance(body, str) and body.strip():
        return body.strip()

    return exc.response.reason_phrase or f"HTTP {exc.status_code}"


async def _send(method: str, path: str, call: Awaitable[httpx.Response]) -> dict[str, Any]:
    try:
        response = await call
    except APIStatusError as e:
        logger.debug("%s %s failed with HTTP %d", method, path, e.status_code)
        raise UpstreamError(_error_message(e), status_code=e.status_code) from e
    except APIConnectionError as e:
        raise UpstreamError(str(e) or "Connection error") from e

    try:
        data = response.json()
    except ValueError as e:
        raise UpstreamError(f"Invalid JSON in response from {path}", status_code=response.status_code) from e
    if not isinstance(data, dict):
        raise UpstreamError(f"Unexpected response from {path}: expected a JSON object")
    return data


async def post_json(client: AsyncOpenAI, path: str, body: dict[str, Any]) -> dict[str, Any]:
    """POST a JSON body to ``path`` (relative to the API base URL)."""
    return await _send("POST", path, client.post(path, body=body, cast_to=httpx.Response))


async def get_json(client: AsyncOpenAI, path: str) -> dict[str, Any]:
    """GET ``path`` (relative to the API base URL)."""
    return await _send("GET", path, client.get(path, cast_to=httpx.Response))
