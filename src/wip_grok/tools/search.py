# SPDX-License-Identifier: MIT
"""Search tools using xAI's Responses API.

Both searches post a single user message with one server-side tool attached
(``web_search`` or ``x_search``) and return the model's synthesized answer
with the citations the API reports.
"""

from typing import Any

from openai import AsyncOpenAI

from ..config import default_model, get_client, logger
from ..exceptions import ConflictingFilterError, ListTooLongError, MissingPromptError
from ..transport import post_json
from ..types import Citation, SearchResult

MAX_DOMAINS = 5
MAX_X_HANDLES = 10


def _check_filters(allowed: list[str] | None, excluded: list[str] | None, name: str, limit: int) -> None:
    """Validate a mutually exclusive allow/deny pair against its length bound."""
    if allowed is not None and excluded is not None:
        raise ConflictingFilterError(f"Cannot use both allowed_{name} and excluded_{name}")
    for kind, values in (("allowed", allowed), ("excluded", excluded)):
        if values is not None and len(values) > limit:
            raise ListTooLongError(f"Maximum {limit} {kind}_{name} (got {len(values)})")


def _message_text(content: Any) -> str:
    """Flatten a message's content into plain text.

    The API returns either a string or a list of parts like
    ``{"type": "output_text", "text": "..."}``.
    """
    if content is None:
        return ""
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for part in content:
            if isinstance(part, str):
                parts.append(part)
            elif isinstance(part, dict) and part.get("text"):
                parts.append(part["text"])
        return "\n\n".join(parts)
    return str(content)


def _citation(raw: Any) -> Citation:
    # Citations come back as bare URLs or as {title, url} objects
    if isinstance(raw, dict):
        return {"title": raw.get("title"), "url": raw.get("url")}
    return {"title": None, "url": str(raw)}


def _normalize(data: dict[str, Any]) -> SearchResult:
    output = data.get("output") or []
    last_message = output[-1] if output else {}
    content = last_message.get("content") if isinstance(last_message, dict) else None
    return {
        "content": _message_text(content),
        "citations": [_citation(c) for c in data.get("citations") or []],
        "usage": data.get("usage") or {},
        "raw_response": data,
    }


async def _respond(client: AsyncOpenAI | None, model: str, query: str, tool: dict[str, Any]) -> SearchResult:
    client = client or get_client()
    data = await post_json(
        client,
        "/responses",
        {
            "model": model,
            "input": [{"role": "user", "content": query}],
            "tools": [tool],
        },
    )
    result = _normalize(data)
    logger.info("%s answered with %d citation(s)", tool["type"], len(result["citations"]))
    return result


async def search_web(
    query: str,
    *,
    model: str | None = None,
    allowed_domains: list[str] | None = None,
    excluded_domains: list[str] | None = None,
    enable_image_understanding: bool = False,
    client: AsyncOpenAI | None = None,
) -> SearchResult:
    """Search the web with Grok.

    Args:
        query: Search query (required)
        model: Grok model. Default: GROK_SEARCH_MODEL or grok-4-1-fast-reasoning
        allowed_domains: Restrict results to these domains (max 5)
        excluded_domains: Exclude these domains (max 5)
        enable_image_understanding: Let the model analyze images in results
        client: xAI client (defaults to :func:`~wip_grok.config.get_client`)

    Returns:
        SearchResult with content, citations, usage and the raw response

    Raises:
        MissingPromptError: If query is empty
        ConflictingFilterError: If both allowed and excluded domains are given
        ListTooLongError: If either domain list has more than 5 entries
        UpstreamError: If the API returns an error
    """
    if not query:
        raise MissingPromptError("query is required")
    _check_filters(allowed_domains, excluded_domains, "domains", MAX_DOMAINS)

    tool: dict[str, Any] = {"type": "web_search"}
    if allowed_domains:
        tool["allowed_domains"] = allowed_domains
    if excluded_domains:
        tool["excluded_domains"] = excluded_domains
    if enable_image_understanding:
        tool["enable_image_understanding"] = True

    return await _respond(client, model or default_model("search"), query, tool)


async def search_x(
    query: str,
    *,
    model: str | None = None,
    allowed_x_handles: list[str] | None = None,
    excluded_x_handles: list[str] | None = None,
    from_date: str | None = None,
    to_date: str | None = None,
    enable_image_understanding: bool = False,
    enable_video_understanding: bool = False,
    client: AsyncOpenAI | None = None,
) -> SearchResult:
    """Search X (Twitter) posts with Grok.

    Args:
        query: Search query (required)
        model: Grok model. Default: GROK_SEARCH_MODEL or grok-4-1-fast-reasoning
        allowed_x_handles: Only search these handles (max 10, no @)
        excluded_x_handles: Exclude these handles (max 10, no @)
        from_date: Start date (YYYY-MM-DD)
        to_date: End date (YYYY-MM-DD)
        enable_image_understanding: Let the model analyze images in posts
        enable_video_understanding: Let the model analyze videos in posts
        client: xAI client (defaults to :func:`~wip_grok.config.get_client`)

    Returns:
        SearchResult with content, citations, usage and the raw response

    Raises:
        MissingPromptError: If query is empty
        ConflictingFilterError: If both allowed and excluded handles are given
        ListTooLongError: If either handle list has more than 10 entries
        UpstreamError: If the API returns an error
    """
    if not query:
        raise MissingPromptError("query is required")
    _check_filters(allowed_x_handles, excluded_x_handles, "x_handles", MAX_X_HANDLES)

    tool: dict[str, Any] = {"type": "x_search"}
    if allowed_x_handles:
        tool["allowed_x_handles"] = allowed_x_handles
    if excluded_x_handles:
        tool["excluded_x_handles"] = excluded_x_handles
    if from_date:
        tool["from_date"] = from_date
    if to_date:
        tool["to_date"] = to_date
    if enable_image_understanding:
        tool["enable_image_understanding"] = True
    if enable_video_understanding:
        tool["enable_video_understanding"] = True

    return await _respond(client, model or default_model("search"), query, tool)
