# SPDX-License-Identifier: MIT
"""wip-grok MCP Server - FastMCP server exposing xAI Grok search and generation.

This module initializes the FastMCP server and registers the six tools.
Business logic lives in the tools/ package; this layer only renders results
as text. Exceptions raised by a tool are returned to the client as error
results by FastMCP.
"""

from typing import Literal

from dotenv import load_dotenv
from mcp.server.fastmcp import FastMCP

from . import __version__
from .config import logger
from .descriptions import EDIT_IMAGE, GENERATE_VIDEO, IMAGINE, POLL_VIDEO, SEARCH_WEB, SEARCH_X
from .formatting import format_json, format_search_result
from .tools import image as image_tools
from .tools import search as search_tools
from .tools import video as video_tools

# Initialize FastMCP server
mcp = FastMCP("wip-grok")


# ==================== SEARCH TOOLS ====================
@mcp.tool(name="grok_search_web", description=SEARCH_WEB)
async def grok_search_web(
    query: str,
    allowed_domains: list[str] | None = None,
    excluded_domains: list[str] | None = None,
    enable_image_understanding: bool = False,
) -> str:
    result = await search_tools.search_web(
        query,
        allowed_domains=allowed_domains,
        excluded_domains=excluded_domains,
        enable_image_understanding=enable_image_understanding,
    )
    return format_search_result(result)


@mcp.tool(name="grok_search_x", description=SEARCH_X)
async def grok_search_x(
    query: str,
    allowed_x_handles: list[str] | None = None,
    excluded_x_handles: list[str] | None = None,
    from_date: str | None = None,
    to_date: str | None = None,
    enable_image_understanding: bool = False,
    enable_video_understanding: bool = False,
) -> str:
    result = await search_tools.search_x(
        query,
        allowed_x_handles=allowed_x_handles,
        excluded_x_handles=excluded_x_handles,
        from_date=from_date,
        to_date=to_date,
        enable_image_understanding=enable_image_understanding,
        enable_video_understanding=enable_video_understanding,
    )
    return format_search_result(result)


# ==================== IMAGE TOOLS ====================
@mcp.tool(name="grok_imagine", description=IMAGINE)
async def grok_imagine(
    prompt: str,
    n: int = 1,
    aspect_ratio: str | None = None,
    response_format: Literal["url", "b64_json"] = "url",
) -> str:
    result = await image_tools.generate_image(prompt, n=n, aspect_ratio=aspect_ratio, response_format=response_format)
    return format_json(result)


@mcp.tool(name="grok_edit_image", description=EDIT_IMAGE)
async def grok_edit_image(
    prompt: str,
    image: str | list[str],
    n: int = 1,
    response_format: Literal["url", "b64_json"] = "url",
) -> str:
    result = await image_tools.edit_image(prompt, image, n=n, response_format=response_format)
    return format_json(result)


# ==================== VIDEO TOOLS ====================
@mcp.tool(name="grok_generate_video", description=GENERATE_VIDEO)
async def grok_generate_video(
    prompt: str,
    duration: int = 5,
    resolution: Literal["480p", "720p"] = "720p",
    aspect_ratio: str | None = None,
    image: str | None = None,
) -> str:
    result = await video_tools.generate_video(
        prompt,
        duration=duration,
        resolution=resolution,
        aspect_ratio=aspect_ratio,
        image=image,
    )
    return format_json(result)


@mcp.tool(name="grok_poll_video", description=POLL_VIDEO)
async def grok_poll_video(request_id: str) -> str:
    result = await video_tools.poll_video(request_id)
    return format_json(result)


# ==================== SERVER ENTRYPOINT ====================
def main():
    """Run the MCP server over stdio.

    The API key is resolved lazily on the first tool call and cached for the
    life of the process.
    """
    load_dotenv()  # Load environment variables at runtime
    logger.info("Starting wip-grok %s MCP server over stdio", __version__)
    mcp.run()


if __name__ == "__main__":
    main()
