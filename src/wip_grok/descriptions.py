# SPDX-License-Identifier: MIT
"""Tool descriptions for MCP server. Optimized for token efficiency."""

# ==================== SEARCH TOOL DESCRIPTIONS ====================

SEARCH_WEB = """Search the web using xAI Grok. Returns AI-synthesized answer with citations. Use for current events, documentation, real-time data.

Params: query, allowed_domains (max 5) OR excluded_domains (max 5), enable_image_understanding

Example: grok_search_web("latest python release", allowed_domains=["python.org"])"""

SEARCH_X = """Search X (Twitter) using xAI Grok. Returns AI-synthesized summary of what people are saying. Use for social sentiment, trending discussions.

Params: query, allowed_x_handles (max 10, no @) OR excluded_x_handles (max 10), from_date/to_date (YYYY-MM-DD), enable_image_understanding, enable_video_understanding"""


# ==================== IMAGE TOOL DESCRIPTIONS ====================

IMAGINE = """Generate images from text using Grok Imagine. $0.02/image. Returns temporary URL (download promptly).

Params: prompt (max 8000 chars), n (1-10), aspect_ratio (1:1|16:9|9:16|4:3|3:2...), response_format (url|b64_json)

Returns: {"images": [{url, b64_json, revised_prompt}]}"""

EDIT_IMAGE = """Edit images using natural language with Grok Imagine. Provide source image and edit instruction.

Params: prompt, image (URL, data URI, or local file path; a list of up to 3 is accepted but only the first is sent), n (1-10), response_format (url|b64_json)

Returns: {"images": [{url, b64_json, revised_prompt}]}"""


# ==================== VIDEO TOOL DESCRIPTIONS ====================

GENERATE_VIDEO = """Start async video generation with Grok Imagine. Returns request_id. Poll grok_poll_video() until completed. 1-15 seconds, 480p or 720p.

Params: prompt, duration (1-15, default 5), resolution (480p|720p, default 720p), aspect_ratio (16:9|9:16|1:1...), image (seed image URL for image-to-video)"""

POLL_VIDEO = """Check status of a video generation request. Call repeatedly (every ~5s) until status is completed/succeeded or failed.

Returns: status (pending|queued|completed|succeeded|failed), url (when complete), duration, error"""
