# SPDX-License-Identifier: MIT
"""Text rendering shared by the CLI and the MCP server."""

import json
from typing import Any

from .types import Citation, SearchResult


def format_citations(citations: list[Citation], indent: str = "") -> str:
    """Numbered ``N. title - url`` lines, in the order the API returned them."""
    return "\n".join(
        f"{indent}{i}. {c.get('title') or 'Untitled'} - {c.get('url') or ''}" for i, c in enumerate(citations, start=1)
    )


def format_search_result(result: SearchResult, indent: str = "") -> str:
    """Answer text followed by a Sources section when there are citations.

    ``indent`` prefixes each source line (the CLI uses two spaces).
    """
    text = result["content"]
    if result["citations"]:
        text += "\n\nSources:\n" + format_citations(result["citations"], indent)
    return text


def format_json(obj: Any) -> str:
    return json.dumps(obj, indent=2)
