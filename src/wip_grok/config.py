# SPDX-License-Identifier: MIT
"""Configuration management for wip-grok.

This module handles:
- Logging setup
- API key resolution (environment variable, then 1Password)
- Settings loading from environment variables
- xAI client construction
"""

import logging
import os
import subprocess
import sys
from functools import lru_cache

from openai import AsyncOpenAI
from pydantic import BaseModel

from .exceptions import MissingCredentialError

# ---------- Logging configuration ----------
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    stream=sys.stderr,  # Log to stderr to avoid interfering with stdio MCP transport
)
logger = logging.getLogger("wip_grok")

# ---------- Defaults ----------
DEFAULT_BASE_URL = "https://api.x.ai/v1"
DEFAULT_OP_REFERENCE = "op://Agent Secrets/X API/api key"
DEFAULT_TIMEOUT = 120.0

MODELS: dict[str, str] = {
    "search": "grok-4-1-fast-reasoning",
    "image": "grok-imagine-image",
    "video": "grok-imagine-video",
}

OP_READ_TIMEOUT = 10


class Settings(BaseModel, frozen=True):
    """Resolved runtime configuration.

    Built once at front-end startup and handed to :func:`get_client`.
    """

    api_key: str
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT


# ---------- Credential resolution ----------
def _read_from_1password(reference: str) -> str | None:
    """Read a secret with the 1Password CLI. Returns None if unavailable."""
    try:
        proc = subprocess.run(
            ["op", "read", reference],
            capture_output=True,
            text=True,
            timeout=OP_READ_TIMEOUT,
            check=False,
        )
    except (OSError, subprocess.TimeoutExpired) as e:
        logger.debug("1Password lookup unavailable: %s", e)
        return None

    if proc.returncode != 0:
        logger.debug("1Password lookup failed (exit %d): %s", proc.returncode, proc.stderr.strip())
        return None
    return proc.stdout.strip() or None


def resolve_api_key() -> str:
    """Resolve the xAI API key.

    Priority: ``XAI_API_KEY`` > ``op read $XAI_OP_REFERENCE``.

    Returns:
        The API key string

    Raises:
        MissingCredentialError: If neither source yields a key
    """
    api_key = os.getenv("XAI_API_KEY", "").strip()
    if api_key:
        return api_key

    reference = os.getenv("XAI_OP_REFERENCE", DEFAULT_OP_REFERENCE)
    api_key = _read_from_1password(reference)
    if api_key:
        logger.debug("Resolved API key from 1Password")
        return api_key

    raise MissingCredentialError(
        "XAI_API_KEY not found. Set it via:\n"
        f'  1. 1Password: op item edit "X API" --vault "Agent Secrets" "api key=your-key" (read from {reference})\n'
        '  2. Environment: export XAI_API_KEY="your-key"\n'
        "  Get your key from https://console.x.ai/"
    )


def load_settings() -> Settings:
    """Build :class:`Settings` from the environment, resolving the API key.

    Raises:
        MissingCredentialError: If no API key can be resolved
        RuntimeError: If XAI_TIMEOUT is not a number
    """
    timeout_str = os.getenv("XAI_TIMEOUT", str(DEFAULT_TIMEOUT))
    try:
        timeout = float(timeout_str)
    except ValueError as e:
        raise RuntimeError(f"XAI_TIMEOUT must be a number of seconds, got {timeout_str!r}") from e

    return Settings(
        api_key=resolve_api_key(),
        base_url=os.getenv("XAI_BASE_URL", DEFAULT_BASE_URL).rstrip("/"),
        timeout=timeout,
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Process-wide settings; the first successful resolution wins."""
    return load_settings()


# ---------- xAI client ----------
def get_client(settings: Settings | None = None) -> AsyncOpenAI:
    """Get an async client for the xAI API.

    The OpenAI SDK is used as a plain HTTP transport (bearer auth, JSON
    bodies, status-error mapping). Retries are disabled.

    Args:
        settings: Explicit settings; defaults to :func:`get_settings`

    Returns:
        Configured AsyncOpenAI client

    Raises:
        MissingCredentialError: If no API key can be resolved
    """
    settings = settings or get_settings()
    return AsyncOpenAI(
        api_key=settings.api_key,
        base_url=settings.base_url,
        timeout=settings.timeout,
        max_retries=0,
    )


def default_model(kind: str) -> str:
    """Return the configured model for ``search``, ``image`` or ``video``.

    Reads the environment directly so model lookups never force credential
    resolution.
    """
    env_var = {"search": "GROK_SEARCH_MODEL", "image": "GROK_IMAGE_MODEL", "video": "GROK_VIDEO_MODEL"}[kind]
    return os.getenv(env_var) or MODELS[kind]
