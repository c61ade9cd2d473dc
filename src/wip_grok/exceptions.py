# SPDX-License-Identifier: MIT
"""Error taxonomy for wip-grok operations.

Validation errors subclass :class:`ValueError` and are raised before any
network call. Everything else describes an upstream or lifecycle outcome.
"""


class GrokError(Exception):
    """Base class for all wip-grok errors."""


# ---------- Validation (never reaches the network) ----------
class GrokValidationError(GrokError, ValueError):
    """Bad input shape or bounds."""


class ConflictingFilterError(GrokValidationError):
    """Both an allow-list and a deny-list were supplied."""


class ListTooLongError(GrokValidationError):
    """A filter list exceeds the vendor maximum."""


class MissingPromptError(GrokValidationError):
    """A required prompt or query is empty."""


class PromptTooLongError(GrokValidationError):
    """Prompt exceeds the vendor character limit."""


class InvalidCountError(GrokValidationError):
    """Requested image count is outside 1-10."""


class MissingImageError(GrokValidationError):
    """Image edit called without a source image."""


class TooManyImagesError(GrokValidationError):
    """More than three source images for an edit."""


class InvalidDurationError(GrokValidationError):
    """Video duration is outside 1-15 seconds."""


class MissingRequestIdError(GrokValidationError):
    """Video status check called without a request id."""


# ---------- Upstream / lifecycle ----------
class UpstreamError(GrokError):
    """Non-2xx response (or no response at all) from the xAI API."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(f"API Error: {message}")
        self.status_code = status_code


class VideoGenerationFailed(GrokError):
    """The vendor reported a terminal failure for a video job."""

    def __init__(self, request_id: str, error: str | None) -> None:
        super().__init__(f"Video generation failed: {error or 'unknown error'}")
        self.request_id = request_id
        self.error = error


class VideoGenerationTimedOut(GrokError):
    """The wait loop's deadline passed before the job reached a terminal state."""

    def __init__(self, request_id: str, timeout: float) -> None:
        super().__init__(f"Video generation timed out after {timeout:g}s")
        self.request_id = request_id
        self.timeout = timeout


class MissingCredentialError(GrokError, RuntimeError):
    """No API key could be resolved from the environment or 1Password."""
