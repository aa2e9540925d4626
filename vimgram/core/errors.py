"""Error taxonomy for completion calls.

None of these are fatal to the process: callers display them, log them or use
them to trigger the setup flow. Nothing in :mod:`vimgram.core` retries.
"""
from __future__ import annotations

from typing import Optional

# Suggested wait reported for every HTTP 429; provider retry hints are ignored.
DEFAULT_RETRY_AFTER = 60


class CompletionError(Exception):
    """Base class for every failure a completion call can report."""


class NotConfiguredError(CompletionError):
    """Raised before any network I/O when the API key is missing or AI is disabled."""

    def __init__(self) -> None:
        super().__init__("AI not configured. Set VIMGRAM_AI_KEY or run :ai setup")


class NetworkError(CompletionError):
    """Connection refused, timeout, DNS or TLS failure."""

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Network error: {detail}")


class ApiError(CompletionError):
    """Non-success HTTP status, or a logical error reported inside a 2xx body."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        body: Optional[str] = None,
    ) -> None:
        self.message = message
        self.status_code = status_code
        self.body = body
        super().__init__(f"API error: {message}")


class ParseError(CompletionError):
    """Malformed response body, missing candidate or undecodable command JSON."""

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Parse error: {detail}")


class RateLimitedError(CompletionError):
    """HTTP 429. ``retry_after`` is informational only."""

    def __init__(self, retry_after: int = DEFAULT_RETRY_AFTER) -> None:
        self.retry_after = retry_after
        super().__init__(f"Rate limited. Try again in {retry_after}s")
