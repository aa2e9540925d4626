"""Gemini completion transport.

One call to :meth:`GeminiClient.complete` is one POST to
``{base_url}/models/{model}:generateContent?key={api_key}`` and exactly one
typed outcome: the first candidate's text, or a :class:`CompletionError`.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx

from .config import AIConfig
from .errors import (
    ApiError,
    NetworkError,
    NotConfiguredError,
    ParseError,
    RateLimitedError,
)

logger = logging.getLogger(__name__)

# Generation policy. Callers wanting other values build their own requests.
TEMPERATURE = 0.7
MAX_OUTPUT_TOKENS = 2048

DEFAULT_TIMEOUT = 60.0


class GeminiClient:
    """Thin async wrapper around the ``generateContent`` REST endpoint.

    Holds no mutable state across calls, so a single instance can serve
    concurrent callers. When ``http_client`` is supplied it is shared and left
    open; otherwise every call opens its own short-lived client.
    """

    def __init__(
        self,
        config: AIConfig,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self.config = config
        self._http_client = http_client
        self._timeout = timeout

    # ------------------------------------------------------------------
    # Helper methods
    # ------------------------------------------------------------------

    def is_ready(self) -> bool:
        return self.config.is_ready()

    def endpoint_url(self) -> str:
        # External contract: key travels in the query string, unencoded.
        return (
            f"{self.config.base_url}/models/{self.config.model}"
            f":generateContent?key={self.config.api_key}"
        )

    @staticmethod
    def build_request(prompt: str, system: Optional[str] = None) -> Dict[str, Any]:
        """Return the JSON body for a single-turn request."""
        body: Dict[str, Any] = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
        }
        if system is not None:
            body["system_instruction"] = {"parts": [{"text": system}]}
        body["generationConfig"] = {
            "temperature": TEMPERATURE,
            "maxOutputTokens": MAX_OUTPUT_TOKENS,
        }
        return body

    @staticmethod
    def _validate_response(payload: Any) -> None:
        """Raise ``ValueError`` unless *payload* matches the response schema."""
        if not isinstance(payload, dict):
            raise ValueError("expected a JSON object")

        candidates = payload.get("candidates")
        if candidates is not None:
            if not isinstance(candidates, list):
                raise ValueError("`candidates` must be a list")
            for idx, candidate in enumerate(candidates):
                content = candidate.get("content") if isinstance(candidate, dict) else None
                if not isinstance(content, dict):
                    raise ValueError(f"candidates[{idx}]: missing field `content`")
                parts = content.get("parts")
                if not isinstance(parts, list):
                    raise ValueError(f"candidates[{idx}].content: missing field `parts`")
                for part in parts:
                    if not isinstance(part, dict) or not isinstance(part.get("text"), str):
                        raise ValueError(
                            f"candidates[{idx}].content.parts: missing field `text`"
                        )

        error = payload.get("error")
        if error is not None:
            if not isinstance(error, dict) or not isinstance(error.get("message"), str):
                raise ValueError("`error` must be an object with a string `message`")

    @staticmethod
    def _first_text(candidates: Optional[List[Dict[str, Any]]]) -> str:
        # Only the first candidate's first part is ever used.
        if not candidates:
            raise ParseError("No response from AI")
        parts = candidates[0]["content"]["parts"]
        if not parts:
            raise ParseError("No response from AI")
        return parts[0]["text"]

    async def _post(self, client: httpx.AsyncClient, body: Dict[str, Any]) -> httpx.Response:
        try:
            return await client.post(
                self.endpoint_url(),
                json=body,
                headers={"Content-Type": "application/json"},
                follow_redirects=True,
            )
        except httpx.HTTPError as exc:
            raise NetworkError(str(exc) or exc.__class__.__name__) from exc

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def complete(self, prompt: str, *, system: Optional[str] = None) -> str:
        """Send *prompt* (plus optional *system* instruction) and return the reply text."""
        if not self.config.is_ready():
            raise NotConfiguredError()

        body = self.build_request(prompt, system)
        logger.debug(
            "POST %s/models/%s:generateContent (%d chars)",
            self.config.base_url,
            self.config.model,
            len(prompt),
        )

        if self._http_client is not None:
            response = await self._post(self._http_client, body)
        else:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await self._post(client, body)

        if response.status_code == 429:
            logger.warning("Rate limited by %s", self.config.base_url)
            raise RateLimitedError()

        if not response.is_success:
            text = response.text or ""
            logger.warning("AI request failed with HTTP %s", response.status_code)
            raise ApiError(
                f"{response.status_code} {response.reason_phrase}: {text}",
                status_code=response.status_code,
                body=text,
            )

        try:
            payload = response.json()
            self._validate_response(payload)
        except (ValueError, RecursionError) as exc:
            # json.JSONDecodeError is a ValueError; deep nesting overflows the decoder
            raise ParseError(str(exc)) from exc

        error = payload.get("error")
        if error is not None:
            logger.warning("AI endpoint reported an error: %s", error["message"])
            raise ApiError(error["message"], status_code=response.status_code)

        return self._first_text(payload.get("candidates"))
