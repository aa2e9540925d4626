"""Task-specific prompts on top of :class:`GeminiClient`."""
from __future__ import annotations

import logging
from typing import Optional

from .actions import Action, decode_action, strip_code_fence
from .client import GeminiClient
from .errors import ParseError
from .prompts import (
    CODE_ASSIST_PROMPT,
    COMMAND_PARSER_PROMPT,
    reply_message,
    reply_prompt,
)

logger = logging.getLogger(__name__)


class CommandInterpreter:
    """Turns free text into actions, reply drafts and code answers.

    Errors from the transport (including :class:`RateLimitedError`) propagate
    unchanged; nothing here retries.
    """

    def __init__(self, client: GeminiClient):
        self.client = client

    def is_ready(self) -> bool:
        return self.client.is_ready()

    async def parse_command(self, text: str) -> Action:
        """Translate a natural-language command into one :class:`Action`.

        ``Unknown`` is only returned when the model itself chose it. Output
        that is not valid JSON, or does not match a known action, raises
        :class:`ParseError` carrying the raw model text.
        """
        response = await self.client.complete(text, system=COMMAND_PARSER_PROMPT)
        try:
            action = decode_action(strip_code_fence(response))
        except (ValueError, RecursionError) as exc:
            raise ParseError(f"Invalid JSON: {exc} - Response: {response}") from exc
        logger.debug("Decoded command %r -> %s", text, action.to_dict())
        return action

    async def generate_reply(self, context: str, tone: Optional[str] = None) -> str:
        """Draft a reply to *context* (the serialised chat history)."""
        return await self.client.complete(reply_message(context), system=reply_prompt(tone))

    async def code_assist(self, query: str) -> str:
        return await self.client.complete(query, system=CODE_ASSIST_PROMPT)
