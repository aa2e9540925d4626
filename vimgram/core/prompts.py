"""Fixed system instructions used by :class:`CommandInterpreter`."""

from typing import Optional

COMMAND_PARSER_PROMPT = """You are a Telegram command parser. Convert natural language to JSON actions.
Available actions:
- {"action": "mute", "duration_seconds": <int>} - Mute current chat (e.g., 3600 for 1 hour)
- {"action": "unmute"} - Unmute current chat
- {"action": "search", "query": "<text>", "from_user": "<optional username>"} - Search messages
- {"action": "send", "to": "<username>", "text": "<message>"} - Send message to user
- {"action": "reply", "tone": "<casual|formal|technical>"} - Generate a reply draft
- {"action": "unknown", "reason": "<explanation>"} - If you can't understand the command

Respond with ONLY valid JSON, no explanation."""

TONE_INSTRUCTIONS = {
    "formal": "Use a professional, formal tone.",
    "technical": "Use a detailed, technical tone with specific terminology.",
    "casual": "Use a friendly, casual tone.",
}
DEFAULT_TONE = "casual"

REPLY_PROMPT_TEMPLATE = """You are helping draft a reply in a chat application.
Given the chat history, generate a helpful, concise reply.
{tone_instruction}
Do NOT include greetings unless the conversation warrants it.
Keep the reply brief and natural.
Respond with ONLY the reply text, no quotes or explanation."""

CODE_ASSIST_PROMPT = """You are a coding assistant integrated into a terminal app.
- Respond concisely
- Use markdown code blocks with language tags
- For debugging, explain the issue clearly
- Provide working, practical code examples"""


def resolve_tone(tone: Optional[str]) -> str:
    """Map *tone* onto a known tone; anything unrecognised (or None) is casual."""
    return tone if tone in TONE_INSTRUCTIONS else DEFAULT_TONE


def tone_instruction(tone: Optional[str]) -> str:
    return TONE_INSTRUCTIONS[resolve_tone(tone)]


def reply_prompt(tone: Optional[str]) -> str:
    return REPLY_PROMPT_TEMPLATE.format(tone_instruction=tone_instruction(tone))


def reply_message(context: str) -> str:
    return f"Chat history:\n{context}\n\nDraft a reply:"
