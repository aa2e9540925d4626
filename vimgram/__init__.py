"""Terminal chat client with a natural-language command layer.

Plain text typed at the prompt is translated by the AI into an action
(mute, unmute, search, send, reply) and shown before anything happens.

Commands (enter them as a line at the prompt):

    :help                 show this help
    :q, :quit             leave the program
    :ai status            show whether AI features are configured
    :ai setup             enter an API key / model and save them
    :model [NAME]         switch model for this session (picker without NAME)
    :reply [TONE]         draft a reply to the transcript (casual, formal, technical)
    :code QUERY           ask the coding assistant
    :clear                forget the transcript

Environment variables:

    VIMGRAM_AI_KEY        Gemini API key; overrides the saved config file
    NO_COLOR              disable coloured output
"""
from .core import (
    AIConfig,
    SUPPORTED_MODELS,
    CompletionError,
    NotConfiguredError,
    NetworkError,
    ApiError,
    ParseError,
    RateLimitedError,
    Action,
    Mute,
    Unmute,
    Search,
    Send,
    Reply,
    Unknown,
)
from .core.client import GeminiClient
from .core.interpreter import CommandInterpreter
from .cli import ChatCLI, run_cli

__all__ = [
    "AIConfig",
    "SUPPORTED_MODELS",
    "CompletionError",
    "NotConfiguredError",
    "NetworkError",
    "ApiError",
    "ParseError",
    "RateLimitedError",
    "Action",
    "Mute",
    "Unmute",
    "Search",
    "Send",
    "Reply",
    "Unknown",
    "GeminiClient",
    "CommandInterpreter",
    "ChatCLI",
    "run_cli",
]
