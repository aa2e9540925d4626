from .config import AIConfig, SUPPORTED_MODELS, ENV_API_KEY
from .errors import (
    CompletionError,
    NotConfiguredError,
    NetworkError,
    ApiError,
    ParseError,
    RateLimitedError,
)
from .actions import Action, Mute, Unmute, Search, Send, Reply, Unknown

__all__ = [
    "AIConfig",
    "SUPPORTED_MODELS",
    "ENV_API_KEY",
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
]
