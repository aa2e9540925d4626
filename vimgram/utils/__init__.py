from .ansi import (
    Ansi,
    USER_LABEL,
    AI_LABEL,
    ACTION_LABEL,
    ERROR_LABEL,
    WARNING_LABEL,
    console,
)
from .spinner import Spinner

__all__ = [
    "Ansi",
    "USER_LABEL",
    "AI_LABEL",
    "ACTION_LABEL",
    "ERROR_LABEL",
    "WARNING_LABEL",
    "console",
    "Spinner",
]
