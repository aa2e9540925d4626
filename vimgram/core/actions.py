"""Typed actions decoded from model output.

The set is closed: every decoded command is exactly one of :class:`Mute`,
:class:`Unmute`, :class:`Search`, :class:`Send`, :class:`Reply` or
:class:`Unknown`, selected by the ``action`` discriminant. Anything else is
rejected, never coerced.
"""
from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from typing import Any, Callable, ClassVar, Dict, Optional

from .prompts import resolve_tone

FENCE = "```"
U32_MAX = 2**32 - 1


@dataclass(frozen=True)
class Action:
    kind: ClassVar[str] = ""

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"action": self.kind}
        data.update(asdict(self))
        return data


@dataclass(frozen=True)
class Mute(Action):
    kind: ClassVar[str] = "mute"
    duration_seconds: int


@dataclass(frozen=True)
class Unmute(Action):
    kind: ClassVar[str] = "unmute"


@dataclass(frozen=True)
class Search(Action):
    kind: ClassVar[str] = "search"
    query: str
    from_user: Optional[str] = None


@dataclass(frozen=True)
class Send(Action):
    kind: ClassVar[str] = "send"
    to: str
    text: str


@dataclass(frozen=True)
class Reply(Action):
    kind: ClassVar[str] = "reply"
    tone: Optional[str] = None

    @property
    def effective_tone(self) -> str:
        return resolve_tone(self.tone)


@dataclass(frozen=True)
class Unknown(Action):
    kind: ClassVar[str] = "unknown"
    reason: str


# ---------------------------------------------------------------------------
# Field readers
# ---------------------------------------------------------------------------


def _required_str(data: Dict[str, Any], name: str) -> str:
    if name not in data:
        raise ValueError(f"missing field `{name}`")
    value = data[name]
    if not isinstance(value, str):
        raise ValueError(f"field `{name}` must be a string")
    return value


def _optional_str(data: Dict[str, Any], name: str) -> Optional[str]:
    value = data.get(name)
    if value is not None and not isinstance(value, str):
        raise ValueError(f"field `{name}` must be a string or null")
    return value


def _non_negative_int(data: Dict[str, Any], name: str) -> int:
    if name not in data:
        raise ValueError(f"missing field `{name}`")
    value = data[name]
    # bool is an int subclass
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"field `{name}` must be an integer")
    if value < 0:
        raise ValueError(f"field `{name}` must be non-negative")
    if value > U32_MAX:
        raise ValueError(f"field `{name}` must be at most {U32_MAX}")
    return value


_DECODERS: Dict[str, Callable[[Dict[str, Any]], Action]] = {
    Mute.kind: lambda d: Mute(duration_seconds=_non_negative_int(d, "duration_seconds")),
    Unmute.kind: lambda d: Unmute(),
    Search.kind: lambda d: Search(
        query=_required_str(d, "query"), from_user=_optional_str(d, "from_user")
    ),
    Send.kind: lambda d: Send(to=_required_str(d, "to"), text=_required_str(d, "text")),
    Reply.kind: lambda d: Reply(tone=_optional_str(d, "tone")),
    Unknown.kind: lambda d: Unknown(reason=_required_str(d, "reason")),
}


# ---------------------------------------------------------------------------
# Public helpers
# ---------------------------------------------------------------------------


def _trim_start(text: str, token: str) -> str:
    while text.startswith(token):
        text = text[len(token):]
    return text


def _trim_end(text: str, token: str) -> str:
    while text.endswith(token):
        text = text[: -len(token)]
    return text


def strip_code_fence(text: str) -> str:
    """Return *text* trimmed, without a surrounding markdown code fence."""
    trimmed = text.strip()
    if not trimmed.startswith(FENCE):
        return trimmed
    inner = _trim_start(trimmed, FENCE + "json")
    inner = _trim_start(inner, FENCE)
    inner = _trim_end(inner, FENCE)
    return inner.strip()


def decode_action(text: str) -> Action:
    """Decode a JSON document into an :class:`Action`. Raises ``ValueError``."""
    data = json.loads(text)
    if not isinstance(data, dict):
        raise ValueError("expected a JSON object")
    kind = data.get("action")
    if not isinstance(kind, str):
        raise ValueError("missing field `action`")
    decoder = _DECODERS.get(kind)
    if decoder is None:
        expected = ", ".join(f"`{name}`" for name in _DECODERS)
        raise ValueError(f"unknown variant `{kind}`, expected one of {expected}")
    return decoder(data)
