"""AI configuration: credentials and endpoint selection.

Resolution order for :meth:`AIConfig.load`:

1. ``VIMGRAM_AI_KEY`` in the environment (other fields take defaults, the
   config file is not consulted at all).
2. The persisted ``ai.json`` file, used verbatim when it parses.
3. Built-in defaults, which are valid but not ready.
"""
from __future__ import annotations

import json
import logging
import os
import platform
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

ENV_API_KEY = "VIMGRAM_AI_KEY"
APP_NAME = "vimgram"
CONFIG_FILENAME = "ai.json"

DEFAULT_MODEL = "gemini-2.0-flash"
DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"

SUPPORTED_MODELS = [
    "gemini-2.0-flash",  # default
    "gemini-2.0-flash-lite",
    "gemini-2.5-flash",
    "gemini-2.5-pro",
]


def user_config_dir() -> Path:
    """Platform-conventional per-application config directory."""
    xdg = os.getenv("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / APP_NAME
    system = platform.system().lower()
    if system == "windows":
        base = os.getenv("APPDATA") or str(Path.home() / "AppData" / "Roaming")
        return Path(base) / APP_NAME
    if system == "darwin":
        return Path.home() / "Library" / "Application Support" / APP_NAME
    return Path.home() / ".config" / APP_NAME


def _mask(secret: str) -> str:
    if not secret:
        return "(not set)"
    if len(secret) <= 8:
        return "*" * len(secret)
    return f"{secret[:4]}…{secret[-4:]}"


@dataclass(frozen=True)
class AIConfig:
    """Immutable once loaded; use :meth:`with_updates` to derive a new one."""

    api_key: str = ""
    model: str = DEFAULT_MODEL
    base_url: str = DEFAULT_BASE_URL
    enabled: bool = True

    CONFIG_PATH = user_config_dir() / CONFIG_FILENAME

    # ------------------------------------------------------------------
    # (De)serialisation
    # ------------------------------------------------------------------

    @classmethod
    def from_dict(cls, data: Any) -> "AIConfig":
        """Decode the persisted JSON shape. Raises ``ValueError`` on bad input."""
        if not isinstance(data, dict):
            raise ValueError("config must be a JSON object")
        if "api_key" not in data:
            raise ValueError("missing field `api_key`")

        fields: Dict[str, Any] = {"api_key": data["api_key"]}
        for name in ("model", "base_url", "enabled"):
            if name in data:
                fields[name] = data[name]

        for name in ("api_key", "model", "base_url"):
            if name in fields and not isinstance(fields[name], str):
                raise ValueError(f"`{name}` must be a string")
        if "enabled" in fields and not isinstance(fields["enabled"], bool):
            raise ValueError("`enabled` must be a boolean")

        return cls(**fields)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "api_key": self.api_key,
            "model": self.model,
            "base_url": self.base_url,
            "enabled": self.enabled,
        }

    # ------------------------------------------------------------------
    # Loading & persistence
    # ------------------------------------------------------------------

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "AIConfig":
        """Resolve the configuration. Never raises."""
        api_key = os.environ.get(ENV_API_KEY)
        if api_key is not None:
            logger.debug("Using API key from $%s", ENV_API_KEY)
            return cls(api_key=api_key)

        path = path or cls.CONFIG_PATH
        if path.exists():
            try:
                return cls.from_dict(json.loads(path.read_text(encoding="utf-8")))
            except (OSError, ValueError) as exc:
                # json.JSONDecodeError is a ValueError
                logger.warning("Ignoring unreadable AI config %s: %s", path, exc)

        return cls()

    def save(self, path: Optional[Path] = None) -> Path:
        """Write the configuration as pretty-printed JSON. Raises ``OSError``."""
        path = path or self.CONFIG_PATH
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = path.with_suffix(".tmp")
        tmp_path.write_text(json.dumps(self.to_dict(), indent=2), encoding="utf-8")
        tmp_path.replace(path)
        logger.debug("Saved AI config to %s", path)
        return path

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def is_ready(self) -> bool:
        return self.enabled and bool(self.api_key)

    def with_updates(self, **changes: Any) -> "AIConfig":
        return replace(self, **changes)

    def describe(self) -> str:
        state = "ready" if self.is_ready() else "not ready"
        enabled = "enabled" if self.enabled else "disabled"
        return (
            f"{state} (key={_mask(self.api_key)}, model={self.model}, "
            f"{enabled}, base_url={self.base_url})"
        )
