"""Interactive terminal front-end for the AI command layer.

The messaging session itself lives elsewhere; this REPL shows what the AI
makes of typed text and drafts replies against a local transcript.
"""
from __future__ import annotations

import argparse
import asyncio
import logging
import readline  # noqa: F401 – side-effect: history & line editing
from typing import Any, Awaitable, List, Optional

import questionary
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel

from .core import (
    AIConfig,
    SUPPORTED_MODELS,
    Action,
    CompletionError,
    NotConfiguredError,
    RateLimitedError,
    Mute,
    Unmute,
    Search,
    Send,
    Reply,
    Unknown,
)
from .core.client import GeminiClient
from .core.interpreter import CommandInterpreter
from .utils import (
    Ansi,
    USER_LABEL,
    AI_LABEL,
    ACTION_LABEL,
    ERROR_LABEL,
    WARNING_LABEL,
    Spinner,
    console,
)

logger = logging.getLogger(__name__)

TONES = ["casual", "formal", "technical"]


def describe_action(action: Action) -> str:
    """Human-readable one-liner for a decoded action."""
    if isinstance(action, Mute):
        return f"mute current chat for {action.duration_seconds}s"
    if isinstance(action, Unmute):
        return "unmute current chat"
    if isinstance(action, Search):
        who = f" from @{action.from_user}" if action.from_user else ""
        return f"search messages{who} for {action.query!r}"
    if isinstance(action, Send):
        return f"send to @{action.to}: {action.text}"
    if isinstance(action, Reply):
        return f"draft a {action.effective_tone} reply"
    if isinstance(action, Unknown):
        return f"not understood ({action.reason})"
    return repr(action)


# ---------------------------------------------------------------------------
# Helper classes
# ---------------------------------------------------------------------------


class ChatCLI:
    """High-level orchestration class for the interactive REPL.

    The CLI is the single owner of the active configuration: ``:ai setup`` and
    ``:model`` build a new :class:`AIConfig` and call :meth:`reload`.
    """

    def __init__(self, config: AIConfig, interpreter: Optional[CommandInterpreter] = None):
        self.config = config
        self.interpreter = interpreter or CommandInterpreter(GeminiClient(config))
        self.transcript: List[str] = []

    # ---------------- Utility ----------------

    def reload(self, config: AIConfig) -> None:
        """Replace the configuration and everything built from it."""
        self.config = config
        self.interpreter = CommandInterpreter(GeminiClient(config))
        logger.debug("AI client reloaded: %s", config.describe())

    def _error(self, message: str) -> None:
        console.print(f"\\[{ERROR_LABEL}] {escape(message)}")

    def _warning(self, message: str) -> None:
        console.print(f"\\[{WARNING_LABEL}] {escape(message)}")

    def _ensure_ready(self) -> bool:
        if self.interpreter.is_ready():
            return True
        self._error(str(NotConfiguredError()))
        return False

    def _run(self, call: Awaitable[Any]) -> Any:
        """Await *call* behind a spinner; report completion errors, return None on failure."""
        try:
            with Spinner(prefix=f"{AI_LABEL}> "):
                return asyncio.run(call)
        except RateLimitedError as exc:
            console.print()
            self._warning(str(exc))
        except CompletionError as exc:
            console.print()
            self._error(str(exc))
        except KeyboardInterrupt:
            console.print(escape("\n[interrupted]"))
        return None

    # -------------- Interactive pickers ---------------

    @staticmethod
    def _interactive_picker(
        title: str, options: List[str], current: Optional[str] = None
    ) -> Optional[str]:
        """Present *options* to the user and return the selected value."""
        if not options:
            console.print("(no items available)")
            return None
        try:
            return questionary.select(
                title,
                choices=options,
                default=current if current in options else None,
            ).ask()
        except (KeyboardInterrupt, EOFError):
            console.print()
            return None

    def setup(self) -> None:
        """Prompt for credentials, persist them and reload the client."""
        try:
            api_key = questionary.password("Gemini API key:").ask()
            if api_key is None:
                return
            model = questionary.select(
                "Model:",
                choices=SUPPORTED_MODELS,
                default=self.config.model if self.config.model in SUPPORTED_MODELS else None,
            ).ask()
            if model is None:
                return
            enabled = questionary.confirm("Enable AI features?", default=True).ask()
            if enabled is None:
                return
        except (KeyboardInterrupt, EOFError):
            console.print()
            return

        config = self.config.with_updates(
            api_key=api_key.strip() or self.config.api_key,
            model=model,
            enabled=enabled,
        )
        try:
            path = config.save()
            console.print(escape(f"[AI config saved to {path}]"))
        except OSError as exc:
            self._warning(f"Could not save AI config: {exc}")
        self.reload(config)
        console.print(escape(f"[AI {config.describe()}]"))

    # ---------------- Command handling ---------------

    def handle_command(self, line: str) -> bool:
        """Handle colon commands. Return False to exit REPL."""

        parts = line.strip().split()
        if not parts:
            return True

        cmd = parts[0].lower()

        if cmd == ":help":
            from . import __doc__ as _doc  # lazy import to avoid circularity

            console.print(_doc or "(no help available)")

        elif cmd in {":q", ":quit"}:
            console.print("Bye!")
            return False

        elif cmd == ":ai":
            sub = parts[1].lower() if len(parts) > 1 else "status"
            if sub == "status":
                console.print(escape(f"[AI {self.config.describe()}]"))
            elif sub == "setup":
                self.setup()
            else:
                console.print("Usage: :ai status|setup")

        elif cmd == ":model":
            if len(parts) == 1:
                selection = self._interactive_picker(
                    "Select a model:", SUPPORTED_MODELS, current=self.config.model
                )
            elif len(parts) == 2:
                selection = parts[1]
                if selection not in SUPPORTED_MODELS:
                    console.print("Unsupported model. Supported: " + ", ".join(SUPPORTED_MODELS))
                    selection = None
            else:
                console.print("Usage: :model <model_name>")
                selection = None

            if selection:
                self.reload(self.config.with_updates(model=selection))
                console.print(escape(f"[model switched to {self.config.model}]"))

        elif cmd == ":reply":
            tone = parts[1].lower() if len(parts) > 1 else None
            if tone is not None and tone not in TONES:
                console.print(escape("Usage: :reply [casual|formal|technical]"))
            else:
                self.draft_reply(tone)

        elif cmd == ":code":
            query = line.strip()[len(parts[0]):].strip()
            if not query:
                console.print("Usage: :code <question>")
            elif self._ensure_ready():
                answer = self._run(self.interpreter.code_assist(query))
                if answer is not None:
                    console.print(answer, markup=False)

        elif cmd == ":clear":
            self.transcript.clear()
            console.print(escape("[transcript cleared]"))

        else:
            self._error(f"Unknown command: {cmd} (see :help)")

        return True

    def draft_reply(self, tone: Optional[str] = None) -> Optional[str]:
        if not self.transcript:
            console.print("(transcript is empty – nothing to reply to)")
            return None
        if not self._ensure_ready():
            return None
        draft = self._run(self.interpreter.generate_reply("\n".join(self.transcript), tone))
        if draft is not None:
            console.print(draft, markup=False)
        return draft

    def handle_text(self, line: str) -> Optional[Action]:
        """Interpret free text and show the resulting action."""
        self.transcript.append(f"me: {line}")
        if not self._ensure_ready():
            return None

        action = self._run(self.interpreter.parse_command(line))
        if action is None:
            return None

        console.print(f"{ACTION_LABEL}> {escape(describe_action(action))}")
        if isinstance(action, Send):
            self.transcript.append(f"me -> @{action.to}: {action.text}")
        elif isinstance(action, Reply):
            self.draft_reply(action.tone)
        return action

    # ---------------- Interaction loop ---------------

    def repl(self) -> None:
        """Run the interactive read–eval–print-loop."""
        console.print(Panel.fit("vimgram", style="bold magenta"))

        status = "ready" if self.config.is_ready() else "not configured (run :ai setup)"
        console.print(
            Ansi.style("Type a command in plain words. Commands start with ':'.", Ansi.FG_YELLOW),
            Ansi.style(f"AI: {status}, model {self.config.model}.", Ansi.FG_YELLOW),
            Ansi.style("Type :help for help.", Ansi.FG_YELLOW),
            sep="\n",
        )

        while True:
            try:
                line = console.input(f"{USER_LABEL}> ").strip()
            except (EOFError, KeyboardInterrupt):
                console.print(escape("\n[signal caught – exiting]"))
                break

            if not line:
                continue

            if line.startswith(":"):
                if not self.handle_command(line):
                    break
                continue

            self.handle_text(line)


# ---------------------------------------------------------------------------
# Entrypoint helpers (keeping it separate simplifies __main__ handling)
# ---------------------------------------------------------------------------

def _parse_args() -> argparse.Namespace:  # pragma: no cover
    parser = argparse.ArgumentParser(
        description="Terminal chat client with natural-language commands."
    )
    parser.add_argument("--model", "-m", help="Model name to use for this session")
    parser.add_argument("--debug", action="store_true", help="Verbose logging")
    return parser.parse_args()


def run_cli() -> None:  # pragma: no cover
    args = _parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )

    config = AIConfig.load()
    if args.model:
        if args.model not in SUPPORTED_MODELS:
            console.print(
                f"Warning: model '{args.model}' is not in the supported list; using it anyway."
            )
        config = config.with_updates(model=args.model)

    ChatCLI(config).repl()


if __name__ == "__main__":  # pragma: no cover
    run_cli()
