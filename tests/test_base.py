import json
import os
import tempfile
import unittest
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional
from unittest.mock import patch

import httpx

from vimgram import AIConfig, GeminiClient, CommandInterpreter

TEST_BASE_URL = "https://gemini.test/v1beta"


def ready_config(**overrides: Any) -> AIConfig:
    fields: Dict[str, Any] = {"api_key": "secret", "base_url": TEST_BASE_URL}
    fields.update(overrides)
    return AIConfig(**fields)


def gemini_body(text: str) -> Dict[str, Any]:
    """A successful generateContent response carrying *text*."""
    return {"candidates": [{"content": {"role": "model", "parts": [{"text": text}]}}]}


_open_transports: List["RecordingTransport"] = []


class RecordingTransport:
    """Wraps a handler in an ``httpx.MockTransport`` and remembers every request."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.requests: List[httpx.Request] = []
        self.http_clients: List[httpx.AsyncClient] = []
        self._handler = handler

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._handler(request)

    def bodies(self) -> List[Dict[str, Any]]:
        return [json.loads(r.content) for r in self.requests]

    def client(self, config: Optional[AIConfig] = None) -> GeminiClient:
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(self))
        self.http_clients.append(http_client)
        _open_transports.append(self)
        return GeminiClient(config or ready_config(), http_client=http_client)


def reply_with(text: str) -> RecordingTransport:
    return RecordingTransport(lambda request: httpx.Response(200, json=gemini_body(text)))


def interpreter_for(transport: RecordingTransport, config: Optional[AIConfig] = None) -> CommandInterpreter:
    return CommandInterpreter(transport.client(config))


class BaseTransportTest(unittest.IsolatedAsyncioTestCase):
    """Closes every http client handed out by a RecordingTransport."""

    async def asyncTearDown(self):
        while _open_transports:
            transport = _open_transports.pop()
            while transport.http_clients:
                await transport.http_clients.pop().aclose()


class BaseConfigTest(unittest.TestCase):
    """Redirects the config file into a temp dir and hides $VIMGRAM_AI_KEY."""

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.config_dir = Path(self._tmp.name) / "vimgram"
        self.config_path = self.config_dir / "ai.json"

        self.path_patcher = patch.object(AIConfig, "CONFIG_PATH", self.config_path)
        self.path_patcher.start()

        self.env_patcher = patch.dict(os.environ)
        self.env_patcher.start()
        os.environ.pop("VIMGRAM_AI_KEY", None)

    def tearDown(self):
        self.env_patcher.stop()
        self.path_patcher.stop()
        self._tmp.cleanup()

    def write_config(self, data: Any) -> None:
        self.config_dir.mkdir(parents=True, exist_ok=True)
        text = data if isinstance(data, str) else json.dumps(data)
        self.config_path.write_text(text)
