from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional

import pytest

from agent.errors import ModelCallError
from config.settings import Settings, get_settings


class FakeTransport:
    """Records every call; answers from a per-model script."""

    def __init__(self, replies: Optional[Dict[str, Any]] = None) -> None:
        self.replies = replies or {}
        self.calls: List[str] = []
        self.prompts: List[str] = []

    async def generate(self, model_id, prompt, temperature, max_output_tokens):
        self.calls.append(model_id)
        self.prompts.append(prompt)
        reply = self.replies.get(model_id)
        if isinstance(reply, Exception):
            raise reply
        if reply is None:
            raise ModelCallError(model_id, "model not found")
        return reply


@pytest.fixture(autouse=True)
def _clear_settings_cache(monkeypatch: pytest.MonkeyPatch):
    for name in (
        "GEMINI_API_KEY",
        "GEMINI_MODELS",
        "GEMINI_API_BASE",
        "MODEL_TEMPERATURE",
        "MODEL_MAX_OUTPUT_TOKENS",
        "MODEL_TIMEOUT_SECONDS",
        "SYSTEM_PROMPT",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def make_settings(monkeypatch: pytest.MonkeyPatch) -> Callable[..., Settings]:
    def _make(**env: str) -> Settings:
        for key, value in env.items():
            monkeypatch.setenv(key, value)
        return Settings()

    return _make


@pytest.fixture
def fake_transport_cls():
    return FakeTransport
