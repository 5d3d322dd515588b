from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Protocol, Tuple

from agent.core.prompt import SYSTEM_PROMPT, build_prompt
from agent.errors import ConfigurationError, ModelCallError
from agent.tools import GeminiTransport
from config.settings import DEFAULT_MODELS, Settings, get_settings


logger = logging.getLogger("sid.dispatcher")


class ModelTransport(Protocol):
    async def generate(
        self,
        model_id: str,
        prompt: str,
        temperature: float,
        max_output_tokens: int,
    ) -> str: ...


@dataclass(frozen=True)
class DispatcherConfig:
    models: Tuple[str, ...] = DEFAULT_MODELS
    system_prompt: str = SYSTEM_PROMPT
    temperature: float = 0.8
    max_output_tokens: int = 600

    @classmethod
    def from_settings(cls, settings: Settings) -> "DispatcherConfig":
        return cls(
            models=tuple(settings.gemini_models),
            system_prompt=settings.system_prompt,
            temperature=settings.temperature,
            max_output_tokens=settings.max_output_tokens,
        )


@dataclass(frozen=True)
class ModelAttemptResult:
    model_id: str
    text: Optional[str] = None
    reason: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.text is not None


@dataclass(frozen=True)
class DispatchResult:
    success: bool
    model_id: Optional[str] = None
    text: Optional[str] = None
    attempts: Tuple[ModelAttemptResult, ...] = field(default_factory=tuple)


class Dispatcher:
    """Tries each configured model in priority order until one answers."""

    def __init__(self, config: DispatcherConfig, transport: ModelTransport) -> None:
        self.config = config
        self.transport = transport

    async def dispatch(self, message: str) -> DispatchResult:
        prompt = build_prompt(message, self.config.system_prompt)
        attempts: List[ModelAttemptResult] = []

        for model_id in self.config.models:
            logger.info("Trying model: %s", model_id)
            try:
                text = await self.transport.generate(
                    model_id,
                    prompt,
                    self.config.temperature,
                    self.config.max_output_tokens,
                )
            except ModelCallError as exc:
                logger.warning("Model %s failed: %s", model_id, exc.reason)
                attempts.append(ModelAttemptResult(model_id=model_id, reason=exc.reason))
                continue
            except Exception as exc:
                logger.exception("Model %s raised unexpectedly: %s", model_id, exc)
                attempts.append(ModelAttemptResult(model_id=model_id, reason=str(exc)))
                continue

            logger.info("Success with model: %s", model_id)
            attempts.append(ModelAttemptResult(model_id=model_id, text=text))
            return DispatchResult(
                success=True, model_id=model_id, text=text, attempts=tuple(attempts)
            )

        logger.warning("All %s model attempts failed", len(attempts))
        return DispatchResult(success=False, attempts=tuple(attempts))


def require_api_key(settings: Settings) -> str:
    if not settings.gemini_api_key:
        raise ConfigurationError("Gemini API key is missing")
    return settings.gemini_api_key


def build_dispatcher(settings: Optional[Settings] = None) -> Dispatcher:
    settings = settings or get_settings()
    api_key = require_api_key(settings)

    transport = GeminiTransport(
        api_key=api_key,
        base_url=settings.gemini_api_base,
        timeout=settings.timeout_seconds,
    )
    return Dispatcher(DispatcherConfig.from_settings(settings), transport)
