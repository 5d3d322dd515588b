from __future__ import annotations

import os
from functools import lru_cache
from typing import Optional, Tuple

from dotenv import load_dotenv


load_dotenv()

PORT = 8001

DEFAULT_MODELS = (
    "gemini-1.5-flash-latest",
    "gemini-1.5-pro-latest",
    "gemini-pro",
    "gemini-1.0-pro",
)
DEFAULT_SYSTEM_PROMPT = "You are SID (Smart Intelligent Assistant), a helpful AI assistant."


def _split_models(raw: Optional[str]) -> Tuple[str, ...]:
    if not raw:
        return DEFAULT_MODELS
    models = tuple(part.strip() for part in raw.split(",") if part.strip())
    return models or DEFAULT_MODELS


class Settings:
    """Application settings loaded from environment variables.

    Keep all credentials and config centralized here.
    """

    def __init__(self) -> None:
        self.app_env: str = os.getenv("APP_ENV", "development")
        self.gemini_api_key: Optional[str] = os.getenv("GEMINI_API_KEY") or None
        self.gemini_api_base: str = os.getenv(
            "GEMINI_API_BASE", "https://generativelanguage.googleapis.com/v1beta"
        ).rstrip("/")
        self.gemini_models: Tuple[str, ...] = _split_models(os.getenv("GEMINI_MODELS"))
        self.temperature: float = float(os.getenv("MODEL_TEMPERATURE", "0.8"))
        self.max_output_tokens: int = int(os.getenv("MODEL_MAX_OUTPUT_TOKENS", "600"))
        self.timeout_seconds: float = float(os.getenv("MODEL_TIMEOUT_SECONDS", "15"))
        self.system_prompt: str = os.getenv("SYSTEM_PROMPT", DEFAULT_SYSTEM_PROMPT)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
