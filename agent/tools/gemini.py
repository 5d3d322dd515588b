from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from agent.errors import ModelCallError


logger = logging.getLogger("sid.gemini")


def _extract_text(data: Any) -> Optional[str]:
    if not isinstance(data, dict):
        return None
    candidates = data.get("candidates")
    if not isinstance(candidates, list) or not candidates or not isinstance(candidates[0], dict):
        return None
    content = candidates[0].get("content") or {}
    parts = content.get("parts") if isinstance(content, dict) else None
    if not isinstance(parts, list) or not parts or not isinstance(parts[0], dict):
        return None
    text = parts[0].get("text")
    return text if isinstance(text, str) else None


def _error_message(data: Any) -> Optional[str]:
    if not isinstance(data, dict) or not data.get("error"):
        return None
    error = data["error"]
    if isinstance(error, dict):
        return str(error.get("message") or error.get("status") or error)
    return str(error)


class GeminiTransport:
    """Calls the Gemini ``generateContent`` REST endpoint for one model at a time.

    Every failure mode (network, non-JSON body, ``error`` field, missing
    ``candidates[0].content.parts[0].text``) is raised as ``ModelCallError`` so
    the dispatcher can move on to the next candidate.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://generativelanguage.googleapis.com/v1beta",
        timeout: float = 15.0,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client = client

    def url_for(self, model_id: str) -> str:
        return f"{self.base_url}/models/{model_id}:generateContent"

    async def generate(
        self,
        model_id: str,
        prompt: str,
        temperature: float,
        max_output_tokens: int,
    ) -> str:
        payload: Dict[str, Any] = {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": {
                "temperature": temperature,
                "maxOutputTokens": max_output_tokens,
            },
        }
        logger.debug("POST %s (prompt_len=%s)", self.url_for(model_id), len(prompt))
        try:
            if self._client is not None:
                response = await self._post(self._client, model_id, payload)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await self._post(client, model_id, payload)
            data = response.json()
        except httpx.HTTPError as exc:
            raise ModelCallError(model_id, f"request failed: {exc}") from exc
        except ValueError as exc:
            raise ModelCallError(model_id, "response body is not JSON") from exc

        error_text = _error_message(data)
        if error_text:
            raise ModelCallError(model_id, error_text)

        text = _extract_text(data)
        if text is None:
            reason = "empty response"
            if response.status_code >= 400:
                reason = f"HTTP {response.status_code}"
            raise ModelCallError(model_id, reason)
        return text

    async def _post(
        self, client: httpx.AsyncClient, model_id: str, payload: Dict[str, Any]
    ) -> httpx.Response:
        # Key travels as a query parameter, never in logs.
        return await client.post(
            self.url_for(model_id),
            params={"key": self.api_key},
            json=payload,
            timeout=self.timeout,
        )
