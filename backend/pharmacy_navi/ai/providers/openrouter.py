from __future__ import annotations

import asyncio
import logging
import os
import time

import httpx

from .base import ChatMessage, ChatProvider, ProviderError


_RETRYABLE = {429, 500, 502, 503, 504}
_logger = logging.getLogger(__name__)


class OpenRouterProvider(ChatProvider):
    """
    Chat provider for any OpenAI-compatible `/chat/completions` endpoint.
    Defaults to OpenRouter; point OPENROUTER_BASE_URL at api.openai.com/v1 for OpenAI.
    """

    name = "openrouter"

    def __init__(self, *, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self.api_key = (os.getenv("OPENROUTER_API_KEY") or "").strip()
        self.base_url = (os.getenv("OPENROUTER_BASE_URL") or "https://openrouter.ai/api/v1").rstrip("/")
        self.chat_model = os.getenv("OPENROUTER_CHAT_MODEL", "openai/gpt-4o-mini")
        self.http_referer = (os.getenv("OPENROUTER_HTTP_REFERER") or "").strip() or None
        self.x_title = (os.getenv("OPENROUTER_X_TITLE") or "").strip() or None
        self.timeout_s = float(os.getenv("OPENROUTER_TIMEOUT_S", "60"))
        self.max_tokens = int(os.getenv("OPENROUTER_MAX_TOKENS", "800"))
        self.temperature = float(os.getenv("OPENROUTER_TEMPERATURE", "0.2"))
        self.max_retries = int(os.getenv("OPENROUTER_MAX_RETRIES", "1"))

        if not self.api_key:
            raise ProviderError(None, "OPENROUTER_API_KEY is not set")

        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout_s,
            headers=self._headers(),
            transport=transport,
        )

    def _headers(self) -> dict[str, str]:
        headers = {"Authorization": f"Bearer {self.api_key}"}
        if self.http_referer:
            headers["HTTP-Referer"] = self.http_referer
        if self.x_title:
            headers["X-Title"] = self.x_title
        return headers

    @staticmethod
    def _raise_error(res: httpx.Response) -> None:
        try:
            payload = res.json()
            message = payload.get("error", {}).get("message") or payload.get("message") or res.text
        except Exception:
            message = res.text
        raise ProviderError(res.status_code, str(message))

    @staticmethod
    def _retry_delay(res: httpx.Response | None, attempt: int) -> float:
        if res is not None and res.status_code == 429:
            retry_after = (res.headers.get("Retry-After") or "").strip()
            try:
                return min(float(retry_after) if retry_after else 1.0, 5.0)
            except ValueError:
                return 1.0
        return min(1.0 * (2**attempt), 5.0)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def chat(self, messages: list[ChatMessage]) -> str:
        payload = {
            "model": self.chat_model,
            "messages": [{"role": m.role, "content": m.content} for m in messages],
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
        }
        last_error: Exception | None = None
        for attempt in range(self.max_retries + 1):
            start = time.time()
            try:
                res = await self._client.post("/chat/completions", json=payload)
            except httpx.HTTPError as exc:
                last_error = exc
                _logger.info("chat transport error model=%s attempt=%s err=%s", self.chat_model, attempt, exc)
                if attempt < self.max_retries:
                    await asyncio.sleep(self._retry_delay(None, attempt))
                continue
            elapsed_ms = int((time.time() - start) * 1000)
            _logger.info("chat status=%s model=%s ms=%s", res.status_code, self.chat_model, elapsed_ms)
            if res.status_code >= 400:
                if res.status_code in _RETRYABLE and attempt < self.max_retries:
                    await asyncio.sleep(self._retry_delay(res, attempt))
                    continue
                self._raise_error(res)
            data = res.json()
            return data["choices"][0]["message"]["content"] or ""
        raise ProviderError(None, str(last_error or "unknown error"))
