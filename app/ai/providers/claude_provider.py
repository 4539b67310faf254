from __future__ import annotations

import json
from typing import Any, AsyncGenerator, Sequence

import httpx

from app.ai.config import AIConfig
from app.ai.types import ChatMessage
from app.core.errors import UpstreamError

ANTHROPIC_VERSION = "2023-06-01"


def _error_details(raw: bytes) -> Any:
    text = raw.decode("utf-8", errors="replace")
    try:
        return json.loads(text)
    except ValueError:
        return text


class ClaudeProvider:
    """Anthropic Messages API over plain httpx."""

    def __init__(self, config: AIConfig, transport: httpx.AsyncBaseTransport | None = None):
        if not config.api_key:
            raise UpstreamError("CLAUDE_API_KEY not configured")
        self._model = config.model
        self._api_key = config.api_key
        self._url = f"{(config.base_url or 'https://api.anthropic.com').rstrip('/')}/v1/messages"
        self._timeout = config.timeout_s
        self._max_tokens = config.max_tokens
        self._temperature = config.temperature
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self._timeout, transport=self._transport)

    def _headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "x-api-key": self._api_key,
            "anthropic-version": ANTHROPIC_VERSION,
        }

    def _body(self, messages: Sequence[ChatMessage], *, stream: bool) -> dict[str, Any]:
        system = "\n\n".join(m.content for m in messages if m.role == "system")
        body: dict[str, Any] = {
            "model": self._model,
            "max_tokens": self._max_tokens,
            "temperature": self._temperature,
            "messages": [m.as_dict() for m in messages if m.role != "system"],
        }
        if system:
            body["system"] = system
        if stream:
            body["stream"] = True
        return body

    async def complete(self, messages: Sequence[ChatMessage]) -> str:
        try:
            async with self._client() as client:
                response = await client.post(
                    self._url, headers=self._headers(), json=self._body(messages, stream=False)
                )
        except httpx.HTTPError as exc:
            raise UpstreamError("Claude request failed", details=str(exc)) from exc

        if response.status_code >= 400:
            raise UpstreamError(
                "Claude request failed",
                status_code=response.status_code,
                details=_error_details(response.content),
            )

        raw = response.json()
        parts = [
            str(block.get("text") or "")
            for block in raw.get("content", [])
            if isinstance(block, dict) and block.get("type") == "text"
        ]
        return "".join(parts).strip()

    async def stream(
        self, messages: Sequence[ChatMessage]
    ) -> AsyncGenerator[str, None]:
        try:
            async with self._client() as client:
                async with client.stream(
                    "POST", self._url, headers=self._headers(), json=self._body(messages, stream=True)
                ) as response:
                    if response.status_code >= 400:
                        raise UpstreamError(
                            "Claude request failed",
                            status_code=response.status_code,
                            details=_error_details(await response.aread()),
                        )
                    async for line in response.aiter_lines():
                        if not line.startswith("data:"):
                            continue
                        try:
                            event = json.loads(line[5:].strip())
                        except ValueError:
                            continue
                        kind = event.get("type")
                        if kind == "content_block_delta":
                            text = (event.get("delta") or {}).get("text")
                            if text:
                                yield text
                        elif kind == "error":
                            raise UpstreamError("Claude stream failed", details=event.get("error"))
                        elif kind == "message_stop":
                            break
        except httpx.HTTPError as exc:
            raise UpstreamError("Claude request failed", details=str(exc)) from exc
