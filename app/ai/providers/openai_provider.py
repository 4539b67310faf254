from __future__ import annotations

from typing import AsyncGenerator, Sequence

from openai import APIError, APIStatusError, AsyncOpenAI

from app.ai.config import AIConfig
from app.ai.types import ChatMessage
from app.core.errors import UpstreamError


def _upstream_error(exc: APIError) -> UpstreamError:
    if isinstance(exc, APIStatusError):
        return UpstreamError(
            "OpenAI request failed",
            status_code=exc.status_code,
            details=exc.body if exc.body is not None else exc.message,
        )
    return UpstreamError("OpenAI request failed", details=str(exc))


class OpenAIProvider:
    def __init__(self, config: AIConfig):
        if not config.api_key:
            raise UpstreamError("OPENAI_API_KEY not configured")
        self._model = config.model
        self._temperature = config.temperature
        self._max_tokens = config.max_tokens
        self._client = AsyncOpenAI(
            api_key=config.api_key,
            base_url=config.base_url,
            timeout=config.timeout_s,
            max_retries=config.max_retries,
        )

    def _create_kwargs(self, messages: Sequence[ChatMessage], *, stream: bool) -> dict:
        return {
            "model": self._model,
            "messages": [m.as_dict() for m in messages],
            "temperature": self._temperature,
            "max_tokens": self._max_tokens,
            "stream": stream,
        }

    async def complete(self, messages: Sequence[ChatMessage]) -> str:
        try:
            response = await self._client.chat.completions.create(
                **self._create_kwargs(messages, stream=False)
            )
        except APIError as exc:
            raise _upstream_error(exc) from exc

        if not response.choices:
            return ""
        return (response.choices[0].message.content or "").strip()

    async def stream(
        self, messages: Sequence[ChatMessage]
    ) -> AsyncGenerator[str, None]:
        try:
            stream = await self._client.chat.completions.create(
                **self._create_kwargs(messages, stream=True)
            )
        except APIError as exc:
            raise _upstream_error(exc) from exc

        try:
            async for chunk in stream:
                if not chunk.choices:
                    continue
                text = getattr(chunk.choices[0].delta, "content", None)
                if text:
                    yield text
        except APIError as exc:
            raise _upstream_error(exc) from exc
        finally:
            await stream.close()
