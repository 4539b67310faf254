from typing import AsyncGenerator, Awaitable, Callable, Sequence
import hashlib
import json
import logging
import time

from app.utils.sse import sse
from app.core import events
from app.core.config import settings
from app.core.errors import PortfolioAPIError, UnexpectedError, ValidationError

from app.ai.types import AIClient, ChatMessage
from app.schemas.chat import AssistantRequest
from app.services.profile_service import build_profile_context, load_profile

logger = logging.getLogger("app.chat")


def _short_hash(value: str | None) -> str:
    normalized = (value or "").strip()
    if not normalized:
        return ""
    return hashlib.sha256(normalized.encode("utf-8")).hexdigest()[:12]


def build_messages(payload: AssistantRequest) -> list[ChatMessage]:
    """System context from the profile followed by the caller's conversation."""
    history: list[ChatMessage] = []
    if payload.messages:
        history = [
            ChatMessage(role=turn.role, content=turn.content.strip())
            for turn in payload.messages
            if turn.content.strip()
        ]
    elif payload.message and payload.message.strip():
        history = [ChatMessage(role="user", content=payload.message.strip())]

    if not history:
        raise ValidationError("A message or a messages array is required")
    if history[-1].role != "user":
        raise ValidationError("The last message must come from the user")

    history = history[-settings.chat_history_max :]
    system = ChatMessage(role="system", content=build_profile_context(load_profile()))
    return [system, *history]


def _log_request(provider: str, messages: Sequence[ChatMessage], *, stream: bool) -> None:
    question = messages[-1].content
    logger.info(
        json.dumps(
            {
                "event": "assistant_request",
                "provider": provider,
                "stream": stream,
                "turns": len(messages) - 1,
                "message_len": len(question),
                "message_hash": _short_hash(question),
            }
        )
    )


async def answer(client: AIClient, provider: str, messages: Sequence[ChatMessage]) -> str:
    started_at = time.perf_counter()
    _log_request(provider, messages, stream=False)
    text = await client.complete(messages)
    logger.info(
        json.dumps(
            {
                "event": "assistant_complete",
                "provider": provider,
                "answer_len": len(text),
                "duration_ms": int((time.perf_counter() - started_at) * 1000),
            }
        )
    )
    return text or "Sorry, I couldn't generate a response."


async def _tokens(first: str | None, upstream: AsyncGenerator[str, None]) -> AsyncGenerator[str, None]:
    if first is not None:
        yield first
    async for token in upstream:
        yield token


async def open_stream(
    client: AIClient,
    provider: str,
    messages: Sequence[ChatMessage],
    *,
    is_disconnected: Callable[[], Awaitable[bool]] | None = None,
) -> AsyncGenerator[str, None]:
    """Start the provider stream and wait for its first token.

    Errors raised before that token propagate to the caller so they keep their
    HTTP status. The returned generator relays the rest as SSE events.
    """
    _log_request(provider, messages, stream=True)
    upstream = client.stream(messages)
    try:
        first: str | None = await upstream.__anext__()
    except StopAsyncIteration:
        first = None
    except BaseException:
        await upstream.aclose()
        raise
    return stream_answer(upstream, provider, first, is_disconnected=is_disconnected)


async def stream_answer(
    upstream: AsyncGenerator[str, None],
    provider: str,
    first: str | None = None,
    *,
    is_disconnected: Callable[[], Awaitable[bool]] | None = None,
) -> AsyncGenerator[str, None]:
    """Relay provider tokens as SSE ``chunk`` events, ending with ``done``.

    Stops reading and closes the upstream stream as soon as the caller goes away.
    """
    started_at = time.perf_counter()
    tokens = _tokens(first, upstream)
    sent = 0
    cancelled = False
    try:
        async for token in tokens:
            if is_disconnected is not None and await is_disconnected():
                cancelled = True
                break
            sent += len(token)
            yield sse(events.CHUNK, token)
    except PortfolioAPIError as ex:
        logger.warning(
            json.dumps(
                {
                    "event": "assistant_stream_error",
                    "provider": provider,
                    "error": ex.message[: settings.log_message_max_chars],
                }
            )
        )
        yield sse(events.ERROR, json.dumps(ex.to_body()))
    except Exception as ex:
        logger.exception(
            json.dumps(
                {
                    "event": "assistant_stream_error",
                    "provider": provider,
                    "error": str(ex)[: settings.log_message_max_chars],
                }
            )
        )
        yield sse(events.ERROR, json.dumps(UnexpectedError().to_body()))
    finally:
        await tokens.aclose()
        await upstream.aclose()

    if cancelled:
        logger.info(json.dumps({"event": "assistant_stream_cancelled", "provider": provider, "sent_chars": sent}))
        return

    yield sse(events.DONE, "[DONE]")
    logger.info(
        json.dumps(
            {
                "event": "assistant_stream_complete",
                "provider": provider,
                "sent_chars": sent,
                "duration_ms": int((time.perf_counter() - started_at) * 1000),
            }
        )
    )
