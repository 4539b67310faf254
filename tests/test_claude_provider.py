import json
import unittest

import httpx

from app.ai.config import AIConfig
from app.ai.providers.claude_provider import ClaudeProvider
from app.ai.types import ChatMessage
from app.core.errors import UpstreamError

CONFIG = AIConfig(
    provider="claude",
    model="claude-test",
    api_key="test-key",
    base_url="https://claude.test",
    timeout_s=5.0,
    max_retries=0,
    max_tokens=100,
    temperature=0.2,
)

MESSAGES = [
    ChatMessage(role="system", content="You are a portfolio assistant."),
    ChatMessage(role="user", content="Hi"),
]


def _sse(event: str, payload: dict) -> str:
    return f"event: {event}\ndata: {json.dumps(payload)}\n\n"


class ClaudeProviderTests(unittest.IsolatedAsyncioTestCase):
    async def test_complete_sends_messages_api_request(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["headers"] = request.headers
            seen["body"] = json.loads(request.content)
            return httpx.Response(
                200,
                json={"content": [{"type": "text", "text": "Hello "}, {"type": "text", "text": "there"}]},
            )

        provider = ClaudeProvider(CONFIG, transport=httpx.MockTransport(handler))
        self.assertEqual(await provider.complete(MESSAGES), "Hello there")

        self.assertEqual(seen["url"], "https://claude.test/v1/messages")
        self.assertEqual(seen["headers"]["x-api-key"], "test-key")
        self.assertEqual(seen["headers"]["anthropic-version"], "2023-06-01")
        self.assertEqual(seen["body"]["system"], "You are a portfolio assistant.")
        self.assertEqual(seen["body"]["messages"], [{"role": "user", "content": "Hi"}])
        self.assertNotIn("stream", seen["body"])

    async def test_error_status_is_passed_through(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(401, json={"type": "error", "error": {"message": "invalid x-api-key"}})

        provider = ClaudeProvider(CONFIG, transport=httpx.MockTransport(handler))
        with self.assertRaises(UpstreamError) as ctx:
            await provider.complete(MESSAGES)
        self.assertEqual(ctx.exception.status_code, 401)
        self.assertEqual(ctx.exception.details["error"]["message"], "invalid x-api-key")

    async def test_stream_yields_text_deltas(self):
        body = "".join(
            [
                _sse("message_start", {"type": "message_start"}),
                _sse("content_block_delta", {"type": "content_block_delta", "delta": {"type": "text_delta", "text": "Hel"}}),
                "event: ping\ndata: {\"type\": \"ping\"}\n\n",
                _sse("content_block_delta", {"type": "content_block_delta", "delta": {"type": "text_delta", "text": "lo"}}),
                _sse("message_stop", {"type": "message_stop"}),
            ]
        )

        def handler(request: httpx.Request) -> httpx.Response:
            self.assertTrue(json.loads(request.content)["stream"])
            return httpx.Response(200, content=body.encode("utf-8"), headers={"content-type": "text/event-stream"})

        provider = ClaudeProvider(CONFIG, transport=httpx.MockTransport(handler))
        chunks = [chunk async for chunk in provider.stream(MESSAGES)]
        self.assertEqual(chunks, ["Hel", "lo"])

    async def test_stream_error_event_raises(self):
        body = _sse("error", {"type": "error", "error": {"type": "overloaded_error", "message": "Overloaded"}})

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, content=body.encode("utf-8"))

        provider = ClaudeProvider(CONFIG, transport=httpx.MockTransport(handler))
        with self.assertRaises(UpstreamError) as ctx:
            _ = [chunk async for chunk in provider.stream(MESSAGES)]
        self.assertEqual(ctx.exception.details["type"], "overloaded_error")

    def test_missing_key_is_reported(self):
        config = AIConfig(**{**CONFIG.__dict__, "api_key": ""})
        with self.assertRaises(UpstreamError) as ctx:
            ClaudeProvider(config)
        self.assertEqual(ctx.exception.message, "CLAUDE_API_KEY not configured")


if __name__ == "__main__":
    unittest.main()
