import unittest

from app.ai.types import ChatMessage
from app.core.config import settings
from app.core.errors import UpstreamError, ValidationError
from app.schemas.chat import AssistantRequest
from app.services.chat_service import build_messages, open_stream
from tests.fakes import FakeAIClient


class BuildMessagesTests(unittest.TestCase):
    def test_single_message(self):
        messages = build_messages(AssistantRequest(message="  Hello  "))
        self.assertEqual(messages[0].role, "system")
        self.assertEqual(messages[1:], [ChatMessage(role="user", content="Hello")])

    def test_history_is_capped(self):
        turns = []
        for i in range(settings.chat_history_max + 5):
            turns.append({"role": "user" if i % 2 == 0 else "assistant", "content": f"turn {i}"})
        turns.append({"role": "user", "content": "last"})
        messages = build_messages(AssistantRequest(messages=turns))
        self.assertEqual(len(messages), settings.chat_history_max + 1)
        self.assertEqual(messages[-1].content, "last")

    def test_blank_turns_are_dropped_and_empty_rejected(self):
        with self.assertRaises(ValidationError):
            build_messages(AssistantRequest(messages=[{"role": "user", "content": "  "}]))
        with self.assertRaises(ValidationError):
            build_messages(AssistantRequest())


def _messages():
    return build_messages(AssistantRequest(message="hi"))


class StreamAnswerTests(unittest.IsolatedAsyncioTestCase):
    async def collect(self, fake: FakeAIClient, **kwargs) -> list[str]:
        relay = await open_stream(fake, "openai", _messages(), **kwargs)
        return [e async for e in relay]

    async def test_relays_tokens_then_done(self):
        fake = FakeAIClient(tokens=["a", "b"])
        events = await self.collect(fake)
        self.assertEqual(
            events,
            ["event: chunk\ndata: a\n\n", "event: chunk\ndata: b\n\n", "event: done\ndata: [DONE]\n\n"],
        )
        self.assertTrue(fake.closed)

    async def test_empty_stream_is_just_done(self):
        events = await self.collect(FakeAIClient(tokens=[]))
        self.assertEqual(events, ["event: done\ndata: [DONE]\n\n"])

    async def test_multiline_token_keeps_sse_framing(self):
        events = await self.collect(FakeAIClient(tokens=["line one\nline two"]))
        self.assertEqual(events[0], "event: chunk\ndata: line one\ndata: line two\n\n")

    async def test_disconnect_stops_and_closes_upstream(self):
        fake = FakeAIClient(tokens=["a", "b", "c", "d"])
        calls = 0

        async def is_disconnected() -> bool:
            nonlocal calls
            calls += 1
            return calls > 1

        events = await self.collect(fake, is_disconnected=is_disconnected)
        self.assertEqual(events, ["event: chunk\ndata: a\n\n"])
        self.assertTrue(fake.closed)
        self.assertEqual(fake.yielded, 2)

    async def test_error_before_first_token_is_raised(self):
        fake = FakeAIClient(tokens=[], error=UpstreamError("OpenAI request failed", status_code=401))
        with self.assertRaises(UpstreamError) as ctx:
            await open_stream(fake, "openai", _messages())
        self.assertEqual(ctx.exception.status_code, 401)
        self.assertTrue(fake.closed)

    async def test_unexpected_error_mid_stream_is_generic(self):
        fake = FakeAIClient(tokens=["a"], error=RuntimeError("socket exploded"))
        events = await self.collect(fake)
        self.assertEqual(events[0], "event: chunk\ndata: a\n\n")
        self.assertEqual(events[1], 'event: error\ndata: {"error": "Internal server error"}\n\n')
        self.assertEqual(events[-1], "event: done\ndata: [DONE]\n\n")
        self.assertTrue(fake.closed)


if __name__ == "__main__":
    unittest.main()
