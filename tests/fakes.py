from __future__ import annotations

from typing import Any, Mapping, Sequence

from app.ai.types import ChatMessage


class FakeAIClient:
    def __init__(self, *, answer: str = "Hi there", tokens: Sequence[str] = ("Hel", "lo"), error: Exception | None = None):
        self.answer = answer
        self.tokens = list(tokens)
        self.error = error
        self.seen: list[ChatMessage] = []
        self.closed = False
        self.yielded = 0

    async def complete(self, messages: Sequence[ChatMessage]) -> str:
        self.seen = list(messages)
        if self.error is not None:
            raise self.error
        return self.answer

    async def stream(self, messages: Sequence[ChatMessage]):
        self.seen = list(messages)
        try:
            for token in self.tokens:
                self.yielded += 1
                yield token
            if self.error is not None:
                raise self.error
        finally:
            self.closed = True


class FailingStore:
    def __init__(self, error: Exception):
        self.error = error

    def insert(self, table: str, row: Mapping[str, Any]):
        raise self.error

    def select(self, table: str, **kwargs: Any):
        raise self.error

    def update(self, table: str, row: Mapping[str, Any], filters: Mapping[str, Any]):
        raise self.error

    def increment(self, table: str, key: int, column: str) -> int:
        raise self.error
