from typing import Literal

from pydantic import BaseModel, Field


class ChatTurn(BaseModel):
    role: Literal["user", "assistant"]
    content: str = Field(max_length=8000)


class AssistantRequest(BaseModel):
    message: str | None = Field(default=None, max_length=8000)
    messages: list[ChatTurn] | None = Field(default=None, max_length=50)
    stream: bool = False


class AssistantResponse(BaseModel):
    answer: str


class ProfileQuestion(BaseModel):
    message: str = Field(default="", max_length=2000)
