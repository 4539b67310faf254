import re

from pydantic import BaseModel, Field, field_validator

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"
CONTROL_CHARS_RE = re.compile(r"[\x00-\x1f\x7f]")


class ContactRequest(BaseModel):
    name: str = Field(min_length=2, max_length=100)
    email: str = Field(min_length=3, max_length=200, pattern=EMAIL_PATTERN)
    message: str = Field(min_length=5, max_length=5000)

    @field_validator("name", "email", "message", mode="before")
    @classmethod
    def _strip(cls, value):
        if isinstance(value, str):
            return value.strip()
        return value

    @field_validator("name")
    @classmethod
    def _single_line_name(cls, value: str) -> str:
        # The name ends up in the notification's Subject header.
        if CONTROL_CHARS_RE.search(value):
            raise ValueError("Name must not contain control characters")
        return value


class ContactResponse(BaseModel):
    message: str
    email_sent: bool
