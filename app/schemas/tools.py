from __future__ import annotations

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator


class ToolAction(str, Enum):
    CHARCOUNT = "charcount"
    WORDCOUNT = "wordcount"
    HASH = "hash"
    TIMEZONE = "timezone"


class TextToolRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    text: StrictStr


class TimezoneRequest(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    from_timezone: str = Field(alias="fromTimezone", min_length=1)
    to_timezone: str = Field(alias="toTimezone", min_length=1)
    hour: int = Field(ge=1, le=12)
    minute: int = Field(ge=0, le=59)
    ampm: Literal["AM", "PM"]

    @field_validator("ampm", mode="before")
    @classmethod
    def _normalize_ampm(cls, value):
        if isinstance(value, str):
            return value.strip().upper()
        return value


class CharCountResponse(BaseModel):
    characters: int


class WordCountResponse(BaseModel):
    words: int


class HashResponse(BaseModel):
    hash: str


class TimezoneResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    original_time: str = Field(serialization_alias="originalTime")
    original_timezone: str = Field(serialization_alias="originalTimezone")
    converted_time: str = Field(serialization_alias="convertedTime")
    converted_timezone: str = Field(serialization_alias="convertedTimezone")


ToolResponse = CharCountResponse | WordCountResponse | HashResponse | TimezoneResponse
