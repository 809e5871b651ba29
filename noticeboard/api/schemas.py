from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Priority(str, Enum):
    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"
    URGENT = "urgent"


class Message(BaseModel):
    """A notice as returned by ``GET /api/messages``.

    ``priority`` is kept as the raw wire string so that a payload carrying an
    unknown level still renders with the fallback label.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    content: str
    author: str
    priority: str = Priority.NORMAL.value
    created_at: datetime
    updated_at: datetime
    expires_at: datetime | None = None
    enabled: bool | None = None

    @field_validator("priority", mode="before")
    @classmethod
    def coerce_priority(cls, value: Any) -> str:
        # A missing level is the default; any other non-string is kept as text
        # and falls through to the fallback label when rendered.
        if value is None:
            return Priority.NORMAL.value
        if isinstance(value, str):
            return value
        return str(value)


class CreateMessageRequest(BaseModel):
    title: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1)
    author: str = Field(..., min_length=1)
    priority: Priority = Priority.NORMAL
    expires_at: datetime | None = None

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)


class ErrorResponse(BaseModel):
    error_code: str | None = None
    message: str | None = None
    details: list[str] | None = None
    request_id: str | None = None
