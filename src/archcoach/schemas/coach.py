"""Pydantic models for the Strategy Coach chat transcript."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

from archcoach.schemas.architecture import Framework, new_id


class Message(BaseModel):
    """A single chat message shown in the coach transcript."""

    id: str = Field(default_factory=lambda: new_id("msg"))
    role: Literal["user", "assistant"]
    content: str
    timestamp: datetime = Field(default_factory=datetime.now)
    framework: Framework | None = None
    confidence: int | None = Field(default=None, ge=0, le=100)  # assistant messages only
