"""Conversation transcript schemas for replay evaluation."""

from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field


class Speaker(str, Enum):
    ASSISTANT = "assistant"
    USER = "user"


class TranscriptTurn(BaseModel):
    """A single turn in a replayed conversation."""

    speaker: Speaker
    text: str
    timestamp: float
    actions: list[str] = Field(default_factory=list)
    citations: list[str] = Field(default_factory=list)
    flow: Optional[str] = None
    response_time_ms: Optional[float] = None


class ConversationTranscript(BaseModel):
    """Complete replay record for one session."""

    session_id: str
    tenant: str
    lang: str
    timestamp: datetime
    duration_seconds: float = 0.0
    turns: list[TranscriptTurn] = Field(default_factory=list)
    metadata: Optional[dict[str, Any]] = None

    def questions(self) -> list[str]:
        return [t.text for t in self.turns if t.speaker is Speaker.USER]

    def answers(self) -> list[str]:
        return [t.text for t in self.turns if t.speaker is Speaker.ASSISTANT]
