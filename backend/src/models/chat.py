"""Models for the chat assistant."""

from __future__ import annotations

from typing import List, Literal

from pydantic import BaseModel, ConfigDict, Field

from .task import Task


class ChatTurn(BaseModel):
    """Single transcript entry."""

    role: Literal["user", "model"]
    text: str


class ChatRequest(BaseModel):
    """Request body for a chat turn."""

    message: str = Field(..., description="User message for this turn")


class ChatResult(BaseModel):
    """Reply plus the state the assistant saw."""

    model_config = ConfigDict(populate_by_name=True)

    reply: str
    chat_history: List[ChatTurn] = Field(
        default_factory=list, alias="chatHistory"
    )
    tasks: List[Task] = Field(default_factory=list)


class ResetResponse(BaseModel):
    """Acknowledgement for clearing the transcript."""

    success: bool = True
    message: str = "Chat history cleared."


__all__ = ["ChatTurn", "ChatRequest", "ChatResult", "ResetResponse"]
