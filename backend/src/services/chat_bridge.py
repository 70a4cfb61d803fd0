"""Chat session bridge.

Keeps the process-wide transcript, builds the Gemini ``contents`` payload for
each turn (instructions, transcript, then the live task summary) and records
the model's reply. Turns are serialized by a single lock held across the
upstream call, so the transcript always alternates user/model.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, Iterable, List, Protocol

from ..models.chat import ChatResult, ChatTurn, ResetResponse
from ..models.task import Task
from .gemini_client import GeminiClient
from .task_registry import TaskRegistry, get_task_registry

logger = logging.getLogger(__name__)

SYSTEM_INSTRUCTIONS = """You are an AI assistant.
Always reply in **well-formatted markdown** with:
- Headings where appropriate
- Numbered or bulleted lists
- Bold for key points
- Short paragraphs instead of long blocks

Be concise and structured, not verbose."""

NO_TASKS_PLACEHOLDER = "No tasks yet."
TASK_CONTEXT_PREFIX = "FYI, here are the user's tasks:\n"


class ReplyGenerator(Protocol):
    async def generate(self, contents: List[Dict[str, Any]]) -> str: ...


def build_task_summary(tasks: Iterable[Task]) -> str:
    """Render one ``- title [done|pending]`` line per task."""
    lines = [
        f"- {task.title} [{'done' if task.completed else 'pending'}]" for task in tasks
    ]
    return "\n".join(lines) if lines else NO_TASKS_PLACEHOLDER


def _segment(role: str, text: str) -> Dict[str, Any]:
    return {"role": role, "parts": [{"text": text}]}


def build_contents(transcript: Iterable[ChatTurn], task_summary: str) -> List[Dict[str, Any]]:
    """Instructions first, transcript in order, task summary last."""
    contents = [_segment("user", SYSTEM_INSTRUCTIONS)]
    contents.extend(_segment(turn.role, turn.text) for turn in transcript)
    contents.append(_segment("user", TASK_CONTEXT_PREFIX + task_summary))
    return contents


class ChatTranscript:
    """Append-only list of turns plus the lock that serializes mutation."""

    def __init__(self) -> None:
        self._turns: List[ChatTurn] = []
        self.lock = asyncio.Lock()

    def append(self, role: str, text: str) -> ChatTurn:
        turn = ChatTurn(role=role, text=text)
        self._turns.append(turn)
        return turn

    def snapshot(self) -> List[ChatTurn]:
        return list(self._turns)

    def clear(self) -> None:
        self._turns.clear()

    def __len__(self) -> int:
        return len(self._turns)


class ChatSessionBridge:
    """Runs chat turns against the upstream model with the task list as context."""

    def __init__(
        self,
        tasks: TaskRegistry,
        generator: ReplyGenerator | None = None,
        transcript: ChatTranscript | None = None,
    ) -> None:
        self.tasks = tasks
        self.generator = generator or GeminiClient()
        self.transcript = transcript or ChatTranscript()

    async def submit(self, username: str, message: str) -> ChatResult:
        """
        Run one turn.

        The user turn is recorded even when the upstream call fails; the
        model turn only on success. UpstreamError propagates unchanged.
        """
        async with self.transcript.lock:
            self.transcript.append("user", message)

            summary = build_task_summary(self.tasks.list_all(username))
            contents = build_contents(self.transcript.snapshot(), summary)

            logger.info(f"Chat turn from {username!r} ({len(contents)} segments)")
            reply = await self.generator.generate(contents)

            self.transcript.append("model", reply)
            return ChatResult(
                reply=reply,
                chat_history=self.transcript.snapshot(),
                tasks=self.tasks.list_all(username),
            )

    async def reset(self) -> ResetResponse:
        async with self.transcript.lock:
            cleared = len(self.transcript)
            self.transcript.clear()
        logger.info(f"Chat history cleared ({cleared} turns)")
        return ResetResponse()


# Singleton instance for dependency injection
_chat_bridge: ChatSessionBridge | None = None


def get_chat_bridge() -> ChatSessionBridge:
    """Get or create the chat bridge singleton."""
    global _chat_bridge
    if _chat_bridge is None:
        _chat_bridge = ChatSessionBridge(get_task_registry())
    return _chat_bridge


__all__ = [
    "ChatSessionBridge",
    "get_chat_bridge",
    "ChatTranscript",
    "ReplyGenerator",
    "build_contents",
    "build_task_summary",
    "NO_TASKS_PLACEHOLDER",
    "SYSTEM_INSTRUCTIONS",
]
