from __future__ import annotations

import asyncio
from typing import Any, Dict, List

import pytest

from backend.src.models.chat import ChatTurn
from backend.src.models.task import Task, TaskCreate
from backend.src.services.chat_bridge import (
    NO_TASKS_PLACEHOLDER,
    SYSTEM_INSTRUCTIONS,
    ChatSessionBridge,
    build_contents,
    build_task_summary,
)
from backend.src.services.gemini_client import UpstreamError
from backend.src.services.task_registry import TaskRegistry


class FakeGenerator:
    """Returns scripted replies and records every payload it was sent."""

    def __init__(self, replies: List[str] | None = None, delay: float = 0.0):
        self.replies = list(replies or [])
        self.delay = delay
        self.calls: List[List[Dict[str, Any]]] = []

    async def generate(self, contents: List[Dict[str, Any]]) -> str:
        self.calls.append(contents)
        if self.delay:
            await asyncio.sleep(self.delay)
        return self.replies.pop(0)


class FailingGenerator:
    async def generate(self, contents: List[Dict[str, Any]]) -> str:
        raise UpstreamError("Gemini request failed with status 429", {"error": "quota"})


def test_task_summary_rendering() -> None:
    tasks = [Task(id=1, title="A", completed=True), Task(id=2, title="B", completed=False)]

    assert build_task_summary(tasks) == "- A [done]\n- B [pending]"


def test_task_summary_placeholder() -> None:
    assert build_task_summary([]) == NO_TASKS_PLACEHOLDER == "No tasks yet."


def test_contents_order_instructions_transcript_summary() -> None:
    turns = [ChatTurn(role="user", text="hi"), ChatTurn(role="model", text="hello")]

    contents = build_contents(turns, "- A [done]")

    assert contents[0] == {"role": "user", "parts": [{"text": SYSTEM_INSTRUCTIONS}]}
    assert contents[1] == {"role": "user", "parts": [{"text": "hi"}]}
    assert contents[2] == {"role": "model", "parts": [{"text": "hello"}]}
    assert contents[-1] == {
        "role": "user",
        "parts": [{"text": "FYI, here are the user's tasks:\n- A [done]"}],
    }
    assert len(contents) == 4


@pytest.mark.asyncio
async def test_two_turns_build_alternating_transcript() -> None:
    generator = FakeGenerator(["reply1", "reply2"])
    bridge = ChatSessionBridge(TaskRegistry(), generator=generator)

    await bridge.submit("alice", "hello")
    result = await bridge.submit("alice", "world")

    assert [(t.role, t.text) for t in result.chat_history] == [
        ("user", "hello"),
        ("model", "reply1"),
        ("user", "world"),
        ("model", "reply2"),
    ]
    assert result.reply == "reply2"
    # Second payload: instructions + 3 turns + summary
    assert len(generator.calls[1]) == 5


@pytest.mark.asyncio
async def test_submit_includes_live_tasks_last() -> None:
    registry = TaskRegistry()
    task = registry.create("alice", TaskCreate(title="Buy milk"))
    registry.create("alice", TaskCreate(title="Walk dog"))
    registry.mark_complete(task.id)
    generator = FakeGenerator(["ok"])
    bridge = ChatSessionBridge(registry, generator=generator)

    result = await bridge.submit("alice", "what's left?")

    last = generator.calls[0][-1]["parts"][0]["text"]
    assert last == "FYI, here are the user's tasks:\n- Buy milk [done]\n- Walk dog [pending]"
    assert [t.title for t in result.tasks] == ["Buy milk", "Walk dog"]


@pytest.mark.asyncio
async def test_upstream_failure_keeps_user_turn_only() -> None:
    bridge = ChatSessionBridge(TaskRegistry(), generator=FailingGenerator())

    with pytest.raises(UpstreamError) as excinfo:
        await bridge.submit("alice", "hello")

    assert excinfo.value.detail == {"error": "quota"}
    assert [t.role for t in bridge.transcript.snapshot()] == ["user"]
    assert not bridge.transcript.lock.locked()


@pytest.mark.asyncio
async def test_reset_clears_transcript() -> None:
    bridge = ChatSessionBridge(TaskRegistry(), generator=FakeGenerator(["r"]))
    await bridge.submit("alice", "hello")

    ack = await bridge.reset()

    assert ack.success is True
    assert ack.message == "Chat history cleared."
    assert bridge.transcript.snapshot() == []


@pytest.mark.asyncio
async def test_concurrent_turns_are_serialized() -> None:
    generator = FakeGenerator(["r1", "r2"], delay=0.01)
    bridge = ChatSessionBridge(TaskRegistry(), generator=generator)

    await asyncio.gather(bridge.submit("alice", "a"), bridge.submit("bob", "b"))

    roles = [t.role for t in bridge.transcript.snapshot()]
    assert roles == ["user", "model", "user", "model"]


def test_task_summary_renders_non_string_titles() -> None:
    tasks = [Task(id=1, title=5), Task(id=2, title=None, completed=True)]

    assert build_task_summary(tasks) == "- 5 [pending]\n- None [done]"
