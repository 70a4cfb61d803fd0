"""Pydantic models for the task list."""

from __future__ import annotations

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field


class TaskCreate(BaseModel):
    """Request body for creating a task; unknown fields are kept on the task."""

    model_config = ConfigDict(extra="allow")

    title: Any = Field("", description="Short task description; any JSON value is kept")

    def extra_fields(self) -> Dict[str, Any]:
        """Caller-supplied fields other than the title."""
        return dict(self.model_extra or {})


class Task(BaseModel):
    """Stored task record."""

    model_config = ConfigDict(extra="allow")

    id: int = Field(..., description="Creation-time derived identifier")
    title: Any = Field("", description="Short task description; any JSON value is kept")
    completed: bool = False


__all__ = ["Task", "TaskCreate"]
