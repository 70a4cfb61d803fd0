"""HTTP API routes for task operations."""

from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends

from ...models.task import Task, TaskCreate
from ...services.task_registry import TaskNotFoundError, TaskRegistry, get_task_registry
from ..middleware import (
    AuthContext,
    domain_error,
    get_auth_context,
    get_optional_auth_context,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/tasks", response_model=Task)
async def create_task(
    body: TaskCreate,
    auth: AuthContext = Depends(get_auth_context),
    registry: TaskRegistry = Depends(get_task_registry),
):
    """Create a task; any extra fields in the body are stored with it."""
    return registry.create(auth.username, body)


@router.get("/tasks", response_model=List[Task])
async def list_tasks(
    auth: AuthContext = Depends(get_auth_context),
    registry: TaskRegistry = Depends(get_task_registry),
):
    """List every task (tasks are shared across accounts)."""
    return registry.list_all(auth.username)


@router.patch("/tasks/{task_id}/complete", response_model=Task)
async def complete_task(
    task_id: str,
    auth: Optional[AuthContext] = Depends(get_optional_auth_context),
    registry: TaskRegistry = Depends(get_task_registry),
):
    """Mark a task as completed. Only gated when STRICT_AUTH is enabled."""
    try:
        return registry.mark_complete(_parse_task_id(task_id))
    except TaskNotFoundError as exc:
        raise domain_error(exc) from exc


def _parse_task_id(raw: str) -> int:
    try:
        return int(raw)
    except ValueError:
        raise TaskNotFoundError(raw) from None
