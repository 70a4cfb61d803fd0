"""Pydantic models for data validation and serialization."""

from .auth import Credentials, JWTPayload, SignupResponse, TokenResponse
from .chat import ChatRequest, ChatResult, ChatTurn, ResetResponse
from .task import Task, TaskCreate
from .user import Account

__all__ = [
    "Account",
    "Credentials",
    "SignupResponse",
    "TokenResponse",
    "JWTPayload",
    "Task",
    "TaskCreate",
    "ChatTurn",
    "ChatRequest",
    "ChatResult",
    "ResetResponse",
]
