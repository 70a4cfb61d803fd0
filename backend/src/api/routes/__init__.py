"""HTTP API route handlers."""

from . import auth, chat, system, tasks

__all__ = ["auth", "chat", "system", "tasks"]
