"""Service layer for business logic and external integrations."""

from .accounts import AccountError, AccountService, get_account_service
from .auth import AuthError, AuthService, get_auth_service
from .chat_bridge import ChatSessionBridge, ChatTranscript, get_chat_bridge
from .config import AppConfig, get_config, reload_config
from .credentials import CredentialService, InMemoryCredentialStore, get_credential_service
from .gemini_client import GeminiClient, UpstreamError
from .task_registry import TaskNotFoundError, TaskRegistry, get_task_registry

__all__ = [
    "AppConfig",
    "get_config",
    "reload_config",
    "AuthService",
    "AuthError",
    "get_auth_service",
    "CredentialService",
    "InMemoryCredentialStore",
    "get_credential_service",
    "AccountService",
    "AccountError",
    "get_account_service",
    "TaskRegistry",
    "TaskNotFoundError",
    "get_task_registry",
    "GeminiClient",
    "UpstreamError",
    "ChatSessionBridge",
    "ChatTranscript",
    "get_chat_bridge",
]
