"""Chat assistant routes."""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends

from ...models.chat import ChatRequest, ChatResult, ResetResponse
from ...services.chat_bridge import ChatSessionBridge, get_chat_bridge
from ...services.gemini_client import UpstreamError
from ..middleware import (
    AuthContext,
    domain_error,
    get_auth_context,
    get_optional_auth_context,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/chat", response_model=ChatResult)
async def chat(
    body: ChatRequest,
    auth: AuthContext = Depends(get_auth_context),
    bridge: ChatSessionBridge = Depends(get_chat_bridge),
):
    """Send a message; the reply is generated with the current task list as context."""
    try:
        return await bridge.submit(auth.username, body.message)
    except UpstreamError as exc:
        logger.error(f"Gemini API error: {exc.detail or exc.message}")
        raise domain_error(exc) from exc


@router.post("/chat/reset", response_model=ResetResponse)
async def reset_chat(
    auth: Optional[AuthContext] = Depends(get_optional_auth_context),
    bridge: ChatSessionBridge = Depends(get_chat_bridge),
):
    """Clear the shared transcript. Only gated when STRICT_AUTH is enabled."""
    return await bridge.reset()
