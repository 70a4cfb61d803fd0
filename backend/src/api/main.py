"""FastAPI application main entry point."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

load_dotenv()

from .middleware import register_error_handlers  # noqa: E402
from .routes import auth, chat, system, tasks  # noqa: E402
from ..services.config import get_config  # noqa: E402

logger = logging.getLogger(__name__)

# Fails here, at import, when JWT_SECRET is missing.
config = get_config()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan handler to log startup settings."""
    logger.info(
        f"Starting Task Chat API (model={config.gemini_model}, "
        f"strict_auth={config.strict_auth}, token_ttl={config.token_ttl_seconds}s)"
    )
    if not config.gemini_api_key:
        logger.warning("GEMINI_API_KEY is not set; /chat will return upstream errors")
    yield
    logger.info("Task Chat API shutting down")


app = FastAPI(
    title="Task Chat API",
    description="Accounts, a shared task list and a task-aware chat assistant",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[config.cors_origin],
    allow_methods=["GET", "POST", "PATCH"],
    allow_headers=["Content-Type", "Authorization"],
)

register_error_handlers(app)

app.include_router(system.router, tags=["system"])
app.include_router(auth.router, tags=["auth"])
app.include_router(tasks.router, tags=["tasks"])
app.include_router(chat.router, tags=["chat"])


__all__ = ["app"]
