"""Liveness routes."""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter()


@router.get("/", response_class=PlainTextResponse)
async def root():
    """Plain-text liveness string."""
    return "Backend is running!"


@router.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}
