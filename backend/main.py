"""Entry point for running the FastAPI application.

Run from the repository root: ``python -m backend.main``.
"""

import logging

import uvicorn
from dotenv import load_dotenv

load_dotenv()

from backend.src.services.config import get_config  # noqa: E402

if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    # Refuses to start without JWT_SECRET.
    config = get_config()

    uvicorn.run(
        "backend.src.api.main:app",
        host="0.0.0.0",
        port=config.port,
        log_level="info",
    )
