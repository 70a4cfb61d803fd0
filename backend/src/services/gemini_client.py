"""Client for the Gemini generateContent endpoint."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx

from .config import AppConfig, get_config

logger = logging.getLogger(__name__)


class UpstreamError(Exception):
    """Raised when the generative-text service fails or answers unexpectedly."""

    def __init__(self, message: str, detail: Any = None):
        super().__init__(message)
        self.error = "upstream_error"
        self.message = message
        self.status_code = 500
        self.detail = detail


class GeminiClient:
    """Sends a ``contents`` conversation and returns the first candidate's text."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        *,
        config: AppConfig | None = None,
    ) -> None:
        config = config or get_config()
        self.api_key = api_key or config.gemini_api_key
        self.model = model or config.gemini_model
        self.base_url = config.gemini_base_url
        self.timeout = config.gemini_timeout_seconds

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/models/{self.model}:generateContent"

    async def generate(self, contents: List[Dict[str, Any]]) -> str:
        """
        POST the conversation and extract ``candidates[0].content.parts[0].text``.

        Raises:
            UpstreamError: On missing API key, transport failure, non-2xx status
                or a response body without the expected reply path.
        """
        if not self.api_key:
            raise UpstreamError("GEMINI_API_KEY is not configured")

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(
                    self.endpoint,
                    params={"key": self.api_key},
                    json={"contents": contents},
                )
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as e:
            detail = _response_detail(e.response)
            logger.error(f"Gemini returned {e.response.status_code}: {detail}")
            raise UpstreamError(
                f"Gemini request failed with status {e.response.status_code}", detail
            ) from e
        except httpx.HTTPError as e:
            logger.error(f"Gemini request failed: {e}")
            raise UpstreamError(f"Gemini request failed: {e}") from e
        except ValueError as e:
            logger.error(f"Gemini returned a non-JSON body: {e}")
            raise UpstreamError("Gemini returned a non-JSON response") from e

        try:
            reply = data["candidates"][0]["content"]["parts"][0]["text"]
        except (KeyError, IndexError, TypeError) as e:
            logger.error(f"Unexpected Gemini response shape: {data}")
            raise UpstreamError("Malformed response from Gemini", data) from e

        if not isinstance(reply, str):
            raise UpstreamError("Malformed response from Gemini", data)
        return reply


def _response_detail(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text


__all__ = ["GeminiClient", "UpstreamError"]
