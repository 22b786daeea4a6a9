"""HTTP client for the Gemini ``generateContent`` REST endpoint.

Uses httpx with a single bounded timeout. Failed calls are not retried:
a statement extraction can take minutes, so the caller decides whether to
resubmit.
"""

import logging
from typing import Any

import httpx

# Handle both package imports and standalone imports
try:
    from ...config import ExtractionConfig
except ImportError:
    from config import ExtractionConfig

from .exceptions import TransportError

logger = logging.getLogger(__name__)

ERROR_TEXT_PREVIEW_CHARS = 2000


class GeminiClient:
    """Async HTTP client for Gemini content generation."""

    def __init__(self, config: ExtractionConfig):
        self._config = config
        self._client = httpx.AsyncClient(
            base_url=config.base_url.rstrip("/"),
            timeout=httpx.Timeout(config.timeout_seconds),
            headers={"Content-Type": "application/json"},
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def generate_content(self, payload: dict[str, Any]) -> dict[str, Any]:
        """Send one generateContent request.

        Returns the decoded JSON body.
        Raises TransportError on network errors, timeouts and non-2xx statuses.
        """
        path = f"/models/{self._config.model}:generateContent"

        try:
            resp = await self._client.post(
                path,
                headers={"x-goog-api-key": self._config.api_key or ""},
                json=payload,
            )
        except httpx.TimeoutException as e:
            logger.error(
                "Gemini request timed out after %dms: %s",
                self._config.timeout_ms,
                e,
            )
            raise TransportError(
                "Failed to process PDF with Gemini AI.",
                detail=f"Request timed out after {self._config.timeout_ms}ms",
            ) from e
        except httpx.HTTPError as e:
            logger.error("Gemini request failed: %s", e)
            raise TransportError(
                "Failed to process PDF with Gemini AI.", detail=str(e)
            ) from e

        if not resp.is_success:
            detail = self._error_detail(resp)
            logger.error("Gemini returned HTTP %d: %s", resp.status_code, detail)
            raise TransportError(
                "Failed to process PDF with Gemini AI.",
                detail=detail,
                status=resp.status_code,
            )

        try:
            return resp.json()
        except ValueError as e:
            logger.error("Gemini returned a non-JSON body: %s", resp.text[:200])
            raise TransportError(
                "Failed to process PDF with Gemini AI.",
                detail=f"Invalid JSON body from Gemini: {e}",
                status=resp.status_code,
            ) from e

    @staticmethod
    def _error_detail(resp: httpx.Response) -> Any:
        try:
            return resp.json()
        except ValueError:
            return resp.text[:ERROR_TEXT_PREVIEW_CHARS] or f"HTTP {resp.status_code}"
