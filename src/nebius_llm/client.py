"""HTTP client for the Nebius AI Studio chat-completions endpoint."""

from __future__ import annotations

import json
import logging
from typing import Any, AsyncIterator

import httpx

from nebius_llm.config import NEBIUS_BASE_URL
from nebius_llm.errors import (
    NetworkError,
    RequestTimeoutError,
    SDKError,
    error_from_status_code,
)
from nebius_llm.sse import parse_sse_events

logger = logging.getLogger(__name__)


class NebiusClient:
    """Thin streaming client for an OpenAI-compatible /chat/completions API."""

    provider = "nebius"

    def __init__(
        self,
        *,
        api_key: str,
        base_url: str = NEBIUS_BASE_URL,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = 60.0,
    ):
        if not api_key:
            raise ValueError("api_key must be a non-empty string")
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(base_url=self._base_url, timeout=timeout)

    @property
    def base_url(self) -> str:
        return self._base_url

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    def _build_headers(self) -> dict[str, str]:
        return {
            "authorization": f"Bearer {self._api_key}",
            "content-type": "application/json",
        }

    async def stream_chat_completion(
        self, payload: dict[str, Any]
    ) -> AsyncIterator[dict[str, Any]]:
        """POST a streaming request and yield each decoded JSON chunk."""
        url = f"{self._base_url}/chat/completions"
        logger.debug("POST %s model=%s", url, payload.get("model"))

        try:
            async with self._client.stream(
                "POST",
                url,
                json=payload,
                headers=self._build_headers(),
            ) as response:
                if response.status_code >= 400:
                    await response.aread()
                    raise self._error_from_response(response)

                async for _, data in parse_sse_events(response.aiter_lines()):
                    try:
                        chunk = json.loads(data)
                    except json.JSONDecodeError:
                        logger.debug("Skipping non-JSON stream data: %r", data[:200])
                        continue
                    if isinstance(chunk, dict):
                        yield chunk
        except httpx.TimeoutException as exc:
            raise RequestTimeoutError(f"Request to {url} timed out", cause=exc) from exc
        except httpx.TransportError as exc:
            raise NetworkError(f"Network error talking to {url}: {exc}", cause=exc) from exc

    def _error_from_response(self, response: httpx.Response) -> SDKError:
        retry_after: float | None = None
        header = response.headers.get("retry-after")
        if header is not None:
            try:
                retry_after = float(header)
            except ValueError:
                retry_after = None

        raw: dict[str, Any]
        try:
            raw = response.json()
        except ValueError:
            raw = {"body": response.text}

        message = f"Nebius API error (HTTP {response.status_code})"
        error_code: str | None = None
        if isinstance(raw, dict):
            error = raw.get("error")
            if isinstance(error, dict) and isinstance(error.get("message"), str):
                message = error["message"]
                if isinstance(error.get("code"), str):
                    error_code = error["code"]
            elif isinstance(raw.get("message"), str):
                message = raw["message"]
            elif isinstance(raw.get("detail"), str):
                message = raw["detail"]
        else:
            raw = {"body": raw}

        return error_from_status_code(
            status_code=response.status_code,
            message=message,
            provider=self.provider,
            retry_after=retry_after,
            raw=raw,
            error_code=error_code,
        )
