"""Nebius AI Studio provider adapter."""

from __future__ import annotations

import logging
from contextlib import aclosing
from typing import Any

import httpx

from nebius_llm.adapters.base import ModelDescriptor, ProviderAdapter
from nebius_llm.catalog import NEBIUS_DEFAULT_MODEL_ID, NEBIUS_MODELS
from nebius_llm.chunks import decode_chunk
from nebius_llm.client import NebiusClient
from nebius_llm.config import NebiusConfig
from nebius_llm.errors import ClientInitError, ConfigurationError
from nebius_llm.retry import RetryPolicy, retry_stream
from nebius_llm.stream import ApiStream, StreamEvent, StreamEventType, Usage
from nebius_llm.transform import convert_to_openai_messages, convert_to_r1_format
from nebius_llm.types import Message

logger = logging.getLogger(__name__)

# Model IDs containing this marker take the single-role R1 message format.
R1_MODEL_MARKER = "DeepSeek-R1"


class NebiusAdapter(ProviderAdapter):
    """Stream chat completions from Nebius AI Studio.

    The HTTP client is created on first use and reused until ``close()``.
    A closed adapter does not reopen; further calls raise
    ``ConfigurationError``. Each ``create_message`` call is wrapped as a
    whole by ``retry_stream`` using ``retry_policy``.
    """

    def __init__(
        self,
        config: NebiusConfig,
        *,
        http_client: httpx.AsyncClient | None = None,
        retry_policy: RetryPolicy | None = None,
    ):
        self._config = config
        self._http_client = http_client
        self._retry_policy = retry_policy or RetryPolicy()
        self._client: NebiusClient | None = None
        self._closed = False

    @property
    def name(self) -> str:
        return "nebius"

    @property
    def config(self) -> NebiusConfig:
        return self._config

    def ensure_client(self) -> NebiusClient:
        """Return the cached client, creating it on first call."""
        if self._closed:
            raise ConfigurationError("Nebius adapter has been closed")
        if self._client is None:
            if not self._config.api_key:
                raise ConfigurationError("Nebius API key is required")
            try:
                self._client = NebiusClient(
                    api_key=self._config.api_key,
                    base_url=self._config.base_url,
                    http_client=self._http_client,
                    timeout=self._config.timeout,
                )
            except Exception as exc:
                raise ClientInitError(f"Error creating Nebius client: {exc}", cause=exc) from exc
            logger.debug("Created Nebius client for %s", self._config.base_url)
        return self._client

    def get_model(self) -> ModelDescriptor:
        model_id = self._config.api_model_id
        if model_id is not None and model_id in NEBIUS_MODELS:
            return ModelDescriptor(id=model_id, info=NEBIUS_MODELS[model_id])
        return ModelDescriptor(id=NEBIUS_DEFAULT_MODEL_ID, info=NEBIUS_MODELS[NEBIUS_DEFAULT_MODEL_ID])

    def create_message(self, system_prompt: str, messages: list[Message]) -> ApiStream:
        return retry_stream(
            lambda: self._stream_message(system_prompt, messages),
            self._retry_policy,
        )

    async def close(self) -> None:
        self._closed = True
        if self._client is not None:
            await self._client.close()

    def _build_messages(
        self, model_id: str, system_prompt: str, messages: list[Message]
    ) -> list[dict[str, Any]]:
        if R1_MODEL_MARKER in model_id:
            logger.debug("Using R1 message format for %s", model_id)
            return convert_to_r1_format([Message.user(system_prompt), *messages])
        return [{"role": "system", "content": system_prompt}, *convert_to_openai_messages(messages)]

    async def _stream_message(self, system_prompt: str, messages: list[Message]) -> ApiStream:
        client = self.ensure_client()
        model = self.get_model()

        payload = {
            "model": model.id,
            "messages": self._build_messages(model.id, system_prompt, messages),
            "temperature": 0,
            "stream": True,
            "stream_options": {"include_usage": True},
        }

        async with aclosing(client.stream_chat_completion(payload)) as chunks:
            async for raw in chunks:
                chunk = decode_chunk(raw)

                if chunk.content:
                    yield StreamEvent(type=StreamEventType.TEXT, text=chunk.content)

                if chunk.reasoning_content:
                    yield StreamEvent(type=StreamEventType.REASONING, reasoning=chunk.reasoning_content)

                if chunk.usage is not None:
                    yield StreamEvent(
                        type=StreamEventType.USAGE,
                        usage=Usage(
                            input_tokens=chunk.usage.prompt_tokens,
                            output_tokens=chunk.usage.completion_tokens,
                        ),
                    )
