"""ProviderAdapter abstract base class."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from nebius_llm.catalog import ModelInfo
from nebius_llm.stream import ApiStream
from nebius_llm.types import Message


@dataclass(frozen=True)
class ModelDescriptor:
    """The resolved model: a catalog ID and its metadata."""

    id: str
    info: ModelInfo


class ProviderAdapter(ABC):
    """Interface that every provider adapter must implement."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider identifier (e.g., 'nebius')."""
        ...

    @abstractmethod
    def create_message(self, system_prompt: str, messages: list[Message]) -> ApiStream:
        """Send the conversation, return an async iterator of stream events."""
        ...

    @abstractmethod
    def get_model(self) -> ModelDescriptor:
        """Resolve the model this adapter sends requests to."""
        ...

    async def close(self) -> None:
        """Release resources (HTTP connections, etc.)."""
