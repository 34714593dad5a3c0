"""Streaming chat adapter for Nebius AI Studio."""

from nebius_llm.adapters import ModelDescriptor, NebiusAdapter, ProviderAdapter
from nebius_llm.catalog import NEBIUS_DEFAULT_MODEL_ID, NEBIUS_MODELS, ModelInfo
from nebius_llm.client import NebiusClient
from nebius_llm.config import NebiusConfig
from nebius_llm.errors import ClientInitError, ConfigurationError, SDKError
from nebius_llm.highlevel import MessageSummary, StreamAccumulator, StreamResult
from nebius_llm.retry import RetryPolicy, retry, retry_stream
from nebius_llm.stream import ApiStream, StreamEvent, StreamEventType, Usage
from nebius_llm.types import ContentPart, ImageData, Message, Role

__all__ = [
    "ApiStream",
    "ClientInitError",
    "ConfigurationError",
    "ContentPart",
    "ImageData",
    "Message",
    "MessageSummary",
    "ModelDescriptor",
    "ModelInfo",
    "NEBIUS_DEFAULT_MODEL_ID",
    "NEBIUS_MODELS",
    "NebiusAdapter",
    "NebiusClient",
    "NebiusConfig",
    "ProviderAdapter",
    "RetryPolicy",
    "Role",
    "SDKError",
    "StreamAccumulator",
    "StreamEvent",
    "StreamEventType",
    "StreamResult",
    "Usage",
    "retry",
    "retry_stream",
]
