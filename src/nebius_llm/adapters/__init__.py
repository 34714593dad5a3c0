"""Provider adapters."""

from nebius_llm.adapters.base import ModelDescriptor, ProviderAdapter
from nebius_llm.adapters.nebius import NebiusAdapter

__all__ = [
    "ModelDescriptor",
    "NebiusAdapter",
    "ProviderAdapter",
]
