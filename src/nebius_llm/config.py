"""Adapter configuration."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

NEBIUS_BASE_URL = "https://api.studio.nebius.ai/v1"


@dataclass(frozen=True)
class NebiusConfig:
    """Credentials and model selection for the Nebius adapter.

    ``api_key`` may be absent here; it is only required once the HTTP
    client is created, so an adapter can be built before credentials exist.
    """

    api_key: str | None = None
    api_model_id: str | None = None
    base_url: str = NEBIUS_BASE_URL
    timeout: float = 60.0

    @classmethod
    def from_env(cls, *, environ: Mapping[str, str] | None = None) -> NebiusConfig:
        """Build a config from NEBIUS_* environment variables."""
        env = environ if environ is not None else os.environ
        return cls(
            api_key=env.get("NEBIUS_API_KEY") or None,
            api_model_id=env.get("NEBIUS_MODEL_ID") or None,
            base_url=env.get("NEBIUS_BASE_URL") or NEBIUS_BASE_URL,
        )
