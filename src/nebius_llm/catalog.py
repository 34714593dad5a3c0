"""Model catalog: ModelInfo and the Nebius AI Studio model table."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ModelInfo:
    """Metadata about a hosted model. Prices are USD per million tokens."""

    context_window: int
    max_tokens: int | None = None
    supports_images: bool = False
    supports_prompt_cache: bool = False
    input_price: float | None = None
    output_price: float | None = None
    description: str | None = None


NEBIUS_MODELS: dict[str, ModelInfo] = {
    "deepseek-ai/DeepSeek-V3": ModelInfo(
        max_tokens=32_000,
        context_window=96_000,
        input_price=0.5,
        output_price=1.5,
    ),
    "deepseek-ai/DeepSeek-V3-0324-fast": ModelInfo(
        max_tokens=128_000,
        context_window=128_000,
        input_price=2.0,
        output_price=6.0,
    ),
    "deepseek-ai/DeepSeek-R1": ModelInfo(
        max_tokens=32_000,
        context_window=96_000,
        input_price=0.8,
        output_price=2.4,
    ),
    "deepseek-ai/DeepSeek-R1-fast": ModelInfo(
        max_tokens=32_000,
        context_window=96_000,
        input_price=2.0,
        output_price=6.0,
    ),
    "meta-llama/Llama-3.3-70B-Instruct-fast": ModelInfo(
        max_tokens=32_000,
        context_window=96_000,
        input_price=0.25,
        output_price=0.75,
    ),
    "Qwen/Qwen2.5-32B-Instruct-fast": ModelInfo(
        max_tokens=8_192,
        context_window=32_768,
        input_price=0.13,
        output_price=0.4,
    ),
    "Qwen/Qwen2.5-Coder-32B-Instruct-fast": ModelInfo(
        max_tokens=128_000,
        context_window=128_000,
        input_price=0.1,
        output_price=0.3,
    ),
    "Qwen/QwQ-32B-fast": ModelInfo(
        max_tokens=8_192,
        context_window=32_768,
        input_price=0.5,
        output_price=1.5,
    ),
}

NEBIUS_DEFAULT_MODEL_ID = "Qwen/Qwen2.5-32B-Instruct-fast"


def get_model_info(model_id: str) -> ModelInfo | None:
    """Look up a model by its ID. Returns None if not found."""
    return NEBIUS_MODELS.get(model_id)


def list_models(*, supports_images: bool | None = None) -> list[str]:
    """List model IDs, optionally filtered by image support."""
    result = list(NEBIUS_MODELS)
    if supports_images is not None:
        result = [m for m in result if NEBIUS_MODELS[m].supports_images == supports_images]
    return result
