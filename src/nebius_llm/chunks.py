"""Decoding of raw chat-completion stream chunks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ChunkUsage:
    """Usage block of a stream chunk; missing counts decode as 0."""

    prompt_tokens: int = 0
    completion_tokens: int = 0


@dataclass(frozen=True)
class ChatCompletionChunk:
    """The fields of one stream chunk the adapter cares about."""

    content: str | None = None
    reasoning_content: str | None = None
    usage: ChunkUsage | None = None


def decode_chunk(raw: dict[str, Any]) -> ChatCompletionChunk:
    """Decode a raw JSON chunk, reading only the first choice's delta.

    Malformed pieces (non-dict choices, non-string deltas) decode as absent
    rather than raising.
    """
    content: str | None = None
    reasoning_content: str | None = None

    choices = raw.get("choices")
    if isinstance(choices, list) and choices and isinstance(choices[0], dict):
        delta = choices[0].get("delta")
        if isinstance(delta, dict):
            if isinstance(delta.get("content"), str):
                content = delta["content"]
            if isinstance(delta.get("reasoning_content"), str):
                reasoning_content = delta["reasoning_content"]

    return ChatCompletionChunk(
        content=content,
        reasoning_content=reasoning_content,
        usage=_decode_usage(raw.get("usage")),
    )


def _decode_usage(usage: Any) -> ChunkUsage | None:
    if not isinstance(usage, dict):
        return None
    return ChunkUsage(
        prompt_tokens=_to_count(usage.get("prompt_tokens")),
        completion_tokens=_to_count(usage.get("completion_tokens")),
    )


def _to_count(value: Any) -> int:
    try:
        count = int(value or 0)
    except (TypeError, ValueError, OverflowError):
        return 0
    return max(count, 0)
