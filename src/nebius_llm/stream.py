"""Output stream types: StreamEventType, StreamEvent, Usage."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import AsyncIterator


@dataclass(frozen=True)
class Usage:
    """Token usage statistics."""

    input_tokens: int = 0
    output_tokens: int = 0

    @property
    def total_tokens(self) -> int:
        return self.input_tokens + self.output_tokens

    def __add__(self, other: Usage) -> Usage:
        return Usage(
            input_tokens=self.input_tokens + other.input_tokens,
            output_tokens=self.output_tokens + other.output_tokens,
        )


class StreamEventType(Enum):
    """Types of streaming events."""

    TEXT = "text"
    REASONING = "reasoning"
    USAGE = "usage"


@dataclass(frozen=True)
class StreamEvent:
    """A single event in a streamed response. Tagged union via `type` field."""

    type: StreamEventType

    # TEXT
    text: str | None = None

    # REASONING
    reasoning: str | None = None

    # USAGE
    usage: Usage | None = None

    @property
    def input_tokens(self) -> int:
        return self.usage.input_tokens if self.usage is not None else 0

    @property
    def output_tokens(self) -> int:
        return self.usage.output_tokens if self.usage is not None else 0


ApiStream = AsyncIterator[StreamEvent]
