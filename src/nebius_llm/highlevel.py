"""Helpers for consuming an event stream."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from nebius_llm.stream import StreamEvent, StreamEventType, Usage


@dataclass
class MessageSummary:
    text: str
    reasoning: str | None
    usage: Usage | None


class StreamAccumulator:
    """Accumulate stream events into a MessageSummary."""

    def __init__(self) -> None:
        self._text_parts: list[str] = []
        self._reasoning_parts: list[str] = []
        self._usage: Usage | None = None

    def process(self, event: StreamEvent) -> None:
        if event.type == StreamEventType.TEXT and event.text:
            self._text_parts.append(event.text)
        elif event.type == StreamEventType.REASONING and event.reasoning:
            self._reasoning_parts.append(event.reasoning)
        elif event.type == StreamEventType.USAGE and event.usage is not None:
            # Usage chunks report running totals; the last one wins.
            self._usage = event.usage

    def summary(self) -> MessageSummary:
        reasoning = "".join(self._reasoning_parts)
        return MessageSummary(
            text="".join(self._text_parts),
            reasoning=reasoning or None,
            usage=self._usage,
        )


class StreamResult:
    """Async iterator wrapper with access to the accumulated summary."""

    def __init__(self, events: Any, *, accumulator: StreamAccumulator | None = None):
        self._events = events.__aiter__()
        self._accumulator = accumulator or StreamAccumulator()
        self._done = False

    def __aiter__(self) -> StreamResult:
        return self

    async def __anext__(self) -> StreamEvent:
        if self._done:
            raise StopAsyncIteration

        try:
            event = await anext(self._events)
        except StopAsyncIteration:
            self._done = True
            raise

        self._accumulator.process(event)
        return event

    async def summary(self) -> MessageSummary:
        """Drain the remaining events and return the summary."""
        if not self._done:
            async for _ in self:
                pass
        return self._accumulator.summary()
