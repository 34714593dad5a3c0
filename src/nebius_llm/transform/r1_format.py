"""Single-role folding format for DeepSeek-R1 style models.

R1 models reject system messages and consecutive turns from the same role,
so every message is flattened to a user or assistant turn and neighbours
with the same role are merged.
"""

from __future__ import annotations

from typing import Any

from nebius_llm.types import ContentKind, Message, Role


def convert_to_r1_format(messages: list[Message]) -> list[dict[str, Any]]:
    merged: list[dict[str, Any]] = []

    for message in messages:
        role = "assistant" if message.role == Role.ASSISTANT else "user"
        content = _flatten(message)

        if merged and merged[-1]["role"] == role:
            last = merged[-1]
            if isinstance(last["content"], str) and isinstance(content, str):
                last["content"] = f"{last['content']}\n{content}"
            else:
                last["content"] = _as_parts(last["content"]) + _as_parts(content)
        else:
            merged.append({"role": role, "content": content})

    return merged


def _flatten(message: Message) -> str | list[dict[str, Any]]:
    """Text-only messages become a string, messages with images a part list."""
    text_parts: list[str] = []
    image_parts: list[dict[str, Any]] = []

    for part in message.content:
        if part.kind == ContentKind.TEXT and part.text is not None:
            text_parts.append(part.text)
        elif part.kind == ContentKind.IMAGE and part.image is not None:
            image_parts.append({"type": "image_url", "image_url": {"url": part.image.to_url()}})
        elif part.kind == ContentKind.TOOL_RESULT and part.tool_result is not None:
            result = part.tool_result.content
            if isinstance(result, str):
                text_parts.append(result)
            else:
                text_parts.extend(
                    p.text for p in result if p.kind == ContentKind.TEXT and p.text is not None
                )

    if not image_parts:
        return "\n".join(text_parts)

    parts: list[dict[str, Any]] = []
    if text_parts:
        parts.append({"type": "text", "text": "\n".join(text_parts)})
    parts.extend(image_parts)
    return parts


def _as_parts(content: str | list[dict[str, Any]]) -> list[dict[str, Any]]:
    if isinstance(content, list):
        return content
    return [{"type": "text", "text": content}]
