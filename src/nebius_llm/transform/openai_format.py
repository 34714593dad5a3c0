"""Translate Messages into OpenAI Chat Completions message dicts."""

from __future__ import annotations

import json
from typing import Any

from nebius_llm.types import ContentKind, ContentPart, Message, Role, ToolCallData, ToolResultData

IMAGE_PLACEHOLDER = "(see following user message for image)"


def convert_to_openai_messages(messages: list[Message]) -> list[dict[str, Any]]:
    """Convert a conversation to the per-role OpenAI chat format.

    Tool results carried in user (or tool) turns become separate ``tool``
    messages placed before the remaining user content. Thinking parts are
    not sent back to the provider.
    """
    translated: list[dict[str, Any]] = []

    for message in messages:
        if message.role in (Role.SYSTEM, Role.DEVELOPER):
            translated.append({"role": message.role.value, "content": message.text})
        elif message.role == Role.ASSISTANT:
            translated.append(_translate_assistant(message))
        else:
            translated.extend(_translate_user(message))

    return translated


def _translate_user(message: Message) -> list[dict[str, Any]]:
    tool_messages: list[dict[str, Any]] = []
    parts: list[dict[str, Any]] = []

    for part in message.content:
        if part.kind == ContentKind.TOOL_RESULT and part.tool_result is not None:
            content, images = _flatten_tool_result(part.tool_result)
            tool_messages.append(
                {
                    "role": "tool",
                    "tool_call_id": part.tool_result.tool_call_id,
                    "content": content,
                }
            )
            parts.extend(images)
        elif part.kind == ContentKind.TEXT and part.text is not None:
            parts.append({"type": "text", "text": part.text})
        elif part.kind == ContentKind.IMAGE and part.image is not None:
            parts.append(_image_url_part(part))

    result = list(tool_messages)
    if not parts:
        return result

    # A lone text part is sent as a plain string, anything else as a part list.
    if len(parts) == 1 and parts[0]["type"] == "text":
        result.append({"role": "user", "content": parts[0]["text"]})
    else:
        result.append({"role": "user", "content": parts})
    return result


def _translate_assistant(message: Message) -> dict[str, Any]:
    text_parts: list[str] = []
    tool_calls: list[dict[str, Any]] = []

    for part in message.content:
        if part.kind == ContentKind.TEXT and part.text is not None:
            text_parts.append(part.text)
        elif part.kind == ContentKind.TOOL_CALL and part.tool_call is not None:
            tool_calls.append(_translate_tool_call(part.tool_call))

    content = "\n".join(text_parts)
    translated: dict[str, Any] = {
        "role": "assistant",
        "content": None if not content and tool_calls else content,
    }
    if tool_calls:
        translated["tool_calls"] = tool_calls
    return translated


def _translate_tool_call(tool_call: ToolCallData) -> dict[str, Any]:
    arguments: str
    if isinstance(tool_call.arguments, dict):
        arguments = json.dumps(tool_call.arguments)
    else:
        arguments = tool_call.arguments

    return {
        "id": tool_call.id,
        "type": tool_call.type,
        "function": {
            "name": tool_call.name,
            "arguments": arguments,
        },
    }


def _flatten_tool_result(result: ToolResultData) -> tuple[str, list[dict[str, Any]]]:
    """Return the tool message text and any image parts to forward as user content."""
    if isinstance(result.content, str):
        return result.content, []

    lines: list[str] = []
    images: list[dict[str, Any]] = []
    for part in result.content:
        if part.kind == ContentKind.IMAGE and part.image is not None:
            lines.append(IMAGE_PLACEHOLDER)
            images.append(_image_url_part(part))
        elif part.kind == ContentKind.TEXT and part.text is not None:
            lines.append(part.text)
    return "\n".join(lines), images


def _image_url_part(part: ContentPart) -> dict[str, Any]:
    assert part.image is not None
    return {"type": "image_url", "image_url": {"url": part.image.to_url()}}
