"""Conversation types: Role, ContentKind, ContentPart, Message."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Role(Enum):
    """Who produced a message."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"
    TOOL = "tool"
    DEVELOPER = "developer"


class ContentKind(Enum):
    """Discriminator for the ContentPart tagged union."""

    TEXT = "text"
    IMAGE = "image"
    TOOL_CALL = "tool_call"
    TOOL_RESULT = "tool_result"
    THINKING = "thinking"


@dataclass(frozen=True)
class ImageData:
    """Image as a URL or base64-encoded data."""

    url: str | None = None
    data: str | None = None
    media_type: str | None = None

    def to_url(self) -> str:
        """Return a URL usable in an ``image_url`` part (data URL for inline data)."""
        if self.url is not None:
            return self.url
        media_type = self.media_type or "image/png"
        return f"data:{media_type};base64,{self.data or ''}"


@dataclass(frozen=True)
class ToolCallData:
    """A model-initiated tool invocation."""

    id: str
    name: str
    arguments: dict[str, Any] | str
    type: str = "function"


@dataclass(frozen=True)
class ToolResultData:
    """The result of executing a tool call."""

    tool_call_id: str
    content: str | list[ContentPart]
    is_error: bool = False


@dataclass(frozen=True)
class ThinkingData:
    """Model reasoning/thinking content."""

    text: str
    signature: str | None = None


@dataclass(frozen=True)
class ContentPart:
    """A single content part within a message. Tagged union via `kind` field."""

    kind: ContentKind
    text: str | None = None
    image: ImageData | None = None
    tool_call: ToolCallData | None = None
    tool_result: ToolResultData | None = None
    thinking: ThinkingData | None = None

    @staticmethod
    def text_part(text: str) -> ContentPart:
        """Create a text content part."""
        return ContentPart(kind=ContentKind.TEXT, text=text)

    @staticmethod
    def image(image: ImageData) -> ContentPart:
        return ContentPart(kind=ContentKind.IMAGE, image=image)

    @staticmethod
    def tool_call(tool_call: ToolCallData) -> ContentPart:
        return ContentPart(kind=ContentKind.TOOL_CALL, tool_call=tool_call)

    @staticmethod
    def tool_result(tool_result: ToolResultData) -> ContentPart:
        return ContentPart(kind=ContentKind.TOOL_RESULT, tool_result=tool_result)

    @staticmethod
    def thinking(thinking: ThinkingData) -> ContentPart:
        return ContentPart(kind=ContentKind.THINKING, thinking=thinking)


# 'text' is both a field name and the preferred constructor name
ContentPart.text = staticmethod(ContentPart.text_part)  # type: ignore[attr-defined]


@dataclass
class Message:
    """A single turn in a conversation."""

    role: Role
    content: list[ContentPart] = field(default_factory=list)
    name: str | None = None

    @property
    def text(self) -> str:
        """Concatenate all TEXT content parts."""
        return "".join(
            part.text for part in self.content
            if part.kind == ContentKind.TEXT and part.text is not None
        )

    @classmethod
    def system(cls, text: str) -> Message:
        return cls(role=Role.SYSTEM, content=[ContentPart.text_part(text)])

    @classmethod
    def user(cls, text: str) -> Message:
        return cls(role=Role.USER, content=[ContentPart.text_part(text)])

    @classmethod
    def assistant(cls, text: str) -> Message:
        return cls(role=Role.ASSISTANT, content=[ContentPart.text_part(text)])

    @classmethod
    def tool_result(
        cls,
        tool_call_id: str,
        content: str,
        is_error: bool = False,
    ) -> Message:
        """A user turn carrying a single tool result."""
        return cls(
            role=Role.USER,
            content=[
                ContentPart.tool_result(
                    ToolResultData(
                        tool_call_id=tool_call_id,
                        content=content,
                        is_error=is_error,
                    )
                )
            ],
        )
