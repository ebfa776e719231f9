"""Conversation message models.

Frozen dataclasses for chat messages and their typed content parts.
A Message is never mutated after construction; conversations grow by
appending new messages.
"""

from __future__ import annotations

import copy
import enum
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, Union

from agentloop.exceptions import InvalidMessageError


class Role(str, enum.Enum):
    """Speaker of a conversation turn."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"
    TOOL = "tool"


class ImageDetail(str, enum.Enum):
    """Resolution hint for image content parts."""

    LOW = "low"
    AUTO = "auto"
    HIGH = "high"


@dataclass(frozen=True)
class TextPart:
    """A plain-text content part."""

    text: str

    def to_dict(self) -> dict:
        return {"type": "text", "text": self.text}


@dataclass(frozen=True)
class ImagePart:
    """An image reference content part (URL or base64 data URI)."""

    url: str
    detail: ImageDetail = ImageDetail.AUTO

    def __post_init__(self) -> None:
        if not isinstance(self.detail, ImageDetail):
            object.__setattr__(self, "detail", ImageDetail(self.detail))

    def to_dict(self) -> dict:
        return {
            "type": "image_url",
            "image_url": {"url": self.url, "detail": self.detail.value},
        }


ContentPart = Union[TextPart, ImagePart]
MessageContent = Union[str, tuple[ContentPart, ...], None]


def _parse_part(part: ContentPart | Mapping[str, Any]) -> ContentPart:
    """Coerce a wire-format part dict into a typed content part."""
    if isinstance(part, (TextPart, ImagePart)):
        return part
    kind = part.get("type")
    if kind == "text":
        return TextPart(text=part.get("text", ""))
    if kind == "image_url":
        image = part.get("image_url") or {}
        return ImagePart(url=image.get("url", ""), detail=image.get("detail", "auto"))
    raise InvalidMessageError(f"Unsupported content part type: {kind!r}")


@dataclass(frozen=True)
class Message:
    """A single conversation turn.

    Attributes:
        role: Who produced the turn.
        content: Plain text, an ordered tuple of content parts, or None.
        tool_call_id: Correlation id linking a tool result to its call.
            Present exactly when ``role`` is ``tool``.
        raw: Opaque provider payload for assistant messages that carry
            tool calls. When set, it is replayed verbatim by ``to_dict()``
            so provider-specific fields (reasoning signatures and the like)
            survive the round trip.
    """

    role: Role
    content: MessageContent = None
    tool_call_id: str | None = None
    raw: Mapping[str, Any] | None = field(default=None, repr=False, compare=False)

    def __post_init__(self) -> None:
        try:
            role = Role(self.role)
        except ValueError:
            raise InvalidMessageError(f"Unknown message role: {self.role!r}") from None
        object.__setattr__(self, "role", role)

        if isinstance(self.content, list):
            object.__setattr__(
                self, "content", tuple(_parse_part(p) for p in self.content)
            )

        if role is Role.TOOL and not self.tool_call_id:
            raise InvalidMessageError("Tool messages require a non-empty tool_call_id")
        if role is not Role.TOOL and self.tool_call_id is not None:
            raise InvalidMessageError(
                f"Only tool messages may carry a tool_call_id (role={role.value})"
            )

    # ------------------------------------------------------------------
    # Factories
    # ------------------------------------------------------------------

    @classmethod
    def system(cls, text: str) -> Message:
        return cls(role=Role.SYSTEM, content=text)

    @classmethod
    def user(cls, text: str) -> Message:
        return cls(role=Role.USER, content=text)

    @classmethod
    def assistant(cls, text: str | None) -> Message:
        return cls(role=Role.ASSISTANT, content=text)

    user_text = user
    assistant_text = assistant

    @classmethod
    def user_with_images(
        cls,
        text: str,
        images: str | Iterable[str],
        *,
        detail: ImageDetail | str = ImageDetail.AUTO,
    ) -> Message:
        """Build a user message with a text part followed by image parts.

        Args:
            text: The text content.
            images: One image URL / data URI, or several.
            detail: Resolution hint applied to every image.
        """
        if isinstance(images, str):
            images = [images]
        parts: list[ContentPart] = [TextPart(text)]
        parts.extend(ImagePart(url=url, detail=detail) for url in images)
        return cls(role=Role.USER, content=tuple(parts))

    @classmethod
    def user_image(
        cls,
        image_url: str,
        *,
        text: str | None = None,
        detail: ImageDetail | str = ImageDetail.AUTO,
    ) -> Message:
        """Build a user message with a single image and optional text."""
        parts: list[ContentPart] = []
        if text:
            parts.append(TextPart(text))
        parts.append(ImagePart(url=image_url, detail=detail))
        return cls(role=Role.USER, content=tuple(parts))

    @classmethod
    def tool_result(cls, tool_call_id: str, content: object) -> Message:
        """Build a tool result message.

        Strings pass through unchanged; any other value is JSON-encoded.
        """
        from agentloop.toolkit.models import encode_tool_content

        return cls(
            role=Role.TOOL,
            content=encode_tool_content(content),
            tool_call_id=tool_call_id,
        )

    @classmethod
    def assistant_with_tool_calls(cls, raw_message: Mapping[str, Any]) -> Message:
        """Wrap a model-returned assistant message that requests tool calls.

        The raw message is deep-copied and kept as an opaque payload.
        A null ``content`` is normalized to an empty string since some
        providers reject null content on replay.
        """
        payload = copy.deepcopy(dict(raw_message))
        if payload.get("content") is None:
            payload["content"] = ""
        payload.setdefault("role", Role.ASSISTANT.value)
        return cls(role=Role.ASSISTANT, content=payload["content"], raw=payload)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Message:
        """Reconstruct a message from its wire-format dict."""
        if data.get("tool_calls"):
            return cls.assistant_with_tool_calls(data)
        return cls(
            role=data["role"],
            content=data.get("content"),
            tool_call_id=data.get("tool_call_id"),
        )

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    @property
    def tool_calls(self) -> list[dict]:
        """Raw tool-call descriptors carried by this message (may be empty)."""
        if self.raw is None:
            return []
        return list(self.raw.get("tool_calls") or [])

    @property
    def has_tool_calls(self) -> bool:
        return bool(self.tool_calls)

    @property
    def text(self) -> str:
        """Concatenated text of the message, ignoring image parts."""
        if self.content is None:
            return ""
        if isinstance(self.content, str):
            return self.content
        return "\n".join(p.text for p in self.content if isinstance(p, TextPart))

    def to_dict(self) -> dict:
        """Convert to the wire format expected by chat completion APIs."""
        if self.raw is not None:
            return copy.deepcopy(dict(self.raw))
        if isinstance(self.content, tuple):
            content: Any = [part.to_dict() for part in self.content]
        else:
            content = self.content
        d: dict = {"role": self.role.value, "content": content}
        if self.tool_call_id is not None:
            d["tool_call_id"] = self.tool_call_id
        return d
