"""Read-only projection over one chat completion response."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any

from agentloop.models.message import Message, Role


class FinishReason(str, enum.Enum):
    """Why the model stopped generating."""

    STOP = "stop"
    LENGTH = "length"
    TOOL_CALLS = "tool_calls"
    OTHER = "other"

    @classmethod
    def parse(cls, value: str | None) -> FinishReason | None:
        """Map a provider finish reason onto the known set.

        Unrecognized values (``content_filter``, provider extensions)
        become ``OTHER``; a missing value stays None.
        """
        if value is None:
            return None
        try:
            return cls(value)
        except ValueError:
            return cls.OTHER


@dataclass(frozen=True)
class TokenUsage:
    """Token usage reported by an LLM API response."""

    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0

    @classmethod
    def from_dict(cls, usage: dict | None) -> TokenUsage | None:
        if not usage:
            return None
        return cls(
            prompt_tokens=usage.get("prompt_tokens") or 0,
            completion_tokens=usage.get("completion_tokens") or 0,
            total_tokens=usage.get("total_tokens") or 0,
        )


@dataclass(frozen=True)
class InferenceResponse:
    """Wrapper over a raw OpenAI-shaped chat completion dict.

    All accessors read from the first choice and tolerate missing keys.
    ``tool_calls`` being non-empty is the authoritative signal that the
    model wants tools run, whatever ``finish_reason`` says.

    Attributes:
        raw: The response dict exactly as decoded from the API.
    """

    raw: dict

    @property
    def choices(self) -> list[dict]:
        return list(self.raw.get("choices") or [])

    @property
    def message(self) -> dict | None:
        """The message dict of the first choice."""
        choices = self.choices
        if not choices:
            return None
        return choices[0].get("message")

    @property
    def content(self) -> str | None:
        message = self.message
        return message.get("content") if message else None

    @property
    def role(self) -> str | None:
        message = self.message
        return message.get("role") if message else None

    @property
    def finish_reason(self) -> FinishReason | None:
        choices = self.choices
        if not choices:
            return None
        return FinishReason.parse(choices[0].get("finish_reason"))

    @property
    def tool_calls(self) -> list[dict] | None:
        """Raw tool-call descriptors, or None when the model requested none."""
        message = self.message
        return message.get("tool_calls") if message else None

    @property
    def has_tool_calls(self) -> bool:
        return bool(self.tool_calls)

    @property
    def usage(self) -> TokenUsage | None:
        return TokenUsage.from_dict(self.raw.get("usage"))

    @property
    def prompt_tokens(self) -> int | None:
        usage = self.usage
        return usage.prompt_tokens if usage else None

    @property
    def completion_tokens(self) -> int | None:
        usage = self.usage
        return usage.completion_tokens if usage else None

    @property
    def total_tokens(self) -> int | None:
        usage = self.usage
        return usage.total_tokens if usage else None

    @property
    def model(self) -> str | None:
        return self.raw.get("model")

    @property
    def id(self) -> str | None:
        return self.raw.get("id")

    @property
    def succeeded(self) -> bool:
        """True when the response has text or finished with ``stop``."""
        return bool(self.content) or self.finish_reason is FinishReason.STOP

    def to_message(self) -> Message:
        """Convert the response text into a plain assistant message.

        Tool calls are not carried over; use
        :meth:`Message.assistant_with_tool_calls` for that.
        """
        return Message(role=Role.ASSISTANT, content=self.content)

    def get(self, key: str, default: Any = None) -> Any:
        """Read a top-level key from the raw response."""
        return self.raw.get(key, default)

    def __getitem__(self, key: str) -> Any:
        return self.raw[key]

    def __str__(self) -> str:
        return self.content or ""

    def pprint(self, *, abbreviate: bool = False) -> None:
        """Pretty-print this response using rich formatting."""
        from agentloop.formatting import pprint_inference_response

        pprint_inference_response(self, abbreviate=abbreviate)
