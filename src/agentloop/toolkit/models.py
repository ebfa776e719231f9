"""Toolkit data models for tool calls requested by the model.

Frozen dataclasses for parsed tool-call requests and execution results,
plus the encoding used to place tool output into a conversation.
"""

from __future__ import annotations

import dataclasses
import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel

from agentloop.exceptions import MalformedToolCallError, ToolArgumentsError

if TYPE_CHECKING:
    from agentloop.models.message import Message
    from agentloop.models.response import InferenceResponse


def _json_default(value: object) -> object:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    if isinstance(value, (set, frozenset, tuple)):
        return list(value)
    return str(value)


def encode_tool_content(value: object) -> str:
    """Serialize a tool result for a ``tool`` message.

    Strings pass through unchanged. Anything else is encoded as JSON;
    values JSON cannot represent natively fall back to their ``str()``.
    """
    if isinstance(value, str):
        return value
    return json.dumps(value, default=_json_default, ensure_ascii=False)


def _decode_arguments(call_id: str | None, name: str | None, raw: object) -> dict:
    if raw is None:
        return {}
    if isinstance(raw, str):
        if not raw.strip():
            return {}
        try:
            raw = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise ToolArgumentsError(call_id, name, f"malformed JSON ({exc})") from exc
    if not isinstance(raw, Mapping):
        raise ToolArgumentsError(
            call_id, name, f"expected a JSON object, got {type(raw).__name__}"
        )
    return dict(raw)


@dataclass(frozen=True)
class ToolCallRequest:
    """A tool invocation requested by the model.

    Attributes:
        id: Opaque correlation token assigned by the model.
        name: Name of the tool to run.
        arguments: Decoded argument mapping (empty when none were sent).
    """

    id: str
    name: str
    arguments: dict = field(default_factory=dict)

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> ToolCallRequest:
        """Parse one OpenAI-style tool-call descriptor.

        Raises:
            MalformedToolCallError: If the descriptor is not a mapping,
                has no id, or has a ``function`` field that is not a mapping.
            ToolArgumentsError: If the arguments cannot be decoded into
                a mapping. The error carries the call id and tool name.
        """
        if not isinstance(raw, Mapping):
            raise MalformedToolCallError(
                f"Tool call descriptor must be a mapping, got {type(raw).__name__}"
            )
        call_id = raw.get("id")
        if not call_id:
            raise MalformedToolCallError("Tool call descriptor has no id")
        function = raw.get("function") or {}
        if not isinstance(function, Mapping):
            raise MalformedToolCallError(
                f"Tool call {call_id} has a non-mapping function field: {type(function).__name__}"
            )
        name = function.get("name")
        arguments = _decode_arguments(call_id, name, function.get("arguments"))
        return cls(id=call_id, name=name, arguments=arguments)

    @classmethod
    def from_response(
        cls, source: InferenceResponse | list[Mapping[str, Any]] | None
    ) -> list[ToolCallRequest]:
        """Parse every tool call in a response or a raw descriptor list.

        A None source, or a response without tool calls, yields an empty list.
        """
        from agentloop.models.response import InferenceResponse

        if isinstance(source, InferenceResponse):
            source = source.tool_calls
        if source is None:
            return []
        return [cls.from_dict(tc) for tc in source]

    def result(self, content: object) -> Message:
        """Build the tool result message answering this call."""
        from agentloop.models.message import Message

        return Message.tool_result(self.id, content)

    def get(self, key: str, default: Any = None) -> Any:
        """Read a single argument."""
        return self.arguments.get(key, default)

    def dig(self, *keys: Any) -> Any:
        """Read a nested argument, e.g. ``call.dig("filters", "tags", 0)``.

        Returns None as soon as a key or index is missing.
        """
        value: Any = self.arguments
        for key in keys:
            if isinstance(value, Mapping):
                value = value.get(key)
            elif isinstance(value, list) and isinstance(key, int) and -len(value) <= key < len(value):
                value = value[key]
            else:
                return None
        return value

    def __getitem__(self, key: str) -> Any:
        return self.arguments[key]

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name, "arguments": dict(self.arguments)}


@dataclass(frozen=True)
class ToolResult:
    """Structured result from executing a tool call.

    Attributes:
        tool_call_id: Id of the call this result answers.
        tool_name: Name of the tool that was requested.
        success: Whether execution succeeded.
        value: The tool's return value, or ``{"error": ...}`` on failure.
    """

    tool_call_id: str
    tool_name: str
    success: bool
    value: object = None

    @classmethod
    def failure(cls, tool_call_id: str, tool_name: str, error: str) -> ToolResult:
        return cls(
            tool_call_id=tool_call_id,
            tool_name=tool_name,
            success=False,
            value={"error": error},
        )

    @property
    def error(self) -> str:
        """Error message on failure, empty string on success."""
        if self.success or not isinstance(self.value, Mapping):
            return ""
        return str(self.value.get("error", ""))

    @property
    def content(self) -> str:
        """The value encoded for a ``tool`` message."""
        return encode_tool_content(self.value)

    def to_message(self) -> Message:
        from agentloop.models.message import Message

        return Message.tool_result(self.tool_call_id, self.value)
