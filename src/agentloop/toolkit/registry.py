"""ToolRegistry: resolves tool calls by name and runs them.

Provides a single ``execute()`` method that looks up the tool by exact
name, invokes it with the call's arguments and a caller-supplied context,
and returns a structured ``ToolResult``. Failures inside a tool never
propagate; they become ``{"error": ...}`` results the model can read.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from typing import Any

from agentloop.exceptions import DuplicateToolError
from agentloop.toolkit.definitions import ToolDefinition, as_tool_definition
from agentloop.toolkit.models import ToolCallRequest, ToolResult, encode_tool_content

_logger = logging.getLogger(__name__)

_PREVIEW_LIMIT = 200


def preview(value: object, limit: int = _PREVIEW_LIMIT) -> str:
    """Return ``repr(value)`` truncated to ``limit`` characters."""
    text = repr(value)
    if len(text) > limit:
        text = text[: limit - 3] + "..."
    return text


class ToolRegistry:
    """An immutable, name-keyed set of tools.

    Usage::

        registry = ToolRegistry([WeatherTool, calculator])
        result = registry.execute(call, context={"user_id": 1})
        if not result.success:
            print(result.error)

    Raises:
        DuplicateToolError: If two tools resolve to the same name.
    """

    def __init__(
        self,
        tools: Iterable[object] = (),
        *,
        logger: logging.Logger | None = None,
    ) -> None:
        self._logger = logger or _logger
        self._tools: dict[str, ToolDefinition] = {}
        for obj in tools:
            definition = as_tool_definition(obj)
            if definition.name in self._tools:
                raise DuplicateToolError(definition.name)
            self._tools[definition.name] = definition

    def __len__(self) -> int:
        return len(self._tools)

    def __iter__(self) -> Iterator[ToolDefinition]:
        return iter(self._tools.values())

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def get(self, name: str) -> ToolDefinition | None:
        return self._tools.get(name)

    def names(self) -> list[str]:
        """Return the names of all registered tools, in registration order."""
        return list(self._tools)

    def to_openai(self) -> list[dict]:
        """Tool declarations in OpenAI function-calling format."""
        return [t.to_openai() for t in self._tools.values()]

    def execute(self, call: ToolCallRequest, context: Any = None) -> ToolResult:
        """Execute a tool call.

        Args:
            call: The parsed tool call.
            context: Opaque value forwarded to the tool handler.

        Returns:
            ToolResult with the tool's return value, or a failure result
            for unknown tools and for tools that raised or returned a value
            that cannot be JSON-encoded.
        """
        definition = self._tools.get(call.name)
        if definition is None:
            self._logger.warning("Unknown tool: %s", call.name)
            return ToolResult.failure(call.id, call.name, f"Unknown tool: {call.name}")

        self._logger.info("Executing tool: %s with %s", call.name, call.arguments)
        try:
            value = definition.execute(call.arguments, context)
        except Exception as exc:
            self._logger.error("Tool execution error in %s: %s", call.name, exc)
            self._logger.debug("Tool %s traceback", call.name, exc_info=True)
            return ToolResult.failure(call.id, call.name, str(exc) or type(exc).__name__)

        try:
            encode_tool_content(value)
        except (TypeError, ValueError) as exc:
            self._logger.error("Tool %s returned an unserializable result: %s", call.name, exc)
            return ToolResult.failure(call.id, call.name, f"Result not serializable: {exc}")

        self._logger.info("Tool result: %s", preview(value))
        return ToolResult(
            tool_call_id=call.id,
            tool_name=call.name,
            success=True,
            value=value,
        )
