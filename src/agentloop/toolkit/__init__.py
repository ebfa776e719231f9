"""Agent toolkit: tool declarations, tool-call parsing and dispatch.

Provides the ``Tool`` base class and ``@tool`` decorator for declaring
tools, ``ToolCallRequest`` for parsing model-requested calls, and
``ToolRegistry`` for executing them.
"""

from agentloop.toolkit.definitions import (
    Tool,
    ToolDefinition,
    as_tool_definition,
    default_parameters,
    derive_tool_name,
    tool,
)
from agentloop.toolkit.models import ToolCallRequest, ToolResult, encode_tool_content
from agentloop.toolkit.registry import ToolRegistry

__all__ = [
    "Tool",
    "ToolDefinition",
    "ToolCallRequest",
    "ToolResult",
    "ToolRegistry",
    "as_tool_definition",
    "default_parameters",
    "derive_tool_name",
    "encode_tool_content",
    "tool",
]
