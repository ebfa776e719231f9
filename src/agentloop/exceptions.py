"""agentloop exception hierarchy.

All agentloop-specific exceptions inherit from AgentLoopError.
"""


class AgentLoopError(Exception):
    """Base exception for all agentloop errors."""


class InvalidMessageError(AgentLoopError):
    """Raised when a message violates the role / tool_call_id invariant.

    A ``tool`` message must carry a non-empty ``tool_call_id``; every other
    role must not carry one.
    """


class DuplicateToolError(AgentLoopError):
    """Raised when two tools in one registry resolve to the same name."""

    def __init__(self, tool_name: str) -> None:
        self.tool_name = tool_name
        super().__init__(f"Duplicate tool name: {tool_name}")


class MalformedToolCallError(AgentLoopError):
    """Raised when a tool-call descriptor from the model has the wrong shape."""


class ToolArgumentsError(AgentLoopError):
    """Raised when tool-call arguments cannot be decoded into a mapping.

    Attributes:
        call_id: Correlation id of the offending tool call.
        tool_name: Name of the requested tool.
    """

    def __init__(self, call_id: str | None, tool_name: str | None, reason: str) -> None:
        self.call_id = call_id
        self.tool_name = tool_name
        self.reason = reason
        super().__init__(f"Invalid arguments for tool '{tool_name}': {reason}")


class ToolNotImplementedError(AgentLoopError, NotImplementedError):
    """Raised when a tool without execution behaviour is invoked.

    This is a programming error, distinct from a failure raised by a tool body.
    """

    def __init__(self, tool_name: str) -> None:
        self.tool_name = tool_name
        super().__init__(
            f"Tool '{tool_name}' has no execution behaviour. "
            f"Subclasses must implement execute()."
        )
