"""agentloop: a tool-calling agent loop for OpenAI-compatible chat APIs.

Register local tools, hand the loop a prompt, and it alternates between
model inference and tool execution until the model answers.
"""

from agentloop._version import __version__

# Core entry point
from agentloop.agent import (
    AgentConfig,
    AgentLoop,
    AgentOutcome,
    StepResult,
    TerminationReason,
)

# Conversation and response models
from agentloop.models import (
    ClientConfig,
    FinishReason,
    ImageDetail,
    ImagePart,
    InferenceResponse,
    Message,
    Role,
    TextPart,
    TokenUsage,
)

# Tools
from agentloop.toolkit import (
    Tool,
    ToolCallRequest,
    ToolDefinition,
    ToolRegistry,
    ToolResult,
    derive_tool_name,
    tool,
)

# LLM client
from agentloop.llm import InferenceClient, OpenAIClient

# Exceptions
from agentloop.exceptions import (
    AgentLoopError,
    DuplicateToolError,
    InvalidMessageError,
    MalformedToolCallError,
    ToolArgumentsError,
    ToolNotImplementedError,
)
from agentloop.llm.errors import (
    LLMAuthError,
    LLMClientError,
    LLMConfigError,
    LLMRateLimitError,
    LLMResponseError,
)

__all__ = [
    "__version__",
    # Agent
    "AgentLoop",
    "AgentConfig",
    "AgentOutcome",
    "StepResult",
    "TerminationReason",
    # Models
    "ClientConfig",
    "FinishReason",
    "ImageDetail",
    "ImagePart",
    "InferenceResponse",
    "Message",
    "Role",
    "TextPart",
    "TokenUsage",
    # Tools
    "Tool",
    "ToolCallRequest",
    "ToolDefinition",
    "ToolRegistry",
    "ToolResult",
    "derive_tool_name",
    "tool",
    # LLM
    "InferenceClient",
    "OpenAIClient",
    # Exceptions
    "AgentLoopError",
    "DuplicateToolError",
    "InvalidMessageError",
    "MalformedToolCallError",
    "ToolArgumentsError",
    "ToolNotImplementedError",
    "LLMClientError",
    "LLMConfigError",
    "LLMRateLimitError",
    "LLMAuthError",
    "LLMResponseError",
]
