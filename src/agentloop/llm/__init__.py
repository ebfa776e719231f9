"""LLM client infrastructure for agentloop.

Provides an OpenAI-compatible HTTP client, the pluggable inference
protocol, and the LLM error hierarchy.
"""

from agentloop.llm.client import OpenAIClient, session_headers
from agentloop.llm.errors import (
    LLMAuthError,
    LLMClientError,
    LLMConfigError,
    LLMRateLimitError,
    LLMResponseError,
)
from agentloop.llm.protocols import InferenceClient

__all__ = [
    "OpenAIClient",
    "InferenceClient",
    "session_headers",
    "LLMClientError",
    "LLMConfigError",
    "LLMRateLimitError",
    "LLMAuthError",
    "LLMResponseError",
]
