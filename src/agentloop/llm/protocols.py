"""Inference client protocol.

Defines the single boundary the agent loop depends on.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from agentloop.models.message import Message
    from agentloop.models.response import InferenceResponse


@runtime_checkable
class InferenceClient(Protocol):
    """Protocol for pluggable inference clients.

    Any object with a ``chat()`` method matching this signature works.
    The built-in OpenAIClient implements this protocol; tests use
    in-memory fakes.

    Implementations are synchronous and may raise transport or provider
    errors, which the agent loop lets propagate.
    """

    def chat(
        self,
        messages: Sequence[Message | dict],
        *,
        model: str | None = None,
        tools: list[dict] | None = None,
        tool_choice: str | dict | None = None,
        **kwargs: Any,
    ) -> InferenceResponse:
        """Send messages (and optional tool declarations), return one response."""
        ...
