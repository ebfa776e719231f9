"""Agent loop configuration.

AgentConfig is a mutable dataclass; callers may adjust settings between
runs of the same loop.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from agentloop.agent.models import StepResult

DEFAULT_MAX_ITERATIONS = 10


@dataclass
class AgentConfig:
    """Configuration for an AgentLoop.

    Attributes:
        max_iterations: Default bound on tool-execution rounds per run.
        model: Model identifier (None = the client's default model).
        tool_choice: Tool selection strategy sent with tool declarations.
        temperature: Sampling temperature forwarded to the client.
        max_tokens: Maximum completion tokens forwarded to the client.
        extra_llm_kwargs: Additional kwargs (top_p, seed, ...) forwarded
            to ``client.chat()``.
        on_step: Callback invoked after each tool call is resolved.
            Advisory only; exceptions it raises are logged and ignored.
    """

    max_iterations: int = DEFAULT_MAX_ITERATIONS
    model: str | None = None
    tool_choice: str | dict | None = "auto"
    temperature: float | None = None
    max_tokens: int | None = None
    extra_llm_kwargs: dict | None = None
    on_step: Callable[[StepResult], None] | None = None
