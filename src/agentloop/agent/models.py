"""Agent loop result models.

Provides TerminationReason, StepResult and AgentOutcome. All are frozen:
they are immutable records of what a run did.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import TYPE_CHECKING

from agentloop.models.message import Message, Role

if TYPE_CHECKING:
    from agentloop.models.response import InferenceResponse
    from agentloop.toolkit.models import ToolCallRequest, ToolResult


class TerminationReason(str, enum.Enum):
    """Why a run stopped."""

    FINISHED = "finished"
    MAX_ITERATIONS_REACHED = "max_iterations_reached"


@dataclass(frozen=True)
class StepResult:
    """Result of resolving one tool call within a round.

    Attributes:
        iteration: 1-based round number the call belonged to.
        tool_call: The parsed call, or None when its arguments could
            not be decoded.
        result: The (possibly failed) execution result.
    """

    iteration: int
    tool_call: ToolCallRequest | None
    result: ToolResult

    @property
    def success(self) -> bool:
        return self.result.success


@dataclass(frozen=True)
class AgentOutcome:
    """Final result of an agent run.

    Attributes:
        content: Final text from the model, or None.
        messages: Snapshot of the full transcript, including every tool round.
        iterations: Number of tool-execution rounds performed.
        termination_reason: Whether the model finished on its own or the
            iteration budget ran out.
        response: The final InferenceResponse.
    """

    content: str | None
    messages: tuple[Message, ...]
    iterations: int
    termination_reason: TerminationReason = TerminationReason.FINISHED
    response: InferenceResponse | None = None

    @property
    def max_iterations_reached(self) -> bool:
        return self.termination_reason is TerminationReason.MAX_ITERATIONS_REACHED

    @property
    def succeeded(self) -> bool:
        """True iff the model finished on its own with non-empty text."""
        return not self.max_iterations_reached and bool(self.content)

    @property
    def tool_results(self) -> list[Message]:
        """All tool result messages in the transcript."""
        return [m for m in self.messages if m.role is Role.TOOL]

    @property
    def tool_calls_made(self) -> int:
        return len(self.tool_results)

    def __str__(self) -> str:
        return self.content or ""

    def pprint(self, *, abbreviate: bool = False) -> None:
        """Pretty-print the transcript and outcome using rich formatting."""
        from agentloop.formatting import pprint_agent_outcome

        pprint_agent_outcome(self, abbreviate=abbreviate)
