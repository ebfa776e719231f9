"""Agent package -- the tool-calling loop and its result types.

Provides the AgentLoop class, its configuration, and the per-step and
final result models.
"""

from agentloop.agent.config import DEFAULT_MAX_ITERATIONS, AgentConfig
from agentloop.agent.loop import AgentLoop
from agentloop.agent.models import AgentOutcome, StepResult, TerminationReason

__all__ = [
    "AgentLoop",
    "AgentConfig",
    "AgentOutcome",
    "StepResult",
    "TerminationReason",
    "DEFAULT_MAX_ITERATIONS",
]
