"""Core agent loop: model inference interleaved with local tool execution.

Provides the AgentLoop class that runs a tool-calling loop:
send the transcript and tool declarations to the model, execute any
requested tool calls in order, append their results, and repeat until
the model answers without tools or the iteration budget runs out.

States: awaiting the model, executing tools, done. A run always ends in
exactly one AgentOutcome; only inference-client errors escape it.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any

from agentloop.agent.config import AgentConfig
from agentloop.agent.models import AgentOutcome, StepResult, TerminationReason
from agentloop.exceptions import ToolArgumentsError
from agentloop.models.message import Message, Role
from agentloop.toolkit.models import ToolCallRequest, ToolResult
from agentloop.toolkit.registry import ToolRegistry

if TYPE_CHECKING:
    from agentloop.llm.protocols import InferenceClient
    from agentloop.models.response import InferenceResponse

_logger = logging.getLogger(__name__)


class AgentLoop:
    """Drives a conversation through rounds of inference and tool execution.

    The transcript is an append-only list shared with the caller. The loop
    is its only writer while ``run()`` is in progress.

    Usage::

        from agentloop import AgentLoop, OpenAIClient

        agent = AgentLoop(
            OpenAIClient(),
            tools=[WeatherTool, calculator],
            system_prompt="You are a helpful assistant.",
        )
        outcome = agent.run("What's the weather in San Francisco?")
        print(outcome.content, outcome.iterations, outcome.tool_calls_made)

        outcome = agent.continue_conversation("What about New York?")
    """

    def __init__(
        self,
        client: InferenceClient | None = None,
        tools: Iterable[object] | ToolRegistry = (),
        *,
        context: Any = None,
        system_prompt: str | None = None,
        messages: Iterable[Message | Mapping[str, Any]] | None = None,
        config: AgentConfig | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        """Create an agent loop.

        Args:
            client: Inference client. Defaults to an OpenAIClient configured
                from the environment.
            tools: Tool classes, instances, ToolDefinitions or callables,
                or a prebuilt ToolRegistry.
            context: Opaque value passed to every tool invocation.
            system_prompt: Prepended as a system message unless the seed
                messages already contain one.
            messages: Seed transcript, e.g. from an earlier conversation.
            config: Loop configuration.
            logger: Logger for loop and tool dispatch events. Defaults to
                this module's logger. When given together with a prebuilt
                ToolRegistry, the registry is rebuilt to log through it.

        Raises:
            DuplicateToolError: If two tools resolve to the same name.
        """
        if client is None:
            from agentloop.llm.client import OpenAIClient

            client = OpenAIClient()
        self._client = client
        self._config = config or AgentConfig()
        self._logger = logger or _logger
        if isinstance(tools, ToolRegistry) and logger is None:
            self._registry = tools
        else:
            self._registry = ToolRegistry(tools, logger=self._logger)
        self._context = context
        self._messages: list[Message] = [
            m if isinstance(m, Message) else Message.from_dict(m)
            for m in (messages or ())
        ]
        if system_prompt and not any(m.role is Role.SYSTEM for m in self._messages):
            self._messages.insert(0, Message.system(system_prompt))

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def client(self) -> InferenceClient:
        return self._client

    @property
    def tools(self) -> ToolRegistry:
        return self._registry

    @property
    def messages(self) -> list[Message]:
        """The live transcript."""
        return self._messages

    @property
    def context(self) -> Any:
        return self._context

    @property
    def config(self) -> AgentConfig:
        return self._config

    def run(
        self,
        prompt: str | None = None,
        *,
        max_iterations: int | None = None,
    ) -> AgentOutcome:
        """Run the loop until the model answers without requesting tools.

        Each round is one model call plus the ordered execution of every
        tool call it returned. When ``max_iterations`` rounds have run,
        one final call is made without tool declarations to force a text
        answer; any tool calls in that final response are ignored.

        Args:
            prompt: User message appended before the first model call.
                Skipped when empty.
            max_iterations: Bound on tool rounds. Defaults to
                ``config.max_iterations``.

        Returns:
            AgentOutcome for the run.

        Raises:
            LLMClientError: Or any other error raised by the inference
                client; these are not caught.
            MalformedToolCallError: If the model returns a tool call that
                is not a mapping or lacks an id.
        """
        if max_iterations is None:
            max_iterations = self._config.max_iterations
        if prompt:
            self._messages.append(Message.user(prompt))

        tools = self._registry.to_openai()
        iterations = 0
        while iterations < max_iterations:
            response = self._call_llm(tools)
            if not response.has_tool_calls:
                return self._finish(response, iterations, TerminationReason.FINISHED)
            iterations += 1
            self._run_round(response, iterations)

        self._logger.warning(
            "Reached max iterations (%d); requesting a final answer without tools",
            max_iterations,
        )
        response = self._call_llm(None)
        if response.has_tool_calls:
            self._logger.debug(
                "Ignoring %d tool call(s) in forced final response",
                len(response.tool_calls or []),
            )
        return self._finish(response, iterations, TerminationReason.MAX_ITERATIONS_REACHED)

    def continue_conversation(
        self,
        prompt: str,
        *,
        max_iterations: int | None = None,
    ) -> AgentOutcome:
        """Continue the accumulated transcript with a new user prompt."""
        return self.run(prompt, max_iterations=max_iterations)

    # ------------------------------------------------------------------
    # Internal methods
    # ------------------------------------------------------------------

    def _call_llm(self, tools: list[dict] | None) -> InferenceResponse:
        """Call the model with the current transcript.

        Tool declarations and ``tool_choice`` are sent only when ``tools``
        is non-empty.
        """
        kwargs: dict[str, Any] = {}
        if self._config.model:
            kwargs["model"] = self._config.model
        if tools:
            kwargs["tools"] = tools
            if self._config.tool_choice is not None:
                kwargs["tool_choice"] = self._config.tool_choice
        if self._config.temperature is not None:
            kwargs["temperature"] = self._config.temperature
        if self._config.max_tokens is not None:
            kwargs["max_tokens"] = self._config.max_tokens
        if self._config.extra_llm_kwargs:
            kwargs.update(self._config.extra_llm_kwargs)
        return self._client.chat([m.to_dict() for m in self._messages], **kwargs)

    def _run_round(self, response: InferenceResponse, iteration: int) -> None:
        """Append the tool-call message, then one result per call, in order.

        Every descriptor is parsed before the transcript is touched, so a
        malformed call list leaves no half-answered assistant message.
        """
        parsed = [self._parse(descriptor) for descriptor in response.tool_calls]
        self._messages.append(Message.assistant_with_tool_calls(response.message))
        for call, failure in parsed:
            result = failure or self._registry.execute(call, self._context)
            self._messages.append(result.to_message())
            self._notify(StepResult(iteration=iteration, tool_call=call, result=result))

    def _parse(
        self, descriptor: Mapping[str, Any]
    ) -> tuple[ToolCallRequest | None, ToolResult | None]:
        """Parse one descriptor; undecodable arguments become a failure result."""
        try:
            return ToolCallRequest.from_dict(descriptor), None
        except ToolArgumentsError as exc:
            self._logger.error("Tool execution error: %s", exc)
            return None, ToolResult.failure(exc.call_id, exc.tool_name or "", str(exc))

    def _notify(self, step: StepResult) -> None:
        if self._config.on_step is None:
            return
        try:
            self._config.on_step(step)
        except Exception:
            self._logger.debug("on_step callback error", exc_info=True)

    def _finish(
        self,
        response: InferenceResponse,
        iterations: int,
        reason: TerminationReason,
    ) -> AgentOutcome:
        if response.content:
            self._messages.append(response.to_message())
        return AgentOutcome(
            content=response.content,
            messages=tuple(self._messages),
            iterations=iterations,
            termination_reason=reason,
            response=response,
        )
