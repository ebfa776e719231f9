"""Shared test fixtures and helpers for agentloop.

Provides canned OpenAI-shaped responses and a scripted in-memory
inference client. No test touches the network.
"""

from __future__ import annotations

import copy
import json

import pytest

from agentloop import InferenceResponse, Tool, ToolDefinition


# ------------------------------------------------------------------
# Canned responses
# ------------------------------------------------------------------

def text_response(
    content: str | None = "Hello!",
    *,
    finish_reason: str = "stop",
    model: str = "gpt-4o-mini",
    prompt_tokens: int = 10,
    completion_tokens: int = 5,
) -> dict:
    """Build a realistic chat completion dict with a text answer."""
    return {
        "id": "chatcmpl-test123",
        "object": "chat.completion",
        "model": model,
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": content},
                "finish_reason": finish_reason,
            }
        ],
        "usage": {
            "prompt_tokens": prompt_tokens,
            "completion_tokens": completion_tokens,
            "total_tokens": prompt_tokens + completion_tokens,
        },
    }


def tool_call(name: str, arguments: dict | str | None = None, call_id: str = "call_1") -> dict:
    """A single raw tool-call descriptor. Dict arguments are JSON-encoded."""
    if isinstance(arguments, dict):
        arguments = json.dumps(arguments)
    return {
        "id": call_id,
        "type": "function",
        "function": {"name": name, "arguments": arguments},
    }


def tool_call_response(*calls: dict, content: str | None = None, **extra) -> dict:
    """Chat completion dict requesting the given tool calls.

    Extra keyword arguments are merged into the assistant message to
    simulate provider-specific fields.
    """
    message = {"role": "assistant", "content": content, "tool_calls": list(calls)}
    message.update(extra)
    return {
        "id": "chatcmpl-tools",
        "model": "gpt-4o-mini",
        "choices": [{"index": 0, "message": message, "finish_reason": "tool_calls"}],
    }


# ------------------------------------------------------------------
# Scripted client
# ------------------------------------------------------------------

class ScriptedClient:
    """An inference client that replays canned responses in order.

    The last response repeats once the script runs out. Every call is
    recorded with a deep copy of the messages it received.
    """

    def __init__(self, *responses: dict) -> None:
        self._responses = list(responses) or [text_response()]
        self.calls: list[dict] = []

    def chat(self, messages, *, model=None, tools=None, tool_choice=None, **kwargs):
        self.calls.append({
            "messages": copy.deepcopy(list(messages)),
            "model": model,
            "tools": tools,
            "tool_choice": tool_choice,
            "kwargs": kwargs,
        })
        idx = min(len(self.calls) - 1, len(self._responses) - 1)
        return InferenceResponse(copy.deepcopy(self._responses[idx]))

    @property
    def call_count(self) -> int:
        return len(self.calls)


# ------------------------------------------------------------------
# Sample tools
# ------------------------------------------------------------------

class CalculatorTool(Tool):
    description = "Evaluate a simple arithmetic expression"
    parameters = {
        "type": "object",
        "properties": {
            "expression": {"type": "string", "description": "Math expression like '2 + 2'"},
        },
        "required": ["expression"],
    }

    def execute(self, arguments, context=None):
        left, op, right = arguments["expression"].replace(" ", "").partition("+")
        if op != "+":
            raise ValueError(f"Unsupported expression: {arguments['expression']}")
        return {"result": int(left) + int(right)}


class GreetTool(Tool):
    description = "Greet a person by name"
    parameters = {
        "type": "object",
        "properties": {"name": {"type": "string", "description": "Name to greet"}},
        "required": ["name"],
    }

    def execute(self, arguments, context=None):
        return f"Hello, {arguments['name']}!"


class FailingTool(Tool):
    description = "A tool that always fails"

    def execute(self, arguments, context=None):
        raise RuntimeError("Something went wrong!")


def _whoami(arguments, context):
    """Report the user id from the loop context."""
    return {"user_id": context["user_id"]}


whoami = ToolDefinition.from_function(_whoami, name="whoami")


@pytest.fixture
def calculator_tool() -> type[Tool]:
    return CalculatorTool


@pytest.fixture
def sample_tools() -> list:
    return [CalculatorTool, GreetTool, FailingTool, whoami]
