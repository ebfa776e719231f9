"""Agent With Tools

Declare tools as classes or decorated functions, hand them to an
AgentLoop, and let the model call them until it can answer. Then keep
the conversation going with continue_conversation().

Demonstrates: Tool subclasses, @tool, AgentLoop.run(), context=,
              continue_conversation(), AgentConfig(on_step=),
              outcome.pprint()
"""

import logging
import operator
import re

from dotenv import load_dotenv

from agentloop import AgentConfig, AgentLoop, OpenAIClient, Tool, tool

load_dotenv()
logging.basicConfig(level=logging.INFO, format="%(name)s: %(message)s")

_OPERATORS = {"+": operator.add, "-": operator.sub, "*": operator.mul, "/": operator.truediv}
_EXPRESSION = re.compile(r"^\s*(-?\d+(?:\.\d+)?)\s*([-+*/])\s*(-?\d+(?:\.\d+)?)\s*$")


class WeatherTool(Tool):
    description = "Get current weather for a location"
    parameters = {
        "type": "object",
        "properties": {"location": {"type": "string", "description": "City name"}},
        "required": ["location"],
    }

    def execute(self, arguments, context=None):
        # A real tool would call a weather API here
        return {"temperature": 72, "conditions": "sunny", "location": arguments["location"]}


class CalculatorTool(Tool):
    description = "Evaluate a binary arithmetic expression like '2 + 2'"
    parameters = {
        "type": "object",
        "properties": {"expression": {"type": "string"}},
        "required": ["expression"],
    }

    def execute(self, arguments, context=None):
        match = _EXPRESSION.match(arguments["expression"])
        if match is None:
            raise ValueError(f"Cannot evaluate {arguments['expression']!r}")
        left, op, right = match.groups()
        return {"result": _OPERATORS[op](float(left), float(right))}


@tool(
    description="Look up the current user's recent orders",
    parameters={"type": "object", "properties": {"limit": {"type": "integer"}}},
)
def recent_orders(arguments, context):
    limit = arguments.get("limit", 3)
    return {"user_id": context["user_id"], "orders": [f"order-{i}" for i in range(limit)]}


def main():
    client = OpenAIClient(default_model="gpt-4o-mini")

    # --- Class-based tools ---

    print("=== Weather + calculator ===\n")

    agent = AgentLoop(
        client,
        tools=[WeatherTool, CalculatorTool],
        system_prompt="You are a helpful assistant with access to weather and calculator tools.",
        config=AgentConfig(on_step=lambda step: print(f"  step {step.iteration}: {step.result.content}")),
    )
    outcome = agent.run("What's the weather in San Francisco, in Celsius?")
    print(outcome.content)
    print(f"  iterations={outcome.iterations}, tool calls={outcome.tool_calls_made}\n")

    # The transcript carries over
    outcome = agent.continue_conversation("What about New York?")
    outcome.pprint(abbreviate=True)

    # --- Context-aware function tool ---

    print("\n=== Context ===\n")

    agent = AgentLoop(client, tools=[recent_orders], context={"user_id": 123})
    outcome = agent.run("Find my recent orders", max_iterations=3)
    print(outcome.content)
    if outcome.max_iterations_reached:
        print("  (stopped at the iteration budget)")

    client.close()


if __name__ == "__main__":
    main()
