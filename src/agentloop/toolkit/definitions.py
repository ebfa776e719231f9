"""Tool declarations: the ``Tool`` base class, ``ToolDefinition`` and ``@tool``.

A ToolDefinition is the single capability the agent loop works with:
a name, a description, a JSON Schema for parameters and a handler called
as ``handler(arguments, context)``. Class-based tools and plain functions
are both converted into ToolDefinitions once, when a registry is built.
"""

from __future__ import annotations

import copy
import inspect
import re
from dataclasses import dataclass, field
from typing import Any, Callable, ClassVar

from agentloop.exceptions import ToolNotImplementedError


ToolHandler = Callable[[dict, Any], object]

_NAMESPACE_SEPARATORS = re.compile(r"\.|::")
_ACRONYM_BOUNDARY = re.compile(r"([A-Z]+)([A-Z][a-z])")
_WORD_BOUNDARY = re.compile(r"([a-z\d])([A-Z])")
_TOOL_SUFFIX = re.compile(r"_tool$")


def default_parameters() -> dict:
    """Schema for a tool that takes no arguments."""
    return {"type": "object", "properties": {}, "required": []}


def derive_tool_name(identifier: str) -> str:
    """Derive a model-facing tool name from a type identifier.

    Takes the last namespace segment, converts CamelCase to snake_case
    and drops a trailing ``_tool`` segment::

        derive_tool_name("myapp.tools.WeatherTool")   # "weather"
        derive_tool_name("HTTPRequestTool")           # "http_request"
        derive_tool_name("lookup_user_tool")          # "lookup_user"
    """
    last = _NAMESPACE_SEPARATORS.split(identifier)[-1]
    snake = _ACRONYM_BOUNDARY.sub(r"\1_\2", last)
    snake = _WORD_BOUNDARY.sub(r"\1_\2", snake).lower()
    return _TOOL_SUFFIX.sub("", snake)


class Tool:
    """Base class for class-declared tools.

    Subclasses set ``description`` and ``parameters`` and implement
    ``execute``. The model-facing name is derived from the class name
    unless ``tool_name`` is set::

        class WeatherTool(Tool):
            description = "Get current weather for a location"
            parameters = {
                "type": "object",
                "properties": {"location": {"type": "string"}},
                "required": ["location"],
            }

            def execute(self, arguments, context=None):
                return {"temperature": 72, "location": arguments["location"]}
    """

    tool_name: ClassVar[str | None] = None
    description: ClassVar[str] = ""
    parameters: ClassVar[dict | None] = None

    @classmethod
    def function_name(cls) -> str:
        return cls.tool_name or derive_tool_name(cls.__qualname__)

    @classmethod
    def to_openai(cls) -> dict:
        return ToolDefinition.from_tool(cls).to_openai()

    def execute(self, arguments: dict, context: Any = None) -> object:
        """Run the tool. Subclasses must override this."""
        raise ToolNotImplementedError(self.function_name())


@dataclass(frozen=True)
class ToolDefinition:
    """A single tool definition for LLM consumption.

    Attributes:
        name: Tool name, unique within a registry.
        description: Human-readable description shown to the model.
        parameters: JSON Schema dict describing tool parameters.
        handler: Callable invoked as ``handler(arguments, context)``, or
            None for a declaration without behaviour.
    """

    name: str
    description: str = ""
    parameters: dict = field(default_factory=default_parameters)
    handler: ToolHandler | None = field(default=None, compare=False)

    def execute(self, arguments: dict, context: Any = None) -> object:
        """Invoke the handler.

        Raises:
            ToolNotImplementedError: If the definition has no handler.
        """
        if self.handler is None:
            raise ToolNotImplementedError(self.name)
        return self.handler(arguments, context)

    def to_openai(self) -> dict:
        """Convert to OpenAI function-calling format."""
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": copy.deepcopy(self.parameters),
            },
        }

    @classmethod
    def from_tool(cls, tool: type[Tool] | Tool) -> ToolDefinition:
        """Build a definition from a Tool subclass or instance.

        A class is instantiated once, with no arguments.
        """
        instance = tool() if isinstance(tool, type) else tool
        tool_cls = type(instance)
        description = tool_cls.description or inspect.cleandoc(
            tool_cls.__dict__.get("__doc__") or ""
        )
        return cls(
            name=instance.function_name(),
            description=description.strip(),
            parameters=copy.deepcopy(tool_cls.parameters) or default_parameters(),
            handler=instance.execute,
        )

    @classmethod
    def from_function(
        cls,
        fn: ToolHandler,
        *,
        name: str | None = None,
        description: str | None = None,
        parameters: dict | None = None,
    ) -> ToolDefinition:
        """Build a definition from a ``fn(arguments, context)`` callable.

        The name defaults to one derived from the function's qualified
        name and the description to its docstring.

        Raises:
            TypeError: If no name is given and ``fn`` has no qualified
                name to derive one from (``functools.partial`` objects,
                callable instances).
        """
        if not name:
            qualname = getattr(fn, "__qualname__", None)
            if not qualname:
                raise TypeError(
                    f"Cannot derive a tool name from {type(fn).__name__}; pass name= explicitly"
                )
            name = derive_tool_name(qualname)
        if description is None:
            description = inspect.getdoc(fn) or ""
        return cls(
            name=name,
            description=description.strip(),
            parameters=copy.deepcopy(parameters) if parameters else default_parameters(),
            handler=fn,
        )


def tool(
    fn: ToolHandler | None = None,
    *,
    name: str | None = None,
    description: str | None = None,
    parameters: dict | None = None,
) -> ToolDefinition | Callable[[ToolHandler], ToolDefinition]:
    """Decorator turning a ``fn(arguments, context)`` function into a ToolDefinition.

    Usable bare (``@tool``) or with options (``@tool(name="calc")``).
    """

    def decorate(func: ToolHandler) -> ToolDefinition:
        return ToolDefinition.from_function(
            func, name=name, description=description, parameters=parameters
        )

    if fn is not None:
        return decorate(fn)
    return decorate


def as_tool_definition(obj: object) -> ToolDefinition:
    """Coerce a ToolDefinition, Tool subclass/instance or callable."""
    if isinstance(obj, ToolDefinition):
        return obj
    if isinstance(obj, Tool) or (isinstance(obj, type) and issubclass(obj, Tool)):
        return ToolDefinition.from_tool(obj)
    if callable(obj):
        return ToolDefinition.from_function(obj)
    raise TypeError(
        f"Expected ToolDefinition, Tool or callable, got {type(obj).__name__}"
    )
