"""Pretty-print support for agentloop output objects.

Uses rich library for formatted terminal output.
All functions accept their target object and print to a rich Console.

To avoid circular imports, this module does NOT import domain models
at module level. Functions access object attributes dynamically.
"""
from __future__ import annotations

import json
from typing import Any

from rich.console import Console, Group
from rich.markdown import Markdown
from rich.markup import escape
from rich.panel import Panel
from rich.text import Text
from rich.theme import Theme

# Brighter markdown theme for dark terminals.
_MARKDOWN_THEME = Theme({
    "markdown.h1": "bold bright_white underline",
    "markdown.h2": "bold bright_white",
    "markdown.h3": "bold bright_white",
    "markdown.code": "bold white on grey11",
    "markdown.code_block": "white on grey11",
    "markdown.link": "bright_cyan underline",
    "markdown.strong": "bold bright_white",
    "markdown.em": "italic bright_white",
})

_ROLE_STYLES: dict[str, tuple[str, str]] = {
    "system": ("System", "yellow"),
    "user": ("User", "blue"),
    "assistant": ("Assistant", "green"),
    "tool": ("Tool Result", "cyan"),
}

_ABBREVIATE_AT = 200


def _make_console(file: Any = None) -> Console:
    """Create a Console, optionally writing to a file-like object."""
    if file is not None:
        return Console(file=file, force_terminal=True, width=100, theme=_MARKDOWN_THEME)
    return Console(theme=_MARKDOWN_THEME)


def _abbreviate(text: str, abbreviate: bool) -> str:
    if abbreviate and len(text) > _ABBREVIATE_AT:
        return text[: _ABBREVIATE_AT - 3] + "..."
    return text


def _format_call(descriptor: dict) -> Text:
    """Render one raw tool-call descriptor as ``name(key=value, ...)``."""
    function = descriptor.get("function") or {}
    arguments = function.get("arguments")
    if isinstance(arguments, str):
        try:
            arguments = json.loads(arguments)
        except json.JSONDecodeError:
            pass
    call_text = Text()
    call_text.append(f"{function.get('name')}", style="bold cyan")
    call_text.append("(", style="dim")
    if isinstance(arguments, dict):
        call_text.append(", ".join(f"{k}={v!r}" for k, v in arguments.items()), style="white")
    elif arguments:
        call_text.append(str(arguments), style="white")
    call_text.append(")", style="dim")
    return call_text


def _tool_call_body(text: str, descriptors: list[dict]) -> Any:
    parts: list[Any] = []
    if text:
        parts.append(Markdown(text))
        parts.append(Text(""))
    parts.extend(_format_call(tc) for tc in descriptors)
    return Group(*parts) if len(parts) > 1 else parts[0]


def pprint_inference_response(response: Any, *, abbreviate: bool = False, file: Any = None) -> None:
    """Pretty-print an InferenceResponse.

    Args:
        response: An InferenceResponse instance.
        abbreviate: If True, truncate long text. Default False (show full).
        file: Optional file-like object for output (used in tests).
    """
    console = _make_console(file)
    text = _abbreviate(response.content or "", abbreviate)

    if response.has_tool_calls:
        body: Any = _tool_call_body(text, response.tool_calls)
        title, border = "Tool Call", "magenta"
    else:
        body = Markdown(text) if text else Text("(empty response)")
        title, border = "Assistant", "green"

    footer: list[str] = []
    usage = response.usage
    if usage is not None:
        footer.append(
            f"[dim]{usage.prompt_tokens} prompt + {usage.completion_tokens} completion"
            f" = {usage.total_tokens} tokens[/dim]"
        )
    meta = [f"model={response.model}"] if response.model else []
    if response.finish_reason is not None:
        meta.append(f"finish={response.finish_reason.value}")
    if meta:
        footer.append(f"[dim]{', '.join(meta)}[/dim]")

    if footer:
        content = Group(body, Text(""), Text.from_markup("\n".join(footer)))
    else:
        content = body
    console.print(Panel(content, title=f"[bold]{title}[/bold]", border_style=border))


def pprint_agent_outcome(outcome: Any, *, abbreviate: bool = False, file: Any = None) -> None:
    """Render an AgentOutcome as a chat transcript followed by a summary line."""
    console = _make_console(file)

    for msg in outcome.messages:
        role = msg.role.value
        title, border = _ROLE_STYLES.get(role, (role.title(), "white"))
        content = _abbreviate(msg.text, abbreviate)

        if msg.has_tool_calls:
            body: Any = _tool_call_body(content, msg.tool_calls)
            title, border = "Tool Call", "magenta"
        elif role == "assistant":
            body = Markdown(content) if content else Text("(empty)")
        else:
            body = Text(content)
            if role == "tool":
                title = f"{title} {escape(f'[{msg.tool_call_id}]')}"

        console.print(Panel(body, title=f"[bold]{title}[/bold]", border_style=border))

    summary = Text()
    summary.append(f"  {outcome.iterations} iterations", style="bold")
    summary.append(" | ", style="dim")
    summary.append(f"{outcome.tool_calls_made} tool calls", style="bold")
    summary.append(" | ", style="dim")
    if outcome.succeeded:
        summary.append("succeeded", style="green")
    else:
        summary.append(outcome.termination_reason.value, style="red")
    console.print(summary)
