"""Rich formatting helpers for the agentloop CLI.

Rich auto-detects TTY and degrades gracefully when piped (no ANSI codes).
"""

from __future__ import annotations

from rich.console import Console
from rich.markdown import Markdown


def get_console() -> Console:
    """Create a Rich Console that auto-detects TTY for graceful pipe degradation."""
    return Console(stderr=False)


def format_answer(text: str | None, console: Console) -> None:
    """Display a model answer as markdown."""
    if not text:
        console.print("[dim](empty response)[/dim]")
        return
    console.print(Markdown(text))


def format_error(message: str, console: Console) -> None:
    """Display an error message."""
    console.print(f"[red]Error:[/red] {message}", highlight=False)
