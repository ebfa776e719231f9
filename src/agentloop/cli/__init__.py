"""agentloop CLI -- ask an OpenAI-compatible model from the terminal.

This module is NEVER imported from agentloop/__init__.py.
It is only loaded via the ``agentloop`` entry point defined in pyproject.toml.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

try:
    import click
except ImportError:
    raise ImportError(
        "CLI dependencies not installed. Install with: pip install agentloop[cli]"
    ) from None

from dotenv import load_dotenv

if TYPE_CHECKING:
    from agentloop.llm.client import OpenAIClient


@click.group()
@click.option(
    "--base-url",
    default=None,
    envvar="AGENTLOOP_BASE_URL",
    help="API base URL (defaults to the gateway URL).",
)
@click.option(
    "--model",
    default=None,
    envvar="AGENTLOOP_MODEL",
    help="Default model for requests.",
)
@click.pass_context
def cli(ctx: click.Context, base_url: str | None, model: str | None) -> None:
    """agentloop: chat with OpenAI-compatible models."""
    load_dotenv()
    ctx.ensure_object(dict)
    ctx.obj["base_url"] = base_url
    ctx.obj["model"] = model


def _get_client(ctx: click.Context) -> "OpenAIClient":
    """Build an OpenAIClient from Click context and the environment."""
    from agentloop.llm.client import OpenAIClient

    return OpenAIClient(base_url=ctx.obj["base_url"], default_model=ctx.obj["model"])


# Register subcommands after cli group is defined
from agentloop.cli.commands.ask import ask  # noqa: E402

cli.add_command(ask)
