"""agentloop ask -- send a single prompt and print the answer."""

from __future__ import annotations

import click

from agentloop.cli.formatting import format_answer, format_error, get_console


@click.command()
@click.argument("prompt")
@click.option("-s", "--system", "system_prompt", default=None, help="System prompt.")
@click.option("-m", "--model", default=None, help="Model for this request.")
@click.option(
    "-i",
    "--image",
    "images",
    multiple=True,
    help="Image URL or data URI to include (repeatable).",
)
@click.option(
    "--detail",
    default="auto",
    type=click.Choice(["low", "auto", "high"], case_sensitive=False),
    help="Image detail level.",
)
@click.option("-v", "--verbose", is_flag=True, help="Show usage and model details.")
@click.pass_context
def ask(
    ctx: click.Context,
    prompt: str,
    system_prompt: str | None,
    model: str | None,
    images: tuple[str, ...],
    detail: str,
    verbose: bool,
) -> None:
    """Ask the model a single question."""
    from agentloop.cli import _get_client
    from agentloop.models.message import Message

    console = get_console()
    try:
        with _get_client(ctx) as client:
            messages: list[Message] = []
            if system_prompt:
                messages.append(Message.system(system_prompt))
            if images:
                messages.append(Message.user_with_images(prompt, images, detail=detail.lower()))
            else:
                messages.append(Message.user(prompt))
            response = client.chat(messages, model=model)
        if verbose:
            response.pprint()
        else:
            format_answer(response.content, console)
    except SystemExit:
        raise
    except Exception as e:
        format_error(str(e), console)
        raise SystemExit(1) from None
