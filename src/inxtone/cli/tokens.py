"""Inxtone tokens command."""

import click

from inxtone.context import count_tokens


@click.command("tokens")
@click.argument("text", required=False)
def tokens(text: str | None) -> None:
    """Estimate the token cost of TEXT (reads stdin when omitted or '-')."""
    if text is None or text == "-":
        text = click.get_text_stream("stdin").read()
    click.echo(count_tokens(text))
