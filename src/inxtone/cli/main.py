"""Inxtone CLI main entry point.

This module provides the main CLI interface for Inxtone.
"""

import click

from inxtone import __version__
from inxtone.config import settings
from inxtone.logging import configure_logging


@click.group()
@click.version_option(version=__version__, prog_name="inxtone")
def cli() -> None:
    """Inxtone - Story Bible context for AI-assisted novel writing.

    Assembles characters, locations, arcs and plot threads into a
    token-budgeted context block for LLM prompts.
    """
    configure_logging(settings.log_level, settings.log_format)


# Import and register subcommands
from inxtone.cli.context import context  # noqa: E402
from inxtone.cli.init_cmd import init  # noqa: E402
from inxtone.cli.prompt import prompt  # noqa: E402
from inxtone.cli.tokens import tokens  # noqa: E402

cli.add_command(init)
cli.add_command(context)
cli.add_command(prompt)
cli.add_command(tokens)
