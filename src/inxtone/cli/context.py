"""Inxtone context commands.

Commands for assembling and inspecting Story Bible context.
"""

import json
from collections.abc import Generator
from contextlib import contextmanager

import click

from inxtone.bible.sqlite import SqliteStoryBible
from inxtone.config import settings
from inxtone.context import (
    ChapterContextBuilder,
    ContextBudget,
    FormattedContext,
    InvalidBudgetError,
    PriorityTiers,
    ProjectContextBuilder,
)
from inxtone.db.connection import DatabaseNotFoundError, get_connection


@contextmanager
def open_bible() -> Generator[SqliteStoryBible, None, None]:
    """Open the configured Story Bible database for reading."""
    try:
        with get_connection(settings.db_path, read_only=True) as conn:
            yield SqliteStoryBible(conn)
    except DatabaseNotFoundError as e:
        raise click.ClickException(str(e)) from e


def resolve_budget(
    total: int | None, output_reserve: int | None, prompt_reserve: int | None
) -> ContextBudget:
    """Build a budget from CLI overrides, falling back to settings."""
    defaults = ContextBudget.from_settings()
    try:
        return ContextBudget(
            total=defaults.total if total is None else total,
            output_reserve=(
                defaults.output_reserve if output_reserve is None else output_reserve
            ),
            prompt_reserve=(
                defaults.prompt_reserve if prompt_reserve is None else prompt_reserve
            ),
        )
    except InvalidBudgetError as e:
        raise click.BadParameter(str(e)) from e


def budget_options(func):  # type: ignore[no-untyped-def]
    """Shared --total/--output-reserve/--prompt-reserve options."""
    func = click.option(
        "--prompt-reserve", type=int, default=None,
        help="Tokens reserved for prompt template and instructions",
    )(func)
    func = click.option(
        "--output-reserve", type=int, default=None,
        help="Tokens reserved for model output",
    )(func)
    func = click.option(
        "--total", type=int, default=None,
        help="Total token ceiling",
    )(func)
    return func


def echo_context(result: FormattedContext, as_json: bool) -> None:
    if as_json:
        click.echo(
            json.dumps(
                {
                    "text": result.text,
                    "item_count": result.item_count,
                    "total_tokens": result.total_tokens,
                    "truncated": result.truncated,
                    "dropped": result.dropped_ids,
                    "sections": result.sections_used,
                },
                ensure_ascii=False,
                indent=2,
            )
        )
        return

    click.echo(result.text)
    summary = f"{result.item_count} items, ~{result.total_tokens} tokens"
    if result.truncated:
        summary += f", truncated ({len(result.dropped)} items dropped)"
    click.echo(summary, err=True)


@click.group()
def context() -> None:
    """Assemble Story Bible context."""
    pass


@context.command("chapter")
@click.argument("chapter_id", type=int)
@budget_options
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def chapter(
    chapter_id: int,
    total: int | None,
    output_reserve: int | None,
    prompt_reserve: int | None,
    as_json: bool,
) -> None:
    """Build the five-layer context for CHAPTER_ID."""
    budget = resolve_budget(total, output_reserve, prompt_reserve)
    with open_bible() as bible:
        builder = ChapterContextBuilder(
            bible,
            budget=budget,
            tiers=PriorityTiers.from_settings(),
            prev_tail_length=settings.context.prev_chapter_tail_length,
        )
        result = builder.build(chapter_id)
    echo_context(result, as_json)


@context.command("project")
@click.option("--summary", is_flag=True, help="Names and status only")
@budget_options
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def project(
    summary: bool,
    total: int | None,
    output_reserve: int | None,
    prompt_reserve: int | None,
    as_json: bool,
) -> None:
    """Build context spanning the whole Story Bible."""
    budget = resolve_budget(total, output_reserve, prompt_reserve)
    with open_bible() as bible:
        builder = ProjectContextBuilder(
            bible, budget=budget, tiers=PriorityTiers.from_settings()
        )
        result = builder.build_summary() if summary else builder.build_full()
    echo_context(result, as_json)
