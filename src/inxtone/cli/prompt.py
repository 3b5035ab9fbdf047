"""Inxtone prompt commands.

Render complete prompts with assembled context embedded, ready to send to
an AI provider.
"""

import click
import structlog

from inxtone.cli.context import budget_options, open_bible, resolve_budget
from inxtone.config import settings
from inxtone.context import (
    ChapterContextBuilder,
    ContextBudget,
    FormattedContext,
    PriorityTiers,
    ProjectContextBuilder,
    count_tokens,
)
from inxtone.prompts import PromptAssembler

logger = structlog.get_logger()


def _emit(prompt_text: str, result: FormattedContext, budget: ContextBudget) -> None:
    prompt_tokens = count_tokens(prompt_text)
    overhead = prompt_tokens - result.total_tokens
    if overhead > budget.prompt_reserve:
        logger.warning(
            "prompt_reserve_exceeded",
            overhead=overhead,
            prompt_reserve=budget.prompt_reserve,
        )
    click.echo(prompt_text)
    summary = f"~{prompt_tokens} prompt tokens ({result.item_count} context items)"
    if result.truncated:
        summary += ", context truncated"
    click.echo(summary, err=True)


@click.group()
def prompt() -> None:
    """Render prompts with Story Bible context."""
    pass


@prompt.command("continue")
@click.argument("chapter_id", type=int)
@click.option("--instruction", default="", help="Extra instruction for the model")
@budget_options
def continue_(
    chapter_id: int,
    instruction: str,
    total: int | None,
    output_reserve: int | None,
    prompt_reserve: int | None,
) -> None:
    """Prompt to continue writing CHAPTER_ID."""
    budget = resolve_budget(total, output_reserve, prompt_reserve)
    with open_bible() as bible:
        chapter = bible.get_chapter(chapter_id)
        if chapter is None:
            raise click.ClickException(f"Chapter {chapter_id} not found")
        result = ChapterContextBuilder(
            bible,
            budget=budget,
            tiers=PriorityTiers.from_settings(),
            prev_tail_length=settings.context.prev_chapter_tail_length,
        ).build(chapter_id)

    text = PromptAssembler().assemble(
        "continue",
        {
            "context": result.text,
            "current_content": chapter.content or "",
            "user_instruction": instruction,
        },
    )
    _emit(text, result, budget)


@prompt.command("ask")
@click.argument("question")
@budget_options
def ask(
    question: str,
    total: int | None,
    output_reserve: int | None,
    prompt_reserve: int | None,
) -> None:
    """Prompt to answer QUESTION from the whole Story Bible."""
    budget = resolve_budget(total, output_reserve, prompt_reserve)
    with open_bible() as bible:
        result = ProjectContextBuilder(
            bible, budget=budget, tiers=PriorityTiers.from_settings()
        ).build_full()

    text = PromptAssembler().assemble(
        "ask_bible", {"context": result.text, "question": question}
    )
    _emit(text, result, budget)


@prompt.command("brainstorm")
@click.argument("topic")
@click.option("--instruction", default="", help="Extra instruction for the model")
@budget_options
def brainstorm(
    topic: str,
    instruction: str,
    total: int | None,
    output_reserve: int | None,
    prompt_reserve: int | None,
) -> None:
    """Prompt to brainstorm plot directions on TOPIC."""
    budget = resolve_budget(total, output_reserve, prompt_reserve)
    with open_bible() as bible:
        result = ProjectContextBuilder(
            bible, budget=budget, tiers=PriorityTiers.from_settings()
        ).build_summary()

    text = PromptAssembler().assemble(
        "brainstorm",
        {"context": result.text, "topic": topic, "user_instruction": instruction},
    )
    _emit(text, result, budget)
