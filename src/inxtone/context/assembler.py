"""Shared final stage of every context builder: dedupe, truncate, format."""

from collections import Counter

import structlog

from .deduplication import deduplicate_items
from .formatting import format_context
from .models import ContextItem, FormattedContext
from .tokens import truncate_to_budget

logger = structlog.get_logger()


def assemble_context(
    candidates: list[ContextItem],
    budget: int,
    scope: str = "chapter",
) -> FormattedContext:
    """Turn a candidate list into formatted, budget-bounded context.

    Args:
        candidates: Items collected by a builder, in source order
        budget: Usable token budget for context items
        scope: Builder scope, for logging only

    Returns:
        FormattedContext with the delimited text block and truncation metadata
    """
    deduplicated = deduplicate_items(candidates)
    if len(deduplicated) != len(candidates):
        logger.debug(
            "deduplication_complete",
            scope=scope,
            original_count=len(candidates),
            deduplicated_count=len(deduplicated),
        )

    built = truncate_to_budget(deduplicated, budget)
    sections_used = Counter(item.type.section.value for item in built.items)

    logger.info(
        "context_built",
        scope=scope,
        item_count=len(built.items),
        total_tokens=built.total_tokens,
        truncated=built.truncated,
    )

    return FormattedContext(
        text=format_context(built.items),
        items=built.items,
        total_tokens=built.total_tokens,
        truncated=built.truncated,
        dropped=built.dropped,
        sections_used=dict(sections_used),
    )


def empty_context() -> FormattedContext:
    """Context for a scope with nothing to contribute."""
    return FormattedContext(
        text=format_context([]),
        items=(),
        total_tokens=0,
        truncated=False,
    )
