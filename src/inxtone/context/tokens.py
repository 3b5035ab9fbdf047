"""Token estimation and budget truncation for context assembly.

Estimation is a heuristic, not a provider tokenizer:
- CJK ideographs and CJK punctuation: 1.5 tokens each
- Other whitespace-delimited words: 1.3 tokens each
"""

import re
from collections.abc import Iterable

import structlog

from .models import BuiltContext, ContextItem, InvalidBudgetError

logger = structlog.get_logger()

CJK_PATTERN = re.compile(
    "["
    "\u4e00-\u9fff"  # CJK Unified Ideographs
    "\u3400-\u4dbf"  # Extension A
    "\uf900-\ufaff"  # Compatibility Ideographs
    "\u3000-\u303f"  # CJK Symbols and Punctuation
    "\uff00-\uffef"  # Halfwidth and Fullwidth Forms
    "]"
)

# Weights in tenths of a token, so the sum stays exact before rounding up.
CJK_WEIGHT_TENTHS = 15
WORD_WEIGHT_TENTHS = 13


def count_tokens(text: str | None) -> int:
    """Estimate token count for a given text."""
    if not text:
        return 0

    cjk_count = len(CJK_PATTERN.findall(text))
    word_count = len(CJK_PATTERN.sub(" ", text).split())

    tenths = cjk_count * CJK_WEIGHT_TENTHS + word_count * WORD_WEIGHT_TENTHS
    return -(-tenths // 10)


def truncate_to_budget(items: Iterable[ContextItem], budget: int) -> BuiltContext:
    """Select the highest-priority items that fit within a token budget.

    Items are stable-sorted by priority (descending), so equal priorities keep
    their input order. The sorted list is scanned once: an item is admitted
    whole when it fits in the remaining budget and skipped otherwise. Later,
    smaller items may still be admitted after a skip; nothing is reordered to
    pack the budget more tightly.

    Args:
        items: Candidate items in source order
        budget: Maximum total estimated tokens for admitted items

    Returns:
        BuiltContext with admitted items in priority order

    Raises:
        InvalidBudgetError: If budget is negative
    """
    if budget < 0:
        raise InvalidBudgetError(f"budget must be non-negative, got {budget}")

    ranked = sorted(items, key=lambda item: item.priority, reverse=True)

    included: list[ContextItem] = []
    dropped: list[ContextItem] = []
    total_tokens = 0

    for item in ranked:
        item_tokens = count_tokens(item.content)
        if total_tokens + item_tokens <= budget:
            included.append(item)
            total_tokens += item_tokens
        else:
            dropped.append(item)

    if dropped:
        logger.warning(
            "context_truncated",
            budget=budget,
            admitted=len(included),
            dropped=len(dropped),
            total_tokens=total_tokens,
        )

    return BuiltContext(
        items=tuple(included),
        total_tokens=total_tokens,
        truncated=bool(dropped),
        dropped=tuple(dropped),
    )
