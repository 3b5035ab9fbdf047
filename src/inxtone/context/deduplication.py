"""Candidate deduplication for context assembly."""

import structlog

from .models import ContextItem

logger = structlog.get_logger()


def deduplicate_items(items: list[ContextItem]) -> list[ContextItem]:
    """Drop repeated candidates, keeping the first occurrence.

    Items are keyed by (type, id). Items without an id are keyed by their
    content, so two identical anonymous items collapse into one. Discarded
    items are not reported as dropped by truncation.
    """
    if not items:
        return []

    seen: set[tuple[str, str]] = set()
    unique: list[ContextItem] = []

    for item in items:
        key = _get_dedup_key(item)
        if key in seen:
            logger.debug(
                "duplicate_item_discarded",
                item_type=item.type.value,
                item_id=item.id,
            )
            continue
        seen.add(key)
        unique.append(item)

    return unique


def _get_dedup_key(item: ContextItem) -> tuple[str, str]:
    """Generate deduplication key for item."""
    if item.id:
        return (item.type.value, f"id:{item.id}")
    return (item.type.value, f"content:{item.content}")
