"""Tests for candidate deduplication."""

from inxtone.context.deduplication import deduplicate_items
from inxtone.context.models import ContextItem, ContextItemType


def item(
    item_type: ContextItemType, content: str, item_id: str | None = None
) -> ContextItem:
    return ContextItem(type=item_type, content=content, priority=100, id=item_id)


class TestDeduplicateItems:
    def test_empty(self) -> None:
        assert deduplicate_items([]) == []

    def test_same_type_and_id_keeps_first(self) -> None:
        first = item(ContextItemType.FORESHADOWING, "[Planted here] x", "FS001")
        second = item(ContextItemType.FORESHADOWING, "[Hint] x", "FS001")

        assert deduplicate_items([first, second]) == [first]

    def test_same_id_different_type_both_kept(self) -> None:
        """Chapter content and chapter outline share the chapter id."""
        content = item(ContextItemType.CHAPTER_CONTENT, "prose", "2")
        outline = item(ContextItemType.CHAPTER_OUTLINE, "Goal: x", "2")

        assert deduplicate_items([content, outline]) == [content, outline]

    def test_anonymous_items_keyed_by_content(self) -> None:
        a = item(ContextItemType.CUSTOM, "note")
        b = item(ContextItemType.CUSTOM, "note")
        c = item(ContextItemType.CUSTOM, "other note")

        assert deduplicate_items([a, b, c]) == [a, c]

    def test_order_preserved(self) -> None:
        items = [
            item(ContextItemType.CHARACTER, "c", "C002"),
            item(ContextItemType.CHARACTER, "a", "C001"),
            item(ContextItemType.CHARACTER, "c again", "C002"),
            item(ContextItemType.LOCATION, "l", "L001"),
        ]

        assert [i.id for i in deduplicate_items(items)] == ["C002", "C001", "L001"]
