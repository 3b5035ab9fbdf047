"""Chapter-scoped context builder.

Assembles context for one chapter from its foreign-key references, in five
layers (higher priority is admitted first):

    L1 content   - chapter content, tail of the preceding chapter
    L2 outline   - chapter outline, containing arc
    L3 character - linked characters, relationships among them
    L4 world     - linked locations, power system, social rules
    L5 plot      - planted/hinted/active foreshadowing, hooks

Missing data never raises: an unknown chapter yields an empty context and
dangling references are skipped.
"""

import structlog

from .assembler import assemble_context, empty_context
from .budget import ContextBudget, PriorityTiers
from .formatting import (
    format_arc,
    format_chapter_outline,
    format_character,
    format_foreshadowing,
    format_hook,
    format_location,
    format_power_system,
    format_prev_tail,
    format_relationship,
    format_social_rules,
)
from .models import ContextItem, ContextItemType, FormattedContext
from .relationships import scoped_relationships
from .store_types import Chapter, StoryBible

logger = structlog.get_logger()

DEFAULT_PREV_TAIL_LENGTH = 500


class ChapterContextBuilder:
    """Build budget-bounded context for a single chapter."""

    def __init__(
        self,
        bible: StoryBible,
        budget: ContextBudget | None = None,
        tiers: PriorityTiers | None = None,
        prev_tail_length: int = DEFAULT_PREV_TAIL_LENGTH,
    ):
        self._bible = bible
        self._budget = budget or ContextBudget()
        self._tiers = tiers or PriorityTiers()
        self._prev_tail_length = prev_tail_length
        self._logger = logger.bind(component="chapter_context_builder")

    @property
    def budget(self) -> ContextBudget:
        return self._budget

    @property
    def tiers(self) -> PriorityTiers:
        return self._tiers

    def build(
        self,
        chapter_id: int,
        additional_items: list[ContextItem] | None = None,
    ) -> FormattedContext:
        """Build context for a chapter following the five-layer assembly.

        Args:
            chapter_id: The chapter to build context for
            additional_items: Caller-selected items, kept with their own priority.
                An item sharing (type, id) with a builder item is discarded in
                favour of the builder's; it appears in neither `items` nor
                `dropped`.

        Returns:
            FormattedContext; empty (not an error) for an unknown chapter
        """
        chapter = self._bible.get_chapter(chapter_id)
        if chapter is None:
            self._logger.info("chapter_not_found", chapter_id=chapter_id)
            return empty_context()

        prev_chapter = self._previous_chapter(chapter)

        candidates = [
            *self._content_layer(chapter, prev_chapter),
            *self._outline_layer(chapter),
            *self._character_layer(chapter),
            *self._world_layer(chapter),
            *self._plot_layer(chapter, prev_chapter),
            *(additional_items or []),
        ]

        return assemble_context(candidates, self._budget.usable, scope="chapter")

    # ===================
    # Layer builders
    # ===================

    def _content_layer(
        self, chapter: Chapter, prev_chapter: Chapter | None
    ) -> list[ContextItem]:
        items = []
        priority = self._tiers.content

        if chapter.content:
            items.append(
                ContextItem(
                    type=ContextItemType.CHAPTER_CONTENT,
                    id=str(chapter.id),
                    content=chapter.content,
                    priority=priority,
                )
            )

        # A non-positive tail length disables the previous-chapter tail
        if (
            prev_chapter is not None
            and prev_chapter.content
            and self._prev_tail_length > 0
        ):
            items.append(
                ContextItem(
                    type=ContextItemType.CHAPTER_PREV_TAIL,
                    id=f"prev-{prev_chapter.id}",
                    content=format_prev_tail(
                        prev_chapter.content, self._prev_tail_length
                    ),
                    priority=priority,
                )
            )

        return items

    def _outline_layer(self, chapter: Chapter) -> list[ContextItem]:
        items = []
        priority = self._tiers.outline

        outline = format_chapter_outline(chapter)
        if outline:
            items.append(
                ContextItem(
                    type=ContextItemType.CHAPTER_OUTLINE,
                    id=str(chapter.id),
                    content=outline,
                    priority=priority,
                )
            )

        if chapter.arc_id:
            arc = self._bible.get_arc(chapter.arc_id)
            if arc is not None:
                items.append(
                    ContextItem(
                        type=ContextItemType.ARC,
                        id=arc.id,
                        content=format_arc(arc),
                        priority=priority,
                    )
                )

        return items

    def _character_layer(self, chapter: Chapter) -> list[ContextItem]:
        if not chapter.characters:
            return []

        priority = self._tiers.character
        characters = self._bible.find_characters(chapter.characters)
        by_id = {character.id: character for character in characters}

        items = [
            ContextItem(
                type=ContextItemType.CHARACTER,
                id=character.id,
                content=format_character(character),
                priority=priority,
            )
            for character in characters
        ]

        for rel in scoped_relationships(self._bible, chapter.characters):
            source = by_id.get(rel.source_id)
            target = by_id.get(rel.target_id)
            if source is None or target is None:
                continue
            items.append(
                ContextItem(
                    type=ContextItemType.RELATIONSHIP,
                    id=f"rel-{rel.id}",
                    content=format_relationship(rel, source.name, target.name),
                    priority=priority,
                )
            )

        return items

    def _world_layer(self, chapter: Chapter) -> list[ContextItem]:
        items = []
        priority = self._tiers.world

        if chapter.locations:
            for location in self._bible.find_locations(chapter.locations):
                items.append(
                    ContextItem(
                        type=ContextItemType.LOCATION,
                        id=location.id,
                        content=format_location(location),
                        priority=priority,
                    )
                )

        world = self._bible.get_world()
        if world is None:
            return items

        power_system = format_power_system(world)
        if power_system:
            items.append(
                ContextItem(
                    type=ContextItemType.POWER_SYSTEM,
                    id="power-system",
                    content=power_system,
                    priority=priority,
                )
            )

        social_rules = format_social_rules(world)
        if social_rules:
            items.append(
                ContextItem(
                    type=ContextItemType.SOCIAL_RULES,
                    id="social-rules",
                    content=social_rules,
                    priority=priority,
                )
            )

        return items

    def _plot_layer(
        self, chapter: Chapter, prev_chapter: Chapter | None
    ) -> list[ContextItem]:
        items = []
        priority = self._tiers.plot

        def add_foreshadowing(ids: list[str], label: str) -> None:
            if not ids:
                return
            for fs in self._bible.find_foreshadowing(ids):
                items.append(
                    ContextItem(
                        type=ContextItemType.FORESHADOWING,
                        id=fs.id,
                        content=format_foreshadowing(fs, label),
                        priority=priority,
                    )
                )

        add_foreshadowing(chapter.foreshadowing_planted, "Planted here")
        add_foreshadowing(chapter.foreshadowing_hinted, "Hint")

        # Unlinked active threads, for chapters inside an arc only
        if chapter.arc_id:
            linked = set(chapter.foreshadowing_planted) | set(
                chapter.foreshadowing_hinted
            )
            for fs in self._bible.list_active_foreshadowing():
                if fs.id in linked:
                    continue
                items.append(
                    ContextItem(
                        type=ContextItemType.FORESHADOWING,
                        id=fs.id,
                        content=format_foreshadowing(fs, "Active thread"),
                        priority=priority,
                    )
                )

        for hook in self._bible.list_hooks_for_chapter(chapter.id):
            items.append(
                ContextItem(
                    type=ContextItemType.HOOK,
                    id=hook.id,
                    content=format_hook(hook, "Chapter hook"),
                    priority=priority,
                )
            )

        if prev_chapter is not None:
            for hook in self._bible.list_hooks_for_chapter(prev_chapter.id):
                items.append(
                    ContextItem(
                        type=ContextItemType.HOOK,
                        id=hook.id,
                        content=format_hook(hook, "Previous chapter hook"),
                        priority=priority,
                    )
                )

        return items

    # ===================
    # Helpers
    # ===================

    def _previous_chapter(self, chapter: Chapter) -> Chapter | None:
        """Find the chapter immediately before the given one.

        Uses volume ordering when the chapter has a volume, otherwise the
        global chapter order.
        """
        if chapter.volume_id is not None:
            chapters = self._bible.list_chapters_in_volume(chapter.volume_id)
        else:
            chapters = self._bible.list_chapters()

        ids = [c.id for c in chapters]
        if chapter.id not in ids:
            return None
        index = ids.index(chapter.id)
        if index == 0:
            return None

        return self._bible.get_chapter(ids[index - 1])
