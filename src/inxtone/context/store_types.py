"""Type definitions for the StoryBible reader interface (used by context builders).

Re-exports entity records from inxtone.bible.models for use by the
builders and provides the abstract StoryBible interface.

All lookups are read-only. Unknown identifiers yield None or are left out
of returned lists; they never raise.
"""

from abc import ABC, abstractmethod

from inxtone.bible.models import (
    Arc,
    Chapter,
    Character,
    Foreshadowing,
    Hook,
    Location,
    Relationship,
    World,
)

__all__ = [
    "Arc",
    "Chapter",
    "Character",
    "Foreshadowing",
    "Hook",
    "Location",
    "Relationship",
    "StoryBible",
    "World",
]


class StoryBible(ABC):
    """Abstract reader over the persisted Story Bible."""

    # === Chapters ===

    @abstractmethod
    def get_chapter(self, chapter_id: int) -> Chapter | None:
        """Chapter with content, or None if unknown."""

    @abstractmethod
    def list_chapters(self) -> list[Chapter]:
        """All chapters in reading order."""

    @abstractmethod
    def list_chapters_in_volume(self, volume_id: int) -> list[Chapter]:
        """Chapters of one volume in reading order."""

    # === Characters & relationships ===

    @abstractmethod
    def find_characters(self, character_ids: list[str]) -> list[Character]:
        """Characters in the order requested; unknown ids are skipped."""

    @abstractmethod
    def list_characters(self) -> list[Character]:
        pass

    @abstractmethod
    def find_relationship_between(
        self, source_id: str, target_id: str
    ) -> Relationship | None:
        """Directed lookup: at most one relationship from source to target."""

    @abstractmethod
    def list_relationships(self) -> list[Relationship]:
        pass

    # === World ===

    @abstractmethod
    def find_locations(self, location_ids: list[str]) -> list[Location]:
        pass

    @abstractmethod
    def list_locations(self) -> list[Location]:
        pass

    @abstractmethod
    def get_world(self) -> World | None:
        pass

    # === Plot ===

    @abstractmethod
    def get_arc(self, arc_id: str) -> Arc | None:
        pass

    @abstractmethod
    def list_arcs(self) -> list[Arc]:
        pass

    @abstractmethod
    def find_foreshadowing(self, foreshadowing_ids: list[str]) -> list[Foreshadowing]:
        pass

    @abstractmethod
    def list_foreshadowing(self) -> list[Foreshadowing]:
        pass

    @abstractmethod
    def list_active_foreshadowing(self) -> list[Foreshadowing]:
        pass

    @abstractmethod
    def list_hooks_for_chapter(self, chapter_id: int) -> list[Hook]:
        pass
