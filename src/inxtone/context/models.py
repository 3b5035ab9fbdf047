"""Data models for context assembly."""

from dataclasses import dataclass, field
from enum import Enum


class ContextSection(str, Enum):
    """Rendered section of the context block, in presentation order."""

    NARRATIVE = "narrative"
    OUTLINE = "outline"
    CHARACTER = "character"
    WORLD = "world"
    PLOT = "plot"
    CUSTOM = "custom"


class ContextItemType(str, Enum):
    """Closed set of context item categories."""

    CHAPTER_CONTENT = "chapter_content"
    CHAPTER_OUTLINE = "chapter_outline"
    CHAPTER_PREV_TAIL = "chapter_prev_tail"
    CHARACTER = "character"
    RELATIONSHIP = "relationship"
    LOCATION = "location"
    ARC = "arc"
    FORESHADOWING = "foreshadowing"
    HOOK = "hook"
    POWER_SYSTEM = "power_system"
    SOCIAL_RULES = "social_rules"
    CUSTOM = "custom"

    @property
    def section(self) -> ContextSection:
        return SECTION_BY_TYPE[self]


SECTION_BY_TYPE: dict[ContextItemType, ContextSection] = {
    ContextItemType.CHAPTER_CONTENT: ContextSection.NARRATIVE,
    ContextItemType.CHAPTER_PREV_TAIL: ContextSection.NARRATIVE,
    ContextItemType.CHAPTER_OUTLINE: ContextSection.OUTLINE,
    ContextItemType.ARC: ContextSection.OUTLINE,
    ContextItemType.CHARACTER: ContextSection.CHARACTER,
    ContextItemType.RELATIONSHIP: ContextSection.CHARACTER,
    ContextItemType.LOCATION: ContextSection.WORLD,
    ContextItemType.POWER_SYSTEM: ContextSection.WORLD,
    ContextItemType.SOCIAL_RULES: ContextSection.WORLD,
    ContextItemType.FORESHADOWING: ContextSection.PLOT,
    ContextItemType.HOOK: ContextSection.PLOT,
    ContextItemType.CUSTOM: ContextSection.CUSTOM,
}

# Every item type must map to a section.
_unmapped = set(ContextItemType) - set(SECTION_BY_TYPE)
if _unmapped:
    raise RuntimeError(f"Context item types without a section: {sorted(_unmapped)}")


@dataclass(frozen=True)
class ContextItem:
    """A single pre-rendered piece of story context."""

    type: ContextItemType
    content: str
    priority: int
    id: str | None = None


@dataclass(frozen=True)
class BuiltContext:
    """Result of one truncation pass."""

    items: tuple[ContextItem, ...] = ()
    total_tokens: int = 0
    truncated: bool = False
    dropped: tuple[ContextItem, ...] = ()


@dataclass(frozen=True)
class FormattedContext:
    """Complete formatted context ready for prompt injection."""

    text: str
    items: tuple[ContextItem, ...]
    total_tokens: int
    truncated: bool
    dropped: tuple[ContextItem, ...] = ()
    sections_used: dict[str, int] = field(default_factory=dict)

    @property
    def item_count(self) -> int:
        return len(self.items)

    @property
    def dropped_ids(self) -> list[str]:
        return [item.id or item.type.value for item in self.dropped]


class ContextAssemblyError(Exception):
    """Base exception for context assembly."""

    pass


class InvalidBudgetError(ContextAssemblyError, ValueError):
    """Raised when a token budget or its reserves are inconsistent."""

    pass
