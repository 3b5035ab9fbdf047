"""Story Bible entity records.

Plain read-only records returned by a StoryBible reader. Optional fields are
None (or empty) when the author has not filled them in; context formatting
omits them entirely.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class CharacterMotivation:
    """Layered character motivation."""

    surface: str
    hidden: str | None = None
    core: str | None = None


@dataclass(frozen=True)
class CharacterFacets:
    """Personality facets shown in different situations."""

    public: str
    private: str | None = None
    hidden: str | None = None
    under_pressure: str | None = None


@dataclass(frozen=True)
class Character:
    id: str
    name: str
    role: str  # "main", "supporting", "antagonist", "mentioned"
    appearance: str | None = None
    voice_samples: list[str] = field(default_factory=list)
    motivation: CharacterMotivation | None = None
    facets: CharacterFacets | None = None


@dataclass(frozen=True)
class Relationship:
    """Directed relationship from source to target character."""

    id: int
    source_id: str
    target_id: str
    type: str  # "companion", "rival", "enemy", "mentor", "confidant", "lover"
    join_reason: str | None = None
    independent_goal: str | None = None
    evolution: str | None = None


@dataclass(frozen=True)
class Location:
    id: str
    name: str
    type: str | None = None
    significance: str | None = None
    atmosphere: str | None = None


@dataclass(frozen=True)
class ArcSection:
    name: str
    status: str
    chapters: list[int] = field(default_factory=list)


@dataclass(frozen=True)
class Arc:
    id: str
    name: str
    type: str  # "main" or "sub"
    status: str  # "planned", "in_progress", "complete"
    sections: list[ArcSection] = field(default_factory=list)


@dataclass(frozen=True)
class Foreshadowing:
    id: str
    content: str
    status: str  # "active", "resolved", "abandoned"
    planted_chapter: int | None = None
    planned_payoff: int | None = None
    term: str | None = None


@dataclass(frozen=True)
class Hook:
    id: str
    type: str  # "opening", "arc", "chapter"
    content: str
    chapter_id: int | None = None
    strength: int | None = None  # 0-100


@dataclass(frozen=True)
class PowerSystem:
    name: str
    levels: list[str] = field(default_factory=list)
    core_rules: list[str] = field(default_factory=list)
    constraints: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class World:
    id: str
    power_system: PowerSystem | None = None
    social_rules: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class ChapterOutline:
    goal: str | None = None
    scenes: list[str] = field(default_factory=list)
    hook_ending: str | None = None


@dataclass(frozen=True)
class Chapter:
    """A chapter with its foreign-key references into the Story Bible."""

    id: int
    sort_order: int
    status: str = "draft"
    title: str | None = None
    volume_id: int | None = None
    arc_id: str | None = None
    outline: ChapterOutline | None = None
    content: str | None = None
    characters: list[str] = field(default_factory=list)
    locations: list[str] = field(default_factory=list)
    foreshadowing_planted: list[str] = field(default_factory=list)
    foreshadowing_hinted: list[str] = field(default_factory=list)
