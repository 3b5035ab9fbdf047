"""Story Bible entity records and storage."""

from .models import (
    Arc,
    ArcSection,
    Chapter,
    ChapterOutline,
    Character,
    CharacterFacets,
    CharacterMotivation,
    Foreshadowing,
    Hook,
    Location,
    PowerSystem,
    Relationship,
    World,
)

__all__ = [
    "Arc",
    "ArcSection",
    "Chapter",
    "ChapterOutline",
    "Character",
    "CharacterFacets",
    "CharacterMotivation",
    "Foreshadowing",
    "Hook",
    "Location",
    "PowerSystem",
    "Relationship",
    "World",
]
