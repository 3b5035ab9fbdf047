"""Relationship scoping among a chapter's characters."""

from itertools import combinations

from .store_types import Relationship, StoryBible


def scoped_relationships(
    bible: StoryBible, character_ids: list[str]
) -> list[Relationship]:
    """Get direct relationships between the given characters.

    Every pair is looked up in both directions; each relationship is returned
    once, keyed by its own id. Relationships to characters outside the set
    are never returned. Lookups grow quadratically, so this is meant for
    per-chapter casts, not the whole Story Bible.

    Args:
        bible: Story Bible reader
        character_ids: Characters taking part (duplicates are ignored)

    Returns:
        Relationships in discovery order
    """
    unique_ids = list(dict.fromkeys(character_ids))

    relationships: list[Relationship] = []
    seen: set[int] = set()

    for id_a, id_b in combinations(unique_ids, 2):
        for source_id, target_id in ((id_a, id_b), (id_b, id_a)):
            rel = bible.find_relationship_between(source_id, target_id)
            if rel is not None and rel.id not in seen:
                relationships.append(rel)
                seen.add(rel.id)

    return relationships
