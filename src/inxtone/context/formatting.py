"""Markdown formatting logic for context items and Story Bible entities.

The `<context>` delimiter and the section headings are a presentation
contract: prompt templates locate the injected block by them.
"""

from collections.abc import Iterable

from .models import ContextItem, ContextSection
from .store_types import (
    Arc,
    Chapter,
    Character,
    Foreshadowing,
    Hook,
    Location,
    Relationship,
    World,
)

CONTEXT_OPEN = "<context>"
CONTEXT_CLOSE = "</context>"

SECTION_TITLES: dict[ContextSection, str] = {
    ContextSection.NARRATIVE: "## Previous Content",
    ContextSection.OUTLINE: "## Chapter Outline",
    ContextSection.CHARACTER: "## Character Profiles",
    ContextSection.WORLD: "## World Rules",
    ContextSection.PLOT: "## Plot Threads",
    ContextSection.CUSTOM: "## Additional Information",
}


def group_by_section(
    items: Iterable[ContextItem],
) -> dict[ContextSection, list[ContextItem]]:
    """Partition items into sections, keeping their relative order."""
    grouped: dict[ContextSection, list[ContextItem]] = {
        section: [] for section in ContextSection
    }
    for item in items:
        grouped[item.type.section].append(item)
    return grouped


def format_context(items: Iterable[ContextItem]) -> str:
    """Format context items into structured markdown for prompt injection."""
    sections = []

    for section, section_items in group_by_section(items).items():
        if not section_items:
            continue
        body = "\n\n".join(item.content for item in section_items)
        sections.append(f"{SECTION_TITLES[section]}\n{body}")

    return f"{CONTEXT_OPEN}\n" + "\n\n".join(sections) + f"\n{CONTEXT_CLOSE}"


def format_character(character: Character) -> str:
    """Format a character entity into a readable profile."""
    parts = [f"### {character.name} ({character.role})"]

    if character.appearance:
        parts.append(f"Appearance: {character.appearance}")

    motivation = character.motivation
    if motivation:
        lines = ["Motivation:"]
        if motivation.surface:
            lines.append(f"  Surface: {motivation.surface}")
        if motivation.hidden:
            lines.append(f"  Hidden: {motivation.hidden}")
        if motivation.core:
            lines.append(f"  Core: {motivation.core}")
        if len(lines) > 1:
            parts.append("\n".join(lines))

    facets = character.facets
    if facets:
        lines = ["Personality:"]
        if facets.public:
            lines.append(f"  Public: {facets.public}")
        if facets.private:
            lines.append(f"  Private: {facets.private}")
        if facets.hidden:
            lines.append(f"  Hidden: {facets.hidden}")
        if facets.under_pressure:
            lines.append(f"  Under pressure: {facets.under_pressure}")
        if len(lines) > 1:
            parts.append("\n".join(lines))

    if character.voice_samples:
        samples = "\n".join(f'  "{sample}"' for sample in character.voice_samples)
        parts.append(f"Voice samples:\n{samples}")

    return "\n".join(parts)


def format_relationship(
    relationship: Relationship, source_name: str, target_name: str
) -> str:
    lines = [f"[Relationship] {source_name} → {target_name}: {relationship.type}"]
    if relationship.join_reason:
        lines.append(f"  Join reason: {relationship.join_reason}")
    if relationship.independent_goal:
        lines.append(f"  Independent goal: {relationship.independent_goal}")
    return "\n".join(lines)


def format_location(location: Location) -> str:
    lines = [f"### {location.name}"]
    if location.type:
        lines.append(f"Type: {location.type}")
    if location.atmosphere:
        lines.append(f"Atmosphere: {location.atmosphere}")
    if location.significance:
        lines.append(f"Significance: {location.significance}")
    return "\n".join(lines)


def format_arc(arc: Arc) -> str:
    lines = [
        f"### Story Arc: {arc.name}",
        f"Type: {arc.type}",
        f"Status: {arc.status}",
    ]
    if arc.sections:
        lines.append("Sections:")
        lines.extend(f"  - {s.name} ({s.status})" for s in arc.sections)
    return "\n".join(lines)


def format_chapter_outline(chapter: Chapter) -> str | None:
    """Render a chapter outline, or None when it has nothing to say."""
    outline = chapter.outline
    if outline is None:
        return None

    parts = []
    if outline.goal:
        parts.append(f"Goal: {outline.goal}")
    if outline.scenes:
        scenes = "\n".join(
            f"  {index}. {scene}" for index, scene in enumerate(outline.scenes, 1)
        )
        parts.append(f"Scenes:\n{scenes}")
    if outline.hook_ending:
        parts.append(f"Hook ending: {outline.hook_ending}")

    return "\n".join(parts) if parts else None


def format_prev_tail(content: str, tail_length: int) -> str:
    tail = content[-tail_length:] if tail_length > 0 else ""
    return f"[End of previous chapter]\n{tail}"


def format_power_system(world: World) -> str | None:
    """Render the power system when it defines core rules."""
    power = world.power_system
    if power is None or not power.core_rules:
        return None

    parts = [f"### Power System: {power.name}"]
    if power.levels:
        parts.append(f"Levels: {' → '.join(power.levels)}")
    rules = "\n".join(f"  - {rule}" for rule in power.core_rules)
    parts.append(f"Core rules:\n{rules}")
    if power.constraints:
        constraints = "\n".join(f"  - {c}" for c in power.constraints)
        parts.append(f"Constraints:\n{constraints}")
    return "\n".join(parts)


def format_social_rules(world: World) -> str | None:
    if not world.social_rules:
        return None
    lines = ["### Social Rules"]
    lines.extend(f"- {key}: {value}" for key, value in world.social_rules.items())
    return "\n".join(lines)


def format_foreshadowing(foreshadowing: Foreshadowing, label: str) -> str:
    return f"[{label}] {foreshadowing.content} (status: {foreshadowing.status})"


def format_hook(hook: Hook, label: str) -> str:
    strength = hook.strength if hook.strength is not None else "unset"
    return f"[{label}] {hook.content} (strength: {strength})"
