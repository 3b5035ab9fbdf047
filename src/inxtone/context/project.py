"""Project-wide context builder.

Builds context from every Story Bible entity rather than one chapter's
references. Two modes:

- build_full(): all entities with moderate detail (Story Bible Q&A)
- build_summary(): names and status only (brainstorming)

Both share truncation and formatting with the chapter builder.
"""

from .assembler import assemble_context
from .budget import ContextBudget, PriorityTiers
from .models import ContextItem, ContextItemType, FormattedContext
from .store_types import StoryBible


class ProjectContextBuilder:
    """Build budget-bounded context spanning the whole Story Bible."""

    def __init__(
        self,
        bible: StoryBible,
        budget: ContextBudget | None = None,
        tiers: PriorityTiers | None = None,
    ):
        self._bible = bible
        self._budget = budget or ContextBudget()
        self._tiers = tiers or PriorityTiers()

    def build_full(self) -> FormattedContext:
        """Build comprehensive context: every entity kind, one item each."""
        items: list[ContextItem] = []
        tiers = self._tiers

        characters = self._bible.list_characters()
        if characters:
            lines = []
            for c in characters:
                lines.append(f"- {c.name} ({c.role})")
                if c.motivation and c.motivation.surface:
                    lines.append(f"  Motivation: {c.motivation.surface}")
                if c.facets and c.facets.public:
                    lines.append(f"  Personality: {c.facets.public}")
            items.append(
                _item(ContextItemType.CHARACTER, "global-characters",
                      "### Characters\n" + "\n".join(lines), tiers.character)
            )

        relationships = self._bible.list_relationships()
        if relationships:
            names = {c.id: c.name for c in characters}
            lines = [
                f"- {names.get(r.source_id, r.source_id)} → "
                f"{names.get(r.target_id, r.target_id)}: {r.type}"
                for r in relationships
            ]
            items.append(
                _item(ContextItemType.RELATIONSHIP, "global-relationships",
                      "### Relationships\n" + "\n".join(lines), tiers.character)
            )

        arcs = self._bible.list_arcs()
        if arcs:
            lines = [f"- {a.name} ({a.type}, {a.status})" for a in arcs]
            items.append(
                _item(ContextItemType.ARC, "global-arcs",
                      "### Story Arcs\n" + "\n".join(lines), tiers.outline)
            )

        locations = self._bible.list_locations()
        if locations:
            lines = [
                f"- {loc.name}" + (f" ({loc.type})" if loc.type else "")
                for loc in locations
            ]
            items.append(
                _item(ContextItemType.LOCATION, "global-locations",
                      "### Locations\n" + "\n".join(lines), tiers.world)
            )

        foreshadowing = self._bible.list_foreshadowing()
        if foreshadowing:
            lines = [f"- {f.content} ({f.status})" for f in foreshadowing]
            items.append(
                _item(ContextItemType.FORESHADOWING, "global-foreshadowing",
                      "### Foreshadowing\n" + "\n".join(lines), tiers.plot)
            )

        world = self._bible.get_world()
        if world is not None and world.power_system is not None:
            power = world.power_system
            parts = [f"### Power System: {power.name}"]
            if power.core_rules:
                parts.append(f"Core rules: {', '.join(power.core_rules)}")
            items.append(
                _item(ContextItemType.POWER_SYSTEM, "global-power-system",
                      "\n".join(parts), tiers.world)
            )
        if world is not None and world.social_rules:
            lines = [f"- {k}: {v}" for k, v in world.social_rules.items()]
            items.append(
                _item(ContextItemType.SOCIAL_RULES, "global-social-rules",
                      "### Social Rules\n" + "\n".join(lines), tiers.world)
            )

        return assemble_context(items, self._budget.usable, scope="project_full")

    def build_summary(self) -> FormattedContext:
        """Build a lightweight summary: names and status one-liners."""
        items: list[ContextItem] = []
        tiers = self._tiers

        characters = self._bible.list_characters()
        if characters:
            names = ", ".join(f"{c.name}({c.role})" for c in characters)
            items.append(
                _item(ContextItemType.CHARACTER, "summary-characters",
                      f"Characters: {names}", tiers.character)
            )

        arcs = self._bible.list_arcs()
        if arcs:
            names = ", ".join(f"{a.name}({a.status})" for a in arcs)
            items.append(
                _item(ContextItemType.ARC, "summary-arcs",
                      f"Story arcs: {names}", tiers.outline)
            )

        active = self._bible.list_active_foreshadowing()
        if active:
            threads = "; ".join(f.content for f in active)
            items.append(
                _item(ContextItemType.FORESHADOWING, "summary-foreshadowing",
                      f"Active foreshadowing: {threads}", tiers.plot)
            )

        return assemble_context(items, self._budget.usable, scope="project_summary")


def _item(
    item_type: ContextItemType, item_id: str, content: str, priority: int
) -> ContextItem:
    return ContextItem(type=item_type, id=item_id, content=content, priority=priority)
