"""SQLite-backed Story Bible reader."""

import json
import sqlite3
from typing import Any

from inxtone.context.store_types import StoryBible

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

CHAPTER_ORDER = "ORDER BY sort_order, id"


def _json(value: str | None, default: Any) -> Any:
    if value is None or value == "":
        return default
    return json.loads(value)


def _placeholders(count: int) -> str:
    return ", ".join("?" for _ in range(count))


class SqliteStoryBible(StoryBible):
    """Read Story Bible entities from an open SQLite connection.

    The connection must use sqlite3.Row as its row factory (see
    inxtone.db.connection.get_connection).
    """

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    # === Chapters ===

    def get_chapter(self, chapter_id: int) -> Chapter | None:
        row = self._conn.execute(
            "SELECT * FROM chapters WHERE id = ?", (chapter_id,)
        ).fetchone()
        return self._row_to_chapter(row) if row else None

    def list_chapters(self) -> list[Chapter]:
        rows = self._conn.execute(f"SELECT * FROM chapters {CHAPTER_ORDER}")
        return [self._row_to_chapter(row) for row in rows]

    def list_chapters_in_volume(self, volume_id: int) -> list[Chapter]:
        rows = self._conn.execute(
            f"SELECT * FROM chapters WHERE volume_id = ? {CHAPTER_ORDER}",
            (volume_id,),
        )
        return [self._row_to_chapter(row) for row in rows]

    # === Characters & relationships ===

    def find_characters(self, character_ids: list[str]) -> list[Character]:
        rows = self._fetch_by_ids("characters", character_ids)
        return [self._row_to_character(row) for row in rows]

    def list_characters(self) -> list[Character]:
        rows = self._conn.execute("SELECT * FROM characters ORDER BY id")
        return [self._row_to_character(row) for row in rows]

    def find_relationship_between(
        self, source_id: str, target_id: str
    ) -> Relationship | None:
        row = self._conn.execute(
            "SELECT * FROM relationships WHERE source_id = ? AND target_id = ?",
            (source_id, target_id),
        ).fetchone()
        return self._row_to_relationship(row) if row else None

    def list_relationships(self) -> list[Relationship]:
        rows = self._conn.execute("SELECT * FROM relationships ORDER BY id")
        return [self._row_to_relationship(row) for row in rows]

    # === World ===

    def find_locations(self, location_ids: list[str]) -> list[Location]:
        rows = self._fetch_by_ids("locations", location_ids)
        return [self._row_to_location(row) for row in rows]

    def list_locations(self) -> list[Location]:
        rows = self._conn.execute("SELECT * FROM locations ORDER BY id")
        return [self._row_to_location(row) for row in rows]

    def get_world(self) -> World | None:
        row = self._conn.execute("SELECT * FROM world LIMIT 1").fetchone()
        if row is None:
            return None
        power = _json(row["power_system"], None)
        return World(
            id=row["id"],
            power_system=PowerSystem(
                name=power["name"],
                levels=power.get("levels", []),
                core_rules=power.get("core_rules", []),
                constraints=power.get("constraints", []),
            ) if power else None,
            social_rules=_json(row["social_rules"], {}),
        )

    # === Plot ===

    def get_arc(self, arc_id: str) -> Arc | None:
        row = self._conn.execute(
            "SELECT * FROM arcs WHERE id = ?", (arc_id,)
        ).fetchone()
        return self._row_to_arc(row) if row else None

    def list_arcs(self) -> list[Arc]:
        rows = self._conn.execute("SELECT * FROM arcs ORDER BY id")
        return [self._row_to_arc(row) for row in rows]

    def find_foreshadowing(self, foreshadowing_ids: list[str]) -> list[Foreshadowing]:
        rows = self._fetch_by_ids("foreshadowing", foreshadowing_ids)
        return [self._row_to_foreshadowing(row) for row in rows]

    def list_foreshadowing(self) -> list[Foreshadowing]:
        rows = self._conn.execute("SELECT * FROM foreshadowing ORDER BY id")
        return [self._row_to_foreshadowing(row) for row in rows]

    def list_active_foreshadowing(self) -> list[Foreshadowing]:
        rows = self._conn.execute(
            "SELECT * FROM foreshadowing WHERE status = 'active' ORDER BY id"
        )
        return [self._row_to_foreshadowing(row) for row in rows]

    def list_hooks_for_chapter(self, chapter_id: int) -> list[Hook]:
        rows = self._conn.execute(
            "SELECT * FROM hooks WHERE chapter_id = ? ORDER BY id", (chapter_id,)
        )
        return [
            Hook(
                id=row["id"],
                type=row["type"],
                content=row["content"],
                chapter_id=row["chapter_id"],
                strength=row["strength"],
            )
            for row in rows
        ]

    # === Helpers ===

    def _fetch_by_ids(self, table: str, ids: list[str]) -> list[sqlite3.Row]:
        """Fetch rows by id, returned in the order requested."""
        if not ids:
            return []
        unique_ids = list(dict.fromkeys(ids))
        rows = self._conn.execute(
            f"SELECT * FROM {table} WHERE id IN ({_placeholders(len(unique_ids))})",
            unique_ids,
        ).fetchall()
        by_id = {row["id"]: row for row in rows}
        return [by_id[i] for i in unique_ids if i in by_id]

    @staticmethod
    def _row_to_chapter(row: sqlite3.Row) -> Chapter:
        outline = _json(row["outline"], None)
        return Chapter(
            id=row["id"],
            sort_order=row["sort_order"],
            status=row["status"],
            title=row["title"],
            volume_id=row["volume_id"],
            arc_id=row["arc_id"],
            outline=ChapterOutline(
                goal=outline.get("goal"),
                scenes=outline.get("scenes", []),
                hook_ending=outline.get("hook_ending"),
            ) if outline is not None else None,
            content=row["content"],
            characters=_json(row["characters"], []),
            locations=_json(row["locations"], []),
            foreshadowing_planted=_json(row["foreshadowing_planted"], []),
            foreshadowing_hinted=_json(row["foreshadowing_hinted"], []),
        )

    @staticmethod
    def _row_to_character(row: sqlite3.Row) -> Character:
        motivation = _json(row["motivation"], None)
        facets = _json(row["facets"], None)
        return Character(
            id=row["id"],
            name=row["name"],
            role=row["role"],
            appearance=row["appearance"],
            voice_samples=_json(row["voice_samples"], []),
            motivation=CharacterMotivation(
                surface=motivation.get("surface", ""),
                hidden=motivation.get("hidden"),
                core=motivation.get("core"),
            ) if motivation else None,
            facets=CharacterFacets(
                public=facets.get("public", ""),
                private=facets.get("private"),
                hidden=facets.get("hidden"),
                under_pressure=facets.get("under_pressure"),
            ) if facets else None,
        )

    @staticmethod
    def _row_to_relationship(row: sqlite3.Row) -> Relationship:
        return Relationship(
            id=row["id"],
            source_id=row["source_id"],
            target_id=row["target_id"],
            type=row["type"],
            join_reason=row["join_reason"],
            independent_goal=row["independent_goal"],
            evolution=row["evolution"],
        )

    @staticmethod
    def _row_to_location(row: sqlite3.Row) -> Location:
        return Location(
            id=row["id"],
            name=row["name"],
            type=row["type"],
            significance=row["significance"],
            atmosphere=row["atmosphere"],
        )

    @staticmethod
    def _row_to_arc(row: sqlite3.Row) -> Arc:
        sections = _json(row["sections"], [])
        return Arc(
            id=row["id"],
            name=row["name"],
            type=row["type"],
            status=row["status"],
            sections=[
                ArcSection(
                    name=s["name"],
                    status=s.get("status", "planned"),
                    chapters=s.get("chapters", []),
                )
                for s in sections
            ],
        )

    @staticmethod
    def _row_to_foreshadowing(row: sqlite3.Row) -> Foreshadowing:
        return Foreshadowing(
            id=row["id"],
            content=row["content"],
            status=row["status"],
            planted_chapter=row["planted_chapter"],
            planned_payoff=row["planned_payoff"],
            term=row["term"],
        )
