"""Tests for the SQLite Story Bible reader."""

import sqlite3
from pathlib import Path

from inxtone.bible.loader import load_bible
from inxtone.bible.sqlite import SqliteStoryBible
from inxtone.context import ChapterContextBuilder
from inxtone.db import get_connection, init_database
from tests.fixtures.story_bible import populated_bible


class TestSqliteStoryBible:
    def test_get_chapter(self, seeded_conn: sqlite3.Connection) -> None:
        chapter = SqliteStoryBible(seeded_conn).get_chapter(2)

        assert chapter is not None
        assert chapter.arc_id == "ARC001"
        assert chapter.outline is not None
        assert chapter.outline.scenes == ["Climb", "Ambush"]
        assert chapter.characters == ["C001", "C002", "C003", "C404"]
        assert chapter.foreshadowing_planted == []

    def test_get_unknown_chapter(self, seeded_conn: sqlite3.Connection) -> None:
        assert SqliteStoryBible(seeded_conn).get_chapter(99) is None

    def test_chapter_without_outline(self, seeded_conn: sqlite3.Connection) -> None:
        chapter = SqliteStoryBible(seeded_conn).get_chapter(1)

        assert chapter is not None
        assert chapter.outline is None
        assert chapter.characters == []

    def test_chapters_ordered_by_sort_order(
        self, seeded_conn: sqlite3.Connection
    ) -> None:
        load_bible(seeded_conn, {"chapters": [{"id": 3, "sort_order": 0}]})
        reader = SqliteStoryBible(seeded_conn)

        assert [c.id for c in reader.list_chapters()] == [3, 1, 2]
        assert [c.id for c in reader.list_chapters_in_volume(1)] == [1, 2]

    def test_find_characters_in_requested_order(
        self, seeded_conn: sqlite3.Connection
    ) -> None:
        found = SqliteStoryBible(seeded_conn).find_characters(
            ["C003", "C001", "C404", "C001"]
        )

        assert [c.id for c in found] == ["C003", "C001"]
        assert found[1].motivation is not None
        assert found[1].motivation.hidden == "Prove his father wrong"
        assert found[1].voice_samples == ["I don't run.", "Again."]

    def test_find_with_no_ids(self, seeded_conn: sqlite3.Connection) -> None:
        reader = SqliteStoryBible(seeded_conn)

        assert reader.find_characters([]) == []
        assert reader.find_locations([]) == []
        assert reader.find_foreshadowing([]) == []

    def test_relationship_is_directed(self, seeded_conn: sqlite3.Connection) -> None:
        reader = SqliteStoryBible(seeded_conn)

        rel = reader.find_relationship_between("C001", "C002")
        assert rel is not None
        assert rel.type == "companion"
        assert rel.join_reason == "Saved her in the market"
        assert reader.find_relationship_between("C002", "C001") is None

    def test_world(self, seeded_conn: sqlite3.Connection) -> None:
        world = SqliteStoryBible(seeded_conn).get_world()

        assert world is not None
        assert world.id == "main"
        assert world.power_system is not None
        assert world.power_system.levels == ["Foundation", "Core", "Nascent Soul"]
        assert world.social_rules == {"sects": "Sects outrank clans"}

    def test_arc_sections(self, seeded_conn: sqlite3.Connection) -> None:
        arc = SqliteStoryBible(seeded_conn).get_arc("ARC001")

        assert arc is not None
        assert [(s.name, s.status) for s in arc.sections] == [("Arrival", "complete")]

    def test_active_foreshadowing(self, seeded_conn: sqlite3.Connection) -> None:
        active = SqliteStoryBible(seeded_conn).list_active_foreshadowing()

        assert [f.id for f in active] == ["FS001", "FS002"]

    def test_hooks_for_chapter(self, seeded_conn: sqlite3.Connection) -> None:
        hooks = SqliteStoryBible(seeded_conn).list_hooks_for_chapter(1)

        assert [(h.id, h.strength) for h in hooks] == [("H001", 80)]

    def test_empty_database(self, db_path: Path) -> None:
        init_database(db_path)
        with get_connection(db_path) as conn:
            reader = SqliteStoryBible(conn)

            assert reader.get_world() is None
            assert reader.list_chapters() == []
            assert reader.list_arcs() == []


class TestSqliteContextParity:
    def test_chapter_context_matches_in_memory_bible(
        self, seeded_conn: sqlite3.Connection
    ) -> None:
        """The same story yields the same context from either reader."""
        from_db = ChapterContextBuilder(SqliteStoryBible(seeded_conn)).build(2)
        in_memory = ChapterContextBuilder(populated_bible()).build(2)

        assert from_db.text == in_memory.text
        assert from_db.total_tokens == in_memory.total_tokens
