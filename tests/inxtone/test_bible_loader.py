"""Tests for seeding a Story Bible from a document."""

import sqlite3
from pathlib import Path

import pytest

from inxtone.bible.loader import BibleLoadError, load_bible, read_bible_file
from inxtone.bible.sqlite import SqliteStoryBible
from tests.fixtures.story_bible import SEED_DOCUMENT


def row_count(conn: sqlite3.Connection, table: str) -> int:
    return conn.execute(f"SELECT COUNT(*) FROM {table}").fetchone()[0]


class TestReadBibleFile:
    def test_yaml(self, seed_file: Path) -> None:
        data = read_bible_file(seed_file)

        assert [c["id"] for c in data["characters"]] == ["C001", "C002", "C003"]
        assert data["chapters"][1]["content"] == "Lin Feng climbed. 林峰登山。"

    def test_json(self, tmp_path: Path) -> None:
        path = tmp_path / "bible.json"
        path.write_text('{"locations": [{"id": "L1", "name": "Gate"}]}')

        assert read_bible_file(path) == {"locations": [{"id": "L1", "name": "Gate"}]}

    def test_empty_document(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.yaml"
        path.write_text("")

        assert read_bible_file(path) == {}

    def test_non_mapping_rejected(self, tmp_path: Path) -> None:
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")

        with pytest.raises(BibleLoadError, match="must be a mapping"):
            read_bible_file(path)

    def test_invalid_yaml_rejected(self, tmp_path: Path) -> None:
        path = tmp_path / "broken.yaml"
        path.write_text("characters: [\n")

        with pytest.raises(BibleLoadError, match="Invalid Story Bible document"):
            read_bible_file(path)


class TestLoadBible:
    def test_counts(self, seeded_conn: sqlite3.Connection) -> None:
        counts = load_bible(seeded_conn, SEED_DOCUMENT)

        assert counts == {
            "characters": 3,
            "relationships": 2,
            "locations": 2,
            "world": 1,
            "arcs": 1,
            "foreshadowing": 3,
            "hooks": 2,
            "chapters": 2,
        }

    def test_reload_replaces_rows(self, seeded_conn: sqlite3.Connection) -> None:
        load_bible(seeded_conn, SEED_DOCUMENT)

        assert row_count(seeded_conn, "characters") == 3
        assert row_count(seeded_conn, "relationships") == 2
        assert row_count(seeded_conn, "chapters") == 2

    def test_sort_order_defaults_to_id(self, seeded_conn: sqlite3.Connection) -> None:
        load_bible(seeded_conn, {"chapters": [{"id": 7, "content": "Later."}]})

        chapter = SqliteStoryBible(seeded_conn).get_chapter(7)

        assert chapter is not None
        assert chapter.sort_order == 7
        assert chapter.status == "draft"

    def test_empty_document_writes_nothing(
        self, seeded_conn: sqlite3.Connection
    ) -> None:
        counts = load_bible(seeded_conn, {})

        assert set(counts.values()) == {0}

    def test_missing_required_field(self, seeded_conn: sqlite3.Connection) -> None:
        with pytest.raises(KeyError):
            load_bible(seeded_conn, {"characters": [{"id": "C9", "role": "main"}]})

    def test_power_system_requires_name(
        self, seeded_conn: sqlite3.Connection
    ) -> None:
        with pytest.raises(KeyError, match="name"):
            load_bible(
                seeded_conn, {"world": {"power_system": {"core_rules": ["Qi flows"]}}}
            )

    def test_arc_section_requires_name(self, seeded_conn: sqlite3.Connection) -> None:
        arc = {"id": "ARC2", "name": "Exile", "sections": [{"status": "planned"}]}

        with pytest.raises(KeyError, match="name"):
            load_bible(seeded_conn, {"arcs": [arc]})

    def test_nested_records_normalized(self, seeded_conn: sqlite3.Connection) -> None:
        load_bible(
            seeded_conn,
            {
                "world": {"power_system": {"name": "Qi"}},
                "arcs": [
                    {"id": "ARC2", "name": "Exile", "sections": [{"name": "Flight"}]}
                ],
            },
        )
        reader = SqliteStoryBible(seeded_conn)

        world = reader.get_world()
        arc = reader.get_arc("ARC2")
        assert world is not None and world.power_system is not None
        assert world.power_system.core_rules == []
        assert arc is not None
        assert [(s.name, s.status) for s in arc.sections] == [("Flight", "planned")]
