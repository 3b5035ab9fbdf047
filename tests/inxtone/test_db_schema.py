"""Tests for Story Bible schema creation."""

import sqlite3
from pathlib import Path

import pytest

from inxtone.db.connection import DatabaseNotFoundError, get_connection
from inxtone.db.schema import init_database

EXPECTED_TABLES = {
    "arcs",
    "chapters",
    "characters",
    "foreshadowing",
    "hooks",
    "locations",
    "relationships",
    "world",
}


def table_names(db_path: Path) -> set[str]:
    conn = sqlite3.connect(db_path)
    try:
        rows = conn.execute(
            "SELECT name FROM sqlite_master WHERE type = 'table'"
        ).fetchall()
    finally:
        conn.close()
    return {row[0] for row in rows}


class TestInitDatabase:
    def test_creates_all_tables(self, db_path: Path) -> None:
        init_database(db_path)

        assert EXPECTED_TABLES <= table_names(db_path)

    def test_idempotent(self, db_path: Path) -> None:
        init_database(db_path)
        init_database(db_path)

        assert EXPECTED_TABLES <= table_names(db_path)

    def test_creates_parent_directories(self, tmp_path: Path) -> None:
        db_path = tmp_path / "nested" / "dir" / "story.db"

        init_database(db_path)

        assert db_path.exists()


class TestConstraints:
    @pytest.fixture
    def conn(self, db_path: Path):  # type: ignore[no-untyped-def]
        init_database(db_path)
        conn = sqlite3.connect(db_path)
        conn.execute("PRAGMA foreign_keys = ON;")
        yield conn
        conn.close()

    def test_character_role_checked(self, conn: sqlite3.Connection) -> None:
        with pytest.raises(sqlite3.IntegrityError):
            conn.execute(
                "INSERT INTO characters (id, name, role) VALUES ('C1', 'X', 'villain')"
            )

    def test_hook_strength_range_checked(self, conn: sqlite3.Connection) -> None:
        with pytest.raises(sqlite3.IntegrityError):
            conn.execute(
                "INSERT INTO hooks (id, type, content, strength) "
                "VALUES ('H1', 'chapter', 'x', 101)"
            )

    def test_relationship_requires_known_characters(
        self, conn: sqlite3.Connection
    ) -> None:
        with pytest.raises(sqlite3.IntegrityError):
            conn.execute(
                "INSERT INTO relationships (source_id, target_id, type) "
                "VALUES ('C1', 'C2', 'rival')"
            )

    def test_relationship_pair_unique(self, conn: sqlite3.Connection) -> None:
        conn.execute(
            "INSERT INTO characters (id, name, role) VALUES "
            "('C1', 'A', 'main'), ('C2', 'B', 'supporting')"
        )
        conn.execute(
            "INSERT INTO relationships (source_id, target_id, type) "
            "VALUES ('C1', 'C2', 'rival')"
        )

        with pytest.raises(sqlite3.IntegrityError):
            conn.execute(
                "INSERT INTO relationships (source_id, target_id, type) "
                "VALUES ('C1', 'C2', 'lover')"
            )


class TestGetConnection:
    def test_rows_are_mappings(self, db_path: Path) -> None:
        init_database(db_path)
        with get_connection(db_path) as conn:
            conn.execute("INSERT INTO locations (id, name) VALUES ('L1', 'Gate')")
            row = conn.execute("SELECT * FROM locations").fetchone()

        assert row["name"] == "Gate"

    def test_read_only_requires_existing_file(self, db_path: Path) -> None:
        with pytest.raises(DatabaseNotFoundError, match="run 'inxtone init'"):
            with get_connection(db_path, read_only=True):
                pass

        assert not db_path.exists()

    def test_read_only_rejects_writes(self, db_path: Path) -> None:
        init_database(db_path)
        with get_connection(db_path, read_only=True) as conn:
            with pytest.raises(sqlite3.OperationalError):
                conn.execute("INSERT INTO locations (id, name) VALUES ('L1', 'Gate')")
