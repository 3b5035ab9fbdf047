"""Pytest configuration and fixtures."""

import sqlite3
from collections.abc import Generator
from pathlib import Path

import pytest
import yaml

from inxtone.bible.loader import load_bible
from inxtone.db import get_connection, init_database
from tests.fixtures.story_bible import SEED_DOCUMENT, FakeStoryBible, populated_bible


@pytest.fixture
def bible() -> FakeStoryBible:
    """Story Bible with two chapters, three characters and one arc."""
    return populated_bible()


@pytest.fixture
def empty_bible() -> FakeStoryBible:
    return FakeStoryBible()


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    """Path for a throwaway Story Bible database."""
    return tmp_path / "story.db"


@pytest.fixture
def seed_file(tmp_path: Path) -> Path:
    """The populated story written out as a YAML seed document."""
    path = tmp_path / "bible.yaml"
    path.write_text(yaml.safe_dump(SEED_DOCUMENT, allow_unicode=True), encoding="utf-8")
    return path


@pytest.fixture
def seeded_conn(db_path: Path) -> Generator[sqlite3.Connection, None, None]:
    """Open connection to a database loaded with the populated story."""
    init_database(db_path)
    with get_connection(db_path) as conn:
        load_bible(conn, SEED_DOCUMENT)
        yield conn
