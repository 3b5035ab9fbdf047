"""SQLite schema definitions for the Story Bible.

Nested fields (outlines, motivations, id lists) are stored as JSON text.
"""

import sqlite3
from contextlib import closing
from pathlib import Path

import structlog

logger = structlog.get_logger()

# ===================
# WRITING TABLES
# ===================

CREATE_CHAPTERS_TABLE = """
CREATE TABLE IF NOT EXISTS chapters (
    id INTEGER PRIMARY KEY,
    volume_id INTEGER,
    arc_id TEXT,
    title TEXT,
    status TEXT DEFAULT 'draft' CHECK (status IN (
        'outline', 'draft', 'revision', 'done'
    )),
    sort_order INTEGER NOT NULL DEFAULT 0,
    outline TEXT,  -- JSON object: goal, scenes, hook_ending
    content TEXT,
    characters TEXT,  -- JSON array of character ids
    locations TEXT,  -- JSON array of location ids
    foreshadowing_planted TEXT,  -- JSON array
    foreshadowing_hinted TEXT  -- JSON array
);
"""

CREATE_CHAPTERS_VOLUME_INDEX = """
CREATE INDEX IF NOT EXISTS idx_chapters_volume ON chapters(volume_id, sort_order);
"""

# ===================
# CHARACTER TABLES
# ===================

CREATE_CHARACTERS_TABLE = """
CREATE TABLE IF NOT EXISTS characters (
    id TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    role TEXT NOT NULL CHECK (role IN (
        'main', 'supporting', 'antagonist', 'mentioned'
    )),
    appearance TEXT,
    voice_samples TEXT,  -- JSON array
    motivation TEXT,  -- JSON object: surface, hidden, core
    facets TEXT  -- JSON object: public, private, hidden, under_pressure
);
"""

CREATE_RELATIONSHIPS_TABLE = """
CREATE TABLE IF NOT EXISTS relationships (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    source_id TEXT NOT NULL REFERENCES characters(id) ON DELETE CASCADE,
    target_id TEXT NOT NULL REFERENCES characters(id) ON DELETE CASCADE,
    type TEXT NOT NULL,
    join_reason TEXT,
    independent_goal TEXT,
    evolution TEXT,
    UNIQUE(source_id, target_id)
);
"""

CREATE_RELATIONSHIPS_PAIR_INDEX = """
CREATE INDEX IF NOT EXISTS idx_relationships_pair
    ON relationships(source_id, target_id);
"""

# ===================
# WORLD TABLES
# ===================

CREATE_LOCATIONS_TABLE = """
CREATE TABLE IF NOT EXISTS locations (
    id TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    type TEXT,
    significance TEXT,
    atmosphere TEXT
);
"""

CREATE_WORLD_TABLE = """
CREATE TABLE IF NOT EXISTS world (
    id TEXT PRIMARY KEY DEFAULT 'main',
    power_system TEXT,  -- JSON object
    social_rules TEXT  -- JSON object
);
"""

# ===================
# PLOT TABLES
# ===================

CREATE_ARCS_TABLE = """
CREATE TABLE IF NOT EXISTS arcs (
    id TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    type TEXT NOT NULL CHECK (type IN ('main', 'sub')),
    status TEXT DEFAULT 'planned' CHECK (status IN (
        'planned', 'in_progress', 'complete'
    )),
    sections TEXT  -- JSON array of {name, status, chapters}
);
"""

CREATE_FORESHADOWING_TABLE = """
CREATE TABLE IF NOT EXISTS foreshadowing (
    id TEXT PRIMARY KEY,
    content TEXT NOT NULL,
    status TEXT DEFAULT 'active' CHECK (status IN (
        'active', 'resolved', 'abandoned'
    )),
    planted_chapter INTEGER,
    planned_payoff INTEGER,
    term TEXT
);
"""

CREATE_FORESHADOWING_STATUS_INDEX = """
CREATE INDEX IF NOT EXISTS idx_foreshadowing_status ON foreshadowing(status);
"""

CREATE_HOOKS_TABLE = """
CREATE TABLE IF NOT EXISTS hooks (
    id TEXT PRIMARY KEY,
    type TEXT NOT NULL CHECK (type IN ('opening', 'arc', 'chapter')),
    chapter_id INTEGER,
    content TEXT NOT NULL,
    strength INTEGER CHECK (strength IS NULL OR (strength >= 0 AND strength <= 100))
);
"""

CREATE_HOOKS_CHAPTER_INDEX = """
CREATE INDEX IF NOT EXISTS idx_hooks_chapter ON hooks(chapter_id);
"""

ALL_TABLES = [
    CREATE_CHAPTERS_TABLE,
    CREATE_CHARACTERS_TABLE,
    CREATE_RELATIONSHIPS_TABLE,
    CREATE_LOCATIONS_TABLE,
    CREATE_WORLD_TABLE,
    CREATE_ARCS_TABLE,
    CREATE_FORESHADOWING_TABLE,
    CREATE_HOOKS_TABLE,
]

ALL_INDEXES = [
    CREATE_CHAPTERS_VOLUME_INDEX,
    CREATE_RELATIONSHIPS_PAIR_INDEX,
    CREATE_FORESHADOWING_STATUS_INDEX,
    CREATE_HOOKS_CHAPTER_INDEX,
]


def init_database(db_path: Path) -> None:
    """Create the Story Bible tables and indexes.

    Idempotent: existing tables and rows are left untouched.
    """
    db_path.parent.mkdir(parents=True, exist_ok=True)

    with closing(sqlite3.connect(db_path)) as conn:
        conn.executescript("\n".join([*ALL_TABLES, *ALL_INDEXES]))

    logger.debug("database_initialized", db_path=str(db_path))
