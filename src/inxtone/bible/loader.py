"""Seed a Story Bible database from a YAML or JSON document.

Document layout (every key optional):

    characters: [{id, name, role, appearance, voice_samples, motivation, facets}]
    relationships: [{source_id, target_id, type, join_reason, ...}]
    locations: [{id, name, type, significance, atmosphere}]
    world: {power_system: {...}, social_rules: {...}}
    arcs: [{id, name, type, status, sections}]
    foreshadowing: [{id, content, status, ...}]
    hooks: [{id, type, chapter_id, content, strength}]
    chapters: [{id, sort_order, volume_id, arc_id, outline, content, ...}]
"""

import json
import sqlite3
from pathlib import Path
from typing import Any

import structlog
import yaml

logger = structlog.get_logger()


class BibleLoadError(Exception):
    """Raised when a Story Bible document cannot be read."""

    pass


def read_bible_file(path: Path) -> dict[str, Any]:
    """Parse a Story Bible document (YAML is a superset of JSON)."""
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise BibleLoadError(f"Invalid Story Bible document {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise BibleLoadError(
            f"Story Bible document {path} must be a mapping, got {type(data).__name__}"
        )
    return data


def _dump(value: Any) -> str | None:
    return None if value is None else json.dumps(value, ensure_ascii=False)


def _power_system(power: dict[str, Any] | None) -> dict[str, Any] | None:
    """Normalize a power system; `name` is required."""
    if power is None:
        return None
    return {
        "name": power["name"],
        "levels": power.get("levels") or [],
        "core_rules": power.get("core_rules") or [],
        "constraints": power.get("constraints") or [],
    }


def _arc_sections(sections: list[dict[str, Any]] | None) -> list[dict[str, Any]]:
    """Normalize arc sections; each needs a `name`."""
    return [
        {
            "name": s["name"],
            "status": s.get("status", "planned"),
            "chapters": s.get("chapters") or [],
        }
        for s in sections or []
    ]


def load_bible(conn: sqlite3.Connection, data: dict[str, Any]) -> dict[str, int]:
    """Insert (or replace) every entity in the document.

    Args:
        conn: Open connection to an initialized database
        data: Parsed Story Bible document

    Returns:
        Count of rows written per table
    """
    counts: dict[str, int] = {}

    characters = data.get("characters") or []
    conn.executemany(
        """
        INSERT OR REPLACE INTO characters
            (id, name, role, appearance, voice_samples, motivation, facets)
        VALUES (?, ?, ?, ?, ?, ?, ?)
        """,
        [
            (
                c["id"],
                c["name"],
                c.get("role", "supporting"),
                c.get("appearance"),
                _dump(c.get("voice_samples")),
                _dump(c.get("motivation")),
                _dump(c.get("facets")),
            )
            for c in characters
        ],
    )
    counts["characters"] = len(characters)

    relationships = data.get("relationships") or []
    conn.executemany(
        """
        INSERT OR REPLACE INTO relationships
            (source_id, target_id, type, join_reason, independent_goal, evolution)
        VALUES (?, ?, ?, ?, ?, ?)
        """,
        [
            (
                r["source_id"],
                r["target_id"],
                r["type"],
                r.get("join_reason"),
                r.get("independent_goal"),
                r.get("evolution"),
            )
            for r in relationships
        ],
    )
    counts["relationships"] = len(relationships)

    locations = data.get("locations") or []
    conn.executemany(
        """
        INSERT OR REPLACE INTO locations (id, name, type, significance, atmosphere)
        VALUES (?, ?, ?, ?, ?)
        """,
        [
            (
                loc["id"],
                loc["name"],
                loc.get("type"),
                loc.get("significance"),
                loc.get("atmosphere"),
            )
            for loc in locations
        ],
    )
    counts["locations"] = len(locations)

    world = data.get("world")
    if world:
        conn.execute(
            "INSERT OR REPLACE INTO world (id, power_system, social_rules) VALUES (?, ?, ?)",
            (
                world.get("id", "main"),
                _dump(_power_system(world.get("power_system"))),
                _dump(world.get("social_rules")),
            ),
        )
    counts["world"] = 1 if world else 0

    arcs = data.get("arcs") or []
    conn.executemany(
        "INSERT OR REPLACE INTO arcs (id, name, type, status, sections) VALUES (?, ?, ?, ?, ?)",
        [
            (
                a["id"],
                a["name"],
                a.get("type", "main"),
                a.get("status", "planned"),
                _dump(_arc_sections(a.get("sections"))),
            )
            for a in arcs
        ],
    )
    counts["arcs"] = len(arcs)

    foreshadowing = data.get("foreshadowing") or []
    conn.executemany(
        """
        INSERT OR REPLACE INTO foreshadowing
            (id, content, status, planted_chapter, planned_payoff, term)
        VALUES (?, ?, ?, ?, ?, ?)
        """,
        [
            (
                f["id"],
                f["content"],
                f.get("status", "active"),
                f.get("planted_chapter"),
                f.get("planned_payoff"),
                f.get("term"),
            )
            for f in foreshadowing
        ],
    )
    counts["foreshadowing"] = len(foreshadowing)

    hooks = data.get("hooks") or []
    conn.executemany(
        "INSERT OR REPLACE INTO hooks (id, type, chapter_id, content, strength) VALUES (?, ?, ?, ?, ?)",
        [
            (
                h["id"],
                h.get("type", "chapter"),
                h.get("chapter_id"),
                h["content"],
                h.get("strength"),
            )
            for h in hooks
        ],
    )
    counts["hooks"] = len(hooks)

    chapters = data.get("chapters") or []
    conn.executemany(
        """
        INSERT OR REPLACE INTO chapters
            (id, volume_id, arc_id, title, status, sort_order, outline, content,
             characters, locations, foreshadowing_planted, foreshadowing_hinted)
        VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
        """,
        [
            (
                ch["id"],
                ch.get("volume_id"),
                ch.get("arc_id"),
                ch.get("title"),
                ch.get("status", "draft"),
                ch.get("sort_order", ch["id"]),
                _dump(ch.get("outline")),
                ch.get("content"),
                _dump(ch.get("characters")),
                _dump(ch.get("locations")),
                _dump(ch.get("foreshadowing_planted")),
                _dump(ch.get("foreshadowing_hinted")),
            )
            for ch in chapters
        ],
    )
    counts["chapters"] = len(chapters)

    conn.commit()
    logger.info("bible_loaded", **counts)
    return counts
