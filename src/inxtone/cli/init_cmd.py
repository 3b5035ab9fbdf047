"""Inxtone init command.

Initializes the Story Bible database, optionally seeding it from a file.
"""

import sqlite3
from pathlib import Path

import click

from inxtone.bible.loader import BibleLoadError, load_bible, read_bible_file
from inxtone.config import settings
from inxtone.db.connection import get_connection
from inxtone.db.schema import init_database


@click.command("init")
@click.option(
    "--seed",
    "seed_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="YAML or JSON Story Bible document to load",
)
def init(seed_file: Path | None) -> None:
    """Initialize the Story Bible database.

    This command is idempotent - safe to run multiple times. Seeding
    replaces entities that share an id with the document.
    """
    db_path = settings.db_path
    init_database(db_path)
    click.echo(f"  Initialized database at {db_path}")

    if seed_file is None:
        return

    try:
        data = read_bible_file(seed_file)
    except BibleLoadError as e:
        raise click.ClickException(str(e)) from e

    with get_connection(db_path) as conn:
        try:
            counts = load_bible(conn, data)
        except KeyError as e:
            raise click.ClickException(f"Missing required field {e} in {seed_file}") from e
        except sqlite3.Error as e:
            raise click.ClickException(f"Could not load {seed_file}: {e}") from e

    for table, count in counts.items():
        if count:
            click.echo(f"  Loaded {count} {table}")
