"""Story Bible database connections."""

import sqlite3
from collections.abc import Generator
from contextlib import contextmanager
from pathlib import Path

from inxtone.config import settings


class DatabaseNotFoundError(FileNotFoundError):
    """Raised when reading a Story Bible that was never initialized."""

    pass


@contextmanager
def get_connection(
    db_path: Path | None = None,
    read_only: bool = False,
) -> Generator[sqlite3.Connection, None, None]:
    """Open the Story Bible database.

    Args:
        db_path: Path to database file. Defaults to settings.db_path.
        read_only: Require an existing file and reject writes. Readers use
            this so a mistyped path never leaves an empty database behind.

    Yields:
        Connection with sqlite3.Row rows and foreign keys enforced

    Raises:
        DatabaseNotFoundError: If read_only and the file does not exist
    """
    path = settings.db_path if db_path is None else db_path
    if read_only and not path.exists():
        raise DatabaseNotFoundError(
            f"No Story Bible at {path} (run 'inxtone init')"
        )

    conn = sqlite3.connect(path)
    conn.row_factory = sqlite3.Row
    try:
        conn.execute("PRAGMA foreign_keys = ON;")
        if read_only:
            conn.execute("PRAGMA query_only = ON;")
        yield conn
    finally:
        conn.close()
