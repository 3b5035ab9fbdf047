"""Inxtone database module."""

from inxtone.db.connection import DatabaseNotFoundError, get_connection
from inxtone.db.schema import init_database

__all__ = ["DatabaseNotFoundError", "get_connection", "init_database"]
