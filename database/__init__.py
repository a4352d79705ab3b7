"""Database package public API."""

from .connection import SQLiteDatabase, get_database, init_database
from .migrations import run_migrations

__all__ = [
    "SQLiteDatabase",
    "get_database",
    "init_database",
    "run_migrations",
]
