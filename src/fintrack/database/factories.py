"""Database factory functions for creating database instances."""

import os
from pathlib import Path
from typing import Optional

import structlog

from fintrack.database.base import Database
from fintrack.database.memory import MemoryDatabase
from fintrack.database.sqlalchemy_db import SQLAlchemyDatabase

MEMORY_URL = "memory://"

logger = structlog.get_logger(__name__)


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a SQLite database instance.

    Args:
        database_path: Path to SQLite database file. If None, checks FINTRACK_DB_PATH
            environment variable, then defaults to ~/.fintrack/fintrack.db

    Returns:
        SQLAlchemyDatabase instance configured for SQLite
    """
    if database_path is None:
        database_path = os.environ.get("FINTRACK_DB_PATH")

    if database_path is None:
        db_dir = Path.home() / ".fintrack"
        db_dir.mkdir(exist_ok=True)
        database_path = str(db_dir / "fintrack.db")

    return SQLAlchemyDatabase(f"sqlite:///{database_path}")


def create_database(
    database_url: Optional[str] = None, database_path: Optional[str] = None
) -> Database:
    """Select and create the storage backend.

    Resolution order: explicit URL, FINTRACK_DATABASE_URL, then a SQLite file
    (see create_sqlite_database). The URL ``memory://`` selects the in-memory
    backend; any other URL is handed to SQLAlchemy.

    Args:
        database_url: SQLAlchemy URL or ``memory://``
        database_path: SQLite file path used when no URL is configured

    Returns:
        Database instance
    """
    if database_url is None:
        database_url = os.environ.get("FINTRACK_DATABASE_URL")

    if database_url == MEMORY_URL:
        db: Database = MemoryDatabase()
    elif database_url:
        db = SQLAlchemyDatabase(database_url)
    else:
        db = create_sqlite_database(database_path)

    logger.debug("database_selected", backend=db.backend_name)
    return db
