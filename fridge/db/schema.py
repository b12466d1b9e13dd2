"""Database schema definitions for the fridge store file."""

from __future__ import annotations

import sqlite3

SCHEMA_VERSION = 1

_DDL = """
CREATE TABLE IF NOT EXISTS food_items (
    name TEXT NOT NULL,
    best_before TEXT NOT NULL,
    quantity INTEGER NOT NULL DEFAULT 1 CHECK (quantity >= 1),
    opened INTEGER NOT NULL DEFAULT 0,
    PRIMARY KEY (name, best_before)
);

CREATE INDEX IF NOT EXISTS idx_food_items_best_before ON food_items(best_before);

CREATE TABLE IF NOT EXISTS schema_version (
    version INTEGER NOT NULL
);
"""


def ensure_schema(conn: sqlite3.Connection) -> None:
    """Create the tables if needed and record the schema version.

    Args:
        conn: An open connection to a writable database.
    """
    conn.executescript(_DDL)
    conn.execute("DELETE FROM schema_version")
    conn.execute(
        "INSERT INTO schema_version (version) VALUES (?)",
        (SCHEMA_VERSION,),
    )
    conn.commit()


def read_schema_version(conn: sqlite3.Connection) -> int:
    """Return the stored schema version.

    Raises:
        sqlite3.DatabaseError: If the file is not a database or the
            schema_version table is missing or empty.
    """
    row = conn.execute("SELECT version FROM schema_version").fetchone()
    if row is None:
        raise sqlite3.DatabaseError("schema_version table is empty")
    return int(row[0])
