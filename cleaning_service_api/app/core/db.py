"""
SQLite database integration and simple migration system.

This module provides functions for obtaining a database connection
(``get_connection``), a cursor context manager (``get_cursor``) and
``init_db``, which applies migrations and seeds reference data when
the application starts.

Applied migration versions are stored in the ``migrations`` table;
new migrations are appended to ``MIGRATIONS`` with an incremented
version number and run in order.
"""

import logging
import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from .config import settings


logger = logging.getLogger(__name__)


MIGRATIONS: list[tuple[int, str]] = [
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS users (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            username TEXT UNIQUE NOT NULL,
            password_hash TEXT NOT NULL,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        );

        CREATE TABLE IF NOT EXISTS services (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL,
            description TEXT,
            price REAL,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        );

        CREATE TABLE IF NOT EXISTS bookings (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            customer_name TEXT NOT NULL,
            address TEXT NOT NULL,
            date_time TIMESTAMP NOT NULL,
            service_id INTEGER NOT NULL,
            user_id INTEGER NOT NULL,
            status TEXT NOT NULL DEFAULT 'pending'
                CHECK (status IN ('pending', 'confirmed', 'cancelled')),
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            FOREIGN KEY(service_id) REFERENCES services(id),
            FOREIGN KEY(user_id) REFERENCES users(id)
        );
        """,
    ),
    (
        2,
        """
        -- Every booking query is scoped by owner.
        CREATE INDEX IF NOT EXISTS idx_bookings_user_id ON bookings(user_id);
        """,
    ),
]

# Largest value SQLite can bind as an INTEGER; bigger ints raise OverflowError.
SQLITE_MAX_INTEGER = 2**63 - 1

SEED_SERVICES: list[tuple[int, str, str, float]] = [
    (1, "Deep Cleaning", "Complete deep cleaning service", 150.00),
    (2, "Carpet Cleaning", "Professional carpet cleaning", 80.00),
    (3, "Window Cleaning", "Interior and exterior window cleaning", 60.00),
    (4, "Kitchen Cleaning", "Detailed kitchen cleaning", 100.00),
    (5, "Bathroom Cleaning", "Complete bathroom sanitization", 70.00),
]


def get_database_path() -> str:
    """Compute the path to the SQLite database file.

    If ``settings.database_url`` is an absolute path, use it directly.
    Otherwise resolve it relative to the project root.
    """
    db_url = settings.database_url
    if os.path.isabs(db_url):
        return db_url
    base_dir = Path(__file__).resolve().parent.parent.parent.parent
    return str((base_dir / db_url).resolve())


def get_connection() -> sqlite3.Connection:
    """Create and return a new SQLite connection.

    Rows are returned as ``sqlite3.Row`` so columns can be accessed by
    name.  Timestamps are returned exactly as stored (ISO strings);
    Pydantic parses them when building response models.
    """
    conn = sqlite3.connect(get_database_path())
    conn.row_factory = sqlite3.Row
    # SQLite only enforces REFERENCES clauses when this is on, per connection.
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


@contextmanager
def get_cursor() -> Iterator[sqlite3.Cursor]:
    """Context manager that yields a cursor and closes the connection on exit.

    The transaction is committed when the block exits normally and
    rolled back if it raises.
    """
    conn = get_connection()
    try:
        yield conn.cursor()
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def init_db() -> None:
    """Initialise the database, apply pending migrations and seed data.

    Creates the ``migrations`` table if it does not exist, applies every
    migration newer than the recorded version, inserts the service
    catalog and creates the default administrator account if it is
    configured and missing.
    """
    from .security import hash_password

    with get_cursor() as cursor:
        cursor.execute(
            "CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)"
        )
        cursor.execute("SELECT MAX(version) as version FROM migrations")
        row = cursor.fetchone()
        current_version = row["version"] if row and row["version"] is not None else 0

        for version, sql in MIGRATIONS:
            if version > current_version:
                logger.info("Applying database migration %s", version)
                cursor.executescript(sql)
                cursor.execute(
                    "INSERT INTO migrations (version) VALUES (?)", (version,)
                )
                current_version = version

        cursor.executemany(
            "INSERT OR IGNORE INTO services (id, name, description, price) VALUES (?, ?, ?, ?)",
            SEED_SERVICES,
        )

        username = settings.default_admin_username
        password = settings.default_admin_password
        if username and password:
            existing = cursor.execute(
                "SELECT id FROM users WHERE username = ?", (username,)
            ).fetchone()
            if not existing:
                cursor.execute(
                    "INSERT INTO users (username, password_hash) VALUES (?, ?)",
                    (username, hash_password(password)),
                )
                logger.info("Created default administrator account %s", username)
