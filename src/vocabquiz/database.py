import os
import sqlite3
from typing import Optional

from .config import settings


def default_db_path() -> str:
    return os.path.join(settings.DB_DIR, settings.DB_FILE)


def get_db_connection(db_path: Optional[str] = None):
    """Opens the SQLite database that stores quiz logs."""
    conn = sqlite3.connect(db_path or default_db_path())
    conn.row_factory = sqlite3.Row
    return conn


def create_log_table(db_path: Optional[str] = None):
    conn = get_db_connection(db_path)
    with conn:
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS logs (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                timestamp DATETIME DEFAULT CURRENT_TIMESTAMP,
                logger TEXT,
                level TEXT,
                message TEXT
            );
        """
        )
    conn.close()


def init_db(db_path: Optional[str] = None):
    """Creates the database directory and tables."""
    path = db_path or default_db_path()
    directory = os.path.dirname(path)
    if directory and not os.path.exists(directory):
        os.makedirs(directory, exist_ok=True)
    create_log_table(path)
