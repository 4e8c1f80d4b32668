"""
Database base module - contains DB path constants and initialization.
This module provides the foundation for all database operations.
"""

import logging
import os
import sqlite3

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

load_dotenv()

# Define database connection path; SCRUTINY_DB_PATH in .env or the environment overrides it
DB_PATH = os.getenv("SCRUTINY_DB_PATH", os.path.join("data", "scrutiny_data.db"))

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def get_connection(db_path: str = DB_PATH) -> sqlite3.Connection:
    """
    Creates and returns a database connection.

    Args:
        db_path: Path to the SQLite database file.

    Returns:
        sqlite3.Connection: Database connection object
    """
    conn = sqlite3.connect(db_path)
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


def init_db(db_path: str = DB_PATH):
    """
    Initializes the SQLite database. Creates all required tables if they don't exist.

    Tables created:
    - document_templates: Uploaded .docx templates
    - deeds: Rows of the deeds table
    - deed_templates: Deed types with preview template and custom placeholders
    - history_of_title_templates: Narrative template per deed type
    - drafts: Saved placeholder values and document details for a template
    """
    conn = None
    try:
        db_dir = os.path.dirname(db_path)
        if db_dir and not os.path.exists(db_dir):
            os.makedirs(db_dir)

        conn = sqlite3.connect(db_path)
        cursor = conn.cursor()

        cursor.execute("""
        CREATE TABLE IF NOT EXISTS document_templates (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            template_name TEXT NOT NULL,
            file_name TEXT NOT NULL,
            file_data BLOB NOT NULL,
            created_at TEXT NOT NULL,
            updated_at TEXT NOT NULL
        )
        """)

        cursor.execute("""
        CREATE TABLE IF NOT EXISTS deeds (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            deed_type TEXT NOT NULL DEFAULT '',
            executed_by TEXT NOT NULL DEFAULT '',
            in_favour_of TEXT NOT NULL DEFAULT '',
            date TEXT NOT NULL DEFAULT '',
            document_number TEXT NOT NULL DEFAULT '',
            nature_of_doc TEXT,
            custom_fields_json TEXT,
            created_at TEXT NOT NULL,
            updated_at TEXT NOT NULL
        )
        """)

        # custom_placeholders_json holds {key: description}
        cursor.execute("""
        CREATE TABLE IF NOT EXISTS deed_templates (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            deed_type TEXT UNIQUE NOT NULL,
            description TEXT,
            preview_template TEXT,
            custom_placeholders_json TEXT,
            created_at TEXT NOT NULL,
            updated_at TEXT NOT NULL
        )
        """)

        cursor.execute("""
        CREATE TABLE IF NOT EXISTS history_of_title_templates (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            deed_type TEXT UNIQUE NOT NULL,
            template_content TEXT NOT NULL,
            created_at TEXT NOT NULL,
            updated_at TEXT NOT NULL,
            FOREIGN KEY (deed_type) REFERENCES deed_templates (deed_type) ON DELETE CASCADE
        )
        """)

        cursor.execute("""
        CREATE TABLE IF NOT EXISTS drafts (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            template_id INTEGER NOT NULL,
            draft_name TEXT NOT NULL,
            placeholders_json TEXT NOT NULL,
            documents_json TEXT NOT NULL,
            created_at TEXT NOT NULL,
            updated_at TEXT NOT NULL,
            FOREIGN KEY (template_id) REFERENCES document_templates (id) ON DELETE CASCADE
        )
        """)

        conn.commit()
        logger.info(f"Database '{db_path}' initialized with all required tables.")
    except sqlite3.Error as e:
        logger.error(f"Error initializing database: {e}")
    finally:
        if conn:
            conn.close()
