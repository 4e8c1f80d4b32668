"""
Deed type database operations.

Each deed type carries a one-line preview template, a History of Title
narrative template and a set of custom placeholders that appear as extra
columns in the deed editor.
"""

import json
import logging
import sqlite3
from datetime import datetime
from typing import Dict, List, Optional

from src.utils.exceptions import DuplicatePlaceholderError, HistoryTemplateLookupError
from src.utils.models import DeedTemplate

from .base import DB_PATH, TIMESTAMP_FORMAT, get_connection

logger = logging.getLogger(__name__)


def _now() -> str:
    return datetime.now().strftime(TIMESTAMP_FORMAT)


def save_deed_type(deed_type: str, description: str = "", db_path: str = DB_PATH) -> Optional[int]:
    """
    Creates a deed type, or updates its description if it already exists.

    Returns:
        The deed type id, or None on failure
    """
    deed_type = (deed_type or "").strip()
    if not deed_type:
        logger.error("Deed type name is required.")
        return None

    conn = None
    try:
        conn = get_connection(db_path)
        cursor = conn.cursor()
        now = _now()
        cursor.execute("""
        INSERT INTO deed_templates (deed_type, description, preview_template, custom_placeholders_json,
                                    created_at, updated_at)
        VALUES (?, ?, '', '{}', ?, ?)
        ON CONFLICT(deed_type) DO UPDATE SET
            description = excluded.description,
            updated_at = excluded.updated_at
        """, (deed_type, description or "", now, now))
        conn.commit()
        cursor.execute("SELECT id FROM deed_templates WHERE deed_type = ?", (deed_type,))
        return cursor.fetchone()[0]
    except sqlite3.Error as e:
        logger.error(f"Database error in save_deed_type: {e}")
        return None
    finally:
        if conn:
            conn.close()


def load_deed_types(db_path: str = DB_PATH) -> List[DeedTemplate]:
    """Deed types with their narrative templates, alphabetically."""
    conn = None
    try:
        conn = get_connection(db_path)
        conn.row_factory = sqlite3.Row
        cursor = conn.cursor()
        cursor.execute("""
        SELECT dt.deed_type, dt.description, dt.preview_template, dt.custom_placeholders_json,
               h.template_content
        FROM deed_templates dt
        LEFT JOIN history_of_title_templates h ON h.deed_type = dt.deed_type
        ORDER BY dt.deed_type COLLATE NOCASE
        """)
        deed_types = []
        for row in cursor.fetchall():
            try:
                placeholders = json.loads(row["custom_placeholders_json"] or "{}")
            except json.JSONDecodeError:
                logger.error(f"Error parsing custom placeholders for deed type '{row['deed_type']}'")
                placeholders = {}
            deed_types.append(DeedTemplate(
                deed_type=row["deed_type"],
                description=row["description"],
                preview_template=row["preview_template"],
                history_template=row["template_content"],
                custom_placeholders=placeholders,
            ))
        return deed_types
    except sqlite3.Error as e:
        logger.error(f"Error loading deed types: {e}")
        return []
    finally:
        if conn:
            conn.close()


def delete_deed_type(deed_type: str, db_path: str = DB_PATH) -> bool:
    """Deletes a deed type; its narrative template goes with it."""
    conn = None
    try:
        conn = get_connection(db_path)
        cursor = conn.cursor()
        cursor.execute("DELETE FROM deed_templates WHERE deed_type = ?", (deed_type,))
        conn.commit()
        return cursor.rowcount > 0
    except sqlite3.Error as e:
        logger.error(f"Database error deleting deed type '{deed_type}': {e}")
        return False
    finally:
        if conn:
            conn.close()


def save_preview_template(deed_type: str, preview_template: str, db_path: str = DB_PATH) -> bool:
    conn = None
    try:
        conn = get_connection(db_path)
        cursor = conn.cursor()
        cursor.execute(
            "UPDATE deed_templates SET preview_template = ?, updated_at = ? WHERE deed_type = ?",
            (preview_template or "", _now(), deed_type),
        )
        conn.commit()
        if cursor.rowcount == 0:
            logger.warning(f"Deed type '{deed_type}' not found; preview template not saved.")
            return False
        return True
    except sqlite3.Error as e:
        logger.error(f"Database error saving preview template for '{deed_type}': {e}")
        return False
    finally:
        if conn:
            conn.close()


def _load_placeholders(cursor: sqlite3.Cursor, deed_type: str) -> Optional[Dict[str, str]]:
    cursor.execute("SELECT custom_placeholders_json FROM deed_templates WHERE deed_type = ?", (deed_type,))
    row = cursor.fetchone()
    if row is None:
        return None
    return json.loads(row[0] or "{}")


def _store_placeholders(cursor: sqlite3.Cursor, deed_type: str, placeholders: Dict[str, str]):
    cursor.execute(
        "UPDATE deed_templates SET custom_placeholders_json = ?, updated_at = ? WHERE deed_type = ?",
        (json.dumps(placeholders), _now(), deed_type),
    )


def add_custom_placeholder(deed_type: str, key: str, description: str = "", db_path: str = DB_PATH) -> bool:
    """
    Adds a custom placeholder to a deed type.

    Raises:
        DuplicatePlaceholderError: if the key already exists for this deed type
    """
    key = (key or "").strip()
    if not key:
        logger.error("Custom placeholder key is required.")
        return False

    conn = None
    try:
        conn = get_connection(db_path)
        cursor = conn.cursor()
        placeholders = _load_placeholders(cursor, deed_type)
        if placeholders is None:
            logger.error(f"Deed type '{deed_type}' not found.")
            return False
        if key in placeholders:
            raise DuplicatePlaceholderError(f"Placeholder '{key}' already exists", deed_type)
        placeholders[key] = description or ""
        _store_placeholders(cursor, deed_type, placeholders)
        conn.commit()
        return True
    except (sqlite3.Error, json.JSONDecodeError) as e:
        logger.error(f"Error adding custom placeholder '{key}' to '{deed_type}': {e}")
        return False
    finally:
        if conn:
            conn.close()


def remove_custom_placeholder(deed_type: str, key: str, db_path: str = DB_PATH) -> bool:
    conn = None
    try:
        conn = get_connection(db_path)
        cursor = conn.cursor()
        placeholders = _load_placeholders(cursor, deed_type)
        if not placeholders or key not in placeholders:
            logger.warning(f"Placeholder '{key}' not found for deed type '{deed_type}'.")
            return False
        del placeholders[key]
        _store_placeholders(cursor, deed_type, placeholders)
        conn.commit()
        return True
    except (sqlite3.Error, json.JSONDecodeError) as e:
        logger.error(f"Error removing custom placeholder '{key}' from '{deed_type}': {e}")
        return False
    finally:
        if conn:
            conn.close()


def save_history_template(deed_type: str, template_content: str, db_path: str = DB_PATH) -> bool:
    """Creates or replaces the History of Title template of a deed type."""
    conn = None
    try:
        conn = get_connection(db_path)
        cursor = conn.cursor()
        now = _now()
        cursor.execute("""
        INSERT INTO history_of_title_templates (deed_type, template_content, created_at, updated_at)
        VALUES (?, ?, ?, ?)
        ON CONFLICT(deed_type) DO UPDATE SET
            template_content = excluded.template_content,
            updated_at = excluded.updated_at
        """, (deed_type, template_content or "", now, now))
        conn.commit()
        return True
    except sqlite3.Error as e:
        logger.error(f"Database error saving history template for '{deed_type}': {e}")
        return False
    finally:
        if conn:
            conn.close()


def load_history_templates(db_path: str = DB_PATH) -> Dict[str, str]:
    """
    Bulk lookup of every History of Title template.

    Returns:
        Trimmed, lowercased deed type -> template content

    Raises:
        HistoryTemplateLookupError: if the templates cannot be read
    """
    conn = None
    try:
        conn = get_connection(db_path)
        cursor = conn.cursor()
        cursor.execute("SELECT deed_type, template_content FROM history_of_title_templates")
        return {deed_type.strip().lower(): content or "" for deed_type, content in cursor.fetchall()}
    except sqlite3.Error as e:
        raise HistoryTemplateLookupError("Could not load History of Title templates", str(e)) from e
    finally:
        if conn:
            conn.close()
