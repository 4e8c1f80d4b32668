"""
Document template database operations - uploaded .docx templates.
"""

import logging
import sqlite3
from datetime import datetime
from typing import Dict, List, Optional

from .base import DB_PATH, TIMESTAMP_FORMAT, get_connection

logger = logging.getLogger(__name__)


def save_document_template(template_name: str, file_name: str, file_data: bytes,
                           db_path: str = DB_PATH) -> Optional[int]:
    """
    Stores an uploaded template.

    Args:
        template_name: Display name chosen by the user
        file_name: Original file name of the upload
        file_data: Raw .docx bytes

    Returns:
        The new template id, or None on failure
    """
    if not template_name or not file_data:
        logger.error("Missing template name or file data for save_document_template.")
        return None

    conn = None
    try:
        conn = get_connection(db_path)
        cursor = conn.cursor()
        now = datetime.now().strftime(TIMESTAMP_FORMAT)
        cursor.execute("""
        INSERT INTO document_templates (template_name, file_name, file_data, created_at, updated_at)
        VALUES (?, ?, ?, ?, ?)
        """, (template_name, file_name, sqlite3.Binary(file_data), now, now))
        conn.commit()
        logger.info(f"Saved template '{template_name}' ({file_name})")
        return cursor.lastrowid
    except sqlite3.Error as e:
        logger.error(f"Database error in save_document_template: {e}")
        return None
    finally:
        if conn:
            conn.close()


def load_document_template(template_id: int, db_path: str = DB_PATH) -> Optional[Dict]:
    """Returns id, template_name, file_name and file_data (bytes) for a template."""
    conn = None
    try:
        conn = get_connection(db_path)
        conn.row_factory = sqlite3.Row
        cursor = conn.cursor()
        cursor.execute("""
        SELECT id, template_name, file_name, file_data, created_at
        FROM document_templates WHERE id = ?
        """, (template_id,))
        row = cursor.fetchone()
        if not row:
            return None
        template = dict(row)
        template["file_data"] = bytes(template["file_data"])
        return template
    except sqlite3.Error as e:
        logger.error(f"Database error loading template {template_id}: {e}")
        return None
    finally:
        if conn:
            conn.close()


def list_document_templates(db_path: str = DB_PATH) -> List[Dict]:
    """Lists templates, newest first, without their file data."""
    conn = None
    try:
        conn = get_connection(db_path)
        conn.row_factory = sqlite3.Row
        cursor = conn.cursor()
        cursor.execute("""
        SELECT id, template_name, file_name, created_at
        FROM document_templates ORDER BY created_at DESC, id DESC
        """)
        return [dict(row) for row in cursor.fetchall()]
    except sqlite3.Error as e:
        logger.error(f"Database error listing templates: {e}")
        return []
    finally:
        if conn:
            conn.close()


def delete_document_template(template_id: int, db_path: str = DB_PATH) -> bool:
    """Deletes a template together with its drafts."""
    conn = None
    try:
        conn = get_connection(db_path)
        cursor = conn.cursor()
        cursor.execute("DELETE FROM document_templates WHERE id = ?", (template_id,))
        conn.commit()
        if cursor.rowcount == 0:
            logger.warning(f"No template with ID {template_id} to delete.")
            return False
        return True
    except sqlite3.Error as e:
        logger.error(f"Database error deleting template {template_id}: {e}")
        return False
    finally:
        if conn:
            conn.close()
