"""
Draft database operations - saved field values and document details for a template.
"""

import json
import logging
import sqlite3
from datetime import datetime
from typing import Dict, List, Mapping, Optional

from .base import DB_PATH, TIMESTAMP_FORMAT, get_connection

logger = logging.getLogger(__name__)


def save_draft(template_id: int, draft_name: str, placeholders: Mapping[str, str],
               documents: List[Dict], db_path: str = DB_PATH) -> Optional[int]:
    """
    Saves the current form state of a template.

    Args:
        template_id: ID of the document template the draft belongs to
        draft_name: Display name
        placeholders: Field name -> value
        documents: Parcel/document detail records as dictionaries

    Returns:
        The new draft id, or None on failure
    """
    if not draft_name:
        logger.error("Draft name is required.")
        return None

    conn = None
    try:
        conn = get_connection(db_path)
        cursor = conn.cursor()
        now = datetime.now().strftime(TIMESTAMP_FORMAT)
        cursor.execute("""
        INSERT INTO drafts (template_id, draft_name, placeholders_json, documents_json, created_at, updated_at)
        VALUES (?, ?, ?, ?, ?, ?)
        """, (template_id, draft_name, json.dumps(dict(placeholders)), json.dumps(list(documents)), now, now))
        conn.commit()
        logger.info(f"Saved draft '{draft_name}' for template {template_id}")
        return cursor.lastrowid
    except (sqlite3.Error, TypeError) as e:
        logger.error(f"Error saving draft '{draft_name}': {e}")
        return None
    finally:
        if conn:
            conn.close()


def _row_to_draft(row: sqlite3.Row) -> Dict:
    draft = dict(row)
    draft["placeholders"] = json.loads(draft.pop("placeholders_json") or "{}")
    draft["documents"] = json.loads(draft.pop("documents_json") or "[]")
    return draft


def load_drafts(template_id: Optional[int] = None, db_path: str = DB_PATH) -> List[Dict]:
    """Drafts newest first, optionally only those of one template."""
    conn = None
    try:
        conn = get_connection(db_path)
        conn.row_factory = sqlite3.Row
        cursor = conn.cursor()
        query = """
        SELECT d.id, d.template_id, d.draft_name, d.placeholders_json, d.documents_json,
               d.created_at, t.template_name
        FROM drafts d JOIN document_templates t ON t.id = d.template_id
        """
        params = ()
        if template_id is not None:
            query += " WHERE d.template_id = ?"
            params = (template_id,)
        query += " ORDER BY d.created_at DESC, d.id DESC"
        cursor.execute(query, params)
        return [_row_to_draft(row) for row in cursor.fetchall()]
    except (sqlite3.Error, json.JSONDecodeError) as e:
        logger.error(f"Error loading drafts: {e}")
        return []
    finally:
        if conn:
            conn.close()


def load_draft(draft_id: int, db_path: str = DB_PATH) -> Optional[Dict]:
    conn = None
    try:
        conn = get_connection(db_path)
        conn.row_factory = sqlite3.Row
        cursor = conn.cursor()
        cursor.execute("""
        SELECT id, template_id, draft_name, placeholders_json, documents_json, created_at
        FROM drafts WHERE id = ?
        """, (draft_id,))
        row = cursor.fetchone()
        return _row_to_draft(row) if row else None
    except (sqlite3.Error, json.JSONDecodeError) as e:
        logger.error(f"Error loading draft {draft_id}: {e}")
        return None
    finally:
        if conn:
            conn.close()


def delete_draft(draft_id: int, db_path: str = DB_PATH) -> bool:
    conn = None
    try:
        conn = get_connection(db_path)
        cursor = conn.cursor()
        cursor.execute("DELETE FROM drafts WHERE id = ?", (draft_id,))
        conn.commit()
        return cursor.rowcount > 0
    except sqlite3.Error as e:
        logger.error(f"Database error deleting draft {draft_id}: {e}")
        return False
    finally:
        if conn:
            conn.close()
