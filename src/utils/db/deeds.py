"""
Deed database operations - rows of the "Description of Documents Scrutinized" table.
"""

import json
import logging
import sqlite3
from datetime import datetime
from typing import Dict, List, Optional

from src.utils.models import DeedRecord

from .base import DB_PATH, TIMESTAMP_FORMAT, get_connection

logger = logging.getLogger(__name__)

DEED_COLUMNS = ["deed_type", "executed_by", "in_favour_of", "date", "document_number", "nature_of_doc"]


def _row_to_deed(row: sqlite3.Row) -> DeedRecord:
    data = dict(row)
    try:
        custom_fields = json.loads(data.pop("custom_fields_json") or "{}")
    except json.JSONDecodeError:
        logger.error(f"Error parsing custom fields JSON for deed ID {data.get('id')}")
        custom_fields = {}
    return DeedRecord(custom_fields=custom_fields, **data)


def add_deed(deed: DeedRecord, db_path: str = DB_PATH) -> Optional[int]:
    """
    Appends a deed to the deeds table.

    Returns:
        The new deed id, or None on failure
    """
    conn = None
    try:
        conn = get_connection(db_path)
        cursor = conn.cursor()
        now = datetime.now().strftime(TIMESTAMP_FORMAT)
        cursor.execute("""
        INSERT INTO deeds
        (deed_type, executed_by, in_favour_of, date, document_number, nature_of_doc,
         custom_fields_json, created_at, updated_at)
        VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
        """, (
            deed.deed_type, deed.executed_by, deed.in_favour_of, deed.date,
            deed.document_number, deed.nature_of_doc,
            json.dumps(deed.custom_fields), now, now,
        ))
        conn.commit()
        return cursor.lastrowid
    except sqlite3.Error as e:
        logger.error(f"Database error in add_deed: {e}")
        return None
    finally:
        if conn:
            conn.close()


def update_deed(deed_id: int, updates: Dict[str, str], db_path: str = DB_PATH) -> bool:
    """
    Updates the standard columns of a deed.

    Args:
        deed_id: ID of the deed
        updates: column -> value; only names in DEED_COLUMNS are applied
    """
    valid_updates = {key: ("" if value is None else str(value))
                     for key, value in updates.items() if key in DEED_COLUMNS}
    if not valid_updates:
        logger.warning(f"No valid deed columns in update for deed ID {deed_id}.")
        return False

    conn = None
    try:
        conn = get_connection(db_path)
        cursor = conn.cursor()
        assignments = ", ".join(f"{key} = ?" for key in valid_updates)
        values = list(valid_updates.values())
        values.append(datetime.now().strftime(TIMESTAMP_FORMAT))
        values.append(deed_id)
        cursor.execute(f"UPDATE deeds SET {assignments}, updated_at = ? WHERE id = ?", values)
        conn.commit()
        return cursor.rowcount > 0
    except sqlite3.Error as e:
        logger.error(f"Database error updating deed {deed_id}: {e}")
        return False
    finally:
        if conn:
            conn.close()


def update_deed_custom_field(deed_id: int, key: str, value: str, db_path: str = DB_PATH) -> bool:
    """Sets a single custom field on a deed, keeping the others."""
    conn = None
    try:
        conn = get_connection(db_path)
        cursor = conn.cursor()
        cursor.execute("SELECT custom_fields_json FROM deeds WHERE id = ?", (deed_id,))
        row = cursor.fetchone()
        if not row:
            logger.error(f"Deed with ID {deed_id} not found.")
            return False
        custom_fields = json.loads(row[0] or "{}")
        custom_fields[key] = value or ""
        cursor.execute(
            "UPDATE deeds SET custom_fields_json = ?, updated_at = ? WHERE id = ?",
            (json.dumps(custom_fields), datetime.now().strftime(TIMESTAMP_FORMAT), deed_id),
        )
        conn.commit()
        return True
    except (sqlite3.Error, json.JSONDecodeError) as e:
        logger.error(f"Error updating custom field '{key}' for deed {deed_id}: {e}")
        return False
    finally:
        if conn:
            conn.close()


def delete_deed(deed_id: int, db_path: str = DB_PATH) -> bool:
    conn = None
    try:
        conn = get_connection(db_path)
        cursor = conn.cursor()
        cursor.execute("DELETE FROM deeds WHERE id = ?", (deed_id,))
        conn.commit()
        return cursor.rowcount > 0
    except sqlite3.Error as e:
        logger.error(f"Database error deleting deed {deed_id}: {e}")
        return False
    finally:
        if conn:
            conn.close()


def load_deeds(db_path: str = DB_PATH) -> List[DeedRecord]:
    """All deeds in the order they were added."""
    conn = None
    try:
        conn = get_connection(db_path)
        conn.row_factory = sqlite3.Row
        cursor = conn.cursor()
        cursor.execute("""
        SELECT id, deed_type, executed_by, in_favour_of, date, document_number,
               nature_of_doc, custom_fields_json
        FROM deeds ORDER BY created_at ASC, id ASC
        """)
        return [_row_to_deed(row) for row in cursor.fetchall()]
    except sqlite3.Error as e:
        logger.error(f"Error loading deeds: {e}")
        return []
    finally:
        if conn:
            conn.close()
