"""
Database utilities package for the Legal Scrutiny Report generator.

Modules:
- base: Database initialization and connection management
- templates: Uploaded .docx templates
- deeds: Rows of the deeds table
- deed_types: Deed types, preview/narrative templates and custom placeholders
- drafts: Saved form state per template

Usage:
    from src.utils.db import init_db, add_deed, load_deeds

    # Initialize database
    init_db()

    # Add a deed
    add_deed(DeedRecord(deed_type='Sale Deed', executed_by='A', in_favour_of='B'))

    # Load deeds in creation order
    deeds = load_deeds()
"""

# Base
from .base import (
    DB_PATH,
    TIMESTAMP_FORMAT,
    init_db,
    get_connection
)

# Document template operations
from .templates import (
    save_document_template,
    load_document_template,
    list_document_templates,
    delete_document_template
)

# Deed operations
from .deeds import (
    add_deed,
    update_deed,
    update_deed_custom_field,
    delete_deed,
    load_deeds
)

# Deed type operations
from .deed_types import (
    save_deed_type,
    load_deed_types,
    delete_deed_type,
    save_preview_template,
    add_custom_placeholder,
    remove_custom_placeholder,
    save_history_template,
    load_history_templates
)

# Draft operations
from .drafts import (
    save_draft,
    load_drafts,
    load_draft,
    delete_draft
)

# Public API - all exported names
__all__ = [
    # Base
    'DB_PATH',
    'TIMESTAMP_FORMAT',
    'init_db',
    'get_connection',

    # Document template operations
    'save_document_template',
    'load_document_template',
    'list_document_templates',
    'delete_document_template',

    # Deed operations
    'add_deed',
    'update_deed',
    'update_deed_custom_field',
    'delete_deed',
    'load_deeds',

    # Deed type operations
    'save_deed_type',
    'load_deed_types',
    'delete_deed_type',
    'save_preview_template',
    'add_custom_placeholder',
    'remove_custom_placeholder',
    'save_history_template',
    'load_history_templates',

    # Draft operations
    'save_draft',
    'load_drafts',
    'load_draft',
    'delete_draft',
]
