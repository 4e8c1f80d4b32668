"""
UI modules for the Legal Scrutiny Report generator.

Re-exports the page functions of src.ui.pages for app.py.
"""

from src.ui.pages import (
    show_report_builder_page,
    show_templates_page,
    show_drafts_page,
    show_deed_types_page,
)

__all__ = [
    'show_report_builder_page',
    'show_templates_page',
    'show_drafts_page',
    'show_deed_types_page',
]
