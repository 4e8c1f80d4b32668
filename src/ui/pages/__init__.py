"""
Page modules for the Legal Scrutiny Report generator.

Each page module is responsible for rendering a specific page in the Streamlit application:
- report_builder_page: Template fields, deeds, document details, preview and download
- templates_page: Upload and manage Word templates
- drafts_page: Saved drafts
- deed_types_page: Deed types, narrative templates and custom placeholders

All page functions are exported here for convenient importing.
"""

from .report_builder_page import show_report_builder_page
from .templates_page import show_templates_page
from .drafts_page import show_drafts_page
from .deed_types_page import show_deed_types_page

__all__ = [
    'show_report_builder_page',
    'show_templates_page',
    'show_drafts_page',
    'show_deed_types_page',
]
