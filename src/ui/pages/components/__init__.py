"""
UI Component modules for the Legal Scrutiny Report generator.

This package contains reusable UI components used by the Report Builder page:
- field_form_components: Inputs for the scalar fields of a template
- deed_editor_components: Deeds grid and document-detail editor
- preview_components: Plain-text report preview
"""

from .field_form_components import (
    show_field_form,
)

from .deed_editor_components import (
    custom_placeholder_keys,
    deeds_to_dataframe,
    dataframe_to_deeds,
    save_deed_changes,
    show_deed_editor,
    show_parcel_editor,
)

from .preview_components import (
    show_report_preview,
)

__all__ = [
    # Form components
    'show_field_form',
    # Editor components
    'custom_placeholder_keys',
    'deeds_to_dataframe',
    'dataframe_to_deeds',
    'save_deed_changes',
    'show_deed_editor',
    'show_parcel_editor',
    # Preview components
    'show_report_preview',
]
