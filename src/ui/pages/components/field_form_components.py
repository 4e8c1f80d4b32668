"""
Placeholder form for the scalar fields of a template.
"""

import streamlit as st

from src.utils.field_registry import FieldRegistry

# Field names containing these hints get a multi-line input.
MULTILINE_HINTS = ("address", "description", "remarks", "details")


def _field_label(name: str) -> str:
    return name.replace("_", " ").strip().title() or name


def show_field_form(registry: FieldRegistry, key_prefix: str = "field") -> FieldRegistry:
    """Renders one input per detected field and writes the values back into the registry."""
    if not len(registry):
        st.info("No fields found in this template.")
        return registry

    columns = st.columns(2)
    for position, (name, value) in enumerate(registry.entries()):
        with columns[position % 2]:
            widget = st.text_area if any(hint in name.lower() for hint in MULTILINE_HINTS) else st.text_input
            new_value = widget(_field_label(name), value=value, key=f"{key_prefix}_{name}", help=f"{{{name}}}")
            registry.set(name, new_value)
    return registry
