"""
Deed Types Page Module

This module manages deed types:
- Creating and deleting deed types
- Preview and History of Title templates
- Custom placeholders shown as extra deed columns
"""

import streamlit as st

from src.utils.db import (
    add_custom_placeholder,
    delete_deed_type,
    load_deed_types,
    remove_custom_placeholder,
    save_deed_type,
    save_history_template,
    save_preview_template,
)
from src.utils.exceptions import DuplicatePlaceholderError
from src.utils.models import DEFAULT_PREVIEW_TEMPLATE, DeedTemplate
from src.utils.region_renderers import STANDARD_HISTORY_FIELDS

STANDARD_PLACEHOLDER_HELP = ", ".join(f"{{{name}}}" for name in STANDARD_HISTORY_FIELDS)


def _show_deed_type(deed_type: DeedTemplate, db_path: str):
    key = deed_type.deed_type
    if deed_type.description:
        st.caption(deed_type.description)

    preview = st.text_input(
        "Preview template",
        value=deed_type.preview_template,
        placeholder=DEFAULT_PREVIEW_TEMPLATE,
        key=f"preview_{key}",
    )
    history = st.text_area(
        "History of Title template",
        value=deed_type.history_template,
        height=150,
        key=f"history_{key}",
        help=f"Available placeholders: {STANDARD_PLACEHOLDER_HELP} and the custom placeholders below.",
    )
    if st.button("💾 Save Templates", key=f"save_templates_{key}"):
        saved = save_preview_template(key, preview, db_path=db_path)
        saved = save_history_template(key, history, db_path=db_path) and saved
        if saved:
            st.success("Templates saved.")
        else:
            st.error("Could not save the templates.")

    st.markdown("**Custom placeholders**")
    for placeholder, description in deed_type.custom_placeholders.items():
        col1, col2 = st.columns([5, 1])
        col1.write(f"`{{{placeholder}}}` {description}")
        if col2.button("Remove", key=f"remove_placeholder_{key}_{placeholder}"):
            remove_custom_placeholder(key, placeholder, db_path=db_path)
            st.rerun()

    col1, col2, col3 = st.columns([2, 3, 1])
    new_key = col1.text_input("Key", key=f"new_placeholder_key_{key}")
    new_description = col2.text_input("Description", key=f"new_placeholder_desc_{key}")
    if col3.button("Add", key=f"add_placeholder_{key}"):
        try:
            if add_custom_placeholder(key, new_key, new_description, db_path=db_path):
                st.rerun()
            else:
                st.error("Could not add the placeholder.")
        except DuplicatePlaceholderError as e:
            st.error(str(e))

    if st.button("🗑️ Delete deed type", key=f"delete_deed_type_{key}"):
        delete_deed_type(key, db_path=db_path)
        st.rerun()


def show_deed_types_page(db_path: str):
    st.title("🏷️ Deed Types")

    with st.form("new_deed_type_form", clear_on_submit=True):
        st.subheader("Add Deed Type")
        name = st.text_input("Deed type", placeholder="Sale Deed")
        description = st.text_input("Description")
        if st.form_submit_button("Add"):
            if not name.strip():
                st.warning("Enter a deed type name.")
            elif save_deed_type(name, description, db_path=db_path):
                st.success(f"Deed type '{name.strip()}' saved.")
            else:
                st.error("Could not save the deed type.")

    deed_types = load_deed_types(db_path=db_path)
    if not deed_types:
        st.caption("No deed types yet.")
        return
    for deed_type in deed_types:
        with st.expander(deed_type.deed_type):
            _show_deed_type(deed_type, db_path)
