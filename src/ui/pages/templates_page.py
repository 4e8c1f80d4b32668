"""
Templates Page Module

Upload, list and delete Word templates.
"""

import streamlit as st

from src.utils.db import delete_document_template, list_document_templates, save_document_template
from src.utils.exceptions import MalformedArchiveError
from src.utils.placeholder_scanner import scan_template


def show_templates_page(db_path: str):
    st.title("📁 Templates")

    st.subheader("Upload Template")
    uploaded = st.file_uploader("Word template (.docx)", type=["docx"], key=f"template_upload_{st.session_state.run_key}")
    template_name = st.text_input("Template name", key="template_name_input")
    if uploaded is not None:
        file_data = uploaded.getvalue()
        try:
            scan = scan_template(file_data)
        except MalformedArchiveError as e:
            st.error(f"{uploaded.name} is not a valid Word document: {e}")
            return
        st.info(scan.summary())
        if scan.field_names:
            st.caption("Fields: " + ", ".join(scan.field_names))
        for tag in scan.unsupported_tags:
            st.warning(f"Unsupported template tag {tag} will be left as written.")

        if st.button("Save Template", key="save_template_btn"):
            name = template_name.strip() or uploaded.name.rsplit(".", 1)[0]
            if save_document_template(name, uploaded.name, file_data, db_path=db_path):
                st.success(f"Template '{name}' saved.")
                st.session_state.run_key += 1
                st.rerun()
            else:
                st.error("Could not save the template.")

    st.subheader("Saved Templates")
    templates = list_document_templates(db_path=db_path)
    if not templates:
        st.caption("No templates saved yet.")
        return

    for template in templates:
        col1, col2 = st.columns([5, 1])
        col1.markdown(f"**{template['template_name']}** · {template['file_name']} · {template['created_at']}")
        if col2.button("🗑️", key=f"delete_template_{template['id']}", help="Delete template and its drafts"):
            if delete_document_template(template["id"], db_path=db_path):
                if st.session_state.get("template_id") == template["id"]:
                    from app import clear_template
                    clear_template()
                st.rerun()
            else:
                st.error("Could not delete the template.")
