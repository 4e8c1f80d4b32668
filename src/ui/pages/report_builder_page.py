"""
Report Builder Page Module

This module handles the main report workflow:
- Template selection and placeholder scan
- Field form, deeds grid and document details
- Live preview
- Draft saving and .docx download
"""

import logging

import streamlit as st

from src.utils.db import list_document_templates, load_deed_types, load_history_templates, save_draft
from src.utils.doc_filler import DOCX_MIME_TYPE, REPORT_FILE_NAME, compose_document
from src.utils.exceptions import ScrutinyReportError
from src.utils.report_preview import build_report_preview
from src.ui.pages.components import show_deed_editor, show_field_form, show_parcel_editor, show_report_preview

logger = logging.getLogger(__name__)


def _show_template_picker(db_path: str):
    from app import select_template

    templates = list_document_templates(db_path=db_path)
    if not templates:
        st.info("No templates yet. Upload one on the Templates page.")
        return

    options = {f"{t['template_name']} ({t['file_name']})": t["id"] for t in templates}
    labels = ["Select a template..."] + list(options)
    current = st.session_state.get("template_id")
    index = 0
    for position, label in enumerate(labels[1:], start=1):
        if options[label] == current:
            index = position
    choice = st.selectbox("Template", labels, index=index, key="report_template_select")
    if choice != labels[0] and options[choice] != current:
        select_template(options[choice], db_path)
        st.rerun()


def _show_scan_status():
    scan = st.session_state.scan_result
    st.success(scan.summary())
    for tag in scan.unsupported_tags:
        st.warning(f"Unsupported template tag {tag} will be left as written.")


def _show_draft_saver(db_path: str):
    with st.expander("💾 Save as draft"):
        draft_name = st.text_input("Draft name", key="draft_name_input")
        if st.button("Save Draft", key="save_draft_btn"):
            if not draft_name.strip():
                st.warning("Enter a draft name first.")
                return
            draft_id = save_draft(
                st.session_state.template_id,
                draft_name.strip(),
                st.session_state.field_registry.as_dict(),
                st.session_state.parcels,
                db_path=db_path,
            )
            if draft_id:
                st.success(f"Draft '{draft_name.strip()}' saved.")
            else:
                st.error("Could not save the draft.")


def _show_download(deeds, parcels, db_path: str):
    st.subheader("Generate Report")
    if st.button("📄 Generate Word Document", key="generate_report_btn", type="primary"):
        try:
            st.session_state.generated_report = compose_document(
                st.session_state.template_bytes,
                st.session_state.field_registry,
                deeds=deeds,
                parcels=parcels,
                history_template_provider=lambda: load_history_templates(db_path=db_path),
            )
        except ScrutinyReportError as e:
            logger.error(f"Report generation failed: {e}")
            st.error(f"Could not generate the report: {e}")
            st.session_state.generated_report = None

    if st.session_state.get("generated_report"):
        st.download_button(
            "⬇️ Download Report",
            data=st.session_state.generated_report,
            file_name=REPORT_FILE_NAME,
            mime=DOCX_MIME_TYPE,
            key="download_report_btn",
        )


def show_report_builder_page(db_path: str):
    """
    Displays the report builder: fill the fields of the selected template,
    maintain deeds and document details, preview and download the report.
    """
    st.title("⚖️ Legal Scrutiny Report")
    _show_template_picker(db_path)
    if st.session_state.get("template_bytes") is None or st.session_state.get("scan_result") is None:
        return

    _show_scan_status()
    deed_types = load_deed_types(db_path=db_path)

    fields_tab, deeds_tab, documents_tab, preview_tab = st.tabs(
        ["📝 Fields", "📜 Deeds", "📄 Document Details", "👁️ Preview"]
    )
    with fields_tab:
        show_field_form(st.session_state.field_registry, key_prefix=f"field_{st.session_state.run_key}")
    with deeds_tab:
        deeds = show_deed_editor(deed_types, db_path)
    with documents_tab:
        parcels = show_parcel_editor(st.session_state.parcels)
    with preview_tab:
        history_templates = {deed_type.deed_type: deed_type.history_template for deed_type in deed_types}
        preview = build_report_preview(
            st.session_state.scan_result.text,
            st.session_state.field_registry.as_dict(),
            deeds,
            parcels,
            history_templates,
        )
        show_report_preview(preview)

    _show_draft_saver(db_path)
    _show_download(deeds, parcels, db_path)
