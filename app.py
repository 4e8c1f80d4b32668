import logging

import streamlit as st

from src.ui import show_deed_types_page, show_drafts_page, show_report_builder_page, show_templates_page
from src.utils.db import DB_PATH, init_db, load_document_template
from src.utils.exceptions import MalformedArchiveError
from src.utils.field_registry import FieldRegistry
from src.utils.placeholder_scanner import scan_template

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

PAGE_OPTIONS = ["Report Builder", "Templates", "Drafts", "Deed Types"]


# --- App State Initialization ---
def initialize_session_state():
    if "current_page" not in st.session_state: st.session_state.current_page = "Report Builder"
    if "run_key" not in st.session_state: st.session_state.run_key = 0
    if "error_message" not in st.session_state: st.session_state.error_message = ""

    template_defaults = {
        'template_id': None, 'template_name': "", 'template_bytes': None,
        'scan_result': None, 'field_registry': FieldRegistry(), 'parcels': [],
        'generated_report': None,
    }
    for key, default in template_defaults.items():
        if key not in st.session_state:
            st.session_state[key] = default


def clear_template():
    st.session_state.template_id = None
    st.session_state.template_name = ""
    st.session_state.template_bytes = None
    st.session_state.scan_result = None
    st.session_state.field_registry = FieldRegistry()
    st.session_state.parcels = []
    st.session_state.generated_report = None


# --- Helper Functions ---
def select_template(template_id: int, db_path: str = DB_PATH) -> bool:
    """Loads a stored template, scans it and starts a fresh set of field values."""
    template = load_document_template(template_id, db_path=db_path)
    if not template:
        st.session_state.error_message = f"Template {template_id} could not be loaded."
        return False
    try:
        scan = scan_template(template["file_data"])
    except MalformedArchiveError as e:
        logger.error(f"Stored template {template_id} is not a valid document: {e}")
        st.session_state.error_message = f"Template '{template['template_name']}' is not a valid Word document."
        return False

    st.session_state.template_id = template_id
    st.session_state.template_name = template["template_name"]
    st.session_state.template_bytes = template["file_data"]
    st.session_state.scan_result = scan
    st.session_state.field_registry = FieldRegistry.from_scan(scan)
    st.session_state.parcels = []
    st.session_state.generated_report = None
    # New widget keys so the form does not show values of the previous template
    st.session_state.run_key += 1
    logger.info(f"Selected template '{template['template_name']}': {scan.summary()}")
    return True


def restore_draft(draft: dict, db_path: str = DB_PATH) -> bool:
    """Selects the draft's template and puts the saved values back into the form."""
    if not select_template(draft["template_id"], db_path):
        return False
    st.session_state.field_registry.update(draft.get("placeholders") or {})
    st.session_state.parcels = list(draft.get("documents") or [])
    return True


def main():
    st.set_page_config(layout="wide", page_title="Legal Scrutiny Report Generator")
    initialize_session_state()
    init_db(DB_PATH)

    if st.session_state.error_message: st.error(st.session_state.error_message); st.session_state.error_message = ""

    st.sidebar.title("Navigation")
    default_page_index = 0
    try:
        default_page_index = PAGE_OPTIONS.index(st.session_state.current_page)
    except ValueError:
        st.session_state.current_page = "Report Builder"

    selected_page = st.sidebar.radio("Go to", PAGE_OPTIONS, index=default_page_index, key="nav_radio")
    if selected_page != st.session_state.current_page:
        st.session_state.current_page = selected_page
        st.rerun()

    if st.session_state.template_name:
        st.sidebar.caption(f"Template: {st.session_state.template_name}")

    if st.session_state.current_page == "Report Builder":
        show_report_builder_page(DB_PATH)
    elif st.session_state.current_page == "Templates":
        show_templates_page(DB_PATH)
    elif st.session_state.current_page == "Drafts":
        show_drafts_page(DB_PATH)
    elif st.session_state.current_page == "Deed Types":
        show_deed_types_page(DB_PATH)

if __name__ == "__main__":
    main()
