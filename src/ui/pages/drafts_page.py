"""
Drafts Page Module

Lists saved drafts and restores one into the Report Builder.
"""

import streamlit as st

from src.utils.db import delete_draft, load_draft, load_drafts


def show_drafts_page(db_path: str):
    st.title("🗂️ Drafts")
    from app import restore_draft

    drafts = load_drafts(db_path=db_path)
    if not drafts:
        st.caption("No drafts saved yet.")
        return

    for draft in drafts:
        filled = sum(1 for value in draft["placeholders"].values() if value)
        col1, col2, col3 = st.columns([5, 1, 1])
        col1.markdown(
            f"**{draft['draft_name']}** · {draft['template_name']} · {draft['created_at']}  \n"
            f"{filled}/{len(draft['placeholders'])} fields filled, {len(draft['documents'])} document(s)"
        )
        if col2.button("Open", key=f"open_draft_{draft['id']}"):
            full_draft = load_draft(draft["id"], db_path=db_path)
            if full_draft and restore_draft(full_draft, db_path):
                st.session_state.current_page = "Report Builder"
                st.rerun()
            else:
                st.error("Could not open the draft.")
        if col3.button("🗑️", key=f"delete_draft_{draft['id']}"):
            delete_draft(draft["id"], db_path=db_path)
            st.rerun()
