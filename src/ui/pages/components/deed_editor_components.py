"""
Deed and document-detail editors for the Report Builder page.

- show_deed_editor: editable grid of the deeds table, saved to sqlite
- show_parcel_editor: per document survey/boundary/measurement form kept in session state
"""

import logging
from typing import Dict, List, Optional

import pandas as pd
import streamlit as st

from src.utils.db import add_deed, delete_deed, load_deeds, update_deed, update_deed_custom_field
from src.utils.models import PARCEL_DEFAULTS, DeedRecord, DeedTemplate, ParcelDetail
from src.utils.region_renderers import render_deed_preview

logger = logging.getLogger(__name__)

# Grid column -> DeedRecord attribute
DEED_GRID_COLUMNS = {
    "Type": "deed_type",
    "Executed By": "executed_by",
    "In Favour Of": "in_favour_of",
    "Date": "date",
    "Document No": "document_number",
    "Nature of Doc": "nature_of_doc",
}

PARCEL_FORM_FIELDS = [
    ("doc_no", "As per Doc No"),
    ("survey_no", "Survey No"),
    ("as_per_revenue_record", "As per Revenue Record"),
    ("total_extent", "Total Extent"),
    ("plot_no", "Plot No"),
    ("location", "Location"),
    ("north_by", "North By"),
    ("south_by", "South By"),
    ("east_by", "East By"),
    ("west_by", "West By"),
    ("north_measurement", "North measurement"),
    ("south_measurement", "South measurement"),
    ("east_measurement", "East measurement"),
    ("west_measurement", "West measurement"),
    ("total_extent_sq_ft", "Total extent (Sq.Ft)"),
]


def _cell_text(value) -> str:
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return ""
    return str(value)


def custom_placeholder_keys(deed_types: List[DeedTemplate]) -> List[str]:
    """Custom placeholder keys of all deed types, first occurrence wins the order."""
    keys: List[str] = []
    for deed_type in deed_types:
        for key in deed_type.custom_placeholders:
            if key not in keys:
                keys.append(key)
    return keys


def deeds_to_dataframe(deeds: List[DeedRecord], custom_keys: List[str]) -> pd.DataFrame:
    rows = []
    for deed in deeds:
        row = {"id": deed.id}
        for column, attr in DEED_GRID_COLUMNS.items():
            row[column] = getattr(deed, attr)
        for key in custom_keys:
            row[key] = deed.custom_fields.get(key, "")
        rows.append(row)
    return pd.DataFrame(rows, columns=["id"] + list(DEED_GRID_COLUMNS) + custom_keys)


def dataframe_to_deeds(df: pd.DataFrame, custom_keys: List[str]) -> List[DeedRecord]:
    """Reads the edited grid back into records; rows with nothing typed are dropped."""
    deeds = []
    for row in df.to_dict(orient="records"):
        values = {attr: _cell_text(row.get(column)) for column, attr in DEED_GRID_COLUMNS.items()}
        custom_fields = {key: _cell_text(row.get(key)) for key in custom_keys}
        if not any(values.values()) and not any(custom_fields.values()):
            continue
        deed_id = row.get("id")
        deed_id = None if deed_id is None or pd.isna(deed_id) else int(deed_id)
        deeds.append(DeedRecord(id=deed_id, custom_fields=custom_fields, **values))
    return deeds


def save_deed_changes(original: List[DeedRecord], edited: List[DeedRecord], db_path: str) -> int:
    """Applies the grid edits to the deeds table. Returns the number of failed writes."""
    failures = 0
    edited_ids = {deed.id for deed in edited if deed.id is not None}
    for deed in original:
        if deed.id not in edited_ids and not delete_deed(deed.id, db_path=db_path):
            failures += 1

    for deed in edited:
        if deed.id is None:
            if add_deed(deed, db_path=db_path) is None:
                failures += 1
            continue
        updates = {attr: getattr(deed, attr) for attr in DEED_GRID_COLUMNS.values()}
        if not update_deed(deed.id, updates, db_path=db_path):
            failures += 1
        for key, value in deed.custom_fields.items():
            if not update_deed_custom_field(deed.id, key, value, db_path=db_path):
                failures += 1
    return failures


def show_deed_editor(deed_types: List[DeedTemplate], db_path: str) -> List[DeedRecord]:
    """
    Renders the deeds grid and returns the deeds as currently stored.

    Deeds are re-read from the database on every rerun.
    """
    st.subheader("Description of Documents Scrutinized")
    deeds = load_deeds(db_path=db_path)
    custom_keys = custom_placeholder_keys(deed_types)
    type_options = [deed_type.deed_type for deed_type in deed_types]

    column_config = {
        "id": None,
        "Type": st.column_config.SelectboxColumn("Type", options=type_options) if type_options
        else st.column_config.TextColumn("Type"),
    }
    for deed_type in deed_types:
        for key, description in deed_type.custom_placeholders.items():
            column_config.setdefault(key, st.column_config.TextColumn(key, help=description or None))

    edited_df = st.data_editor(
        deeds_to_dataframe(deeds, custom_keys),
        key="deed_editor",
        num_rows="dynamic",
        hide_index=True,
        width="stretch",
        column_config=column_config,
    )

    if st.button("💾 Save Deeds", key="save_deeds_btn"):
        failures = save_deed_changes(deeds, dataframe_to_deeds(edited_df, custom_keys), db_path)
        if failures:
            st.error(f"{failures} deed change(s) could not be saved. See the log for details.")
        else:
            st.success("Deeds saved.")
        st.rerun()

    previews = {deed_type.deed_type: deed_type.preview_template for deed_type in deed_types}
    for index, deed in enumerate(deeds, start=1):
        if deed.deed_type:
            st.caption(f"{index}. {render_deed_preview(deed, previews.get(deed.deed_type))}")
    if deeds and not any(deed.is_complete for deed in deeds):
        st.info("Deeds need a type, an executor and a beneficiary before they appear in the report.")
    return deeds


def _parcel_form(index: int, parcel: Dict[str, str]) -> Dict[str, str]:
    updated = {"id": parcel.get("id", str(index + 1))}
    columns = st.columns(3)
    for position, (name, label) in enumerate(PARCEL_FORM_FIELDS):
        with columns[position % 3]:
            updated[name] = st.text_input(
                label,
                value=parcel.get(name, ""),
                placeholder=PARCEL_DEFAULTS[name],
                key=f"parcel_{index}_{name}",
            )
    return updated


def show_parcel_editor(parcels: List[Dict[str, str]]) -> List[ParcelDetail]:
    """Renders one expander per document and returns the edited records."""
    st.subheader("Document Details")
    edited: List[Dict[str, str]] = []
    remove_index: Optional[int] = None
    for index, parcel in enumerate(parcels):
        title = parcel.get("doc_no") or f"Document {index + 1}"
        with st.expander(f"📄 {title}", expanded=False):
            edited.append(_parcel_form(index, parcel))
            if st.button("Remove document", key=f"remove_parcel_{index}"):
                remove_index = index

    if remove_index is not None:
        edited.pop(remove_index)
        st.session_state.parcels = edited
        st.rerun()

    if st.button("➕ Add Document", key="add_parcel_btn"):
        edited.append({"id": str(len(edited) + 1)})
        st.session_state.parcels = edited
        st.rerun()

    st.session_state.parcels = edited
    return [ParcelDetail.model_validate(parcel) for parcel in edited]
