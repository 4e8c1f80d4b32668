"""
Report preview rendering for the Report Builder page.
"""

import pandas as pd
import streamlit as st

from src.utils.models import PARCEL_DEFAULTS, ParcelDetail
from src.utils.region_renderers import BOUNDARY_LINES, DEED_COLUMNS, MEASUREMENT_ROWS, NO_DEEDS_TEXT, \
    NO_DOCUMENTS_TEXT, PARCEL_ROWS
from src.utils.report_preview import PreviewDocument, is_heading_line


def _show_text(text: str):
    for line in text.split("\n"):
        if not line.strip():
            continue
        if is_heading_line(line):
            st.markdown(f"**{line.strip()}**")
        else:
            st.write(line)


def _show_deeds_table(preview: PreviewDocument):
    if not preview.deed_rows:
        st.caption(NO_DEEDS_TEXT)
        return
    columns = [title for title, _ in DEED_COLUMNS]
    st.dataframe(pd.DataFrame(preview.deed_rows, columns=columns), hide_index=True, width="stretch")


def _show_parcel(parcel: ParcelDetail):
    st.markdown(f"**As per Doc No : {parcel.display('doc_no')}**")
    rows = [(numeral, label, parcel.display(name)) for numeral, label, name in PARCEL_ROWS]
    st.table(pd.DataFrame(rows, columns=["", "Particulars", "Details"]))
    st.markdown(f"i) Boundaries for {parcel.total_extent_sq_ft or PARCEL_DEFAULTS['total_extent']} Sq.Ft of land")
    for label, name in BOUNDARY_LINES:
        st.write(f"{label}: {parcel.display(name)}")
    st.markdown("**Measurement Details**")
    measurements = [(label, parcel.display(name)) for label, name in MEASUREMENT_ROWS]
    st.table(pd.DataFrame(measurements, columns=["Side", "Measurement"]))


def _show_parcel_details(preview: PreviewDocument):
    if not preview.parcels:
        st.caption(NO_DOCUMENTS_TEXT)
        return
    for parcel in preview.parcels:
        _show_parcel(parcel)


def show_report_preview(preview: PreviewDocument):
    """Renders the preview segments in document order."""
    with st.container(border=True):
        for segment in preview.segments:
            if segment.kind == "deeds_table":
                _show_deeds_table(preview)
            elif segment.kind == "parcel_details":
                _show_parcel_details(preview)
            else:
                _show_text(segment.text)
