"""
Renderers for the structural regions of a Legal Scrutiny template.

- render_deeds_table: ``{{table}}``, the "Description of Documents Scrutinized"
- render_parcel_details: ``{{table1}}``, one block of tables per document
- render_history: ``{$history}``, the History of Title narrative

The table renderers return WordprocessingML, or a plain fallback sentence
when there is nothing to show (an empty table renders poorly in Word).
``render_history`` returns plain text; ``render_history_paragraphs`` turns it
into markup.
"""

import re
from typing import Dict, Iterable, List, Mapping, Optional

from src.utils.models import DEFAULT_PREVIEW_TEMPLATE, PARCEL_DEFAULTS, DeedRecord, ParcelDetail
from src.utils import wordml

NO_DEEDS_TEXT = "No deeds added yet"
NO_DOCUMENTS_TEXT = "No document details added yet"

DEED_COLUMNS = [
    ("Sno", 600),
    ("Date", 1400),
    ("D.No", 1400),
    ("Particulars of Deed", 4400),
    ("Nature of Doc", 1200),
]

PARCEL_ROWS = [
    ("i", "Survey No", "survey_no"),
    ("ii", "As per Revenue Record", "as_per_revenue_record"),
    ("iii", "Total Extent", "total_extent"),
    ("iv", "Plot No", "plot_no"),
    ("v", "Location like name of the place, village, city, registration, sub-district etc.", "location"),
]

BOUNDARY_LINES = [
    ("North By", "north_by"),
    ("South By", "south_by"),
    ("East By", "east_by"),
    ("West By", "west_by"),
]

MEASUREMENT_ROWS = [
    ("North - East West", "north_measurement"),
    ("South - East West", "south_measurement"),
    ("East - South North", "east_measurement"),
    ("West - South North", "west_measurement"),
    ("Total", "total_extent_sq_ft"),
]

HISTORY_FONT = "Cambria"
HISTORY_FONT_SIZE = 24  # half-points, 12pt

# Narrative placeholder -> DeedRecord attribute
STANDARD_HISTORY_FIELDS = {
    "executedBy": "executed_by",
    "inFavourOf": "in_favour_of",
    "date": "date",
    "documentNumber": "document_number",
    "deedType": "deed_type",
    "natureOfDoc": "nature_of_doc",
}


def complete_deeds(deeds: Iterable[DeedRecord]) -> List[DeedRecord]:
    return [deed for deed in deeds if deed.is_complete]


def deed_particulars(deed: DeedRecord) -> str:
    return f"{deed.deed_type} executed by {deed.executed_by} in favour of {deed.in_favour_of}"


def deed_table_rows(deeds: Iterable[DeedRecord]) -> List[List[str]]:
    """Cell values of the deeds table data rows, complete deeds only."""
    return [
        [
            str(index),
            deed.date or "-",
            deed.document_number or "-",
            deed_particulars(deed),
            deed.nature_of_doc or "-",
        ]
        for index, deed in enumerate(complete_deeds(deeds), start=1)
    ]


def render_deeds_table(deeds: Iterable[DeedRecord]) -> str:
    rows = deed_table_rows(deeds)
    if not rows:
        return NO_DEEDS_TEXT

    widths = [width for _, width in DEED_COLUMNS]
    header = wordml.row(
        wordml.cell([wordml.paragraph([wordml.run(title, bold=True)], center=(i == 0))], width=width)
        for i, (title, width) in enumerate(DEED_COLUMNS)
    )
    body = [
        wordml.row(
            wordml.cell([wordml.paragraph([wordml.run(value)], center=(i == 0))], width=widths[i])
            for i, value in enumerate(values)
        )
        for values in rows
    ]
    return wordml.table([header] + body, widths)


def _parcel_main_table(parcel: ParcelDetail) -> str:
    rows = []
    for numeral, label, field_name in PARCEL_ROWS:
        rows.append(wordml.row([
            wordml.cell([wordml.paragraph([wordml.run(numeral)])], width=600, padded=True),
            wordml.cell([wordml.paragraph([wordml.run(label, bold=True)])], width=4200, padded=True),
            wordml.cell([wordml.paragraph([wordml.run(parcel.display(field_name))])], width=4200, padded=True),
        ]))

    # The heading falls back to the "(Total Extent)" label, not the 1200 Sq.Ft sample.
    extent = parcel.total_extent_sq_ft or PARCEL_DEFAULTS["total_extent"]
    boundaries = [
        wordml.paragraph([wordml.run(f"i) Boundaries for {extent} Sq.Ft of land", bold=True, underline=True)])
    ]
    for label, field_name in BOUNDARY_LINES:
        boundaries.append(wordml.paragraph([
            wordml.run(label, bold=True, underline=True),
            wordml.run(f" - {parcel.display(field_name)}"),
        ]))
    rows.append(wordml.row([wordml.cell(boundaries, grid_span=3, padded=True)]))
    return wordml.table(rows, [600, 4200, 4200])


def _parcel_measurement_table(parcel: ParcelDetail) -> str:
    rows = [
        wordml.row([
            wordml.cell([wordml.paragraph([wordml.run(label, bold=True)], center=True)],
                        shading=wordml.HEADER_SHADING, padded=True),
            wordml.cell([wordml.paragraph([wordml.run(parcel.display(field_name))], center=True)],
                        padded=True),
        ])
        for label, field_name in MEASUREMENT_ROWS
    ]
    return wordml.table(rows, [4500, 4500])


def render_parcel_details(parcels: Iterable[ParcelDetail]) -> str:
    parcels = list(parcels)
    if not parcels:
        return NO_DOCUMENTS_TEXT

    blocks = []
    for index, parcel in enumerate(parcels):
        if index > 0:
            blocks.append(wordml.blank_paragraph())
        blocks.append(wordml.paragraph(
            [wordml.run(f"As per Doc No : {parcel.display('doc_no')}", bold=True)], center=True
        ))
        blocks.append(_parcel_main_table(parcel))
        blocks.append(wordml.paragraph(
            [wordml.run("Measurement Details", bold=True, underline=True)], center=True
        ))
        blocks.append(_parcel_measurement_table(parcel))
    return "".join(blocks)


def _replace_token(text: str, name: str, value: str) -> str:
    # Function replacement so backslashes in user values are kept literally.
    pattern = re.compile(r"\{" + re.escape(name) + r"\}", re.IGNORECASE)
    return pattern.sub(lambda _: value, text)


def fill_deed_template(template: str, deed: DeedRecord) -> str:
    """Substitutes the standard and custom deed placeholders into a template."""
    text = template
    for placeholder, attr in STANDARD_HISTORY_FIELDS.items():
        text = _replace_token(text, placeholder, getattr(deed, attr))
    for key, value in deed.custom_fields.items():
        text = _replace_token(text, key, value)
    return text


def fallback_history(deed: DeedRecord) -> str:
    text = (
        f"{deed.deed_type.upper()}:\n"
        f"Deed executed by {deed.executed_by or '[Executor]'} in favour of "
        f"{deed.in_favour_of or '[Beneficiary]'} dated {deed.date or '[Date]'}, "
        f"Document No: {deed.document_number or '[Doc No]'}"
    )
    if deed.nature_of_doc:
        text += f", Nature: {deed.nature_of_doc}"
    return text


def normalize_deed_type(deed_type: str) -> str:
    return str(deed_type).strip().lower()


def render_history(deeds: Iterable[DeedRecord], history_templates: Optional[Mapping[str, str]] = None) -> str:
    """
    Builds the History of Title narrative, one block per deed.

    Args:
        deeds: Deeds in table order; deeds without a type are skipped.
        history_templates: deed type -> narrative template. Keys are matched
            trimmed and case-insensitively.

    Returns:
        The narrative, blocks separated by a blank line; "" when no deed has a type.
    """
    templates: Dict[str, str] = {}
    for deed_type, content in (history_templates or {}).items():
        if deed_type and content:
            templates[normalize_deed_type(deed_type)] = content

    parts = []
    for deed in deeds:
        if not deed.deed_type:
            continue
        template = templates.get(normalize_deed_type(deed.deed_type))
        if template:
            parts.append(fill_deed_template(template, deed).strip())
        else:
            parts.append(fallback_history(deed))
    return "\n\n".join(parts)


def render_history_paragraphs(history_text: str) -> str:
    """One Cambria 12pt paragraph per narrative line."""
    return "".join(
        wordml.paragraph([wordml.run(line, font=HISTORY_FONT, size_half_points=HISTORY_FONT_SIZE)])
        for line in history_text.split("\n")
    )


def render_deed_preview(deed: DeedRecord, preview_template: Optional[str] = None) -> str:
    """One-line summary of a deed, as shown next to it in the deed editor."""
    return fill_deed_template(preview_template or DEFAULT_PREVIEW_TEMPLATE, deed)
