"""
Plain-text preview of the report, rendered on the Report Builder page.

The preview works on the text projection of the template (see
placeholder_scanner.extract_template_text) rather than on the markup, so it
is cheap enough to rebuild on every form change.
"""

import re
from dataclasses import dataclass, field
from typing import Iterable, List, Mapping, Optional

from src.utils.models import DeedRecord, ParcelDetail
from src.utils.placeholder_scanner import SCALAR_REGEX, is_scalar_name
from src.utils.region_renderers import deed_table_rows, render_history

HISTORY_PLACEHOLDER_TEXT = "(History of Title will appear here when deeds are added)"
EMPTY_TEMPLATE_TEXT = "Upload a Word template to see the preview here..."

TABLE_MARKER = "___TABLE_PLACEHOLDER___"
TABLE1_MARKER = "___TABLE1_PLACEHOLDER___"

PREVIEW_TABLE_REGEX = re.compile(r"\{\{?table\}\}?", re.IGNORECASE)
PREVIEW_TABLE1_REGEX = re.compile(r"\{\{?table1\}\}?", re.IGNORECASE)
PREVIEW_HISTORY_REGEX = re.compile(r"\{\$history\}", re.IGNORECASE)
SEGMENT_SPLIT_REGEX = re.compile(f"({TABLE_MARKER}|{TABLE1_MARKER})")

# "3. HISTORY OF TITLE:" style section headings
HEADING_REGEX = re.compile(r"^(\d+\.?\s*)?[A-Z\s]+:")


@dataclass
class PreviewSegment:
    kind: str  # "text", "deeds_table" or "parcel_details"
    text: str = ""


@dataclass
class PreviewDocument:
    segments: List[PreviewSegment] = field(default_factory=list)
    deed_rows: List[List[str]] = field(default_factory=list)
    parcels: List[ParcelDetail] = field(default_factory=list)


def is_heading_line(line: str) -> bool:
    return bool(HEADING_REGEX.match(line.strip()))


def replace_placeholders(text: str, fields: Mapping[str, str], history_text: str = "") -> str:
    """Fills scalar fields and swaps region markers for segment markers."""
    def _replace(match: re.Match) -> str:
        name = match.group(1).strip()
        if name in fields and is_scalar_name(name):
            return fields.get(name) or ""
        return match.group(0)

    # Region markers first, so "{{table}}" is not seen as "{table}" inside braces.
    result = PREVIEW_TABLE1_REGEX.sub(TABLE1_MARKER, text)
    result = PREVIEW_TABLE_REGEX.sub(TABLE_MARKER, result)
    result = PREVIEW_HISTORY_REGEX.sub(lambda _: history_text or HISTORY_PLACEHOLDER_TEXT, result)
    return SCALAR_REGEX.sub(_replace, result)


def build_report_preview(template_text: str,
                         fields: Mapping[str, str],
                         deeds: Iterable[DeedRecord] = (),
                         parcels: Iterable[ParcelDetail] = (),
                         history_templates: Optional[Mapping[str, str]] = None) -> PreviewDocument:
    """
    Builds the ordered preview segments for a template.

    Unlike the exported document, the preview narrates every deed that has a
    type, including ones still missing names, so the author sees them early.
    """
    deeds = list(deeds)
    if not template_text:
        return PreviewDocument(segments=[PreviewSegment("text", EMPTY_TEMPLATE_TEXT)])

    history_text = render_history(deeds, history_templates)
    content = replace_placeholders(template_text, fields, history_text)

    segments = []
    for part in SEGMENT_SPLIT_REGEX.split(content):
        if part == TABLE_MARKER:
            segments.append(PreviewSegment("deeds_table"))
        elif part == TABLE1_MARKER:
            segments.append(PreviewSegment("parcel_details"))
        elif part:
            segments.append(PreviewSegment("text", part))

    return PreviewDocument(
        segments=segments,
        deed_rows=deed_table_rows(deeds),
        parcels=list(parcels),
    )
