"""
Placeholder detection for Legal Scrutiny templates.

A template is an ordinary .docx whose text carries:
- ``{name}`` scalar fields, filled from the report form
- ``{{table}}`` the deeds table region
- ``{{table1}}`` the document/parcel details region
- ``{$history}`` the History of Title narrative

Scanning works on a plain-text projection of ``word/document.xml`` (after
run merging), not on a document object model.
"""

import io
import logging
import re
import zipfile
from dataclasses import dataclass, field
from typing import Dict, List
from xml.sax.saxutils import unescape

from src.utils.exceptions import MalformedArchiveError
from src.utils.run_merger import merge_runs

logger = logging.getLogger(__name__)

DOCUMENT_XML_PATH = "word/document.xml"

# Control-tag sigils of loop/condition style template languages. Not supported here.
CONTROL_SIGILS = ("#", "/", "^", "$")
RESERVED_NAMES = {"table", "table1", "history"}

PARAGRAPH_OPEN_REGEX = re.compile(r"<w:p(?:\s[^>]*)?/?>")
TAG_REGEX = re.compile(r"<[^>]+>")
SCALAR_REGEX = re.compile(r"\{([^{}]+)\}")
CONTROL_TAG_REGEX = re.compile(r"\{[#/^$][^{}]*\}")

TABLE_MARKER_REGEX = re.compile(r"\{\{?table\}\}?", re.IGNORECASE)
TABLE1_MARKER_REGEX = re.compile(r"\{\{?table1\}\}?", re.IGNORECASE)
HISTORY_MARKER_REGEX = re.compile(r"\{\$history\}", re.IGNORECASE)

QUOTE_TRANSLATION = str.maketrans({"“": '"', "”": '"', "‘": "'", "’": "'"})


@dataclass
class ScanResult:
    """Outcome of scanning a template."""
    fields: Dict[str, str] = field(default_factory=dict)
    has_table: bool = False
    has_table1: bool = False
    has_history: bool = False
    unsupported_tags: List[str] = field(default_factory=list)
    text: str = ""

    @property
    def field_names(self) -> List[str]:
        return list(self.fields)

    def summary(self) -> str:
        """Human readable one-liner, shown after a template is parsed."""
        parts = [f"Found {len(self.fields)} field(s)"]
        if self.has_table:
            parts.append("{{table}} placeholder")
        if self.has_table1:
            parts.append("{{table1}} placeholder")
        if self.has_history:
            parts.append("{$history} placeholder")
        return " and ".join(parts)


def read_document_xml(template_bytes: bytes) -> str:
    """
    Returns the primary markup part of a .docx as text.

    Raises:
        MalformedArchiveError: if the bytes are not a zip archive or the
            archive has no ``word/document.xml``.
    """
    try:
        with zipfile.ZipFile(io.BytesIO(template_bytes)) as archive:
            if DOCUMENT_XML_PATH not in archive.namelist():
                raise MalformedArchiveError(
                    "Invalid .docx", f"missing {DOCUMENT_XML_PATH}"
                )
            return archive.read(DOCUMENT_XML_PATH).decode("utf-8")
    except zipfile.BadZipFile as e:
        raise MalformedArchiveError("Invalid .docx", str(e)) from e
    except (TypeError, UnicodeDecodeError) as e:
        raise MalformedArchiveError("Unreadable .docx", str(e)) from e


def extract_template_text(xml: str) -> str:
    """Projects WordprocessingML onto plain text, one line per paragraph."""
    text = PARAGRAPH_OPEN_REGEX.sub("\n", xml)
    text = TAG_REGEX.sub("", text)
    text = unescape(text, {"&quot;": '"', "&apos;": "'", "&#39;": "'"})
    return text.translate(QUOTE_TRANSLATION)


def is_scalar_name(name: str) -> bool:
    """True for names that belong in the field form."""
    if not name:
        return False
    if name.startswith(CONTROL_SIGILS):
        return False
    return name.lower() not in RESERVED_NAMES


def find_unsupported_tags(text: str) -> List[str]:
    """Control-tag shaped tokens other than ``{$history}``, in document order."""
    return [
        tag for tag in CONTROL_TAG_REGEX.findall(text)
        if not HISTORY_MARKER_REGEX.fullmatch(tag)
    ]


def scan_placeholders(text: str) -> ScanResult:
    """Extracts field names and region markers from the text projection."""
    fields: Dict[str, str] = {}
    for match in SCALAR_REGEX.finditer(text):
        key = match.group(1).strip()
        if is_scalar_name(key) and key not in fields:
            fields[key] = ""

    unsupported = find_unsupported_tags(text)
    if unsupported:
        logger.warning(
            "Unsupported control tags detected: %s. Use {{table}} for the deeds table.",
            ", ".join(unsupported),
        )

    result = ScanResult(
        fields=fields,
        has_table=bool(TABLE_MARKER_REGEX.search(text)),
        has_table1=bool(TABLE1_MARKER_REGEX.search(text)),
        has_history=bool(HISTORY_MARKER_REGEX.search(text)),
        unsupported_tags=unsupported,
        text=text,
    )
    logger.info("Detected placeholders: %s", result.field_names)
    return result


def scan_template(template_bytes: bytes) -> ScanResult:
    """Reads, run-merges and scans a .docx template."""
    xml = merge_runs(read_document_xml(template_bytes))
    return scan_placeholders(extract_template_text(xml))
