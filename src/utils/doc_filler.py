"""
Composes the finished Legal Scrutiny Report from a template.

The template's ``word/document.xml`` is rewritten in a fixed order:
run merging, region splicing ({{table}}, {{table1}}, {$history}) and finally
scalar substitution. Every other part of the archive is copied through
untouched.
"""

import io
import logging
import re
import zipfile
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Union
from xml.sax.saxutils import unescape

from src.utils.exceptions import HistoryTemplateLookupError
from src.utils.models import DeedRecord, ParcelDetail
from src.utils.placeholder_scanner import (
    CONTROL_SIGILS,
    DOCUMENT_XML_PATH,
    QUOTE_TRANSLATION,
    TAG_REGEX,
    read_document_xml,
)
from src.utils.region_renderers import (
    NO_DEEDS_TEXT,
    NO_DOCUMENTS_TEXT,
    complete_deeds,
    render_deeds_table,
    render_history,
    render_history_paragraphs,
    render_parcel_details,
)
from src.utils.run_merger import merge_runs
from src.utils.wordml import escape_xml

logger = logging.getLogger(__name__)

REPORT_FILE_NAME = "Legal_Scrutiny_Report.docx"
DOCX_MIME_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"

# Closes the paragraph holding a marker, and reopens one after the spliced block.
REGION_OPEN = "</w:t></w:r></w:p>"
REGION_CLOSE = "<w:p><w:r><w:t>"

DOUBLE_TABLE_REGEX = re.compile(r"\{\{table\}\}", re.IGNORECASE)
DOUBLE_TABLE1_REGEX = re.compile(r"\{\{table1\}\}", re.IGNORECASE)
TABLE_REGEX = re.compile(r"\{table\}", re.IGNORECASE)
TABLE1_REGEX = re.compile(r"\{table1\}", re.IGNORECASE)
HISTORY_REGEX = re.compile(r"\{\$history\}", re.IGNORECASE)

# {name} where the name may be interrupted by inline run markup but never
# by a paragraph boundary. Whole tags are matched first so braces inside
# attribute values (data bindings, alt text) are never read as a token.
INLINE_TAG = r"<(?!/?w:p[\s>/])[^>]*>"
SCALAR_XML_REGEX = re.compile(
    r"(?P<tag><[^>]*>)|\{(?P<inner>(?:[^{}<>]|" + INLINE_TAG + r")+?)\}"
)

LINE_BREAK = '</w:t><w:br/><w:t xml:space="preserve">'

HistoryTemplateProvider = Callable[[], Mapping[str, str]]
DeedInput = Union[DeedRecord, Mapping]
ParcelInput = Union[ParcelDetail, Mapping]


def as_deeds(deeds: Iterable[DeedInput]) -> List[DeedRecord]:
    return [deed if isinstance(deed, DeedRecord) else DeedRecord.model_validate(deed) for deed in deeds]


def as_parcels(parcels: Iterable[ParcelInput]) -> List[ParcelDetail]:
    return [
        parcel if isinstance(parcel, ParcelDetail) else ParcelDetail.model_validate(parcel)
        for parcel in parcels
    ]


def splice_region(xml: str, marker: re.Pattern, region_xml: str) -> str:
    """Replaces a marker with block-level markup, keeping paragraphs balanced."""
    return marker.sub(lambda _: REGION_OPEN + region_xml + REGION_CLOSE, xml)


def replace_marker_text(xml: str, marker: re.Pattern, text: str) -> str:
    return marker.sub(lambda _: escape_xml(text), xml)


def fetch_history_templates(provider: Optional[HistoryTemplateProvider]) -> Dict[str, str]:
    """Runs the single bulk narrative-template lookup of a render."""
    if provider is None:
        return {}
    try:
        return dict(provider() or {})
    except HistoryTemplateLookupError as e:
        logger.warning(f"Error fetching history templates: {e}. Using fallback History of Title text.")
        return {}


def format_value(value) -> str:
    """Escapes a field value; newlines become Word line breaks."""
    if value is None:
        return ""
    return LINE_BREAK.join(escape_xml(line) for line in str(value).split("\n"))


def substitute_scalars(xml: str, fields: Mapping[str, str]) -> str:
    """
    Replaces every ``{name}`` in the markup with its field value.

    Names without a value render as empty text. Control tags such as
    ``{#items}`` are left as they are. Run markup found inside a token is
    kept, only its text is dropped, so the surrounding structure stays valid.
    Braces inside tag attributes are copied through untouched.
    """
    def _replace(match: re.Match) -> str:
        if match.group("tag") is not None:
            return match.group("tag")
        inner = match.group("inner")
        name = unescape(TAG_REGEX.sub("", inner), {"&quot;": '"', "&apos;": "'", "&#39;": "'"})
        name = name.translate(QUOTE_TRANSLATION).strip()
        if not name or name.startswith(CONTROL_SIGILS):
            return match.group(0)
        return format_value(fields.get(name, "")) + "".join(TAG_REGEX.findall(inner))

    return SCALAR_XML_REGEX.sub(_replace, xml)


def package_document(template_bytes: bytes, document_xml: str) -> bytes:
    """Writes a copy of the template archive with a new primary markup part."""
    output = io.BytesIO()
    with zipfile.ZipFile(io.BytesIO(template_bytes)) as source, zipfile.ZipFile(output, "w") as target:
        for info in source.infolist():
            if info.filename == DOCUMENT_XML_PATH:
                target.writestr(info, document_xml.encode("utf-8"))
            else:
                target.writestr(info, source.read(info.filename))
    return output.getvalue()


def compose_document_xml(xml: str,
                         fields: Mapping[str, str],
                         deeds: Iterable[DeedInput] = (),
                         parcels: Iterable[ParcelInput] = (),
                         history_template_provider: Optional[HistoryTemplateProvider] = None) -> str:
    """Applies region splicing and scalar substitution to ``word/document.xml``."""
    xml = merge_runs(xml)

    # Region markers are located in single-brace form and never reach the scalar pass.
    xml = DOUBLE_TABLE_REGEX.sub("{table}", xml)
    xml = DOUBLE_TABLE1_REGEX.sub("{table1}", xml)

    valid_deeds = complete_deeds(as_deeds(deeds))
    if valid_deeds:
        xml = splice_region(xml, TABLE_REGEX, render_deeds_table(valid_deeds))
    else:
        xml = replace_marker_text(xml, TABLE_REGEX, NO_DEEDS_TEXT)

    parcel_list = as_parcels(parcels)
    if parcel_list:
        xml = splice_region(xml, TABLE1_REGEX, render_parcel_details(parcel_list))
    else:
        xml = replace_marker_text(xml, TABLE1_REGEX, NO_DOCUMENTS_TEXT)

    history_text = ""
    if valid_deeds and HISTORY_REGEX.search(xml):
        history_text = render_history(valid_deeds, fetch_history_templates(history_template_provider))
    if history_text:
        xml = splice_region(xml, HISTORY_REGEX, render_history_paragraphs(history_text))
    else:
        xml = HISTORY_REGEX.sub("", xml)

    return substitute_scalars(xml, fields)


def compose_document(template_bytes: bytes,
                     fields: Mapping[str, str],
                     deeds: Iterable[DeedInput] = (),
                     parcels: Iterable[ParcelInput] = (),
                     history_template_provider: Optional[HistoryTemplateProvider] = None) -> bytes:
    """
    Renders a filled .docx from template bytes.

    Args:
        template_bytes: The uploaded template.
        fields: Scalar values, a FieldRegistry or any name -> value mapping.
        deeds: Deed records (or dicts) for {{table}} and {$history}.
        parcels: Document detail records (or dicts) for {{table1}}.
        history_template_provider: Zero-argument callable returning
            deed type -> narrative template. Called at most once.

    Returns:
        The finished document as bytes.

    Raises:
        MalformedArchiveError: if the template is not a readable .docx.
    """
    xml = read_document_xml(template_bytes)
    document_xml = compose_document_xml(xml, fields, deeds, parcels, history_template_provider)
    return package_document(template_bytes, document_xml)


def fill_template_file(template_path: str,
                       fields: Mapping[str, str],
                       output_path: str,
                       deeds: Iterable[DeedInput] = (),
                       parcels: Iterable[ParcelInput] = (),
                       history_template_provider: Optional[HistoryTemplateProvider] = None) -> None:
    """File based wrapper around compose_document, used by the command line."""
    try:
        with open(template_path, "rb") as f:
            template_bytes = f.read()
        document = compose_document(template_bytes, fields, deeds, parcels, history_template_provider)
        with open(output_path, "wb") as f:
            f.write(document)
        logger.info(f"Successfully created filled document: {output_path}")
    except Exception as e:
        logger.error(f"Error in fill_template_file: {e}")
        raise
