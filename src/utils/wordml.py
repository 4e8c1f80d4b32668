"""
Small WordprocessingML string builders used by the region renderers.

Everything here returns markup text ready to be spliced into
``word/document.xml``; all literal text passes through ``escape_xml``.
"""

from typing import Iterable, Optional, Sequence

BORDER_COLOR = "000000"
HEADER_SHADING = "D9D9D9"
CELL_MARGINS = {"top": 400, "left": 300, "bottom": 400, "right": 300}


def escape_xml(text) -> str:
    """
    Escape special XML characters in text content.

    Handles: & < > " '
    """
    if not isinstance(text, str):
        text = str(text)
    text = text.replace("&", "&amp;")
    text = text.replace("<", "&lt;")
    text = text.replace(">", "&gt;")
    text = text.replace('"', "&quot;")
    text = text.replace("'", "&apos;")
    return text


def run(text: str, bold: bool = False, underline: bool = False,
        font: Optional[str] = None, size_half_points: Optional[int] = None) -> str:
    """A single run with optional bold/underline/font properties."""
    props = ""
    if font:
        props += f'<w:rFonts w:ascii="{font}" w:hAnsi="{font}"/>'
    if bold:
        props += "<w:b/>"
    if size_half_points:
        props += f'<w:sz w:val="{size_half_points}"/>'
    if underline:
        props += '<w:u w:val="single"/>'
    rpr = f"<w:rPr>{props}</w:rPr>" if props else ""
    return f'<w:r>{rpr}<w:t xml:space="preserve">{escape_xml(text)}</w:t></w:r>'


def paragraph(runs: Iterable[str] = (), center: bool = False) -> str:
    ppr = '<w:pPr><w:jc w:val="center"/></w:pPr>' if center else ""
    return f"<w:p>{ppr}{''.join(runs)}</w:p>"


def blank_paragraph() -> str:
    return "<w:p><w:r><w:t></w:t></w:r></w:p>"


def cell(paragraphs: Sequence[str], width: Optional[int] = None, grid_span: Optional[int] = None,
         shading: Optional[str] = None, padded: bool = False) -> str:
    """A table cell; ``padded`` applies the generous margins of the parcel tables."""
    props = ""
    if width:
        props += f'<w:tcW w:w="{width}" w:type="dxa"/>'
    if grid_span:
        props += f'<w:gridSpan w:val="{grid_span}"/>'
    if shading:
        props += f'<w:shd w:val="clear" w:color="auto" w:fill="{shading}"/>'
    if padded:
        margins = "".join(
            f'<w:{side} w:w="{value}" w:type="dxa"/>' for side, value in CELL_MARGINS.items()
        )
        props += f"<w:tcMar>{margins}</w:tcMar>"
    tcpr = f"<w:tcPr>{props}</w:tcPr>" if props else ""
    return f"<w:tc>{tcpr}{''.join(paragraphs)}</w:tc>"


def row(cells: Iterable[str]) -> str:
    return f"<w:tr>{''.join(cells)}</w:tr>"


def table(rows: Iterable[str], grid_widths: Sequence[int], total_width: int = 9000) -> str:
    """A fixed-width table with single black borders on every edge."""
    borders = "".join(
        f'<w:{edge} w:val="single" w:sz="8" w:space="0" w:color="{BORDER_COLOR}"/>'
        for edge in ("top", "left", "bottom", "right", "insideH", "insideV")
    )
    grid = "".join(f'<w:gridCol w:w="{width}"/>' for width in grid_widths)
    return (
        "<w:tbl>"
        f'<w:tblPr><w:tblW w:w="{total_width}" w:type="dxa"/><w:tblBorders>{borders}</w:tblBorders></w:tblPr>'
        f"<w:tblGrid>{grid}</w:tblGrid>"
        f"{''.join(rows)}"
        "</w:tbl>"
    )
