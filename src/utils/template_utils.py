import logging
import os
from typing import List, Optional

from docx import Document
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.shared import Pt

from src.utils.placeholder_scanner import ScanResult, scan_template

logger = logging.getLogger(__name__)

SAMPLE_TEMPLATE_PATH = os.path.join("templates", "legal_scrutiny_template.docx")

# Section heading -> body paragraphs of the starter template.
SAMPLE_SECTIONS = [
    ("1. DETAILS OF THE APPLICANT:", [
        "Name of the applicant: {applicant_name}",
        "Address: {applicant_address}",
        "Loan reference: {loan_reference}",
    ]),
    ("2. DESCRIPTION OF DOCUMENTS SCRUTINIZED:", ["{{table}}"]),
    ("3. HISTORY OF TITLE:", ["{$history}"]),
    ("4. DESCRIPTION OF THE PROPERTY:", ["{{table1}}"]),
    ("5. OPINION:", [
        "Based on the documents scrutinized, {owner_name} has a clear and marketable title "
        "to the property as on {report_date}.",
    ]),
]


def load_template_scan(template_path: str) -> Optional[ScanResult]:
    """Scans a template on disk. Returns None if the file does not exist."""
    if not os.path.exists(template_path):
        logger.error(f"Template file not found: {template_path}")
        return None
    with open(template_path, "rb") as f:
        return scan_template(f.read())


def extract_placeholders(template_path: str) -> List[str]:
    """Reads the template and returns its scalar field names in document order."""
    logger.info(f"Extracting placeholders from: {template_path}")
    scan = load_template_scan(template_path)
    if scan is None:
        return []
    if not scan.fields:
        logger.warning(f"No placeholders found in {template_path}")
    else:
        logger.info(f"Found {len(scan.fields)} unique placeholders.")
    return scan.field_names


def build_sample_template(output_path: str = SAMPLE_TEMPLATE_PATH) -> str:
    """
    Writes a starter Legal Scrutiny template exercising every placeholder kind.

    Returns:
        The path written.
    """
    output_dir = os.path.dirname(output_path)
    if output_dir and not os.path.exists(output_dir):
        os.makedirs(output_dir)

    doc = Document()
    title = doc.add_paragraph()
    title.alignment = WD_ALIGN_PARAGRAPH.CENTER
    title_run = title.add_run("LEGAL SCRUTINY REPORT")
    title_run.bold = True
    title_run.font.size = Pt(14)

    doc.add_paragraph("To: {bank_name}, {branch_name}")
    for heading, paragraphs in SAMPLE_SECTIONS:
        heading_run = doc.add_paragraph().add_run(heading)
        heading_run.bold = True
        heading_run.underline = True
        for text in paragraphs:
            doc.add_paragraph(text)

    doc.add_paragraph("Place: {place}")
    doc.add_paragraph("Advocate: {advocate_name}")
    doc.save(output_path)
    logger.info(f"Sample template written to {output_path}")
    return output_path
