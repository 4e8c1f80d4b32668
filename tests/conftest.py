"""
Pytest configuration and fixtures for the Legal Scrutiny Report generator tests.

This module provides shared fixtures and utilities for all tests,
including database setup, Word template factories and record factories.

Windows-compatible using pathlib.Path for all file operations.
"""

import io
import zipfile
from pathlib import Path
from typing import Dict, List, Sequence, Tuple, Union

import pytest
from docx import Document

from src.utils.db import init_db, get_connection
from src.utils.models import DeedRecord, ParcelDetail


# ============================================================================
# PATH FIXTURES
# ============================================================================

@pytest.fixture(scope="session")
def project_root():
    """Return the root directory of the project."""
    return Path(__file__).parent.parent


@pytest.fixture(scope="session")
def templates_dir(project_root):
    """Return the templates directory."""
    return project_root / "templates"


# ============================================================================
# DATABASE FIXTURES
# ============================================================================

@pytest.fixture
def temp_db_path(tmp_path):
    """
    Create an isolated test database in a temporary directory.

    Returns a Path object to a fresh database file.
    Automatically cleaned up after the test.

    Yields:
        Path: Path to the temporary test database
    """
    db_dir = tmp_path / "test_db"
    db_dir.mkdir(parents=True, exist_ok=True)
    db_path = db_dir / "test_scrutiny.db"

    # Initialize the test database
    init_db(str(db_path))

    yield db_path


@pytest.fixture
def test_db_connection(temp_db_path):
    """
    Create a database connection to the test database.

    Yields:
        sqlite3.Connection: Connection to test database
    """
    conn = get_connection(str(temp_db_path))
    yield conn
    conn.close()


# ============================================================================
# TEMPLATE FACTORIES
# ============================================================================

# A paragraph is either plain text or a list of (text, bold) runs.
ParagraphContent = Union[str, Sequence[Tuple[str, bool]]]


@pytest.fixture
def make_template():
    """
    Factory for .docx template bytes built with python-docx.

    Each paragraph is a string (one run) or a list of (text, bold) tuples,
    one run per tuple, to reproduce placeholders split across runs.
    """
    def _create_template(paragraphs: List[ParagraphContent]) -> bytes:
        doc = Document()
        for content in paragraphs:
            if isinstance(content, str):
                doc.add_paragraph(content)
                continue
            paragraph = doc.add_paragraph()
            for text, bold in content:
                run = paragraph.add_run(text)
                if bold:
                    run.bold = True
        buffer = io.BytesIO()
        doc.save(buffer)
        return buffer.getvalue()

    return _create_template


@pytest.fixture
def make_raw_docx():
    """
    Factory for minimal .docx archives around hand-written body markup.

    Useful when a test needs exact control over run boundaries.
    """
    def _create_raw_docx(body_xml: str, extra_entries: Dict[str, bytes] = None) -> bytes:
        document_xml = (
            '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'
            '<w:document xmlns:w="http://schemas.openxmlformats.org/wordprocessingml/2006/main">'
            f"<w:body>{body_xml}</w:body></w:document>"
        )
        buffer = io.BytesIO()
        with zipfile.ZipFile(buffer, "w") as archive:
            archive.writestr("[Content_Types].xml", '<?xml version="1.0"?><Types/>')
            archive.writestr("word/document.xml", document_xml)
            for name, data in (extra_entries or {}).items():
                archive.writestr(name, data)
        return buffer.getvalue()

    return _create_raw_docx


# ============================================================================
# SAMPLE DATA FACTORIES
# ============================================================================

@pytest.fixture
def deed_factory():
    """Factory for DeedRecord instances with complete defaults."""
    def _create_deed(**overrides) -> DeedRecord:
        data = {
            "deed_type": "Sale Deed",
            "executed_by": "Ravi Kumar",
            "in_favour_of": "Lakshmi Devi",
            "date": "12.03.2001",
            "document_number": "1234/2001",
            "nature_of_doc": "Original",
        }
        data.update(overrides)
        return DeedRecord(**data)

    return _create_deed


@pytest.fixture
def parcel_factory():
    """Factory for ParcelDetail instances, empty unless overridden."""
    def _create_parcel(**overrides) -> ParcelDetail:
        return ParcelDetail(**overrides)

    return _create_parcel


@pytest.fixture
def sample_fields() -> Dict[str, str]:
    return {
        "bank_name": "State Bank",
        "branch_name": "Anna Nagar",
        "applicant_name": "Lakshmi Devi",
    }


# ============================================================================
# ARCHIVE HELPERS
# ============================================================================

@pytest.fixture
def read_entries():
    """Returns a function mapping archive bytes to an ordered {name: bytes} dict."""
    def _read_entries(archive_bytes: bytes) -> Dict[str, bytes]:
        with zipfile.ZipFile(io.BytesIO(archive_bytes)) as archive:
            return {name: archive.read(name) for name in archive.namelist()}

    return _read_entries


@pytest.fixture
def read_document_xml_text(read_entries):
    def _read(archive_bytes: bytes) -> str:
        return read_entries(archive_bytes)["word/document.xml"].decode("utf-8")

    return _read


# ============================================================================
# PYTEST CONFIGURATION HOOKS
# ============================================================================

def pytest_configure(config):
    """Configure pytest at startup."""
    # Add custom markers
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "database: mark test as a database test"
    )
    config.addinivalue_line(
        "markers", "slow: mark test as slow running"
    )


def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers based on test location."""
    for item in items:
        # Add unit marker to all tests by default
        if "integration" not in item.keywords:
            item.add_marker(pytest.mark.unit)
