"""
Tests for placeholder detection.

Tests cover:
- text projection of WordprocessingML
- scalar, region and control-tag classification
- archive errors
"""

import io
import logging
import zipfile

import pytest

from src.utils.exceptions import MalformedArchiveError, ScrutinyReportError
from src.utils.placeholder_scanner import (
    extract_template_text,
    is_scalar_name,
    read_document_xml,
    scan_placeholders,
    scan_template,
)


class TestExtractTemplateText:

    def test_paragraphs_become_lines(self):
        xml = "<w:p><w:r><w:t>First</w:t></w:r></w:p><w:p w:rsidR=\"1\"><w:r><w:t>Second</w:t></w:r></w:p>"
        assert extract_template_text(xml) == "\nFirst\nSecond"

    def test_empty_paragraphs_are_blank_lines(self):
        xml = "<w:p><w:r><w:t>A</w:t></w:r></w:p><w:p/><w:p w:rsidR=\"2\"/><w:p><w:r><w:t>B</w:t></w:r></w:p>"
        assert extract_template_text(xml) == "\nA\n\n\nB"

    def test_empty_python_docx_paragraph_is_kept(self, make_template):
        text = scan_template(make_template(["A", "", "B"])).text
        assert "A\n\nB" in text

    def test_paragraph_properties_do_not_break_lines(self):
        xml = '<w:p><w:pPr><w:jc w:val="center"/></w:pPr><w:r><w:t>Title</w:t></w:r></w:p>'
        assert extract_template_text(xml) == "\nTitle"

    def test_entities_are_decoded_ampersand_last(self):
        xml = "<w:p><w:r><w:t>A &amp; B &lt;x&gt; &quot;q&quot; &apos;s&apos; &amp;lt;</w:t></w:r></w:p>"
        assert extract_template_text(xml) == "\nA & B <x> \"q\" 's' &lt;"

    def test_curly_quotes_are_straightened(self):
        xml = "<w:p><w:r><w:t>“quoted” ‘single’</w:t></w:r></w:p>"
        assert extract_template_text(xml) == "\n\"quoted\" 'single'"


class TestIsScalarName:

    @pytest.mark.parametrize("name", ["owner_name", "Bank Name", "x"])
    def test_plain_names(self, name):
        assert is_scalar_name(name)

    @pytest.mark.parametrize("name", ["", "table", "TABLE1", "History", "#loop", "/loop", "^inv", "$history"])
    def test_reserved_and_control_names(self, name):
        assert not is_scalar_name(name)


class TestScanPlaceholders:

    def test_each_name_reported_once_in_document_order(self):
        result = scan_placeholders("{b} and {a}\n{b} again {a} {c}")
        assert result.field_names == ["b", "a", "c"]
        assert all(value == "" for value in result.fields.values())

    def test_names_are_trimmed(self):
        assert scan_placeholders("{ owner_name }").field_names == ["owner_name"]

    def test_region_markers_are_flags_not_fields(self):
        result = scan_placeholders("{{table}}\n{{TABLE1}}\n{$History}\n{name}")
        assert result.field_names == ["name"]
        assert result.has_table and result.has_table1 and result.has_history
        assert result.unsupported_tags == []

    def test_single_brace_table_markers_set_flags(self):
        result = scan_placeholders("{table} {table1}")
        assert result.has_table
        assert result.has_table1
        assert result.field_names == []

    def test_table1_does_not_set_table_flag(self):
        result = scan_placeholders("{{table1}}")
        assert result.has_table1
        assert not result.has_table

    def test_no_markers(self):
        result = scan_placeholders("plain text")
        assert not (result.has_table or result.has_table1 or result.has_history)
        assert result.fields == {}

    def test_empty_identifier_is_ignored(self):
        assert scan_placeholders("{ } {}").fields == {}

    def test_control_tags_are_reported_and_logged(self, caplog):
        with caplog.at_level(logging.WARNING):
            result = scan_placeholders("{#loop}{item}{/loop} {^empty}")
        assert "loop" not in result.fields
        assert result.field_names == ["item"]
        assert result.unsupported_tags == ["{#loop}", "{/loop}", "{^empty}"]
        assert any("{#loop}" in record.getMessage() for record in caplog.records
                   if record.levelno == logging.WARNING)

    def test_history_marker_is_not_unsupported(self):
        result = scan_placeholders("{$history} {$total}")
        assert result.unsupported_tags == ["{$total}"]

    def test_summary_mentions_markers(self):
        summary = scan_placeholders("{a} {{table}} {$history}").summary()
        assert summary.startswith("Found 1 field(s)")
        assert "{{table}}" in summary
        assert "{$history}" in summary


class TestScanTemplate:

    def test_scans_python_docx_template(self, make_template):
        template = make_template(["To {bank_name}", "{{table}}", "{$history}", "{{table1}}", "{bank_name}"])
        result = scan_template(template)
        assert result.field_names == ["bank_name"]
        assert result.has_table and result.has_table1 and result.has_history
        assert "To {bank_name}" in result.text

    def test_placeholder_split_across_plain_runs(self, make_template):
        template = make_template([[("Owner: {owner_", False), ("name}", False)]])
        assert scan_template(template).field_names == ["owner_name"]

    def test_placeholder_split_across_formatted_runs(self, make_template):
        template = make_template([[("{applicant_", False), ("name}", True)]])
        assert scan_template(template).field_names == ["applicant_name"]

    def test_not_a_zip(self):
        with pytest.raises(MalformedArchiveError):
            scan_template(b"definitely not a docx")

    def test_zip_without_document_part(self):
        buffer = io.BytesIO()
        with zipfile.ZipFile(buffer, "w") as archive:
            archive.writestr("word/styles.xml", "<w:styles/>")
        with pytest.raises(MalformedArchiveError) as exc_info:
            read_document_xml(buffer.getvalue())
        assert "word/document.xml" in str(exc_info.value)
        assert isinstance(exc_info.value, ScrutinyReportError)
