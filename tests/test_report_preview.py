"""Tests for the plain-text report preview."""

import pytest

from src.utils.report_preview import (
    EMPTY_TEMPLATE_TEXT,
    HISTORY_PLACEHOLDER_TEXT,
    build_report_preview,
    is_heading_line,
    replace_placeholders,
)


@pytest.mark.parametrize("line,expected", [
    ("3. HISTORY OF TITLE:", True),
    ("OPINION:", True),
    ("  2 DESCRIPTION OF DOCUMENTS:", True),
    ("Name of the applicant: {applicant_name}", False),
    ("", False),
])
def test_is_heading_line(line, expected):
    assert is_heading_line(line) is expected


class TestReplacePlaceholders:

    def test_known_fields_are_filled(self):
        assert replace_placeholders("Dear {name},", {"name": "Sir"}) == "Dear Sir,"

    def test_unknown_fields_stay_visible(self):
        assert replace_placeholders("Dear {name},", {}) == "Dear {name},"

    def test_empty_values_render_blank(self):
        assert replace_placeholders("[{name}]", {"name": ""}) == "[]"

    def test_history_marker(self):
        assert replace_placeholders("{$history}", {}) == HISTORY_PLACEHOLDER_TEXT
        assert replace_placeholders("{$HISTORY}", {}, "Narrative") == "Narrative"


class TestBuildReportPreview:

    def test_empty_template(self):
        preview = build_report_preview("", {})
        assert [(s.kind, s.text) for s in preview.segments] == [("text", EMPTY_TEMPLATE_TEXT)]

    def test_segments_follow_document_order(self, deed_factory, parcel_factory):
        text = "\nIntro {a}\n{{table}}\nMiddle\n{{table1}}\nEnd"
        preview = build_report_preview(text, {"a": "X"}, [deed_factory()], [parcel_factory()])
        kinds = [segment.kind for segment in preview.segments]
        assert kinds == ["text", "deeds_table", "text", "parcel_details", "text"]
        assert preview.segments[0].text == "\nIntro X\n"
        assert len(preview.deed_rows) == 1
        assert len(preview.parcels) == 1

    def test_single_brace_markers(self):
        kinds = [s.kind for s in build_report_preview("{table}{table1}", {}).segments]
        assert kinds == ["deeds_table", "parcel_details"]

    def test_history_narrates_typed_deeds(self, deed_factory):
        deeds = [deed_factory(), deed_factory(deed_type="Gift Deed", executed_by="")]
        preview = build_report_preview("{$history}", {}, deeds, history_templates={})
        text = preview.segments[0].text
        assert "SALE DEED:" in text
        assert "GIFT DEED:\nDeed executed by [Executor]" in text
        # only complete deeds reach the table
        assert len(preview.deed_rows) == 1

    def test_history_placeholder_without_deeds(self):
        preview = build_report_preview("{$history}", {})
        assert preview.segments[0].text == HISTORY_PLACEHOLDER_TEXT

    def test_uses_history_templates(self, deed_factory):
        preview = build_report_preview("{$history}", {}, [deed_factory()],
                                       history_templates={"Sale Deed": "Sold by {executedBy}"})
        assert preview.segments[0].text == "Sold by Ravi Kumar"
