"""
Tests for the deeds table, parcel details and History of Title renderers.
"""

import re

import pytest

from src.utils.models import DeedRecord, ParcelDetail
from src.utils.region_renderers import (
    NO_DEEDS_TEXT,
    NO_DOCUMENTS_TEXT,
    deed_table_rows,
    render_deed_preview,
    render_deeds_table,
    render_history,
    render_history_paragraphs,
    render_parcel_details,
)

TEXT_REGEX = re.compile(r"<w:t(?:\s[^>]*)?>([^<]*)</w:t>")


def visible_text(xml: str):
    return TEXT_REGEX.findall(xml)


# ============================================================================
# DEEDS TABLE
# ============================================================================

class TestDeedsTable:

    def test_no_deeds(self):
        assert render_deeds_table([]) == NO_DEEDS_TEXT == "No deeds added yet"

    def test_incomplete_deeds_are_filtered_out(self, deed_factory):
        deeds = [deed_factory(executed_by=""), deed_factory(deed_type=""), deed_factory(in_favour_of="")]
        assert render_deeds_table(deeds) == NO_DEEDS_TEXT

    def test_single_deed_row(self):
        deed = DeedRecord.model_validate({
            "type": "Sale Deed", "executedBy": "A", "inFavourOf": "B",
            "date": "2025-01-01", "documentNumber": "D1", "natureOfDoc": "Original",
        })
        assert deed_table_rows([deed]) == [["1", "2025-01-01", "D1", "Sale Deed executed by A in favour of B", "Original"]]

        xml = render_deeds_table([deed])
        assert xml.startswith("<w:tbl>") and xml.endswith("</w:tbl>")
        assert xml.count("<w:tr>") == 2
        assert visible_text(xml) == [
            "Sno", "Date", "D.No", "Particulars of Deed", "Nature of Doc",
            "1", "2025-01-01", "D1", "Sale Deed executed by A in favour of B", "Original",
        ]

    def test_header_is_bold(self, deed_factory):
        xml = render_deeds_table([deed_factory()])
        header = xml.split("</w:tr>")[0]
        assert header.count("<w:b/>") == 5

    def test_missing_cells_render_dash(self, deed_factory):
        rows = deed_table_rows([deed_factory(date="", document_number="", nature_of_doc="")])
        assert rows == [["1", "-", "-", "Sale Deed executed by Ravi Kumar in favour of Lakshmi Devi", "-"]]

    def test_numbering_skips_filtered_deeds(self, deed_factory):
        rows = deed_table_rows([
            deed_factory(document_number="1"),
            deed_factory(executed_by=""),
            deed_factory(document_number="3"),
        ])
        assert [row[0] for row in rows] == ["1", "2"]
        assert [row[2] for row in rows] == ["1", "3"]

    def test_values_are_escaped(self, deed_factory):
        xml = render_deeds_table([deed_factory(executed_by="A & B <Trust>")])
        assert "A &amp; B &lt;Trust&gt;" in xml
        assert "A & B" not in xml

    def test_input_is_not_mutated(self, deed_factory):
        deed = deed_factory()
        before = deed.model_dump()
        render_deeds_table([deed])
        assert deed.model_dump() == before


# ============================================================================
# PARCEL DETAILS
# ============================================================================

class TestParcelDetails:

    def test_no_parcels(self):
        assert render_parcel_details([]) == NO_DOCUMENTS_TEXT == "No document details added yet"

    def test_empty_parcel_renders_every_default(self, parcel_factory):
        text = visible_text(render_parcel_details([parcel_factory()]))
        for label in [
            "As per Doc No : (As per Doc No)",
            "(Survey No)", "(As per Revenue Record)", "(Total Extent)", "(Plot No)",
            "(Location like name of the place, village, city registration, sub-district etc.)",
            " - (North By)", " - (South By)", " - (East By)", " - (West By)",
            "30 ft", "40 ft", "1200 Sq.Ft",
            "i) Boundaries for (Total Extent) Sq.Ft of land",
            "Measurement Details",
        ]:
            assert label in text
        assert text.count("30 ft") == 2
        assert text.count("40 ft") == 2

    def test_filled_values_replace_defaults(self, parcel_factory):
        parcel = ParcelDetail.model_validate({
            "docNo": "567/1999", "surveyNo": "12/3A", "northBy": "Road",
            "northMeasurement": "45 ft", "totalExtentSqFt": "2400",
        })
        text = visible_text(render_parcel_details([parcel]))
        assert "As per Doc No : 567/1999" in text
        assert "12/3A" in text
        assert " - Road" in text
        assert "45 ft" in text
        assert "2400" in text
        assert "i) Boundaries for 2400 Sq.Ft of land" in text
        assert "(Survey No)" not in text

    def test_layout(self, parcel_factory):
        xml = render_parcel_details([parcel_factory()])
        assert xml.count("<w:tbl>") == 2
        assert '<w:gridSpan w:val="3"/>' in xml
        assert 'w:fill="D9D9D9"' in xml
        assert xml.count('<w:jc w:val="center"/>') >= 2

    def test_records_are_separated_by_blank_paragraph(self, parcel_factory):
        xml = render_parcel_details([parcel_factory(doc_no="1"), parcel_factory(doc_no="2")])
        assert xml.count("<w:tbl>") == 4
        assert xml.count("<w:p><w:r><w:t></w:t></w:r></w:p>") == 1
        first, second = xml.split("<w:p><w:r><w:t></w:t></w:r></w:p>")
        assert "As per Doc No : 1" in first
        assert "As per Doc No : 2" in second


# ============================================================================
# HISTORY OF TITLE
# ============================================================================

class TestHistory:

    def test_fallback_for_unregistered_type(self):
        deed = DeedRecord.model_validate({
            "type": "Gift Deed", "executedBy": "", "inFavourOf": "Z", "date": "", "documentNumber": "",
        })
        assert render_history([deed], {}) == (
            "GIFT DEED:\nDeed executed by [Executor] in favour of Z dated [Date], Document No: [Doc No]"
        )

    def test_fallback_includes_nature(self, deed_factory):
        text = render_history([deed_factory(deed_type="Partition Deed")], None)
        assert text.endswith(", Nature: Original")
        assert text.startswith("PARTITION DEED:\n")

    def test_template_lookup_is_trimmed_and_case_insensitive(self, deed_factory):
        templates = {" SALE DEED ": "{EXECUTEDBY} sold to {inFavourOf} on {date} vide {documentNumber}."}
        text = render_history([deed_factory(deed_type="sale deed")], templates)
        assert text == "Ravi Kumar sold to Lakshmi Devi on 12.03.2001 vide 1234/2001."

    def test_all_standard_placeholders(self, deed_factory):
        template = "{deedType}|{executedBy}|{inFavourOf}|{date}|{documentNumber}|{natureOfDoc}"
        text = render_history([deed_factory()], {"Sale Deed": template})
        assert text == "Sale Deed|Ravi Kumar|Lakshmi Devi|12.03.2001|1234/2001|Original"

    def test_custom_field(self, deed_factory):
        deed = deed_factory(custom_fields={"saleAmount": "500"})
        assert render_history([deed], {"Sale Deed": "Paid {saleAmount}"}) == "Paid 500"

    def test_custom_field_is_case_insensitive(self, deed_factory):
        deed = deed_factory(custom_fields={"saleAmount": "500"})
        assert render_history([deed], {"Sale Deed": "Paid {SALEAMOUNT}"}) == "Paid 500"

    def test_unmatched_tokens_stay_literal(self, deed_factory):
        text = render_history([deed_factory()], {"Sale Deed": "Stamp {stampDuty} paid"})
        assert text == "Stamp {stampDuty} paid"

    def test_backslashes_in_values_are_literal(self, deed_factory):
        text = render_history([deed_factory(executed_by=r"A\1B")], {"Sale Deed": "{executedBy}"})
        assert text == r"A\1B"

    def test_result_is_trimmed_and_joined_with_blank_line(self, deed_factory):
        templates = {"Sale Deed": "  First {executedBy}.\n"}
        deeds = [deed_factory(), deed_factory(deed_type="Gift Deed", nature_of_doc="")]
        text = render_history(deeds, templates)
        first, second = text.split("\n\n")
        assert first == "First Ravi Kumar."
        assert second.startswith("GIFT DEED:\n")

    def test_deeds_without_type_are_skipped(self, deed_factory):
        assert render_history([deed_factory(deed_type="")], {}) == ""
        assert render_history([], {}) == ""

    def test_paragraphs(self):
        xml = render_history_paragraphs("SALE DEED:\nA & B")
        assert xml.count("<w:p>") == 2
        assert xml.count('<w:rFonts w:ascii="Cambria" w:hAnsi="Cambria"/>') == 2
        assert '<w:sz w:val="24"/>' in xml
        assert "A &amp; B" in xml


# ============================================================================
# DEED PREVIEW
# ============================================================================

class TestDeedPreview:

    def test_default_template(self, deed_factory):
        assert render_deed_preview(deed_factory()) == "Sale Deed executed by Ravi Kumar in favour of Lakshmi Devi"

    @pytest.mark.parametrize("template,expected", [
        ("{deedType} No. {documentNumber}", "Sale Deed No. 1234/2001"),
        ("{executedBy} to {inFavourOf} ({extent})", "Ravi Kumar to Lakshmi Devi (2 acres)"),
    ])
    def test_custom_template(self, deed_factory, template, expected):
        deed = deed_factory(custom_fields={"extent": "2 acres"})
        assert render_deed_preview(deed, template) == expected
