"""Tests for run merging of WordprocessingML text runs."""

import pytest

from src.utils.run_merger import merge_runs


SPLIT_PLAIN = "<w:p><w:r><w:t>{owner_</w:t></w:r><w:r><w:t>name}</w:t></w:r></w:p>"
SPLIT_WITH_ATTRS = (
    '<w:p><w:r w:rsidR="00AB12"><w:t xml:space="preserve">Dear </w:t></w:r>'
    '<w:r w:rsidRPr="00CD34"><w:t xml:space="preserve">{applicant</w:t></w:r>'
    "<w:r><w:t>_name}</w:t></w:r></w:p>"
)


class TestMergeRuns:

    def test_plain_boundary_is_collapsed(self):
        assert merge_runs(SPLIT_PLAIN) == "<w:p><w:r><w:t>{owner_name}</w:t></w:r></w:p>"

    def test_boundaries_with_attributes_are_collapsed(self):
        merged = merge_runs(SPLIT_WITH_ATTRS)
        assert "Dear {applicant_name}" in merged
        assert merged.count("<w:r") == 1

    def test_run_properties_are_not_a_boundary(self):
        xml = "<w:p><w:r><w:t>{a</w:t></w:r><w:r><w:rPr><w:b/></w:rPr><w:t>b}</w:t></w:r></w:p>"
        assert merge_runs(xml) == xml

    def test_tab_run_is_not_a_boundary(self):
        xml = "<w:p><w:r><w:t>Left</w:t></w:r><w:r><w:tab/><w:t>Right</w:t></w:r></w:p>"
        assert merge_runs(xml) == xml

    def test_paragraph_boundary_is_kept(self):
        xml = "<w:p><w:r><w:t>One</w:t></w:r></w:p><w:p><w:r><w:t>Two</w:t></w:r></w:p>"
        assert merge_runs(xml) == xml

    @pytest.mark.parametrize("xml", [SPLIT_PLAIN, SPLIT_WITH_ATTRS, ""])
    def test_idempotent(self, xml):
        once = merge_runs(xml)
        assert merge_runs(once) == once

    def test_visible_text_is_preserved_in_order(self):
        xml = "".join(f"<w:r><w:t>{ch}</w:t></w:r>" for ch in "abcdef")
        merged = merge_runs(f"<w:p>{xml}</w:p>")
        assert merged == "<w:p><w:r><w:t>abcdef</w:t></w:r></w:p>"

    def test_preserve_flag_survives_merge(self):
        xml = '<w:p><w:r><w:t>Dear</w:t></w:r><w:r><w:t xml:space="preserve">Sir </w:t></w:r></w:p>'
        assert merge_runs(xml) == '<w:p><w:r><w:t xml:space="preserve">DearSir </w:t></w:r></w:p>'

    def test_existing_preserve_flag_is_not_repeated(self):
        merged = merge_runs(SPLIT_WITH_ATTRS)
        assert merged.count('xml:space="preserve"') == 1
        assert '<w:t xml:space="preserve">Dear {applicant_name}</w:t>' in merged

    def test_plain_spans_stay_plain(self):
        assert "xml:space" not in merge_runs(SPLIT_PLAIN)
