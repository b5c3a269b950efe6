"""Tests for markdown report export."""

from datetime import date, datetime

from appstore_compliance.analysis.exporter import (
    export_report,
    render_report_markdown,
    report_filename,
)
from appstore_compliance.models import AnalysisResult

GENERATED = datetime(2025, 3, 1, 12, 30, 0)


class TestRenderReportMarkdown:
    def test_structure(self, analysis_result):
        md = render_report_markdown(analysis_result, GENERATED)
        lines = md.split("\n")

        assert lines[0] == "# App Store Compliance Report"
        assert "**Compliance Score:** 64/100" in lines
        assert "**Readiness:** Needs Fixes" in lines
        assert "**Generated:** 2025-03-01 12:30:00" in lines
        assert [line for line in lines if line.startswith("### ")] == ["### Privacy"]
        assert [line for line in lines if line.startswith("#### ")] == [
            "#### [HIGH] No ATT prompt",
            "#### [MEDIUM] Vague purpose string",
        ]
        assert "- **Guideline:** 5.1.2" in lines
        assert "- **Affected Code:** `N/A`" in lines

    def test_checklist_table(self, analysis_result):
        md = render_report_markdown(analysis_result, GENERATED)
        assert "| Status | Item | Details |" in md
        assert "| FAIL | Privacy policy URL | Missing |" in md
        assert "| PASS | App icon |  |" in md

    def test_sections_omitted_when_absent(self):
        md = render_report_markdown(AnalysisResult(compliance_score=90), GENERATED)
        assert "Readiness Checklist" not in md
        assert "Overall Assessment" not in md
        assert "## Violations by Category" in md
        assert "## Priority Fixes" in md


class TestExportReport:
    def test_filename(self):
        assert report_filename(date(2025, 1, 9)) == "compliance-report-2025-01-09.md"

    def test_writes_file(self, tmp_path, analysis_result):
        path = export_report(analysis_result, tmp_path / "out", now=GENERATED)
        assert path.name == "compliance-report-2025-03-01.md"
        assert path.read_text(encoding="utf-8").startswith("# App Store Compliance Report")

    def test_defaults_to_today(self, tmp_path, analysis_result):
        path = export_report(analysis_result, tmp_path)
        assert path.name == report_filename(date.today())
