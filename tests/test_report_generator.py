"""Tests for JSON, HTML and text report generation."""

import json
from datetime import datetime, timezone
from unittest.mock import MagicMock, patch

import pytest

from sectest.core.exceptions import ReportWriteError, UnsupportedReportTypeError
from sectest.reporting import report_generator
from sectest.reporting.html_renderer import render_html
from sectest.reporting.report_generator import ReportGenerator, normalize_format

SAMPLE_REPORT = {
    "type": "security",
    "timestamp": "2024-01-01T00:00:00+00:00",
    "summary": {"totalTests": 16, "passed": 11, "failed": 5, "vulnerabilities": 5},
    "details": ["XSS Prevention: XSS prevention test completed"],
    "recommendations": ["Use security headers"],
    "metadata": {"framework": "security-test-framework", "version": "1.0.0"},
}


@pytest.fixture
def generator(tmp_path):
    return ReportGenerator(output_dir=tmp_path / "reports")


class TestRenderers:
    """Rendering report mappings."""

    def test_json_round_trip(self, generator):
        assert json.loads(generator.generate_json_report(SAMPLE_REPORT)) == SAMPLE_REPORT

    def test_json_of_plain_values(self, generator):
        data = {"nested": [1, 2.5, None, True, "ü"]}
        assert json.loads(generator.generate_json_report(data)) == data

    def test_html_contains_summary_and_sections(self, generator):
        html = generator.generate_html_report(SAMPLE_REPORT, "security")
        assert html.startswith("<!DOCTYPE html>")
        assert "<title>Security Test Framework - Security Report</title>" in html
        assert "Test Details" in html
        assert "Recommendations" in html
        assert "Coverage Analysis" not in html

    def test_html_escapes_values(self):
        html = render_html({"details": ["<script>alert(1)</script>"]}, "security")
        assert "&lt;script&gt;alert(1)&lt;/script&gt;" in html
        assert "<script>" not in html

    def test_html_for_empty_mapping(self):
        html = render_html({}, "coverage")
        assert "Coverage Report" in html
        assert "Test Details" not in html

    def test_html_coverage_threshold_badge(self):
        data = {"summary": {"overall": 70, "meetsThreshold": False}, "byCategory": {"lines": 70}}
        html = render_html(data, "coverage")
        assert "Below Threshold" in html
        assert "Coverage Analysis" in html

    def test_text_report(self, generator):
        text = generator.generate_text_report(SAMPLE_REPORT, "security")
        assert "Security Test Framework - Security Report" in text
        assert "=" * 60 in text
        assert "  Total Tests: 16" in text
        assert "  - Use security headers" in text

    def test_text_report_skips_missing_sections(self, generator):
        text = generator.generate_text_report({"byCategory": {"lines": 85}}, "coverage")
        assert "Summary:" not in text
        assert "  lines: 85%" in text

    @pytest.mark.parametrize(
        "fmt, expected", [("json", "json"), ("HTML", "html"), ("text", "text"), ("pdf", "text"), (None, "text")]
    )
    def test_normalize_format(self, fmt, expected):
        assert normalize_format(fmt) == expected

    def test_render_unknown_format_falls_back_to_text(self, generator):
        assert generator.render(SAMPLE_REPORT, "security", "xml").lstrip().startswith("Security Test Framework")


class TestSaveReport:
    """Writing report files."""

    def test_creates_directory_and_file(self, generator):
        path = generator.save_report("content", "text", "security")
        assert path.parent == generator.output_dir
        assert path.name.startswith("security-report-")
        assert path.suffix == ".txt"
        assert ":" not in path.name
        assert path.read_text() == "content"

    def test_explicit_output_path(self, generator, tmp_path):
        path = generator.save_report("{}", "json", "coverage", output_path=tmp_path / "elsewhere")
        assert path.parent == tmp_path / "elsewhere"
        assert path.suffix == ".json"

    def test_never_overwrites(self, generator):
        frozen = datetime(2024, 1, 1, tzinfo=timezone.utc)
        with patch.object(report_generator, "datetime") as mock_datetime:
            mock_datetime.now.return_value = frozen
            first = generator.save_report("first", "html", "security")
            second = generator.save_report("second", "html", "security")

        assert first.name == "security-report-2024-01-01T00-00-00-000Z.html"
        assert second.name == "security-report-2024-01-01T00-00-00-000Z-1.html"
        assert first.read_text() == "first"
        assert second.read_text() == "second"

    def test_write_error_is_logged_and_raised(self, tmp_path, monkeypatch):
        blocker = tmp_path / "not-a-dir"
        blocker.write_text("")
        mock_logger = MagicMock()
        monkeypatch.setattr(report_generator, "logger", mock_logger)

        with pytest.raises(ReportWriteError) as exc_info:
            ReportGenerator(blocker).save_report("x", "json", "security")

        assert exc_info.value.path == str(blocker)
        mock_logger.error.assert_called_once()


class TestReportBuilders:
    """Building, rendering and saving each report type."""

    def test_security_report_without_saving(self, generator):
        report = generator.generate_security_report(fmt="json", save=False)
        assert report.path is None
        assert report.format == "json"
        assert json.loads(report.content)["summary"]["totalTests"] == 16

    def test_security_report_saved_as_html(self, generator):
        report = generator.generate_security_report()
        assert report.format == "html"
        assert report.path.endswith(".html")

    def test_coverage_report(self, generator):
        data = json.loads(generator.generate_coverage_report(fmt="json", save=False).content)
        assert data["summary"] == {"overall": 85, "threshold": 80, "meetsThreshold": True}
        assert data["byCategory"] == {"statements": 82, "branches": 78, "functions": 90, "lines": 85}

    def test_performance_report(self, generator):
        data = json.loads(generator.generate_performance_report(fmt="json", save=False).content)
        assert data["summary"]["avgResponseTime"] == 150
        assert data["summary"]["throughput"] == 1000

    def test_comprehensive_report_embeds_parts(self, generator):
        data = json.loads(generator.generate_comprehensive_report(fmt="json", save=False).content)
        assert data["type"] == "comprehensive"
        assert data["security"]["summary"]["failed"] == 5
        assert data["coverage"]["type"] == "coverage"
        assert data["performance"]["type"] == "performance"
        assert len(data["recommendations"]) == 10 + 3 + 3

    def test_generate_dispatch(self, generator):
        report = generator.generate("coverage", fmt="text", save=False)
        assert "Coverage by Category:" in report.content

    def test_generate_unknown_type(self, generator):
        with pytest.raises(UnsupportedReportTypeError):
            generator.generate("quarterly")
