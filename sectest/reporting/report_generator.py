"""Report generation in JSON, HTML and plain text.

Renderers accept any mapping shaped like a report
(``type, timestamp, summary, byCategory, details, recommendations,
metadata``); missing fields render as empty sections instead of raising.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from pydantic import BaseModel

from .. import constants
from ..core.exceptions import ReportWriteError, UnsupportedReportTypeError
from ..security.models import SecurityRunSummary
from ..security.suite import build_security_report, run_all
from ..testing.coverage import CoverageAnalyzer
from ..testing.performance import PerformanceTester
from .html_renderer import render_html, report_title

logger = logging.getLogger(__name__)

REPORT_FORMATS = ("json", "html", "text")
REPORT_TYPES = ("security", "coverage", "performance", "comprehensive")

FILE_EXTENSIONS = {"json": "json", "html": "html", "text": "txt"}


class RenderedReport(BaseModel):
    """Rendered report text and, when saved, the file it was written to."""

    content: str
    format: str
    path: str | None = None


def _metadata() -> dict[str, str]:
    return {"framework": constants.FRAMEWORK_NAME, "version": constants.FRAMEWORK_VERSION}


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def normalize_format(fmt: str | None) -> str:
    """Lower-cased format name; anything unknown becomes ``text``."""
    fmt = (fmt or "text").lower()
    return fmt if fmt in REPORT_FORMATS else "text"


class ReportGenerator:
    """Render and save reports.

    Args:
        output_dir: Default directory for saved reports.
    """

    def __init__(self, output_dir: str | Path = constants.DEFAULT_REPORT_DIR):
        self.output_dir = Path(output_dir)

    # -------------------------------------------------------------------------
    # Renderers
    # -------------------------------------------------------------------------

    def generate_json_report(self, data: Any) -> str:
        return json.dumps(data, indent=2, ensure_ascii=False)

    def generate_html_report(self, data: Mapping[str, Any], report_type: str) -> str:
        return render_html(data, report_type)

    def generate_text_report(self, data: Mapping[str, Any], report_type: str) -> str:
        lines = [
            "",
            f"Security Test Framework - {report_title(report_type)} Report",
            "=" * 60,
            f"Generated: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}",
            "",
        ]

        summary = data.get("summary")
        if summary:
            lines += [
                "Summary:",
                f"  Total Tests: {summary.get('totalTests') or 0}",
                f"  Passed: {summary.get('passed') or 0}",
                f"  Failed: {summary.get('failed') or 0}",
                f"  Vulnerabilities: {summary.get('vulnerabilities') or 0}",
                "",
            ]

        by_category = data.get("byCategory")
        if by_category:
            lines.append("Coverage by Category:")
            lines += [f"  {category}: {percentage}%" for category, percentage in by_category.items()]
            lines.append("")

        for title, key in (("Details:", "details"), ("Recommendations:", "recommendations")):
            entries = data.get(key)
            if entries:
                lines.append(title)
                lines += [f"  - {entry}" for entry in entries]
                lines.append("")

        return "\n".join(lines) + "\n"

    def render(self, data: Mapping[str, Any], report_type: str, fmt: str | None = "text") -> str:
        fmt = normalize_format(fmt)
        if fmt == "json":
            return self.generate_json_report(data)
        if fmt == "html":
            return self.generate_html_report(data, report_type)
        return self.generate_text_report(data, report_type)

    # -------------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------------

    def save_report(
        self,
        content: str,
        fmt: str,
        report_type: str,
        output_path: str | Path | None = None,
    ) -> Path:
        """Write ``content`` to a new timestamped file and return its path.

        Existing files are never overwritten; a numeric suffix is added
        when the timestamped name is already taken.

        Raises:
            ReportWriteError: If the directory or file cannot be written
        """
        directory = Path(output_path) if output_path is not None else self.output_dir
        extension = FILE_EXTENSIONS[normalize_format(fmt)]
        stamp = datetime.now(timezone.utc).isoformat(timespec="milliseconds")
        stamp = stamp.replace("+00:00", "Z").replace(":", "-").replace(".", "-")
        stem = f"{report_type}-report-{stamp}"

        try:
            directory.mkdir(parents=True, exist_ok=True)
            path = directory / f"{stem}.{extension}"
            counter = 1
            while True:
                try:
                    with open(path, "x", encoding="utf-8") as f:
                        f.write(content)
                    break
                except FileExistsError:
                    path = directory / f"{stem}-{counter}.{extension}"
                    counter += 1
        except OSError as e:
            logger.error(f"Error saving report: {e}", extra={"report_type": report_type, "path": str(directory)})
            raise ReportWriteError(f"Could not save {report_type} report: {e}", path=str(directory)) from e

        logger.info(f"Report saved: {path}", extra={"report_type": report_type, "path": str(path)})
        return path

    def _emit(
        self,
        report: dict[str, Any],
        report_type: str,
        fmt: str | None,
        output_path: str | Path | None,
        save: bool,
    ) -> RenderedReport:
        fmt = normalize_format(fmt)
        content = self.render(report, report_type, fmt)
        path = self.save_report(content, fmt, report_type, output_path) if save else None
        return RenderedReport(content=content, format=fmt, path=str(path) if path else None)

    # -------------------------------------------------------------------------
    # Report builders
    # -------------------------------------------------------------------------

    def build_coverage_report(self, threshold: float = constants.DEFAULT_COVERAGE_THRESHOLD) -> dict[str, Any]:
        coverage = CoverageAnalyzer().analyze_coverage(threshold=threshold)
        return {
            "type": "coverage",
            "timestamp": _timestamp(),
            "summary": {
                "overall": coverage.overall,
                "threshold": coverage.threshold,
                "meetsThreshold": coverage.meets_threshold,
            },
            "byCategory": coverage.by_category.model_dump(),
            "details": [],
            "recommendations": list(coverage.recommendations),
            "metadata": _metadata(),
        }

    def build_performance_report(self) -> dict[str, Any]:
        performance = PerformanceTester().run_load_tests()
        return {
            "type": "performance",
            "timestamp": _timestamp(),
            "summary": {
                "avgResponseTime": performance.response_time.avg,
                "maxResponseTime": performance.response_time.max,
                "throughput": performance.throughput,
                "memoryUsage": performance.memory_usage.avg,
            },
            "details": [],
            "recommendations": list(performance.recommendations),
            "metadata": _metadata(),
        }

    def generate_security_report(
        self,
        summary: SecurityRunSummary | None = None,
        fmt: str | None = "html",
        output_path: str | Path | None = None,
        include_details: bool = True,
        include_recommendations: bool = True,
        save: bool = True,
    ) -> RenderedReport:
        """Render (and by default save) a security report.

        Runs every check when ``summary`` is not supplied.
        """
        summary = summary if summary is not None else run_all()
        report = build_security_report(summary, include_details, include_recommendations)
        return self._emit(report, "security", fmt, output_path, save)

    def generate_coverage_report(
        self,
        threshold: float = constants.DEFAULT_COVERAGE_THRESHOLD,
        fmt: str | None = "html",
        output_path: str | Path | None = None,
        save: bool = True,
    ) -> RenderedReport:
        return self._emit(self.build_coverage_report(threshold), "coverage", fmt, output_path, save)

    def generate_performance_report(
        self,
        fmt: str | None = "html",
        output_path: str | Path | None = None,
        save: bool = True,
    ) -> RenderedReport:
        return self._emit(self.build_performance_report(), "performance", fmt, output_path, save)

    def generate_comprehensive_report(
        self,
        fmt: str | None = "html",
        output_path: str | Path | None = None,
        save: bool = True,
        threshold: float = constants.DEFAULT_COVERAGE_THRESHOLD,
    ) -> RenderedReport:
        """Security, coverage and performance in one report.

        The top-level summary, details and recommendations come from the
        security run so the HTML and text renderers have something to show.
        """
        security = build_security_report(run_all())
        coverage = self.build_coverage_report(threshold)
        performance = self.build_performance_report()
        report = {
            "type": "comprehensive",
            "timestamp": _timestamp(),
            "summary": security["summary"],
            "byCategory": coverage["byCategory"],
            "details": security["details"],
            "recommendations": security["recommendations"]
            + coverage["recommendations"]
            + performance["recommendations"],
            "security": security,
            "coverage": coverage,
            "performance": performance,
            "metadata": _metadata(),
        }
        return self._emit(report, "comprehensive", fmt, output_path, save)

    def generate(
        self,
        report_type: str,
        fmt: str | None = "html",
        output_path: str | Path | None = None,
        save: bool = True,
    ) -> RenderedReport:
        """Dispatch on report type name.

        Raises:
            UnsupportedReportTypeError: If ``report_type`` is not one of
                security, coverage, performance or comprehensive
        """
        builders = {
            "security": self.generate_security_report,
            "coverage": self.generate_coverage_report,
            "performance": self.generate_performance_report,
            "comprehensive": self.generate_comprehensive_report,
        }
        if report_type not in builders:
            raise UnsupportedReportTypeError(
                f"Unknown report type '{report_type}'. Expected one of: {', '.join(REPORT_TYPES)}"
            )
        return builders[report_type](fmt=fmt, output_path=output_path, save=save)
