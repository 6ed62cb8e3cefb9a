"""HTML rendering for reports.

A single self-contained page with inline CSS. Every value taken from the
report mapping is HTML-escaped; sections for missing fields are omitted.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from html import escape
from typing import Any

STYLE = """
        * { margin: 0; padding: 0; box-sizing: border-box; }
        body {
            font-family: 'Segoe UI', Tahoma, Geneva, Verdana, sans-serif;
            background: linear-gradient(145deg, #e6e6e6, #ffffff);
            min-height: 100vh; padding: 20px; color: #2c3e50;
        }
        .container {
            max-width: 1200px; margin: 0 auto; padding: 40px;
            background: linear-gradient(145deg, #f0f0f0, #ffffff);
            border-radius: 30px; box-shadow: 20px 20px 60px #d1d1d1, -20px -20px 60px #ffffff;
        }
        .header {
            text-align: center; margin-bottom: 40px; padding: 30px; border-radius: 25px;
            box-shadow: inset 5px 5px 10px #d1d1d1, inset -5px -5px 10px #ffffff;
        }
        .header h1 { font-size: 2.5em; color: #667eea; margin-bottom: 10px; }
        .header h2 { font-size: 1.8em; color: #34495e; font-weight: 500; }
        .summary, .section {
            padding: 30px; border-radius: 25px; margin-bottom: 30px;
            box-shadow: 10px 10px 20px #d1d1d1, -10px -10px 20px #ffffff;
        }
        .summary h3, .section h3 { font-size: 1.5em; margin-bottom: 25px; }
        .metrics-grid { display: grid; grid-template-columns: repeat(auto-fit, minmax(200px, 1fr)); gap: 25px; }
        .metric {
            text-align: center; padding: 25px; border-radius: 20px;
            box-shadow: 8px 8px 16px #d1d1d1, -8px -8px 16px #ffffff;
        }
        .metric-value { font-size: 2.5em; font-weight: 700; display: block; }
        .metric-label { font-size: 0.9em; color: #7f8c8d; text-transform: uppercase; }
        .success { color: #27ae60; }
        .warning { color: #f39c12; }
        .danger { color: #e74c3c; }
        .info { color: #3498db; }
        .vulnerability {
            padding: 20px; margin: 15px 0; border-radius: 15px; border-left: 5px solid #f39c12;
            box-shadow: inset 3px 3px 6px #e0d5c1, inset -3px -3px 6px #ffffff;
        }
        .progress-bar {
            width: 100%; height: 20px; border-radius: 10px; overflow: hidden;
            box-shadow: inset 3px 3px 6px #d1d1d1, inset -3px -3px 6px #ffffff;
        }
        .progress-fill { height: 100%; background: linear-gradient(90deg, #667eea 0%, #764ba2 100%); }
        .coverage-item { display: flex; justify-content: space-between; align-items: center; padding: 15px 0; }
        .status-badge { display: inline-block; padding: 8px 16px; border-radius: 20px; font-weight: 600; }
        .status-success { color: #27ae60; box-shadow: 3px 3px 6px #c1e0d1, -3px -3px 6px #ffffff; }
        .status-warning { color: #f39c12; box-shadow: 3px 3px 6px #e0d5c1, -3px -3px 6px #ffffff; }
        .timestamp {
            text-align: center; margin-top: 40px; padding: 20px; border-radius: 15px; color: #7f8c8d;
            box-shadow: inset 3px 3px 6px #d1d1d1, inset -3px -3px 6px #ffffff;
        }
"""


def report_title(report_type: str) -> str:
    return report_type[:1].upper() + report_type[1:]


def _metric(value: Any, label: str, tone: str) -> str:
    return (
        '                <div class="metric">\n'
        f'                    <span class="metric-value {tone}">{escape(str(value or 0))}</span>\n'
        f'                    <div class="metric-label">{label}</div>\n'
        "                </div>\n"
    )


def _coverage_section(by_category: Mapping[str, Any]) -> str:
    items = []
    for category, percentage in by_category.items():
        pct = escape(str(percentage))
        items.append(
            '                <div class="coverage-item">\n'
            f'                    <span class="coverage-label">{escape(report_title(str(category)))}</span>\n'
            '                    <div class="progress-bar">'
            f'<div class="progress-fill" style="width: {pct}%"></div></div>\n'
            f'                    <span class="coverage-value">{pct}%</span>\n'
            "                </div>\n"
        )
    return (
        '        <div class="section">\n'
        "            <h3>Coverage Analysis</h3>\n"
        f"{''.join(items)}"
        "        </div>\n"
    )


def _overall_section(summary: Mapping[str, Any]) -> str:
    met = bool(summary.get("meetsThreshold"))
    overall = escape(str(summary["overall"]))
    return (
        '        <div class="section">\n'
        "            <h3>Overall Coverage</h3>\n"
        '            <div class="progress-bar">'
        f'<div class="progress-fill" style="width: {overall}%"></div></div>\n'
        f'            <span class="status-badge {"status-success" if met else "status-warning"}">'
        f'{"Threshold Met" if met else "Below Threshold"}</span>\n'
        "        </div>\n"
    )


def _list_section(title: str, heading: str, entries: list[Any]) -> str:
    blocks = "".join(
        '            <div class="vulnerability">\n'
        f"                <h4>{heading}</h4>\n"
        f"                <p>{escape(str(entry))}</p>\n"
        "            </div>\n"
        for entry in entries
    )
    return (
        '        <div class="section">\n'
        f"            <h3>{title}</h3>\n"
        f"{blocks}"
        "        </div>\n"
    )


def render_html(data: Mapping[str, Any], report_type: str, generated_at: datetime | None = None) -> str:
    """Render a report mapping as a standalone HTML page."""
    title = escape(report_title(report_type))
    summary = data.get("summary") or {}
    generated_at = generated_at or datetime.now()

    sections = []
    if data.get("byCategory"):
        sections.append(_coverage_section(data["byCategory"]))
    if summary.get("overall"):
        sections.append(_overall_section(summary))
    if data.get("details"):
        sections.append(_list_section("Test Details", "Test Result", list(data["details"])))
    if data.get("recommendations"):
        sections.append(_list_section("Recommendations", "Recommendation", list(data["recommendations"])))

    metrics = (
        _metric(summary.get("totalTests"), "Total Tests", "info")
        + _metric(summary.get("passed"), "Passed", "success")
        + _metric(summary.get("failed"), "Failed", "danger")
        + _metric(summary.get("vulnerabilities"), "Vulnerabilities", "warning")
    )

    return (
        "<!DOCTYPE html>\n"
        '<html lang="en">\n'
        "<head>\n"
        '    <meta charset="UTF-8">\n'
        '    <meta name="viewport" content="width=device-width, initial-scale=1.0">\n'
        f"    <title>Security Test Framework - {title} Report</title>\n"
        f"    <style>{STYLE}    </style>\n"
        "</head>\n"
        "<body>\n"
        '    <div class="container">\n'
        '        <div class="header">\n'
        "            <h1>Security Test Framework</h1>\n"
        f"            <h2>{title} Report</h2>\n"
        "        </div>\n"
        '        <div class="summary">\n'
        "            <h3>Test Summary</h3>\n"
        '            <div class="metrics-grid">\n'
        f"{metrics}"
        "            </div>\n"
        "        </div>\n"
        f"{''.join(sections)}"
        f'        <div class="timestamp">Generated on: {escape(generated_at.strftime("%Y-%m-%d %H:%M:%S"))}</div>\n'
        "    </div>\n"
        "</body>\n"
        "</html>\n"
    )
