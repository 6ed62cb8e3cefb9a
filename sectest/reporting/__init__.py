"""JSON, HTML and text report rendering."""

from .html_renderer import render_html
from .report_generator import (
    FILE_EXTENSIONS,
    REPORT_FORMATS,
    REPORT_TYPES,
    RenderedReport,
    ReportGenerator,
    normalize_format,
)

__all__ = [
    "ReportGenerator",
    "RenderedReport",
    "render_html",
    "normalize_format",
    "FILE_EXTENSIONS",
    "REPORT_FORMATS",
    "REPORT_TYPES",
]
