"""Core components: project analysis, mock data, assertions and exceptions.

AutoConfig and TestFramework depend on the security package and are
imported from their own modules (``sectest.core.auto_config``,
``sectest.core.test_runner``) or from the top-level ``sectest`` package.
"""

from .assertion_helpers import AssertionHelpers
from .exceptions import (
    AnalysisError,
    CheckError,
    ConfigWriteError,
    ConfigurationError,
    ExpectationError,
    InvalidConfigError,
    ManifestNotFoundError,
    ManifestParseError,
    MissingConfigError,
    ReportError,
    ReportWriteError,
    RunnerError,
    SecTestError,
    UnknownCheckError,
    UnsupportedReportTypeError,
)
from .mock_generator import MockGenerator
from .project_analyzer import ProjectAnalysis, ProjectAnalyzer, ProjectType

__all__ = [
    # Analysis
    "ProjectAnalyzer",
    "ProjectAnalysis",
    "ProjectType",
    # Test utilities
    "AssertionHelpers",
    "MockGenerator",
    # Exceptions
    "SecTestError",
    "AnalysisError",
    "ManifestNotFoundError",
    "ManifestParseError",
    "ConfigurationError",
    "InvalidConfigError",
    "MissingConfigError",
    "ConfigWriteError",
    "ReportError",
    "ReportWriteError",
    "UnsupportedReportTypeError",
    "CheckError",
    "UnknownCheckError",
    "RunnerError",
    "ExpectationError",
]
