"""sectest - security-oriented test utilities for JavaScript projects.

Canned security checks, a package.json project analyzer with
configuration generation, mock data factories, assertion helpers and
JSON/HTML/text reports.
"""

from .config import FrameworkConfig, load_config
from .constants import FRAMEWORK_VERSION as __version__
from .core import (
    AssertionHelpers,
    ExpectationError,
    MockGenerator,
    ProjectAnalysis,
    ProjectAnalyzer,
    ProjectType,
    SecTestError,
)
from .core.auto_config import AutoConfig, RecommendedConfig, build_recommended_config
from .core.test_runner import FrameworkRunResult, TestFramework
from .reporting import ReportGenerator
from .security import SecurityRunSummary, SecurityTests, run_all, run_checks
from .testing import (
    ControllerUtils,
    CoverageAnalyzer,
    DOMUtils,
    IntegrationUtils,
    MockContextProvider,
    MockElement,
    NestUtils,
    PerformanceTester,
    ReactUtils,
)

__all__ = [
    "__version__",
    # Security
    "SecurityTests",
    "SecurityRunSummary",
    "run_all",
    "run_checks",
    # Analysis and configuration
    "ProjectAnalyzer",
    "ProjectAnalysis",
    "ProjectType",
    "AutoConfig",
    "RecommendedConfig",
    "build_recommended_config",
    "FrameworkConfig",
    "load_config",
    # Runner and reports
    "TestFramework",
    "FrameworkRunResult",
    "ReportGenerator",
    "CoverageAnalyzer",
    "PerformanceTester",
    # Test utilities
    "MockGenerator",
    "AssertionHelpers",
    "MockContextProvider",
    "MockElement",
    "DOMUtils",
    "ReactUtils",
    "NestUtils",
    "ControllerUtils",
    "IntegrationUtils",
    # Exceptions
    "SecTestError",
    "ExpectationError",
]
