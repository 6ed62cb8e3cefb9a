"""Library entry point that runs the security suite and the stub reporters."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from typing import Any

from pydantic import BaseModel

from ..config import FrameworkConfig
from ..security.models import SecurityRunSummary
from ..security.suite import run_all
from ..testing.coverage import CoverageAnalyzer, CoverageResult
from ..testing.performance import PerformanceResult, PerformanceTester
from .exceptions import InvalidConfigError

logger = logging.getLogger(__name__)


class FrameworkRunResult(BaseModel):
    """Results of one TestFramework.run_all call; disabled parts stay None."""

    security: SecurityRunSummary | None = None
    coverage: CoverageResult | None = None
    performance: PerformanceResult | None = None
    duration_ms: int = 0

    @property
    def success(self) -> bool:
        """No failed check and coverage at or above its threshold."""
        if self.security is not None and self.security.failed:
            return False
        return self.coverage is None or self.coverage.meets_threshold


class CustomTestResult(BaseModel):
    name: str
    passed: bool
    result: Any = None
    error: str | None = None


class TestFramework:
    """Runs the enabled parts of the toolkit.

    Custom tests are plain callables registered with ``add_custom_test``;
    a test fails when it raises, and its return value is kept otherwise.
    """

    __test__ = False

    def __init__(self, config: FrameworkConfig | None = None):
        self.config = config or FrameworkConfig()
        self._custom_tests: dict[str, Callable[[], Any]] = {}

    def configure(self, **settings: Any) -> FrameworkConfig:
        """Replace config fields by name and return the new config.

        Raises:
            InvalidConfigError: If a setting is not a FrameworkConfig field
            pydantic.ValidationError: If a value does not fit its field
        """
        unknown = set(settings) - set(FrameworkConfig.model_fields)
        if unknown:
            raise InvalidConfigError(f"Unknown framework settings: {', '.join(sorted(unknown))}")
        self.config = self.config.model_validate({**self.config.model_dump(), **settings})
        return self.config

    def add_custom_test(self, name: str, test: Callable[[], Any]) -> None:
        if name in self._custom_tests:
            logger.warning(f"Replacing custom test '{name}'")
        self._custom_tests[name] = test

    @property
    def custom_tests(self) -> list[str]:
        return list(self._custom_tests)

    def run_custom_tests(self) -> list[CustomTestResult]:
        results = []
        for name, test in self._custom_tests.items():
            try:
                value = test()
            except Exception as e:
                logger.error(f"Custom test '{name}' failed: {e}", extra={"check": name, "error": str(e)})
                results.append(CustomTestResult(name=name, passed=False, error=str(e)))
            else:
                results.append(CustomTestResult(name=name, passed=True, result=value))
        return results

    def run_all(self) -> FrameworkRunResult:
        started = time.perf_counter()
        result = FrameworkRunResult()
        if self.config.security_enabled:
            result.security = run_all(self.config.check_options or None)
        if self.config.coverage_enabled:
            result.coverage = CoverageAnalyzer().analyze_coverage(self.config.coverage_threshold)
        if self.config.performance_enabled:
            result.performance = PerformanceTester().run_load_tests()
        result.duration_ms = round((time.perf_counter() - started) * 1000)
        logger.info(f"Test run finished in {result.duration_ms}ms")
        return result

