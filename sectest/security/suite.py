"""Security check aggregator.

Runs the registered checks in a fixed order and folds their verdicts into a
SecurityRunSummary. A check that raises is recorded as failed with the
exception message; the run always continues.
"""

import logging
from collections.abc import Callable, Iterable, Mapping
from datetime import datetime, timezone
from typing import Any

from .. import constants
from ..core.exceptions import UnknownCheckError
from . import checks
from .models import SecurityCheckResult, SecurityRunSummary, VulnerabilityEntry

logger = logging.getLogger(__name__)

CheckFunction = Callable[..., SecurityCheckResult]

# Order determines report ordering only
SECURITY_CHECKS: tuple[tuple[str, CheckFunction], ...] = (
    ("XSS Prevention", checks.test_xss_prevention),
    ("SQL Injection", checks.test_sql_injection),
    ("CSRF Protection", checks.test_csrf_protection),
    ("Authentication", checks.test_authentication),
    ("Authorization", checks.test_authorization),
    ("Input Validation", checks.test_input_validation),
    ("File Upload Security", checks.test_file_upload_security),
    ("Session Security", checks.test_session_security),
    ("Encryption", checks.test_encryption),
    ("Dependency Vulnerabilities", checks.test_dependency_vulnerabilities),
    ("Environment Security", checks.test_environment_security),
    ("Logging Security", checks.test_logging_security),
    ("Security Headers", checks.test_security_headers),
    ("Rate Limiting", checks.test_rate_limiting),
    ("Token Management", checks.test_token_management),
    ("Error Handling", checks.test_error_handling),
)

CHECKS_BY_NAME: dict[str, CheckFunction] = dict(SECURITY_CHECKS)

FRONTEND_CHECKS = ("XSS Prevention", "CSRF Protection", "Input Validation")
BACKEND_CHECKS = ("SQL Injection", "Security Headers", "Rate Limiting", "Error Handling")
DATABASE_CHECKS = ("SQL Injection", "Input Validation", "Session Security")

SECURITY_RECOMMENDATIONS = [
    "Implement input validation for all user inputs",
    "Use parameterized queries to prevent SQL injection",
    "Enable CSRF protection on all forms",
    "Implement proper authentication and authorization",
    "Use HTTPS for all communications",
    "Regularly update dependencies",
    "Implement proper error handling",
    "Use security headers",
    "Implement rate limiting",
    "Use secure session management",
]


def _run(selected: Iterable[tuple[str, CheckFunction]], options: Mapping[str, Any] | None) -> SecurityRunSummary:
    summary = SecurityRunSummary()
    for name, check in selected:
        try:
            result = check(options)
        except Exception as e:
            logger.error(f"Security check '{name}' raised: {e}", extra={"check": name, "error": str(e)})
            summary.failed += 1
            summary.vulnerabilities.append(VulnerabilityEntry(type=name, error=str(e)))
            continue

        if result.vulnerable:
            summary.failed += 1
            summary.vulnerabilities.append(VulnerabilityEntry(type=name, details=result))
        else:
            summary.passed += 1
        logger.debug(f"{name}: {result.message}", extra={"check": name, "vulnerable": result.vulnerable})

    logger.info(
        f"Security run finished: {summary.passed} passed, {summary.failed} failed",
        extra={"passed": summary.passed, "failed": summary.failed},
    )
    return summary


def run_all(options: Mapping[str, Any] | None = None) -> SecurityRunSummary:
    """Run every registered check.

    Invariants: ``passed + failed`` equals the number of checks and
    ``len(vulnerabilities) == failed``.
    """
    return _run(SECURITY_CHECKS, options)


def run_checks(names: Iterable[str], options: Mapping[str, Any] | None = None) -> SecurityRunSummary:
    """Run the named checks in the order given, skipping repeats.

    Raises:
        UnknownCheckError: If a name is not registered
    """
    selected: list[tuple[str, CheckFunction]] = []
    for name in dict.fromkeys(names):
        if name not in CHECKS_BY_NAME:
            raise UnknownCheckError(f"Unknown security check: {name}")
        selected.append((name, CHECKS_BY_NAME[name]))
    return _run(selected, options)


def build_security_report(
    summary: SecurityRunSummary,
    include_details: bool = True,
    include_recommendations: bool = True,
) -> dict[str, Any]:
    """Project a run summary into the report mapping used by ReportGenerator."""
    return {
        "type": "security",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "summary": {
            "totalTests": summary.total,
            "passed": summary.passed,
            "failed": summary.failed,
            "vulnerabilities": len(summary.vulnerabilities),
        },
        "details": [entry.describe() for entry in summary.vulnerabilities] if include_details else [],
        "recommendations": list(SECURITY_RECOMMENDATIONS) if include_recommendations else [],
        "metadata": {
            "framework": constants.FRAMEWORK_NAME,
            "version": constants.FRAMEWORK_VERSION,
        },
    }


class SecurityTests:
    """Namespace bundling the check functions with the aggregator."""

    test_xss_prevention = staticmethod(checks.test_xss_prevention)
    test_sql_injection = staticmethod(checks.test_sql_injection)
    test_csrf_protection = staticmethod(checks.test_csrf_protection)
    test_authentication = staticmethod(checks.test_authentication)
    test_authorization = staticmethod(checks.test_authorization)
    test_input_validation = staticmethod(checks.test_input_validation)
    test_file_upload_security = staticmethod(checks.test_file_upload_security)
    test_session_security = staticmethod(checks.test_session_security)
    test_encryption = staticmethod(checks.test_encryption)
    test_dependency_vulnerabilities = staticmethod(checks.test_dependency_vulnerabilities)
    test_environment_security = staticmethod(checks.test_environment_security)
    test_logging_security = staticmethod(checks.test_logging_security)
    test_security_headers = staticmethod(checks.test_security_headers)
    test_rate_limiting = staticmethod(checks.test_rate_limiting)
    test_token_management = staticmethod(checks.test_token_management)
    test_error_handling = staticmethod(checks.test_error_handling)

    run_all = staticmethod(run_all)
    run_checks = staticmethod(run_checks)
    build_report = staticmethod(build_security_report)

    __test__ = False
