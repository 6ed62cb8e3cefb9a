"""Canned security checks and the aggregator that runs them."""

from .models import (
    PayloadResult,
    SecurityCheckResult,
    SecurityRunSummary,
    SubCheckResult,
    VulnerabilityEntry,
)
from .suite import (
    BACKEND_CHECKS,
    DATABASE_CHECKS,
    FRONTEND_CHECKS,
    SECURITY_CHECKS,
    SECURITY_RECOMMENDATIONS,
    SecurityTests,
    build_security_report,
    run_all,
    run_checks,
)

__all__ = [
    # Models
    "PayloadResult",
    "SecurityCheckResult",
    "SecurityRunSummary",
    "SubCheckResult",
    "VulnerabilityEntry",
    # Aggregator
    "SECURITY_CHECKS",
    "FRONTEND_CHECKS",
    "BACKEND_CHECKS",
    "DATABASE_CHECKS",
    "SECURITY_RECOMMENDATIONS",
    "SecurityTests",
    "build_security_report",
    "run_all",
    "run_checks",
]
