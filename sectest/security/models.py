"""Pydantic models for security check results.

Every check function returns a SecurityCheckResult. Composite checks build
theirs from a handful of SubCheckResult entries; the aggregator wraps
failing checks into VulnerabilityEntry records inside a SecurityRunSummary.
"""

from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field


def utc_timestamp() -> str:
    """Current time as an ISO-8601 string with millisecond precision."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def percent_score(passed: int, total: int) -> int:
    """Whole-number percentage, halves rounded up; 0 when there is nothing to score."""
    if total == 0:
        return 0
    return math.floor(passed / total * 100 + 0.5)


class SubCheckResult(BaseModel):
    """Verdict of one simulated sub-check inside a composite check.

    Attributes:
        name: Display name such as "Multi-Factor Authentication".
        vulnerable: True when the sub-check flagged a weakness.
        message: Human-readable outcome.
    """

    name: str
    vulnerable: bool
    message: str


class PayloadResult(BaseModel):
    """Outcome of running one fixture payload through a sanitizer."""

    payload: str
    sanitized: str
    vulnerable: bool
    message: str


class SecurityCheckResult(BaseModel):
    """Verdict returned by every security check function.

    Attributes:
        vulnerable: True when at least one fixture was not neutralized.
        message: Non-empty summary of the outcome.
        details: Check-specific data (failing payloads, failing sub-checks,
            missing headers, issues). Empty when there is nothing to add.
    """

    vulnerable: bool = False
    message: str
    details: dict[str, Any] = Field(default_factory=dict)


class VulnerabilityEntry(BaseModel):
    """A failing check as recorded by the aggregator.

    Exactly one of ``details`` or ``error`` is set: ``details`` when the
    check returned a vulnerable verdict, ``error`` when it raised.
    """

    type: str
    details: SecurityCheckResult | None = None
    error: str | None = None

    def describe(self) -> str:
        """One-line description used in report detail lists."""
        if self.error:
            reason = self.error
        elif self.details is not None and self.details.message:
            reason = self.details.message
        else:
            reason = "Vulnerability detected"
        return f"{self.type}: {reason}"


class SecurityRunSummary(BaseModel):
    """Result of running a set of security checks."""

    passed: int = 0
    failed: int = 0
    vulnerabilities: list[VulnerabilityEntry] = Field(default_factory=list)
    timestamp: str = Field(default_factory=utc_timestamp)

    @property
    def total(self) -> int:
        return self.passed + self.failed

    @property
    def score(self) -> int:
        """Percentage of checks that passed, rounded to an integer."""
        return percent_score(self.passed, self.total)
