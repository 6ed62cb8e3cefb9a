"""Helpers shared by the security check modules."""

from collections.abc import Iterable, Mapping
from typing import Any

from ..models import SecurityCheckResult, SubCheckResult

CheckOptions = Mapping[str, Any] | None


def combine_sub_checks(message: str, sub_checks: Iterable[SubCheckResult]) -> SecurityCheckResult:
    """Fold sub-check verdicts into one result.

    The result is vulnerable when any sub-check is, and ``details`` maps the
    name of each failing sub-check to its verdict.
    """
    result = SecurityCheckResult(message=message)
    for sub_check in sub_checks:
        if sub_check.vulnerable:
            result.vulnerable = True
            result.details[sub_check.name] = sub_check.model_dump()
    return result


def simulated(name: str, message: str) -> SubCheckResult:
    """A sub-check with no fixture to test, reported as passing."""
    return SubCheckResult(name=name, vulnerable=False, message=message)


def verdict(name: str, vulnerable: bool, failed: str, passed: str) -> SubCheckResult:
    return SubCheckResult(name=name, vulnerable=vulnerable, message=failed if vulnerable else passed)


def extension_of(filename: str) -> str:
    return filename.rsplit(".", 1)[-1].lower()
