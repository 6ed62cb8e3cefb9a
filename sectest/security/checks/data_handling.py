"""Data handling checks: uploads, encryption, dependencies, environment and logs."""

import logging

from packaging.specifiers import InvalidSpecifier, SpecifierSet
from packaging.version import InvalidVersion, Version

from ... import constants
from .. import payloads
from ..models import SecurityCheckResult, SubCheckResult
from .common import CheckOptions, combine_sub_checks, extension_of, simulated, verdict

logger = logging.getLogger(__name__)


# =============================================================================
# File Uploads
# =============================================================================

def _file_type_validation() -> SubCheckResult:
    accepted = any(ext in payloads.ALLOWED_UPLOAD_TYPES for ext in payloads.MALICIOUS_UPLOAD_TYPES)
    return verdict(
        "File Type Validation", accepted,
        "Malicious file types accepted", "File type validation working correctly",
    )


def _file_size_validation() -> SubCheckResult:
    accepted = any(size <= constants.MAX_UPLOAD_FILE_SIZE for size in payloads.OVERSIZED_UPLOADS)
    return verdict(
        "File Size Validation", accepted,
        "Large files accepted", "File size validation working correctly",
    )


def _malicious_file_detection() -> SubCheckResult:
    # Vulnerable when nothing is detected
    detected = any(
        extension_of(name) in payloads.BLOCKED_EXTENSIONS for name in payloads.MALICIOUS_FILENAMES
    )
    return SubCheckResult(
        name="Malicious File Detection",
        vulnerable=not detected,
        message="Malicious files detected" if detected else "Malicious file detection failed",
    )


def _upload_path_security() -> SubCheckResult:
    traversal = any(".." in path or "\\" in path for path in payloads.TRAVERSAL_PATHS)
    return verdict(
        "Upload Path Security", traversal,
        "Path traversal possible", "Upload path security working correctly",
    )


def test_file_upload_security(options: CheckOptions = None) -> SecurityCheckResult:
    """Type, size, detection, virus scanning and upload path sub-checks.

    The traversal fixtures always contain ``..``, so the upload path
    sub-check keeps this check vulnerable.
    """
    return combine_sub_checks(
        "File upload security test completed",
        [
            _file_type_validation(),
            _file_size_validation(),
            _malicious_file_detection(),
            simulated("Virus Scanning", "Virus scanning implemented"),
            _upload_path_security(),
        ],
    )


# =============================================================================
# Encryption
# =============================================================================

def _data_encryption() -> SubCheckResult:
    weak_in_use = any(alg in payloads.STRONG_ALGORITHMS for alg in payloads.WEAK_ALGORITHMS)
    return verdict(
        "Data Encryption", weak_in_use,
        "Weak encryption algorithms used", "Strong encryption algorithms used",
    )


def test_encryption(options: CheckOptions = None) -> SecurityCheckResult:
    return combine_sub_checks(
        "Encryption test completed",
        [
            _data_encryption(),
            simulated("Key Management", "Key management secure"),
            simulated("Algorithm Strength", "Strong algorithms used"),
            simulated("Transport Encryption", "Transport encryption enabled"),
            simulated("Storage Encryption", "Storage encryption enabled"),
        ],
    )


# =============================================================================
# Dependencies
# =============================================================================

def find_vulnerable_dependencies(
    installed: dict[str, str],
    advisories: tuple[tuple[str, str, str], ...],
) -> list[dict[str, str]]:
    """Match pinned versions against advisory ranges.

    Args:
        installed: Package name to pinned version
        advisories: (package, affected specifier, advisory id) triples

    Returns:
        One entry per installed package that falls inside an affected range.
        Unparseable versions or ranges are skipped with a warning.
    """
    findings: list[dict[str, str]] = []
    for package, affected, advisory_id in advisories:
        pinned = installed.get(package)
        if pinned is None:
            continue
        try:
            in_range = Version(pinned) in SpecifierSet(affected)
        except (InvalidVersion, InvalidSpecifier) as e:
            logger.warning(f"Skipping advisory {advisory_id} for {package}: {e}")
            continue
        if in_range:
            findings.append(
                {"package": package, "version": pinned, "affected": affected, "advisory": advisory_id}
            )
    return findings


def test_dependency_vulnerabilities(options: CheckOptions = None) -> SecurityCheckResult:
    """Check the simulated dependency inventory against known advisories."""
    findings = find_vulnerable_dependencies(
        payloads.INSTALLED_DEPENDENCIES, payloads.DEPENDENCY_ADVISORIES
    )
    if findings:
        return SecurityCheckResult(
            vulnerable=True,
            message=f"{len(findings)} vulnerable dependencies found",
            details={"vulnerable_dependencies": findings},
        )
    return SecurityCheckResult(
        vulnerable=False,
        message="Dependency vulnerability test completed",
        details={"checked": len(payloads.INSTALLED_DEPENDENCIES)},
    )


# =============================================================================
# Environment
# =============================================================================

def _environment_variables() -> SubCheckResult:
    exposed = any(name in payloads.SENSITIVE_ENV_VARS for name in payloads.EXPOSED_ENV_VARS)
    return verdict(
        "Environment Variables", exposed,
        "Sensitive environment variables exposed", "Environment variables secure",
    )


def test_environment_security(options: CheckOptions = None) -> SecurityCheckResult:
    return combine_sub_checks(
        "Environment security test completed",
        [
            _environment_variables(),
            simulated("Secrets Management", "Secrets management secure"),
            simulated("Configuration Security", "Configuration security verified"),
            simulated("Infrastructure Security", "Infrastructure security verified"),
            simulated("Deployment Security", "Deployment security verified"),
        ],
    )


# =============================================================================
# Logging
# =============================================================================

def _sensitive_data_logging() -> SubCheckResult:
    logged = any(field in payloads.LOGGED_FIELDS for field in payloads.SENSITIVE_LOG_FIELDS)
    return verdict(
        "Sensitive Data Logging", logged,
        "Sensitive data being logged", "No sensitive data in logs",
    )


def test_logging_security(options: CheckOptions = None) -> SecurityCheckResult:
    return combine_sub_checks(
        "Logging security test completed",
        [
            _sensitive_data_logging(),
            simulated("Log Access Control", "Log access control implemented"),
            simulated("Log Retention", "Log retention policy enforced"),
            simulated("Log Encryption", "Log encryption enabled"),
            simulated("Log Monitoring", "Log monitoring active"),
        ],
    )
