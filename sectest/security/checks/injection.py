"""Injection-class checks: XSS, SQL injection, CSRF and input validation.

Each check runs the canned fixtures from ``payloads`` through its own
sanitizer. The ``options`` argument is accepted for every check, but only
the CSRF check reads it (``options["form"]``).
"""

import logging

from .. import payloads
from ..models import PayloadResult, SecurityCheckResult, SubCheckResult
from .common import CheckOptions, combine_sub_checks, extension_of, verdict

logger = logging.getLogger(__name__)

# Form attribute and input names that count as a CSRF token
CSRF_TOKEN_ATTRIBUTE = "data-csrf-token"
CSRF_TOKEN_SELECTORS = ('input[name="csrf_token"]', 'input[name="_token"]')


# =============================================================================
# XSS
# =============================================================================

def _probe_xss_payload(payload: str) -> PayloadResult:
    sanitized = payloads.encode_html_entities(payload)
    vulnerable = any(marker in sanitized for marker in payloads.XSS_MARKERS)
    return PayloadResult(
        payload=payload,
        sanitized=sanitized,
        vulnerable=vulnerable,
        message="XSS vulnerability detected" if vulnerable else "XSS prevention working",
    )


def test_xss_prevention(options: CheckOptions = None) -> SecurityCheckResult:
    """Encode each XSS fixture and flag any that keeps an executable marker.

    Entity encoding leaves ``javascript:`` untouched, so the shipped
    fixtures always report vulnerable.
    """
    failing = [r for r in map(_probe_xss_payload, payloads.XSS_PAYLOADS) if r.vulnerable]
    logger.debug("XSS probe finished", extra={"check": "xss", "vulnerable": bool(failing)})
    return SecurityCheckResult(
        vulnerable=bool(failing),
        message="XSS prevention test completed",
        details={"payloads": [r.model_dump() for r in failing]},
    )


# =============================================================================
# SQL Injection
# =============================================================================

def _probe_sql_payload(payload: str) -> PayloadResult:
    sanitized = payloads.strip_sql_metacharacters(payload)
    vulnerable = any(marker in sanitized for marker in payloads.SQL_INJECTION_MARKERS)
    return PayloadResult(
        payload=payload,
        sanitized=sanitized,
        vulnerable=vulnerable,
        message=(
            "SQL injection vulnerability detected"
            if vulnerable
            else "SQL injection prevention working"
        ),
    )


def test_sql_injection(options: CheckOptions = None) -> SecurityCheckResult:
    """Strip SQL metacharacters from each fixture and look for upper-case keywords."""
    failing = [r for r in map(_probe_sql_payload, payloads.SQL_INJECTION_PAYLOADS) if r.vulnerable]
    logger.debug("SQL injection probe finished", extra={"check": "sql", "vulnerable": bool(failing)})
    return SecurityCheckResult(
        vulnerable=bool(failing),
        message="SQL injection test completed",
        details={"payloads": [r.model_dump() for r in failing]},
    )


# =============================================================================
# CSRF
# =============================================================================

def _form_has_csrf_token(form) -> bool:
    if form is None:
        return False
    if form.has_attribute(CSRF_TOKEN_ATTRIBUTE):
        return True
    return any(form.query_selector(selector) is not None for selector in CSRF_TOKEN_SELECTORS)


def test_csrf_protection(options: CheckOptions = None) -> SecurityCheckResult:
    """Check ``options["form"]`` for a CSRF token.

    The form is any object with ``has_attribute(name)`` and
    ``query_selector(selector)``, such as ``sectest.testing.MockElement``.
    Without a form the check reports vulnerable.
    """
    form = (options or {}).get("form")
    if _form_has_csrf_token(form):
        return SecurityCheckResult(vulnerable=False, message="CSRF protection test completed")
    return SecurityCheckResult(vulnerable=True, message="CSRF token not found")


# =============================================================================
# Input Validation
# =============================================================================

def _email_validation() -> SubCheckResult:
    accepted = any(payloads.EMAIL_RE.fullmatch(email) for email in payloads.INVALID_EMAILS)
    return verdict(
        "Email Validation", accepted,
        "Invalid email validation", "Email validation working correctly",
    )


def _password_validation() -> SubCheckResult:
    weak = payloads.WEAK_PASSWORDS[:3]
    accepted = any(payloads.STRONG_PASSWORD_RE.fullmatch(pwd) for pwd in weak)
    return verdict(
        "Password Validation", accepted,
        "Weak passwords accepted", "Password validation working correctly",
    )


def _file_upload_validation() -> SubCheckResult:
    allowed = payloads.ALLOWED_UPLOAD_TYPES[:3]
    fixtures = ("script.js", "virus.exe", "malware.bat")
    accepted = any(extension_of(name) in allowed for name in fixtures)
    return verdict(
        "File Upload Validation", accepted,
        "Malicious files accepted", "File upload validation working correctly",
    )


def _sql_injection_validation() -> SubCheckResult:
    # A fixture is accepted when sanitizing leaves it unchanged
    def sanitize(value: str) -> str:
        return value.replace("'", "").replace('"', "").replace(";", "").replace("--", "")

    accepted = any(sanitize(value) == value for value in payloads.SQL_VALIDATION_INPUTS)
    return verdict(
        "SQL Injection Validation", accepted,
        "SQL injection possible", "SQL injection validation working correctly",
    )


def _xss_validation() -> SubCheckResult:
    accepted = any(
        payloads.encode_html_entities(value, encode_slash=False) == value
        for value in payloads.XSS_VALIDATION_INPUTS
    )
    return verdict("XSS Validation", accepted, "XSS possible", "XSS validation working correctly")


def test_input_validation(options: CheckOptions = None) -> SecurityCheckResult:
    return combine_sub_checks(
        "Input validation test completed",
        [
            _email_validation(),
            _password_validation(),
            _file_upload_validation(),
            _sql_injection_validation(),
            _xss_validation(),
        ],
    )
