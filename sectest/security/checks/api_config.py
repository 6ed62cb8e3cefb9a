"""API configuration checks: security headers, rate limiting and error handling."""

import logging
from typing import Any

from ... import constants
from .. import payloads
from ..models import SecurityCheckResult
from .common import CheckOptions

logger = logging.getLogger(__name__)


def test_security_headers(options: CheckOptions = None) -> SecurityCheckResult:
    """Compare the simulated response headers with the required set."""
    missing = [
        header
        for header in payloads.REQUIRED_SECURITY_HEADERS
        if not payloads.SIMULATED_RESPONSE_HEADERS.get(header)
    ]
    return SecurityCheckResult(
        vulnerable=bool(missing),
        message="Security headers test completed",
        details={"missing_headers": missing},
    )


def test_rate_limiting(options: CheckOptions = None) -> SecurityCheckResult:
    """Count simulated requests until the limiter would block.

    Reads ``attempts``, ``time_window`` (ms) and ``max_requests`` from
    ``options``; falsy values fall back to the defaults. The check is
    vulnerable when ``attempts`` never exceeds ``max_requests``.
    """
    options = options or {}
    attempts = options.get("attempts") or constants.DEFAULT_RATE_LIMIT_ATTEMPTS
    time_window = options.get("time_window") or constants.DEFAULT_RATE_LIMIT_WINDOW_MS
    max_requests = options.get("max_requests") or constants.DEFAULT_RATE_LIMIT_MAX_REQUESTS

    rate_limited = False
    blocked_after = 0
    for i in range(attempts):
        if i >= max_requests:
            rate_limited = True
            blocked_after = max_requests
            break

    details = {
        "rate_limited": rate_limited,
        "blocked_after": blocked_after,
        "time_window": time_window,
    }
    if not rate_limited:
        logger.debug(
            f"No limit reached after {attempts} attempts",
            extra={"check": "rate_limiting", "vulnerable": True},
        )
        return SecurityCheckResult(
            vulnerable=True, message="Rate limiting not properly implemented", details=details
        )
    return SecurityCheckResult(vulnerable=False, message="Rate limiting test completed", details=details)


# (error type, message, whether the response may include the message)
ERROR_DISCLOSURE_CASES = (
    ("database_error", "Database connection failed", False),
    ("validation_error", "Invalid input", True),
    ("authentication_error", "Invalid credentials", False),
    ("authorization_error", "Access denied", False),
)

# Error types whose message is safe to show to clients
EXPOSABLE_ERROR_TYPES = frozenset({"validation_error"})


def handle_error(error: Exception, error_type: str) -> dict[str, Any]:
    """Simulated application error handler."""
    response: dict[str, Any] = {"message": "An error occurred", "type": error_type}
    if error_type in EXPOSABLE_ERROR_TYPES:
        response["details"] = str(error)
    return response


def test_error_handling(options: CheckOptions = None) -> SecurityCheckResult:
    issues: list[str] = []
    for error_type, message, should_expose in ERROR_DISCLOSURE_CASES:
        response = handle_error(RuntimeError(message), error_type)
        exposed = bool(response.get("details"))
        if should_expose and not exposed:
            issues.append(f"Error details not exposed for {error_type}")
        if not should_expose and exposed:
            issues.append(f"Sensitive error details exposed for {error_type}")

    return SecurityCheckResult(
        vulnerable=bool(issues),
        message="Error handling test completed",
        details={"issues": issues},
    )
