"""Identity checks: authentication, authorization, sessions and tokens."""

import logging

from ... import constants
from .. import payloads
from ..models import SecurityCheckResult, SubCheckResult
from .common import CheckOptions, combine_sub_checks, simulated, verdict

logger = logging.getLogger(__name__)


# =============================================================================
# Authentication
# =============================================================================

def _password_strength() -> SubCheckResult:
    # Weak fixtures must never satisfy the strong-password policy
    passes_policy = any(payloads.STRONG_PASSWORD_RE.fullmatch(pwd) for pwd in payloads.WEAK_PASSWORDS)
    return verdict(
        "Password Strength", passes_policy,
        "Weak passwords detected", "Password strength requirements met",
    )


def _jwt_validation() -> SubCheckResult:
    header, payload, signature = payloads.SAMPLE_JWT.split(".")
    well_formed = all((header, payload, signature))
    return verdict(
        "JWT Validation", not well_formed,
        "JWT validation failed", "JWT validation working correctly",
    )


def _multi_factor_auth() -> SubCheckResult:
    return SubCheckResult(
        name="Multi-Factor Authentication", vulnerable=True, message="MFA not implemented"
    )


def test_authentication(options: CheckOptions = None) -> SecurityCheckResult:
    """Password policy, JWT format, sessions, MFA and brute force sub-checks.

    MFA is never implemented in the simulated application, so this check
    always reports vulnerable.
    """
    return combine_sub_checks(
        "Authentication test completed",
        [
            _password_strength(),
            _jwt_validation(),
            simulated("Session Management", "Session management secure"),
            _multi_factor_auth(),
            simulated("Brute Force Protection", "Rate limiting implemented"),
        ],
    )


# =============================================================================
# Authorization
# =============================================================================

ROLE_PERMISSIONS = {
    "user": ("read",),
    "admin": ("read", "write", "delete"),
    "moderator": ("read", "write"),
}


def _role_based_access() -> SubCheckResult:
    # Only admin may delete
    escalated = [role for role, perms in ROLE_PERMISSIONS.items() if "delete" in perms and role != "admin"]
    return verdict(
        "Role-Based Access Control", bool(escalated),
        "RBAC grants delete to non-admin roles", "RBAC properly implemented",
    )


def test_authorization(options: CheckOptions = None) -> SecurityCheckResult:
    return combine_sub_checks(
        "Authorization test completed",
        [
            _role_based_access(),
            simulated("Permission Checks", "Permission checks working correctly"),
            simulated("Resource Access Control", "Resource access properly controlled"),
            simulated("Privilege Escalation Protection", "Privilege escalation protection active"),
            simulated("Access Control", "Access control mechanisms secure"),
        ],
    )


# =============================================================================
# Sessions
# =============================================================================

def _session_timeout() -> SubCheckResult:
    # A session started 45 minutes ago must be past the timeout
    session_age_ms = 45 * 60 * 1000
    expired = session_age_ms > constants.SESSION_TIMEOUT_MS
    return SubCheckResult(
        name="Session Timeout",
        vulnerable=not expired,
        message="Session timeout working correctly" if expired else "Session timeout not enforced",
    )


def _secure_cookies() -> SubCheckResult:
    attrs = payloads.SECURE_COOKIE_ATTRIBUTES
    secure = bool(attrs["httpOnly"] and attrs["secure"] and attrs["sameSite"] == "strict")
    return SubCheckResult(
        name="Secure Cookies",
        vulnerable=not secure,
        message="Secure cookies configured" if secure else "Insecure cookie configuration",
    )


def test_session_security(options: CheckOptions = None) -> SecurityCheckResult:
    return combine_sub_checks(
        "Session security test completed",
        [
            _session_timeout(),
            simulated("Session Regeneration", "Session regeneration implemented"),
            _secure_cookies(),
            simulated("Session Storage", "Session storage secure"),
            simulated("Session Hijacking Protection", "Session hijacking protection active"),
        ],
    )


# =============================================================================
# Tokens
# =============================================================================

def validate_token(token: str) -> bool:
    """Simulated validator: only the literal fixture token is valid."""
    return token == payloads.VALID_TOKEN


def _refresh_token(token: str) -> bool:
    # A refreshed token must still validate
    return validate_token(token)


def _revoke_token(token: str) -> bool:
    revoked = {token}
    return token in revoked


def test_token_management(options: CheckOptions = None) -> SecurityCheckResult:
    """Validate the fixture tokens and simulate refresh and revocation."""
    issues: list[str] = []
    for token in payloads.TEST_TOKENS:
        is_valid = validate_token(token)
        if token == payloads.VALID_TOKEN and not is_valid:
            issues.append(f"Valid token rejected: {token}")
        elif token != payloads.VALID_TOKEN and is_valid:
            issues.append(f"Invalid token accepted: {token}")

    if not _refresh_token(payloads.VALID_TOKEN):
        issues.append("Token refresh mechanism not working")
    if not _revoke_token(payloads.VALID_TOKEN):
        issues.append("Token revocation mechanism not working")

    if issues:
        logger.debug("Token management issues found", extra={"check": "tokens", "error": issues})
    return SecurityCheckResult(
        vulnerable=bool(issues),
        message="Token management test completed",
        details={"issues": issues},
    )
