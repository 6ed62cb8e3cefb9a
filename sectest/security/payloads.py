"""Fixture catalog for the security checks.

The checks never inspect caller data: each one runs the fixtures defined
here through a local sanitizer or validator and reports whether any of
them slipped through.
"""

import re

# =============================================================================
# Injection Payloads
# =============================================================================

XSS_PAYLOADS = (
    '<script>alert("xss")</script>',
    'javascript:alert("xss")',
    "<img src=\"x\" onerror=\"alert('xss')\">",
    "<iframe src=\"javascript:alert('xss')\"></iframe>",
    "<svg onload=\"alert('xss')\"></svg>",
    '"><script>alert("xss")</script>',
    "'><script>alert(\"xss\")</script>",
    '"><img src=x onerror=alert("xss")>',
    "'><img src=x onerror=alert(\"xss\")>",
)

# Substrings that mark an XSS payload as still dangerous after sanitizing
XSS_MARKERS = ("<script>", "javascript:", "onerror=", "onload=")

SQL_INJECTION_PAYLOADS = (
    "'; DROP TABLE users; --",
    "' OR '1'='1",
    "' OR 1=1--",
    "'; INSERT INTO users VALUES ('hacker', 'password'); --",
    "' UNION SELECT * FROM users--",
    "'; EXEC xp_cmdshell('dir'); --",
    "' AND 1=CONVERT(int, (SELECT @@version))--",
)

SQL_INJECTION_MARKERS = ("DROP TABLE", "OR 1=1", "UNION SELECT", "EXEC")

# Smaller sets used by the input validation sub-checks
SQL_VALIDATION_INPUTS = ("'; DROP TABLE users; --", "' OR 1=1--")
XSS_VALIDATION_INPUTS = ('<script>alert("xss")</script>', 'javascript:alert("xss")')


# =============================================================================
# Credentials
# =============================================================================

WEAK_PASSWORDS = ("password", "123456", "qwerty", "admin")
STRONG_PASSWORDS = ("SecurePass123!", "MyP@ssw0rd2024")

STRONG_PASSWORD_RE = re.compile(
    r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d)(?=.*[@$!%*?&#])[A-Za-z\d@$!%*?&#]{8,}$"
)

VALID_EMAILS = ("test@example.com", "user.name@domain.co.uk")
INVALID_EMAILS = ("invalid-email", "@domain.com", "user@")

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

SAMPLE_JWT = (
    "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9"
    ".eyJzdWIiOiIxMjM0NTY3ODkwIiwibmFtZSI6IkpvaG4gRG9lIiwiaWF0IjoxNTE2MjM5MDIyfQ"
    ".SflKxwRJSMeKKF2QT4fwpMeJf36POk6yJV_adQssw5c"
)

VALID_TOKEN = "valid.jwt.token"
TEST_TOKENS = (
    VALID_TOKEN,
    "expired.jwt.token",
    "invalid.jwt.token",
    "malformed.jwt.token",
)


# =============================================================================
# File Uploads
# =============================================================================

ALLOWED_UPLOAD_TYPES = ("jpg", "png", "pdf", "doc")
MALICIOUS_UPLOAD_TYPES = ("exe", "bat", "sh", "php", "js")
MALICIOUS_FILENAMES = ("virus.exe", "malware.bat", "script.js", "shell.php")
BLOCKED_EXTENSIONS = ("exe", "bat", "js", "php")

# Upload size fixtures in bytes (6MB and 10MB)
OVERSIZED_UPLOADS = (6 * 1024 * 1024, 10 * 1024 * 1024)

TRAVERSAL_PATHS = (
    "../../../etc/passwd",
    "..\\..\\..\\windows\\system32\\config\\sam",
    "....//....//....//etc/passwd",
)


# =============================================================================
# Environment, Logging and Encryption
# =============================================================================

SENSITIVE_ENV_VARS = ("API_KEY", "DATABASE_PASSWORD", "JWT_SECRET")
EXPOSED_ENV_VARS = ("API_KEY",)

SENSITIVE_LOG_FIELDS = ("password", "credit_card", "ssn", "api_key")
LOGGED_FIELDS = ("user_id", "email", "action")

STRONG_ALGORITHMS = ("AES-256", "ChaCha20", "RSA-2048")
WEAK_ALGORITHMS = ("DES", "MD5", "SHA1")


# =============================================================================
# HTTP Headers
# =============================================================================

REQUIRED_SECURITY_HEADERS = {
    "X-Frame-Options": "DENY",
    "X-Content-Type-Options": "nosniff",
    "X-XSS-Protection": "1; mode=block",
    "Strict-Transport-Security": "max-age=31536000; includeSubDomains",
    "Content-Security-Policy": "default-src 'self'",
    "Referrer-Policy": "strict-origin-when-cross-origin",
}

# Headers returned by the simulated response
SIMULATED_RESPONSE_HEADERS = dict(REQUIRED_SECURITY_HEADERS)

SECURE_COOKIE_ATTRIBUTES = {"httpOnly": True, "secure": True, "sameSite": "strict"}


# =============================================================================
# Dependencies
# =============================================================================

# Pinned versions of the simulated application's dependencies
INSTALLED_DEPENDENCIES = {
    "lodash": "4.17.21",
    "express": "4.19.2",
    "jsonwebtoken": "9.0.0",
    "minimist": "1.2.8",
}

# Known advisories: package, affected range, identifier
DEPENDENCY_ADVISORIES = (
    ("lodash", "<4.17.21", "CVE-2021-23337"),
    ("express", "<4.19.2", "CVE-2024-29041"),
    ("jsonwebtoken", "<9.0.0", "CVE-2022-23529"),
    ("minimist", "<1.2.6", "CVE-2021-44906"),
)


# =============================================================================
# Sanitizers
# =============================================================================

_HTML_ENTITIES = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&#x27;"),
    ("/", "&#x2F;"),
)

# Applied in order; stripping quotes first can join characters into "--"
_SQL_STRIP_STEPS = (
    re.compile(r"['\";]"),
    re.compile(r"--"),
    re.compile(r"/\*"),
    re.compile(r"\*/"),
)


def encode_html_entities(value: str, encode_slash: bool = True) -> str:
    """Basic HTML entity encoding. ``&`` is replaced first."""
    for char, entity in _HTML_ENTITIES:
        if char == "/" and not encode_slash:
            continue
        value = value.replace(char, entity)
    return value


def strip_sql_metacharacters(value: str) -> str:
    """Remove quotes, semicolons and comment markers, then lower-case."""
    for pattern in _SQL_STRIP_STEPS:
        value = pattern.sub("", value)
    return value.lower()
