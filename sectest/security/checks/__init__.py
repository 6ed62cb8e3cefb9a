"""The sixteen security check functions, grouped by category."""

from .api_config import test_error_handling, test_rate_limiting, test_security_headers
from .auth import (
    test_authentication,
    test_authorization,
    test_session_security,
    test_token_management,
)
from .data_handling import (
    test_dependency_vulnerabilities,
    test_encryption,
    test_environment_security,
    test_file_upload_security,
    test_logging_security,
)
from .injection import (
    test_csrf_protection,
    test_input_validation,
    test_sql_injection,
    test_xss_prevention,
)

__all__ = [
    # Injection
    "test_xss_prevention",
    "test_sql_injection",
    "test_csrf_protection",
    "test_input_validation",
    # Identity
    "test_authentication",
    "test_authorization",
    "test_session_security",
    "test_token_management",
    # Data handling
    "test_file_upload_security",
    "test_encryption",
    "test_dependency_vulnerabilities",
    "test_environment_security",
    "test_logging_security",
    # API configuration
    "test_security_headers",
    "test_rate_limiting",
    "test_error_handling",
]
