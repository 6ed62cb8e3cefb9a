"""Constants and configuration values for sectest.

This module centralizes defaults that are shared across the analyzer,
the security checks, the reporters and the CLI. Values that users
commonly change can be overridden through environment variables.
"""

import os

# =============================================================================
# Framework Metadata
# =============================================================================

FRAMEWORK_NAME = "security-test-framework"
FRAMEWORK_VERSION = "1.0.0"


# =============================================================================
# File Locations
# =============================================================================

# Manifest read by the project analyzer
MANIFEST_FILENAME = "package.json"

# Generated configuration, written at the project root
CONFIG_FILENAME = os.environ.get("SECTEST_CONFIG_FILE", "security-test.config.js")

# Default directory for saved reports
DEFAULT_REPORT_DIR = os.environ.get("SECTEST_REPORT_DIR", "./reports")


# =============================================================================
# Thresholds
# =============================================================================

MAX_VULNERABILITIES = 0
MIN_SECURITY_SCORE = 90

# Coverage percentage below which the coverage command fails
DEFAULT_COVERAGE_THRESHOLD = int(os.environ.get("SECTEST_COVERAGE_THRESHOLD", 80))

# Largest upload accepted by the file upload checks (5MB)
MAX_UPLOAD_FILE_SIZE = 5 * 1024 * 1024

# Session timeout used by the session checks (30 minutes, in milliseconds)
SESSION_TIMEOUT_MS = 30 * 60 * 1000


# =============================================================================
# Rate Limiting Simulation
# =============================================================================

DEFAULT_RATE_LIMIT_ATTEMPTS = 100
DEFAULT_RATE_LIMIT_WINDOW_MS = 60_000
DEFAULT_RATE_LIMIT_MAX_REQUESTS = 10


# =============================================================================
# External Test Runner
# =============================================================================

# Command used for suites that run JavaScript test files
TEST_RUNNER_COMMAND = os.environ.get("SECTEST_TEST_RUNNER", "npx vitest run")

# Directory holding the example test files, relative to the project root
EXAMPLE_TESTS_DIR = "src/examples"


# =============================================================================
# Logging
# =============================================================================

DEFAULT_LOG_LEVEL = os.environ.get("SECTEST_LOG_LEVEL", "WARNING")
