"""Custom exception hierarchy for sectest.

Every error the toolkit raises on purpose derives from SecTestError so that
the CLI can report it with a single except clause and a non-zero exit.
"""


class SecTestError(Exception):
    """Base exception for all sectest errors.

    All custom exceptions should inherit from this class to allow
    callers to catch all sectest-specific errors with a single
    except clause when appropriate.
    """
    pass


# =============================================================================
# Project Analysis Errors
# =============================================================================

class AnalysisError(SecTestError):
    """Base exception for project analysis errors."""
    pass


class ManifestNotFoundError(AnalysisError):
    """The project has no package.json manifest."""

    def __init__(self, message: str, path: str | None = None):
        super().__init__(message)
        self.path = path


class ManifestParseError(AnalysisError):
    """The package.json manifest is not valid JSON or has the wrong shape."""
    pass


# =============================================================================
# Configuration Errors
# =============================================================================

class ConfigurationError(SecTestError):
    """Base exception for configuration errors."""
    pass


class InvalidConfigError(ConfigurationError):
    """Configuration value is invalid or malformed."""
    pass


class MissingConfigError(ConfigurationError):
    """Required configuration file is missing."""
    pass


class ConfigWriteError(ConfigurationError):
    """Writing the generated configuration file failed."""

    def __init__(self, message: str, path: str | None = None):
        super().__init__(message)
        self.path = path


# =============================================================================
# Report Errors
# =============================================================================

class ReportError(SecTestError):
    """Base exception for report generation errors."""
    pass


class ReportWriteError(ReportError):
    """Writing a report file to disk failed."""

    def __init__(self, message: str, path: str | None = None):
        super().__init__(message)
        self.path = path


class UnsupportedReportTypeError(ReportError):
    """Requested report type has no generator."""
    pass


# =============================================================================
# Check Errors
# =============================================================================

class CheckError(SecTestError):
    """Base exception for security check errors."""
    pass


class UnknownCheckError(CheckError):
    """A check name does not match any registered security check."""
    pass


# =============================================================================
# Runner Errors
# =============================================================================

class RunnerError(SecTestError):
    """The external JavaScript test runner could not be started or failed."""

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        self.exit_code = exit_code


# =============================================================================
# Expectation Errors
# =============================================================================

class ExpectationError(SecTestError, AssertionError):
    """An assertion helper rejected a value.

    Subclasses AssertionError so test runners report it as a test failure
    rather than an error.
    """
    pass
