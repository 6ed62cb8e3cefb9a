"""Tests for the canned security check functions and the payload catalog."""

from unittest.mock import MagicMock

import pytest

from sectest.security import checks, payloads
from sectest.security.checks import api_config, auth, data_handling
from sectest.security.models import SecurityCheckResult
from sectest.testing.harness import DOMUtils, MockElement

ALL_CHECKS = [
    checks.test_xss_prevention,
    checks.test_sql_injection,
    checks.test_csrf_protection,
    checks.test_authentication,
    checks.test_authorization,
    checks.test_input_validation,
    checks.test_file_upload_security,
    checks.test_session_security,
    checks.test_encryption,
    checks.test_dependency_vulnerabilities,
    checks.test_environment_security,
    checks.test_logging_security,
    checks.test_security_headers,
    checks.test_rate_limiting,
    checks.test_token_management,
    checks.test_error_handling,
]


class TestCheckContract:
    """Every check returns a populated SecurityCheckResult."""

    @pytest.mark.parametrize("check", ALL_CHECKS, ids=lambda c: c.__name__)
    def test_returns_verdict_and_message(self, check):
        result = check()
        assert isinstance(result, SecurityCheckResult)
        assert isinstance(result.vulnerable, bool)
        assert result.message

    @pytest.mark.parametrize("check", ALL_CHECKS, ids=lambda c: c.__name__)
    def test_repeated_calls_are_equal(self, check):
        assert check() == check()

    @pytest.mark.parametrize("check", ALL_CHECKS, ids=lambda c: c.__name__)
    def test_unrelated_options_do_not_change_verdict(self, check):
        assert check({"input": "safe"}).vulnerable == check().vulnerable


class TestInjectionChecks:
    """XSS, SQL injection, CSRF and input validation."""

    def test_xss_reports_vulnerable_with_shipped_payloads(self):
        result = checks.test_xss_prevention()
        assert result.vulnerable is True
        failing = [entry["payload"] for entry in result.details["payloads"]]
        assert 'javascript:alert("xss")' in failing

    def test_xss_script_tags_are_neutralized(self):
        encoded = payloads.encode_html_entities('<script>alert("xss")</script>')
        assert "<script>" not in encoded
        assert encoded.startswith("&lt;script&gt;")

    def test_html_encoding_replaces_ampersand_first(self):
        assert payloads.encode_html_entities("&<") == "&amp;&lt;"

    def test_html_encoding_can_keep_slashes(self):
        assert payloads.encode_html_entities("a/b", encode_slash=False) == "a/b"
        assert payloads.encode_html_entities("a/b") == "a&#x2F;b"

    def test_sql_injection_not_vulnerable(self):
        result = checks.test_sql_injection()
        assert result.vulnerable is False
        assert result.details["payloads"] == []

    def test_sql_strip_lowercases_and_removes_comments(self):
        assert payloads.strip_sql_metacharacters("' OR 1=1--") == " or 1=1"
        assert payloads.strip_sql_metacharacters("a /* b */ c") == "a  b  c"

    def test_csrf_without_form_is_vulnerable(self):
        result = checks.test_csrf_protection()
        assert result.vulnerable is True
        assert result.message == "CSRF token not found"

    def test_csrf_with_token_attribute(self):
        form = MockElement("form", {"data-csrf-token": "abc123"})
        assert checks.test_csrf_protection({"form": form}).vulnerable is False

    @pytest.mark.parametrize("field", ["csrf_token", "_token"])
    def test_csrf_with_hidden_token_input(self, field):
        form = DOMUtils.create_form(csrf_token="abc123", token_field=field)
        assert checks.test_csrf_protection({"form": form}).vulnerable is False

    def test_csrf_form_without_token(self):
        form = DOMUtils.create_form()
        form.append_child(MockElement("input", {"name": "email"}))
        assert checks.test_csrf_protection({"form": form}).vulnerable is True

    def test_csrf_accepts_any_form_like_object(self):
        form = MagicMock()
        form.has_attribute.return_value = True
        assert checks.test_csrf_protection({"form": form}).vulnerable is False
        form.has_attribute.assert_called_once_with("data-csrf-token")

    def test_input_validation_not_vulnerable(self):
        result = checks.test_input_validation()
        assert result.vulnerable is False
        assert result.details == {}

    def test_email_with_trailing_newline_is_rejected(self, monkeypatch):
        monkeypatch.setattr(payloads, "INVALID_EMAILS", ("user@example.com\n",))
        assert checks.test_input_validation().vulnerable is False


class TestIdentityChecks:
    """Authentication, authorization, sessions and tokens."""

    def test_authentication_flags_missing_mfa(self):
        result = checks.test_authentication()
        assert result.vulnerable is True
        assert list(result.details) == ["Multi-Factor Authentication"]
        assert result.details["Multi-Factor Authentication"]["message"] == "MFA not implemented"

    def test_authorization_passes(self):
        assert checks.test_authorization().vulnerable is False

    def test_session_security_passes(self):
        assert checks.test_session_security().vulnerable is False

    def test_only_the_fixture_token_validates(self):
        assert auth.validate_token(payloads.VALID_TOKEN) is True
        assert auth.validate_token("expired.jwt.token") is False

    def test_token_management_has_no_issues(self):
        result = checks.test_token_management()
        assert result.vulnerable is False
        assert result.details == {"issues": []}

    def test_strong_password_fixtures_match_policy(self):
        for password in payloads.STRONG_PASSWORDS:
            assert payloads.STRONG_PASSWORD_RE.match(password)
        for password in payloads.WEAK_PASSWORDS:
            assert not payloads.STRONG_PASSWORD_RE.match(password)


class TestDataHandlingChecks:
    """Uploads, encryption, dependencies, environment and logging."""

    def test_file_upload_flags_path_traversal(self):
        result = checks.test_file_upload_security()
        assert result.vulnerable is True
        assert list(result.details) == ["Upload Path Security"]

    def test_encryption_passes(self):
        assert checks.test_encryption().vulnerable is False

    def test_environment_flags_exposed_variables(self):
        result = checks.test_environment_security()
        assert result.vulnerable is True
        assert "Environment Variables" in result.details

    def test_logging_passes(self):
        assert checks.test_logging_security().vulnerable is False

    def test_dependency_check_passes_with_fixture_inventory(self):
        result = checks.test_dependency_vulnerabilities()
        assert result.vulnerable is False
        assert result.details == {"checked": len(payloads.INSTALLED_DEPENDENCIES)}

    def test_find_vulnerable_dependencies_matches_range(self):
        findings = data_handling.find_vulnerable_dependencies(
            {"lodash": "4.17.20", "express": "4.19.2"},
            payloads.DEPENDENCY_ADVISORIES,
        )
        assert findings == [
            {"package": "lodash", "version": "4.17.20", "affected": "<4.17.21", "advisory": "CVE-2021-23337"}
        ]

    def test_find_vulnerable_dependencies_skips_bad_versions(self, monkeypatch):
        mock_logger = MagicMock()
        monkeypatch.setattr(data_handling, "logger", mock_logger)
        findings = data_handling.find_vulnerable_dependencies(
            {"lodash": "not a version"}, payloads.DEPENDENCY_ADVISORIES
        )
        assert findings == []
        mock_logger.warning.assert_called_once()

    def test_dependency_check_reports_findings(self, monkeypatch):
        monkeypatch.setattr(payloads, "INSTALLED_DEPENDENCIES", {"minimist": "1.2.5"})
        result = checks.test_dependency_vulnerabilities()
        assert result.vulnerable is True
        assert result.details["vulnerable_dependencies"][0]["advisory"] == "CVE-2021-44906"


class TestApiConfigChecks:
    """Security headers, rate limiting and error handling."""

    def test_security_headers_all_present(self):
        result = checks.test_security_headers()
        assert result.vulnerable is False
        assert result.details == {"missing_headers": []}

    def test_security_headers_missing(self, monkeypatch):
        headers = dict(payloads.REQUIRED_SECURITY_HEADERS)
        del headers["Content-Security-Policy"]
        monkeypatch.setattr(payloads, "SIMULATED_RESPONSE_HEADERS", headers)
        result = checks.test_security_headers()
        assert result.vulnerable is True
        assert result.details["missing_headers"] == ["Content-Security-Policy"]

    def test_rate_limiting_defaults(self):
        result = checks.test_rate_limiting()
        assert result.vulnerable is False
        assert result.details == {"rate_limited": True, "blocked_after": 10, "time_window": 60_000}

    def test_rate_limiting_too_few_attempts(self):
        result = checks.test_rate_limiting({"attempts": 5, "max_requests": 10})
        assert result.vulnerable is True
        assert result.message == "Rate limiting not properly implemented"

    def test_rate_limiting_falsy_options_use_defaults(self):
        result = checks.test_rate_limiting({"attempts": 0, "max_requests": 0, "time_window": 0})
        assert result.details["blocked_after"] == 10
        assert result.details["time_window"] == 60_000

    def test_error_handler_exposes_only_validation_errors(self):
        assert "details" in api_config.handle_error(ValueError("bad"), "validation_error")
        assert "details" not in api_config.handle_error(ValueError("db down"), "database_error")

    def test_error_handling_passes(self):
        result = checks.test_error_handling()
        assert result.vulnerable is False
        assert result.details == {"issues": []}
