"""Assertion helpers for common value formats.

Every helper raises ExpectationError (an AssertionError) when the value is
rejected and returns None otherwise, so they can be called directly inside
pytest tests.
"""

from __future__ import annotations

import ipaddress
import json
import re
from collections.abc import Iterable, Mapping, Sized
from datetime import datetime
from typing import Any
from urllib.parse import urlparse

from .exceptions import ExpectationError

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
UUID_RE = re.compile(r"^[0-9a-f]{8}-[0-9a-f]{4}-[1-5][0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$", re.I)
JWT_RE = re.compile(r"^[A-Za-z0-9_-]+\.[A-Za-z0-9_-]+\.[A-Za-z0-9_-]*$")
STRONG_PASSWORD_RE = re.compile(r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d)(?=.*[@$!%*?&#])[A-Za-z\d@$!%*?&#]{8,}$")
PHONE_RE = re.compile(r"^\+?[1-9]\d{0,15}$")
BASE64_RE = re.compile(r"^[A-Za-z0-9+/]*={0,2}$")
HEX_COLOR_RE = re.compile(r"^#([A-Fa-f0-9]{6}|[A-Fa-f0-9]{3})$")
TIME_RE = re.compile(r"^([01]?[0-9]|2[0-3]):[0-5][0-9]:[0-5][0-9]$")
ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(\.\d{3})?Z?$")
SLUG_RE = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")
USERNAME_RE = re.compile(r"^[a-zA-Z0-9_]{3,20}$")
DOMAIN_RE = re.compile(
    r"^[a-zA-Z0-9]([a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?(\.[a-zA-Z0-9]([a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?)*$"
)
VERSION_RE = re.compile(r"^\d+\.\d+\.\d+(-[a-zA-Z0-9.-]+)?(\+[a-zA-Z0-9.-]+)?$")
MAC_RE = re.compile(r"^([0-9A-Fa-f]{2}[:-]){5}([0-9A-Fa-f]{2})$")
POSTAL_CODE_RE = re.compile(r"^\d{5}(-\d{4})?$")
SSN_RE = re.compile(r"^\d{3}-?\d{2}-?\d{4}$")
ISBN_RE = re.compile(r"^(?:[0-9]{9}X|[0-9]{10}|[0-9]{13})$")
CURRENCY_RE = re.compile(r"^\d+(\.\d{1,2})?$")

XSS_PATTERNS = (
    re.compile(r"<script\b[^<]*(?:(?!</script>)<[^<]*)*</script>", re.I),
    re.compile(r"javascript:", re.I),
    re.compile(r"on\w+\s*=", re.I),
    re.compile(r"<iframe\b[^<]*(?:(?!</iframe>)<[^<]*)*</iframe>", re.I),
)

SQL_INJECTION_PATTERNS = (
    re.compile(r"\b(SELECT|INSERT|UPDATE|DELETE|DROP|CREATE|ALTER|EXEC|UNION)\b", re.I),
    re.compile(r"\b(OR|AND)\b\s+\d+\s*=\s*\d+", re.I),
    re.compile(r"\b(OR|AND)\b\s+['\"]\w+['\"]\s*=\s*['\"]\w+['\"]", re.I),
    re.compile(r"--|/\*|\*/"),
)


def _require(condition: bool, message: str) -> None:
    if not condition:
        raise ExpectationError(message)


def _match(pattern: re.Pattern[str], value: Any, what: str) -> None:
    _require(isinstance(value, str) and pattern.fullmatch(value) is not None, f"Expected {value!r} to be a valid {what}")


def _between(value: Any, low: float, high: float, what: str) -> None:
    _require(
        isinstance(value, (int, float)) and low <= value <= high,
        f"Expected {value!r} to be a valid {what} ({low}..{high})",
    )


def luhn_checksum_valid(card_number: str) -> bool:
    digits = [int(c) for c in card_number if c.isdigit()]
    total = 0
    for index, digit in enumerate(reversed(digits)):
        if index % 2 == 1:
            digit *= 2
            if digit > 9:
                digit -= 9
        total += digit
    return total % 10 == 0


class AssertionHelpers:
    """Static validators; each raises ExpectationError on failure."""

    # Identity and web formats

    @staticmethod
    def expect_valid_email(email: str) -> None:
        _match(EMAIL_RE, email, "email")

    @staticmethod
    def expect_valid_url(url: str) -> None:
        parsed = urlparse(url) if isinstance(url, str) else None
        _require(
            parsed is not None and bool(parsed.scheme) and bool(parsed.netloc or parsed.path),
            f"Expected {url!r} to be a valid URL",
        )

    @staticmethod
    def expect_valid_uuid(value: str) -> None:
        _match(UUID_RE, value, "UUID")

    @staticmethod
    def expect_valid_jwt(token: str) -> None:
        _match(JWT_RE, token, "JWT")

    @staticmethod
    def expect_valid_date(value: str) -> None:
        """Accepts anything ``datetime.fromisoformat`` parses, with a trailing Z allowed."""
        try:
            datetime.fromisoformat(value.replace("Z", "+00:00"))
        except (AttributeError, ValueError):
            raise ExpectationError(f"Expected {value!r} to be a valid date") from None

    @staticmethod
    def expect_valid_iso_date(value: str) -> None:
        _match(ISO_DATE_RE, value, "ISO date")

    @staticmethod
    def expect_valid_domain(domain: str) -> None:
        _match(DOMAIN_RE, domain, "domain")

    @staticmethod
    def expect_valid_ip_address(value: str) -> None:
        try:
            ipaddress.ip_address(value)
        except ValueError:
            raise ExpectationError(f"Expected {value!r} to be a valid IP address") from None

    @staticmethod
    def expect_valid_port(port: int) -> None:
        _between(port, 1, 65535, "port")

    @staticmethod
    def expect_valid_mac_address(mac: str) -> None:
        _match(MAC_RE, mac, "MAC address")

    # Sizes and collections

    @staticmethod
    def expect_in_range(value: float, minimum: float, maximum: float) -> None:
        _require(minimum <= value <= maximum, f"Expected {value!r} to be between {minimum} and {maximum}")

    @staticmethod
    def expect_length(value: Sized, length: int) -> None:
        _require(len(value) == length, f"Expected length {length}, got {len(value)}")

    @staticmethod
    def expect_min_length(value: Sized, min_length: int) -> None:
        _require(len(value) >= min_length, f"Expected length >= {min_length}, got {len(value)}")

    @staticmethod
    def expect_max_length(value: Sized, max_length: int) -> None:
        _require(len(value) <= max_length, f"Expected length <= {max_length}, got {len(value)}")

    @staticmethod
    def expect_required_properties(obj: Mapping[str, Any], required: Iterable[str]) -> None:
        missing = [name for name in required if name not in obj]
        _require(not missing, f"Missing required properties: {', '.join(missing)}")

    @staticmethod
    def expect_optional_properties(obj: Mapping[str, Any], optional: Iterable[str]) -> None:
        optional = list(optional)
        _require(any(name in obj for name in optional), f"Expected at least one of: {', '.join(optional)}")

    # Security

    @staticmethod
    def expect_strong_password(password: str) -> None:
        _require(
            isinstance(password, str) and STRONG_PASSWORD_RE.fullmatch(password) is not None,
            "Expected a strong password (8+ chars with upper, lower, digit and symbol)",
        )

    @staticmethod
    def expect_no_xss(value: str) -> None:
        for pattern in XSS_PATTERNS:
            _require(pattern.search(value) is None, f"Value contains an XSS pattern: {pattern.pattern}")

    @staticmethod
    def expect_no_sql_injection(value: str) -> None:
        for pattern in SQL_INJECTION_PATTERNS:
            _require(pattern.search(value) is None, f"Value contains a SQL injection pattern: {pattern.pattern}")

    # Personal data

    @staticmethod
    def expect_valid_phone_number(phone: str) -> None:
        _match(PHONE_RE, phone, "phone number")

    @staticmethod
    def expect_valid_credit_card(card_number: str) -> None:
        _require(luhn_checksum_valid(card_number), f"Expected {card_number!r} to pass the Luhn check")

    @staticmethod
    def expect_valid_postal_code(postal_code: str) -> None:
        _match(POSTAL_CODE_RE, postal_code, "postal code")

    @staticmethod
    def expect_valid_ssn(ssn: str) -> None:
        _match(SSN_RE, ssn, "SSN")

    @staticmethod
    def expect_valid_isbn(isbn: str) -> None:
        _match(ISBN_RE, re.sub(r"[-\s]", "", isbn), "ISBN")

    @staticmethod
    def expect_valid_username(username: str) -> None:
        _match(USERNAME_RE, username, "username")

    @staticmethod
    def expect_valid_age(age: int) -> None:
        _require(isinstance(age, (int, float)) and 0 < age <= 150, f"Expected {age!r} to be a valid age")

    # Files and encodings

    @staticmethod
    def expect_valid_file_size(size: int, max_size: int) -> None:
        _require(0 < size <= max_size, f"Expected file size in (0, {max_size}], got {size}")

    @staticmethod
    def expect_valid_file_type(filename: str, allowed_types: Iterable[str]) -> None:
        extension = filename.rsplit(".", 1)[-1].lower()
        _require(extension in set(allowed_types), f"File type {extension!r} is not allowed")

    @staticmethod
    def expect_valid_json(value: str) -> None:
        try:
            json.loads(value)
        except (TypeError, ValueError):
            raise ExpectationError(f"Expected {value!r} to be valid JSON") from None

    @staticmethod
    def expect_valid_base64(value: str) -> None:
        _match(BASE64_RE, value, "base64 string")

    @staticmethod
    def expect_valid_hex_color(color: str) -> None:
        _match(HEX_COLOR_RE, color, "hex color")

    @staticmethod
    def expect_valid_slug(slug: str) -> None:
        _match(SLUG_RE, slug, "slug")

    @staticmethod
    def expect_valid_version(version: str) -> None:
        _match(VERSION_RE, version, "version")

    @staticmethod
    def expect_valid_currency(amount: str) -> None:
        _match(CURRENCY_RE, amount, "currency amount")
        _require(float(amount) > 0, f"Expected {amount!r} to be greater than zero")

    # Coordinates

    @staticmethod
    def expect_valid_latitude(lat: float) -> None:
        _between(lat, -90, 90, "latitude")

    @staticmethod
    def expect_valid_longitude(lng: float) -> None:
        _between(lng, -180, 180, "longitude")

    @staticmethod
    def expect_valid_coordinates(coords: Mapping[str, float]) -> None:
        AssertionHelpers.expect_required_properties(coords, ("lat", "lng"))
        AssertionHelpers.expect_valid_latitude(coords["lat"])
        AssertionHelpers.expect_valid_longitude(coords["lng"])

    # Numbers and calendar

    @staticmethod
    def expect_valid_percentage(value: float) -> None:
        _between(value, 0, 100, "percentage")

    @staticmethod
    def expect_valid_time(value: str) -> None:
        _match(TIME_RE, value, "time (HH:MM:SS)")

    @staticmethod
    def expect_valid_year(year: int) -> None:
        latest = datetime.now().year + 10
        _require(isinstance(year, int) and 1900 < year <= latest, f"Expected {year!r} to be a valid year")

    @staticmethod
    def expect_valid_month(month: int) -> None:
        _between(month, 1, 12, "month")

    @staticmethod
    def expect_valid_day(day: int) -> None:
        _between(day, 1, 31, "day")

    @staticmethod
    def expect_valid_hour(hour: int) -> None:
        _between(hour, 0, 23, "hour")

    @staticmethod
    def expect_valid_minute(minute: int) -> None:
        _between(minute, 0, 59, "minute")

    @staticmethod
    def expect_valid_second(second: int) -> None:
        _between(second, 0, 59, "second")
