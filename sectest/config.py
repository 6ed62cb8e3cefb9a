"""Reading the generated configuration file and runner settings."""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from .constants import CONFIG_FILENAME, DEFAULT_COVERAGE_THRESHOLD
from .core.exceptions import InvalidConfigError, MissingConfigError

logger = logging.getLogger(__name__)

_EXPORT_RE = re.compile(r"export\s+default\s+(?P<body>.*?);?\s*$", re.DOTALL)


def parse_config_source(source: str) -> dict[str, Any]:
    """Extract the object exported by a generated config file.

    Only files in the generated format are supported: comment lines
    followed by ``export default <JSON>;``.

    Raises:
        InvalidConfigError: If there is no default export or it is not JSON
    """
    lines = [line for line in source.splitlines() if not line.lstrip().startswith("//")]
    match = _EXPORT_RE.search("\n".join(lines))
    if not match:
        raise InvalidConfigError("Configuration has no 'export default' object")
    try:
        data = json.loads(match.group("body"))
    except json.JSONDecodeError as e:
        raise InvalidConfigError(f"Configuration export is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise InvalidConfigError("Configuration export must be an object")
    return data


def load_config(path: str | Path | None = None) -> dict[str, Any]:
    """Load a generated configuration file.

    Args:
        path: File to read. Defaults to ``security-test.config.js`` in the
            current directory.

    Raises:
        MissingConfigError: If the file does not exist
        InvalidConfigError: If the file cannot be parsed
    """
    config_path = Path(path) if path is not None else Path.cwd() / CONFIG_FILENAME
    if not config_path.is_file():
        raise MissingConfigError(f"Configuration file not found: {config_path}")
    logger.debug(f"Loading configuration from {config_path}")
    return parse_config_source(config_path.read_text(encoding="utf-8"))


class FrameworkConfig(BaseModel):
    """Toggles for TestFramework.run_all."""

    security_enabled: bool = True
    coverage_enabled: bool = True
    performance_enabled: bool = True
    coverage_threshold: float = DEFAULT_COVERAGE_THRESHOLD
    check_options: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_generated(cls, data: dict[str, Any]) -> FrameworkConfig:
        """Build runner settings from a loaded ``security-test.config.js``."""
        coverage = data.get("coverage") or {}
        performance = data.get("performance") or {}
        enabled = (data.get("security") or {}).get("enabled") or {}
        return cls(
            security_enabled=any(enabled.values()) if enabled else True,
            coverage_threshold=coverage.get("threshold", DEFAULT_COVERAGE_THRESHOLD),
            performance_enabled=performance.get("enabled", True),
        )
