"""Auto-configuration for the security test toolkit.

Turns a ProjectAnalysis into a RecommendedConfig, writes it to
``security-test.config.js`` at the project root, and runs the audit
subset that fits the detected project.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .. import constants
from ..security import suite
from ..security.checks.common import CheckOptions
from ..security.models import percent_score
from ..testing.coverage import CoverageAnalyzer
from ..testing.performance import PerformanceTester
from .exceptions import ConfigWriteError
from .project_analyzer import ProjectAnalysis, ProjectAnalyzer

logger = logging.getLogger(__name__)

# Config keys of the sixteen checks, in registry order
SECURITY_CHECK_KEYS = (
    "xss",
    "sqlInjection",
    "csrf",
    "authentication",
    "authorization",
    "inputValidation",
    "fileUpload",
    "sessionSecurity",
    "encryption",
    "dependencyVulnerabilities",
    "environmentSecurity",
    "loggingSecurity",
    "securityHeaders",
    "rateLimiting",
    "tokenManagement",
    "errorHandling",
)

BASE_FORBIDDEN_PATTERNS = (
    r"<script\b[^<]*(?:(?!<\/script>)<[^<]*)*<\/script>",
    r"javascript:",
    r"on\w+\s*=",
)
REACT_FORBIDDEN_PATTERNS = (r"dangerouslySetInnerHTML", r"eval\s*\(", r"innerHTML\s*=")
DATABASE_FORBIDDEN_PATTERNS = (r"DROP\s+TABLE", r"DELETE\s+FROM", r"UPDATE\s+.*\s+SET")


# =============================================================================
# Configuration Model
# =============================================================================

class _ConfigSection(BaseModel):
    """Base for config sections; serialized with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SecurityThresholds(_ConfigSection):
    max_vulnerabilities: int = constants.MAX_VULNERABILITIES
    min_security_score: int = constants.MIN_SECURITY_SCORE


class CustomSecurityRules(_ConfigSection):
    allowed_file_types: list[str] = Field(default_factory=lambda: [".jpg", ".png", ".pdf", ".doc"])
    max_file_size: int = constants.MAX_UPLOAD_FILE_SIZE
    required_headers: list[str] = Field(
        default_factory=lambda: ["X-Frame-Options", "X-Content-Type-Options"]
    )
    # Regex sources, matched case-insensitively by consumers
    forbidden_patterns: list[str] = Field(default_factory=lambda: list(BASE_FORBIDDEN_PATTERNS))


class SecuritySection(_ConfigSection):
    enabled: dict[str, bool] = Field(default_factory=lambda: dict.fromkeys(SECURITY_CHECK_KEYS, True))
    thresholds: SecurityThresholds = Field(default_factory=SecurityThresholds)
    custom_rules: CustomSecurityRules = Field(default_factory=CustomSecurityRules)


class CoverageSection(_ConfigSection):
    threshold: int = constants.DEFAULT_COVERAGE_THRESHOLD
    include_security_coverage: bool = True


class PerformanceSection(_ConfigSection):
    enabled: bool = True


class ReportingSection(_ConfigSection):
    enabled: bool = True
    formats: list[str] = Field(default_factory=lambda: ["html", "json"])


class ReactSection(_ConfigSection):
    providers: list[str] = Field(default_factory=list)
    mock_contexts: bool = True
    test_user_interactions: bool = True
    validate_props: bool = True
    ui_framework: str = "none"
    state_management: str = "none"


class ApiSection(_ConfigSection):
    test_endpoints: bool = True
    validate_responses: bool = True
    test_authentication: bool = True
    test_authorization: bool = True
    database: str | None = None
    authentication: list[str] = Field(default_factory=lambda: ["session"])
    deployment: str = "unknown"


class DatabaseSection(_ConfigSection):
    test_connections: bool = True
    validate_queries: bool = True
    test_transactions: bool = True


class ToolingSection(_ConfigSection):
    framework: str = "unknown"
    # to_camel would emit "e2E"
    e2e: str | None = Field(default=None, alias="e2e")
    component: str | None = None


class RecommendedConfig(_ConfigSection):
    """Complete generated configuration.

    ``react``, ``api`` and ``database`` are present only when the analysis
    detected React, a Node backend, or an ORM respectively.
    """

    security: SecuritySection = Field(default_factory=SecuritySection)
    coverage: CoverageSection = Field(default_factory=CoverageSection)
    performance: PerformanceSection = Field(default_factory=PerformanceSection)
    reporting: ReportingSection = Field(default_factory=ReportingSection)
    react: ReactSection | None = None
    api: ApiSection | None = None
    database: DatabaseSection | None = None
    testing: ToolingSection = Field(default_factory=ToolingSection)

    def to_dict(self) -> dict[str, Any]:
        """camelCase mapping with absent optional sections left out."""
        data = self.model_dump(by_alias=True)
        for section in ("react", "api", "database"):
            if data.get(section) is None:
                data.pop(section, None)
        return data


# =============================================================================
# Detectors
# =============================================================================

def detect_react_providers(analysis: ProjectAnalysis) -> list[str]:
    providers = []
    if analysis.has_context:
        providers.append("context")
    if analysis.has_redux:
        providers.append("redux")
    if analysis.has_zustand:
        providers.append("zustand")
    if analysis.has_material_ui or analysis.has_ant_design or analysis.has_chakra_ui:
        providers.append("theme")
    return providers


def _first_match(analysis: ProjectAnalysis, table: tuple[tuple[str, str], ...], default: str) -> str:
    for flag, name in table:
        if getattr(analysis, flag):
            return name
    return default


UI_FRAMEWORKS = (
    ("has_material_ui", "material-ui"),
    ("has_ant_design", "ant-design"),
    ("has_chakra_ui", "chakra-ui"),
    ("has_tailwind", "tailwind"),
    ("has_bootstrap", "bootstrap"),
    ("has_styled_components", "styled-components"),
    ("has_emotion", "emotion"),
)

STATE_MANAGERS = (
    ("has_redux", "redux"),
    ("has_zustand", "zustand"),
    ("has_context", "context"),
)

DATABASES = (
    ("has_prisma", "prisma"),
    ("has_typeorm", "typeorm"),
    ("has_mongoose", "mongoose"),
    ("has_sequelize", "sequelize"),
)

DEPLOYMENT_TARGETS = (
    ("has_vercel", "vercel"),
    ("has_netlify", "netlify"),
    ("has_aws", "aws"),
    ("has_gcp", "gcp"),
    ("has_azure", "azure"),
    ("has_docker", "docker"),
    ("has_kubernetes", "kubernetes"),
)


def detect_ui_framework(analysis: ProjectAnalysis) -> str:
    return _first_match(analysis, UI_FRAMEWORKS, "none")


def detect_state_management(analysis: ProjectAnalysis) -> str:
    return _first_match(analysis, STATE_MANAGERS, "none")


def detect_database(analysis: ProjectAnalysis) -> str:
    return _first_match(analysis, DATABASES, "unknown")


def detect_deployment(analysis: ProjectAnalysis) -> str:
    return _first_match(analysis, DEPLOYMENT_TARGETS, "unknown")


def detect_authentication(analysis: ProjectAnalysis) -> list[str]:
    features = analysis.security_features
    methods = []
    if "jsonwebtoken" in features:
        methods.append("jwt")
    if "passport" in features:
        methods.append("passport")
    if "bcrypt" in features or "bcryptjs" in features:
        methods.append("bcrypt")
    return methods or ["session"]


def build_custom_rules(analysis: ProjectAnalysis) -> CustomSecurityRules:
    patterns = list(BASE_FORBIDDEN_PATTERNS)
    if analysis.has_react:
        patterns.extend(REACT_FORBIDDEN_PATTERNS)
    if analysis.has_database:
        patterns.extend(DATABASE_FORBIDDEN_PATTERNS)
    return CustomSecurityRules(forbidden_patterns=patterns)


def build_recommended_config(analysis: ProjectAnalysis) -> RecommendedConfig:
    """Map analyzer flags to a configuration. Pure; does not touch disk."""
    config = RecommendedConfig()
    config.security.custom_rules = build_custom_rules(analysis)

    if analysis.has_react:
        config.react = ReactSection(
            providers=detect_react_providers(analysis),
            ui_framework=detect_ui_framework(analysis),
            state_management=detect_state_management(analysis),
        )

    if analysis.has_backend:
        config.api = ApiSection(
            database=detect_database(analysis) if analysis.has_database else None,
            authentication=detect_authentication(analysis),
            deployment=detect_deployment(analysis),
        )

    if analysis.has_database:
        config.database = DatabaseSection()

    if analysis.has_vitest:
        framework = "vitest"
    elif analysis.has_jest:
        framework = "jest"
    else:
        framework = "unknown"
    if analysis.has_cypress:
        e2e = "cypress"
    elif analysis.has_playwright:
        e2e = "playwright"
    else:
        e2e = None
    config.testing = ToolingSection(
        framework=framework,
        e2e=e2e,
        component="storybook" if analysis.has_storybook else None,
    )
    return config


def render_config_file(config: RecommendedConfig, project_type: str, generated_at: str | None = None) -> str:
    """Source text of the generated ``security-test.config.js``."""
    generated_at = generated_at or datetime.now(timezone.utc).isoformat()
    body = json.dumps(config.to_dict(), indent=2)
    return (
        "// Auto-generated Security Test Framework configuration\n"
        f"// Generated on: {generated_at}\n"
        f"// Project type: {project_type}\n"
        "\n"
        f"export default {body};\n"
    )


# =============================================================================
# Orchestration
# =============================================================================

class AutoConfigResult(BaseModel):
    analysis: ProjectAnalysis
    config: RecommendedConfig
    project_type: str
    config_path: str


class AutoConfig:
    """Analyze a project, write its configuration and run the matching audit.

    Args:
        project_root: Project directory. Defaults to the current directory.
        analyzer: Analyzer to use; one is built for ``project_root`` if omitted.
    """

    def __init__(
        self,
        project_root: str | Path | None = None,
        analyzer: ProjectAnalyzer | None = None,
        config_filename: str = constants.CONFIG_FILENAME,
    ):
        self.project_root = Path(project_root) if project_root is not None else Path.cwd()
        self.analyzer = analyzer or ProjectAnalyzer(self.project_root)
        self.config_path = self.project_root / config_filename

    def auto_configure(self) -> AutoConfigResult:
        """Analyze the project and write the configuration file.

        Any existing configuration file is overwritten without a backup.
        """
        analysis = self.analyzer.analyze_project()
        config = build_recommended_config(analysis)
        path = self.save_configuration(config, analysis.type.value)
        return AutoConfigResult(
            analysis=analysis,
            config=config,
            project_type=analysis.type.value,
            config_path=str(path),
        )

    def save_configuration(self, config: RecommendedConfig, project_type: str) -> Path:
        if self.config_path.exists():
            logger.warning(
                f"Overwriting existing configuration at {self.config_path}",
                extra={"path": str(self.config_path)},
            )
        try:
            self.config_path.write_text(render_config_file(config, project_type), encoding="utf-8")
        except OSError as e:
            logger.error(f"Error saving configuration: {e}", extra={"path": str(self.config_path)})
            raise ConfigWriteError(f"Could not write {self.config_path}: {e}", path=str(self.config_path)) from e
        logger.info(
            f"Configuration saved to {self.config_path}",
            extra={"path": str(self.config_path), "project_type": project_type},
        )
        return self.config_path

    def run_intelligent_audit(
        self,
        analysis: ProjectAnalysis | None = None,
        config: RecommendedConfig | None = None,
        options: CheckOptions = None,
    ) -> dict[str, Any]:
        """Run the check subsets that match the project, plus coverage and performance."""
        analysis = analysis or self.analyzer.analyze_project()
        config = config or build_recommended_config(analysis)

        security: dict[str, list[dict[str, Any]]] = {}
        if analysis.has_react:
            security["frontend"] = _run_section(suite.FRONTEND_CHECKS, options)
        if analysis.has_backend:
            security["backend"] = _run_section(suite.BACKEND_CHECKS, options)
        if analysis.has_database:
            security["database"] = _run_section(suite.DATABASE_CHECKS, options)

        coverage = CoverageAnalyzer().analyze_coverage(threshold=config.coverage.threshold)
        performance = PerformanceTester().run_load_tests()

        return {
            "projectAnalysis": analysis.model_dump(mode="json"),
            "security": security,
            "coverage": coverage.to_report_data(),
            "performance": performance.to_report_data(),
            "recommendations": project_specific_recommendations(analysis),
        }

    def generate_comprehensive_report(self, options: CheckOptions = None) -> dict[str, Any]:
        analysis = self.analyzer.analyze_project()
        config = build_recommended_config(analysis)
        audit = self.run_intelligent_audit(analysis, config, options)
        security = audit["security"]
        return {
            "projectInfo": {
                "type": analysis.type.value,
                "frameworks": list(analysis.frameworks),
                "detectedFeatures": list(analysis.security_features),
                "timestamp": datetime.now(timezone.utc).isoformat(),
            },
            "security": {
                "frontend": security.get("frontend", []),
                "backend": security.get("backend", []),
                "database": security.get("database", []),
                "summary": security_summary(security),
            },
            "coverage": audit["coverage"],
            "performance": audit["performance"],
            "recommendations": audit["recommendations"],
            "configuration": config.to_dict(),
        }


def _run_section(names: tuple[str, ...], options: CheckOptions) -> list[dict[str, Any]]:
    results = []
    for name in names:
        result = suite.CHECKS_BY_NAME[name](options)
        results.append({"type": name, **result.model_dump()})
    return results


def security_summary(security: dict[str, list[dict[str, Any]]]) -> dict[str, Any]:
    """Totals over every check result in the audit sections."""
    all_results = [r for section in ("frontend", "backend", "database") for r in security.get(section, [])]
    failed = [r for r in all_results if r["vulnerable"]]
    total = len(all_results)
    passed = total - len(failed)
    return {
        "total": total,
        "passed": passed,
        "failed": len(failed),
        "score": percent_score(passed, total),
        "vulnerabilities": failed,
    }


def project_specific_recommendations(analysis: ProjectAnalysis) -> list[str]:
    recommendations = list(analysis.recommendations)
    features = analysis.security_features
    if analysis.has_react:
        if not analysis.has_testing_library:
            recommendations.append("Install @testing-library/react for better component testing")
        if not analysis.has_storybook:
            recommendations.append("Consider adding Storybook for component documentation")
    if analysis.has_backend:
        if "helmet" not in features:
            recommendations.append("Install helmet for security headers")
        if "express-rate-limit" not in features:
            recommendations.append("Install express-rate-limit for rate limiting")
    if analysis.has_database and "express-validator" not in features:
        recommendations.append("Install express-validator for input validation")
    return recommendations
