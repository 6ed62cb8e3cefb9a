"""Project analyzer for JavaScript/TypeScript projects.

Reads ``package.json`` and a handful of top-level marker files to decide
which frameworks, tools and security packages a project uses, classifies
the project into one of eight types, and produces a list of security
recommendations.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field

from ..constants import MANIFEST_FILENAME
from .exceptions import ManifestNotFoundError, ManifestParseError

logger = logging.getLogger(__name__)


class ProjectType(str, Enum):
    FULLSTACK_REACT_NESTJS = "fullstack-react-nestjs"
    FULLSTACK_REACT_EXPRESS = "fullstack-react-express"
    REACT_FRONTEND = "react-frontend"
    NESTJS_BACKEND = "nestjs-backend"
    EXPRESS_BACKEND = "express-backend"
    VUE_FRONTEND = "vue-frontend"
    ANGULAR_FRONTEND = "angular-frontend"
    NODE_BACKEND = "node-backend"


class ProjectAnalysis(BaseModel):
    """Capabilities detected in a project.

    Every flag defaults to False except ``has_rest``, which is assumed until
    a GraphQL package is found.
    """

    type: ProjectType = ProjectType.NODE_BACKEND
    frameworks: list[str] = Field(default_factory=list)

    # Frameworks
    has_react: bool = False
    has_nestjs: bool = False
    has_express: bool = False
    has_vue: bool = False
    has_angular: bool = False
    has_typescript: bool = False

    # Testing
    has_testing_library: bool = False
    has_vitest: bool = False
    has_jest: bool = False
    has_cypress: bool = False
    has_playwright: bool = False
    has_storybook: bool = False

    # UI
    has_tailwind: bool = False
    has_bootstrap: bool = False
    has_material_ui: bool = False
    has_ant_design: bool = False
    has_chakra_ui: bool = False
    has_styled_components: bool = False
    has_emotion: bool = False

    # State and API style
    has_redux: bool = False
    has_zustand: bool = False
    has_context: bool = False
    has_graphql: bool = False
    has_rest: bool = True

    # Databases
    has_database: bool = False
    has_prisma: bool = False
    has_typeorm: bool = False
    has_mongoose: bool = False
    has_sequelize: bool = False

    # Infrastructure
    has_docker: bool = False
    has_kubernetes: bool = False
    has_ci: bool = False
    has_github_actions: bool = False
    has_gitlab_ci: bool = False
    has_jenkins: bool = False
    has_vercel: bool = False
    has_netlify: bool = False
    has_aws: bool = False
    has_gcp: bool = False
    has_azure: bool = False

    security_features: list[str] = Field(default_factory=list)
    # Reserved; the analyzer never fills it
    vulnerabilities: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)

    @property
    def has_backend(self) -> bool:
        return self.has_nestjs or self.has_express


# =============================================================================
# Detection Tables
# =============================================================================

# (packages, flags to set, framework label); any listed package triggers the row
DEPENDENCY_MARKERS: tuple[tuple[tuple[str, ...], tuple[str, ...], str | None], ...] = (
    (("react", "react-dom"), ("has_react",), "React"),
    (("@nestjs/core", "@nestjs/common"), ("has_nestjs",), "NestJS"),
    (("express",), ("has_express",), "Express"),
    (("vue",), ("has_vue",), "Vue"),
    (("@angular/core",), ("has_angular",), "Angular"),
    (("typescript", "@types/node"), ("has_typescript",), None),
    (("vitest",), ("has_vitest",), None),
    (("jest",), ("has_jest",), None),
    (("@testing-library/react", "@testing-library/dom"), ("has_testing_library",), None),
    (("cypress",), ("has_cypress",), None),
    (("@playwright/test",), ("has_playwright",), None),
    (("tailwindcss",), ("has_tailwind",), None),
    (("bootstrap",), ("has_bootstrap",), None),
    (("@mui/material", "@material-ui/core"), ("has_material_ui",), None),
    (("antd",), ("has_ant_design",), None),
    (("@chakra-ui/react",), ("has_chakra_ui",), None),
    (("styled-components",), ("has_styled_components",), None),
    (("@emotion/react", "@emotion/styled"), ("has_emotion",), None),
    (("@reduxjs/toolkit", "redux"), ("has_redux",), None),
    (("zustand",), ("has_zustand",), None),
    (("graphql", "@apollo/client", "apollo-server"), ("has_graphql",), None),
    (("prisma",), ("has_prisma", "has_database"), None),
    (("typeorm",), ("has_typeorm", "has_database"), None),
    (("mongoose",), ("has_mongoose", "has_database"), None),
    (("sequelize",), ("has_sequelize", "has_database"), None),
    (("vercel",), ("has_vercel",), None),
    (("netlify",), ("has_netlify",), None),
)

SECURITY_PACKAGES = (
    "helmet", "cors", "express-rate-limit", "express-slow-down",
    "bcrypt", "bcryptjs", "argon2", "scrypt",
    "jsonwebtoken", "passport", "passport-jwt", "passport-local",
    "express-validator", "joi", "yup", "zod",
    "sanitize-html", "xss", "sql-injection",
    "hpp", "express-mongo-sanitize",
    "rate-limiter-flexible", "express-brute",
    "csurf", "csrf", "express-csrf",
    "express-session", "connect-redis", "connect-mongo",
    "crypto", "node-forge", "tweetnacl",
    "dotenv", "dotenv-safe", "dotenv-expand",
)

# Evaluated top to bottom; the first matching predicate decides the type
PROJECT_TYPE_RULES: tuple[tuple[Callable[[ProjectAnalysis], bool], ProjectType], ...] = (
    (lambda a: a.has_react and a.has_nestjs, ProjectType.FULLSTACK_REACT_NESTJS),
    (lambda a: a.has_react and a.has_express, ProjectType.FULLSTACK_REACT_EXPRESS),
    (lambda a: a.has_react, ProjectType.REACT_FRONTEND),
    (lambda a: a.has_nestjs, ProjectType.NESTJS_BACKEND),
    (lambda a: a.has_express, ProjectType.EXPRESS_BACKEND),
    (lambda a: a.has_vue, ProjectType.VUE_FRONTEND),
    (lambda a: a.has_angular, ProjectType.ANGULAR_FRONTEND),
)


def classify_project(analysis: ProjectAnalysis) -> ProjectType:
    for predicate, project_type in PROJECT_TYPE_RULES:
        if predicate(analysis):
            return project_type
    return ProjectType.NODE_BACKEND


# =============================================================================
# Recommendations
# =============================================================================

REACT_RECOMMENDATIONS = (
    "Implement Content Security Policy (CSP) headers",
    "Use React.memo and useMemo for performance optimization",
    "Implement proper error boundaries",
    "Use React.StrictMode for development",
    "Validate props with PropTypes or TypeScript",
)

NESTJS_RECOMMENDATIONS = (
    "Use NestJS built-in validation pipes",
    "Implement proper exception filters",
    "Use Guards for authentication",
    "Use Interceptors for request/response transformation",
    "Implement proper logging with Winston",
)

EXPRESS_RECOMMENDATIONS = (
    "Use helmet for security headers",
    "Implement rate limiting",
    "Use express-validator for input validation",
    "Implement proper error handling middleware",
    "Use cors for cross-origin requests",
)

DATABASE_RECOMMENDATIONS = (
    "Use parameterized queries to prevent SQL injection",
    "Implement proper database connection pooling",
    "Use database migrations for schema changes",
    "Implement proper backup strategies",
)

GENERAL_RECOMMENDATIONS = (
    "Use HTTPS in production",
    "Implement proper authentication and authorization",
    "Use environment variables for sensitive data",
    "Regularly update dependencies",
    "Implement proper logging and monitoring",
    "Use security headers (HSTS, CSP, etc.)",
    "Implement rate limiting and request throttling",
    "Use secure session management",
    "Implement proper CORS policies",
    "Use input validation and sanitization",
)


def build_recommendations(analysis: ProjectAnalysis) -> list[str]:
    """Framework blocks in detection order, then the general block."""
    recommendations: list[str] = []
    if analysis.has_react:
        recommendations.extend(REACT_RECOMMENDATIONS)
        if not analysis.has_testing_library:
            recommendations.append("Add @testing-library/react for component testing")
    if analysis.has_nestjs:
        recommendations.extend(NESTJS_RECOMMENDATIONS)
    if analysis.has_express:
        recommendations.extend(EXPRESS_RECOMMENDATIONS)
    if analysis.has_database:
        recommendations.extend(DATABASE_RECOMMENDATIONS)
    recommendations.extend(GENERAL_RECOMMENDATIONS)
    return recommendations


# =============================================================================
# Analyzer
# =============================================================================

class ProjectAnalyzer:
    """Analyze a project directory.

    Each call to ``analyze_project`` re-reads the manifest and the file
    system and returns a new ProjectAnalysis; nothing is cached between
    calls.

    Args:
        project_root: Directory containing ``package.json``. Defaults to
            the current working directory.
    """

    def __init__(self, project_root: str | Path | None = None):
        self.project_root = Path(project_root) if project_root is not None else Path.cwd()

    def analyze_project(self) -> ProjectAnalysis:
        """Run the full analysis.

        Raises:
            ManifestNotFoundError: If ``package.json`` does not exist
            ManifestParseError: If ``package.json`` cannot be parsed
        """
        logger.info(f"Analyzing project structure in {self.project_root}")
        analysis = ProjectAnalysis()
        dependencies = self.read_dependencies()
        top_level = self._top_level_names()

        self._apply_dependency_markers(analysis, dependencies)
        analysis.type = classify_project(analysis)
        self._analyze_structure(analysis, top_level)
        self._analyze_testing_setup(analysis, top_level)
        self._analyze_security_features(analysis, dependencies, top_level)
        analysis.recommendations = build_recommendations(analysis)

        logger.info(
            f"Detected project type {analysis.type.value}; frameworks: {', '.join(analysis.frameworks)}",
            extra={"project_type": analysis.type.value},
        )
        return analysis

    def read_dependencies(self) -> dict[str, str]:
        """Merged ``dependencies`` and ``devDependencies`` from the manifest."""
        manifest_path = self.project_root / MANIFEST_FILENAME
        if not manifest_path.is_file():
            raise ManifestNotFoundError(f"{MANIFEST_FILENAME} not found", path=str(manifest_path))

        try:
            with open(manifest_path, encoding="utf-8") as f:
                manifest = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise ManifestParseError(f"Invalid JSON in {manifest_path}: {e}") from e

        if not isinstance(manifest, dict):
            raise ManifestParseError(f"{manifest_path} must contain a JSON object")

        dependencies: dict[str, str] = {}
        for section in ("dependencies", "devDependencies"):
            entries = manifest.get(section) or {}
            if not isinstance(entries, dict):
                raise ManifestParseError(f"'{section}' in {manifest_path} must be an object")
            dependencies.update({name: str(version) for name, version in entries.items()})
        return dependencies

    def _top_level_names(self) -> list[str]:
        return sorted(entry.name for entry in self.project_root.iterdir())

    def _apply_dependency_markers(self, analysis: ProjectAnalysis, dependencies: dict[str, str]) -> None:
        for packages, flags, framework in DEPENDENCY_MARKERS:
            if not any(package in dependencies for package in packages):
                continue
            for flag in flags:
                setattr(analysis, flag, True)
            if framework:
                analysis.frameworks.append(framework)
        if analysis.has_graphql:
            analysis.has_rest = False

    def _analyze_structure(self, analysis: ProjectAnalysis, names: list[str]) -> None:
        root = self.project_root
        analysis.has_docker = "Dockerfile" in names or "docker-compose.yml" in names
        analysis.has_kubernetes = "k8s" in names or any("kubernetes" in n for n in names)

        analysis.has_github_actions = (root / ".github" / "workflows").is_dir()
        analysis.has_gitlab_ci = ".gitlab-ci.yml" in names
        analysis.has_jenkins = "Jenkinsfile" in names
        analysis.has_ci = analysis.has_github_actions or analysis.has_gitlab_ci or analysis.has_jenkins

        analysis.has_aws = any("aws" in n or "serverless" in n for n in names)
        analysis.has_gcp = any("gcp" in n or "google" in n for n in names)
        analysis.has_azure = any("azure" in n for n in names)

        src_dir = root / "src"
        if analysis.has_react and src_dir.is_dir():
            analysis.has_context = self._uses_context(src_dir)

    def _uses_context(self, src_dir: Path) -> bool:
        """True when any file under ``src`` looks like a React context or provider."""
        for file_path in src_dir.rglob("*"):
            if not file_path.is_file():
                continue
            if "Context" in file_path.name or "Provider" in file_path.name:
                return True
            try:
                if "createContext" in file_path.read_text(encoding="utf-8", errors="ignore"):
                    return True
            except OSError as e:
                logger.debug(f"Skipping unreadable file {file_path}: {e}")
        return False

    def _analyze_testing_setup(self, analysis: ProjectAnalysis, names: list[str]) -> None:
        root = self.project_root
        if ".storybook" in names or (root / "src" / "stories").exists():
            analysis.has_storybook = True

        # Config files corroborate the dependency flags; they never clear them
        if any("vitest.config" in n for n in names):
            analysis.has_vitest = True
        if any("jest.config" in n for n in names):
            analysis.has_jest = True
        if any(n.startswith("cypress.config") for n in names):
            analysis.has_cypress = True
        if any(n.startswith("playwright.config") for n in names):
            analysis.has_playwright = True

    def _analyze_security_features(
        self,
        analysis: ProjectAnalysis,
        dependencies: dict[str, str],
        names: list[str],
    ) -> None:
        features = [package for package in SECURITY_PACKAGES if package in dependencies]
        if any(".env" in n for n in names):
            features.append("environment-variables")
        if analysis.has_backend:
            features.append("http-headers")
        analysis.security_features = features
