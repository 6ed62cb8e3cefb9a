"""Command-line entry point: ``security-test <command> [args...]``.

Security, coverage, performance, report and project commands run
in-process. The remaining test-suite commands hand over to the configured
JavaScript test runner with ``src/examples/<command>.test.js``.
"""

from __future__ import annotations

import logging
import shlex
import subprocess
from collections.abc import Callable
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from . import constants
from .config import FrameworkConfig, load_config
from .core.auto_config import AutoConfig
from .core.exceptions import MissingConfigError, RunnerError, SecTestError
from .core.project_analyzer import ProjectAnalyzer
from .core.test_runner import TestFramework
from .logging_config import configure_logging
from .reporting import ReportGenerator
from .security import suite
from .security.models import SecurityRunSummary
from .testing.coverage import CoverageAnalyzer
from .testing.performance import PerformanceTester

logger = logging.getLogger(__name__)

app = typer.Typer(add_completion=False, help="Security Test Framework CLI")

console = Console()
err_console = Console(stderr=True)

COMMANDS = {
    "run": "Run all tests",
    "security": "Run security tests only",
    "coverage": "Run tests with coverage",
    "component": "Run component tests",
    "unit": "Run unit tests",
    "integration": "Run integration tests",
    "frontend:component": "Run frontend component tests",
    "frontend:integration": "Run frontend integration tests",
    "frontend:security": "Run frontend security tests",
    "backend:controller": "Run backend controller tests",
    "backend:service": "Run backend service tests",
    "backend:database": "Run backend database tests",
    "backend:auth": "Run backend authentication tests",
    "backend:security": "Run backend security tests",
    "fullstack:e2e": "Run full-stack end-to-end tests",
    "fullstack:integration": "Run full-stack integration tests",
    "fullstack:security": "Run full-stack security tests",
    "security:xss": "Run XSS vulnerability tests",
    "security:sql-injection": "Run SQL injection tests",
    "security:csrf": "Run CSRF protection tests",
    "performance:load": "Run performance load tests",
    "report:security": "Generate security report",
    "report:coverage": "Generate coverage report",
    "report:performance": "Generate performance report",
    "report:comprehensive": "Generate comprehensive report",
    "auto": "Auto-configure framework for current project",
    "analyze": "Analyze project structure and generate recommendations",
    "help": "Show this help message",
}

EXAMPLES = (
    ("security-test run", "Run all tests"),
    ("security-test security", "Run security tests only"),
    ("security-test coverage", "Run with coverage"),
    ("security-test frontend:component", "Run frontend component tests"),
    ("security-test report:security json", "Write a JSON security report to ./reports"),
    ("security-test auto", "Generate security-test.config.js"),
)

SINGLE_CHECK_COMMANDS = {
    "security:xss": "XSS Prevention",
    "security:sql-injection": "SQL Injection",
    "security:csrf": "CSRF Protection",
}

SUBSET_COMMANDS = {
    "frontend:security": suite.FRONTEND_CHECKS,
    "backend:security": suite.BACKEND_CHECKS,
    "fullstack:security": suite.FRONTEND_CHECKS + suite.BACKEND_CHECKS,
}


def show_help() -> None:
    console.print("[bold]Security Test Framework CLI[/bold]\n")
    console.print("Usage: security-test <command> [options]\n")
    console.print("Commands:")
    for name, description in COMMANDS.items():
        console.print(f"  {name:<24} {description}", markup=False)
    console.print("\nExamples:")
    for example, description in EXAMPLES:
        console.print(f"  {example:<38} # {description}", markup=False)


# =============================================================================
# Output helpers
# =============================================================================

def _print_summary(title: str, summary: SecurityRunSummary) -> None:
    console.print(f"\n[bold]{escape(title)}[/bold]")
    console.print(f"Passed: [green]{summary.passed}[/green]  Failed: [red]{summary.failed}[/red]  "
                  f"Score: {summary.score}%")
    if summary.vulnerabilities:
        table = Table(title="Vulnerabilities")
        table.add_column("Check")
        table.add_column("Finding")
        for entry in summary.vulnerabilities:
            message = entry.error if entry.error is not None else entry.details.message
            table.add_row(escape(entry.type), escape(message))
        console.print(table)


def _framework_config() -> FrameworkConfig:
    try:
        return FrameworkConfig.from_generated(load_config())
    except MissingConfigError:
        return FrameworkConfig()


# =============================================================================
# Command handlers (each returns the process exit code)
# =============================================================================

def _run(command: str, args: list[str]) -> int:
    result = TestFramework(_framework_config()).run_all()
    if result.security is not None:
        _print_summary("Security Tests", result.security)
    if result.coverage is not None:
        console.print(f"\nCoverage: {result.coverage.overall}% (threshold {result.coverage.threshold}%)")
    if result.performance is not None:
        console.print(f"Average response time: {result.performance.response_time.avg}ms")
    console.print(f"Finished in {result.duration_ms}ms")
    return 0 if result.success else 1


def _security(command: str, args: list[str]) -> int:
    summary = suite.run_all()
    _print_summary("Security Tests", summary)
    return 1 if summary.failed else 0


def _single_check(command: str, args: list[str]) -> int:
    name = SINGLE_CHECK_COMMANDS[command]
    result = suite.CHECKS_BY_NAME[name]()
    status = "[red]VULNERABLE[/red]" if result.vulnerable else "[green]PASSED[/green]"
    console.print(f"{escape(name)}: {status} - {escape(result.message)}")
    return 1 if result.vulnerable else 0


def _check_subset(command: str, args: list[str]) -> int:
    summary = suite.run_checks(SUBSET_COMMANDS[command])
    _print_summary(COMMANDS[command], summary)
    return 1 if summary.failed else 0


def _coverage(command: str, args: list[str]) -> int:
    result = CoverageAnalyzer().analyze_coverage(_framework_config().coverage_threshold)
    table = Table(title="Coverage")
    table.add_column("Category")
    table.add_column("Percent", justify="right")
    for category, percent in result.by_category.model_dump().items():
        table.add_row(category, f"{percent}%")
    console.print(table)
    console.print(f"Overall: {result.overall}% (threshold {result.threshold}%)")
    if not result.meets_threshold:
        console.print("[red]Coverage is below the threshold[/red]")
        return 1
    console.print("[green]Coverage threshold met[/green]")
    return 0


def _performance(command: str, args: list[str]) -> int:
    result = PerformanceTester().run_load_tests()
    timings = result.response_time
    console.print(f"Response time: avg {timings.avg}ms, min {timings.min}ms, max {timings.max}ms, p95 {timings.p95}ms")
    console.print(f"Throughput: {result.throughput} req/s")
    console.print(f"Memory: avg {result.memory_usage.avg}{result.memory_usage.unit}, "
                  f"max {result.memory_usage.max}{result.memory_usage.unit}")
    return 0


def _report(command: str, args: list[str]) -> int:
    report_type = command.split(":", 1)[1]
    fmt = args[0] if args else "html"
    output_dir = args[1] if len(args) > 1 else constants.DEFAULT_REPORT_DIR
    report = ReportGenerator(output_dir).generate(report_type, fmt=fmt)
    console.print(f"[green]Report saved:[/green] {escape(str(report.path))}")
    return 0


def _auto(command: str, args: list[str]) -> int:
    result = AutoConfig(Path.cwd()).auto_configure()
    console.print(f"Project type: [bold]{result.project_type}[/bold]")
    if result.analysis.frameworks:
        console.print(f"Frameworks: {escape(', '.join(result.analysis.frameworks))}")
    console.print(f"[green]Configuration written to[/green] {escape(result.config_path)}")
    return 0


def _analyze(command: str, args: list[str]) -> int:
    analysis = ProjectAnalyzer(Path.cwd()).analyze_project()
    console.print(f"Project type: [bold]{analysis.type.value}[/bold]")
    console.print(f"Frameworks: {escape(', '.join(analysis.frameworks) or 'none')}")
    console.print(f"Security features: {escape(', '.join(analysis.security_features) or 'none')}")
    console.print("\nRecommendations:")
    for recommendation in analysis.recommendations:
        console.print(f"  - {recommendation}", markup=False)
    return 0


def _external_suite(command: str, args: list[str]) -> int:
    """Run ``src/examples/<command>.test.js`` with the configured test runner.

    Raises:
        RunnerError: If the runner executable cannot be found
    """
    cmd = [*shlex.split(constants.TEST_RUNNER_COMMAND), f"{constants.EXAMPLE_TESTS_DIR}/{command}.test.js", *args]
    logger.debug(f"Running: {' '.join(cmd)}", extra={"command": command})
    try:
        completed = subprocess.run(cmd, cwd=Path.cwd(), check=False)
    except FileNotFoundError as e:
        raise RunnerError(f"Test runner not found: {cmd[0]}") from e
    if completed.returncode != 0:
        logger.info(f"Test runner exited with {completed.returncode}", extra={"command": command})
        return 1
    return 0


def _handler_for(command: str) -> Callable[[str, list[str]], int]:
    if command in SINGLE_CHECK_COMMANDS:
        return _single_check
    if command in SUBSET_COMMANDS:
        return _check_subset
    if command.startswith("report:"):
        return _report
    handlers = {
        "run": _run,
        "security": _security,
        "coverage": _coverage,
        "performance:load": _performance,
        "auto": _auto,
        "analyze": _analyze,
    }
    return handlers.get(command, _external_suite)


@app.command()
def cli(
    command: Optional[str] = typer.Argument(None, help="Command to run; see 'help'"),
    args: Optional[List[str]] = typer.Argument(None, help="Command arguments"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Security Test Framework CLI."""
    configure_logging("DEBUG" if verbose else constants.DEFAULT_LOG_LEVEL)

    if not command or command == "help":
        show_help()
        raise typer.Exit(0)

    if command not in COMMANDS:
        err_console.print(f"Unknown command: {command}", markup=False)
        show_help()
        raise typer.Exit(1)

    try:
        exit_code = _handler_for(command)(command, list(args or []))
    except SecTestError as e:
        err_console.print(f"Error running command: {e}", markup=False)
        raise typer.Exit(1) from e
    except Exception as e:
        logger.exception(f"Unexpected error running {command}")
        err_console.print(f"Error running command: {e}", markup=False)
        raise typer.Exit(1) from e

    raise typer.Exit(exit_code)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
