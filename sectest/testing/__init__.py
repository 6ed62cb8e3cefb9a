"""Coverage and performance stubs plus test harness helpers."""

from .contexts import (
    CONTEXT_FACTORIES,
    MockContextProvider,
    create_mock_auth_context,
    create_mock_notification_context,
    create_mock_router_context,
    create_mock_store_context,
    create_mock_theme_context,
    mock_contexts,
    mock_use_context,
)
from .coverage import CoverageAnalyzer, CoverageResult
from .harness import (
    ControllerUtils,
    DOMUtils,
    IntegrationUtils,
    MockElement,
    NestUtils,
    ReactUtils,
)
from .performance import PerformanceResult, PerformanceTester

__all__ = [
    # Stubs
    "CoverageAnalyzer",
    "CoverageResult",
    "PerformanceTester",
    "PerformanceResult",
    # Contexts
    "CONTEXT_FACTORIES",
    "MockContextProvider",
    "create_mock_auth_context",
    "create_mock_notification_context",
    "create_mock_router_context",
    "create_mock_store_context",
    "create_mock_theme_context",
    "mock_contexts",
    "mock_use_context",
    # Harness
    "ControllerUtils",
    "DOMUtils",
    "IntegrationUtils",
    "MockElement",
    "NestUtils",
    "ReactUtils",
]
