"""Load testing stub. Returns fixed timings; no requests are sent."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ResponseTimeStats(BaseModel):
    avg: float
    min: float
    max: float
    p95: float


class MemoryUsageStats(BaseModel):
    avg: float
    max: float
    unit: str = "MB"


class PerformanceResult(BaseModel):
    response_time: ResponseTimeStats
    throughput: float
    memory_usage: MemoryUsageStats
    recommendations: list[str] = Field(default_factory=list)

    def to_report_data(self) -> dict[str, Any]:
        return {
            "responseTime": self.response_time.model_dump(),
            "throughput": self.throughput,
            "memoryUsage": self.memory_usage.model_dump(),
            "recommendations": list(self.recommendations),
        }


class PerformanceTester:
    def run_load_tests(self, options: dict[str, Any] | None = None) -> PerformanceResult:
        """Return the simulated load test numbers. ``options`` is ignored."""
        return PerformanceResult(
            response_time=ResponseTimeStats(avg=150, min=50, max=300, p95=250),
            throughput=1000,
            memory_usage=MemoryUsageStats(avg=50, max=80),
            recommendations=[
                "Optimize database queries",
                "Implement caching for frequently accessed data",
                "Consider CDN for static assets",
            ],
        )
