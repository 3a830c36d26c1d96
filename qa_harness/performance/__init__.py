"""Load testing module."""

from qa_harness.performance.load import (
    LoadProfile,
    PerformanceMetrics,
    PerformanceResult,
    PerformanceValidation,
    Sample,
    compute_metrics,
    performance_report,
    run_load_test,
    validate_performance,
)

__all__ = [
    "LoadProfile",
    "PerformanceMetrics",
    "PerformanceResult",
    "PerformanceValidation",
    "Sample",
    "compute_metrics",
    "performance_report",
    "run_load_test",
    "validate_performance",
]
