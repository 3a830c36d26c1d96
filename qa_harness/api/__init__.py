"""API check module."""

from qa_harness.api.client import (
    ApiCheck,
    ApiCheckResult,
    ApiSummary,
    ApiTestClient,
    parse_endpoint,
    summarize,
)

__all__ = [
    "ApiCheck",
    "ApiCheckResult",
    "ApiSummary",
    "ApiTestClient",
    "parse_endpoint",
    "summarize",
]
