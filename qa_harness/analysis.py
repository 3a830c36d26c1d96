"""Run-level analysis of verification results and CI quality gates."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Literal

from qa_harness.config import QualityGateThresholds
from qa_harness.models.result import TestResult, TestSummary

log = logging.getLogger(__name__)

ExecutionStatus = Literal["passed", "failed", "skipped"]


@dataclass(frozen=True, kw_only=True)
class ExecutionRecord:
    """Outcome of one suite as seen by CI: a status, a duration and a reason."""

    name: str
    status: ExecutionStatus
    duration: float = 0.0
    message: str | None = None


@dataclass(frozen=True, kw_only=True)
class ExecutionSummary:
    total: int
    passed: int
    failed: int
    skipped: int
    success_rate: float
    duration: float
    failures: Sequence[str]


@dataclass(frozen=True, kw_only=True)
class QualityGateResult:
    success_rate_passed: bool
    duration_passed: bool
    failure_count_passed: bool
    messages: Sequence[str]

    @property
    def passed(self) -> bool:
        return (
            self.success_rate_passed
            and self.duration_passed
            and self.failure_count_passed
        )


def record_from_result(result: TestResult) -> ExecutionRecord:
    if result.total_tests == 0:
        status: ExecutionStatus = "skipped"
    elif result.failed_count > 0:
        status = "failed"
    else:
        status = "passed"

    failed_checks = [test.description for test in result.tests if not test.passed]
    return ExecutionRecord(
        name=result.test_name,
        status=status,
        duration=result.duration,
        message=", ".join(failed_checks) or None,
    )


def records_from_summary(summary: TestSummary) -> Sequence[ExecutionRecord]:
    """One record per suite, in run order; suites without checks are skipped."""
    return tuple(record_from_result(result) for result in summary.results)


def analyze(records: Sequence[ExecutionRecord]) -> ExecutionSummary:
    """Count statuses and collect ``name: message`` lines for failures."""
    passed = sum(1 for r in records if r.status == "passed")
    failed = [r for r in records if r.status == "failed"]
    skipped = sum(1 for r in records if r.status == "skipped")

    total = len(records)
    success_rate = round(passed * 100.0 / total, 2) if total else 0.0

    return ExecutionSummary(
        total=total,
        passed=passed,
        failed=len(failed),
        skipped=skipped,
        success_rate=success_rate,
        duration=sum(r.duration for r in records),
        failures=tuple(f"{r.name}: {r.message}" for r in failed),
    )


def detailed_report(summary: ExecutionSummary) -> str:
    lines = [
        "=== TEST EXECUTION SUMMARY ===",
        f"Total Tests: {summary.total}",
        f"Passed: {summary.passed}",
        f"Failed: {summary.failed}",
        f"Skipped: {summary.skipped}",
        f"Success Rate: {summary.success_rate}%",
        f"Total Execution Time: {summary.duration:.2f}s",
    ]
    if summary.failed:
        lines.append("")
        lines.append("=== FAILED TESTS ===")
        lines.extend(f"- {failure}" for failure in summary.failures)
    return "\n".join(lines) + "\n"


def check_quality_gates(
    summary: ExecutionSummary, thresholds: QualityGateThresholds
) -> QualityGateResult:
    """Evaluate the run against its gates.

    Every failing gate contributes one message; a passing run has none.
    """
    success_rate_passed = summary.success_rate >= thresholds.min_success_rate
    duration_passed = summary.duration <= thresholds.max_duration_seconds
    failure_count_passed = summary.failed <= thresholds.max_failures

    messages: list[str] = []
    if not success_rate_passed:
        messages.append(
            f"Pass rate ({summary.success_rate}%) below minimum "
            f"({thresholds.min_success_rate}%)"
        )
    if not duration_passed:
        messages.append(
            f"Execution time ({summary.duration:.2f}s) exceeded maximum "
            f"({thresholds.max_duration_seconds}s)"
        )
    if not failure_count_passed:
        messages.append(
            f"Too many failures ({summary.failed}) exceeded maximum "
            f"({thresholds.max_failures})"
        )

    for message in messages:
        log.warning("Quality gate failed: %s", message)

    return QualityGateResult(
        success_rate_passed=success_rate_passed,
        duration_passed=duration_passed,
        failure_count_passed=failure_count_passed,
        messages=tuple(messages),
    )
