"""Load generation with concurrent virtual users and latency statistics."""

import asyncio
import logging
import math
import time
from collections.abc import Sequence
from dataclasses import dataclass

import aiohttp

from qa_harness.config import PerformanceThresholds

log = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class LoadProfile:
    """How many users hit ``url`` and how quickly they join."""

    name: str
    url: str
    users: int
    requests_per_user: int
    ramp_up: float
    method: str = "GET"


@dataclass(frozen=True, kw_only=True)
class Sample:
    """One request as observed by a virtual user; status 0 means no response."""

    latency_ms: float
    ok: bool
    status: int


@dataclass(frozen=True, kw_only=True)
class PerformanceMetrics:
    average_ms: float = 0.0
    min_ms: float = 0.0
    max_ms: float = 0.0
    p90_ms: float = 0.0
    p95_ms: float = 0.0
    p99_ms: float = 0.0
    error_rate: float = 0.0
    throughput: float = 0.0
    total_requests: int = 0
    successful_requests: int = 0


@dataclass(frozen=True, kw_only=True)
class PerformanceResult:
    profile: LoadProfile
    elapsed: float
    metrics: PerformanceMetrics


@dataclass(frozen=True, kw_only=True)
class PerformanceValidation:
    passed: bool
    violations: Sequence[str]


def percentile(ordered: Sequence[float], pct: float) -> float:
    """Nearest-rank percentile of an ascending, non-empty sequence."""
    rank = max(1, math.ceil(pct * len(ordered) / 100))
    return ordered[rank - 1]


def compute_metrics(samples: Sequence[Sample], elapsed: float) -> PerformanceMetrics:
    if not samples:
        return PerformanceMetrics()

    latencies = sorted(s.latency_ms for s in samples)
    total = len(samples)
    successful = sum(1 for s in samples if s.ok)

    return PerformanceMetrics(
        average_ms=sum(latencies) / total,
        min_ms=latencies[0],
        max_ms=latencies[-1],
        p90_ms=percentile(latencies, 90),
        p95_ms=percentile(latencies, 95),
        p99_ms=percentile(latencies, 99),
        error_rate=(total - successful) * 100.0 / total,
        throughput=total / elapsed if elapsed > 0 else 0.0,
        total_requests=total,
        successful_requests=successful,
    )


async def _request(session: aiohttp.ClientSession, profile: LoadProfile) -> Sample:
    started = time.monotonic()
    try:
        async with session.request(profile.method, profile.url) as response:
            await response.read()
            status = response.status
    except (aiohttp.ClientError, TimeoutError) as e:
        log.debug("Request to %s failed: %s", profile.url, e)
        latency_ms = (time.monotonic() - started) * 1000
        return Sample(latency_ms=latency_ms, ok=False, status=0)
    return Sample(
        latency_ms=(time.monotonic() - started) * 1000,
        ok=200 <= status < 400,
        status=status,
    )


async def _virtual_user(
    session: aiohttp.ClientSession, profile: LoadProfile, delay: float
) -> list[Sample]:
    if delay > 0:
        await asyncio.sleep(delay)
    return [await _request(session, profile) for _ in range(profile.requests_per_user)]


def start_delay(user: int, users: int, ramp_up: float) -> float:
    """Offset of ``user`` when starts are spread evenly over the ramp-up."""
    if ramp_up <= 0 or users <= 1:
        return 0.0
    return user / (users - 1) * ramp_up


async def run_load_test(
    session: aiohttp.ClientSession, profile: LoadProfile
) -> PerformanceResult:
    """Run every virtual user concurrently and aggregate their samples.

    Each user issues its requests one after another; users start staggered
    across ``profile.ramp_up`` seconds.
    """
    log.info(
        "Starting load test %s: %d user(s) x %d request(s), ramp-up %.1fs",
        profile.name,
        profile.users,
        profile.requests_per_user,
        profile.ramp_up,
    )
    started = time.monotonic()
    delays = [
        start_delay(user, profile.users, profile.ramp_up)
        for user in range(profile.users)
    ]
    per_user = await asyncio.gather(
        *(_virtual_user(session, profile, delay) for delay in delays)
    )
    elapsed = time.monotonic() - started

    samples = [sample for user_samples in per_user for sample in user_samples]
    metrics = compute_metrics(samples, elapsed)
    log.info(
        "Load test %s completed: %d request(s), %.2f%% errors",
        profile.name,
        metrics.total_requests,
        metrics.error_rate,
    )
    return PerformanceResult(profile=profile, elapsed=elapsed, metrics=metrics)


def validate_performance(
    result: PerformanceResult, thresholds: PerformanceThresholds
) -> PerformanceValidation:
    metrics = result.metrics
    violations: list[str] = []

    if metrics.average_ms > thresholds.max_average_response_ms:
        violations.append(
            f"Average response time ({metrics.average_ms:.1f}ms) exceeds "
            f"threshold ({thresholds.max_average_response_ms}ms)"
        )
    if metrics.p95_ms > thresholds.max_p95_response_ms:
        violations.append(
            f"95th percentile response time ({metrics.p95_ms:.1f}ms) exceeds "
            f"threshold ({thresholds.max_p95_response_ms}ms)"
        )
    if metrics.error_rate > thresholds.max_error_rate:
        violations.append(
            f"Error rate ({metrics.error_rate:.2f}%) exceeds "
            f"threshold ({thresholds.max_error_rate}%)"
        )
    if metrics.throughput < thresholds.min_throughput:
        violations.append(
            f"Throughput ({metrics.throughput:.2f} req/s) below "
            f"threshold ({thresholds.min_throughput} req/s)"
        )

    return PerformanceValidation(passed=not violations, violations=tuple(violations))


def performance_report(result: PerformanceResult) -> str:
    m = result.metrics
    return (
        "=== PERFORMANCE TEST REPORT ===\n"
        f"Test Name: {result.profile.name}\n"
        f"User Count: {result.profile.users}\n"
        f"Duration: {result.elapsed:.2f} seconds\n\n"
        "=== RESPONSE TIME METRICS ===\n"
        f"Average: {m.average_ms:.1f}ms\n"
        f"Minimum: {m.min_ms:.1f}ms\n"
        f"Maximum: {m.max_ms:.1f}ms\n"
        f"90th Percentile: {m.p90_ms:.1f}ms\n"
        f"95th Percentile: {m.p95_ms:.1f}ms\n"
        f"99th Percentile: {m.p99_ms:.1f}ms\n\n"
        "=== THROUGHPUT & ERROR METRICS ===\n"
        f"Throughput: {m.throughput:.2f} req/s\n"
        f"Total Requests: {m.total_requests}\n"
        f"Successful Requests: {m.successful_requests}\n"
        f"Error Rate: {m.error_rate:.2f}%\n"
    )
