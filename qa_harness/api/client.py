"""HTTP endpoint checks: expected status within a response-time budget."""

import logging
import time
from collections.abc import AsyncGenerator, Sequence
from contextlib import asynccontextmanager
from dataclasses import dataclass, field

import aiohttp
from yarl import URL

log = logging.getLogger(__name__)

REQUEST_TIMEOUT_SECONDS = 30.0


@dataclass(frozen=True, kw_only=True)
class ApiCheck:
    """One endpoint to call and what a healthy response looks like."""

    name: str
    method: str = "GET"
    path: str
    expected_status: int = 200
    max_response_time: float = 5.0


@dataclass(frozen=True, kw_only=True)
class ApiCheckResult:
    name: str
    method: str
    endpoint: str
    passed: bool
    status_code: int | None = None
    response_time_ms: float = 0.0
    error: str | None = None


@dataclass(frozen=True, kw_only=True)
class ApiSummary:
    total: int
    passed: int
    failed: int
    success_rate: float
    average_response_time_ms: float


def parse_endpoint(endpoint: str) -> ApiCheck:
    """Build a check from ``"METHOD /path"``; a bare path means GET."""
    method, _, path = endpoint.strip().partition(" ")
    if not path:
        method, path = "GET", method
    path = path.strip()
    return ApiCheck(name=f"{method.upper()} {path}", method=method.upper(), path=path)


def summarize(results: Sequence[ApiCheckResult]) -> ApiSummary:
    total = len(results)
    passed = sum(1 for r in results if r.passed)
    return ApiSummary(
        total=total,
        passed=passed,
        failed=total - passed,
        success_rate=round(passed * 100.0 / total, 2) if total else 0.0,
        average_response_time_ms=(
            sum(r.response_time_ms for r in results) / total if total else 0.0
        ),
    )


def endpoint_url(base_url: URL, path: str) -> URL:
    """Append ``path`` to the base URL, keeping any path prefix and query."""
    reference = URL(path)
    url = base_url / reference.path.lstrip("/")
    if reference.query_string:
        url = url.with_query(reference.query_string)
    return url


@dataclass(frozen=True, kw_only=True)
class ApiTestClient:
    """Runs checks against endpoints relative to one base URL."""

    base_url: URL
    session: aiohttp.ClientSession = field(repr=False)

    @classmethod
    @asynccontextmanager
    async def from_config(cls, base_url: str) -> AsyncGenerator["ApiTestClient", None]:
        """Create client with managed session lifecycle."""
        timeout = aiohttp.ClientTimeout(total=REQUEST_TIMEOUT_SECONDS)
        async with aiohttp.ClientSession(
            timeout=timeout, headers={"Accept": "application/json"}
        ) as session:
            yield cls(base_url=URL(base_url), session=session)

    async def run_check(self, check: ApiCheck) -> ApiCheckResult:
        """Call the endpoint once; transport failures yield a failed result."""
        endpoint = str(endpoint_url(self.base_url, check.path))
        started = time.monotonic()

        try:
            async with self.session.request(check.method, endpoint) as response:
                await response.read()
                status = response.status
        except (aiohttp.ClientError, TimeoutError) as e:
            elapsed_ms = (time.monotonic() - started) * 1000
            log.warning("%s failed: %s", check.name, e)
            return ApiCheckResult(
                name=check.name,
                method=check.method,
                endpoint=endpoint,
                passed=False,
                response_time_ms=elapsed_ms,
                error=str(e) or type(e).__name__,
            )

        elapsed_ms = (time.monotonic() - started) * 1000
        error = None
        if status != check.expected_status:
            error = f"Expected status {check.expected_status}, got {status}"
        elif elapsed_ms > check.max_response_time * 1000:
            error = (
                f"Response time {elapsed_ms:.0f}ms exceeded "
                f"{check.max_response_time * 1000:.0f}ms"
            )

        log.info("%s -> %d (%.0fms)", check.name, status, elapsed_ms)
        return ApiCheckResult(
            name=check.name,
            method=check.method,
            endpoint=endpoint,
            passed=error is None,
            status_code=status,
            response_time_ms=elapsed_ms,
            error=error,
        )

    async def run_checks(self, checks: Sequence[ApiCheck]) -> Sequence[ApiCheckResult]:
        return [await self.run_check(check) for check in checks]
