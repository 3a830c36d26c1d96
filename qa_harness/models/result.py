"""Pass/fail aggregation for page and scenario verifications.

A ``TestResult`` collects the outcomes of one verification; a ``TestSummary``
owns the results of a whole run in execution order. Aggregates are plain
folds over the owned results and are recomputed on every access.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal

ONE_PLACE = Decimal("0.1")


def format_percentage(value: float) -> str:
    """One decimal place, halves rounded up from the shortest decimal form.

    For example ``6.25`` renders as ``6.3``.
    """
    return str(Decimal(repr(value)).quantize(ONE_PLACE, rounding=ROUND_HALF_UP))


def _percentage(passed: int, total: int) -> float:
    return passed * 100.0 / total if total > 0 else 0.0


def _context_suffix(context: str) -> str:
    return f" [{context}]" if context else ""


@dataclass(frozen=True, kw_only=True)
class SingleTest:
    """One recorded check within a verification."""

    description: str
    passed: bool
    details: str = ""


@dataclass(kw_only=True)
class TestResult:
    """Outcomes of one page or scenario verification."""

    __test__ = False

    test_name: str
    context: str = ""
    duration: float = 0.0
    _tests: list[SingleTest] = field(default_factory=list, init=False, repr=False)
    _passed: int = field(default=0, init=False, repr=False)
    _failed: int = field(default=0, init=False, repr=False)

    def add_test(self, description: str, passed: bool, details: str = "") -> None:
        """Record one check outcome."""
        self._tests.append(
            SingleTest(description=description, passed=passed, details=details)
        )
        if passed:
            self._passed += 1
        else:
            self._failed += 1

    @property
    def tests(self) -> Sequence[SingleTest]:
        return tuple(self._tests)

    @property
    def passed_count(self) -> int:
        return self._passed

    @property
    def failed_count(self) -> int:
        return self._failed

    @property
    def total_tests(self) -> int:
        return self._passed + self._failed

    def pass_percentage(self) -> float:
        """Percentage of passed checks, 0.0 when nothing was recorded."""
        return _percentage(self._passed, self.total_tests)

    def all_tests_passed(self) -> bool:
        """True when at least one check ran and none failed."""
        return self._failed == 0 and self._passed > 0

    def overall_result(self) -> str:
        return (
            f"{self.test_name}{_context_suffix(self.context)}: "
            f"{self._passed}/{self.total_tests} tests passed "
            f"({format_percentage(self.pass_percentage())}%)"
        )

    def detailed_results(self) -> str:
        """Render every check with a pass/fail marker, then the summary line."""
        lines = [f"\n=== {self.test_name}{_context_suffix(self.context)} ==="]
        for test in self._tests:
            status = "✅ PASS" if test.passed else "❌ FAIL"
            lines.append(f"{status}: {test.description}")
            if test.details:
                lines.append(f"    Details: {test.details}")
        lines.append("")
        lines.append(f"SUMMARY: {self.overall_result()}")
        return "\n".join(lines) + "\n"


@dataclass(kw_only=True)
class TestSummary:
    """Ordered collection of the results of one run."""

    __test__ = False

    context: str = ""
    _results: list[TestResult] = field(default_factory=list, init=False, repr=False)

    @classmethod
    def merged(
        cls, summaries: Iterable["TestSummary"], context: str = ""
    ) -> "TestSummary":
        """Combine independently collected summaries into a new one."""
        combined = cls(context=context)
        for summary in summaries:
            for result in summary.results:
                combined.add_test_result(result)
        return combined

    def add_test_result(self, result: TestResult) -> None:
        self._results.append(result)

    @property
    def results(self) -> Sequence[TestResult]:
        return tuple(self._results)

    @property
    def total_suites(self) -> int:
        return len(self._results)

    @property
    def total_tests(self) -> int:
        return sum(result.total_tests for result in self._results)

    @property
    def total_passed(self) -> int:
        return sum(result.passed_count for result in self._results)

    @property
    def total_failed(self) -> int:
        return sum(result.failed_count for result in self._results)

    def pass_percentage(self) -> float:
        return _percentage(self.total_passed, self.total_tests)

    def all_tests_passed(self) -> bool:
        return self.total_failed == 0 and self.total_passed > 0

    def summary_string(self) -> str:
        return (
            f"Test Summary{_context_suffix(self.context)}:\n"
            f"  Test Suites: {self.total_suites}\n"
            f"  Total Tests: {self.total_tests}\n"
            f"  Passed: {self.total_passed}\n"
            f"  Failed: {self.total_failed}\n"
            f"  Pass Rate: {format_percentage(self.pass_percentage())}%\n"
        )

    def detailed_summary(self) -> str:
        """Top-line summary followed by each result's details in run order."""
        parts = [self.summary_string(), "\nDetailed Results:\n"]
        parts.extend(f"{result.detailed_results()}\n" for result in self._results)
        return "".join(parts)
