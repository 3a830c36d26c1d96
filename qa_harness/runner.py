"""Data-driven verification runner: one record at a time, in order."""

import logging
import time
from collections.abc import Sequence
from dataclasses import dataclass

from qa_harness.browser.registry import PageRegistry
from qa_harness.errors import Err, Ok, Outcome, capture
from qa_harness.models.result import TestResult, TestSummary
from qa_harness.models.test_data import WebsiteTestData

log = logging.getLogger(__name__)


def error_result(data: WebsiteTestData, reason: str) -> TestResult:
    """Result standing in for a verification that could not complete."""
    result = TestResult(test_name=f"{data.test_name} - ERROR", context=data.environment)
    result.add_test("Execution", False, f"Exception: {reason}")
    return result


@dataclass(frozen=True, kw_only=True)
class VerificationRunner:
    """Drives one browser session through a list of test data records."""

    pages: PageRegistry
    pause_between_tests: float = 0.0

    def run(self, records: Sequence[WebsiteTestData], context: str = "") -> TestSummary:
        """Verify every record and collect the results.

        Args:
            records: Test data in execution order
            context: Label for the returned summary (e.g., "High Priority")

        Returns:
            Summary holding one result per record, in record order

        """
        summary = TestSummary(context=context)
        if not records:
            log.info("No test data provided")
            return summary

        log.info("Executing %d test case(s) for %s", len(records), context or "run")
        for index, data in enumerate(records):
            if index and self.pause_between_tests > 0:
                time.sleep(self.pause_between_tests)
            summary.add_test_result(self._run_one(data))

        log.info("Test execution completed: %.1f%% passed", summary.pass_percentage())
        return summary

    def _run_one(self, data: WebsiteTestData) -> TestResult:
        log.info("Testing: %s (%s)", data.test_name, data.website_url)
        started = time.monotonic()

        try:
            outcome: Outcome[TestResult] = capture(self._verify, data)
        except Exception as e:
            log.exception("Unexpected error while testing %s", data.test_name)
            result = error_result(data, f"{type(e).__name__}: {e}")
        else:
            match outcome:
                case Ok(value=result):
                    log.info("Test completed: %s", result.overall_result())
                case Err() as error:
                    log.error(
                        "Test failed for %s: %s", data.test_name, error.describe()
                    )
                    result = error_result(data, error.describe())

        result.duration = time.monotonic() - started
        return result

    def _verify(self, data: WebsiteTestData) -> TestResult:
        page = self.pages.navigate(data.website_url)
        return page.verify(data)
