"""CLI entry point for the QA harness."""

import argparse
import asyncio
import json
import logging
import sys
from collections.abc import Sequence
from dataclasses import asdict
from pathlib import Path
from typing import Any

import aiohttp

from qa_harness.analysis import (
    ExecutionRecord,
    ExecutionSummary,
    QualityGateResult,
    analyze,
    check_quality_gates,
    detailed_report,
    records_from_summary,
)
from qa_harness.api import ApiTestClient, parse_endpoint, summarize
from qa_harness.browser import (
    PageActions,
    PageRegistry,
    ScreenshotRecorder,
    open_browser,
)
from qa_harness.config import HarnessConfig, load_environment_config
from qa_harness.errors import NetworkError
from qa_harness.models.result import TestSummary
from qa_harness.models.test_data import WebsiteTestData
from qa_harness.notifications import SlackNotifier
from qa_harness.performance import (
    LoadProfile,
    performance_report,
    run_load_test,
    validate_performance,
)
from qa_harness.readers import TestDataProvider
from qa_harness.reporting import write_html_report
from qa_harness.runner import VerificationRunner

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

STATUS_SYMBOLS = {
    "passed": "✅",
    "failed": "❌",
    "skipped": "⏭️",
}


def configure_logging(log_file: Path | None = None) -> None:
    """Log to stderr and, when given, append to an activity log file."""
    logging.basicConfig(level=logging.INFO, format=LOG_FORMAT, stream=sys.stderr)
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(log_file, encoding="utf-8")
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logging.getLogger().addHandler(handler)


def log_results_summary(
    log: logging.Logger, records: Sequence[ExecutionRecord]
) -> None:
    """Log a formatted summary of suite results."""
    log.info("=" * 80)
    log.info("Test Results Summary:")
    log.info("=" * 80)

    for record in records:
        symbol = STATUS_SYMBOLS.get(record.status, "?")
        log.info(
            "%s %s: %s (%.2fs)", symbol, record.name, record.status, record.duration
        )
        if record.message:
            log.info("  Failed checks: %s", record.message)


def select_records(
    provider: TestDataProvider,
    environment: str,
    priority: str | None = None,
    smoke: bool = False,
) -> tuple[Sequence[WebsiteTestData], str]:
    """Pick the records to run and a label describing the selection."""
    if smoke:
        return provider.smoke(), "Smoke"
    if priority:
        return provider.by_priority(priority), f"{priority.title()} Priority"
    return provider.for_environment(environment), environment


def execute_verifications(
    config: HarnessConfig, records: Sequence[WebsiteTestData], context: str
) -> TestSummary:
    """Run the records through one browser session."""
    with open_browser(config) as driver:
        actions = PageActions(driver=driver, timeout=config.timeout_seconds)
        screenshots = ScreenshotRecorder(
            directory=config.screenshot_dir, enabled=config.screenshot_enabled
        )
        runner = VerificationRunner(
            pages=PageRegistry(actions=actions, screenshots=screenshots),
            pause_between_tests=config.pause_between_tests,
        )
        return runner.run(records, context)


def format_output(
    summary: TestSummary, execution: ExecutionSummary, gate: QualityGateResult
) -> dict[str, Any]:
    """Format run results for JSON output."""
    return {
        "total": execution.total,
        "passed": execution.passed,
        "failed": execution.failed,
        "skipped": execution.skipped,
        "success_rate": execution.success_rate,
        "checks": {
            "total": summary.total_tests,
            "passed": summary.total_passed,
            "failed": summary.total_failed,
        },
        "quality_gates": {"passed": gate.passed, "messages": list(gate.messages)},
        "results": [
            {
                "name": result.test_name,
                "context": result.context,
                "passed": result.all_tests_passed(),
                "duration": result.duration,
                "summary": result.overall_result(),
            }
            for result in summary.results
        ],
    }


async def notify(config: HarnessConfig, execution: ExecutionSummary) -> None:
    """Post the run summary to Slack when a webhook is configured."""
    if config.slack_webhook_url is None:
        return

    log = logging.getLogger(__name__)
    async with SlackNotifier.from_config(
        config.slack_webhook_url.get_secret_value()
    ) as notifier:
        try:
            await notifier.send_summary(execution, config.environment)
        except NetworkError as e:
            log.warning("Slack notification not delivered: %s", e)


async def run(
    data_paths: Sequence[Path],
    environment: str,
    config_dir: Path,
    priority: str | None = None,
    smoke: bool = False,
    report_path: Path | None = None,
    enforce_gates: bool = False,
) -> int:
    """Run browser verifications and return exit code."""
    log = logging.getLogger("qa_harness")

    config = load_environment_config(environment, config_dir)
    provider = TestDataProvider(sources=data_paths)

    if not provider.validate_sources():
        log.error("Test data validation failed")
        return 1

    records, context = select_records(provider, environment, priority, smoke)
    if not records:
        log.info("No test data selected")
        print(json.dumps({"total": 0, "results": []}))
        return 0

    log.info("Running %d verification(s) for %s", len(records), context)
    summary = await asyncio.to_thread(execute_verifications, config, records, context)

    execution_records = records_from_summary(summary)
    log_results_summary(log, execution_records)
    execution = analyze(execution_records)
    gate = check_quality_gates(execution, config.quality_gates)
    for line in detailed_report(execution).splitlines():
        log.info(line)

    if report_path is not None:
        write_html_report(
            summary,
            title=f"QA Harness Report [{context}]",
            environment=config.environment,
            path=report_path,
            gate=gate,
        )

    await notify(config, execution)

    print(json.dumps(format_output(summary, execution, gate), indent=2))

    if enforce_gates and not gate.passed:
        return 1
    return 0 if summary.all_tests_passed() else 1


async def perf(
    url: str,
    users: int,
    requests_per_user: int,
    ramp_up: float,
    environment: str,
    config_dir: Path,
) -> int:
    """Run a load test against one URL and return exit code."""
    log = logging.getLogger("qa_harness")

    config = load_environment_config(environment, config_dir)
    profile = LoadProfile(
        name=f"Load Test {url}",
        url=url,
        users=users,
        requests_per_user=requests_per_user,
        ramp_up=ramp_up,
    )

    async with aiohttp.ClientSession() as session:
        result = await run_load_test(session, profile)

    validation = validate_performance(result, config.performance_thresholds)
    for line in performance_report(result).splitlines():
        log.info(line)
    for violation in validation.violations:
        log.warning("Performance threshold violated: %s", violation)

    output = {
        "name": profile.name,
        "elapsed": result.elapsed,
        "metrics": asdict(result.metrics),
        "passed": validation.passed,
        "violations": list(validation.violations),
    }
    print(json.dumps(output, indent=2))
    return 0 if validation.passed else 1


async def api(
    base_url: str | None,
    endpoints: Sequence[str],
    environment: str = "dev",
    config_dir: Path = Path("config"),
) -> int:
    """Run API checks and return exit code.

    Without ``base_url`` the environment config's ``base_url`` is used.
    """
    log = logging.getLogger("qa_harness")

    if base_url is None:
        base_url = load_environment_config(environment, config_dir).base_url
    if not base_url:
        log.error("No API base URL given and none configured for %s", environment)
        return 1

    checks = [parse_endpoint(endpoint) for endpoint in endpoints]
    async with ApiTestClient.from_config(base_url) as client:
        results = await client.run_checks(checks)

    summary = summarize(results)
    for result in results:
        symbol = STATUS_SYMBOLS["passed" if result.passed else "failed"]
        log.info("%s %s (%.0fms)", symbol, result.name, result.response_time_ms)
        if result.error:
            log.info("  Error: %s", result.error)

    output = {**asdict(summary), "results": [asdict(r) for r in results]}
    print(json.dumps(output, indent=2))
    return 0 if summary.failed == 0 else 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Data-driven browser, API and load testing harness"
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write the activity log to this file",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Run browser verifications")
    run_parser.add_argument(
        "--data",
        type=Path,
        action="append",
        required=True,
        help="Test data file (csv, json, xlsx, yaml); may be repeated",
    )
    run_parser.add_argument("--env", default="dev", help="Target environment")
    run_parser.add_argument(
        "--config-dir",
        type=Path,
        default=Path("config"),
        help="Directory holding <env>.yaml configuration files",
    )
    selection = run_parser.add_mutually_exclusive_group()
    selection.add_argument("--priority", help="Only run records with this priority")
    selection.add_argument(
        "--smoke", action="store_true", help="Only run high priority records"
    )
    run_parser.add_argument(
        "--report", type=Path, default=None, help="Write an HTML report here"
    )
    run_parser.add_argument(
        "--enforce-gates",
        action="store_true",
        help="Fail the run when quality gates are not met",
    )

    perf_parser = subparsers.add_parser("perf", help="Run a load test")
    perf_parser.add_argument("--url", required=True, help="URL to load")
    perf_parser.add_argument("--users", type=int, default=10)
    perf_parser.add_argument("--requests-per-user", type=int, default=10)
    perf_parser.add_argument(
        "--ramp-up", type=float, default=0.0, help="Seconds over which users start"
    )
    perf_parser.add_argument("--env", default="dev", help="Target environment")
    perf_parser.add_argument("--config-dir", type=Path, default=Path("config"))

    api_parser = subparsers.add_parser("api", help="Run API checks")
    api_parser.add_argument(
        "--base-url", default=None, help="API base URL (default: from config)"
    )
    api_parser.add_argument(
        "--endpoint",
        action="append",
        required=True,
        help='Endpoint as "METHOD /path"; may be repeated',
    )
    api_parser.add_argument("--env", default="dev", help="Target environment")
    api_parser.add_argument("--config-dir", type=Path, default=Path("config"))
    return parser


def main() -> None:
    """CLI entry point."""
    args = build_parser().parse_args()
    configure_logging(args.log_file)

    if args.command == "run":
        coro = run(
            data_paths=args.data,
            environment=args.env,
            config_dir=args.config_dir,
            priority=args.priority,
            smoke=args.smoke,
            report_path=args.report,
            enforce_gates=args.enforce_gates,
        )
    elif args.command == "perf":
        coro = perf(
            url=args.url,
            users=args.users,
            requests_per_user=args.requests_per_user,
            ramp_up=args.ramp_up,
            environment=args.env,
            config_dir=args.config_dir,
        )
    else:
        coro = api(
            base_url=args.base_url,
            endpoints=args.endpoint,
            environment=args.env,
            config_dir=args.config_dir,
        )

    sys.exit(asyncio.run(coro))


if __name__ == "__main__":  # pragma: no cover
    main()
