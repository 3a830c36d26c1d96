"""Slack incoming-webhook notifications for run results."""

import logging
from collections.abc import AsyncGenerator, Mapping
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Any

import aiohttp

from qa_harness.analysis import ExecutionSummary
from qa_harness.errors import NetworkError

log = logging.getLogger(__name__)

type Payload = Mapping[str, Any]


def _field(title: str, value: object, short: bool = True) -> dict[str, Any]:
    return {"title": title, "value": str(value), "short": short}


def summary_payload(summary: ExecutionSummary, environment: str) -> Payload:
    """Completion message with a summary attachment, plus failures if any."""
    if summary.failed == 0:
        text = "✅ *All Tests Passed!* 🎉"
        color = "good"
    else:
        text = "⚠️ *Test Execution Completed with Failures*"
        color = "warning"

    attachments: list[dict[str, Any]] = [
        {
            "color": color,
            "title": "Test Execution Summary",
            "fields": [
                _field("Total Tests", summary.total),
                _field("Passed", summary.passed),
                _field("Failed", summary.failed),
                _field("Skipped", summary.skipped),
                _field("Success Rate", f"{summary.success_rate}%"),
                _field("Duration", f"{summary.duration:.2f}s"),
                _field("Environment", environment),
            ],
        }
    ]
    if summary.failed and summary.failures:
        attachments.append(
            {
                "color": "danger",
                "title": "Failed Tests",
                "text": "```" + "\n".join(summary.failures) + "```",
            }
        )
    return {"text": text, "attachments": attachments}


def failure_alert_payload(test_name: str, reason: str, environment: str) -> Payload:
    return {
        "text": "🚨 *Test Failure Alert* 🚨",
        "attachments": [
            {
                "color": "danger",
                "title": f"Test: {test_name}",
                "text": f"Environment: {environment}",
                "fields": [
                    _field("Failure Reason", reason, short=False),
                    _field("Environment", environment),
                    _field("Action Required", "Please investigate and fix"),
                ],
            }
        ],
    }


def pipeline_status_payload(
    pipeline_name: str,
    status: str,
    build_url: str | None = None,
    environment: str = "dev",
) -> Payload:
    succeeded = status == "success"
    attachment: dict[str, Any] = {
        "color": "good" if succeeded else "danger",
        "title": f"Pipeline: {pipeline_name}",
        "fields": [_field("Status", status), _field("Environment", environment)],
    }
    if build_url:
        attachment["title_link"] = build_url
        attachment["fields"].append(
            _field("Build URL", f"<{build_url}|View Build>", short=False)
        )
    return {
        "text": f"{'✅' if succeeded else '❌'} *CI/CD Pipeline {status.upper()}*",
        "attachments": [attachment],
    }


@dataclass(frozen=True, kw_only=True)
class SlackNotifier:
    """Posts messages to one Slack incoming webhook."""

    webhook_url: str = field(repr=False)
    session: aiohttp.ClientSession = field(repr=False)

    @classmethod
    @asynccontextmanager
    async def from_config(
        cls, webhook_url: str
    ) -> AsyncGenerator["SlackNotifier", None]:
        """Create notifier with managed session lifecycle."""
        async with aiohttp.ClientSession() as session:
            yield cls(webhook_url=webhook_url, session=session)

    async def post(self, payload: Payload) -> None:
        """Send a payload to the webhook.

        Raises:
            NetworkError: If the webhook is unreachable or rejects the payload

        """
        try:
            async with self.session.post(self.webhook_url, json=payload) as response:
                if response.status != 200:
                    text = await response.text()
                    raise NetworkError(
                        f"Slack webhook rejected message: {response.status} {text}"
                    )
        except aiohttp.ClientError as e:
            raise NetworkError(f"Slack webhook unreachable: {e}") from e
        log.info("Slack notification sent")

    async def send_summary(self, summary: ExecutionSummary, environment: str) -> None:
        await self.post(summary_payload(summary, environment))

    async def send_failure_alert(
        self, test_name: str, reason: str, environment: str
    ) -> None:
        await self.post(failure_alert_payload(test_name, reason, environment))

    async def send_pipeline_status(
        self,
        pipeline_name: str,
        status: str,
        build_url: str | None = None,
        environment: str = "dev",
    ) -> None:
        await self.post(
            pipeline_status_payload(pipeline_name, status, build_url, environment)
        )

