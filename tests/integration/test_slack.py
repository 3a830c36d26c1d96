"""Integration tests for Slack webhook notifications."""

from collections.abc import AsyncGenerator

import pytest
from aioresponses import aioresponses as aioresponses_cls
from yarl import URL

from qa_harness.analysis import ExecutionSummary
from qa_harness.errors import NetworkError
from qa_harness.notifications import SlackNotifier, pipeline_status_payload

WEBHOOK_URL = "https://hooks.slack.test/services/T000/B000/XXXX"


def make_summary(failed: int = 0) -> ExecutionSummary:
    return ExecutionSummary(
        total=10,
        passed=10 - failed,
        failed=failed,
        skipped=0,
        success_rate=(10 - failed) * 10.0,
        duration=42.0,
        failures=tuple(f"Suite {i}: Title Check" for i in range(failed)),
    )


@pytest.fixture
async def notifier(
    aioresponses: aioresponses_cls,
) -> AsyncGenerator[SlackNotifier, None]:
    """Create notifier with managed session."""
    async with SlackNotifier.from_config(WEBHOOK_URL) as impl:
        yield impl


def sent_payload(aioresponses: aioresponses_cls) -> dict:  # type: ignore[type-arg]
    call = aioresponses.requests[("POST", URL(WEBHOOK_URL))][0]
    return call.kwargs["json"]  # type: ignore[no-any-return]


class TestSendSummary:
    """Tests for send_summary."""

    async def test_posts_passing_summary(
        self, notifier: SlackNotifier, aioresponses: aioresponses_cls
    ) -> None:
        """A clean run posts a green summary attachment."""
        aioresponses.post(WEBHOOK_URL, status=200, body="ok")

        await notifier.send_summary(make_summary(), "staging")

        payload = sent_payload(aioresponses)
        assert payload["text"] == "✅ *All Tests Passed!* 🎉"
        (attachment,) = payload["attachments"]
        assert attachment["color"] == "good"
        fields = {f["title"]: f["value"] for f in attachment["fields"]}
        assert fields == {
            "Total Tests": "10",
            "Passed": "10",
            "Failed": "0",
            "Skipped": "0",
            "Success Rate": "100.0%",
            "Duration": "42.00s",
            "Environment": "staging",
        }

    async def test_posts_failures_block(
        self, notifier: SlackNotifier, aioresponses: aioresponses_cls
    ) -> None:
        """Failures add a danger attachment listing failed suites."""
        aioresponses.post(WEBHOOK_URL, status=200, body="ok")

        await notifier.send_summary(make_summary(failed=2), "dev")

        payload = sent_payload(aioresponses)
        assert payload["text"] == "⚠️ *Test Execution Completed with Failures*"
        summary_attachment, failures = payload["attachments"]
        assert summary_attachment["color"] == "warning"
        assert failures["color"] == "danger"
        assert failures["text"] == (
            "```Suite 0: Title Check\nSuite 1: Title Check```"
        )

    async def test_rejected_message_raises(
        self, notifier: SlackNotifier, aioresponses: aioresponses_cls
    ) -> None:
        """Non-200 responses raise NetworkError."""
        aioresponses.post(WEBHOOK_URL, status=404, body="no_service")

        with pytest.raises(NetworkError, match="404 no_service"):
            await notifier.send_summary(make_summary(), "dev")

    async def test_unreachable_webhook_raises(
        self, notifier: SlackNotifier, aioresponses: aioresponses_cls
    ) -> None:
        """Transport errors raise NetworkError."""
        with pytest.raises(NetworkError, match="unreachable"):
            await notifier.send_summary(make_summary(), "dev")


class TestAlerts:
    """Tests for failure and pipeline notifications."""

    async def test_failure_alert(
        self, notifier: SlackNotifier, aioresponses: aioresponses_cls
    ) -> None:
        """A failure alert names the test and reason."""
        aioresponses.post(WEBHOOK_URL, status=200, body="ok")

        await notifier.send_failure_alert("Login Page", "banner not found", "prod")

        payload = sent_payload(aioresponses)
        assert payload["text"] == "🚨 *Test Failure Alert* 🚨"
        (attachment,) = payload["attachments"]
        assert attachment["title"] == "Test: Login Page"
        assert attachment["fields"][0] == {
            "title": "Failure Reason",
            "value": "banner not found",
            "short": False,
        }

    async def test_pipeline_status(
        self, notifier: SlackNotifier, aioresponses: aioresponses_cls
    ) -> None:
        """Pipeline notifications link to the build."""
        aioresponses.post(WEBHOOK_URL, status=200, body="ok")

        await notifier.send_pipeline_status(
            "nightly", "failure", build_url="https://ci.test/build/7"
        )

        payload = sent_payload(aioresponses)
        assert payload["text"] == "❌ *CI/CD Pipeline FAILURE*"
        (attachment,) = payload["attachments"]
        assert attachment["color"] == "danger"
        assert attachment["title_link"] == "https://ci.test/build/7"
        assert attachment["fields"][-1]["value"] == (
            "<https://ci.test/build/7|View Build>"
        )


def test_pipeline_status_payload_without_build_url() -> None:
    """Successful pipelines are green and carry no build link."""
    payload = pipeline_status_payload("nightly", "success")

    assert payload["text"] == "✅ *CI/CD Pipeline SUCCESS*"
    (attachment,) = payload["attachments"]
    assert attachment["color"] == "good"
    assert "title_link" not in attachment
    assert len(attachment["fields"]) == 2
