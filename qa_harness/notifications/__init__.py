"""Notification sinks."""

from qa_harness.notifications.slack import (
    SlackNotifier,
    failure_alert_payload,
    pipeline_status_payload,
    summary_payload,
)

__all__ = [
    "SlackNotifier",
    "failure_alert_payload",
    "pipeline_status_payload",
    "summary_payload",
]
