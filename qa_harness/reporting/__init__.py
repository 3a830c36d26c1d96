"""Report rendering module."""

from qa_harness.reporting.html import render_html_report, write_html_report

__all__ = ["render_html_report", "write_html_report"]
