"""Reporting module - JSON run reports."""

from .json_reporter import JsonReporter, write_report

__all__ = ["JsonReporter", "write_report"]
