"""Reporting module - JSON test reports."""

from .json_reporter import JsonReporter

__all__ = ["JsonReporter"]
