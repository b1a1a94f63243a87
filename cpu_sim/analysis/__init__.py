"""Analysis utilities for post-run comparison."""

from .compare import build_compare_report, compare_report_to_rows

__all__ = ["build_compare_report", "compare_report_to_rows"]
