"""Metrics package exports."""

from .base import IMetric
from .core import CoreMetrics
from .stats import RunningStatistics

__all__ = ["CoreMetrics", "IMetric", "RunningStatistics"]
