"""Presentation helpers (charts)."""

from lvrank.monitoring.chart_generator import ChartGenerator

__all__ = ["ChartGenerator"]
