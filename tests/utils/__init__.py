"""Test utilities for pipeline YAML extraction tests."""

from .telemetry import SpanAnalyzer, analyze_spans, clear_spans, telemetry_setup

__all__ = ["SpanAnalyzer", "telemetry_setup", "analyze_spans", "clear_spans"]
