"""Metric computation, statistics and file collection for ehstat reports."""
