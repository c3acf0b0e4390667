"""Monitoring - counters and Prometheus metrics."""

from .stats import ObservationStats

__all__ = ["ObservationStats"]
