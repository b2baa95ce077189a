"""Tracker module."""

from .tracker import ILatencyTracker, LatencySummary, LatencyTracker, percentile

__all__ = ["ILatencyTracker", "LatencySummary", "LatencyTracker", "percentile"]
