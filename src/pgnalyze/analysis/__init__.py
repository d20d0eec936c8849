"""Batch analysis APIs."""

from pgnalyze.analysis.service import AnalysisSink, BatchAnalyzer, CollectingSink

__all__ = [
    "AnalysisSink",
    "BatchAnalyzer",
    "CollectingSink",
]
