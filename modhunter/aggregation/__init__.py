"""
Evidence aggregation for Modhunter.

The aggregator is the only writer of coverage counters: each completed
evidence source is normalized by its adapter and folded into the model by
``CoverageAggregator.aggregate``.
"""

from .coverage import AggregationReport, CoverageAggregator

__all__ = ["AggregationReport", "CoverageAggregator"]
