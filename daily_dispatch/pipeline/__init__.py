"""Pipeline orchestration - aggregation passes over all configured sites."""

from .aggregator import FeedAggregator, deduplicate, run_aggregation

__all__ = ["FeedAggregator", "deduplicate", "run_aggregation"]
