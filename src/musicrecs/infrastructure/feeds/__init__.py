# 📰 musicrecs/infrastructure/feeds/__init__.py
from .feed_aggregator import FeedAggregator

__all__ = ["FeedAggregator"]
