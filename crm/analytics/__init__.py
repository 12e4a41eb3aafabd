"""Chart-series aggregation for the analytics dashboard"""

from .bucketing import (
    AggregationMode,
    Granularity,
    ValueExtractor,
    aggregate_time_series,
    bucket_key,
    parse_timestamp,
    round_half_up,
    select_granularity,
)
from .extractors import average_rating, rating_value, satisfaction_extractor

__all__ = [
    "AggregationMode",
    "Granularity",
    "ValueExtractor",
    "aggregate_time_series",
    "average_rating",
    "bucket_key",
    "parse_timestamp",
    "rating_value",
    "round_half_up",
    "satisfaction_extractor",
    "select_granularity",
]
