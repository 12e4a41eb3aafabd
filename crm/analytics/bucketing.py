"""
Time-series bucketing for dashboard charts.

Groups timestamped records (customers, survey responses, ...) into day,
half-month or month buckets and reduces each bucket to a count or an average.
The bucket size is picked per call from how far back the oldest record lies
relative to the current moment, so a young business sees daily points and an
established one sees monthly points.

All timestamps are normalised to UTC before the granularity is chosen and
before keys are formatted; a ``day`` key is therefore the UTC calendar date.
"""

import logging
import math
from collections.abc import Callable, Iterable
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any, Optional, Union

from dateutil.parser import isoparse

logger = logging.getLogger(__name__)

Record = Any
ValueExtractor = Callable[[Record], Optional[float]]
FieldSelector = Union[str, Callable[[Record], Any]]

# diffMonths thresholds: below DAY_MAX_MONTHS -> day, below BIWEEK_MAX_MONTHS -> biweek
DAY_MAX_MONTHS = 1
BIWEEK_MAX_MONTHS = 6
BIWEEK_SPLIT_DAY = 15


class Granularity(str, Enum):
    DAY = "day"
    BIWEEK = "biweek"
    MONTH = "month"


class AggregationMode(str, Enum):
    COUNT = "count"
    AVERAGE = "average"


def parse_timestamp(value: Any) -> Optional[datetime]:
    """
    Normalise a timestamp value to an aware UTC datetime.

    Accepts datetimes, dates and ISO-8601 strings. Naive values are taken
    to be UTC already.

    Returns:
        The UTC datetime, or None when the value is missing or unparseable
    """
    if value is None:
        return None

    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        try:
            parsed = isoparse(value.strip())
        except (ValueError, OverflowError):
            return None
    else:
        return None

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    try:
        return parsed.astimezone(timezone.utc)
    except (ValueError, OverflowError):
        # e.g. 0001-01-01T00:00+05:00 has no UTC equivalent
        return None


def month_difference(first: datetime, now: datetime) -> int:
    """Calendar-field month distance; Jan 31 -> Feb 1 is 1, Feb 1 -> Feb 28 is 0"""
    return (now.year - first.year) * 12 + (now.month - first.month)


def select_granularity(first: datetime, now: datetime) -> Granularity:
    diff_months = month_difference(first, now)
    if diff_months < DAY_MAX_MONTHS:
        return Granularity.DAY
    if diff_months < BIWEEK_MAX_MONTHS:
        return Granularity.BIWEEK
    return Granularity.MONTH


def bucket_key(timestamp: datetime, granularity: Granularity) -> str:
    """Format the bucket key for a UTC timestamp"""
    if granularity == Granularity.DAY:
        return timestamp.date().isoformat()
    if granularity == Granularity.BIWEEK:
        half = 1 if timestamp.day <= BIWEEK_SPLIT_DAY else 2
        return f"{timestamp.year}-{timestamp.month:02d}-H{half}"
    return f"{timestamp.year}-{timestamp.month:02d}"


def round_half_up(value: float, digits: int = 1) -> float:
    """Round like ``Math.round(x * 10) / 10`` (ties go up, also for negatives)"""
    factor = 10**digits
    return math.floor(value * factor + 0.5) / factor


def _field_getter(selector: FieldSelector) -> Callable[[Record], Any]:
    if callable(selector):
        return selector

    def get(record: Record) -> Any:
        if isinstance(record, dict):
            return record.get(selector)
        return getattr(record, selector, None)

    return get


def aggregate_time_series(
    records: Iterable[Record],
    timestamp_field: FieldSelector,
    mode: Union[AggregationMode, str] = AggregationMode.COUNT,
    value_extractor: Optional[ValueExtractor] = None,
    now: Optional[datetime] = None,
) -> list[dict]:
    """
    Bucket records by time and aggregate each bucket.

    Args:
        records: Records to aggregate, already scoped to the caller's tenant
        timestamp_field: Attribute/key name or callable returning the timestamp
        mode: "count" or "average"
        value_extractor: Maps a record to its value; None drops the record.
            Count mode defaults to the constant 1, average mode requires one.
        now: Reference moment for the granularity choice (default: UTC now)

    Returns:
        ``[{"date": key, "count": n}]`` or ``[{"date": key, "rating": x}]`` in
        the order each bucket key was first seen
    """
    mode = AggregationMode(mode)
    if mode == AggregationMode.AVERAGE and value_extractor is None:
        raise ValueError("average mode requires a value_extractor")

    get_timestamp = _field_getter(timestamp_field)
    extract = value_extractor or (lambda _record: 1)

    stamped: list[tuple[datetime, Record]] = []
    skipped = 0
    for record in records:
        timestamp = parse_timestamp(get_timestamp(record))
        if timestamp is None:
            skipped += 1
            continue
        stamped.append((timestamp, record))

    if skipped:
        logger.warning(f"⚠️ Skipped {skipped} record(s) with missing or invalid timestamps")

    if not stamped:
        return []

    reference = parse_timestamp(now) if now is not None else datetime.now(timezone.utc)
    first = min(timestamp for timestamp, _ in stamped)
    granularity = select_granularity(first, reference)

    # dicts keep insertion order, which is the output order
    buckets: dict[str, list[float]] = {}
    for timestamp, record in stamped:
        value = extract(record)
        if value is None:
            continue
        buckets.setdefault(bucket_key(timestamp, granularity), []).append(value)

    logger.debug(
        f"📊 Aggregated {len(stamped)} record(s) into {len(buckets)} {granularity.value} bucket(s)"
    )

    if mode == AggregationMode.COUNT:
        return [{"date": key, "count": len(values)} for key, values in buckets.items()]

    return [
        {"date": key, "rating": round_half_up(sum(values) / len(values)) if values else 0}
        for key, values in buckets.items()
    ]
