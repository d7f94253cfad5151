"""
Time-bucketed statistics over stored measurements.
"""
from collections import Counter, defaultdict
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from decimal import Decimal, ROUND_HALF_UP
from typing import List, Optional

from pressure_tracker.config import STATS_DEFAULT_LIMIT, STATS_MAX_LIMIT
from pressure_tracker.utils.classification import STATUS_ORDER, classify_pressure
from pressure_tracker.utils.dates import ensure_utc, isoformat_utc

GRANULARITIES = ('day', 'week', 'month')
DEFAULT_GRANULARITY = 'day'

_CENTS = Decimal('0.01')


def clamp_limit(value, default, ceiling):
    """Missing, non-numeric or non-positive limits fall back to the default."""
    try:
        limit = int(value)
    except (TypeError, ValueError):
        return default
    if limit < 1:
        return default
    return min(limit, ceiling)


def normalize_granularity(value):
    return value if value in GRANULARITIES else DEFAULT_GRANULARITY


def truncate_instant(instant, granularity, tz=timezone.utc):
    """Return the start of the day, ISO week (Monday) or month holding ``instant``.

    Calendar boundaries are taken in ``tz``.
    """
    local = ensure_utc(instant).astimezone(tz)
    start = local.date()
    if granularity == 'week':
        start -= timedelta(days=start.weekday())
    elif granularity == 'month':
        start = start.replace(day=1)
    return datetime(start.year, start.month, start.day, tzinfo=tz)


def _average(values):
    return float((Decimal(sum(values)) / len(values)).quantize(_CENTS, rounding=ROUND_HALF_UP))


@dataclass
class StatsBucket:
    bucket: datetime
    count: int
    avg_systolic: float
    avg_diastolic: float
    avg_pulse: Optional[float]
    min_systolic: int
    max_systolic: int
    min_diastolic: int
    max_diastolic: int

    @classmethod
    def from_measurements(cls, bucket, measurements):
        systolic = [m.systolic for m in measurements]
        diastolic = [m.diastolic for m in measurements]
        pulses = [m.pulse for m in measurements if m.pulse is not None]
        return cls(
            bucket=bucket,
            count=len(measurements),
            avg_systolic=_average(systolic),
            avg_diastolic=_average(diastolic),
            avg_pulse=_average(pulses) if pulses else None,
            min_systolic=min(systolic),
            max_systolic=max(systolic),
            min_diastolic=min(diastolic),
            max_diastolic=max(diastolic),
        )

    def to_dict(self):
        return {
            'bucket': isoformat_utc(self.bucket),
            'count': self.count,
            'avgSystolic': self.avg_systolic,
            'avgDiastolic': self.avg_diastolic,
            'avgPulse': self.avg_pulse,
            'minSystolic': self.min_systolic,
            'maxSystolic': self.max_systolic,
            'minDiastolic': self.min_diastolic,
            'maxDiastolic': self.max_diastolic,
        }


def summarize(store, granularity=None, limit=None, tz=timezone.utc, since=None):
    """Group measurements into calendar buckets and describe each one.

    Args:
        store: object exposing ``query_for_aggregation(since)``
        granularity: 'day', 'week' or 'month'; anything else means 'day'
        limit: maximum number of buckets, capped at STATS_MAX_LIMIT
        tz: timezone whose calendar defines bucket boundaries
        since: optional lower bound on measured_at

    Returns:
        (granularity, buckets) with buckets ordered most recent first.
    """
    granularity = normalize_granularity(granularity)
    limit = clamp_limit(limit, STATS_DEFAULT_LIMIT, STATS_MAX_LIMIT)

    groups = defaultdict(list)
    for measurement in store.query_for_aggregation(since):
        groups[truncate_instant(measurement.measured_at, granularity, tz)].append(measurement)

    starts = sorted(groups, reverse=True)[:limit]
    buckets: List[StatsBucket] = [
        StatsBucket.from_measurements(start, groups[start]) for start in starts
    ]
    return granularity, buckets


def count_statuses(measurements):
    """Count measurements per status, least severe first, including zeros."""
    counts = Counter(classify_pressure(m.systolic, m.diastolic) for m in measurements)
    return [{'status': status, 'count': counts.get(status, 0)} for status in STATUS_ORDER]
