"""Summary statistics over collected ratios."""

from typing import List, Optional, Sequence

from ..core.models import HistogramBucket, SummaryStatistics


def median(values: Sequence[float]) -> float:
    """
    Return the element at index n // 2 of the sorted values.

    Even-length sequences are not interpolated.

    Raises:
        ValueError: If values is empty
    """
    if not values:
        raise ValueError("median of empty sequence")
    ordered = sorted(values)
    return ordered[len(ordered) // 2]


def histogram(values: Sequence[float], breakpoints: Sequence[float]) -> List[HistogramBucket]:
    """
    Count values in each half-open interval between consecutive breakpoints.

    Values outside [breakpoints[0], breakpoints[-1]) are not counted.
    """
    buckets = [HistogramBucket(lower, upper) for lower, upper in zip(breakpoints, breakpoints[1:])]
    for bucket in buckets:
        bucket.count = sum(1 for value in values if bucket.contains(value))
    return buckets


def summarize(values: Sequence[float], breakpoints: Sequence[float]) -> Optional[SummaryStatistics]:
    """
    Summarize a sequence of ratios.

    Returns:
        SummaryStatistics, or None if values is empty
    """
    if not values:
        return None
    return SummaryStatistics(
        count=len(values),
        minimum=min(values),
        maximum=max(values),
        mean=sum(values) / len(values),
        median=median(values),
        histogram=histogram(values, breakpoints),
    )
