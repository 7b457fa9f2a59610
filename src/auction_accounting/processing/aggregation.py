"""Aggregation primitives shared by the report generators."""

from collections.abc import Callable, Hashable, Iterable, Mapping
from datetime import datetime, timedelta
from decimal import Decimal
from enum import Enum
from typing import Optional, TypeVar

from auction_accounting.config import AgingConfig
from auction_accounting.utils.decimal_utils import HUNDRED, ZERO, safe_divide

T = TypeVar("T")
K = TypeVar("K", bound=Hashable)

ONE_DAY = timedelta(days=1)
DEFAULT_AGING = AgingConfig()


class AgingBucket(Enum):
    """Receivable age class."""

    CURRENT = "current"  # 0-30 days
    THIRTY_DAYS = "thirty_days"  # 31-60 days
    SIXTY_DAYS = "sixty_days"  # 61-90 days
    NINETY_DAYS_PLUS = "ninety_days_plus"  # 90+ days


def group_sum(
    records: Iterable[T],
    key_fn: Callable[[T], Optional[K]],
    value_fn: Callable[[T], Decimal],
) -> dict[K, Decimal]:
    """Sum values per key in a single pass.

    Keys keep the order in which they first appear. Records whose key is
    None contribute nothing.

    Args:
        records: Records to aggregate.
        key_fn: Extracts the grouping key.
        value_fn: Extracts the amount to add.

    Returns:
        Mapping of key to summed amount.
    """
    totals: dict[K, Decimal] = {}
    for record in records:
        key = key_fn(record)
        if key is None:
            continue
        totals[key] = totals.get(key, ZERO) + value_fn(record)
    return totals


def sorted_by_amount(
    totals: Mapping[K, Decimal], limit: Optional[int] = None
) -> list[tuple[K, Decimal]]:
    """Order a grouped mapping by amount, largest first.

    The sort is stable, so equal amounts keep their first-appearance order.

    Args:
        totals: Mapping produced by group_sum.
        limit: Keep only the first N entries.

    Returns:
        List of (key, amount) pairs.
    """
    ordered = sorted(totals.items(), key=lambda item: item[1], reverse=True)
    if limit is not None:
        return ordered[:limit]
    return ordered


def sorted_by_key(totals: Mapping[str, T]) -> list[tuple[str, T]]:
    """Order a period-keyed mapping chronologically (period keys sort lexically)."""
    return sorted(totals.items(), key=lambda item: item[0])


def bucket_by_month(timestamp: datetime) -> str:
    """Month bucket key, "YYYY-MM"."""
    return f"{timestamp.year:04d}-{timestamp.month:02d}"


def bucket_by_day(timestamp: datetime) -> str:
    """Day bucket key, "YYYY-MM-DD"."""
    return f"{timestamp.year:04d}-{timestamp.month:02d}-{timestamp.day:02d}"


def running_accumulate(entries: Iterable[tuple[str, Decimal]]) -> list[tuple[str, Decimal]]:
    """Accumulate net amounts over keys already sorted ascending.

    Args:
        entries: (key, net amount) pairs in ascending key order.

    Returns:
        (key, cumulative amount) pairs in the same order.
    """
    running_total = ZERO
    series: list[tuple[str, Decimal]] = []
    for key, net in entries:
        running_total += net
        series.append((key, running_total))
    return series


def days_elapsed(reference: datetime, now: datetime) -> int:
    """Whole days from reference to now, floored."""
    return (now - reference) // ONE_DAY


def aging_bucket(days: int, aging: AgingConfig = DEFAULT_AGING) -> AgingBucket:
    """Classify an age in days into its aging bucket.

    Args:
        days: Days elapsed since the invoice date.
        aging: Bucket boundaries (inclusive upper bounds).

    Returns:
        The matching AgingBucket.
    """
    if days <= aging.current_days:
        return AgingBucket.CURRENT
    if days <= aging.thirty_days:
        return AgingBucket.THIRTY_DAYS
    if days <= aging.sixty_days:
        return AgingBucket.SIXTY_DAYS
    return AgingBucket.NINETY_DAYS_PLUS


def percentage_of(part: Decimal, whole: Decimal, default: Decimal = ZERO) -> Decimal:
    """part as a percentage of whole, or default when whole is zero."""
    return safe_divide(part * HUNDRED, whole, default)
