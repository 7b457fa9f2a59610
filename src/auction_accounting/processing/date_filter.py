"""Reporting-window resolution and the inclusive range predicate."""

import calendar
from collections.abc import Iterable, Iterator
from datetime import datetime, timedelta

from auction_accounting.models.date_range import DateRange, DateRangeType
from auction_accounting.models.records import CostItem, Expense, Payment, Purchase
from auction_accounting.utils.date_utils import end_of_day, get_quarter, start_of_day

ONE_MICROSECOND = timedelta(microseconds=1)


def _month_end(moment: datetime, month: int) -> datetime:
    last_day = calendar.monthrange(moment.year, month)[1]
    return end_of_day(moment.replace(month=month, day=last_day))


def resolve_range(
    range_type: str | DateRangeType,
    reference: datetime,
    custom_from: datetime | None = None,
    custom_to: datetime | None = None,
) -> DateRange:
    """Resolve a symbolic range type into an inclusive DateRange.

    Weeks start on Sunday. Month, quarter and year use calendar boundaries.
    The end of every resolved range is end-of-day of its last included day.
    A custom range without both bounds falls back to the reference month.

    Args:
        range_type: One of today/week/month/quarter/year/custom.
        reference: Anchor instant (usually "now").
        custom_from: First day of a custom range.
        custom_to: Last day of a custom range.

    Returns:
        The resolved DateRange.

    Raises:
        ValueError: If range_type is not a known type.
    """
    kind = DateRangeType.parse(range_type)
    today = start_of_day(reference)

    if kind is DateRangeType.TODAY:
        return DateRange(today, end_of_day(today), kind)

    if kind is DateRangeType.WEEK:
        # weekday() is Monday=0; shift so Sunday opens the week
        week_start = today - timedelta(days=(today.weekday() + 1) % 7)
        return DateRange(week_start, end_of_day(week_start + timedelta(days=6)), kind)

    if kind is DateRangeType.QUARTER:
        first_month = (get_quarter(today) - 1) * 3 + 1
        quarter_start = today.replace(month=first_month, day=1)
        return DateRange(quarter_start, _month_end(today, first_month + 2), kind)

    if kind is DateRangeType.YEAR:
        return DateRange(today.replace(month=1, day=1), _month_end(today, 12), kind)

    if kind is DateRangeType.CUSTOM and custom_from is not None and custom_to is not None:
        start, end = sorted((custom_from, custom_to))
        return DateRange(start_of_day(start), end_of_day(end), kind)

    return DateRange(today.replace(day=1), _month_end(today, today.month), DateRangeType.MONTH)


def in_range(timestamp: datetime, date_range: DateRange) -> bool:
    """Check if a timestamp falls within a range (inclusive on both ends)."""
    return date_range.contains(timestamp)


def previous_range(date_range: DateRange) -> DateRange:
    """Return the window of identical length that ends just before date_range starts.

    Args:
        date_range: The current reporting window.

    Returns:
        A custom DateRange immediately preceding the given one.
    """
    length = date_range.end - date_range.start
    end = date_range.start - ONE_MICROSECOND
    return DateRange(end - length, end, DateRangeType.CUSTOM)


def format_range_label(date_range: DateRange) -> str:
    """Format a range for display, e.g. "Jan 01, 2025 - Jan 31, 2025"."""
    fmt = "%b %d, %Y"
    return f"{date_range.start.strftime(fmt)} - {date_range.end.strftime(fmt)}"


def payments_in_range(
    purchases: Iterable[Purchase], date_range: DateRange
) -> Iterator[tuple[Purchase, Payment]]:
    """Yield (purchase, payment) for every payment dated inside the range.

    Payments are filtered on their own date, so an in-range payment on a
    purchase that closed before the range still counts.
    """
    for purchase in purchases:
        for payment in purchase.payments:
            if in_range(payment.date, date_range):
                yield purchase, payment


def cost_items_in_range(
    purchases: Iterable[Purchase], date_range: DateRange
) -> Iterator[tuple[Purchase, CostItem]]:
    """Yield (purchase, cost item) for every cost item dated inside the range."""
    for purchase in purchases:
        for item in purchase.cost_items:
            if in_range(item.date, date_range):
                yield purchase, item


def expenses_in_range(expenses: Iterable[Expense], date_range: DateRange) -> list[Expense]:
    """Return the operating expenses dated inside the range, in input order."""
    return [expense for expense in expenses if in_range(expense.date, date_range)]
