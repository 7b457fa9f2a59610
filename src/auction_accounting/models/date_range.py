"""Date range model shared by every report generator."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class DateRangeType(Enum):
    """Symbolic reporting window."""

    TODAY = "today"
    WEEK = "week"
    MONTH = "month"
    QUARTER = "quarter"
    YEAR = "year"
    CUSTOM = "custom"

    @classmethod
    def parse(cls, value: "str | DateRangeType") -> "DateRangeType":
        """Parse a range type from its string value (case-insensitive).

        Raises:
            ValueError: If the value is not a known range type.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            valid = ", ".join(t.value for t in cls)
            raise ValueError(f"Unknown date range type '{value}' (expected one of: {valid})") from None


@dataclass(frozen=True)
class DateRange:
    """Inclusive reporting window.

    Attributes:
        start: First included instant.
        end: Last included instant (end-of-day for resolved ranges).
        range_type: Symbolic type the range was resolved from.
    """

    start: datetime
    end: datetime
    range_type: DateRangeType = DateRangeType.CUSTOM

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise ValueError(f"Date range start {self.start} is after end {self.end}")

    def contains(self, timestamp: datetime) -> bool:
        """Check whether a timestamp falls inside the range (both ends inclusive)."""
        return self.start <= timestamp <= self.end

    def __repr__(self) -> str:
        return (
            f"DateRange({self.start.isoformat()} .. {self.end.isoformat()}, "
            f"type={self.range_type.value})"
        )
