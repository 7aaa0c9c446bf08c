"""Historic worth chart models."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import List, Optional

from dateutil.relativedelta import relativedelta

from src.core.constants import DOWNWARD_COLOR, UPWARD_COLOR


@dataclass(frozen=True)
class WorthPoint:
    """Total fiat worth of the tracked addresses on one day."""

    date: date
    value: Decimal

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {
            "date": self.date.isoformat(),
            "value": str(self.value),
        }


class ChartLength(Enum):
    """Display windows of the worth chart."""

    WEEK = "1w"
    MONTH = "1m"
    YEAR = "1y"

    @classmethod
    def parse(cls, value: str) -> "ChartLength":
        """Parse a chart length such as "1m" (case-insensitive)."""
        try:
            return cls(value.strip().lower())
        except ValueError:
            valid = ", ".join(length.value for length in cls)
            raise ValueError(f"Unknown chart length: {value!r} (expected one of {valid})") from None

    @property
    def offset(self) -> relativedelta:
        """Calendar offset from today to the window start."""
        return _OFFSETS[self]

    @property
    def label(self) -> str:
        return _LABELS[self]

    def start_date(self, today: date) -> date:
        """First day of the window ending on ``today``."""
        return today - self.offset


_OFFSETS = {
    ChartLength.WEEK: relativedelta(weeks=1),
    ChartLength.MONTH: relativedelta(months=1),
    ChartLength.YEAR: relativedelta(years=1),
}

_LABELS = {
    ChartLength.WEEK: "1 week",
    ChartLength.MONTH: "1 month",
    ChartLength.YEAR: "1 year",
}


class TrendDirection(Enum):
    """Endpoint trend of a worth series."""

    UPWARD = "upward"
    DOWNWARD = "downward"

    @property
    def color(self) -> str:
        """Display colour for the trend."""
        return UPWARD_COLOR if self is TrendDirection.UPWARD else DOWNWARD_COLOR


@dataclass
class WorthChart:
    """Display-ready worth series with its trend indicator."""

    points: List[WorthPoint]
    trend: TrendDirection
    length: ChartLength
    currency: str
    metadata: dict = field(default_factory=dict)

    def point_at(self, index: int) -> Optional[WorthPoint]:
        """
        Hover lookup by zero-based position in the displayed series.

        Returns None for the -1 "no point" sentinel and any other
        out-of-range position.
        """
        if 0 <= index < len(self.points):
            return self.points[index]
        return None

    @property
    def first(self) -> WorthPoint:
        return self.points[0]

    @property
    def last(self) -> WorthPoint:
        return self.points[-1]

    @property
    def change(self) -> Decimal:
        """Worth difference between the last and first point."""
        return self.last.value - self.first.value

    @property
    def dates(self) -> List[date]:
        """Extract dates from points."""
        return [p.date for p in self.points]

    @property
    def values(self) -> List[Decimal]:
        """Extract worth values from points."""
        return [p.value for p in self.points]

    def __len__(self) -> int:
        return len(self.points)

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {
            "currency": self.currency,
            "length": self.length.value,
            "trend": self.trend.value,
            "color": self.trend.color,
            "points": [p.to_dict() for p in self.points],
        }
