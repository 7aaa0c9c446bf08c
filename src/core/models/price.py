"""Fiat price history models."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Iterator, List


@dataclass(frozen=True)
class PricePoint:
    """Fiat price of the asset on one calendar day."""

    date: date
    price: Decimal

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {
            "date": self.date.isoformat(),
            "price": str(self.price),
        }


@dataclass
class PriceSeries:
    """
    Dense daily price series for one fiat currency.

    This is the reference timeline of the worth chart: one output point is
    produced per entry, in the same ascending date order.
    """

    currency: str
    points: List[PricePoint] = field(default_factory=list)

    @property
    def dates(self) -> List[date]:
        """Extract dates from points."""
        return [p.date for p in self.points]

    @property
    def prices(self) -> List[Decimal]:
        """Extract prices from points."""
        return [p.price for p in self.points]

    @property
    def is_empty(self) -> bool:
        return not self.points

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator[PricePoint]:
        return iter(self.points)

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {
            "currency": self.currency,
            "points": [p.to_dict() for p in self.points],
        }
