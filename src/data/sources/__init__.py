"""Input sources for balance histories and price series."""

from src.data.sources.base import BalanceHistorySource, PriceHistorySource
from src.data.sources.static import StaticSource, WorthExport

__all__ = [
    "BalanceHistorySource",
    "PriceHistorySource",
    "StaticSource",
    "WorthExport",
]
