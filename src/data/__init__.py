"""Data layer for Wallet Worth Tracker."""

from .pipeline import DataPipeline
from .sources import BalanceHistorySource, PriceHistorySource, StaticSource, WorthExport

__all__ = [
    "DataPipeline",
    "BalanceHistorySource",
    "PriceHistorySource",
    "StaticSource",
    "WorthExport",
]
