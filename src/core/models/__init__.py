"""Core data models for Wallet Worth Tracker."""

from .balance import AddressBalanceHistory, BalanceSnapshot
from .price import PricePoint, PriceSeries
from .worth import ChartLength, TrendDirection, WorthChart, WorthPoint

__all__ = [
    "AddressBalanceHistory",
    "BalanceSnapshot",
    "PricePoint",
    "PriceSeries",
    "ChartLength",
    "TrendDirection",
    "WorthChart",
    "WorthPoint",
]
