"""Core module - models, constants and unit conversion."""

from .models import (
    AddressBalanceHistory,
    BalanceSnapshot,
    ChartLength,
    PricePoint,
    PriceSeries,
    TrendDirection,
    WorthChart,
    WorthPoint,
)
from .constants import ALPH_DECIMALS, MIN_DISPLAY_POINTS, PRICE_HISTORY_DAYS
from .units import to_human_readable_amount

__all__ = [
    "AddressBalanceHistory",
    "BalanceSnapshot",
    "ChartLength",
    "PricePoint",
    "PriceSeries",
    "TrendDirection",
    "WorthChart",
    "WorthPoint",
    "ALPH_DECIMALS",
    "MIN_DISPLAY_POINTS",
    "PRICE_HISTORY_DAYS",
    "to_human_readable_amount",
]
