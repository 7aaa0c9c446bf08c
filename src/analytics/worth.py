"""Historic worth aggregation.

Merges sparse per-address balance histories with a dense daily price series
into a dense daily worth series, then trims and windows it for display.
All functions here are pure: no state survives between calls.
"""

import logging
from datetime import date
from typing import Dict, List, Sequence, Tuple

from src.core.constants import ALPH_DECIMALS, MIN_DISPLAY_POINTS
from src.core.models import (
    AddressBalanceHistory,
    ChartLength,
    PriceSeries,
    TrendDirection,
    WorthPoint,
)
from src.core.units import to_human_readable_amount

logger = logging.getLogger(__name__)


def compute_worth_series(
    addresses: Sequence[Tuple[str, AddressBalanceHistory]],
    prices: PriceSeries,
    decimals: int = ALPH_DECIMALS,
) -> List[WorthPoint]:
    """
    Compute the total fiat worth of a set of addresses for every price date.

    Walks the price series once in ascending order. On each date an address
    either has a snapshot on exactly that date, which becomes its latest
    known balance, or keeps the balance it had before (zero until its first
    snapshot). The summed balance is converted to asset units and multiplied
    by the day's price.

    Snapshots on dates that are not in the price series are never matched.

    Args:
        addresses: (address id, balance history) pairs
        prices: Dense, date-ascending price series (the reference timeline)
        decimals: Decimal exponent of the asset's smallest unit

    Returns:
        One WorthPoint per price point, in the same order
    """
    latest_amounts: Dict[str, int] = {address: 0 for address, _ in addresses}
    series: List[WorthPoint] = []

    for point in prices:
        total = 0
        for address, history in addresses:
            amount = history.balance_on(point.date)
            if amount is not None:
                latest_amounts[address] = amount
            total += latest_amounts[address]

        value = to_human_readable_amount(total, decimals) * point.price
        series.append(WorthPoint(date=point.date, value=value))

    logger.debug(f"Computed {len(series)} worth points for {len(addresses)} addresses")
    return series


def trim_leading_zeros(series: Sequence[WorthPoint]) -> List[WorthPoint]:
    """
    Drop the zero-worth points that precede the first non-zero point.

    If every point is zero there is no meaningful history yet and the
    result is empty.
    """
    start = next((i for i, p in enumerate(series) if p.value != 0), len(series))
    return list(series[start:])


def apply_window(
    series: Sequence[WorthPoint],
    length: ChartLength,
    today: date,
) -> List[WorthPoint]:
    """
    Restrict a series to the chart window ending today.

    The window starts on the point dated exactly ``length.start_date(today)``.
    When no point has that date, or it is already the first point, the whole
    series is returned: windows longer than the available history show
    everything there is and are never padded.
    """
    start_date = length.start_date(today)
    start = next((i for i, p in enumerate(series) if p.date == start_date), -1)

    if start > 0:
        return list(series[start:])
    return list(series)


def has_enough_points(series: Sequence[WorthPoint]) -> bool:
    """True when the series has enough points to be drawn as a line."""
    return len(series) >= MIN_DISPLAY_POINTS


def trend_direction(series: Sequence[WorthPoint]) -> TrendDirection:
    """
    Trend of a windowed series, from its first and last point only.

    Raises:
        ValueError: If the series has fewer than two points
    """
    if not has_enough_points(series):
        raise ValueError(f"Need at least {MIN_DISPLAY_POINTS} points for a trend, got {len(series)}")

    if series[-1].value > series[0].value:
        return TrendDirection.UPWARD
    return TrendDirection.DOWNWARD


def trend_color(series: Sequence[WorthPoint]) -> str:
    """Display colour of the series trend."""
    return trend_direction(series).color

