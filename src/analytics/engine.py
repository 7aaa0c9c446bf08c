"""Worth chart engine.

Gates the aggregator on input readiness, recomputes the chart when its
inputs change and serves hover lookups over the last displayed series.
"""

import logging
from datetime import date
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Set, Tuple

from src.core.constants import ALPH_DECIMALS
from src.core.models import (
    AddressBalanceHistory,
    ChartLength,
    PriceSeries,
    WorthChart,
    WorthPoint,
)
from src.analytics.worth import (
    apply_window,
    compute_worth_series,
    has_enough_points,
    trend_direction,
    trim_leading_zeros,
)

logger = logging.getLogger(__name__)


def is_ready(
    addresses: Sequence[str],
    balance_histories: Mapping[str, AddressBalanceHistory],
    price_series: Optional[PriceSeries],
    loaded_addresses: Optional[Iterable[str]] = None,
) -> bool:
    """
    Check whether the worth chart can be computed.

    Requires at least one address, a finished balance history for every
    address and a fetched price series.

    Args:
        addresses: Addresses to chart
        balance_histories: Histories keyed by address
        price_series: Price series, None while it is still being fetched
        loaded_addresses: Addresses whose history finished loading
            (defaults to the keys of ``balance_histories``)
    """
    if not addresses or price_series is None or price_series.is_empty:
        return False

    loaded = set(balance_histories) if loaded_addresses is None else set(loaded_addresses)
    return all(a in loaded and a in balance_histories for a in addresses)


def build_chart(
    trimmed: Sequence[WorthPoint],
    length: ChartLength,
    today: date,
    currency: str,
) -> Optional[WorthChart]:
    """
    Window a trimmed worth series and derive its trend.

    Returns None ("nothing to display") when either the trimmed or the
    windowed series has fewer than two points.
    """
    if not has_enough_points(trimmed):
        return None

    windowed = apply_window(trimmed, length, today)
    if not has_enough_points(windowed):
        return None

    return WorthChart(
        points=windowed,
        trend=trend_direction(windowed),
        length=length,
        currency=currency,
        metadata={"available_points": len(trimmed)},
    )


def compute_display_series(
    addresses: Sequence[str],
    balance_histories: Mapping[str, AddressBalanceHistory],
    price_series: Optional[PriceSeries],
    length: ChartLength,
    today: date,
    decimals: int = ALPH_DECIMALS,
    loaded_addresses: Optional[Iterable[str]] = None,
) -> Optional[WorthChart]:
    """
    Compute the display-ready worth chart for a set of addresses.

    Args:
        addresses: Addresses to chart
        balance_histories: Histories keyed by address
        price_series: Dense daily price series, None while not fetched
        length: Chart window
        today: Current date, anchors the window
        decimals: Decimal exponent of the asset's smallest unit
        loaded_addresses: Addresses whose history finished loading

    Returns:
        WorthChart, or None when not ready or there is nothing to display
    """
    addresses = list(dict.fromkeys(addresses))
    if not is_ready(addresses, balance_histories, price_series, loaded_addresses):
        return None

    pairs = [(a, balance_histories[a]) for a in addresses]
    trimmed = trim_leading_zeros(compute_worth_series(pairs, price_series, decimals))
    return build_chart(trimmed, length, today, price_series.currency)


class WorthChartEngine:
    """
    Holds the chart inputs and recomputes the chart when they change.

    Every input mutation advances a version counter. ``chart()`` recomputes
    the worth series in full only when the version moved since the last
    computation; changing the chart length or the date only re-windows.
    """

    def __init__(
        self,
        length: ChartLength = ChartLength.YEAR,
        decimals: int = ALPH_DECIMALS,
    ):
        self._length = length
        self._decimals = decimals

        self._addresses: List[str] = []
        self._focus: Optional[str] = None
        self._histories: Dict[str, AddressBalanceHistory] = {}
        self._loaded: Set[str] = set()
        self._price_series: Optional[PriceSeries] = None
        self._version = 0

        self._trimmed: List[WorthPoint] = []
        self._trimmed_version: Optional[int] = None
        self._chart: Optional[WorthChart] = None
        self._chart_key: Optional[Tuple[int, ChartLength, date]] = None

    # ========== INPUTS ==========

    @property
    def version(self) -> int:
        """Counter advanced on every input change."""
        return self._version

    def _touch(self) -> None:
        self._version += 1

    def set_addresses(self, addresses: Iterable[str]) -> None:
        """Replace the set of tracked addresses."""
        self._addresses = list(dict.fromkeys(addresses))
        if self._focus is not None and self._focus not in self._addresses:
            self._focus = None
        self._touch()

    def focus(self, address: Optional[str]) -> None:
        """Restrict the chart to one tracked address, or None for all."""
        if address is not None and address not in self._addresses:
            raise ValueError(f"Address is not tracked: {address}")
        self._focus = address
        self._touch()

    def set_balance_history(self, history: AddressBalanceHistory) -> None:
        """Store a fully loaded balance history."""
        self._histories[history.address] = history
        self._loaded.add(history.address)
        self._touch()

    def invalidate_balance_history(self, address: str) -> None:
        """Mark an address history as loading again."""
        self._loaded.discard(address)
        self._touch()

    def set_price_series(self, series: Optional[PriceSeries]) -> None:
        """Store the fetched price series (None while fetching)."""
        self._price_series = series
        self._touch()

    @property
    def length(self) -> ChartLength:
        return self._length

    def set_length(self, length: ChartLength) -> None:
        """Change the chart window."""
        self._length = length

    @property
    def selected_addresses(self) -> List[str]:
        """Addresses that contribute to the chart."""
        if self._focus is not None:
            return [self._focus]
        return list(self._addresses)

    @property
    def is_ready(self) -> bool:
        return is_ready(
            self.selected_addresses,
            self._histories,
            self._price_series,
            self._loaded,
        )

    # ========== CHART ==========

    def chart(self, today: Optional[date] = None) -> Optional[WorthChart]:
        """
        Current display chart, recomputed only when inputs changed.

        Returns:
            WorthChart, or None when not ready or nothing to display
        """
        today = today or date.today()

        if not self.is_ready:
            self._chart = None
            self._chart_key = None
            return None

        if self._trimmed_version != self._version:
            addresses = self.selected_addresses
            logger.debug(f"Recomputing worth series (version {self._version}, {len(addresses)} addresses)")
            pairs = [(a, self._histories[a]) for a in addresses]
            series = compute_worth_series(pairs, self._price_series, self._decimals)
            self._trimmed = trim_leading_zeros(series)
            self._trimmed_version = self._version

        key = (self._version, self._length, today)
        if key != self._chart_key:
            self._chart = build_chart(self._trimmed, self._length, today, self._price_series.currency)
            self._chart_key = key

        return self._chart

    def hovered_point(self, index: int) -> Optional[WorthPoint]:
        """Hover lookup over the most recently computed chart."""
        if self._chart is None:
            return None
        return self._chart.point_at(index)
