"""Data pipeline orchestration for Wallet Worth Tracker.

Loads balance histories and price series from their sources and feeds
them into the worth chart engine, which reports readiness until every
input has arrived.
"""

import asyncio
import logging
from datetime import date
from typing import Dict, List, Optional

from config.settings import Settings, get_settings
from src.analytics.engine import WorthChartEngine
from src.core.models import AddressBalanceHistory, ChartLength, PriceSeries, WorthChart
from src.data.sources.base import BalanceHistorySource, PriceHistorySource
from src.data.sources.static import StaticSource

logger = logging.getLogger(__name__)


class DataPipeline:
    """Orchestrates input loading for the worth chart.

    Balance histories are fetched concurrently; price series are kept in
    an in-memory cache keyed by currency and day count.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        balance_source: Optional[BalanceHistorySource] = None,
        price_source: Optional[PriceHistorySource] = None,
        engine: Optional[WorthChartEngine] = None,
    ):
        """Initialize the data pipeline.

        Args:
            settings: Application settings
            balance_source: Balance history source (defaults to the static source)
            price_source: Price history source (defaults to the static source)
            engine: Worth chart engine to feed
        """
        self.settings = settings or get_settings()

        if balance_source is None or price_source is None:
            default_source = self._create_default_source()
            balance_source = balance_source or default_source
            price_source = price_source or default_source

        self.balance_source = balance_source
        self.price_source = price_source
        self.engine = engine or WorthChartEngine(
            length=ChartLength.parse(self.settings.chart_length),
            decimals=self.settings.asset_decimals,
        )

        self._price_cache: Dict[str, PriceSeries] = {}

    def _create_default_source(self) -> StaticSource:
        """Static source from the configured export file, or an empty one."""
        data_file = self.settings.data_file
        if data_file is not None:
            return StaticSource.from_json(data_file)
        logger.warning("No data file configured, starting with no balances or prices")
        return StaticSource()

    # ========== PRICE METHODS ==========

    async def get_price_history(
        self,
        currency: Optional[str] = None,
        days: Optional[int] = None,
        force_refresh: bool = False,
    ) -> PriceSeries:
        """Get the daily price series.

        Args:
            currency: Fiat currency (uses settings if None)
            days: Trailing day count (uses settings if None)
            force_refresh: Skip cache and fetch fresh data

        Returns:
            PriceSeries
        """
        currency = (currency or self.settings.currency).upper()
        days = days or self.settings.price_history_days
        cache_key = f"{currency}:{days}"

        if not force_refresh and cache_key in self._price_cache:
            logger.debug(f"Memory cache hit for {cache_key} prices")
            return self._price_cache[cache_key]

        logger.info(f"Fetching {days} days of {currency} prices from {self.price_source.source_name}")
        series = await self.price_source.get_price_history(currency, days)
        self._price_cache[cache_key] = series
        return series

    async def load_prices(
        self,
        currency: Optional[str] = None,
        force_refresh: bool = False,
    ) -> Optional[PriceSeries]:
        """Fetch the price series into the engine.

        The engine holds no price series while the fetch runs, so the chart
        reports not ready. A failed fetch leaves it that way.
        """
        self.engine.set_price_series(None)
        try:
            series = await self.get_price_history(currency, force_refresh=force_refresh)
        except Exception as e:
            logger.error(f"Error fetching price history: {e}")
            return None

        self.engine.set_price_series(series)
        return series

    # ========== BALANCE METHODS ==========

    async def get_balance_history(self, address: str) -> Optional[AddressBalanceHistory]:
        """Fetch one balance history, or None if the fetch failed."""
        try:
            return await self.balance_source.get_balance_history(address)
        except Exception as e:
            logger.error(f"Error fetching balance history for {address}: {e}")
            return None

    async def load_balances(
        self,
        addresses: Optional[List[str]] = None,
    ) -> Dict[str, AddressBalanceHistory]:
        """Fetch all balance histories into the engine.

        Args:
            addresses: Addresses to track (uses settings if None)

        Returns:
            Histories that loaded, keyed by address
        """
        addresses = list(addresses if addresses is not None else self.settings.wallet_addresses)
        self.engine.set_addresses(addresses)
        for address in addresses:
            self.engine.invalidate_balance_history(address)

        logger.info(f"Fetching balance histories for {len(addresses)} addresses")
        results = await asyncio.gather(*(self.get_balance_history(a) for a in addresses))

        loaded: Dict[str, AddressBalanceHistory] = {}
        for address, history in zip(addresses, results):
            if history is None:
                continue
            self.engine.set_balance_history(history)
            loaded[address] = history

        if len(loaded) < len(addresses):
            logger.warning(f"Loaded {len(loaded)} of {len(addresses)} balance histories")
        return loaded

    # ========== CHART ==========

    async def refresh(
        self,
        addresses: Optional[List[str]] = None,
        currency: Optional[str] = None,
        force_refresh: bool = False,
        today: Optional[date] = None,
    ) -> Optional[WorthChart]:
        """Reload every input and return the recomputed chart.

        Returns:
            WorthChart, or None when not ready or nothing to display
        """
        await asyncio.gather(
            self.load_balances(addresses),
            self.load_prices(currency, force_refresh=force_refresh),
        )
        return self.engine.chart(today)

    async def close(self) -> None:
        """Close all sources."""
        await self.balance_source.close()
        if self.price_source is not self.balance_source:
            await self.price_source.close()
