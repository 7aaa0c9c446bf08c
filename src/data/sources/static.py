"""In-memory balance and price source.

Serves already-fetched inputs, either handed over directly or loaded from
a JSON export of the form::

    {
        "prices": {"USD": [{"date": "2024-01-01", "price": "2.15"}, ...]},
        "balances": {"<address>": {"2024-01-01": "1000000000000000000"}}
    }

Balances are in smallest units.
"""

import logging
from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from src.core.models import AddressBalanceHistory, PricePoint, PriceSeries
from src.data.sources.base import BalanceHistorySource, PriceHistorySource

logger = logging.getLogger(__name__)


class PriceEntry(BaseModel):
    """One daily price in an export file."""

    model_config = ConfigDict(populate_by_name=True)

    day: date = Field(alias="date")
    price: Decimal = Field(ge=0)


class WorthExport(BaseModel):
    """Schema of a balances and prices export file."""

    prices: Dict[str, List[PriceEntry]] = Field(default_factory=dict)
    balances: Dict[str, Dict[date, int]] = Field(default_factory=dict)


class StaticSource(BalanceHistorySource, PriceHistorySource):
    """Balance and price source backed by in-memory data."""

    def __init__(
        self,
        balances: Optional[Dict[str, AddressBalanceHistory]] = None,
        prices: Optional[Dict[str, PriceSeries]] = None,
    ):
        self._balances: Dict[str, AddressBalanceHistory] = dict(balances or {})
        self._prices: Dict[str, PriceSeries] = {
            currency.upper(): series for currency, series in (prices or {}).items()
        }

    @classmethod
    def from_export(cls, export: WorthExport) -> "StaticSource":
        """Build a source from a validated export."""
        balances = {
            address: AddressBalanceHistory.from_balances(address, amounts)
            for address, amounts in export.balances.items()
        }
        prices = {
            currency: PriceSeries(
                currency=currency.upper(),
                points=sorted(
                    (PricePoint(date=e.day, price=e.price) for e in entries),
                    key=lambda p: p.date,
                ),
            )
            for currency, entries in export.prices.items()
        }
        return cls(balances=balances, prices=prices)

    @classmethod
    def from_json(cls, path: Union[str, Path]) -> "StaticSource":
        """Load a source from a JSON export file."""
        path = Path(path)
        export = WorthExport.model_validate_json(path.read_text(encoding="utf-8"))
        logger.info(
            f"Loaded {len(export.balances)} balance histories and "
            f"{len(export.prices)} price series from {path}"
        )
        return cls.from_export(export)

    @property
    def source_name(self) -> str:
        return "Static data"

    @property
    def addresses(self) -> List[str]:
        """Addresses with a known balance history."""
        return list(self._balances)

    @property
    def currencies(self) -> List[str]:
        """Currencies with a known price series."""
        return list(self._prices)

    async def get_balance_history(self, address: str) -> AddressBalanceHistory:
        history = self._balances.get(address)
        if history is None:
            logger.debug(f"No balance history for {address}, using empty history")
            return AddressBalanceHistory(address=address)
        return history

    async def get_price_history(self, currency: str, days: int) -> PriceSeries:
        series = self._prices.get(currency.upper())
        if series is None:
            raise ValueError(
                f"No price history for currency: {currency}. Available: {self.currencies}"
            )
        return PriceSeries(currency=series.currency, points=series.points[-days:])
