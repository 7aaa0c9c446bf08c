"""Pytest configuration and fixtures."""

import pytest
from datetime import date, timedelta
from decimal import Decimal
from typing import Callable, Dict, List, Optional

from config.settings import Settings
from src.core.models import AddressBalanceHistory, PricePoint, PriceSeries, WorthPoint


@pytest.fixture
def address_x() -> str:
    return "1DrDyTr9RpRsQnDnXo2YRiPzPW4ooHX5LLoqXrqfMrpQH"


@pytest.fixture
def address_y() -> str:
    return "19XWyoWy6DjrRp7erWqPfBnh7HL1Sb2Ub8SVjux2d71Eb"


@pytest.fixture
def today() -> date:
    """Fixed current date for window arithmetic."""
    return date(2024, 6, 30)


@pytest.fixture
def make_prices(today) -> Callable[..., PriceSeries]:
    """Factory for daily price series (ending today unless ``start`` is given)."""

    def _make(
        prices: List,
        start: Optional[date] = None,
        currency: str = "USD",
    ) -> PriceSeries:
        if start is None:
            start = today - timedelta(days=len(prices) - 1)
        return PriceSeries(
            currency=currency,
            points=[
                PricePoint(date=start + timedelta(days=i), price=Decimal(str(p)))
                for i, p in enumerate(prices)
            ],
        )

    return _make


@pytest.fixture
def make_worth() -> Callable[..., List[WorthPoint]]:
    """Factory for daily worth series starting on ``start``."""

    def _make(values: List, start: date = date(2024, 1, 1)) -> List[WorthPoint]:
        return [
            WorthPoint(date=start + timedelta(days=i), value=Decimal(str(v)))
            for i, v in enumerate(values)
        ]

    return _make


@pytest.fixture
def make_history() -> Callable[[str, Dict[date, int]], AddressBalanceHistory]:
    return AddressBalanceHistory.from_balances


@pytest.fixture
def three_days(today):
    """D1, D2, D3 ending today."""
    return [today - timedelta(days=2), today - timedelta(days=1), today]


@pytest.fixture
def year_of_prices(make_prices) -> PriceSeries:
    """365 days of flat $2 prices ending today."""
    return make_prices([2] * 365)


@pytest.fixture
def test_settings(address_x, address_y) -> Settings:
    """Settings that ignore any .env file."""
    return Settings(
        _env_file=None,
        wallet_addresses=[address_x, address_y],
        currency="usd",
        price_history_days=365,
        chart_length="1y",
        asset_decimals=0,
    )
