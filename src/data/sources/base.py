"""Base input source interfaces.

Balance histories and price series are produced outside the worth chart
(by a balance sync and a price feed). These interfaces are the seam the
data pipeline reads them through.
"""

from abc import ABC, abstractmethod

from src.core.models import AddressBalanceHistory, PriceSeries


class BalanceHistorySource(ABC):
    """Abstract provider of per-address balance histories."""

    @property
    @abstractmethod
    def source_name(self) -> str:
        """Return a human-readable source name."""
        ...

    @abstractmethod
    async def get_balance_history(self, address: str) -> AddressBalanceHistory:
        """Fetch the sparse balance history of an address.

        Args:
            address: Address identifier

        Returns:
            AddressBalanceHistory, empty if the address has no snapshots
        """
        ...

    async def close(self) -> None:
        """Close any open connections and clean up resources."""
        return None


class PriceHistorySource(ABC):
    """Abstract provider of daily fiat price series."""

    @property
    @abstractmethod
    def source_name(self) -> str:
        """Return a human-readable source name."""
        ...

    @abstractmethod
    async def get_price_history(self, currency: str, days: int) -> PriceSeries:
        """Fetch a dense daily price series.

        Args:
            currency: Fiat currency code, e.g. "USD"
            days: Number of trailing days

        Returns:
            Date-ascending PriceSeries with one point per day
        """
        ...

    async def close(self) -> None:
        """Close any open connections and clean up resources."""
        return None
