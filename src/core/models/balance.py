"""Address balance history models."""

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Mapping, Optional


@dataclass(frozen=True)
class BalanceSnapshot:
    """Balance of an address on one calendar day, in smallest units."""

    date: date
    balance: int

    def __post_init__(self):
        if self.balance < 0:
            raise ValueError(f"Balance must be non-negative, got {self.balance} on {self.date}")

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {
            "date": self.date.isoformat(),
            "balance": str(self.balance),
        }


@dataclass
class AddressBalanceHistory:
    """
    Sparse balance history of a single address.

    Only dates on which the balance changed (or was sampled) carry an entry,
    so a missing date means "unchanged since the last known value".
    """

    address: str
    snapshots: Dict[date, BalanceSnapshot] = field(default_factory=dict)

    @classmethod
    def from_balances(cls, address: str, balances: Mapping[date, int]) -> "AddressBalanceHistory":
        """Build a history from a date -> smallest-unit amount mapping."""
        return cls(
            address=address,
            snapshots={d: BalanceSnapshot(date=d, balance=int(b)) for d, b in balances.items()},
        )

    def balance_on(self, day: date) -> Optional[int]:
        """Balance recorded on exactly ``day``, or None if there is no entry."""
        snapshot = self.snapshots.get(day)
        return snapshot.balance if snapshot is not None else None

    def add(self, snapshot: BalanceSnapshot) -> None:
        """Record a snapshot, replacing any entry for the same date."""
        self.snapshots[snapshot.date] = snapshot

    @property
    def dates(self) -> List[date]:
        """Snapshot dates in ascending order."""
        return sorted(self.snapshots)

    @property
    def is_empty(self) -> bool:
        return not self.snapshots

    def __len__(self) -> int:
        return len(self.snapshots)

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {
            "address": self.address,
            "snapshots": [self.snapshots[d].to_dict() for d in self.dates],
        }
