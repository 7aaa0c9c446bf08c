"""Smallest-unit amount conversion."""

from decimal import Decimal

from src.core.constants import ALPH_DECIMALS


def to_human_readable_amount(amount: int, decimals: int = ALPH_DECIMALS) -> Decimal:
    """
    Convert an integer smallest-unit amount to a decimal asset amount.

    The Decimal is built from the digits directly, so the conversion is exact
    for any amount regardless of the active decimal context precision.

    Args:
        amount: Amount in the indivisible base unit
        decimals: Decimal exponent of the asset

    Returns:
        Human-readable amount, e.g. Decimal("1.5") for 1_500_000 with 6 decimals
    """
    if decimals < 0:
        raise ValueError(f"decimals must be non-negative, got {decimals}")

    amount = int(amount)
    sign = 1 if amount < 0 else 0
    digits = tuple(int(d) for d in str(abs(amount)))
    return Decimal((sign, digits, -decimals))
