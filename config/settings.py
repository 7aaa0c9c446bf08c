"""Pydantic settings for Wallet Worth Tracker configuration."""

from functools import lru_cache
from pathlib import Path
from typing import Annotated, List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from src.core.constants import ALPH_DECIMALS, ALPH_SYMBOL, DEFAULT_CURRENCY, PRICE_HISTORY_DAYS


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Wallet addresses to track
    wallet_addresses: Annotated[List[str], NoDecode] = Field(default_factory=list, description="Wallet addresses to chart")

    # Fiat pricing
    currency: str = Field(default=DEFAULT_CURRENCY, description="Fiat currency for the worth chart")
    price_history_days: int = Field(default=PRICE_HISTORY_DAYS, ge=2, le=3650, description="Trailing days of price history")

    # Chart
    chart_length: str = Field(default="1y", description="Default chart length (1w, 1m, 1y)")

    # Asset
    asset_symbol: str = Field(default=ALPH_SYMBOL, description="Symbol of the tracked asset")
    asset_decimals: int = Field(default=ALPH_DECIMALS, ge=0, le=36, description="Decimal exponent of the smallest unit")

    # Input data
    data_file: Optional[Path] = Field(default=None, description="JSON export with balances and prices")

    # Logging
    log_level: str = Field(default="WARNING", description="Root log level for the application")

    @field_validator("wallet_addresses", mode="before")
    @classmethod
    def parse_wallet_addresses(cls, v):
        """Parse comma-separated wallet addresses."""
        if isinstance(v, str):
            if not v.strip():
                return []
            return [addr.strip() for addr in v.split(",") if addr.strip()]
        return v or []

    @field_validator("currency", mode="before")
    @classmethod
    def normalize_currency(cls, v):
        """Currency codes are stored upper-case."""
        if isinstance(v, str):
            return v.strip().upper()
        return v

    @field_validator("chart_length")
    @classmethod
    def validate_chart_length(cls, v):
        """Reject chart lengths the chart cannot window on."""
        from src.core.models import ChartLength

        return ChartLength.parse(v).value

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v):
        if isinstance(v, str):
            return v.strip().upper()
        return v

    @field_validator("data_file", mode="before")
    @classmethod
    def parse_data_file(cls, v):
        """Convert string to Path."""
        if isinstance(v, str):
            return Path(v) if v.strip() else None
        return v


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
