"""
Settlement Settings for the LoanLink payment coordinator.

Environment variables use the SETTLEMENT_ prefix:
    SETTLEMENT_DECIMAL_PLACES=2

Usage:
    from loanlink.service.settlement.settings import settlement_settings

    places = settlement_settings.decimal_places

    # Or create custom settings for testing
    custom = SettlementSettings(decimal_places=0)

Tracking codes are not configurable; their format is fixed in tracking.py.
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class SettlementSettings(BaseSettings):
    """Configurable parameters for amount conversion."""

    model_config = SettingsConfigDict(
        env_prefix="SETTLEMENT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    decimal_places: int = Field(
        default=2,
        description="Decimal places of the currency's minor unit (2 for cents)",
    )

    @field_validator("decimal_places")
    @classmethod
    def validate_decimal_places(cls, v: int) -> int:
        if v < 0 or v > 4:
            raise ValueError("decimal_places must be between 0 and 4")
        return v

    @property
    def minor_units_per_major(self) -> int:
        """Minor currency units per major unit (100 cents per dollar)."""
        return 10**self.decimal_places


@lru_cache
def get_settlement_settings() -> SettlementSettings:
    """Get cached settlement settings instance."""
    return SettlementSettings()


settlement_settings = get_settlement_settings()
