"""
Centralized settings for the gym pricing tool.
"""
import os
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class OfferTier:
    """A special-offer rebate: subtract `amount` when the total exceeds `threshold`."""
    threshold: Decimal
    amount: Decimal


@dataclass(frozen=True)
class Settings:
    """Application settings with sensible defaults."""

    # Pricing rules
    premium_surcharge_rate: Decimal = Decimal("0.15")
    group_discount_rate: Decimal = Decimal("0.10")
    group_min_members: int = 2

    # Highest threshold first; only the first matching tier applies
    offer_tiers: tuple = (
        OfferTier(threshold=Decimal("400"), amount=Decimal("50")),
        OfferTier(threshold=Decimal("200"), amount=Decimal("20")),
    )

    # Display
    currency_symbol: str = "$"

    # API server
    api_host: str = "0.0.0.0"
    api_port: int = 8000

    def __post_init__(self):
        thresholds = [t.threshold for t in self.offer_tiers]
        if thresholds != sorted(thresholds, reverse=True):
            raise ValueError("offer_tiers must be ordered from highest threshold to lowest")
        for tier in self.offer_tiers:
            if not 0 <= tier.amount <= tier.threshold:
                raise ValueError(
                    f"Offer amount {tier.amount} must be between 0 and its threshold {tier.threshold}"
                )
        if self.premium_surcharge_rate < 0:
            raise ValueError("premium_surcharge_rate must not be negative")
        if not 0 <= self.group_discount_rate <= 1:
            raise ValueError("group_discount_rate must be between 0 and 1")
        if self.group_min_members < 1:
            raise ValueError("group_min_members must be at least 1")

    @classmethod
    def load(cls, environ: Optional[dict] = None) -> 'Settings':
        """Load settings, applying GYM_PRICING_* environment overrides."""
        env = os.environ if environ is None else environ
        defaults = cls()

        return cls(
            premium_surcharge_rate=Decimal(
                env.get("GYM_PRICING_PREMIUM_SURCHARGE", defaults.premium_surcharge_rate)
            ),
            group_discount_rate=Decimal(
                env.get("GYM_PRICING_GROUP_DISCOUNT", defaults.group_discount_rate)
            ),
            group_min_members=int(
                env.get("GYM_PRICING_GROUP_MIN_MEMBERS", defaults.group_min_members)
            ),
            offer_tiers=defaults.offer_tiers,
            currency_symbol=env.get("GYM_PRICING_CURRENCY_SYMBOL", defaults.currency_symbol),
            api_host=env.get("GYM_PRICING_API_HOST", defaults.api_host),
            api_port=int(env.get("GYM_PRICING_API_PORT", defaults.api_port)),
        )


# Default settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings.load()
    return _settings
