"""Dataclass-based engine configuration.

The engine's limits and naming rules live in frozen dataclasses so every
component reads the same values and nothing mutates them at runtime:
- Threshold lists: the level cap
- Variants: display-name separator and placeholder
- Pricing: the price-tier columns every unit row carries

Usage::

    config = EngineConfig.from_env()
    form = ProductForm(config=config)
"""

from dataclasses import dataclass, field


# ---------------------------------------------------------------------------
# Nested config sections
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ThresholdConfig:
    """Tiered threshold list limits."""

    max_levels: int = 5


@dataclass(frozen=True)
class VariantConfig:
    """How generated variants are named."""

    name_separator: str = " / "
    placeholder_name: str = "Variant"


@dataclass(frozen=True)
class PriceTier:
    """One price column of the unit matrix."""

    id: str
    name: str


DEFAULT_PRICE_TIERS = (
    PriceTier(id="retail", name="Retail"),
    PriceTier(id="wholesale", name="Wholesale"),
    PriceTier(id="distributor", name="Distributor"),
)


@dataclass(frozen=True)
class PricingConfig:
    """Price-tier columns shared by every unit row."""

    price_tiers: tuple[PriceTier, ...] = DEFAULT_PRICE_TIERS

    @property
    def tier_ids(self) -> list[str]:
        return [tier.id for tier in self.price_tiers]


# ---------------------------------------------------------------------------
# Top-level engine config
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class EngineConfig:
    """Complete configuration for the product form engine."""

    thresholds: ThresholdConfig = field(default_factory=ThresholdConfig)
    variants: VariantConfig = field(default_factory=VariantConfig)
    pricing: PricingConfig = field(default_factory=PricingConfig)

    @classmethod
    def default(cls) -> "EngineConfig":
        """Create config with all defaults."""
        return cls()

    @classmethod
    def from_env(cls, prefix: str = "PRODUCT_FORM_") -> "EngineConfig":
        """Create config from environment variables.

        Example: PRODUCT_FORM_MAX_LEVELS=3
                 PRODUCT_FORM_PRICE_TIERS=retail:Retail,vip:VIP
        """
        import os

        overrides = {}
        max_levels = os.getenv(f"{prefix}MAX_LEVELS")
        if max_levels:
            overrides["thresholds"] = ThresholdConfig(max_levels=int(max_levels))

        tiers = os.getenv(f"{prefix}PRICE_TIERS")
        if tiers:
            overrides["pricing"] = PricingConfig(price_tiers=parse_price_tiers(tiers))

        return cls(**overrides)


def parse_price_tiers(raw: str) -> tuple[PriceTier, ...]:
    """Parse ``id:Name,id:Name`` into price tiers. A bare id is its own name."""
    tiers = []
    for chunk in raw.split(","):
        chunk = chunk.strip()
        if not chunk:
            continue
        tier_id, _, name = chunk.partition(":")
        tier_id = tier_id.strip()
        tiers.append(PriceTier(id=tier_id, name=name.strip() or tier_id))
    if not tiers:
        raise ValueError(f"No price tiers in {raw!r}")
    return tuple(tiers)
