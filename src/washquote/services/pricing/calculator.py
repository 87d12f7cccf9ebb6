"""Material risk and travel adjusted price calculation."""

from __future__ import annotations

from ...models.domain import MaterialOption, PricingConfiguration, QuoteBreakdown
from ..rounding import round_currency, round_whole


def base_rate_for(story_count: int, config: PricingConfiguration) -> float:
    """Base price for a story count; counts without their own tier use the top tier."""
    rate = config.base_rate_per_story.get(story_count)
    if rate is None:
        rate = config.base_rate_per_story[config.top_story_tier]
    return rate


def multiplier_for(material: str | None, config: PricingConfiguration) -> float:
    """Case-insensitive multiplier lookup; unknown materials are priced as baseline."""
    key = (material or "").strip().lower()
    return config.material_multipliers.get(key, 1.0)


def compute_quote(
    story_count: int,
    material: str | None,
    travel_surcharge: float,
    config: PricingConfiguration,
) -> QuoteBreakdown:
    """Price a serviceable job.

    Line items are rounded to cents before they are summed, and the min/max
    range is rounded to whole currency units from that total.
    """
    base_price = round_currency(base_rate_for(story_count, config))
    multiplier = multiplier_for(material, config)

    material_surcharge = round_currency(base_price * (multiplier - 1))
    subtotal = round_currency(base_price * multiplier)
    travel = round_currency(max(0.0, travel_surcharge))
    total = round_currency(base_price + material_surcharge + travel)

    return QuoteBreakdown(
        base_price=base_price,
        material_multiplier=multiplier,
        material_surcharge=material_surcharge,
        subtotal=subtotal,
        travel_surcharge=travel,
        total=total,
        min_price=round_whole(total),
        max_price=round_whole(total * config.margin_factor),
    )


def risk_level(multiplier: float) -> str:
    if multiplier == 1.0:
        return "Standard"
    if multiplier <= 1.15:
        return "Moderate"
    return "High"


def material_options(config: PricingConfiguration) -> list[MaterialOption]:
    return [
        MaterialOption(material=material, multiplier=multiplier, risk_level=risk_level(multiplier))
        for material, multiplier in config.material_multipliers.items()
    ]
