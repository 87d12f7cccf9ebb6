"""Domain models for routing outcomes, pricing configuration and quotes."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping

from ..services.rounding import round_whole


class RejectionReason(str, Enum):
    NONE = "NONE"
    OUT_OF_SERVICE_AREA = "OUT_OF_SERVICE_AREA"
    INVALID_ADDRESS = "INVALID_ADDRESS"
    PROVIDER_ERROR = "PROVIDER_ERROR"


@dataclass(frozen=True, slots=True)
class ServiceOrigin:
    """The business location travel distance is measured from."""

    address: str


@dataclass(slots=True)
class DistanceMeasurement:
    """Raw driving distance and duration reported by a routing provider."""

    distance_meters: float
    duration_seconds: float


@dataclass(slots=True)
class RoutingOutcome:
    """Serviceability decision for one destination address."""

    distance_km: float
    duration_label: str
    travel_surcharge: float
    serviceable: bool
    rejection_reason: RejectionReason = RejectionReason.NONE

    @classmethod
    def failed(cls, reason: RejectionReason) -> "RoutingOutcome":
        return cls(
            distance_km=0.0,
            duration_label="0 mins",
            travel_surcharge=0.0,
            serviceable=False,
            rejection_reason=reason,
        )

    @property
    def distance_km_rounded(self) -> int:
        return round_whole(self.distance_km)


@dataclass(frozen=True, slots=True)
class PricingConfiguration:
    """Tunable pricing constants, loaded once and shared read-only.

    Story tiers map a story count to a base price; any count without its own
    tier is priced at the highest configured tier. Material keys are stored
    lower-cased so lookups can be case-insensitive.
    """

    base_rate_per_story: Mapping[int, float] = field(
        default_factory=lambda: {1: 350.0, 2: 500.0, 3: 650.0}
    )
    material_multipliers: Mapping[str, float] = field(
        default_factory=lambda: {"vinyl": 1.0, "brick": 1.1, "stucco": 1.35}
    )
    max_service_distance_km: float = 45.0
    surcharge_threshold_km: float = 20.0
    surcharge_rate_per_km: float = 2.50
    margin_factor: float = 1.15
    default_material: str = "vinyl"

    def __post_init__(self) -> None:
        if not self.base_rate_per_story:
            raise ValueError("At least one story tier base rate is required.")
        rates = {int(stories): float(rate) for stories, rate in self.base_rate_per_story.items()}
        for stories, rate in rates.items():
            if rate < 0:
                raise ValueError(f"Base rate for {stories} stories must be >= 0, got {rate}.")
        multipliers = {
            str(material).strip().lower(): float(multiplier)
            for material, multiplier in self.material_multipliers.items()
        }
        for material, multiplier in multipliers.items():
            if multiplier < 1.0:
                raise ValueError(f"Material multiplier for '{material}' must be >= 1.0, got {multiplier}.")
        for name in ("max_service_distance_km", "surcharge_threshold_km", "surcharge_rate_per_km"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be >= 0.")
        if self.margin_factor < 1.0:
            raise ValueError(f"margin_factor must be >= 1.0, got {self.margin_factor}.")

        object.__setattr__(self, "base_rate_per_story", MappingProxyType(dict(sorted(rates.items()))))
        object.__setattr__(self, "material_multipliers", MappingProxyType(multipliers))
        object.__setattr__(self, "default_material", self.default_material.strip().lower())

    @property
    def top_story_tier(self) -> int:
        return max(self.base_rate_per_story)


@dataclass(slots=True)
class QuoteBreakdown:
    base_price: float
    material_multiplier: float
    material_surcharge: float
    subtotal: float
    travel_surcharge: float
    total: float
    min_price: int
    max_price: int


@dataclass(slots=True)
class MaterialOption:
    material: str
    multiplier: float
    risk_level: str
