"""Serviceability and travel surcharge evaluation for destination addresses."""

from __future__ import annotations

import logging

from ...models.domain import (
    DistanceMeasurement,
    PricingConfiguration,
    RejectionReason,
    RoutingOutcome,
    ServiceOrigin,
)
from ..rounding import round_currency, round_whole
from .base import DestinationNotFoundError, DistanceProvider, RoutingProviderError

logger = logging.getLogger(__name__)


def format_duration(duration_seconds: float) -> str:
    return f"{round_whole(duration_seconds / 60)} mins"


def travel_surcharge_for(distance_km: float, config: PricingConfiguration) -> float:
    """Surcharge for the kilometres driven beyond the free local radius."""
    excess_km = max(0.0, distance_km - config.surcharge_threshold_km)
    if excess_km == 0:
        return 0.0
    return round_currency(excess_km * config.surcharge_rate_per_km)


class DistanceEvaluator:
    """Turns a destination address into a serviceability decision.

    Exactly one provider call is made per evaluation. Every failure is
    reported through ``RoutingOutcome.rejection_reason``; ``evaluate`` does
    not raise.
    """

    def __init__(
        self,
        provider: DistanceProvider,
        origin: ServiceOrigin,
        config: PricingConfiguration,
    ) -> None:
        self.provider = provider
        self.origin = origin
        self.config = config

    def evaluate(self, destination_address: str) -> RoutingOutcome:
        destination = (destination_address or "").strip()
        if not destination:
            return RoutingOutcome.failed(RejectionReason.INVALID_ADDRESS)

        try:
            measurement = self.provider.lookup_distance(self.origin.address, destination)
        except DestinationNotFoundError as e:
            logger.info(f"Destination '{destination}' could not be resolved: {e}")
            return RoutingOutcome.failed(RejectionReason.INVALID_ADDRESS)
        except RoutingProviderError as e:
            logger.error(f"Routing provider failed for '{destination}': {e}")
            return RoutingOutcome.failed(RejectionReason.PROVIDER_ERROR)
        except Exception:
            logger.exception(f"Unexpected routing provider failure for '{destination}'")
            return RoutingOutcome.failed(RejectionReason.PROVIDER_ERROR)

        return self.classify(measurement)

    def classify(self, measurement: DistanceMeasurement) -> RoutingOutcome:
        distance_km = measurement.distance_meters / 1000
        duration_label = format_duration(measurement.duration_seconds)

        if distance_km > self.config.max_service_distance_km:
            return RoutingOutcome(
                distance_km=distance_km,
                duration_label=duration_label,
                travel_surcharge=0.0,
                serviceable=False,
                rejection_reason=RejectionReason.OUT_OF_SERVICE_AREA,
            )

        return RoutingOutcome(
            distance_km=distance_km,
            duration_label=duration_label,
            travel_surcharge=travel_surcharge_for(distance_km, self.config),
            serviceable=True,
        )
