"""Contract between the distance evaluator and routing providers."""

from __future__ import annotations

from typing import Protocol

from ...models.domain import DistanceMeasurement


class DestinationNotFoundError(ValueError):
    """The provider could not resolve the destination address."""


class RoutingProviderError(ConnectionError):
    """The provider call failed or returned an unusable answer."""


class DistanceProvider(Protocol):
    """Anything that can report a driving distance between two addresses."""

    def lookup_distance(self, origin: str, destination: str) -> DistanceMeasurement:
        """Return driving distance/duration or raise one of the errors above."""
        ...
