"""Lead notifications raised after a successful quote."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

from ...models.domain import QuoteBreakdown, RoutingOutcome

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class Lead:
    """A priced enquiry the business owner should follow up on."""

    address: str
    email: str
    stories: int
    square_feet: int | None
    material: str
    routing: RoutingOutcome
    quote: QuoteBreakdown

    @property
    def subject(self) -> str:
        return (
            f"New Lead: {self.address} - ${self.quote.min_price}-${self.quote.max_price} "
            f"({self.routing.distance_km_rounded}km)"
        )


class LeadNotifier(Protocol):
    def notify(self, lead: Lead) -> None:
        ...


class LoggingLeadNotifier:
    """Records leads in the application log."""

    def notify(self, lead: Lead) -> None:
        logger.info(
            f"{lead.subject} | email={lead.email} stories={lead.stories} "
            f"sqft={lead.square_feet} material={lead.material} "
            f"base={lead.quote.base_price:.2f} material_surcharge={lead.quote.material_surcharge:.2f} "
            f"travel_surcharge={lead.quote.travel_surcharge:.2f}"
        )
