"""Quote orchestration service."""

from __future__ import annotations

import logging
from typing import Union

from ...config import pricing_config, settings
from ...models.domain import PricingConfiguration, RejectionReason, RoutingOutcome
from ...schemas.quote import (
    BreakdownModel,
    ManualReviewResponse,
    QuoteRejectionResponse,
    QuoteRequest,
    QuoteResponse,
    RoutingModel,
)
from ..pricing.calculator import compute_quote
from ..routing.distance_matrix_client import GoogleDistanceMatrixClient
from ..routing.evaluator import DistanceEvaluator
from .notifications import Lead, LeadNotifier, LoggingLeadNotifier

logger = logging.getLogger(__name__)

QuoteResult = Union[QuoteResponse, QuoteRejectionResponse, ManualReviewResponse]


class QuoteValidationError(ValueError):
    """Required request fields are missing."""


class AddressNotResolvedError(ValueError):
    """The service address could not be located by the routing provider."""


class RoutingUnavailableError(ConnectionError):
    """The routing provider failed; the request may be retried later."""


def _missing_fields(payload: QuoteRequest) -> list[str]:
    missing = []
    if not payload.address or not payload.address.strip():
        missing.append("address")
    if not payload.stories or payload.stories < 1:
        missing.append("stories")
    if payload.lat is None or payload.lng is None:
        missing.append("coordinates")
    if not payload.email or not payload.email.strip():
        missing.append("email")
    return missing


def _build_evaluator(config: PricingConfiguration) -> DistanceEvaluator:
    return DistanceEvaluator(
        provider=GoogleDistanceMatrixClient(),
        origin=settings.service_origin(),
        config=config,
    )


def _rejection(outcome: RoutingOutcome, config: PricingConfiguration) -> QuoteRejectionResponse:
    distance = outcome.distance_km_rounded
    return QuoteRejectionResponse(
        reason=outcome.rejection_reason.value,
        distance_km=distance,
        message=(
            f"Your location is {distance}km away. We currently serve within "
            f"{config.max_service_distance_km:g}km of {settings.business_origin}."
        ),
    )


def generate_quote(
    payload: QuoteRequest,
    *,
    evaluator: DistanceEvaluator | None = None,
    config: PricingConfiguration | None = None,
    notifier: LeadNotifier | None = None,
    manual_review_square_feet: int | None = None,
) -> QuoteResult:
    """Validate, route and price one quote request.

    Large properties short-circuit to manual review before any routing call.
    Out-of-area locations come back as a rejection value; unresolvable
    addresses and provider failures raise so the API layer can map them to
    distinct status codes.
    """
    config = config or pricing_config
    notifier = notifier or LoggingLeadNotifier()
    threshold = (
        manual_review_square_feet if manual_review_square_feet is not None else settings.manual_review_square_feet
    )

    missing = _missing_fields(payload)
    if missing:
        raise QuoteValidationError(f"Missing required fields: {', '.join(missing)}")

    if payload.square_feet is not None and payload.square_feet > threshold:
        logger.info(f"Quote for '{payload.address}' ({payload.square_feet} sq ft) routed to manual review")
        return ManualReviewResponse(
            message=(
                f"Properties over {threshold:,} sq ft receive a custom estate quote. "
                "We will contact you to arrange an on-site assessment."
            )
        )

    evaluator = evaluator or _build_evaluator(config)
    outcome = evaluator.evaluate(payload.address)

    if outcome.rejection_reason is RejectionReason.OUT_OF_SERVICE_AREA:
        logger.info(f"Rejected quote for '{payload.address}': {outcome.distance_km:.1f}km is outside the service area")
        return _rejection(outcome, config)
    if outcome.rejection_reason is RejectionReason.INVALID_ADDRESS:
        raise AddressNotResolvedError("Invalid address. Please verify the address and try again.")
    if not outcome.serviceable:
        raise RoutingUnavailableError("Routing service unavailable. Please try again later.")

    material = (payload.material or "").strip().lower() or config.default_material
    breakdown = compute_quote(payload.stories, material, outcome.travel_surcharge, config)

    lead = Lead(
        address=payload.address.strip(),
        email=payload.email.strip(),
        stories=payload.stories,
        square_feet=payload.square_feet,
        material=material,
        routing=outcome,
        quote=breakdown,
    )
    try:
        notifier.notify(lead)
    except Exception:
        logger.exception(f"Failed to send lead notification for '{lead.address}'")

    return QuoteResponse(
        min_price=breakdown.min_price,
        max_price=breakdown.max_price,
        material=material,
        breakdown=BreakdownModel(
            base_price=breakdown.base_price,
            material_surcharge=breakdown.material_surcharge,
            travel_surcharge=breakdown.travel_surcharge,
        ),
        routing=RoutingModel(
            distance_km=outcome.distance_km_rounded,
            duration_label=outcome.duration_label,
            travel_surcharge=outcome.travel_surcharge,
        ),
    )
