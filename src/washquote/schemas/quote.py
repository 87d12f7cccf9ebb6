"""Quote request/response schemas."""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class QuoteRequest(CamelModel):
    """Property details submitted from the quote form.

    Required fields are optional here so that missing values are reported
    together by the quote service rather than as schema errors.
    """

    address: Optional[str] = None
    stories: Optional[int] = Field(default=None, description="Number of stories; 3 or more share one tier.")
    square_feet: Optional[int] = Field(default=None, ge=0)
    material: Optional[str] = Field(default=None, description="Siding material, e.g. vinyl, brick or stucco.")
    lat: Optional[float] = None
    lng: Optional[float] = None
    email: Optional[str] = None


class BreakdownModel(CamelModel):
    base_price: float
    material_surcharge: float
    travel_surcharge: float


class RoutingModel(CamelModel):
    distance_km: int
    duration_label: str
    travel_surcharge: float


class QuoteResponse(CamelModel):
    min_price: int
    max_price: int
    material: str
    breakdown: BreakdownModel
    routing: RoutingModel


class QuoteRejectionResponse(CamelModel):
    rejected: Literal[True] = True
    reason: str
    distance_km: int
    message: str


class ManualReviewResponse(CamelModel):
    requires_manual_review: Literal[True] = True
    message: str


class MaterialOptionModel(CamelModel):
    material: str
    multiplier: float
    risk_level: str


class MaterialOptionsResponse(CamelModel):
    default_material: str
    materials: List[MaterialOptionModel]
