"""Quote endpoints."""

from __future__ import annotations

import logging
from typing import Union

from fastapi import APIRouter, HTTPException, status
from fastapi.responses import JSONResponse

from ...config import pricing_config
from ...schemas.quote import (
    ManualReviewResponse,
    MaterialOptionModel,
    MaterialOptionsResponse,
    QuoteRejectionResponse,
    QuoteRequest,
    QuoteResponse,
)
from ...services.pricing.calculator import material_options
from ...services.quotes.service import generate_quote

router = APIRouter(prefix="/quote", tags=["quote"])

logger = logging.getLogger(__name__)


@router.post(
    "",
    response_model=Union[QuoteResponse, ManualReviewResponse],
    responses={status.HTTP_400_BAD_REQUEST: {"model": QuoteRejectionResponse}},
    status_code=status.HTTP_200_OK,
)
def create_quote(payload: QuoteRequest):
    try:
        result = generate_quote(payload)
    except ConnectionError as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logger.exception(f"Error generating quote: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to generate quote",
        ) from exc

    if isinstance(result, QuoteRejectionResponse):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=result.model_dump(by_alias=True),
        )
    return result


@router.get("/materials", response_model=MaterialOptionsResponse, status_code=status.HTTP_200_OK)
def list_materials() -> MaterialOptionsResponse:
    """Materials offered in the quote form with their risk level."""
    return MaterialOptionsResponse(
        default_material=pricing_config.default_material,
        materials=[
            MaterialOptionModel(material=option.material, multiplier=option.multiplier, risk_level=option.risk_level)
            for option in material_options(pricing_config)
        ],
    )
