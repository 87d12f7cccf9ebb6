"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {"status": "ok"}


def _get_routing_health_check():
    """Lazy import to avoid startup failures."""
    from ...services.routing.distance_matrix_client import check_health as routing_health_check
    return routing_health_check


@router.get("/health/routing", status_code=status.HTTP_200_OK)
def health_routing() -> dict:
    """Check distance-matrix provider health."""
    try:
        routing_health_check = _get_routing_health_check()
        status_flag = routing_health_check()
        return {"service": "distance-matrix", "healthy": status_flag}
    except Exception as e:
        return {"service": "distance-matrix", "healthy": False, "error": str(e)}
