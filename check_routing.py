#!/usr/bin/env python3
"""Script to verify Distance Matrix connectivity and preview a live quote."""

import sys
from pathlib import Path

# Add src to path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root / "src"))

from washquote.config import pricing_config, settings
from washquote.services.routing.distance_matrix_client import GoogleDistanceMatrixClient, check_health
from washquote.services.routing.evaluator import DistanceEvaluator


def main() -> int:
    destination = " ".join(sys.argv[1:]) or "Surrey, BC, Canada"

    print("=" * 60)
    print("Distance Matrix Connection Test")
    print("=" * 60)
    print()

    print("1. Checking routing configuration...")
    if not settings.google_maps_api_key:
        print("   [ERROR] Google Maps API key is not configured")
        print("   Please set WASHQUOTE_GOOGLE_MAPS_API_KEY in your .env file")
        return 1
    print(f"   [OK] Base URL: {settings.distance_matrix_base_url}")
    print(f"   [OK] Business origin: {settings.business_origin}")
    print(f"   [OK] Timeout: {settings.routing_timeout_seconds}s")
    print()

    print("2. Testing provider health check...")
    if not check_health():
        print("   [ERROR] Distance Matrix service is not responding")
        return 1
    print("   [OK] Distance Matrix service is reachable")
    print()

    print(f"3. Evaluating destination '{destination}'...")
    evaluator = DistanceEvaluator(
        provider=GoogleDistanceMatrixClient(),
        origin=settings.service_origin(),
        config=pricing_config,
    )
    outcome = evaluator.evaluate(destination)
    print(f"   Distance: {outcome.distance_km:.1f} km ({outcome.duration_label})")
    print(f"   Serviceable: {outcome.serviceable}")
    print(f"   Rejection reason: {outcome.rejection_reason.value}")
    print(f"   Travel surcharge: ${outcome.travel_surcharge:.2f}")
    print()

    print("=" * 60)
    print("[SUCCESS] Distance Matrix is connected and working!")
    print("=" * 60)
    return 0


if __name__ == "__main__":
    sys.exit(main())
