#!/usr/bin/env python3
"""Helper script to check and create the .env file for quote configuration."""

from pathlib import Path
import os

TEMPLATE = """# Google Distance Matrix (required for quotes)
WASHQUOTE_GOOGLE_MAPS_API_KEY=your-server-key-here

# Business origin used for travel distance
WASHQUOTE_BUSINESS_ORIGIN=Langley, BC, Canada

# API Configuration
WASHQUOTE_API_PREFIX=/api
# WASHQUOTE_FRONTEND_ALLOWED_ORIGINS - JSON array or comma-separated list

# Service area and travel surcharge
WASHQUOTE_MAX_SERVICE_DISTANCE_KM=45
WASHQUOTE_SURCHARGE_THRESHOLD_KM=20
WASHQUOTE_SURCHARGE_RATE_PER_KM=2.50

# Pricing (JSON object or key=value pairs)
WASHQUOTE_BASE_RATE_PER_STORY=1=350,2=500,3=650
WASHQUOTE_MATERIAL_MULTIPLIERS=vinyl=1.0,brick=1.1,stucco=1.35
WASHQUOTE_MARGIN_FACTOR=1.15
WASHQUOTE_MANUAL_REVIEW_SQUARE_FEET=4500
"""


def _mask(value: str) -> str:
    if len(value) > 12:
        return value[:6] + "..." + value[-4:]
    return value


def main():
    project_root = Path(__file__).parent
    env_file = project_root / ".env"

    print("=" * 60)
    print("Quote Engine Environment Checker")
    print("=" * 60)
    print()

    if env_file.exists():
        print(f"✅ Found .env file at: {env_file}")
        print()
        print("Current contents:")
        print("-" * 60)
        with open(env_file, "r", encoding="utf-8") as f:
            for line in f.read().split("\n"):
                name, separator, value = line.partition("=")
                if separator and "API_KEY" in name:
                    print(f"{name}={_mask(value.strip())}")
                else:
                    print(line)
        print("-" * 60)
        print()
    else:
        print(f"❌ .env file NOT found at: {env_file}")
        print()
        with open(env_file, "w", encoding="utf-8") as f:
            f.write(TEMPLATE)
        print(f"✅ Created template .env file at: {env_file}")
        print("⚠️  Please edit .env and add your Google Maps server key!")
        print()
        return

    print("Checking environment variables...")
    print()
    for name in ("WASHQUOTE_GOOGLE_MAPS_API_KEY", "WASHQUOTE_BUSINESS_ORIGIN"):
        value = os.getenv(name)
        if value:
            print(f"✅ {name} (from environment): {_mask(value)}")
        else:
            print(f"ℹ️  {name} not set in environment (may come from .env)")
    print()

    print("Testing config loading...")
    print()
    try:
        import sys
        sys.path.insert(0, str(project_root / "src"))
        from washquote.config import settings

        config = settings.pricing_configuration()
    except Exception as e:
        print(f"❌ Error loading config: {e}")
        print()
        print("Make sure you're running this from the project root directory")
        return

    print(f"Business origin:        {settings.business_origin}")
    print(f"Service radius:         {config.max_service_distance_km:g} km")
    print(
        f"Travel surcharge:       ${config.surcharge_rate_per_km:.2f}/km beyond "
        f"{config.surcharge_threshold_km:g} km"
    )
    print(f"Base rates:             {dict(config.base_rate_per_story)}")
    print(f"Material multipliers:   {dict(config.material_multipliers)}")
    print(f"Margin factor:          {config.margin_factor}")
    print(f"Manual review above:    {settings.manual_review_square_feet} sq ft")
    print()

    if settings.google_maps_api_key:
        print("=" * 60)
        print("✅ SUCCESS: Quote engine is configured!")
        print("=" * 60)
    else:
        print("=" * 60)
        print("❌ ERROR: Google Maps API key is NOT configured")
        print("=" * 60)
        print()
        print("Troubleshooting:")
        print("1. Make sure .env file exists in project root")
        print("2. Make sure variables start with WASHQUOTE_ prefix")
        print("3. Restart backend after editing .env")
        print()


if __name__ == "__main__":
    main()
