"""Application configuration and settings management."""

from typing import Annotated, Any, Optional

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from .models.domain import PricingConfiguration, ServiceOrigin


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="WASHQUOTE_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        frozen=True,
    )

    app_name: str = "Pressure Washing Quote API"
    api_prefix: str = "/api"
    log_level: str = Field(default="INFO", description="Root logging level applied at startup.")
    business_origin: str = Field(
        default="Langley, BC, Canada",
        description="Address travel distance is measured from.",
    )
    google_maps_api_key: Optional[str] = Field(
        default=None,
        description="Server-side key for the Google Distance Matrix API.",
    )
    distance_matrix_base_url: str = Field(
        default="https://maps.googleapis.com/maps/api",
        description="Base URL of the distance-matrix provider.",
    )
    routing_timeout_seconds: float = Field(default=8.0, gt=0.0)
    routing_max_retries: int = Field(default=0, ge=0)
    max_service_distance_km: float = Field(default=45.0, ge=0.0)
    surcharge_threshold_km: float = Field(default=20.0, ge=0.0)
    surcharge_rate_per_km: float = Field(default=2.50, ge=0.0)
    margin_factor: float = Field(default=1.15, ge=1.0)
    base_rate_per_story: Annotated[dict[int, float], NoDecode] = Field(
        default_factory=lambda: {1: 350.0, 2: 500.0, 3: 650.0},
        description="Base price per story tier; the highest tier covers taller homes.",
    )
    material_multipliers: Annotated[dict[str, float], NoDecode] = Field(
        default_factory=lambda: {"vinyl": 1.0, "brick": 1.1, "stucco": 1.35},
        description="Risk multiplier applied to the base price per siding material.",
    )
    default_material: str = "vinyl"
    manual_review_square_feet: int = Field(
        default=4500,
        ge=0,
        description="Properties larger than this are quoted by a person.",
    )
    frontend_allowed_origins: Annotated[tuple[str, ...], NoDecode] = Field(
        default=(
            "http://localhost:3000",
            "http://127.0.0.1:3000",
        ),
        description="Permitted web origins for browser clients (CORS).",
    )

    @field_validator("frontend_allowed_origins", mode="before")
    @classmethod
    def _parse_str_tuple_from_env(cls, value: Any) -> tuple[str, ...]:
        """Parse string tuple from environment variable (comma-separated or JSON array)."""
        if isinstance(value, tuple):
            return value
        if isinstance(value, list):
            return tuple(str(item) for item in value)
        if isinstance(value, str):
            try:
                parsed = json.loads(value)
                if isinstance(parsed, list):
                    return tuple(str(item) for item in parsed)
            except (json.JSONDecodeError, TypeError):
                pass
            if "," in value:
                return tuple(item.strip() for item in value.split(",") if item.strip())
            if value.strip():
                return (value.strip(),)
        return tuple()

    @field_validator("base_rate_per_story", "material_multipliers", mode="before")
    @classmethod
    def _parse_mapping_from_env(cls, value: Any) -> Any:
        """Parse a mapping from a JSON object or ``key=value,key=value`` string."""
        if not isinstance(value, str):
            return value
        try:
            parsed = json.loads(value)
            if isinstance(parsed, dict):
                return parsed
        except (json.JSONDecodeError, TypeError):
            pass
        mapping: dict[str, str] = {}
        for item in value.split(","):
            if not item.strip():
                continue
            key, separator, raw = item.partition("=")
            if not separator:
                raise ValueError(f"Expected key=value pair, got '{item.strip()}'.")
            mapping[key.strip()] = raw.strip()
        return mapping

    @field_validator("default_material")
    @classmethod
    def _normalise_material(cls, value: str) -> str:
        return value.strip().lower()

    def service_origin(self) -> ServiceOrigin:
        return ServiceOrigin(address=self.business_origin)

    def pricing_configuration(self) -> PricingConfiguration:
        """Build the immutable pricing configuration shared by every request."""
        return PricingConfiguration(
            base_rate_per_story=self.base_rate_per_story,
            material_multipliers=self.material_multipliers,
            max_service_distance_km=self.max_service_distance_km,
            surcharge_threshold_km=self.surcharge_threshold_km,
            surcharge_rate_per_km=self.surcharge_rate_per_km,
            margin_factor=self.margin_factor,
            default_material=self.default_material,
        )


settings = Settings()
pricing_config = settings.pricing_configuration()
