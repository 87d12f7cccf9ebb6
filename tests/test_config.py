import pytest
from pydantic import ValidationError

from washquote.config import Settings


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path):
    # Keep a developer .env out of these tests.
    monkeypatch.chdir(tmp_path)


def test_defaults_build_pricing_configuration():
    config = Settings().pricing_configuration()

    assert dict(config.base_rate_per_story) == {1: 350.0, 2: 500.0, 3: 650.0}
    assert dict(config.material_multipliers) == {"vinyl": 1.0, "brick": 1.1, "stucco": 1.35}
    assert config.max_service_distance_km == 45
    assert config.surcharge_threshold_km == 20
    assert config.surcharge_rate_per_km == 2.5
    assert config.margin_factor == 1.15
    assert config.default_material == "vinyl"


def test_mappings_parse_from_json_env(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("WASHQUOTE_BASE_RATE_PER_STORY", '{"1": 300, "2": 450}')
    monkeypatch.setenv("WASHQUOTE_MATERIAL_MULTIPLIERS", '{"Vinyl": 1.0, "Wood": 1.15}')

    config = Settings().pricing_configuration()

    assert dict(config.base_rate_per_story) == {1: 300.0, 2: 450.0}
    assert dict(config.material_multipliers) == {"vinyl": 1.0, "wood": 1.15}


def test_mappings_parse_from_key_value_env(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("WASHQUOTE_MATERIAL_MULTIPLIERS", "vinyl=1.0, fiber-cement=1.2")
    monkeypatch.setenv("WASHQUOTE_MAX_SERVICE_DISTANCE_KM", "60")

    settings = Settings()

    assert settings.material_multipliers == {"vinyl": 1.0, "fiber-cement": 1.2}
    assert settings.pricing_configuration().max_service_distance_km == 60


def test_allowed_origins_parse_comma_separated(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("WASHQUOTE_FRONTEND_ALLOWED_ORIGINS", "https://a.example, https://b.example")

    assert Settings().frontend_allowed_origins == ("https://a.example", "https://b.example")


def test_negative_rate_is_rejected(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("WASHQUOTE_SURCHARGE_RATE_PER_KM", "-1")

    with pytest.raises(ValidationError):
        Settings()


def test_discounting_multiplier_fails_configuration(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("WASHQUOTE_MATERIAL_MULTIPLIERS", "vinyl=0.8")

    with pytest.raises(ValueError):
        Settings().pricing_configuration()


def test_service_origin_uses_business_address(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("WASHQUOTE_BUSINESS_ORIGIN", "Surrey, BC, Canada")

    assert Settings().service_origin().address == "Surrey, BC, Canada"
