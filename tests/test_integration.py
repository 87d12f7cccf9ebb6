import pytest
from fastapi.testclient import TestClient

from washquote.main import create_app
from washquote.models.domain import DistanceMeasurement
from washquote.services.routing.base import DestinationNotFoundError, RoutingProviderError


class DummyDistanceMatrix:
    def __init__(self, distance_meters: float = 0.0, duration_seconds: float = 1200.0, error: Exception | None = None):
        self.distance_meters = distance_meters
        self.duration_seconds = duration_seconds
        self.error = error
        self.calls = 0

    def lookup_distance(self, origin, destination):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return DistanceMeasurement(distance_meters=self.distance_meters, duration_seconds=self.duration_seconds)


@pytest.fixture
def api_client() -> TestClient:
    return TestClient(create_app())


@pytest.fixture
def use_provider(monkeypatch: pytest.MonkeyPatch):
    from washquote.services.quotes import service as quote_service

    def install(provider: DummyDistanceMatrix) -> DummyDistanceMatrix:
        monkeypatch.setattr(quote_service, "GoogleDistanceMatrixClient", lambda *args, **kwargs: provider)
        return provider

    return install


def _body(**overrides) -> dict:
    body = {
        "address": "123 Main St, Langley, BC",
        "stories": 2,
        "squareFeet": 2500,
        "material": "brick",
        "lat": 49.1858,
        "lng": -122.6504,
        "email": "customer@example.com",
    }
    body.update(overrides)
    return body


def test_quote_endpoint_returns_priced_breakdown(api_client: TestClient, use_provider):
    use_provider(DummyDistanceMatrix(distance_meters=28400, duration_seconds=1800))

    response = api_client.post("/api/quote", json=_body())

    assert response.status_code == 200
    payload = response.json()
    assert payload["minPrice"] == 571
    assert payload["maxPrice"] == 657
    assert payload["breakdown"] == {"basePrice": 500.0, "materialSurcharge": 50.0, "travelSurcharge": 21.0}
    assert payload["routing"]["distanceKm"] == 28
    assert payload["routing"]["durationLabel"] == "30 mins"


def test_quote_endpoint_rejects_out_of_area(api_client: TestClient, use_provider):
    use_provider(DummyDistanceMatrix(distance_meters=52300))

    response = api_client.post("/api/quote", json=_body())

    assert response.status_code == 400
    payload = response.json()
    assert payload["rejected"] is True
    assert payload["reason"] == "OUT_OF_SERVICE_AREA"
    assert payload["distanceKm"] == 52
    assert "minPrice" not in payload


def test_quote_endpoint_missing_fields(api_client: TestClient, use_provider):
    provider = use_provider(DummyDistanceMatrix(distance_meters=1000))

    response = api_client.post("/api/quote", json={"address": "123 Main St"})

    assert response.status_code == 400
    assert "Missing required fields" in response.json()["detail"]
    assert provider.calls == 0


def test_quote_endpoint_invalid_address(api_client: TestClient, use_provider):
    use_provider(DummyDistanceMatrix(error=DestinationNotFoundError("NOT_FOUND")))

    response = api_client.post("/api/quote", json=_body(address="zzzz"))

    assert response.status_code == 400
    assert "Invalid address" in response.json()["detail"]


def test_quote_endpoint_provider_unavailable(api_client: TestClient, use_provider):
    use_provider(DummyDistanceMatrix(error=RoutingProviderError("timed out")))

    response = api_client.post("/api/quote", json=_body())

    assert response.status_code == 503
    assert "unavailable" in response.json()["detail"]


def test_quote_endpoint_manual_review(api_client: TestClient, use_provider):
    provider = use_provider(DummyDistanceMatrix(distance_meters=1000))

    response = api_client.post("/api/quote", json=_body(squareFeet=6000))

    assert response.status_code == 200
    assert response.json()["requiresManualReview"] is True
    assert provider.calls == 0


def test_materials_endpoint_lists_configured_materials(api_client: TestClient):
    response = api_client.get("/api/quote/materials")

    assert response.status_code == 200
    payload = response.json()
    assert payload["defaultMaterial"] == "vinyl"
    materials = {item["material"]: item for item in payload["materials"]}
    assert materials["stucco"] == {"material": "stucco", "multiplier": 1.35, "riskLevel": "High"}


def test_health_endpoints(api_client: TestClient, monkeypatch: pytest.MonkeyPatch):
    from washquote.services.routing import distance_matrix_client

    monkeypatch.setattr(distance_matrix_client, "check_health", lambda: True)

    assert api_client.get("/api/health").json() == {"status": "ok"}
    assert api_client.get("/api/health/routing").json() == {"service": "distance-matrix", "healthy": True}
