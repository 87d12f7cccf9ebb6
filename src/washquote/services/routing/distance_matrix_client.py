"""HTTP client for the Google Distance Matrix API."""

from __future__ import annotations

import logging
import time

import httpx

from ...config import settings
from ...models.domain import DistanceMeasurement
from .base import DestinationNotFoundError, RoutingProviderError

# Element statuses meaning the address itself could not be routed to.
NOT_FOUND_STATUSES = frozenset({"NOT_FOUND", "ZERO_RESULTS"})

logger = logging.getLogger(__name__)


class GoogleDistanceMatrixClient:
    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        max_retries: int | None = None,
        backoff_seconds: float = 0.5,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.api_key = api_key if api_key is not None else settings.google_maps_api_key
        self.base_url = (base_url or settings.distance_matrix_base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.routing_timeout_seconds
        self.max_retries = max_retries if max_retries is not None else settings.routing_max_retries
        self.backoff_seconds = backoff_seconds
        self.transport = transport

    def _get_client(self) -> httpx.Client:
        return httpx.Client(
            timeout=httpx.Timeout(self.timeout),
            transport=self.transport,
        )

    def _request(self, params: dict) -> dict:
        url = f"{self.base_url}/distancematrix/json"
        client = self._get_client()
        try:
            attempt = 0
            while True:
                try:
                    response = client.get(url, params=params)
                    response.raise_for_status()
                    return response.json()
                except httpx.HTTPStatusError as e:
                    attempt += 1
                    if attempt > self.max_retries:
                        raise RoutingProviderError(
                            f"Distance Matrix request failed with HTTP {e.response.status_code}."
                        ) from e
                except httpx.TimeoutException as e:
                    attempt += 1
                    if attempt > self.max_retries:
                        logger.warning(f"Distance Matrix request timed out after {self.timeout}s: {e}")
                        raise RoutingProviderError("Distance Matrix request timed out.") from e
                except httpx.HTTPError as e:
                    attempt += 1
                    if attempt > self.max_retries:
                        raise RoutingProviderError(
                            f"Failed to reach Distance Matrix service at {self.base_url}: {e}"
                        ) from e
                except ValueError as e:
                    # Body was not JSON; retrying will not help.
                    raise RoutingProviderError("Distance Matrix response is not valid JSON.") from e
                wait_time = self.backoff_seconds * (2 ** (attempt - 1))
                logger.debug(f"Distance Matrix retry in {wait_time:.1f}s (attempt {attempt}/{self.max_retries})")
                time.sleep(wait_time)
        finally:
            client.close()

    def lookup_distance(self, origin: str, destination: str) -> DistanceMeasurement:
        """Return driving distance and duration from ``origin`` to ``destination``.

        Raises:
            DestinationNotFoundError: the destination cannot be routed to.
            RoutingProviderError: transport failure, timeout, bad status or a
                payload that cannot be interpreted as a single answer.
        """
        if not self.api_key:
            raise RoutingProviderError("Google Maps API key is not configured.")

        params = {
            "origins": origin,
            "destinations": destination,
            "mode": "driving",
            "units": "metric",
            "key": self.api_key,
        }
        data = self._request(params)
        return parse_distance_matrix(data)


def parse_distance_matrix(data: dict) -> DistanceMeasurement:
    """Interpret a Distance Matrix payload holding one origin and one destination."""
    if not isinstance(data, dict):
        raise RoutingProviderError("Distance Matrix response is not a JSON object.")

    status = data.get("status")
    if status != "OK":
        detail = data.get("error_message") or status or "missing status"
        raise RoutingProviderError(f"Distance Matrix API error: {detail}")

    rows = data.get("rows") or []
    if not rows or not rows[0].get("elements"):
        raise DestinationNotFoundError("Distance Matrix returned no route for the destination.")
    elements = rows[0]["elements"]
    if len(rows) > 1 or len(elements) > 1:
        raise RoutingProviderError(
            f"Distance Matrix returned an ambiguous answer ({len(rows)} rows, {len(elements)} elements)."
        )

    element = elements[0]
    element_status = element.get("status")
    if element_status in NOT_FOUND_STATUSES:
        raise DestinationNotFoundError(f"Destination could not be routed ({element_status}).")
    if element_status != "OK":
        raise RoutingProviderError(f"Distance Matrix element error: {element_status}")

    try:
        distance_meters = float(element["distance"]["value"])
        duration_seconds = float(element["duration"]["value"])
    except (KeyError, TypeError, ValueError) as e:
        raise RoutingProviderError("Distance Matrix element is missing distance/duration values.") from e
    if distance_meters < 0 or duration_seconds < 0:
        raise RoutingProviderError("Distance Matrix returned negative distance/duration.")

    return DistanceMeasurement(distance_meters=distance_meters, duration_seconds=duration_seconds)


def check_health(client: GoogleDistanceMatrixClient | None = None) -> bool:
    """Check provider reachability with a lookup from the business origin to itself."""
    if client is None:
        if not settings.google_maps_api_key:
            return False
        client = GoogleDistanceMatrixClient()
    try:
        client.lookup_distance(settings.business_origin, settings.business_origin)
        return True
    except (RoutingProviderError, DestinationNotFoundError) as e:
        logger.warning(f"Distance Matrix health check failed: {e}")
        return False
