"""Async HTTP client for the openrouteservice geocoding and matrix APIs."""
import logging

import httpx
from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

from planner.exceptions import GeocodingError, MatrixError

logger = logging.getLogger(__name__)


def _get_client() -> httpx.AsyncClient:
    """Create a one-shot async client bound to the configured ORS URL."""
    if not settings.ORS_API_KEY:
        raise ImproperlyConfigured("ORS_API_KEY is not set")
    return httpx.AsyncClient(
        base_url=settings.ORS_BASE_URL, timeout=settings.ROUTING_HTTP_TIMEOUT
    )


async def geocode(address: str) -> tuple[float, float]:
    """
    Call ORS GET /geocode/search.

    Returns the (lon, lat) of the first match. Raises GeocodingError for a
    blank address or when nothing matches.
    """
    text = str(address).strip()
    if not text:
        raise GeocodingError("Empty postcode")

    params = {
        "api_key": settings.ORS_API_KEY,
        "text": text,
        "boundary.country": settings.GEOCODE_BOUNDARY_COUNTRY,
    }
    async with _get_client() as client:
        response = await client.get("/geocode/search", params=params)
        response.raise_for_status()

    features = response.json().get("features") or []
    if not features:
        raise GeocodingError(f"Could not geocode postcode: {text}")

    lon, lat = features[0]["geometry"]["coordinates"][:2]
    logger.debug("Geocoded %r to (%s, %s)", text, lon, lat)
    return lon, lat


async def get_matrix(
    coordinates: list[tuple[float, float]],
) -> tuple[list[list[float]], list[list[float]]]:
    """
    Call ORS POST /v2/matrix/{profile}.

    *coordinates* are (lon, lat) pairs. Returns ``(distances, durations)`` as
    N×N matrices in metres and seconds, indexed like the input.
    """
    payload = {
        "locations": [[lon, lat] for lon, lat in coordinates],
        "metrics": ["distance", "duration"],
    }
    headers = {"Authorization": settings.ORS_API_KEY}
    async with _get_client() as client:
        response = await client.post(
            f"/v2/matrix/{settings.ORS_PROFILE}", json=payload, headers=headers
        )
        response.raise_for_status()

    data = response.json()
    distances = data.get("distances")
    durations = data.get("durations")
    if not distances or not durations:
        raise MatrixError("Matrix API did not return distances/durations")

    n = len(coordinates)
    for name, table in (("distances", distances), ("durations", durations)):
        if len(table) != n or any(len(row) != n for row in table):
            raise MatrixError(f"Matrix API returned {name} that are not {n}x{n}")
        if any(cell is None for row in table for cell in row):
            raise MatrixError(f"Matrix API returned {name} with unroutable pairs")

    return distances, durations
