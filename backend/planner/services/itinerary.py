"""Turn an ordered tour into legs, totals and a shareable map link."""
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from urllib.parse import quote

KM_TO_MILES = 0.621371

# Characters left alone by JavaScript's encodeURIComponent
_URI_COMPONENT_SAFE = "-_.!~*'()"


def _to_fixed(value: float, places: int) -> float:
    """Round half-up on the exact binary value, like JavaScript's toFixed."""
    return float(Decimal(value).quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP))


@dataclass(frozen=True)
class Location:
    """A resolved address. ``identifier`` is the address exactly as supplied."""

    identifier: str
    lon: float
    lat: float


@dataclass(frozen=True)
class Leg:
    origin: str
    destination: str
    distance_km: float
    distance_miles: float
    duration_min: float

    def as_dict(self) -> dict:
        return {
            "from": self.origin,
            "to": self.destination,
            "distance_miles": self.distance_miles,
            "distance_km": self.distance_km,
            "duration_min": self.duration_min,
        }


@dataclass(frozen=True)
class Itinerary:
    ordered_stops: tuple[str, ...]
    legs: tuple[Leg, ...]
    total_distance_km: float
    total_distance_miles: float
    total_duration_min: float
    maps_url: str
    method: str

    def as_dict(self) -> dict:
        return {
            "orderedStops": list(self.ordered_stops),
            "legs": [leg.as_dict() for leg in self.legs],
            "totalDistanceKm": self.total_distance_km,
            "totalDistanceMiles": self.total_distance_miles,
            "totalDurationMin": self.total_duration_min,
            "googleMapsUrl": self.maps_url,
            "method": self.method,
        }


def maps_directions_url(base_url: str, identifiers: list[str]) -> str:
    """Join percent-encoded identifiers onto a multi-stop directions URL."""
    return base_url + "/".join(quote(str(i), safe=_URI_COMPONENT_SAFE) for i in identifiers)


def assemble_itinerary(
    tour: list[int],
    identifiers: list[str],
    distances: list[list[float]],
    durations: list[list[float]],
    *,
    maps_base_url: str,
    method: str,
) -> Itinerary:
    """
    Build the itinerary for *tour*.

    Distances are metres and durations seconds. Each leg is rounded for
    display; totals are summed from the unrounded legs and rounded once.
    """
    legs: list[Leg] = []
    total_km = 0.0
    total_min = 0.0

    for from_idx, to_idx in zip(tour, tour[1:]):
        dist_km = distances[from_idx][to_idx] / 1000
        dur_min = durations[from_idx][to_idx] / 60

        total_km += dist_km
        total_min += dur_min

        legs.append(
            Leg(
                origin=identifiers[from_idx],
                destination=identifiers[to_idx],
                distance_km=_to_fixed(dist_km, 2),
                distance_miles=_to_fixed(dist_km * KM_TO_MILES, 2),
                duration_min=_to_fixed(dur_min, 1),
            )
        )

    ordered = [identifiers[i] for i in tour]
    return Itinerary(
        ordered_stops=tuple(ordered),
        legs=tuple(legs),
        total_distance_km=_to_fixed(total_km, 2),
        total_distance_miles=_to_fixed(total_km * KM_TO_MILES, 2),
        total_duration_min=_to_fixed(total_min, 1),
        maps_url=maps_directions_url(maps_base_url, ordered),
        method=method,
    )
