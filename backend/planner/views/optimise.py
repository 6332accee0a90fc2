"""Route optimisation endpoint: quickest round trip from a start address."""
import json
import logging

import httpx
from django.http import JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods

from planner.exceptions import RoutePlanningError
from planner.serializers import OptimiseRouteRequestSerializer
from planner.services.route_planner import plan_round_trip

logger = logging.getLogger(__name__)

FAILURE_MESSAGE = "Route optimisation failed"
INVALID_REQUEST_MESSAGE = 'Please provide "start" and a non-empty "stops" array.'


@csrf_exempt
@require_http_methods(["POST"])
async def optimise_route(request):
    """
    POST /api/optimise-route

    Request body:
        {
            "start": "OL12 9EH",
            "stops": ["OL12 9NU", "OL12 0AH", "BB12 9BL"]
        }

    Response:
        {
            "orderedStops": [...],
            "legs": [{"from", "to", "distance_miles", "distance_km", "duration_min"}, ...],
            "totalDistanceKm": float,
            "totalDistanceMiles": float,
            "totalDurationMin": float,
            "googleMapsUrl": str,
            "method": "exact" | "nearest_neighbour"
        }
    """
    try:
        body = json.loads(request.body)
    except json.JSONDecodeError:
        return JsonResponse({"error": "Invalid JSON body"}, status=400)

    if not isinstance(body, dict):
        return JsonResponse({"error": INVALID_REQUEST_MESSAGE}, status=400)

    serializer = OptimiseRouteRequestSerializer(data=body)
    if not serializer.is_valid():
        return JsonResponse(
            {"error": INVALID_REQUEST_MESSAGE, "details": serializer.errors}, status=400
        )

    start = serializer.validated_data["start"]
    stops = serializer.validated_data["stops"]

    try:
        itinerary = await plan_round_trip(start, stops)
    except httpx.HTTPStatusError as exc:
        logger.warning("Routing service returned %s", exc.response.status_code)
        return JsonResponse(
            {
                "error": FAILURE_MESSAGE,
                "details": f"Routing service returned {exc.response.status_code}",
            },
            status=502,
        )
    except httpx.RequestError as exc:
        logger.warning("Could not reach routing service: %s", exc)
        return JsonResponse(
            {"error": FAILURE_MESSAGE, "details": f"Could not reach routing service: {exc}"},
            status=502,
        )
    except RoutePlanningError as exc:
        logger.exception("Route optimisation failed")
        return JsonResponse({"error": FAILURE_MESSAGE, "details": str(exc)}, status=500)
    except Exception as exc:  # noqa: BLE001
        logger.exception("Route optimisation failed unexpectedly")
        return JsonResponse({"error": FAILURE_MESSAGE, "details": str(exc)}, status=500)

    return JsonResponse(itinerary.as_dict())
