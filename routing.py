# routing.py
"""
Route evaluation: enumerate one candidate per available transport mode plus
a road+rail multimodal option, then rank them by the caller's priority.

Everything here is a pure function of the inputs and the constants in
config.py; the only side effect is the optional audit append at the end of
optimize_route().
"""
import logging
import math
from datetime import datetime, timezone
from typing import Dict, List, Tuple

from config import (
    AIR_COST_PER_KM,
    AIR_EMISSION_FACTOR,
    EARTH_RADIUS_KM,
    MULTIMODAL_SPLIT,
    PRIORITY_METRICS,
    TRANSPORT_MODES,
)
from errors import InvalidInput
from models import Location, RouteCandidate, RouteSegment, RoutePayload
from reference_data import CITIES, resolve_location
from scoring import clamp

logger = logging.getLogger(__name__)


def haversine_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance in km between two lat/lon points."""
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lon / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def segment_metrics(transport_mode: str, distance: float, weight: float) -> Tuple[float, float, float]:
    """
    (time in hours, cost, emissions in kg CO2) for `distance` km travelled by
    a single mode. `distance` is the leg length already including any detour.
    """
    mode = TRANSPORT_MODES[transport_mode]
    time = distance / mode["speed_kmh"]
    cost = distance * mode["cost_per_km"]
    emissions = distance * mode["emission_factor"] * weight
    return time, cost, emissions


def single_mode_candidate(transport_mode: str, base_distance: float, weight: float) -> RouteCandidate:
    distance = base_distance * TRANSPORT_MODES[transport_mode]["detour"]
    time, cost, emissions = segment_metrics(transport_mode, distance, weight)
    return RouteCandidate(
        id=f"{transport_mode}_primary",
        transport_mode=transport_mode,
        distance=distance,
        time=time,
        cost=cost,
        emissions=emissions,
        segments=[RouteSegment(transport_mode, distance)],
    )


def multimodal_candidate(base_distance: float, weight: float) -> RouteCandidate:
    """
    Road leg then rail leg, sized by MULTIMODAL_SPLIT shares of the
    great-circle distance (no detour factor is applied to either leg).
    """
    segments = [
        RouteSegment(transport_mode, base_distance * share)
        for transport_mode, share in MULTIMODAL_SPLIT
    ]

    total_time = total_cost = total_emissions = 0.0
    for segment in segments:
        time, cost, emissions = segment_metrics(segment.transport_mode, segment.distance, weight)
        total_time += time
        total_cost += cost
        total_emissions += emissions

    return RouteCandidate(
        id="multimodal_1",
        transport_mode="multimodal",
        distance=sum(segment.distance for segment in segments),
        time=total_time,
        cost=total_cost,
        emissions=total_emissions,
        segments=segments,
    )


def build_route_candidates(origin: Location, destination: Location, weight: float) -> List[RouteCandidate]:
    """
    Road is always offered. Rail and sea need the capability at both ends;
    multimodal needs rail at the origin and a port at the destination.
    """
    distance = haversine_distance(
        origin.latitude, origin.longitude, destination.latitude, destination.longitude
    )
    logger.debug("Great-circle distance %s -> %s: %.2f km", origin.name, destination.name, distance)

    candidates = [single_mode_candidate("road", distance, weight)]
    if origin.has_rail and destination.has_rail:
        candidates.append(single_mode_candidate("rail", distance, weight))
    if origin.has_sea and destination.has_sea:
        candidates.append(single_mode_candidate("sea", distance, weight))
    if origin.has_rail and destination.has_sea:
        candidates.append(multimodal_candidate(distance, weight))
    return candidates


def ranking_key(priority: str):
    """
    Sort key for a priority. Unknown priorities rank by emissions, and
    non-finite metric values sort last.
    """
    metric_name = PRIORITY_METRICS.get(priority, "emissions")

    def key(candidate: RouteCandidate) -> float:
        value = getattr(candidate, metric_name)
        return value if math.isfinite(value) else math.inf

    return key


def rank_routes(candidates: List[RouteCandidate], priority: str) -> List[RouteCandidate]:
    """Ascending by the priority metric; ties keep construction order."""
    return sorted(candidates, key=ranking_key(priority))


def carbon_reduction(best: RouteCandidate, worst: RouteCandidate) -> float:
    """
    Percentage of emissions saved by taking `best` instead of `worst`.

    0 when worst has no usable emissions figure. Clamped to [0, 100]; under
    the time or cost priority the best route can emit more than the worst.
    """
    worst_emissions = worst.emissions
    if not math.isfinite(worst_emissions) or worst_emissions <= 0:
        return 0.0
    if not math.isfinite(best.emissions):
        return 0.0
    reduction = (worst_emissions - best.emissions) / worst_emissions * 100
    return clamp(reduction, 0.0, 100.0)


def optimize_route(payload: RoutePayload, audit_log=None) -> Dict:
    """
    Evaluate every candidate route between two known cities.

    Raises:
        InvalidInput: origin/destination missing or not in the city table.

    Returns:
        {
          "routes": [... all candidates, best first ...],
          "best_route": {...},
          "carbon_reduction": <float 0..100>
        }

    `audit_log`, when given, receives one "route_optimization" entry.
    """
    validation_errors = payload.validate()
    if validation_errors:
        raise InvalidInput(validation_errors[0])

    origin = resolve_location(payload.origin)
    destination = resolve_location(payload.destination)
    if origin is None or destination is None:
        logger.warning("Unknown city in request: %s -> %s", payload.origin, payload.destination)
        raise InvalidInput(
            "Invalid cities",
            received={"origin": payload.origin, "destination": payload.destination},
            available=[city.name for city in CITIES],
        )

    ranked_routes = rank_routes(
        build_route_candidates(origin, destination, payload.weight), payload.priority
    )
    best_route = ranked_routes[0]
    worst_route = ranked_routes[-1]
    reduction = carbon_reduction(best_route, worst_route)

    logger.info(
        "Evaluated %d routes %s -> %s, best=%s, carbon reduction=%.2f%%",
        len(ranked_routes), origin.name, destination.name, best_route.transport_mode, reduction,
    )

    route_dicts = [route.to_dict() for route in ranked_routes]
    result = {
        "routes": route_dicts,
        "best_route": route_dicts[0],
        "carbon_reduction": reduction,
    }

    if audit_log is not None:
        audit_log.append("route_optimization", {
            "origin": payload.origin,
            "destination": payload.destination,
            "weight": payload.weight,
            "priority": payload.priority,
            "calculationTimestamp": datetime.now(timezone.utc).isoformat(),
            "emissionFactors": emission_factor_summary(),
            "costFactors": cost_factor_summary(),
            "results": result,
            "selectedRoute": result["best_route"],
            "carbonReduction": reduction,
            "totalOptions": len(route_dicts),
        })

    return result


def emission_factor_summary() -> Dict[str, float]:
    summary = {mode: factors["emission_factor"] for mode, factors in TRANSPORT_MODES.items()}
    summary["air"] = AIR_EMISSION_FACTOR
    return summary


def cost_factor_summary() -> Dict[str, float]:
    summary = {mode: factors["cost_per_km"] for mode, factors in TRANSPORT_MODES.items()}
    summary["air"] = AIR_COST_PER_KM
    return summary
