# models.py
import math
from typing import List, Optional, Dict, Any, Tuple
from dataclasses import dataclass, field, asdict

from config import DEFAULT_CARGO_WEIGHT, DEFAULT_PRIORITY


def to_float_maybe(value: Any, default: float = 0.0) -> float:
    """
    Try to convert `value` to float.
    If it fails, return `default` instead of raising.
    """
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def positive_or_default(value: Any, default: float) -> float:
    """Parse `value` as a float, keeping it only when it is finite and > 0."""
    parsed = to_float_maybe(value, default)
    if math.isfinite(parsed) and parsed > 0:
        return parsed
    return default


# ---------------------------------------------------------------------------
# Reference-table entities (immutable)
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Location:
    name: str
    latitude: float
    longitude: float
    has_rail: bool = False
    has_sea: bool = False
    has_air: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "hasRail": self.has_rail,
            "hasSea": self.has_sea,
            "hasAir": self.has_air,
        }


@dataclass(frozen=True)
class Material:
    """
    A material that can be offered as an alternative.

    Fields:
      carbon_emissions : kg CO2 per kg of material (negative = carbon negative).
      carbon_reduction : % reduction vs. the baseline it replaces (may be negative).
      cost_difference  : signed % cost delta vs. the baseline.
      cost_comparison  : "lower" / "similar" / "higher" tag (search catalog only).
      availability     : "widely" / "moderately" / ... (search catalog only).
      performance      : "equal" / "superior" / "excellent" / "good" ...
    """

    name: str
    carbon_emissions: float
    carbon_reduction: float = 0.0
    cost_difference: float = 0.0
    category: str = ""
    cost_comparison: str = ""
    availability: str = ""
    performance: str = ""
    properties: Tuple[str, ...] = ()
    applications: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "category": self.category,
            "carbonEmissions": self.carbon_emissions,
            "carbonReduction": self.carbon_reduction,
            "costDifference": self.cost_difference,
            "costComparison": self.cost_comparison,
            "availability": self.availability,
            "performance": self.performance,
            "properties": list(self.properties),
            "applications": list(self.applications),
        }


@dataclass(frozen=True)
class MaterialRecord:
    """A baseline material together with its curated list of alternatives."""

    name: str
    category: str
    carbon_emissions: float
    alternatives: Tuple[Material, ...] = ()


@dataclass(frozen=True)
class EmissionFactor:
    family: str
    current: float      # kg CO2 per unit today
    trend: float        # signed monthly rate
    volatility: float   # only perturbs the projected value


# ---------------------------------------------------------------------------
# Derived, per-request objects
# ---------------------------------------------------------------------------

@dataclass
class RouteSegment:
    transport_mode: str
    distance: float


@dataclass
class RouteCandidate:
    id: str
    transport_mode: str
    distance: float
    time: float
    cost: float
    emissions: float
    segments: List[RouteSegment] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# ---------------------------------------------------------------------------
# Request payloads
# ---------------------------------------------------------------------------

@dataclass
class RoutePayload:
    """
    RoutePayload represents the request body for /api/optimize-route.

    Fields:
      origin      : City name, matched exactly against the location table.
      destination : City name, matched exactly against the location table.
      weight      : Cargo weight in tons. Missing, non-positive or non-finite
                    values fall back to DEFAULT_CARGO_WEIGHT.
      priority    : "carbon" (default), "time" or "cost".
    """

    origin: str
    destination: str
    weight: float = DEFAULT_CARGO_WEIGHT
    priority: str = DEFAULT_PRIORITY

    @staticmethod
    def from_dict(raw_dict: Dict[str, Any]) -> "RoutePayload":
        return RoutePayload(
            origin=str(raw_dict.get("origin") or "").strip(),
            destination=str(raw_dict.get("destination") or "").strip(),
            weight=positive_or_default(raw_dict.get("weight"), DEFAULT_CARGO_WEIGHT),
            priority=str(raw_dict.get("priority") or DEFAULT_PRIORITY).strip().lower(),
        )

    def validate(self) -> List[str]:
        """
        Returns:
            A list of human-readable error strings. Empty list means "valid".
        """
        error_messages: List[str] = []
        if not self.origin or not self.destination:
            error_messages.append("Origin and destination are required")
        return error_messages


@dataclass
class MaterialFilters:
    """
    Optional narrowing applied to candidate alternatives.

      application_filter : keep only alternatives tagged with this use case.
      reduction_filter   : minimum carbon reduction percentage.
      cost_filter        : "lower", "similar" or "higher".

    Empty strings (what the UI sends for "any") are treated as absent.
    """

    application_filter: Optional[str] = None
    reduction_filter: Optional[int] = None
    cost_filter: Optional[str] = None

    @staticmethod
    def from_dict(raw_dict: Optional[Dict[str, Any]]) -> "MaterialFilters":
        if not isinstance(raw_dict, dict):
            return MaterialFilters()

        reduction_filter = None
        raw_reduction = raw_dict.get("reductionFilter")
        if raw_reduction not in (None, ""):
            try:
                reduction_filter = int(float(raw_reduction))
            except (TypeError, ValueError, OverflowError):
                # Unparseable thresholds are ignored
                reduction_filter = None

        return MaterialFilters(
            application_filter=str(raw_dict.get("applicationFilter") or "").strip() or None,
            reduction_filter=reduction_filter,
            cost_filter=str(raw_dict.get("costFilter") or "").strip().lower() or None,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "applicationFilter": self.application_filter,
            "reductionFilter": self.reduction_filter,
            "costFilter": self.cost_filter,
        }


@dataclass
class MaterialSearchPayload:
    """
    Request body for /api/search-materials and /api/analyze-material.

    Clients send the name as either "material" or "materialName"; both are
    folded into `material` here so the recommender only sees one field.
    """

    material: str
    filters: MaterialFilters = field(default_factory=MaterialFilters)

    @staticmethod
    def from_dict(raw_dict: Dict[str, Any]) -> "MaterialSearchPayload":
        raw_name = raw_dict.get("material") or raw_dict.get("materialName") or ""
        return MaterialSearchPayload(
            material=str(raw_name).strip(),
            filters=MaterialFilters.from_dict(raw_dict.get("filters")),
        )

    def validate(self) -> List[str]:
        error_messages: List[str] = []
        if not self.material:
            error_messages.append("Material name is required")
        return error_messages
