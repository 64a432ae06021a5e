# materials.py
"""
Material recommender.

Two entry points share the resolve -> filter -> score -> rank -> truncate
pipeline but differ in data source and scoring:

  search_materials()  - flat MATERIAL_CATALOG; every other catalog entry is a
                        candidate; TierBonusStrategy; adds a qualitative
                        label and a trend projection per alternative.
  analyze_material()  - MATERIAL_RECORDS; candidates are the record's own
                        curated alternatives; WeightedStrategy; adds a
                        generated match reason per alternative.
"""
import logging
import random
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Iterable, List, Optional

from config import MAX_ALTERNATIVES, MAX_SUGGESTIONS, PREDICTION_QUANTITY, SIMILAR_COST_BAND
from errors import InvalidInput
from models import Material, MaterialFilters, MaterialSearchPayload
from predictions import generate_predictions
from reference_data import (
    MATERIAL_CATALOG,
    MATERIAL_RECORDS,
    resolve_catalog_material,
    resolve_material_record,
)
from scoring import ScoringWeights, TierBonusStrategy, WeightedStrategy, map_recommendation
from suggestions import generate_match_reason

logger = logging.getLogger(__name__)

Predicate = Callable[[Material], bool]


# ---------------------------------------------------------------------------
# Filters
# ---------------------------------------------------------------------------

def cost_bucket(cost_difference: float) -> List[str]:
    """
    Buckets a signed cost delta falls in. "similar" overlaps the other two:
    -10 is both "lower" and "similar".
    """
    buckets = []
    if cost_difference < 0:
        buckets.append("lower")
    if abs(cost_difference) <= SIMILAR_COST_BAND:
        buckets.append("similar")
    if cost_difference > 0:
        buckets.append("higher")
    return buckets


def by_cost_difference(cost_filter: str) -> Predicate:
    return lambda material: cost_filter in cost_bucket(material.cost_difference)


def by_cost_comparison(cost_filter: str) -> Predicate:
    return lambda material: material.cost_comparison == cost_filter


def build_predicates(
    filters: MaterialFilters,
    cost_predicate: Callable[[str], Predicate],
) -> List[Predicate]:
    """Application tag, then minimum reduction, then cost bucket."""
    predicates: List[Predicate] = []
    if filters.application_filter:
        tag = filters.application_filter
        predicates.append(lambda material: tag in material.applications)
    if filters.reduction_filter is not None:
        threshold = filters.reduction_filter
        predicates.append(lambda material: material.carbon_reduction >= threshold)
    if filters.cost_filter:
        predicates.append(cost_predicate(filters.cost_filter))
    return predicates


def apply_filters(
    candidates: Iterable[Material],
    filters: MaterialFilters,
    cost_predicate: Callable[[str], Predicate] = by_cost_difference,
) -> List[Material]:
    """Keep candidates that pass every active predicate (logical AND)."""
    predicates = build_predicates(filters, cost_predicate)
    return [
        material
        for material in candidates
        if all(predicate(material) for predicate in predicates)
    ]


# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------

def max_reduction(alternatives: List[Dict[str, Any]]) -> Optional[float]:
    if not alternatives:
        return None
    return max(alt["carbonReduction"] for alt in alternatives)


def not_found_result(suggestions: List[Dict[str, Any]]) -> Dict[str, Any]:
    return {
        "error": "Material not found",
        "alternatives": suggestions[:MAX_SUGGESTIONS],
    }


def require_material_name(payload: MaterialSearchPayload) -> None:
    validation_errors = payload.validate()
    if validation_errors:
        raise InvalidInput(validation_errors[0])


# ---------------------------------------------------------------------------
# Search variant
# ---------------------------------------------------------------------------

def search_materials(
    payload: MaterialSearchPayload,
    audit_log=None,
    random_source: Callable[[], float] = random.random,
) -> Dict[str, Any]:
    """
    Rank catalog alternatives for a material.

    Raises:
        InvalidInput: no material name given.

    Returns (found):
        {
          "originalMaterial": "Steel",
          "originalCarbon": 1850.0,
          "alternatives": [{...catalog fields, "score", "predictions", "recommendation"}],
          "totalAlternatives": 6,
          "bestAlternative": {...} | None,
          "maxCarbonReduction": 97 | None,
          "searchTimestamp": "..."
        }
    Returns (not found):
        {"error": "Material not found", "alternatives": [{name, category, carbonReduction} x <= 5]}
    """
    require_material_name(payload)

    found = resolve_catalog_material(payload.material)
    if found is None:
        logger.warning("Material %r not in catalog", payload.material)
        return not_found_result([
            {"name": mat.name, "category": mat.category, "carbonReduction": mat.carbon_reduction}
            for mat in MATERIAL_CATALOG
        ])

    candidates = [mat for mat in MATERIAL_CATALOG if mat.name != found.name]
    candidates = apply_filters(candidates, payload.filters, cost_predicate=by_cost_comparison)

    strategy = TierBonusStrategy()
    scored = []
    for mat in candidates:
        score = strategy.score(mat)
        entry = mat.to_dict()
        entry["score"] = score
        entry["predictions"] = generate_predictions(mat.name, PREDICTION_QUANTITY, random_source)
        entry["recommendation"] = map_recommendation(score)
        scored.append(entry)

    # sorted() is stable, so equal scores keep catalog order
    alternatives = sorted(scored, key=lambda alt: alt["score"], reverse=True)[:MAX_ALTERNATIVES]

    original_carbon = generate_predictions(found.name, PREDICTION_QUANTITY, random_source)["current"]
    best_alternative = alternatives[0] if alternatives else None
    search_timestamp = datetime.now(timezone.utc).isoformat()

    logger.info(
        "Material search %r -> %s: %d alternatives, best=%s",
        payload.material, found.name, len(alternatives),
        best_alternative["name"] if best_alternative else None,
    )

    result = {
        "originalMaterial": found.name,
        "originalCarbon": original_carbon,
        "alternatives": alternatives,
        "totalAlternatives": len(alternatives),
        "bestAlternative": best_alternative,
        "maxCarbonReduction": max_reduction(alternatives),
        "searchTimestamp": search_timestamp,
    }

    if audit_log is not None:
        audit_log.append("material_substitution", {
            "searchMaterial": payload.material,
            "filters": payload.filters.to_dict(),
            "searchTimestamp": search_timestamp,
            "originalMaterial": found.name,
            "originalCarbon": original_carbon,
            "recommendations": alternatives,
            "totalRecommendations": len(alternatives),
            "bestAlternative": best_alternative,
            "maxCarbonReduction": result["maxCarbonReduction"],
        })

    return result


# ---------------------------------------------------------------------------
# Alternative-engine variant
# ---------------------------------------------------------------------------

def analyze_material(
    payload: MaterialSearchPayload,
    audit_log=None,
    weights: Optional[ScoringWeights] = None,
    random_source: Callable[[], float] = random.random,
) -> Dict[str, Any]:
    """
    Rank a baseline's curated alternatives with the weighted strategy.

    Each recommendation carries "recommendationScore" (0-100 int) and a
    "matchReason" sentence. Unknown materials return the same not-found
    shape as search_materials(), suggesting the first known baselines.
    """
    require_material_name(payload)

    record = resolve_material_record(payload.material)
    if record is None:
        logger.warning("Material %r has no alternative record", payload.material)
        return not_found_result([
            {"name": rec.name, "category": rec.category, "carbonReduction": 0}
            for rec in MATERIAL_RECORDS
        ])

    strategy = WeightedStrategy(weights)
    scored = []
    for alt in apply_filters(record.alternatives, payload.filters, cost_predicate=by_cost_difference):
        entry = alt.to_dict()
        entry["recommendationScore"] = strategy.score(alt)
        entry["matchReason"] = generate_match_reason(alt)
        scored.append(entry)

    recommendations = sorted(
        scored, key=lambda alt: alt["recommendationScore"], reverse=True
    )[:MAX_ALTERNATIVES]
    best_alternative = recommendations[0] if recommendations else None

    result = {
        "originalMaterial": payload.material,
        "originalCarbon": record.carbon_emissions,
        "recommendations": recommendations,
        "totalRecommendations": len(recommendations),
        "bestAlternative": best_alternative,
        "maxCarbonReduction": max_reduction(recommendations),
        "originalPrediction": generate_predictions(record.name, PREDICTION_QUANTITY, random_source),
    }

    logger.info(
        "Material analysis %r -> %s: %d recommendations",
        payload.material, record.name, len(recommendations),
    )

    if audit_log is not None:
        audit_log.append("material_analysis", {
            "searchMaterial": payload.material,
            "filters": payload.filters.to_dict(),
            "analysisTimestamp": datetime.now(timezone.utc).isoformat(),
            "originalMaterial": record.name,
            "originalCarbon": record.carbon_emissions,
            "recommendations": recommendations,
            "totalRecommendations": len(recommendations),
            "bestAlternative": best_alternative,
            "maxCarbonReduction": result["maxCarbonReduction"],
        })

    return result
