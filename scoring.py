# scoring.py
"""
Scoring strategies for material alternatives.

Two entry points rank alternatives with different formulas, so each formula
lives in its own strategy:

  TierBonusStrategy  - /api/search-materials. Reduction x 0.4 plus fixed
                       bonuses for cost, availability and performance tiers.
  WeightedStrategy   - /api/analyze-material. Weighted average of four 0-100
                       sub-scores (carbon, cost efficiency, application
                       breadth, sustainability), rounded to an integer.
"""
import math
from dataclasses import dataclass
from typing import Dict

from config import (
    AVAILABILITY_TIER_BONUS,
    AVAILABILITY_TIER_DEFAULT,
    COST_TIER_BONUS,
    COST_TIER_DEFAULT,
    DEFAULT_WEIGHTS,
    PERFORMANCE_TIER_BONUS,
    PERFORMANCE_TIER_DEFAULT,
    REDUCTION_MULTIPLIER,
)
from models import Material


def clamp(value: float, lower_bound: float, upper_bound: float) -> float:
    """
    Restrict `value` to stay within [lower_bound, upper_bound].
    """
    return max(lower_bound, min(upper_bound, value))


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positive scores (round() would go to even)."""
    return int(math.floor(value + 0.5))


def mentions(material: Material, keyword: str) -> bool:
    return any(keyword in prop.lower() for prop in material.properties)


# ---------------------------------------------------------------------------
# Search variant
# ---------------------------------------------------------------------------

class TierBonusStrategy:
    name = "tier_bonus"

    def score(self, material: Material) -> float:
        """
        reduction x 0.4
          + cost bonus         (lower 25, similar 15, else 5)
          + availability bonus (widely 20, moderately 12, else 5)
          + performance bonus  (equal 15, superior 12, else 8)
        """
        return (
            material.carbon_reduction * REDUCTION_MULTIPLIER
            + COST_TIER_BONUS.get(material.cost_comparison, COST_TIER_DEFAULT)
            + AVAILABILITY_TIER_BONUS.get(material.availability, AVAILABILITY_TIER_DEFAULT)
            + PERFORMANCE_TIER_BONUS.get(material.performance, PERFORMANCE_TIER_DEFAULT)
        )


def map_recommendation(score: float) -> str:
    """
    Convert a search-variant score into a qualitative label.

      >= 80 -> Excellent
      >= 60 -> Good
      >= 40 -> Fair
      below -> Poor
    """
    if score >= 80:
        return "Excellent"
    if score >= 60:
        return "Good"
    if score >= 40:
        return "Fair"
    return "Poor"


# ---------------------------------------------------------------------------
# Alternative-engine variant
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ScoringWeights:
    carbon_reduction: float = DEFAULT_WEIGHTS["carbon_reduction"]
    cost_efficiency: float = DEFAULT_WEIGHTS["cost_efficiency"]
    application_match: float = DEFAULT_WEIGHTS["application_match"]
    sustainability: float = DEFAULT_WEIGHTS["sustainability"]


def carbon_subscore(material: Material) -> float:
    return clamp(material.carbon_reduction, 0, 100)


def cost_efficiency_subscore(material: Material) -> float:
    """
    Pricier alternatives lose half a point per % of extra cost (floor 0).
    Cheaper ones earn up to 50 bonus points above 100.
    """
    if material.cost_difference > 0:
        return max(0.0, 100 - material.cost_difference / 2)
    return 100 + min(50.0, abs(material.cost_difference) / 2)


def application_subscore(material: Material) -> float:
    # More applications = more versatile
    return min(100, len(material.applications) * 20)


def sustainability_subscore(material: Material) -> float:
    subscore = 50
    if material.carbon_emissions < 0:
        subscore += 50
    if mentions(material, "recyclable"):
        subscore += 25
    if mentions(material, "renewable"):
        subscore += 25
    return min(100, subscore)


class WeightedStrategy:
    name = "weighted"

    def __init__(self, weights: ScoringWeights = None):
        self.weights = weights or ScoringWeights()

    def subscores(self, material: Material) -> Dict[str, float]:
        return {
            "carbon_reduction": carbon_subscore(material),
            "cost_efficiency": cost_efficiency_subscore(material),
            "application_match": application_subscore(material),
            "sustainability": sustainability_subscore(material),
        }

    def score(self, material: Material) -> int:
        parts = self.subscores(material)
        overall_score = (
            parts["carbon_reduction"] * self.weights.carbon_reduction
            + parts["cost_efficiency"] * self.weights.cost_efficiency
            + parts["application_match"] * self.weights.application_match
            + parts["sustainability"] * self.weights.sustainability
        )
        return round_half_up(overall_score)
