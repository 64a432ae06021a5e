# suggestions.py
from typing import List

from config import SIMILAR_COST_BAND
from models import Material
from scoring import mentions


def format_number(value: float) -> str:
    """64.0 -> "64", 12.5 -> "12.5"."""
    return f"{value:g}"


# MATCH_RULES is a list of (predicate, message_fn) pairs.
# Each predicate inspects an alternative Material; when it returns True the
# message_fn builds the text that goes into the match reason.
MATCH_RULES = [
    # --- Carbon ---
    (
        lambda alt: alt.carbon_reduction > 0,
        lambda alt: f"{format_number(alt.carbon_reduction)}% carbon reduction",
    ),

    # --- Cost ---
    (
        lambda alt: alt.cost_difference < 0,
        lambda alt: f"{format_number(abs(alt.cost_difference))}% cost savings",
    ),
    (
        lambda alt: 0 <= alt.cost_difference <= SIMILAR_COST_BAND,
        lambda alt: "Similar cost",
    ),

    # --- End of life / sourcing ---
    (
        lambda alt: mentions(alt, "recyclable"),
        lambda alt: "Fully recyclable",
    ),
    (
        lambda alt: mentions(alt, "renewable"),
        lambda alt: "Renewable material",
    ),
    (
        lambda alt: alt.carbon_emissions < 0,
        lambda alt: "Carbon negative material",
    ),
]

FALLBACK_REASON = "Sustainable alternative with comparable properties"


def match_reasons(alternative: Material) -> List[str]:
    """Every rule message that applies to `alternative`, in rule order."""
    return [
        message_fn(alternative)
        for predicate_fn, message_fn in MATCH_RULES
        if predicate_fn(alternative)
    ]


def generate_match_reason(alternative: Material) -> str:
    """
    Build the free-text explanation shown next to an engine recommendation.

    Example:
        "64% carbon reduction, 10% cost savings, Fully recyclable"

    Fallback:
    - If no rule fires, a generic sentence is returned so the UI always has
      something to show.
    """
    return ", ".join(match_reasons(alternative)) or FALLBACK_REASON
