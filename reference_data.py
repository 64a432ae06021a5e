# reference_data.py
"""
Static reference tables: cities, materials and emission factors.

Everything here is built once at import time and never mutated. Table
order matters: material lookups return the first match, so reordering an
entry changes which material a query resolves to.
"""
import logging
from typing import Optional, Tuple

from models import Location, Material, MaterialRecord, EmissionFactor

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Locations (Tamil Nadu)
# ---------------------------------------------------------------------------

CITIES: Tuple[Location, ...] = (
    Location("Chennai", 13.0827, 80.2707, has_rail=True, has_sea=True, has_air=True),
    Location("Coimbatore", 11.0168, 76.9558, has_rail=True, has_sea=False, has_air=True),
    Location("Madurai", 9.9252, 78.1198, has_rail=True, has_sea=False, has_air=True),
    Location("Tiruchirappalli", 10.7905, 78.7047, has_rail=True, has_sea=True, has_air=True),
    Location("Salem", 11.6643, 78.1460, has_rail=True, has_sea=False, has_air=False),
    Location("Erode", 11.3410, 77.7172, has_rail=True, has_sea=False, has_air=False),
    Location("Vellore", 12.9165, 79.1325, has_rail=True, has_sea=False, has_air=False),
    Location("Thanjavur", 10.7870, 79.1378, has_rail=True, has_sea=True, has_air=False),
    Location("Tirunelveli", 8.7139, 77.7567, has_rail=True, has_sea=True, has_air=False),
)


# ---------------------------------------------------------------------------
# Search catalog: a flat list where every entry can stand in for another
# ---------------------------------------------------------------------------

MATERIAL_CATALOG: Tuple[Material, ...] = (
    Material(
        name="Steel", category="metal", carbon_emissions=1.85,
        carbon_reduction=0, cost_difference=0, cost_comparison="similar",
        availability="widely", performance="excellent",
        properties=("High strength", "Durable", "Versatile", "100% recyclable"),
        applications=("construction", "automotive", "infrastructure", "manufacturing"),
    ),
    Material(
        name="Recycled Steel", category="metal", carbon_emissions=0.6,
        carbon_reduction=68, cost_difference=-10, cost_comparison="lower",
        availability="widely", performance="equal",
        properties=("High strength", "Corrosion resistant", "100% recyclable", "Energy efficient"),
        applications=("construction", "automotive", "infrastructure", "manufacturing"),
    ),
    Material(
        name="Concrete", category="construction", carbon_emissions=0.15,
        carbon_reduction=0, cost_difference=0, cost_comparison="similar",
        availability="widely", performance="excellent",
        properties=("High compressive strength", "Durable", "Fire resistant", "Versatile"),
        applications=("construction", "infrastructure", "residential", "commercial"),
    ),
    Material(
        name="Geopolymer Concrete", category="construction", carbon_emissions=0.08,
        carbon_reduction=47, cost_difference=5, cost_comparison="higher",
        availability="moderately", performance="equal",
        properties=("High durability", "Chemical resistant", "Fast curing", "Low carbon"),
        applications=("construction", "infrastructure", "industrial", "precast"),
    ),
    Material(
        name="Aluminum", category="metal", carbon_emissions=11.5,
        carbon_reduction=0, cost_difference=0, cost_comparison="similar",
        availability="widely", performance="excellent",
        properties=("Lightweight", "Corrosion resistant", "Conductive", "Malleable"),
        applications=("automotive", "aerospace", "packaging", "construction"),
    ),
    Material(
        name="Recycled Aluminum", category="metal", carbon_emissions=0.4,
        carbon_reduction=97, cost_difference=-20, cost_comparison="lower",
        availability="widely", performance="equal",
        properties=("Same properties", "100% recyclable", "Energy efficient", "Low carbon"),
        applications=("packaging", "automotive", "construction", "consumer goods"),
    ),
    Material(
        name="Plastic", category="polymer", carbon_emissions=2.5,
        carbon_reduction=0, cost_difference=0, cost_comparison="similar",
        availability="widely", performance="good",
        properties=("Versatile", "Lightweight", "Durable", "Water resistant"),
        applications=("packaging", "automotive", "consumer goods", "construction"),
    ),
    Material(
        name="PLA Bioplastic", category="polymer", carbon_emissions=1.8,
        carbon_reduction=28, cost_difference=25, cost_comparison="higher",
        availability="moderately", performance="good",
        properties=("Biodegradable", "Renewable", "Compostable", "Food safe"),
        applications=("packaging", "3d printing", "disposable items", "food service"),
    ),
    Material(
        name="Bamboo", category="natural", carbon_emissions=0.2,
        carbon_reduction=60, cost_difference=-5, cost_comparison="lower",
        availability="moderately", performance="good",
        properties=("Renewable", "Fast growing", "Strong", "Carbon sequestering"),
        applications=("construction", "furniture", "textiles", "flooring"),
    ),
)


# ---------------------------------------------------------------------------
# Alternative-engine records: each baseline carries its curated alternatives
# ---------------------------------------------------------------------------

MATERIAL_RECORDS: Tuple[MaterialRecord, ...] = (
    MaterialRecord("steel", "metal", 1.85, alternatives=(
        Material("Recycled Steel", 0.67, carbon_reduction=64, cost_difference=-10,
                 properties=("High strength", "Corrosion resistant", "100% recyclable"),
                 applications=("construction", "automotive", "infrastructure")),
        Material("Aluminum Alloy", 1.7, carbon_reduction=8, cost_difference=15,
                 properties=("Lightweight", "Corrosion resistant", "High strength-to-weight ratio"),
                 applications=("automotive", "aerospace", "construction")),
        Material("Carbon Fiber Composite", 2.5, carbon_reduction=-35, cost_difference=200,
                 properties=("Extremely lightweight", "High strength", "Durable"),
                 applications=("automotive", "aerospace", "sports equipment")),
    )),
    MaterialRecord("concrete", "construction", 0.13, alternatives=(
        Material("Geopolymer Concrete", 0.06, carbon_reduction=54, cost_difference=5,
                 properties=("High durability", "Chemical resistant", "Fast curing"),
                 applications=("construction", "infrastructure", "industrial")),
        Material("Hempcrete", -0.02, carbon_reduction=115, cost_difference=20,
                 properties=("Carbon negative", "Lightweight", "Good insulation"),
                 applications=("construction", "residential", "insulation")),
        Material("Timbercrete", 0.08, carbon_reduction=38, cost_difference=10,
                 properties=("Lightweight", "Good insulation", "Renewable"),
                 applications=("construction", "residential", "commercial")),
    )),
    MaterialRecord("aluminum", "metal", 11.5, alternatives=(
        Material("Recycled Aluminum", 0.4, carbon_reduction=97, cost_difference=-20,
                 properties=("Same properties", "100% recyclable", "Energy efficient"),
                 applications=("packaging", "automotive", "construction")),
        Material("Magnesium Alloy", 5.2, carbon_reduction=55, cost_difference=30,
                 properties=("Lightweight", "High strength", "Good machinability"),
                 applications=("automotive", "aerospace", "electronics")),
        Material("Titanium Alloy", 8.8, carbon_reduction=23, cost_difference=150,
                 properties=("High strength", "Corrosion resistant", "Biocompatible"),
                 applications=("aerospace", "medical", "marine")),
    )),
    MaterialRecord("plastic", "polymer", 2.5, alternatives=(
        Material("PLA Bioplastic", 1.8, carbon_reduction=28, cost_difference=25,
                 properties=("Biodegradable", "Renewable", "Compostable"),
                 applications=("packaging", "3d printing", "disposable items")),
        Material("Recycled PET", 1.2, carbon_reduction=52, cost_difference=-15,
                 properties=("Recyclable", "Durable", "Food safe"),
                 applications=("packaging", "textiles", "beverage containers")),
        Material("Mushroom Packaging", 0.3, carbon_reduction=88, cost_difference=40,
                 properties=("Compostable", "Renewable", "Lightweight"),
                 applications=("packaging", "insulation", "disposable products")),
    )),
    MaterialRecord("glass", "mineral", 0.85, alternatives=(
        Material("Recycled Glass", 0.3, carbon_reduction=65, cost_difference=-10,
                 properties=("100% recyclable", "Same clarity", "Energy efficient"),
                 applications=("packaging", "construction", "automotive")),
        Material("Bio-Glass", 0.6, carbon_reduction=29, cost_difference=20,
                 properties=("Renewable materials", "Durable", "Unique aesthetics"),
                 applications=("construction", "decorative", "interior design")),
        Material("Polycarbonate", 2.8, carbon_reduction=-229, cost_difference=15,
                 properties=("Impact resistant", "Lightweight", "Versatile"),
                 applications=("automotive", "electronics", "safety equipment")),
    )),
)


# ---------------------------------------------------------------------------
# Emission factors used for trend projections
# ---------------------------------------------------------------------------

EMISSION_FACTORS = {
    entry.family: entry
    for entry in (
        EmissionFactor("steel", current=1.85, trend=0.02, volatility=0.05),
        EmissionFactor("concrete", current=0.15, trend=0.01, volatility=0.03),
        EmissionFactor("aluminum", current=11.5, trend=0.015, volatility=0.08),
        EmissionFactor("plastic", current=2.5, trend=0.025, volatility=0.06),
        EmissionFactor("glass", current=0.85, trend=0.008, volatility=0.04),
        EmissionFactor("wood", current=0.3, trend=-0.005, volatility=0.02),
        EmissionFactor("bamboo", current=0.2, trend=-0.01, volatility=0.03),
        EmissionFactor("recycled_steel", current=0.6, trend=0.01, volatility=0.04),
        EmissionFactor("recycled_aluminum", current=0.4, trend=0.008, volatility=0.05),
        EmissionFactor("recycled_plastic", current=1.2, trend=0.015, volatility=0.06),
        EmissionFactor("geopolymer", current=0.08, trend=-0.02, volatility=0.05),
        EmissionFactor("hempcrete", current=0.04, trend=-0.03, volatility=0.06),
        EmissionFactor("mycelium", current=0.02, trend=-0.04, volatility=0.08),
    )
}

# Checked first when the name mentions "recycled".
RECYCLED_FAMILY_KEYWORDS = (
    (("steel", "iron"), "recycled_steel"),
    (("aluminum", "aluminium"), "recycled_aluminum"),
    (("plastic", "polymer"), "recycled_plastic"),
)

# (keywords, family) pairs checked in order; the first pair with any keyword
# contained in the normalized name wins. Specific families come before the
# generic ones they contain ("geopolymer" before "polymer").
FAMILY_KEYWORDS = (
    (("geopolymer",), "geopolymer"),
    (("hemp",), "hempcrete"),
    (("mycelium",), "mycelium"),
    (("steel", "iron"), "steel"),
    (("concrete", "cement"), "concrete"),
    (("aluminum", "aluminium"), "aluminum"),
    (("plastic", "polymer"), "plastic"),
    (("glass",), "glass"),
    (("wood", "timber"), "wood"),
    (("bamboo",), "bamboo"),
)


# ---------------------------------------------------------------------------
# Lookups
# ---------------------------------------------------------------------------

def resolve_location(name: str) -> Optional[Location]:
    """Exact, case-sensitive match on city name."""
    for city in CITIES:
        if city.name == name:
            return city
    return None


def resolve_catalog_material(query: str) -> Optional[Material]:
    """
    First catalog entry whose name or category contains `query`
    (case-insensitive). "steel" resolves to "Steel", not "Recycled Steel",
    because Steel comes first.
    """
    needle = query.strip().lower()
    if not needle:
        return None
    for material in MATERIAL_CATALOG:
        if needle in material.name.lower() or needle in material.category.lower():
            return material
    return None


def resolve_material_record(query: str) -> Optional[MaterialRecord]:
    """
    Resolve a baseline for the alternative engine.

    Tries, in order: exact key, key/query containment in either direction
    ("recycled steel" finds "steel"), then category containment.
    """
    needle = query.strip().lower()
    if not needle:
        return None

    for record in MATERIAL_RECORDS:
        if record.name == needle:
            return record
    for record in MATERIAL_RECORDS:
        if record.name in needle or needle in record.name:
            return record
    for record in MATERIAL_RECORDS:
        if needle in record.category:
            return record
    return None


def resolve_family(material_name: str) -> Optional[EmissionFactor]:
    """Map a free-text material name to its emission-factor family, if any."""
    normalized = " ".join(material_name.lower().split())
    candidates = FAMILY_KEYWORDS
    if "recycled" in normalized:
        candidates = RECYCLED_FAMILY_KEYWORDS + FAMILY_KEYWORDS
    for keywords, family in candidates:
        if any(keyword in normalized for keyword in keywords):
            return EMISSION_FACTORS[family]
    logger.debug("No emission factor family for %r", material_name)
    return None
