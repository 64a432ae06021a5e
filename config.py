# config.py
import os

# Storage / runtime
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///ecotrack.db")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
PORT = int(os.getenv("PORT", "3000"))

# Route evaluator
EARTH_RADIUS_KM = 6371.0
DEFAULT_CARGO_WEIGHT = float(os.getenv("DEFAULT_CARGO_WEIGHT", "1"))
DEFAULT_PRIORITY = "carbon"

# Per-mode factors. "detour" stretches the great-circle distance,
# emission_factor is kg CO2 per ton-km, cost is currency units per km.
TRANSPORT_MODES = {
    "road": {"detour": 1.0, "speed_kmh": 60.0, "cost_per_km": 8.0, "emission_factor": 0.092},
    "rail": {"detour": 1.2, "speed_kmh": 80.0, "cost_per_km": 4.0, "emission_factor": 0.025},
    "sea": {"detour": 1.5, "speed_kmh": 25.0, "cost_per_km": 3.0, "emission_factor": 0.018},
}

# Multimodal legs as (mode, share of great-circle distance).
# The shares add up to 1.1, not 1.0; existing clients rely on these numbers.
MULTIMODAL_SPLIT = (("road", 0.3), ("rail", 0.8))

# Reported in the audit trail only; no air candidate is generated.
AIR_EMISSION_FACTOR = 0.520
AIR_COST_PER_KM = 50.0

# Which candidate field each priority ranks by
PRIORITY_METRICS = {
    "carbon": "emissions",
    "time": "time",
    "cost": "cost",
}

# Material recommender
MAX_ALTERNATIVES = int(os.getenv("MAX_ALTERNATIVES", "6"))
MAX_SUGGESTIONS = int(os.getenv("MAX_SUGGESTIONS", "5"))
PREDICTION_QUANTITY = float(os.getenv("PREDICTION_QUANTITY", "1000"))
SIMILAR_COST_BAND = 10.0  # +/- percent, inclusive

# Alternative-engine weights (must sum to 1.0)
DEFAULT_WEIGHTS = {
    "carbon_reduction": float(os.getenv("W_CARBON", "0.4")),
    "cost_efficiency": float(os.getenv("W_COST_EFFICIENCY", "0.3")),
    "application_match": float(os.getenv("W_APPLICATION", "0.2")),
    "sustainability": float(os.getenv("W_SUSTAINABILITY", "0.1")),
}

# Search-variant scoring
REDUCTION_MULTIPLIER = 0.4
COST_TIER_BONUS = {"lower": 25, "similar": 15}
COST_TIER_DEFAULT = 5
AVAILABILITY_TIER_BONUS = {"widely": 20, "moderately": 12}
AVAILABILITY_TIER_DEFAULT = 5
PERFORMANCE_TIER_BONUS = {"equal": 15, "superior": 12}
PERFORMANCE_TIER_DEFAULT = 8

# CSV upload fallbacks
UPLOAD_DEFAULT_WEIGHT = float(os.getenv("UPLOAD_DEFAULT_WEIGHT", "25"))
UPLOAD_DEFAULT_QUANTITY = float(os.getenv("UPLOAD_DEFAULT_QUANTITY", "1"))
