import unittest
from models import Material
from reference_data import MATERIAL_CATALOG, resolve_material_record
from scoring import (
    ScoringWeights,
    TierBonusStrategy,
    WeightedStrategy,
    clamp,
    map_recommendation,
)
from suggestions import FALLBACK_REASON, generate_match_reason


def catalog_entry(name):
    return next(mat for mat in MATERIAL_CATALOG if mat.name == name)


def engine_alternative(record_name, alternative_name):
    record = resolve_material_record(record_name)
    return next(alt for alt in record.alternatives if alt.name == alternative_name)


class TestTierBonusStrategy(unittest.TestCase):
    def test_recycled_steel(self):
        # 68 * 0.4 + lower(25) + widely(20) + equal(15)
        score = TierBonusStrategy().score(catalog_entry("Recycled Steel"))
        self.assertAlmostEqual(score, 87.2)

    def test_fallback_tiers(self):
        # 28 * 0.4 + higher(5) + moderately(12) + good(8)
        score = TierBonusStrategy().score(catalog_entry("PLA Bioplastic"))
        self.assertAlmostEqual(score, 36.2)

    def test_map_recommendation(self):
        self.assertEqual(map_recommendation(98.8), "Excellent")
        self.assertEqual(map_recommendation(80), "Excellent")
        self.assertEqual(map_recommendation(69), "Good")
        self.assertEqual(map_recommendation(43), "Fair")
        self.assertEqual(map_recommendation(39.9), "Poor")


class TestWeightedStrategy(unittest.TestCase):
    def test_recycled_steel_breakdown(self):
        strategy = WeightedStrategy()
        alt = engine_alternative("steel", "Recycled Steel")
        self.assertEqual(strategy.subscores(alt), {
            "carbon_reduction": 64,
            "cost_efficiency": 105.0,
            "application_match": 60,
            "sustainability": 75,
        })
        # 25.6 + 31.5 + 12 + 7.5 = 76.6
        self.assertEqual(strategy.score(alt), 77)

    def test_expensive_alternative_gets_zero_cost_score(self):
        alt = engine_alternative("steel", "Carbon Fiber Composite")
        self.assertEqual(WeightedStrategy().subscores(alt)["cost_efficiency"], 0.0)
        self.assertEqual(WeightedStrategy().score(alt), 17)

    def test_carbon_negative_is_capped(self):
        alt = engine_alternative("concrete", "Hempcrete")
        parts = WeightedStrategy().subscores(alt)
        self.assertEqual(parts["carbon_reduction"], 100)
        self.assertEqual(parts["sustainability"], 100)
        self.assertEqual(WeightedStrategy().score(alt), 89)

    def test_custom_weights(self):
        alt = Material("Only Carbon", 0.1, carbon_reduction=50)
        weights = ScoringWeights(carbon_reduction=1.0, cost_efficiency=0.0,
                                 application_match=0.0, sustainability=0.0)
        self.assertEqual(WeightedStrategy(weights).score(alt), 50)

    def test_clamp(self):
        self.assertEqual(clamp(150, 0, 100), 100)
        self.assertEqual(clamp(-3, 0, 100), 0)
        self.assertEqual(clamp(42, 0, 100), 42)


class TestMatchReason(unittest.TestCase):
    def test_reasons_in_rule_order(self):
        alt = engine_alternative("steel", "Recycled Steel")
        self.assertEqual(
            generate_match_reason(alt),
            "64% carbon reduction, 10% cost savings, Fully recyclable",
        )

    def test_carbon_negative(self):
        alt = engine_alternative("concrete", "Hempcrete")
        self.assertEqual(generate_match_reason(alt), "115% carbon reduction, Carbon negative material")

    def test_similar_cost_and_renewable(self):
        alt = engine_alternative("concrete", "Timbercrete")
        self.assertEqual(
            generate_match_reason(alt),
            "38% carbon reduction, Similar cost, Renewable material",
        )

    def test_fallback(self):
        alt = engine_alternative("steel", "Carbon Fiber Composite")
        self.assertEqual(generate_match_reason(alt), FALLBACK_REASON)


if __name__ == "__main__":
    unittest.main()
