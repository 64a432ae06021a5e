import unittest

from errors import InvalidInput
from materials import analyze_material, apply_filters, cost_bucket, search_materials
from models import MaterialFilters, MaterialSearchPayload
from reference_data import MATERIAL_CATALOG


def fixed_random():
    return 0.5


class RecordingAuditLog:
    def __init__(self):
        self.entries = []

    def append(self, entry_type, data):
        self.entries.append((entry_type, data))


def search(material, filters=None, audit_log=None):
    payload = MaterialSearchPayload.from_dict({"material": material, "filters": filters or {}})
    return search_materials(payload, audit_log=audit_log, random_source=fixed_random)


def analyze(material, filters=None, audit_log=None):
    payload = MaterialSearchPayload.from_dict({"material": material, "filters": filters or {}})
    return analyze_material(payload, audit_log=audit_log, random_source=fixed_random)


class TestSearchMaterials(unittest.TestCase):
    def test_steel_ranking(self):
        result = search("steel")
        self.assertEqual(result["originalMaterial"], "Steel")
        self.assertAlmostEqual(result["originalCarbon"], 1850.0)
        self.assertEqual(
            [alt["name"] for alt in result["alternatives"]],
            ["Recycled Aluminum", "Recycled Steel", "Bamboo",
             "Geopolymer Concrete", "Concrete", "Aluminum"],
        )
        recycled_steel = result["alternatives"][1]
        self.assertEqual(recycled_steel["carbonReduction"], 68)
        self.assertAlmostEqual(recycled_steel["score"], 87.2)
        self.assertEqual(recycled_steel["recommendation"], "Excellent")
        self.assertEqual(result["bestAlternative"]["name"], "Recycled Aluminum")
        self.assertEqual(result["maxCarbonReduction"], 97)
        self.assertEqual(result["totalAlternatives"], 6)

    def test_recycled_steel_above_lower_reduction_alternatives(self):
        names = [alt["name"] for alt in search("steel")["alternatives"]]
        for lower in ("Bamboo", "Geopolymer Concrete", "Concrete"):
            self.assertLess(names.index("Recycled Steel"), names.index(lower))

    def test_never_more_than_six_and_sorted(self):
        for mat in MATERIAL_CATALOG:
            alternatives = search(mat.name)["alternatives"]
            self.assertLessEqual(len(alternatives), 6)
            scores = [alt["score"] for alt in alternatives]
            self.assertEqual(scores, sorted(scores, reverse=True))

    def test_repeated_calls_are_stable(self):
        first = [alt["name"] for alt in search("plastic")["alternatives"]]
        for _ in range(5):
            self.assertEqual([alt["name"] for alt in search("plastic")["alternatives"]], first)

    def test_category_match(self):
        self.assertEqual(search("natural")["originalMaterial"], "Bamboo")

    def test_first_match_wins(self):
        # "Geopolymer Concrete" (by name) precedes Plastic (category "polymer")
        self.assertEqual(search("polymer")["originalMaterial"], "Geopolymer Concrete")

    def test_unknown_material(self):
        result = search("unknown-xyz")
        self.assertEqual(result["error"], "Material not found")
        self.assertEqual(
            [alt["name"] for alt in result["alternatives"]],
            ["Steel", "Recycled Steel", "Concrete", "Geopolymer Concrete", "Aluminum"],
        )
        self.assertNotIn("score", result["alternatives"][0])

    def test_unknown_material_is_not_audited(self):
        audit_log = RecordingAuditLog()
        search("unknown-xyz", audit_log=audit_log)
        self.assertEqual(audit_log.entries, [])

    def test_missing_name(self):
        with self.assertRaises(InvalidInput):
            search("")

    def test_filters(self):
        result = search("steel", {
            "applicationFilter": "construction",
            "reductionFilter": "50",
            "costFilter": "lower",
        })
        self.assertEqual(
            [alt["name"] for alt in result["alternatives"]],
            ["Recycled Aluminum", "Recycled Steel", "Bamboo"],
        )

    def test_filters_remove_everything(self):
        result = search("steel", {"reductionFilter": "99"})
        self.assertEqual(result["alternatives"], [])
        self.assertIsNone(result["bestAlternative"])
        self.assertIsNone(result["maxCarbonReduction"])

    def test_predictions_attached(self):
        alt = search("steel")["alternatives"][1]
        self.assertEqual(alt["predictions"]["trend"], "stable")
        self.assertAlmostEqual(alt["predictions"]["current"], 600.0)

    def test_audit_entry(self):
        audit_log = RecordingAuditLog()
        result = search("steel", audit_log=audit_log)
        entry_type, data = audit_log.entries[0]
        self.assertEqual(entry_type, "material_substitution")
        self.assertEqual(data["originalMaterial"], "Steel")
        self.assertEqual(data["searchMaterial"], "steel")
        self.assertEqual(data["totalRecommendations"], result["totalAlternatives"])


class TestFilters(unittest.TestCase):
    def test_filtering_is_idempotent(self):
        filters = MaterialFilters(application_filter="packaging", reduction_filter=20, cost_filter="similar")
        once = apply_filters(MATERIAL_CATALOG, filters)
        twice = apply_filters(once, filters)
        self.assertEqual(once, twice)

    def test_no_filters_keeps_everything(self):
        self.assertEqual(apply_filters(MATERIAL_CATALOG, MaterialFilters()), list(MATERIAL_CATALOG))

    def test_cost_buckets(self):
        self.assertEqual(cost_bucket(-20), ["lower"])
        self.assertEqual(cost_bucket(-10), ["lower", "similar"])
        self.assertEqual(cost_bucket(0), ["similar"])
        self.assertEqual(cost_bucket(10), ["similar", "higher"])
        self.assertEqual(cost_bucket(15), ["higher"])


class TestAnalyzeMaterial(unittest.TestCase):
    def test_steel(self):
        result = analyze("steel")
        self.assertEqual(result["originalMaterial"], "steel")
        self.assertEqual(result["originalCarbon"], 1.85)
        self.assertEqual(
            [(rec["name"], rec["recommendationScore"]) for rec in result["recommendations"]],
            [("Recycled Steel", 77), ("Aluminum Alloy", 48), ("Carbon Fiber Composite", 17)],
        )
        self.assertEqual(result["maxCarbonReduction"], 64)
        self.assertEqual(result["bestAlternative"]["name"], "Recycled Steel")
        self.assertEqual(
            result["recommendations"][0]["matchReason"],
            "64% carbon reduction, 10% cost savings, Fully recyclable",
        )

    def test_partial_names_resolve(self):
        self.assertEqual(analyze("Recycled Steel")["originalCarbon"], 1.85)
        self.assertEqual(analyze("ALUM")["originalCarbon"], 11.5)

    def test_similar_cost_filter(self):
        result = analyze("steel", {"costFilter": "similar"})
        self.assertEqual([rec["name"] for rec in result["recommendations"]], ["Recycled Steel"])

    def test_negative_reduction_filtered(self):
        result = analyze("glass", {"reductionFilter": "0"})
        self.assertNotIn("Polycarbonate", [rec["name"] for rec in result["recommendations"]])

    def test_unknown(self):
        result = analyze("unobtanium")
        self.assertEqual(result["error"], "Material not found")
        self.assertLessEqual(len(result["alternatives"]), 5)

    def test_original_prediction_with_fixed_random(self):
        prediction = analyze("steel")["originalPrediction"]
        self.assertAlmostEqual(prediction["current"], 1850.0)
        self.assertAlmostEqual(prediction["future6Months"], 1850.22)

    def test_audit_entry(self):
        audit_log = RecordingAuditLog()
        analyze("concrete", audit_log=audit_log)
        entry_type, data = audit_log.entries[0]
        self.assertEqual(entry_type, "material_analysis")
        self.assertEqual(data["originalMaterial"], "concrete")
        self.assertEqual(data["bestAlternative"]["name"], "Hempcrete")


if __name__ == "__main__":
    unittest.main()
