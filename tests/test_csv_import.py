import unittest

from csv_import import CSVParseError, parse_upload


class TestParseUpload(unittest.TestCase):
    def test_routes_and_materials(self):
        raw = (
            "origin,destination,weight,material,quantity\n"
            "Chennai,Madurai,12.5,Steel,100\n"
            "Salem,Erode,,,\n"
            ",,,Bamboo,abc\n"
        ).encode("utf-8")
        parsed = parse_upload(raw)
        self.assertEqual(parsed["totalRows"], 3)
        self.assertEqual(parsed["routes"], [
            {"origin": "Chennai", "destination": "Madurai", "weight": 12.5},
            {"origin": "Salem", "destination": "Erode", "weight": 25.0},
        ])
        self.assertEqual(parsed["materials"], [
            {"name": "Steel", "quantity": 100.0},
            {"name": "Bamboo", "quantity": 1.0},
        ])

    def test_zero_weight_uses_default(self):
        parsed = parse_upload(b"origin,destination,weight\nChennai,Salem,0\n")
        self.assertEqual(parsed["routes"][0]["weight"], 25.0)

    def test_bom_and_whitespace(self):
        parsed = parse_upload(b"\xef\xbb\xbforigin , destination\n Chennai , Vellore \n")
        self.assertEqual(parsed["routes"], [
            {"origin": "Chennai", "destination": "Vellore", "weight": 25.0},
        ])

    def test_incomplete_route_is_skipped(self):
        parsed = parse_upload(b"origin,destination\nChennai,\n")
        self.assertEqual(parsed["routes"], [])
        self.assertEqual(parsed["totalRows"], 1)

    def test_undecodable_bytes(self):
        with self.assertRaises(CSVParseError):
            parse_upload(b"\xff\xfe\x00origin")


if __name__ == "__main__":
    unittest.main()
