import re
import threading
import unittest

from sqlalchemy.pool import StaticPool

from audit import AuditTrail
from db import build_session_factory, init_db


def in_memory_trail():
    engine, session_factory = build_session_factory("sqlite://", poolclass=StaticPool)
    init_db(engine)
    return AuditTrail(session_factory)


class TestAuditTrail(unittest.TestCase):
    def setUp(self):
        self.trail = in_memory_trail()

    def test_append_returns_entry(self):
        entry = self.trail.append("route_optimization", {"origin": "Chennai"})
        self.assertRegex(entry["id"], re.compile(r"^TRX_\d+_[A-Z0-9]{9}$"))
        self.assertEqual(entry["type"], "route_optimization")
        self.assertEqual(entry["data"], {"origin": "Chennai"})
        self.assertEqual(entry["user"], "system")
        self.assertTrue(entry["timestamp"].endswith("Z"))

    def test_transactions_oldest_first(self):
        self.trail.append("csv_upload", {"n": 1})
        self.trail.append("material_substitution", {"n": 2})
        self.assertEqual([tx["data"]["n"] for tx in self.trail.transactions()], [1, 2])

    def test_summary(self):
        self.trail.append("csv_upload", {})
        self.trail.append("route_optimization", {})
        self.trail.append("route_optimization", {})
        self.trail.append("material_analysis", {})
        self.assertEqual(self.trail.summary(), {
            "totalTransactions": 4,
            "csvUploads": 1,
            "routeOptimizations": 2,
            "materialSubstitutions": 0,
            "materialAnalyses": 1,
        })

    def test_clear(self):
        self.trail.append("csv_upload", {})
        self.trail.append("csv_upload", {})
        self.assertEqual(self.trail.clear(), 2)
        self.assertEqual(self.trail.transactions(), [])

    def test_concurrent_appends(self):
        threads = [
            threading.Thread(target=self.trail.append, args=("route_optimization", {"i": i}))
            for i in range(10)
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        self.assertEqual(len(self.trail.transactions()), 10)


if __name__ == "__main__":
    unittest.main()
