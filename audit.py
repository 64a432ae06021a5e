# audit.py
"""
Append-only audit trail.

Scoring code only ever calls `append(entry_type, data)`. Writes and clears
go through one lock so concurrent requests never interleave a clear with an
append; each operation runs in its own session and commits before returning.
"""
import logging
import random
import string
import threading
import time
from typing import Any, Dict, List

from db import AuditEntry, SessionLocal, utcnow

logger = logging.getLogger(__name__)

ID_ALPHABET = string.ascii_uppercase + string.digits

# Keys of the summary block, keyed by entry type
SUMMARY_KEYS = {
    "csv_upload": "csvUploads",
    "route_optimization": "routeOptimizations",
    "material_substitution": "materialSubstitutions",
    "material_analysis": "materialAnalyses",
}


def new_entry_id() -> str:
    suffix = "".join(random.choices(ID_ALPHABET, k=9))
    return f"TRX_{int(time.time() * 1000)}_{suffix}"


def serialize_entry(entry: AuditEntry) -> Dict[str, Any]:
    return {
        "id": entry.id,
        "timestamp": entry.timestamp.isoformat() + "Z",
        "type": entry.type,
        "data": entry.data,
        "user": entry.user,
    }


class AuditTrail:
    def __init__(self, session_factory=SessionLocal):
        self.session_factory = session_factory
        self._lock = threading.Lock()

    def append(self, entry_type: str, data: Dict[str, Any], user: str = "system") -> Dict[str, Any]:
        """Persist one entry and return it in its API shape."""
        with self._lock:
            db_session = self.session_factory()
            try:
                db_record = AuditEntry(
                    id=new_entry_id(), timestamp=utcnow(), type=entry_type, data=data, user=user,
                )
                db_session.add(db_record)
                db_session.commit()
                logger.debug("Audit entry %s (%s) recorded", db_record.id, entry_type)
                return serialize_entry(db_record)
            except Exception:
                db_session.rollback()
                raise
            finally:
                db_session.close()

    def transactions(self) -> List[Dict[str, Any]]:
        """All entries, oldest first."""
        db_session = self.session_factory()
        try:
            rows = (
                db_session
                .query(AuditEntry)
                .order_by(AuditEntry.seq.asc())
                .all()
            )
            return [serialize_entry(row) for row in rows]
        finally:
            db_session.close()

    def summary(self, transactions: List[Dict[str, Any]] = None) -> Dict[str, int]:
        if transactions is None:
            transactions = self.transactions()
        summary_payload = {"totalTransactions": len(transactions)}
        for entry_type, summary_key in SUMMARY_KEYS.items():
            summary_payload[summary_key] = sum(1 for tx in transactions if tx["type"] == entry_type)
        return summary_payload

    def clear(self) -> int:
        """Delete every entry; returns how many were removed."""
        with self._lock:
            db_session = self.session_factory()
            try:
                removed = db_session.query(AuditEntry).delete()
                db_session.commit()
                logger.info("Audit trail cleared (%d entries)", removed)
                return removed
            except Exception:
                db_session.rollback()
                raise
            finally:
                db_session.close()
