# csv_import.py
import csv
import io
import math
from typing import Any, Dict, List

from config import UPLOAD_DEFAULT_QUANTITY, UPLOAD_DEFAULT_WEIGHT
from models import to_float_maybe


class CSVParseError(Exception):
    """The uploaded bytes could not be decoded or read as CSV."""


def nonzero_or_default(value: Any, default: float) -> float:
    """Blank, unparseable, zero and non-finite cells all fall back to `default`."""
    parsed = to_float_maybe(value, default)
    if parsed == 0 or not math.isfinite(parsed):
        return default
    return parsed


def parse_upload(raw_bytes: bytes) -> Dict[str, Any]:
    """
    Split an uploaded CSV into route rows and material rows.

    A row with both `origin` and `destination` becomes a route; a row with
    `material` becomes a material. One row can produce both.

    Returns:
        {
          "routes": [{"origin", "destination", "weight"}],
          "materials": [{"name", "quantity"}],
          "totalRows": <int>
        }
    """
    try:
        text = raw_bytes.decode("utf-8-sig")
        rows = list(csv.DictReader(io.StringIO(text)))
    except (UnicodeDecodeError, csv.Error) as exc:
        raise CSVParseError(str(exc)) from exc

    routes: List[Dict[str, Any]] = []
    materials: List[Dict[str, Any]] = []

    for row in rows:
        cells = {
            str(key).strip(): (value or "").strip()
            for key, value in row.items()
            if key is not None and isinstance(value, str)
        }

        if cells.get("origin") and cells.get("destination"):
            routes.append({
                "origin": cells["origin"],
                "destination": cells["destination"],
                "weight": nonzero_or_default(cells.get("weight"), UPLOAD_DEFAULT_WEIGHT),
            })

        if cells.get("material"):
            materials.append({
                "name": cells["material"],
                "quantity": nonzero_or_default(cells.get("quantity"), UPLOAD_DEFAULT_QUANTITY),
            })

    return {"routes": routes, "materials": materials, "totalRows": len(rows)}
