# app.py
import logging
from datetime import datetime, timezone

from flask import Flask, request, jsonify
from flask_cors import CORS

from audit import AuditTrail
from config import LOG_LEVEL, PORT
from csv_import import CSVParseError, parse_upload
from db import init_db
from errors import InvalidInput
from materials import analyze_material, search_materials
from models import MaterialSearchPayload, RoutePayload
from reference_data import CITIES
from routing import optimize_route

logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)

app = Flask(__name__)
CORS(app)

# Ensure tables exist on startup (no-op if they already do)
init_db()

audit_trail = AuditTrail()


@app.errorhandler(InvalidInput)
def handle_invalid_input(error: InvalidInput):
    return jsonify(error.to_dict()), 400


@app.route("/api/cities", methods=["GET"])
def cities():
    """
    GET /api/cities

    Response example:
    [
      {"name": "Chennai", "latitude": 13.0827, "longitude": 80.2707,
       "hasRail": true, "hasSea": true, "hasAir": true},
      ...
    ]
    """
    return jsonify([city.to_dict() for city in CITIES]), 200


@app.route("/api/upload", methods=["POST"])
def upload():
    """
    POST /api/upload  (multipart/form-data, field "csvFile")

    Response example:
    {
      "success": true,
      "routes": [{"origin": "Chennai", "destination": "Madurai", "weight": 25}],
      "materials": [{"name": "Steel", "quantity": 100}],
      "totalRows": 2
    }
    """
    uploaded_file = request.files.get("csvFile")
    if uploaded_file is None or not uploaded_file.filename:
        return jsonify({"error": "No file uploaded"}), 400

    raw_bytes = uploaded_file.read()
    try:
        parsed = parse_upload(raw_bytes)
    except CSVParseError:
        logger.exception("Could not parse upload %s", uploaded_file.filename)
        return jsonify({"error": "Error parsing CSV file"}), 500

    audit_trail.append("csv_upload", {
        "fileName": uploaded_file.filename,
        "fileSize": len(raw_bytes),
        "uploadTimestamp": datetime.now(timezone.utc).isoformat(),
        "parsedData": {"routes": parsed["routes"], "materials": parsed["materials"]},
    })

    return jsonify({
        "success": True,
        "routes": parsed["routes"],
        "materials": parsed["materials"],
        "totalRows": parsed["totalRows"],
    }), 200


@app.route("/api/optimize-route", methods=["POST"])
def optimize_route_endpoint():
    """
    POST /api/optimize-route

    Request body JSON example:
    {
      "origin": "Chennai",
      "destination": "Coimbatore",
      "weight": 10,            # tons, optional (defaults to 1)
      "priority": "carbon"     # "carbon" | "time" | "cost", optional
    }

    Response JSON:
    {
      "routes": [... every candidate, best first ...],
      "best_route": {...},
      "carbon_reduction": <float 0..100>
    }
    """
    request_data = request.get_json(silent=True) or {}
    payload = RoutePayload.from_dict(request_data)
    logger.debug("Route request: %s", payload)

    return jsonify(optimize_route(payload, audit_log=audit_trail)), 200


@app.route("/api/search-materials", methods=["POST"])
def search_materials_endpoint():
    """
    POST /api/search-materials

    Request body JSON example:
    {
      "material": "steel",                 # or "materialName"
      "filters": {
        "applicationFilter": "construction",
        "reductionFilter": "30",
        "costFilter": "lower"
      }
    }
    """
    request_data = request.get_json(silent=True) or {}
    payload = MaterialSearchPayload.from_dict(request_data)

    return jsonify(search_materials(payload, audit_log=audit_trail)), 200


@app.route("/api/analyze-material", methods=["POST"])
def analyze_material_endpoint():
    """
    POST /api/analyze-material

    Same request body as /api/search-materials; ranks the material's curated
    alternatives with the weighted engine and explains each match.
    """
    request_data = request.get_json(silent=True) or {}
    payload = MaterialSearchPayload.from_dict(request_data)

    return jsonify(analyze_material(payload, audit_log=audit_trail)), 200


@app.route("/api/audit-trail", methods=["GET"])
def get_audit_trail():
    """
    GET /api/audit-trail

    Response example:
    {
      "transactions": [{"id": "TRX_...", "timestamp": "...", "type": "...", "data": {...}, "user": "system"}],
      "summary": {
        "totalTransactions": 3,
        "csvUploads": 1,
        "routeOptimizations": 1,
        "materialSubstitutions": 1,
        "materialAnalyses": 0
      }
    }
    """
    transactions = audit_trail.transactions()
    return jsonify({
        "transactions": transactions,
        "summary": audit_trail.summary(transactions),
    }), 200


@app.route("/api/audit-trail", methods=["DELETE"])
def clear_audit_trail():
    audit_trail.clear()
    return jsonify({"success": True}), 200


if __name__ == "__main__":
    logger.info("EcoTrack backend running on http://localhost:%d", PORT)
    for rule in app.url_map.iter_rules():
        if rule.endpoint != "static":
            logger.info("  %s %s", ",".join(sorted(rule.methods - {"HEAD", "OPTIONS"})), rule.rule)
    # debug=True is ONLY for local dev; turn it off in prod
    app.run(host="0.0.0.0", port=PORT, debug=True)
