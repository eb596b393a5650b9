"""
api.py
──────
Flask front-end for the Wall Surface Area Calculator.
Connects input_validator → project_state → area_calculator → exporters.

The project lives in memory on the app instance (app.config["PROJECT_STATE"])
for the lifetime of the process; nothing is written to disk.

Endpoints:
  GET    /api/health                               Health check
  GET    /api/project                              Details, rooms, summaries, total
  PUT    /api/project/details                      Update project details
  POST   /api/rooms                                Add a room
  PATCH  /api/rooms/<room_id>                      Rename a room
  DELETE /api/rooms/<room_id>                      Remove a room and its entries
  GET    /api/rooms/<room_id>/summary              Area summary for one room
  POST   /api/rooms/<room_id>/<kind>               Add a wall / opening / ceiling / running feet
  PATCH  /api/rooms/<room_id>/<kind>/<entry_id>    Edit an entry
  DELETE /api/rooms/<room_id>/<kind>/<entry_id>    Remove an entry
  POST   /api/calculate                            Stateless: rooms JSON in, report out
  GET    /api/export/<fmt>                         Download csv | pdf | xlsx

  <kind> is one of: walls, openings, ceilings, running-feet

Run locally:
  python api.py

Environment variables:
  HOST            (default 127.0.0.1)
  PORT            (default 5000)
  FRONTEND_ORIGIN (default *)
"""

from __future__ import annotations

import io
import os
import logging
import traceback
from datetime import datetime, timezone

from flask import Flask, Blueprint, current_app, request, jsonify, send_file

from area_calculator import build_project_report
from input_validator import MeasurementError, build_room
from project_state import ProjectState, EntityNotFoundError, ENTRY_KINDS
from csv_exporter import export_csv_text
from pdf_report import build_pdf_report
from excel_exporter import export_excel_bytes

# ── Logging ───────────────────────────────────────────────────────────────────
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(message)s",
)
logger = logging.getLogger(__name__)

bp = Blueprint("areacalc", __name__, url_prefix="/api")

EXPORT_FORMATS = {
    "csv":  "text/csv",
    "pdf":  "application/pdf",
    "xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
}


# ── Helpers ───────────────────────────────────────────────────────────────────

def _err(message: str, status: int = 400) -> tuple:
    return jsonify({"success": False, "error": message}), status


def _state() -> ProjectState:
    return current_app.config["PROJECT_STATE"]


def _kind(raw: str) -> str:
    kind = raw.replace("-", "_")
    if kind not in ENTRY_KINDS:
        raise EntityNotFoundError(
            f"Unknown measurement kind '{raw}'. "
            f"Must be one of: walls, openings, ceilings, running-feet"
        )
    return kind


def _body() -> dict:
    body = request.get_json(silent=True)
    if body is None:
        return {}
    if not isinstance(body, dict):
        raise MeasurementError("JSON body must be an object.")
    return body


def _project_payload(state: ProjectState) -> dict:
    result = build_project_report(state.rooms).to_dict()
    # Attach the entries themselves next to each room summary
    for room_out, room in zip(result["rooms"], state.rooms):
        room_out.update(room.to_dict())
    result["success"]             = True
    result["details"]             = state.details.to_dict()
    result["default_wall_height"] = state.default_wall_height
    return result


# ── Routes ────────────────────────────────────────────────────────────────────

@bp.get("/health")
def health():
    """Simple health check."""
    return jsonify({
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": "1.0.0",
        "export_formats": list(EXPORT_FORMATS),
        "measurement_kinds": ["walls", "openings", "ceilings", "running-feet"],
    })


@bp.get("/project")
def get_project():
    return jsonify(_project_payload(_state()))


@bp.put("/project/details")
def update_details():
    """
    JSON body: any of project_name, client_name, client_address,
    contractor_name, contractor_phone.
    """
    details = _state().update_details(_body())
    return jsonify({"success": True, "details": details.to_dict()})


@bp.post("/rooms")
def add_room():
    room = _state().add_room(_body().get("name"))
    return jsonify({"success": True, "room": room.to_dict()}), 201


@bp.patch("/rooms/<room_id>")
def rename_room(room_id: str):
    room = _state().rename_room(room_id, _body().get("name"))
    return jsonify({"success": True, "room": room.to_dict()})


@bp.delete("/rooms/<room_id>")
def remove_room(room_id: str):
    room = _state().remove_room(room_id)
    return jsonify({"success": True, "removed": room.id})


@bp.get("/rooms/<room_id>/summary")
def room_summary(room_id: str):
    state   = _state()
    room    = state.get_room(room_id)
    summary = state.room_summary(room_id)
    return jsonify({"success": True, "id": room.id, "name": room.name,
                    "summary": summary.to_dict()})


@bp.post("/rooms/<room_id>/<kind>")
def add_entry(room_id: str, kind: str):
    """
    JSON body, by kind:
      walls / ceilings   {"height": 8, "width": 12, "quantity": 1}
      openings           {"height": 7, "width": 3, "type": "door", "quantity": 1}
      running-feet       {"length": 5, "quantity": 2}

    Values may be numbers or strings; quantity defaults to 1.
    """
    state = _state()
    entry = state.add_entry(room_id, _kind(kind), _body())
    return jsonify({
        "success": True,
        "entry":   entry.to_dict(),
        "summary": state.room_summary(room_id).to_dict(),
    }), 201


@bp.patch("/rooms/<room_id>/<kind>/<entry_id>")
def update_entry(room_id: str, kind: str, entry_id: str):
    state = _state()
    entry = state.update_entry(room_id, _kind(kind), entry_id, _body())
    return jsonify({
        "success": True,
        "entry":   entry.to_dict(),
        "summary": state.room_summary(room_id).to_dict(),
    })


@bp.delete("/rooms/<room_id>/<kind>/<entry_id>")
def remove_entry(room_id: str, kind: str, entry_id: str):
    state = _state()
    entry = state.remove_entry(room_id, _kind(kind), entry_id)
    return jsonify({
        "success": True,
        "removed": entry.id,
        "summary": state.room_summary(room_id).to_dict(),
    })


@bp.post("/calculate")
def calculate():
    """
    Calculate a list of rooms provided directly as JSON (no stored state).

    JSON body:
    {
      "rooms": [
        {"name": "Kitchen",
         "walls":        [{"height": 8, "width": 12, "quantity": 1}],
         "openings":     [{"height": 7, "width": 3, "type": "door"}],
         "ceilings":     [{"height": 10, "width": 10}],
         "running_feet": [{"length": 5, "quantity": 2}]}
      ]
    }
    """
    body = _body()
    if "rooms" not in body or not isinstance(body["rooms"], list):
        return _err("JSON body with 'rooms' array is required.")

    try:
        rooms = [build_room(r, default_name=f"Room {i}")
                 for i, r in enumerate(body["rooms"], 1)]
    except MeasurementError as e:
        return _err(f"Invalid room data: {e}")

    result = build_project_report(rooms).to_dict()
    result["success"] = True
    return jsonify(result)


@bp.get("/export/<fmt>")
def export(fmt: str):
    """Download the current project as csv, pdf or xlsx."""
    fmt = fmt.lower()
    if fmt not in EXPORT_FORMATS:
        return _err(f"Unsupported export format '{fmt}'. "
                    f"Supported: {', '.join(EXPORT_FORMATS)}")

    state = _state()
    try:
        if fmt == "csv":
            data = export_csv_text(state.rooms).encode("utf-8")
        elif fmt == "pdf":
            data = build_pdf_report(state.rooms, state.details)
        else:
            data = export_excel_bytes(state.rooms, state.details)
    except Exception as e:
        logger.error(traceback.format_exc())
        return _err(f"Export failed: {e}", 500)

    filename = state.details.export_filename(fmt)
    logger.info(f"Exported {fmt.upper()}: {filename}  rooms={len(state.rooms)}")
    return send_file(
        io.BytesIO(data),
        as_attachment=True,
        download_name=filename,
        mimetype=EXPORT_FORMATS[fmt],
    )


# ── Error handlers ────────────────────────────────────────────────────────────

def _invalid_measurement(e):
    return _err(str(e), 400)

def _not_found_entity(e):
    return _err(str(e.args[0]) if e.args else "Not found.", 404)

def _not_found(e):
    return _err("Endpoint not found.", 404)

def _method_not_allowed(e):
    return _err("Method not allowed.", 405)


# ── App factory ───────────────────────────────────────────────────────────────

def create_app(state: ProjectState | None = None) -> Flask:
    """Build the Flask app around a caller-owned (or fresh) ProjectState."""
    app = Flask(__name__)
    app.config["PROJECT_STATE"] = state if state is not None else ProjectState()
    app.register_blueprint(bp)

    origin = os.getenv("FRONTEND_ORIGIN", "*")

    @app.after_request
    def add_cors_headers(response):
        response.headers["Access-Control-Allow-Origin"]  = origin
        response.headers["Access-Control-Allow-Methods"] = "GET, POST, PUT, PATCH, DELETE, OPTIONS"
        response.headers["Access-Control-Allow-Headers"] = "Content-Type"
        return response

    app.register_error_handler(MeasurementError,    _invalid_measurement)
    app.register_error_handler(EntityNotFoundError, _not_found_entity)
    app.register_error_handler(404, _not_found)
    app.register_error_handler(405, _method_not_allowed)
    return app


# ── Entry point ───────────────────────────────────────────────────────────────

if __name__ == "__main__":
    host = os.getenv("HOST", "127.0.0.1")
    port = int(os.getenv("PORT", 5000))
    logger.info(f"Starting Wall Surface Area Calculator on {host}:{port}")
    create_app().run(host=host, port=port)
