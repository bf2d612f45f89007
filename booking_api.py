"""Booking API for the AMAUNA appointment system.

Flask server over a single JSON file:
- Liveness check
- Appointment listing, creation and deletion
- Full-list sync used by clients to push their local copy

Run with: python booking_api.py
"""
from pathlib import Path

from flask import Flask, current_app, jsonify, request, send_from_directory
from flask_cors import CORS

from booking import config
from booking.logging_config import RequestIDMiddleware, get_logger, setup_structured_logging
from booking.store import AppointmentStore, SlotConflictError
from booking.validation import SlotValidationError, validate_backend_booking

app = Flask(
    __name__,
    static_folder=config.STATIC_DIR,
    static_url_path="",
)
app.config["DATA_FILE"] = config.DATA_FILE
app.wsgi_app = RequestIDMiddleware(app.wsgi_app)
CORS(app)

logger = get_logger(__name__)


def get_store() -> AppointmentStore:
    """Store for the data file configured on the running app."""
    return AppointmentStore(current_app.config["DATA_FILE"])


@app.route('/api/ping', methods=['GET'])
def ping():
    """GET /api/ping - Liveness check used by clients before every call."""
    return jsonify({"ok": True})


@app.route('/api/appointments', methods=['GET'])
def list_appointments():
    """GET /api/appointments - List all appointments."""
    return jsonify(get_store().list())


@app.route('/api/appointments', methods=['POST'])
def create_appointment():
    """POST /api/appointments - Create a new appointment.

    Expected JSON body:
    {
        "name": "Juan Pérez",
        "email": "juan@ejemplo.cl",
        "phone": "+56912345678",
        "service": "Breathwork individual",
        "date": "2025-11-11",
        "time": "10:00"
    }
    """
    data = request.get_json(silent=True)

    try:
        validate_backend_booking(data)
    except SlotValidationError as e:
        logger.info("appointment_rejected", reason=e.message)
        return jsonify({"error": e.message}), 400

    try:
        appointment = get_store().create(data)
    except SlotConflictError as e:
        logger.info("appointment_conflict", date=e.date, time=e.time)
        return jsonify({"error": "El horario ya está reservado"}), 409  # Conflict

    return jsonify(appointment), 201


@app.route('/api/appointments/sync', methods=['POST'])
def sync_appointments():
    """POST /api/appointments/sync - Replace the entire list with the body."""
    body = request.get_json(silent=True)
    if not isinstance(body, list) or not all(isinstance(item, dict) for item in body):
        return jsonify({"error": "Se esperaba un arreglo"}), 400

    count = get_store().replace_all(body)
    return jsonify({"ok": True, "count": count})


@app.route('/api/appointments/<appointment_id>', methods=['DELETE'])
def delete_appointment(appointment_id):
    """DELETE /api/appointments/1731319200000 - Delete by id (no-op if unknown)."""
    removed = get_store().delete(appointment_id)
    return jsonify({"ok": True, "removed": removed})


@app.route('/api/appointments', methods=['DELETE'])
def delete_all_appointments():
    """DELETE /api/appointments - Delete every appointment."""
    get_store().clear()
    return jsonify({"ok": True})


@app.route('/', methods=['GET'])
def index():
    """GET / - Serve the static frontend when one is configured."""
    if not app.static_folder or not (Path(app.static_folder) / "index.html").exists():
        return jsonify({"error": "Frontend no configurado"}), 404
    return send_from_directory(app.static_folder, "index.html")


def print_startup_info():
    """Print server startup information."""
    print("=" * 70)
    print("AMAUNA BOOKING API")
    print("=" * 70)
    print(f"\nServer: http://localhost:{config.PORT}")
    print(f"Data file: {Path(app.config['DATA_FILE']).resolve()}")
    if app.static_folder:
        print(f"Frontend: {app.static_folder}")
    print(f"\nServices: {len(config.SERVICES)}")
    for service in config.SERVICES:
        print(f"   - {service}")
    print("\nOperating Hours:")
    print("   Days: Monday - Friday")
    print(f"   Time: {config.OPERATING_HOURS['first_hour']:02d}:00 - "
          f"{config.OPERATING_HOURS['last_hour']:02d}:00 (on the hour)")

    print("\nEndpoints:")
    print("   GET    /api/ping                  - Liveness check")
    print("   GET    /api/appointments          - List appointments")
    print("   POST   /api/appointments          - Create appointment")
    print("   POST   /api/appointments/sync     - Replace the whole list")
    print("   DELETE /api/appointments/<id>     - Delete appointment")
    print("   DELETE /api/appointments          - Delete all")

    print("\nServer ready! Waiting for requests...")
    print("=" * 70)


def main():
    setup_structured_logging(config.LOG_LEVEL)
    print_startup_info()
    app.run(
        debug=False,
        port=config.PORT,
        host='0.0.0.0'
    )


if __name__ == '__main__':
    main()
