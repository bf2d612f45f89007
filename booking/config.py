"""Configuration for the AMAUNA booking system.

Business rules are centralized here. Deployment values (URLs, file paths)
come from the environment, loaded from a .env file when present.
"""
import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

SERVICES = [
    "Breathwork individual",
    "Breathwork grupal",
    "Meditación guiada",
]

OPERATING_HOURS = {
    # Monday=0 .. Sunday=6
    "weekdays": [0, 1, 2, 3, 4],
    "first_hour": 8,
    "last_hour": 20,
}

# Key under which the client keeps its fallback copy
STORAGE_KEY = "amauna_appointments"

CSV_HEADER = ["Nombre", "Email", "Teléfono", "Servicio", "Fecha", "Hora"]
CSV_FILENAME = "amauna_reservas.csv"

# Backend
PORT = int(os.getenv("PORT", "3000"))
DATA_FILE = Path(os.getenv("BOOKING_DATA_FILE", "appointments.json"))
STATIC_DIR = os.getenv("BOOKING_STATIC_DIR") or None

# Client
API_BASE_URL = os.getenv("BOOKING_API_BASE_URL", f"http://localhost:{PORT}/api")
LOCAL_STORE_FILE = Path(
    os.getenv(
        "BOOKING_LOCAL_STORE",
        str(Path.home() / ".amauna" / "local_storage.json"),
    )
)
FORM_ACTION = os.getenv("BOOKING_FORM_ACTION") or None
HTTP_TIMEOUT = float(os.getenv("BOOKING_HTTP_TIMEOUT", "5"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
