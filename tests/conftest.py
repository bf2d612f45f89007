"""Shared test fixtures."""
import pytest

from booking.local_storage import LocalStorage
from booking.store import AppointmentStore
from tests.utils.dates import get_future_weekday


@pytest.fixture
def booking_data():
    """Valid reservation body for a future weekday at 10:00."""
    return {
        "name": "Juan Pérez",
        "email": "juan@ejemplo.cl",
        "phone": "+56912345678",
        "service": "Breathwork individual",
        "date": get_future_weekday(),
        "time": "10:00",
    }


@pytest.fixture
def store(tmp_path) -> AppointmentStore:
    return AppointmentStore(tmp_path / "appointments.json")


@pytest.fixture
def local_storage(tmp_path) -> LocalStorage:
    return LocalStorage(tmp_path / "client" / "local_storage.json")


@pytest.fixture
def api_app(tmp_path):
    """Booking API pointed at a temporary data file."""
    from booking_api import app

    original = app.config["DATA_FILE"]
    app.config["DATA_FILE"] = tmp_path / "api" / "appointments.json"
    app.config["TESTING"] = True
    yield app
    app.config["DATA_FILE"] = original


@pytest.fixture
def api_client(api_app):
    with api_app.test_client() as client:
        yield client
