"""End-to-end tests: BookingClient talking to the in-process booking API.

FlaskSession routes the client's requests into Flask's test client, so the
whole remote-first flow runs without a network.
"""
import json
import pytest
import requests

from booking import config
from booking.sync import BookingClient

API = "http://localhost:3000/api"


class FlaskSession:
    """Minimal requests.Session stand-in backed by a Flask test client."""

    def __init__(self, test_client):
        self.test_client = test_client
        self.online = True

    def request(self, method, url, json=None, data=None, **kwargs):
        if not self.online:
            raise requests.exceptions.ConnectionError("Connection refused")
        path = url.replace("http://localhost:3000", "")
        flask_response = self.test_client.open(path, method=method, json=json, data=data)

        response = requests.Response()
        response.status_code = flask_response.status_code
        response._content = flask_response.get_data()
        return response

    def get(self, url, **kwargs):
        return self.request("GET", url, **kwargs)

    def post(self, url, **kwargs):
        return self.request("POST", url, **kwargs)


@pytest.fixture
def flask_session(api_client):
    return FlaskSession(api_client)


@pytest.fixture
def client(flask_session, local_storage):
    return BookingClient(API, storage=local_storage, session=flask_session, form_action=None)


def test_booking_goes_to_backend(client, api_app, booking_data, local_storage):
    result = client.create_appointment(booking_data)

    assert result.ok
    assert result.stored_remotely
    stored = json.loads(api_app.config["DATA_FILE"].read_text(encoding="utf-8"))
    assert [apt["id"] for apt in stored] == [result.appointment["id"]]
    assert local_storage.get_item(config.STORAGE_KEY) is None


def test_taken_slot_falls_back_to_local_confirmation(client, booking_data, local_storage):
    """The backend rejects the duplicate, so the local path asks the user."""
    client.create_appointment(booking_data)
    questions = []

    def decline(question):
        questions.append(question)
        return False

    result = client.create_appointment({**booking_data, "name": "Otra"}, confirm=decline)

    assert result.status == "cancelled"
    assert len(questions) == 1
    assert len(client.load_appointments()) == 1


def test_offline_then_sync_to_backend(client, flask_session, booking_data):
    flask_session.online = False
    offline = client.create_appointment(booking_data)
    assert offline.ok
    assert not offline.stored_remotely

    flask_session.online = True
    local_copy = client._read_local()
    assert client.save_appointments(local_copy) == {"ok": True, "count": 1}

    remote = client.load_appointments()
    assert remote == local_copy


def test_round_trip_through_backend_preserves_fields(client, booking_data):
    appointments = [{
        "id": 1731319200000, "name": "Juan Pérez", "email": "juan@ejemplo.cl",
        "phone": "+56912345678", "service": "Breathwork individual",
        "date": booking_data["date"], "time": "10:00",
        "createdAt": "2025-11-01T12:00:00.000Z",
    }]

    client.save_appointments(appointments)

    assert client.load_appointments() == appointments


def test_delete_and_clear_through_backend(client, booking_data):
    first = client.create_appointment(booking_data).appointment
    client.create_appointment({**booking_data, "time": "11:00"})

    assert client.delete_appointment(first["id"]) is True
    assert [apt["time"] for apt in client.list_appointments()] == ["11:00"]

    assert client.clear_all(confirm=lambda q: True) is True
    assert client.list_appointments() == []
