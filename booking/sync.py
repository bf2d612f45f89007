"""Client sync layer: remote-first persistence with a local fallback.

Every operation first pings the backend. When it answers, the backend is
the source of truth. When it doesn't (or a call fails), the operation
silently falls back to the local copy kept under config.STORAGE_KEY.

Nothing here retries: a failed call is logged and the fallback is used.
"""
import json
import time
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional, Union
from urllib.parse import quote

import requests

from booking import config
from booking.consent import STATUS_ACCEPTED, build_consent_text
from booking.export import write_csv
from booking.http_client import BackendError, create_http_session, fetch_json
from booking.local_storage import LocalStorage
from booking.logging_config import get_logger
from booking.models import AppointmentForm
from booking.validation import SlotValidationError, validate_booking

logger = get_logger(__name__)

ConfirmFn = Callable[[str], bool]

MSG_SAVED_REMOTE = "Reserva enviada al servidor y guardada."
MSG_SAVED_LOCAL = "Reserva guardada localmente."
MSG_RELAY_OK = "Reserva enviada. Revisa tu correo para confirmación."
MSG_RELAY_FAILED = "Error al enviar la reserva. Intenta de nuevo."
MSG_RELAY_NETWORK = "Error de red al enviar la reserva. Se guardó localmente."
MSG_CONFLICT = "Ya existe una reserva en ese horario. ¿Deseas igual intentarlo?"
MSG_CLEAR_ALL = "¿Borrar todas las reservas? Esta acción no se puede deshacer."
MSG_NOTHING_TO_EXPORT = "No hay datos para exportar"


class NothingToExport(Exception):
    """Raised when an export is requested for an empty list."""


@dataclass
class BookingResult:
    """Outcome of a booking attempt, with the message to show the user."""
    status: str  # "success", "error" or "cancelled"
    message: str = ""
    appointment: Optional[Dict[str, Any]] = None
    stored_remotely: bool = False

    @property
    def ok(self) -> bool:
        return self.status == "success"


def _decline(message: str) -> bool:
    return False


class BookingClient:
    """Books, lists and deletes appointments against the backend or local storage."""

    def __init__(
        self,
        api_base_url: str = config.API_BASE_URL,
        storage: Optional[LocalStorage] = None,
        session: Optional[requests.Session] = None,
        form_action: Optional[str] = config.FORM_ACTION,
    ):
        """
        Initialize client.

        Args:
            api_base_url: Backend API root (e.g. http://localhost:3000/api)
            storage: Local fallback storage (defaults to config.LOCAL_STORE_FILE)
            session: HTTP session (defaults to a pooled session without retries)
            form_action: Optional external form endpoint that receives
                         locally saved reservations
        """
        self.api_base_url = api_base_url.rstrip("/")
        self.storage = storage or LocalStorage(config.LOCAL_STORE_FILE)
        self.session = session or create_http_session()
        self.form_action = form_action

    def _url(self, path: str) -> str:
        return f"{self.api_base_url}{path}"

    # Backend availability

    def backend_available(self) -> bool:
        """Ping the backend once. Any network failure means unavailable."""
        try:
            response = self.session.get(self._url("/ping"))
            return response.ok
        except requests.exceptions.RequestException:
            return False

    # Local storage

    def _read_local(self) -> List[Dict[str, Any]]:
        try:
            raw = self.storage.get_item(config.STORAGE_KEY)
            appointments = json.loads(raw) if raw else []
        except (OSError, ValueError) as e:
            logger.error("local_storage_read_failed", error=str(e))
            return []

        if not isinstance(appointments, list) or not all(isinstance(apt, dict) for apt in appointments):
            logger.error("local_storage_read_failed", error="stored value is not a list of appointments")
            return []
        return appointments

    def _write_local(self, appointments: List[Dict[str, Any]]) -> None:
        self.storage.set_item(config.STORAGE_KEY, json.dumps(appointments, ensure_ascii=False))

    # Load / save

    def load_appointments(self) -> List[Dict[str, Any]]:
        """Load the list from the backend, or from local storage if that fails."""
        if self.backend_available():
            try:
                return fetch_json(self.session, "GET", self._url("/appointments"))
            except BackendError as e:
                logger.warning("backend_fetch_failed_using_local", error=str(e))
        return self._read_local()

    def save_appointments(self, appointments: List[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
        """
        Replace the whole list, remotely if possible.

        Returns:
            The backend's sync answer, or None when saved locally
        """
        if self.backend_available():
            try:
                return fetch_json(
                    self.session, "POST", self._url("/appointments/sync"), json=appointments
                )
            except BackendError as e:
                logger.warning("sync_failed_saving_local", error=str(e))
        self._write_local(appointments)
        return None

    def list_appointments(self) -> List[Dict[str, Any]]:
        """Appointments in chronological order."""
        return sorted(
            self.load_appointments(),
            key=lambda apt: (str(apt.get("date", "")), str(apt.get("time", "")).zfill(5))
        )

    # Booking

    def create_appointment(
        self,
        form: Union[AppointmentForm, Mapping[str, Any]],
        confirm: ConfirmFn = _decline,
        now: Optional[datetime] = None,
    ) -> BookingResult:
        """
        Validate and store a reservation.

        The backend is tried first and rejects a taken slot outright. When the
        reservation ends up stored locally, a taken slot is only a warning:
        confirm() decides whether to book it anyway.

        Args:
            form: Booking form fields
            confirm: Asked (with a question) before double-booking a slot locally
            now: Reference time for the past check (defaults to now)

        Returns:
            BookingResult describing what happened
        """
        if not isinstance(form, AppointmentForm):
            form = AppointmentForm.model_validate(dict(form))

        try:
            validate_booking(form.model_dump(), now=now)
        except SlotValidationError as e:
            return BookingResult(status="error", message=e.message)

        appointment = form.to_payload()

        if self.backend_available():
            try:
                created = fetch_json(
                    self.session, "POST", self._url("/appointments"), json=appointment
                )
                return BookingResult(
                    status="success",
                    message=MSG_SAVED_REMOTE,
                    appointment=created,
                    stored_remotely=True,
                )
            except BackendError as e:
                logger.warning("post_to_backend_failed_saving_local", error=str(e))

        appointments = self.load_appointments()
        conflict = any(
            apt.get("date") == form.date and apt.get("time") == form.time
            for apt in appointments
        )
        if conflict and not confirm(MSG_CONFLICT):
            return BookingResult(status="cancelled")

        appointment["id"] = int(time.time() * 1000)
        appointments.append(appointment)
        self.save_appointments(appointments)

        if self.form_action:
            return self._relay_to_form_action(form, appointment)

        return BookingResult(status="success", message=MSG_SAVED_LOCAL, appointment=appointment)

    def _relay_to_form_action(self, form: AppointmentForm, appointment: Dict[str, Any]) -> BookingResult:
        """Post a locally saved reservation to the external form endpoint."""
        fields = form.model_dump()
        fields["consentimiento_aceptado"] = build_consent_text()
        fields["consentimiento_status"] = STATUS_ACCEPTED

        try:
            response = self.session.post(self.form_action, data=fields)
        except requests.exceptions.RequestException as e:
            logger.error("form_relay_error", error=str(e))
            return BookingResult(status="error", message=MSG_RELAY_NETWORK, appointment=appointment)

        if not response.ok:
            logger.warning("form_relay_failed", status=response.status_code, body=response.text)
            return BookingResult(status="error", message=MSG_RELAY_FAILED, appointment=appointment)

        return BookingResult(status="success", message=MSG_RELAY_OK, appointment=appointment)

    # Deletion

    def delete_appointment(self, appointment_id: Any) -> bool:
        """
        Delete one appointment by id.

        Returns:
            False when there was nothing to delete (empty or unknown id locally)
        """
        if appointment_id is None or appointment_id == "":
            return False

        if self.backend_available():
            try:
                path = f"/appointments/{quote(str(appointment_id), safe='')}"
                fetch_json(self.session, "DELETE", self._url(path))
                return True
            except BackendError as e:
                logger.warning("delete_via_backend_failed", error=str(e))

        appointments = self.load_appointments()
        index = next(
            (i for i, apt in enumerate(appointments) if str(apt.get("id")) == str(appointment_id)),
            None
        )
        if index is None:
            return False

        del appointments[index]
        self.save_appointments(appointments)
        return True

    def clear_all(self, confirm: ConfirmFn = _decline) -> bool:
        """Delete every appointment once confirm() agrees."""
        if not confirm(MSG_CLEAR_ALL):
            return False

        if self.backend_available():
            try:
                fetch_json(self.session, "DELETE", self._url("/appointments"))
                return True
            except BackendError as e:
                logger.warning("clear_backend_failed_clearing_local", error=str(e))

        self.save_appointments([])
        return True

    # Export

    def export_csv(self, path: Union[str, Path] = config.CSV_FILENAME) -> Path:
        """
        Write the current list to a CSV file.

        Raises:
            NothingToExport: If there are no appointments
        """
        appointments = self.load_appointments()
        if not appointments:
            raise NothingToExport(MSG_NOTHING_TO_EXPORT)
        return write_csv(appointments, path)
