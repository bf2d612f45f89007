"""JSON file store backing the booking API.

The whole list lives in one JSON file. Every operation reads the file, works
on the list in memory, and writes it back. There is no locking: two requests
writing at the same time can lose an update.
"""
import json
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Union

from booking.logging_config import get_logger
from booking.models import Appointment

logger = get_logger(__name__)


class SlotConflictError(Exception):
    """Raised when a (date, time) slot already holds an appointment."""

    def __init__(self, date: str, time: str):
        super().__init__(f"Slot {date} {time} is already booked")
        self.date = date
        self.time = time


class AppointmentStore:
    """Reads and writes the appointment list kept in a JSON file."""

    def __init__(self, path: Union[str, Path]):
        """
        Initialize store.

        Args:
            path: JSON file holding the list. Created on first write.
        """
        self.path = Path(path)

    def read(self) -> List[Dict[str, Any]]:
        """
        Load the appointment list.

        Returns:
            The stored list, or [] if the file does not exist yet

        Raises:
            OSError, json.JSONDecodeError: If the file exists but can't be read
        """
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                return json.load(f)
        except FileNotFoundError:
            return []

    def write(self, appointments: List[Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, 'w', encoding='utf-8') as f:
            json.dump(appointments, f, indent=2, ensure_ascii=False)

    def list(self) -> List[Dict[str, Any]]:
        return self.read()

    def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Add a new appointment.

        The id is the current time in milliseconds, as a string.

        Args:
            data: Validated booking fields

        Returns:
            The stored record

        Raises:
            SlotConflictError: If the slot is already taken
        """
        appointments = self.read()

        if any(
            apt.get("date") == data["date"] and apt.get("time") == data["time"]
            for apt in appointments
        ):
            raise SlotConflictError(data["date"], data["time"])

        appointment = Appointment(
            id=self._next_id(appointments),
            name=data["name"],
            email=data["email"],
            phone=None if data.get("phone") is None else str(data["phone"]),
            service=data["service"],
            date=data["date"],
            time=data["time"],
            created_at=datetime.now(timezone.utc).isoformat(timespec="milliseconds"),
        )
        record = appointment.to_record()

        appointments.append(record)
        self.write(appointments)

        logger.info("appointment_created", id=record["id"], date=record["date"], time=record["time"])
        return record

    def replace_all(self, appointments: List[Any]) -> int:
        """Overwrite the stored list. Returns the new count."""
        self.write(appointments)
        logger.info("appointments_synced", count=len(appointments))
        return len(appointments)

    def delete(self, appointment_id: Any) -> int:
        """
        Remove every appointment whose id matches.

        Ids are compared as strings, so "17" and 17 are the same appointment.

        Returns:
            Number of removed appointments (0 if none matched)
        """
        appointments = self.read()
        remaining = [apt for apt in appointments if str(apt.get("id")) != str(appointment_id)]
        self.write(remaining)

        removed = len(appointments) - len(remaining)
        logger.info("appointment_deleted", id=str(appointment_id), removed=removed)
        return removed

    def clear(self) -> None:
        self.write([])
        logger.info("appointments_cleared")

    @staticmethod
    def _next_id(appointments: List[Dict[str, Any]]) -> str:
        taken = {str(apt.get("id")) for apt in appointments}
        candidate = int(time.time() * 1000)
        while str(candidate) in taken:
            candidate += 1
        return str(candidate)
