"""AMAUNA booking package initialization."""
from booking.models import Appointment, AppointmentForm
from booking.store import AppointmentStore, SlotConflictError
from booking.sync import BookingClient, BookingResult

__all__ = [
    "Appointment",
    "AppointmentForm",
    "AppointmentStore",
    "SlotConflictError",
    "BookingClient",
    "BookingResult",
]
