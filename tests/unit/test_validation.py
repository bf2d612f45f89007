"""Tests for slot validation shared by client and backend."""
import pytest
from datetime import datetime

from booking.validation import (
    SlotValidationError,
    is_in_past,
    is_valid_slot,
    is_weekday,
    parse_time,
    validate_backend_booking,
    validate_booking,
)

# 2025-11-01 is a Saturday; 2025-11-03 a Monday
NOW = datetime(2025, 11, 1, 9, 0)


class TestSlotRules:
    """A slot is valid iff weekday and minute == 0 and 8 <= hour <= 20."""

    @pytest.mark.parametrize("date_str", [
        "2025-11-03", "2025-11-04", "2025-11-05", "2025-11-06", "2025-11-07",
    ])
    def test_monday_to_friday_are_weekdays(self, date_str):
        assert is_weekday(date_str)

    @pytest.mark.parametrize("date_str", ["2025-11-08", "2025-11-09"])
    def test_weekend_is_rejected(self, date_str):
        assert not is_weekday(date_str)

    def test_malformed_date_is_not_a_weekday(self):
        assert not is_weekday("11/03/2025")
        assert not is_weekday("")
        assert not is_weekday(None)

    @pytest.mark.parametrize("time_str", ["08:00", "8:00", "12:00", "20:00"])
    def test_on_the_hour_within_business_hours(self, time_str):
        assert is_valid_slot(time_str)

    @pytest.mark.parametrize("time_str", ["07:00", "21:00", "23:00", "00:00"])
    def test_outside_business_hours(self, time_str):
        assert not is_valid_slot(time_str)

    @pytest.mark.parametrize("time_str", ["10:30", "09:15", "20:01"])
    def test_minutes_must_be_zero(self, time_str):
        assert not is_valid_slot(time_str)

    @pytest.mark.parametrize("time_str", ["24:00", "10:60", "10", "ten", "10:00:00"])
    def test_malformed_time(self, time_str):
        assert parse_time(time_str) is None
        assert not is_valid_slot(time_str)

    def test_past_slot(self):
        assert is_in_past("2025-10-31", "10:00", now=NOW)
        assert is_in_past("2025-11-01", "08:00", now=NOW)
        assert not is_in_past("2025-11-03", "10:00", now=NOW)

    def test_unparseable_slot_is_not_in_past(self):
        assert not is_in_past("not-a-date", "10:00", now=NOW)


class TestClientValidation:
    """Client rules, checked in order: required, past, weekday, slot."""

    @pytest.fixture
    def form(self):
        return {
            "name": "Ana",
            "email": "ana@example.com",
            "date": "2025-11-03",
            "time": "10:00",
        }

    def test_valid_form_passes(self, form):
        validate_booking(form, now=NOW)

    @pytest.mark.parametrize("field", ["name", "email", "date", "time"])
    def test_required_fields(self, form, field):
        form[field] = ""

        with pytest.raises(SlotValidationError) as exc:
            validate_booking(form, now=NOW)

        assert exc.value.message == "Completa los campos requeridos"

    def test_phone_and_service_are_optional(self, form):
        form["phone"] = ""
        form["service"] = ""
        validate_booking(form, now=NOW)

    def test_past_is_checked_before_weekday(self, form):
        form["date"] = "2025-10-25"  # past Saturday

        with pytest.raises(SlotValidationError, match="No puedes agendar en el pasado"):
            validate_booking(form, now=NOW)

    def test_weekend(self, form):
        form["date"] = "2025-11-08"

        with pytest.raises(SlotValidationError, match="lunes a viernes"):
            validate_booking(form, now=NOW)

    def test_half_hour(self, form):
        form["time"] = "10:30"

        with pytest.raises(SlotValidationError, match="Horas válidas"):
            validate_booking(form, now=NOW)


class TestBackendValidation:
    """Backend rules and their messages."""

    @pytest.fixture
    def body(self):
        return {
            "name": "Ana",
            "email": "ana@example.com",
            "service": "Breathwork individual",
            "date": "2025-11-03",
            "time": "10:00",
        }

    def test_valid_body_is_returned(self, body):
        assert validate_backend_booking(body, now=NOW) is body

    def test_service_is_required(self, body):
        del body["service"]

        with pytest.raises(SlotValidationError, match="Faltan campos requeridos"):
            validate_backend_booking(body, now=NOW)

    def test_body_must_be_an_object(self):
        with pytest.raises(SlotValidationError, match="Faltan campos requeridos"):
            validate_backend_booking(None, now=NOW)
        with pytest.raises(SlotValidationError, match="Faltan campos requeridos"):
            validate_backend_booking([], now=NOW)

    @pytest.mark.parametrize("changes, message", [
        ({"date": "03-11-2025"}, "Formato de fecha inválido"),
        ({"date": "2025-11-08"}, "Solo se permiten reservas de lunes a viernes"),
        ({"time": "10h"}, "Formato de hora inválido"),
        ({"time": "10:30"}, "Las reservas deben empezar en punto (minutos = 00)"),
        ({"time": "21:00"}, "Las reservas solo pueden ser entre 08:00 y 20:00"),
        ({"date": "2025-10-31"}, "No puedes agendar en el pasado"),
    ])
    def test_rule_messages(self, body, changes, message):
        body.update(changes)

        with pytest.raises(SlotValidationError) as exc:
            validate_backend_booking(body, now=NOW)

        assert exc.value.message == message
