"""Pydantic models for appointment records and booking forms."""
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


NO_DIAGNOSIS = "NADA"


class AppointmentForm(BaseModel):
    """Fields collected by the booking form, trimmed like the browser form did.

    diagnosticos is a multi-select. NADA (no diagnosis) can't be combined with
    anything else: whichever was picked last wins, as when ticking the boxes
    one after another.
    """
    name: str = ""
    email: str = ""
    phone: str = ""
    service: str = ""
    date: str = ""
    time: str = ""
    diagnosticos: List[str] = Field(default_factory=list)

    @field_validator("name", "email", "phone", "service", "date", "time", mode="before")
    @classmethod
    def strip_text(cls, value: Any) -> Any:
        if value is None:
            return ""
        if isinstance(value, str):
            return value.strip()
        return value

    @field_validator("diagnosticos", mode="before")
    @classmethod
    def select_diagnoses(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, str):
            value = value.split(",")
        if not isinstance(value, (list, tuple)):
            return value

        selected: List[str] = []
        for item in value:
            label = item.strip() if isinstance(item, str) else item
            if not label or label in selected:
                continue
            if label == NO_DIAGNOSIS:
                selected = [label]
            else:
                selected = [s for s in selected if s != NO_DIAGNOSIS] + [label]
        return selected

    def to_payload(self, created_at: Optional[datetime] = None) -> Dict[str, Any]:
        """Build the record sent to a store, stamped with its creation time.

        Diagnoses only travel with the external form relay, not to the stores.
        """
        stamp = created_at or datetime.now(timezone.utc)
        return {
            **self.model_dump(exclude={"diagnosticos"}),
            "createdAt": stamp.isoformat(timespec="milliseconds"),
        }


class Appointment(BaseModel):
    """A stored appointment.

    Keys the model does not know about are kept, so records written by other
    clients survive a read/write cycle untouched.
    """
    id: Optional[Union[str, int]] = None
    name: str
    email: str
    phone: Optional[str] = None
    service: Optional[str] = None
    date: str
    time: str
    created_at: Optional[str] = Field(None, alias="createdAt")

    model_config = ConfigDict(
        extra="allow",
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "id": "1731319200000",
                "name": "Juan Pérez",
                "email": "juan@ejemplo.cl",
                "phone": "+56912345678",
                "service": "Breathwork individual",
                "date": "2025-11-11",
                "time": "10:00",
                "createdAt": "2025-11-01T12:00:00+00:00"
            }
        }
    )

    @property
    def slot(self) -> tuple:
        return (self.date, self.time)

    def to_record(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)
