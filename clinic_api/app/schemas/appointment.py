"""
Pydantic models for appointment bookings.

``AppointmentCreate`` is the normalised form of a booking request once
it has passed validation (all fields present, strings trimmed, email
lowercased).  ``Appointment`` is the persisted record; its field order
is the key order written to ``appointments.json``.
"""

from typing import Literal

from pydantic import BaseModel, Field

APPOINTMENT_PENDING = "pending"


class AppointmentCreate(BaseModel):
    """Normalised booking request.

    Built by the record service after validation has passed; request
    bodies are not bound to this model directly.
    """

    name: str = Field(..., examples=["Jane Doe"])
    email: str = Field(..., examples=["jane@example.com"])
    phone: str = Field(..., examples=["555-0100"])
    doctor: str = Field(..., examples=["Dr. Patel"])
    date: str = Field(..., description="Requested day, YYYY-MM-DD", examples=["2025-01-01"])
    time: str = Field(..., examples=["10:00"])


class Appointment(BaseModel):
    id: int = Field(..., description="Creation time in milliseconds since the epoch")
    timestamp: str = Field(..., description="Creation time, ISO‑8601 UTC")
    name: str
    email: str
    phone: str
    doctor: str
    date: str
    time: str
    # Status is assigned once at creation; no operation changes it.
    status: Literal["pending"] = APPOINTMENT_PENDING
