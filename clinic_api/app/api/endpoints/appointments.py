"""
Appointment endpoints.

``GET`` returns every stored booking in creation order; ``POST`` books
a new appointment.  Validation failures become HTTP 400 with the
validator's message; storage failures become HTTP 500 with a generic
message.
"""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, HTTPException, status

from clinic_api.app.api.deps import get_record_service
from clinic_api.app.core.errors import PersistenceFailure, ValidationFailure
from clinic_api.app.services.record_service import RecordService
from clinic_api.app.services.validation import APPOINTMENT

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=Dict[str, Any])
def list_appointments(service: RecordService = Depends(get_record_service)) -> Dict[str, Any]:
    """Return all appointments."""
    try:
        appointments = service.list(APPOINTMENT)
    except PersistenceFailure:
        logger.exception("Error reading appointments")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to read appointments")
    return {"success": True, "data": appointments}


@router.post("", response_model=Dict[str, Any], status_code=status.HTTP_201_CREATED)
def create_appointment(
    payload: Any = Body(None),
    service: RecordService = Depends(get_record_service),
) -> Dict[str, Any]:
    """Book an appointment.

    The body must contain non‑blank ``name``, ``email``, ``phone``,
    ``doctor``, ``date`` and ``time``.  The created record (with its
    ``id``, ``timestamp`` and ``pending`` status) is returned.
    """
    try:
        appointment = service.create_appointment(payload)
    except ValidationFailure as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except PersistenceFailure:
        logger.exception("Error creating appointment")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to create appointment")
    return {
        "success": True,
        "data": appointment,
        "message": f"Appointment booked with {appointment['doctor']}!",
    }
