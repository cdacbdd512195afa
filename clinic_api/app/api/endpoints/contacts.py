"""Contact message endpoints."""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, HTTPException, status

from clinic_api.app.api.deps import get_record_service
from clinic_api.app.core.errors import PersistenceFailure, ValidationFailure
from clinic_api.app.services.record_service import RecordService
from clinic_api.app.services.validation import CONTACT

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=Dict[str, Any])
def list_contacts(service: RecordService = Depends(get_record_service)) -> Dict[str, Any]:
    """Return all contact messages."""
    try:
        contacts = service.list(CONTACT)
    except PersistenceFailure:
        logger.exception("Error reading contacts")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to read contacts")
    return {"success": True, "data": contacts}


@router.post("", response_model=Dict[str, Any], status_code=status.HTTP_201_CREATED)
def create_contact(
    payload: Any = Body(None),
    service: RecordService = Depends(get_record_service),
) -> Dict[str, Any]:
    """Store a contact message with status ``unread``."""
    try:
        contact = service.create_contact(payload)
    except ValidationFailure as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except PersistenceFailure:
        logger.exception("Error creating contact")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to send message")
    return {"success": True, "data": contact, "message": "Message sent successfully!"}
