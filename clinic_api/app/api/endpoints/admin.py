"""
Admin endpoints.

``GET /stats`` feeds the admin panel with totals and the newest
submissions; ``DELETE /clear`` empties both stores.  Neither endpoint
is authenticated.
"""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, status

from clinic_api.app.api.deps import get_record_service, get_statistics_service
from clinic_api.app.core.errors import PersistenceFailure
from clinic_api.app.services.record_service import RecordService
from clinic_api.app.services.statistics_service import StatisticsService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/stats", response_model=Dict[str, Any])
def get_stats(service: StatisticsService = Depends(get_statistics_service)) -> Dict[str, Any]:
    """Return the statistics overview."""
    try:
        stats = service.overview()
    except PersistenceFailure:
        logger.exception("Error getting stats")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to get statistics")
    return {"success": True, "data": stats}


@router.delete("/clear", response_model=Dict[str, Any])
def clear_data(service: RecordService = Depends(get_record_service)) -> Dict[str, Any]:
    """Delete every appointment and contact message."""
    try:
        service.clear_all()
    except PersistenceFailure:
        logger.exception("Error clearing data")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to clear data")
    return {"success": True, "message": "All data cleared"}
