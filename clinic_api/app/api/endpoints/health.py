"""Liveness endpoint."""

from typing import Any, Dict

from fastapi import APIRouter

from clinic_api.app.services.record_service import format_timestamp, utc_now

router = APIRouter()


@router.get("", response_model=Dict[str, Any])
def health() -> Dict[str, Any]:
    return {"success": True, "data": {"status": "ok", "timestamp": format_timestamp(utc_now())}}
