"""
FastAPI dependencies shared by the endpoints.

The record store is created once by ``create_app`` and kept on
``app.state``.  Services are cheap wrappers around it and are built
per request.
"""

from fastapi import Request

from clinic_api.app.core.store import RecordStore
from clinic_api.app.services.record_service import RecordService
from clinic_api.app.services.statistics_service import StatisticsService


def get_store(request: Request) -> RecordStore:
    return request.app.state.store


def get_record_service(request: Request) -> RecordService:
    return RecordService(get_store(request))


def get_statistics_service(request: Request) -> StatisticsService:
    return StatisticsService(get_store(request))
