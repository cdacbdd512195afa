"""
Serverless function handlers for the clinic API.

Each handler takes a Netlify/Lambda style ``event`` dictionary (with
``httpMethod``, ``path`` and ``body``) plus a ``context`` argument and
returns ``{"statusCode", "headers", "body"}``.  They run the same
validation, record service and statistics code as the FastAPI
application and return the same JSON envelopes, so both deployments
behave identically.

The data directory comes from ``Settings`` on every invocation; with
``NETLIFY`` set and no ``DATA_DIR`` it is the system temp directory,
which does not survive cold starts.

Note: each instance holds its own store lock.  Concurrent invocations
served by different instances are not serialised.
"""

import base64
import functools
import json
import logging
from typing import Any, Callable, Dict, Iterable, Optional

from clinic_api.app.core.config import get_settings
from clinic_api.app.core.errors import PersistenceFailure, ValidationFailure
from clinic_api.app.core.logging_config import setup_logging
from clinic_api.app.core.store import JsonFileStore, RecordStore
from clinic_api.app.services.record_service import RecordService
from clinic_api.app.services.statistics_service import StatisticsService
from clinic_api.app.services.validation import APPOINTMENT, CONTACT

logger = logging.getLogger(__name__)

_stores: Dict[str, RecordStore] = {}


def get_store() -> RecordStore:
    """Return the store for the configured data directory.

    Stores are cached per directory so that warm invocations share the
    same lock.
    """
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_file or None)
    store = _stores.get(settings.data_dir)
    if store is None:
        store = _stores[settings.data_dir] = JsonFileStore(settings.data_dir)
    return store


def _headers(methods: Iterable[str]) -> Dict[str, str]:
    return {
        "Access-Control-Allow-Origin": "*",
        "Access-Control-Allow-Headers": "Content-Type",
        "Access-Control-Allow-Methods": ", ".join(methods),
        "Content-Type": "application/json",
    }


def _json_response(status: int, payload: Optional[dict], methods: Iterable[str]) -> Dict[str, Any]:
    return {
        "statusCode": status,
        "headers": _headers(methods),
        "body": "" if payload is None else json.dumps(payload, ensure_ascii=False),
    }


def _error(status: int, message: str, methods: Iterable[str]) -> Dict[str, Any]:
    return _json_response(status, {"success": False, "error": message}, methods)


def _parse_body(event: Dict[str, Any]) -> Any:
    body = event.get("body")
    if body is None or body == "":
        return None
    if event.get("isBase64Encoded"):
        body = base64.b64decode(body).decode("utf-8")
    return json.loads(body)


def _boundary(methods: Iterable[str]):
    """Turn any exception escaping a handler into a 500 response."""

    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except Exception:
                logger.exception("Function error in %s", func.__name__)
                return _error(500, "Internal server error", methods)

        return wrapper

    return decorator


@_boundary(("GET", "POST", "OPTIONS"))
def _records_handler(
    kind: str,
    read_error: str,
    write_error: str,
    success_message: Callable[[Dict[str, Any]], str],
    event: Dict[str, Any],
    store: Optional[RecordStore],
) -> Dict[str, Any]:
    methods = ("GET", "POST", "OPTIONS")
    method = (event.get("httpMethod") or "GET").upper()
    if method == "OPTIONS":
        return _json_response(200, None, methods)

    service = RecordService(store if store is not None else get_store())
    if method == "GET":
        try:
            return _json_response(200, {"success": True, "data": service.list(kind)}, methods)
        except PersistenceFailure:
            logger.exception("Error reading %s records", kind)
            return _error(500, read_error, methods)

    if method == "POST":
        try:
            payload = _parse_body(event)
        except (ValueError, UnicodeDecodeError):
            return _error(400, "Invalid JSON", methods)
        try:
            record = service.create(kind, payload)
        except ValidationFailure as e:
            return _error(400, str(e), methods)
        except PersistenceFailure:
            logger.exception("Error saving %s record", kind)
            return _error(500, write_error, methods)
        body = {"success": True, "data": record, "message": success_message(record)}
        return _json_response(201, body, methods)

    return _error(405, "Method not allowed", methods)


def appointments_handler(event: Dict[str, Any], context: Any = None, store: Optional[RecordStore] = None) -> Dict[str, Any]:
    """Handle ``/.netlify/functions/appointments`` (GET, POST)."""
    return _records_handler(
        APPOINTMENT,
        "Failed to read appointments",
        "Failed to create appointment",
        lambda record: f"Appointment booked with {record['doctor']}!",
        event,
        store,
    )


def contacts_handler(event: Dict[str, Any], context: Any = None, store: Optional[RecordStore] = None) -> Dict[str, Any]:
    """Handle ``/.netlify/functions/contacts`` (GET, POST)."""
    return _records_handler(
        CONTACT,
        "Failed to read contacts",
        "Failed to send message",
        lambda record: "Message sent successfully!",
        event,
        store,
    )


@_boundary(("GET", "OPTIONS"))
def admin_stats_handler(event: Dict[str, Any], context: Any = None, store: Optional[RecordStore] = None) -> Dict[str, Any]:
    """Handle ``/.netlify/functions/admin-stats`` (GET only)."""
    methods = ("GET", "OPTIONS")
    method = (event.get("httpMethod") or "GET").upper()
    if method == "OPTIONS":
        return _json_response(200, None, methods)
    if method != "GET":
        return _error(405, "Method not allowed", methods)
    try:
        stats = StatisticsService(store if store is not None else get_store()).overview()
    except PersistenceFailure:
        logger.exception("Error getting stats")
        return _error(500, "Failed to get statistics", methods)
    return _json_response(200, {"success": True, "data": stats}, methods)
