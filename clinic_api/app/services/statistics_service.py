"""
Service layer for the admin statistics panel.

Aggregates both stores into the counts and "recent" lists shown on the
admin panel.  All reads are read‑only; the stores are never written.
Recent items are the newest records by ``timestamp`` (ties broken by
the larger ``id``), regardless of their position in the file.  Records
whose timestamp cannot be parsed sort after all others.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

from clinic_api.app.core.store import APPOINTMENTS, CONTACTS, RecordStore
from clinic_api.app.schemas.appointment import APPOINTMENT_PENDING
from clinic_api.app.schemas.contact import CONTACT_UNREAD
from clinic_api.app.schemas.stats import StatsRead
from clinic_api.app.services.record_service import (
    Clock,
    format_timestamp,
    read_lenient,
    utc_now,
)

logger = logging.getLogger(__name__)

RECENT_LIMIT = 5

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse an ISO‑8601 timestamp; a trailing ``Z`` means UTC."""
    if not isinstance(value, str) or not value:
        return None
    text = value[:-1] + "+00:00" if value.endswith("Z") else value
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _recency_key(record: Dict[str, Any]) -> Tuple[int, datetime, int]:
    parsed = parse_timestamp(record.get("timestamp"))
    record_id = record.get("id")
    if not isinstance(record_id, int) or isinstance(record_id, bool):
        record_id = 0
    return (1 if parsed is not None else 0, parsed or _EPOCH, record_id)


def most_recent(records: List[Dict[str, Any]], limit: int = RECENT_LIMIT) -> List[Dict[str, Any]]:
    """Return up to ``limit`` records, newest first."""
    candidates = [r for r in records if isinstance(r, dict)]
    return sorted(candidates, key=_recency_key, reverse=True)[:limit]


def count_status(records: List[Dict[str, Any]], status: str) -> int:
    return sum(1 for r in records if isinstance(r, dict) and r.get("status") == status)


class StatisticsService:
    """Compute admin statistics over the appointment and contact stores."""

    def __init__(self, store: RecordStore, clock: Optional[Clock] = None) -> None:
        self.store = store
        self._clock = clock or utc_now

    def overview(self) -> Dict[str, Any]:
        """Return totals, status counts and the five newest records of each kind.

        Raises ``PersistenceFailure`` if a store cannot be read at all;
        a corrupt store counts as empty.
        """
        appointments = read_lenient(self.store, APPOINTMENTS)
        contacts = read_lenient(self.store, CONTACTS)
        stats = StatsRead(
            appointmentTotal=len(appointments),
            contactTotal=len(contacts),
            pendingAppointments=count_status(appointments, APPOINTMENT_PENDING),
            unreadContacts=count_status(contacts, CONTACT_UNREAD),
            recentAppointments=most_recent(appointments),
            recentContacts=most_recent(contacts),
            lastUpdated=format_timestamp(self._clock()),
        )
        logger.debug(
            "Stats computed: %d appointments, %d contacts",
            stats.appointmentTotal,
            stats.contactTotal,
        )
        return stats.model_dump()
