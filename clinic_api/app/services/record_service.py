"""
Service layer for appointment and contact submissions.

``RecordService`` validates a submission, turns it into a persisted
record and appends it to the matching store.  Each create is a full
read‑modify‑write of the store file performed while holding the store
lock, so two creates in the same process can no longer overwrite each
other.  Rewriting the whole file costs O(n) per insert; that is fine
for the volumes a clinic front desk produces.

Record ids are the creation time in milliseconds.  When two records
are created within the same millisecond (or the clock steps back) the
new id is bumped to one past the largest id in the store, which keeps
ids unique and increasing in append order.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

from clinic_api.app.core.errors import (
    PersistenceFailure,
    StoreCorruptError,
    StoreError,
)
from clinic_api.app.core.store import APPOINTMENTS, CONTACTS, RecordStore
from clinic_api.app.schemas.appointment import Appointment, AppointmentCreate
from clinic_api.app.schemas.contact import Contact, ContactCreate
from clinic_api.app.services.validation import (
    APPOINTMENT,
    CONTACT,
    REQUIRED_FIELDS,
    validate,
)

logger = logging.getLogger(__name__)

STORE_NAMES: Dict[str, str] = {
    APPOINTMENT: APPOINTMENTS,
    CONTACT: CONTACTS,
}

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(moment: datetime) -> str:
    """Render ``moment`` as ``YYYY-MM-DDTHH:MM:SS.mmmZ`` in UTC."""
    moment = moment.astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


def to_millis(moment: datetime) -> int:
    return int(moment.timestamp() * 1000)


def _normalise(kind: str, payload: Dict[str, Any]) -> Dict[str, str]:
    fields = {name: payload[name].strip() for name in REQUIRED_FIELDS[kind]}
    fields["email"] = fields["email"].lower()
    return fields


def _max_id(records: List[Dict[str, Any]]) -> Optional[int]:
    ids = [r.get("id") for r in records if isinstance(r, dict)]
    ids = [i for i in ids if isinstance(i, int) and not isinstance(i, bool)]
    return max(ids) if ids else None


class RecordService:
    """Create, list and clear submissions held in a ``RecordStore``."""

    def __init__(self, store: RecordStore, clock: Optional[Clock] = None) -> None:
        self.store = store
        self._clock = clock or utc_now

    def _next_id(self, records: List[Dict[str, Any]], moment: datetime) -> int:
        candidate = to_millis(moment)
        current_max = _max_id(records)
        if current_max is not None and candidate <= current_max:
            return current_max + 1
        return candidate

    def _build_record(self, kind: str, payload: Dict[str, Any], records: List[Dict[str, Any]]) -> Dict[str, Any]:
        moment = self._clock()
        meta = {"id": self._next_id(records, moment), "timestamp": format_timestamp(moment)}
        fields = _normalise(kind, payload)
        if kind == APPOINTMENT:
            data = AppointmentCreate(**fields)
            return Appointment(**meta, **data.model_dump()).model_dump()
        data = ContactCreate(**fields)
        return Contact(**meta, **data.model_dump()).model_dump()

    def create(self, kind: str, payload: Any) -> Dict[str, Any]:
        """Validate ``payload`` and append a new record of ``kind``.

        Raises ``ValidationFailure`` for invalid input and
        ``PersistenceFailure`` when the store cannot be read or written.
        A store that cannot be parsed is reported as a failure rather
        than overwritten.
        """
        validate(kind, payload)
        name = STORE_NAMES[kind]
        with self.store.lock(name):
            try:
                records = self.store.read(name)
            except StoreError as exc:
                logger.error("Cannot read store %s before create: %s", name, exc)
                raise PersistenceFailure(f"Failed to read {name}") from exc
            record = self._build_record(kind, payload, records)
            records.append(record)
            try:
                self.store.write(name, records)
            except StoreError as exc:
                logger.error("Cannot write store %s: %s", name, exc)
                raise PersistenceFailure(f"Failed to write {name}") from exc
        logger.info("Created %s %s", kind, record["id"])
        return record

    def create_appointment(self, payload: Any) -> Dict[str, Any]:
        return self.create(APPOINTMENT, payload)

    def create_contact(self, payload: Any) -> Dict[str, Any]:
        return self.create(CONTACT, payload)

    def list(self, kind: str) -> List[Dict[str, Any]]:
        """Return all records of ``kind`` in the order they were created.

        A store holding malformed JSON is logged and treated as empty;
        any other read error raises ``PersistenceFailure``.
        """
        return read_lenient(self.store, STORE_NAMES[kind])

    def clear_all(self) -> None:
        """Empty both stores."""
        with self.store.lock(APPOINTMENTS), self.store.lock(CONTACTS):
            for name in (APPOINTMENTS, CONTACTS):
                try:
                    self.store.write(name, [])
                except StoreError as exc:
                    logger.error("Cannot clear store %s: %s", name, exc)
                    raise PersistenceFailure(f"Failed to clear {name}") from exc
        logger.info("Cleared all stores")


def read_lenient(store: RecordStore, name: str) -> List[Dict[str, Any]]:
    try:
        return store.read(name)
    except StoreCorruptError as exc:
        logger.warning("Store %s is corrupt, treating as empty: %s", name, exc)
        return []
    except StoreError as exc:
        logger.error("Cannot read store %s: %s", name, exc)
        raise PersistenceFailure(f"Failed to read {name}") from exc
