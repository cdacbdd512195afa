import threading
from datetime import datetime, timezone

import pytest

from clinic_api.app.core.errors import PersistenceFailure, ValidationFailure
from clinic_api.app.core.store import APPOINTMENTS, CONTACTS, JsonFileStore
from clinic_api.app.services.record_service import RecordService, format_timestamp
from clinic_api.app.services.validation import APPOINTMENT, CONTACT


def test_create_appointment_normalises_fields(memory_store, appointment_payload, step_clock):
    service = RecordService(memory_store, clock=step_clock)

    record = service.create_appointment(appointment_payload)

    assert record == {
        "id": 1735722000000,
        "timestamp": "2025-01-01T09:00:00.000Z",
        "name": "Jane Doe",
        "email": "jane@example.com",
        "phone": "123-4567",
        "doctor": "Dr. X",
        "date": "2025-01-01",
        "time": "10:00",
        "status": "pending",
    }
    assert memory_store.read(APPOINTMENTS) == [record]


def test_create_contact_sets_unread_and_drops_extra_fields(memory_store, contact_payload):
    service = RecordService(memory_store)

    record = service.create_contact({**contact_payload, "status": "read", "admin": True})

    assert record["status"] == "unread"
    assert "admin" not in record
    assert list(record) == ["id", "timestamp", "name", "email", "message", "status"]


def test_ids_increase_even_within_one_millisecond(memory_store, contact_payload):
    frozen = datetime(2025, 1, 1, tzinfo=timezone.utc)
    service = RecordService(memory_store, clock=lambda: frozen)

    ids = [service.create(CONTACT, contact_payload)["id"] for _ in range(3)]

    assert ids == [1735689600000, 1735689600001, 1735689600002]


def test_ids_never_decrease_when_clock_steps_back(memory_store, contact_payload):
    memory_store.write(CONTACTS, [{"id": 9999999999999}])
    service = RecordService(memory_store)

    record = service.create_contact(contact_payload)

    assert record["id"] == 10000000000000


def test_invalid_payload_is_not_stored(memory_store):
    service = RecordService(memory_store)

    with pytest.raises(ValidationFailure, match="email is required"):
        service.create(CONTACT, {"name": "Jo", "message": "Hi"})
    assert memory_store.read(CONTACTS) == []


def test_write_failure_raises_persistence_failure(failing_store, contact_payload):
    with pytest.raises(PersistenceFailure):
        RecordService(failing_store).create_contact(contact_payload)


def test_corrupt_store_is_not_overwritten_by_create(file_store, contact_payload):
    file_store.read(CONTACTS)
    file_store.path_for(CONTACTS).write_text("[{broken", encoding="utf-8")
    service = RecordService(file_store)

    with pytest.raises(PersistenceFailure):
        service.create_contact(contact_payload)
    assert file_store.path_for(CONTACTS).read_text(encoding="utf-8") == "[{broken"


def test_list_treats_corrupt_store_as_empty(file_store):
    file_store.read(APPOINTMENTS)
    file_store.path_for(APPOINTMENTS).write_text("oops", encoding="utf-8")

    assert RecordService(file_store).list(APPOINTMENT) == []


def test_list_is_idempotent(file_store, contact_payload):
    service = RecordService(file_store)
    service.create_contact(contact_payload)

    assert service.list(CONTACT) == service.list(CONTACT)


def test_concurrent_creates_are_all_kept(tmp_path, contact_payload):
    store = JsonFileStore(tmp_path)
    service = RecordService(store)
    barrier = threading.Barrier(8)
    errors = []

    def submit(i):
        barrier.wait()
        try:
            service.create_contact({**contact_payload, "message": f"message {i}"})
        except Exception as exc:  # pragma: no cover - surfaced by the assertion below
            errors.append(exc)

    threads = [threading.Thread(target=submit, args=(i,)) for i in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    records = store.read(CONTACTS)
    assert errors == []
    assert sorted(r["message"] for r in records) == sorted(f"message {i}" for i in range(8))
    ids = [r["id"] for r in records]
    assert len(set(ids)) == 8
    assert ids == sorted(ids)


def test_clear_all_empties_both_stores(memory_store, appointment_payload, contact_payload):
    service = RecordService(memory_store)
    service.create_appointment(appointment_payload)
    service.create_contact(contact_payload)

    service.clear_all()

    assert service.list(APPOINTMENT) == []
    assert service.list(CONTACT) == []


def test_clear_all_reports_write_failure(failing_store):
    with pytest.raises(PersistenceFailure):
        RecordService(failing_store).clear_all()


def test_format_timestamp_uses_milliseconds_and_z():
    moment = datetime(2025, 3, 4, 5, 6, 7, 891234, tzinfo=timezone.utc)

    assert format_timestamp(moment) == "2025-03-04T05:06:07.891Z"


def test_padded_email_is_rejected(memory_store):
    service = RecordService(memory_store)

    with pytest.raises(ValidationFailure, match="Invalid email format"):
        service.create_contact({"name": "Jo", "email": " jo@x.co ", "message": "hi"})
    assert memory_store.read(CONTACTS) == []


def test_list_treats_undecodable_store_as_empty(file_store):
    file_store.read(CONTACTS)
    file_store.path_for(CONTACTS).write_bytes(b'[{"name": "\xff\xfe"}]')

    assert RecordService(file_store).list(CONTACT) == []
