import json
import threading

from fastapi.testclient import TestClient

from clinic_api.app.core.store import MemoryStore
from clinic_api.app.main import create_app


def test_create_contact_scenario(client):
    response = client.post("/api/contacts", json={"name": "Jo", "email": "jo@x.co", "message": "Hello there"})

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["message"] == "Message sent successfully!"
    assert body["data"]["status"] == "unread"
    assert isinstance(body["data"]["id"], int) and body["data"]["id"] > 0
    assert body["data"]["email"] == "jo@x.co"


def test_create_appointment_with_blank_name_is_rejected(client):
    payload = {
        "name": "",
        "email": "a@b.com",
        "phone": "123-4567",
        "doctor": "Dr. X",
        "date": "2025-01-01",
        "time": "10:00",
    }

    response = client.post("/api/appointments", json=payload)

    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "name is required"}


def test_invalid_email_rejected(client):
    response = client.post("/api/contacts", json={"name": "Jo", "email": "jo-at-x", "message": "Hi"})

    assert response.status_code == 400
    assert response.json()["error"] == "Invalid email format"


def test_create_and_list_appointments(client, appointment_payload, file_store):
    created = client.post("/api/appointments", json=appointment_payload)

    assert created.status_code == 201
    assert created.json()["message"] == "Appointment booked with Dr. X!"
    listed = client.get("/api/appointments")
    assert listed.status_code == 200
    assert listed.json() == {"success": True, "data": [created.json()["data"]]}
    on_disk = json.loads(file_store.path_for("appointments").read_text(encoding="utf-8"))
    assert on_disk == [created.json()["data"]]


def test_repeated_gets_are_identical(client, contact_payload):
    client.post("/api/contacts", json=contact_payload)

    assert client.get("/api/contacts").json() == client.get("/api/contacts").json()


def test_first_run_lists_are_empty(client):
    assert client.get("/api/appointments").json() == {"success": True, "data": []}
    assert client.get("/api/contacts").json() == {"success": True, "data": []}


def test_clear_then_lists_are_empty(client, appointment_payload, contact_payload):
    client.post("/api/appointments", json=appointment_payload)
    client.post("/api/contacts", json=contact_payload)

    response = client.delete("/api/admin/clear")

    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "All data cleared"}
    assert client.get("/api/appointments").json()["data"] == []
    assert client.get("/api/contacts").json()["data"] == []


def test_stats(client, appointment_payload, contact_payload):
    for doctor in ("Dr. A", "Dr. B"):
        client.post("/api/appointments", json={**appointment_payload, "doctor": doctor})
    client.post("/api/contacts", json=contact_payload)

    response = client.get("/api/admin/stats")

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["appointmentTotal"] == 2
    assert data["contactTotal"] == 1
    assert data["pendingAppointments"] == 2
    assert data["unreadContacts"] == 1
    assert [a["doctor"] for a in data["recentAppointments"]] == ["Dr. B", "Dr. A"]
    assert data["lastUpdated"].endswith("Z")


def test_malformed_json_body(client):
    response = client.post(
        "/api/contacts",
        content="{not json",
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert response.json()["success"] is False


def test_array_body_rejected(client):
    response = client.post("/api/contacts", json=["Jo"])

    assert response.status_code == 400
    assert response.json()["error"] == "Request body must be a JSON object"


def test_write_failure_returns_generic_500(failing_store, contact_payload):
    client = TestClient(create_app(store=failing_store))

    response = client.post("/api/contacts", json=contact_payload)

    assert response.status_code == 500
    assert response.json() == {"success": False, "error": "Failed to send message"}


def test_unsupported_method_and_unknown_route(client):
    response = client.put("/api/appointments", json={})
    assert response.status_code == 405
    assert response.json() == {"success": False, "error": "Method not allowed"}

    response = client.get("/api/nothing-here")
    assert response.status_code == 404
    assert response.json() == {"success": False, "error": "Not found"}


def test_preflight_and_cors_headers(client):
    preflight = client.options("/api/appointments")
    assert preflight.status_code == 200
    assert preflight.content == b""
    assert preflight.headers["access-control-allow-origin"] == "*"

    response = client.get("/api/contacts")
    assert response.headers["access-control-allow-origin"] == "*"
    assert response.headers["content-type"].startswith("application/json")


def test_health(client):
    response = client.get("/api/health")

    assert response.status_code == 200
    assert response.json()["data"]["status"] == "ok"


def test_empty_body_names_first_missing_field(client):
    response = client.post("/api/contacts")

    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "name is required"}


def test_undecodable_store_lists_as_empty(client, file_store):
    file_store.read("contacts")
    file_store.path_for("contacts").write_bytes(b'[{"name": "\xff\xfe"}]')

    response = client.get("/api/contacts")

    assert response.status_code == 200
    assert response.json() == {"success": True, "data": []}


class ExplodingStore(MemoryStore):
    def read(self, name):
        raise RuntimeError("unexpected")


def test_unexpected_error_keeps_cors_headers():
    client = TestClient(create_app(store=ExplodingStore()), raise_server_exceptions=False)

    response = client.get("/api/contacts")

    assert response.status_code == 500
    assert response.json() == {"success": False, "error": "Internal server error"}
    assert response.headers["access-control-allow-origin"] == "*"


def test_concurrent_posts_are_all_kept(file_store, contact_payload):
    app = create_app(store=file_store)
    barrier = threading.Barrier(2)
    statuses = []

    def submit(i):
        with TestClient(app) as local_client:
            barrier.wait()
            response = local_client.post("/api/contacts", json={**contact_payload, "message": f"message {i}"})
            statuses.append(response.status_code)

    threads = [threading.Thread(target=submit, args=(i,)) for i in range(2)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert statuses == [201, 201]
    data = TestClient(app).get("/api/contacts").json()["data"]
    assert sorted(c["message"] for c in data) == ["message 0", "message 1"]
    assert len({c["id"] for c in data}) == 2
