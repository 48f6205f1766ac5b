from datetime import datetime, timedelta, timezone

from petflow.services.appointment_service import STATUS_FLOW
from petflow.services.audit_service import list_actions


def _book(client, maria, thor, **overrides):
    payload = {
        "pet_id": thor["id"],
        "client_id": maria["id"],
        "service": "bath_grooming",
        "scheduled_at": "2026-10-20T14:00:00Z",
        "price": 85.5,
        "groomer": "Ana",
    }
    payload.update(overrides)
    return client.post("/grooming", json=payload)


def test_booking_issues_token_and_updates_last_visit(client, maria_and_thor):
    maria, thor = maria_and_thor

    r = _book(client, maria, thor)
    assert r.status_code == 201
    appointment = r.json()

    assert appointment["status"] == "scheduled"
    assert appointment["completed_at"] is None
    assert len(appointment["check_in_token"]) >= 32
    assert appointment["tracking_url"].endswith(f"/track/{appointment['check_in_token']}")

    assert client.get(f"/clients/{maria['id']}").json()["last_visit"] is not None


def test_tokens_are_unique(client, maria_and_thor):
    maria, thor = maria_and_thor
    tokens = {_book(client, maria, thor).json()["check_in_token"] for _ in range(5)}
    assert len(tokens) == 5


def test_booking_rejects_pet_of_another_client(client, maria_and_thor):
    _, thor = maria_and_thor
    other = client.post("/clients", json={"name": "Pedro"}).json()

    r = _book(client, other, thor)
    assert r.status_code == 400
    assert "does not belong" in r.json()["detail"]


def test_booking_rejects_unknown_service(client, maria_and_thor):
    maria, thor = maria_and_thor
    assert _book(client, maria, thor, service="massage").status_code == 422


def test_advance_walks_the_flow_and_stops_at_completed(client, maria_and_thor):
    maria, thor = maria_and_thor
    appointment = _book(client, maria, thor).json()

    seen = [appointment["status"]]
    for _ in range(5):
        seen.append(client.post(f"/grooming/{appointment['id']}/advance").json()["status"])

    assert seen == STATUS_FLOW

    done = client.get(f"/grooming/{appointment['id']}").json()
    assert done["completed_at"] is not None

    again = client.post(f"/grooming/{appointment['id']}/advance")
    assert again.status_code == 200
    assert again.json()["status"] == "completed"
    assert again.json()["completed_at"] == done["completed_at"]


def test_tracking_lookup_is_public_and_minimal(client, maria_and_thor):
    maria, thor = maria_and_thor
    appointment = _book(client, maria, thor).json()
    client.post(f"/grooming/{appointment['id']}/advance")

    r = client.get(f"/grooming/track/{appointment['check_in_token']}")
    assert r.status_code == 200
    data = r.json()
    assert data["id"] == appointment["id"]
    assert data["status"] == "arrived"
    assert data["pet"]["name"] == "Thor"
    assert data["client"] == {"name": "Maria Silva"}
    assert "check_in_token" not in data
    assert "price" not in data


def test_unknown_token_returns_null(client):
    r = client.get("/grooming/track/not-a-real-token")
    assert r.status_code == 200
    assert r.json() is None


def test_cancel_is_terminal(client, maria_and_thor, db):
    maria, thor = maria_and_thor
    appointment = _book(client, maria, thor).json()
    client.post(f"/grooming/{appointment['id']}/advance")

    r = client.post(f"/grooming/{appointment['id']}/cancel")
    assert r.status_code == 200
    assert r.json()["status"] == "cancelled"

    assert client.post(f"/grooming/{appointment['id']}/cancel").status_code == 409
    assert client.post(f"/grooming/{appointment['id']}/advance").json()["status"] == "cancelled"

    actions = [a.action for a in list_actions(db, "Appointment", appointment["id"])]
    assert "CANCEL_APPOINTMENT" in actions


def test_force_set_status_is_audited(client, maria_and_thor, db):
    maria, thor = maria_and_thor
    appointment = _book(client, maria, thor).json()

    r = client.put(f"/grooming/{appointment['id']}/status", json={"status": "completed"})
    assert r.status_code == 200
    assert r.json()["completed_at"] is not None

    r = client.put(f"/grooming/{appointment['id']}/status", json={"status": "ready"})
    assert r.json()["status"] == "ready"
    assert r.json()["completed_at"] is None

    entries = list_actions(db, "Appointment", appointment["id"])
    forced = [e.details for e in entries if e.action == "FORCE_SET_STATUS"]
    assert forced == ["scheduled -> completed", "completed -> ready"]


def test_force_set_status_rejects_unknown_status(client, maria_and_thor):
    maria, thor = maria_and_thor
    appointment = _book(client, maria, thor).json()

    r = client.put(f"/grooming/{appointment['id']}/status", json={"status": "lost"})
    assert r.status_code == 422


def test_update_routes_status_through_forced_path(client, maria_and_thor, db):
    maria, thor = maria_and_thor
    appointment = _book(client, maria, thor).json()

    r = client.patch(
        f"/grooming/{appointment['id']}",
        json={"groomer": "Bruno", "status": "grooming"},
    )
    assert r.status_code == 200
    assert r.json()["groomer"] == "Bruno"
    assert r.json()["status"] == "grooming"

    actions = [a.action for a in list_actions(db, "Appointment", appointment["id"])]
    assert "FORCE_SET_STATUS" in actions


def test_list_in_range_is_inclusive_and_ordered(client, maria_and_thor):
    maria, thor = maria_and_thor
    late = _book(client, maria, thor, scheduled_at="2026-10-21T09:00:00Z").json()
    early = _book(client, maria, thor, scheduled_at="2026-10-20T09:00:00Z").json()
    _book(client, maria, thor, scheduled_at="2026-11-05T09:00:00Z")

    r = client.get(
        "/grooming",
        params={"from": "2026-10-20T09:00:00Z", "to": "2026-10-21T09:00:00Z"},
    )
    assert r.status_code == 200
    assert [a["id"] for a in r.json()] == [early["id"], late["id"]]


def test_list_rejects_inverted_range(client):
    r = client.get(
        "/grooming",
        params={"from": "2026-10-21T00:00:00Z", "to": "2026-10-20T00:00:00Z"},
    )
    assert r.status_code == 400


def test_client_history(client, maria_and_thor):
    maria, thor = maria_and_thor
    first = _book(client, maria, thor, scheduled_at="2026-09-01T10:00:00Z").json()
    second = _book(client, maria, thor, scheduled_at="2026-10-01T10:00:00Z").json()

    history = client.get(f"/clients/{maria['id']}/appointments").json()
    assert [a["id"] for a in history] == [second["id"], first["id"]]


def test_delete_is_blocked_by_ledger_entries(client, maria_and_thor, db):
    maria, thor = maria_and_thor
    paid = _book(client, maria, thor).json()
    unpaid = _book(client, maria, thor).json()

    client.post(
        "/dashboard/transactions",
        json={
            "type": "income",
            "category": "Grooming",
            "amount": 85.5,
            "date": "2026-10-20T15:00:00Z",
            "appointment_id": paid["id"],
        },
    )

    assert client.delete(f"/grooming/{paid['id']}").status_code == 400

    assert client.delete(f"/grooming/{unpaid['id']}").status_code == 200
    assert client.get(f"/grooming/{unpaid['id']}").status_code == 404
    actions = [a.action for a in list_actions(db, "Appointment", unpaid["id"])]
    assert "DELETE_APPOINTMENT" in actions


def test_maria_and_thor_full_visit(client, maria_and_thor):
    maria, thor = maria_and_thor
    now = datetime.now(timezone.utc).replace(microsecond=0)
    day_start = now.replace(hour=0, minute=0, second=0)
    day_end = day_start + timedelta(days=1, seconds=-1)
    before = client.get("/dashboard/metrics").json()

    appointment = _book(client, maria, thor, scheduled_at=now.isoformat()).json()
    assert appointment["service"] == "bath_grooming"

    last_visit = client.get(f"/clients/{maria['id']}").json()["last_visit"]
    assert last_visit.startswith(now.date().isoformat())

    after = client.get("/dashboard/metrics").json()
    assert after["month_appointments"] == before["month_appointments"] + 1

    today = client.get(
        "/grooming",
        params={"from": day_start.isoformat(), "to": day_end.isoformat()},
    ).json()
    assert appointment["id"] in [a["id"] for a in today]

    token = appointment["check_in_token"]

    for expected in ["arrived", "bathing", "grooming", "ready"]:
        client.post(f"/grooming/{appointment['id']}/advance")
        assert client.get(f"/grooming/track/{token}").json()["status"] == expected

    client.post(f"/grooming/{appointment['id']}/advance")
    tracked = client.get(f"/grooming/track/{token}").json()
    assert tracked["status"] == "completed"
    assert tracked["completed_at"] is not None

    inactive = client.get("/clients/inactive", params={"days": 30}).json()
    assert maria["id"] not in [c["id"] for c in inactive]


def test_update_rejects_null_for_required_fields(client, maria_and_thor):
    maria, thor = maria_and_thor
    appointment = _book(client, maria, thor).json()

    r = client.patch(f"/grooming/{appointment['id']}", json={"scheduled_at": None})
    assert r.status_code == 422

    r = client.patch(f"/grooming/{appointment['id']}", json={"notes": None})
    assert r.status_code == 200
    assert r.json()["scheduled_at"] == appointment["scheduled_at"]
