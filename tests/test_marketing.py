from datetime import timedelta

import pytest

from petflow.core.exceptions import ValidationError
from petflow.db.types import utcnow
from petflow.models.client import Client
from petflow.services.client_service import inactive_clients
from petflow.services.link_service import whatsapp_url


def _client(db, name, phone=None, last_visit=None):
    row = Client(name=name, phone=phone, last_visit=last_visit)
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


def test_inactive_selection(db):
    now = utcnow()
    never = _client(db, "Never Came")
    recent = _client(db, "Recent", last_visit=now - timedelta(days=5))
    old = _client(db, "Old", last_visit=now - timedelta(days=40))

    ids = [c.id for c in inactive_clients(db, 30, now=now)]
    assert never.id in ids
    assert old.id in ids
    assert recent.id not in ids


def test_inactive_days_must_not_be_negative(db):
    with pytest.raises(ValidationError):
        inactive_clients(db, -1)


def test_inactive_endpoint_reports_days_and_link(client, db):
    now = utcnow()
    _client(db, "Never Came", phone="11 90000-0001")
    _client(db, "Recent", last_visit=now - timedelta(days=5))
    _client(db, "Old", phone="5511900000002", last_visit=now - timedelta(days=40))

    rows = client.get("/clients/inactive", params={"days": 30}).json()
    by_name = {r["name"]: r for r in rows}

    assert set(by_name) == {"Never Came", "Old"}
    assert by_name["Never Came"]["days_inactive"] is None
    assert by_name["Never Came"]["whatsapp_url"] == "https://wa.me/5511900000001"
    assert by_name["Old"]["days_inactive"] == 40
    assert by_name["Old"]["whatsapp_url"] == "https://wa.me/5511900000002"

    assert client.get("/marketing/inactive-clients", params={"days": 30}).json() == rows


def test_inactive_endpoint_paginates(client, db):
    for index in range(5):
        _client(db, f"Client {index}")

    page = client.get("/clients/inactive", params={"days": 30, "limit": 2, "offset": 2}).json()
    assert [r["name"] for r in page] == ["Client 2", "Client 3"]

    assert client.get("/clients/inactive", params={"days": -1}).status_code == 422


def test_booking_removes_client_from_inactive(client, maria_and_thor):
    maria, thor = maria_and_thor
    assert maria["id"] in [c["id"] for c in client.get("/clients/inactive").json()]

    client.post(
        "/grooming",
        json={
            "pet_id": thor["id"],
            "client_id": maria["id"],
            "service": "bath",
            "scheduled_at": "2026-12-01T10:00:00Z",
        },
    )

    assert maria["id"] not in [c["id"] for c in client.get("/clients/inactive").json()]


def test_whatsapp_url():
    assert whatsapp_url("(11) 98765-4321") == "https://wa.me/5511987654321"
    assert whatsapp_url("55 11 98765-4321", "Hi Maria!") == "https://wa.me/5511987654321?text=Hi%20Maria%21"
    assert whatsapp_url("") is None
    assert whatsapp_url(None) is None


def test_campaign_lifecycle_and_targets(client, db):
    _client(db, "Maria", phone="11 98765-4321")

    r = client.post(
        "/marketing/campaigns",
        json={
            "name": "Come back",
            "message": "Hi {name}! {discount}% off your next bath.",
            "discount_percent": 15,
            "target_days_inactive": 30,
        },
    )
    assert r.status_code == 201
    campaign = r.json()
    assert campaign["status"] == "draft"
    assert campaign["sent_count"] == 0

    targets = client.get(f"/marketing/campaigns/{campaign['id']}/targets").json()
    assert len(targets) == 1
    assert targets[0]["message"] == "Hi Maria! 15% off your next bath."
    assert targets[0]["whatsapp_url"].startswith("https://wa.me/5511987654321?text=Hi%20Maria")

    r = client.patch(f"/marketing/campaigns/{campaign['id']}", json={"status": "active"})
    assert r.json()["status"] == "active"

    assert [c["id"] for c in client.get("/marketing/campaigns").json()] == [campaign["id"]]

    assert client.delete(f"/marketing/campaigns/{campaign['id']}").status_code == 200
    assert client.get(f"/marketing/campaigns/{campaign['id']}/targets").status_code == 404


def test_campaign_discount_is_bounded(client):
    r = client.post(
        "/marketing/campaigns",
        json={"name": "Too good", "message": "Free!", "discount_percent": 150},
    )
    assert r.status_code == 422


def test_generate_message_falls_back_without_backend(client):
    r = client.post(
        "/marketing/generate-message",
        json={"pet_name": "Thor", "discount_percent": 10, "days_inactive": 45},
    )
    assert r.status_code == 200
    data = r.json()
    assert data["ai_generated"] is False
    assert "Thor" in data["message"]
    assert "10%" in data["message"]
    assert "45 days" in data["message"]
