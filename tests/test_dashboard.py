from datetime import datetime, timezone

from petflow.models.transaction import Transaction
from petflow.services.analytics_service import (
    dashboard_metrics,
    growth_percent,
    month_bounds,
    monthly_revenue_series,
)

NOW = datetime(2026, 3, 15, 12, 0, 0)


def _tx(db, tx_type, amount, when):
    db.add(Transaction(type=tx_type, amount=amount, date=when, category="Test"))
    db.commit()


def test_month_bounds_are_half_open_across_years():
    assert month_bounds(datetime(2026, 1, 15), -1) == (datetime(2025, 12, 1), datetime(2026, 1, 1))
    assert month_bounds(datetime(2026, 12, 31, 23, 59)) == (datetime(2026, 12, 1), datetime(2027, 1, 1))


def test_growth_is_none_without_previous_income():
    assert growth_percent(150.0, 0) is None
    assert growth_percent(150.0, 100.0) == 50.0
    assert growth_percent(50.0, 200.0) == -75.0


def test_metrics_without_last_month_income(db):
    _tx(db, "income", 250.0, datetime(2026, 3, 2, 10))

    metrics = dashboard_metrics(db, now=NOW)
    assert metrics["month_income"] == 250.0
    assert metrics["last_month_income"] == 0.0
    assert metrics["income_growth_percent"] is None


def test_metrics_compare_calendar_months(db):
    _tx(db, "income", 100.0, datetime(2026, 2, 28, 23, 59, 59))
    _tx(db, "income", 150.0, datetime(2026, 3, 1, 0, 0, 0))
    _tx(db, "expense", 40.0, datetime(2026, 3, 5))
    # Start of next month falls outside the current one.
    _tx(db, "income", 999.0, datetime(2026, 4, 1))

    metrics = dashboard_metrics(db, now=NOW)
    assert metrics["month_income"] == 150.0
    assert metrics["last_month_income"] == 100.0
    assert metrics["income_growth_percent"] == 50.0


def test_revenue_series_is_oldest_first(db):
    _tx(db, "income", 80.0, datetime(2025, 10, 10))
    _tx(db, "expense", 30.0, datetime(2026, 3, 10))

    series = monthly_revenue_series(db, now=NOW)
    assert [(p["year"], p["month"]) for p in series] == [
        (2025, 10), (2025, 11), (2025, 12), (2026, 1), (2026, 2), (2026, 3),
    ]
    assert series[0]["income"] == 80.0
    assert series[0]["label"] == "Oct/25"
    assert series[-1]["expense"] == 30.0


def test_metrics_endpoint_counts_this_months_appointments(client, maria_and_thor):
    maria, thor = maria_and_thor
    before = client.get("/dashboard/metrics").json()

    client.post(
        "/grooming",
        json={
            "pet_id": thor["id"],
            "client_id": maria["id"],
            "service": "bath",
            "scheduled_at": datetime.now(timezone.utc).isoformat(),
        },
    )

    after = client.get("/dashboard/metrics").json()
    assert after["month_appointments"] == before["month_appointments"] + 1
    assert after["active_clients"] == 1
    assert len(after["monthly_revenue"]) == 6


def test_metrics_endpoint_counts_low_stock(client):
    client.post("/products", json={"name": "Shampoo", "sku": "SHAMP", "stock": 2, "min_stock": 5})
    client.post("/products", json={"name": "Brush", "sku": "BRUSH", "stock": 20, "min_stock": 5})

    metrics = client.get("/dashboard/metrics").json()
    assert metrics["low_stock_count"] == 1
    assert metrics["active_products"] == 2


def test_transactions_are_validated_and_listed(client):
    assert client.post(
        "/dashboard/transactions",
        json={"type": "income", "amount": 0, "date": "2026-03-01T10:00:00Z"},
    ).status_code == 422

    assert client.post(
        "/dashboard/transactions",
        json={"type": "income", "amount": 10, "date": "2026-03-01T10:00:00Z", "client_id": 77},
    ).status_code == 400

    client.post(
        "/dashboard/transactions",
        json={"type": "expense", "amount": 12.3456, "date": "2026-03-01T10:00:00Z"},
    )
    client.post(
        "/dashboard/transactions",
        json={"type": "income", "amount": 50, "date": "2026-03-02T10:00:00Z"},
    )

    rows = client.get("/dashboard/transactions").json()
    assert [r["type"] for r in rows] == ["income", "expense"]
    assert rows[1]["amount"] == 12.35

    ranged = client.get(
        "/dashboard/transactions",
        params={"from": "2026-03-02T00:00:00Z"},
    ).json()
    assert len(ranged) == 1
