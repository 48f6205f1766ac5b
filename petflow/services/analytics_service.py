from datetime import datetime

from sqlalchemy import func
from sqlalchemy.orm import Session

from petflow.db.guards import read_or_default
from petflow.db.types import utcnow
from petflow.models.appointment import GroomingAppointment
from petflow.models.client import Client
from petflow.models.product import Product
from petflow.models.transaction import Transaction

REVENUE_SERIES_MONTHS = 6


def _shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def month_bounds(now: datetime, offset: int = 0) -> tuple[datetime, datetime]:
    """Half-open [start, end) bounds of the calendar month ``offset`` months from ``now``."""
    year, month = _shift_month(now.year, now.month, offset)
    next_year, next_month = _shift_month(year, month, 1)
    return datetime(year, month, 1), datetime(next_year, next_month, 1)


def growth_percent(current: float, previous: float) -> float | None:
    # No prior income means there is nothing to compare against.
    if not previous:
        return None
    return round(((current - previous) / previous) * 100, 1)


def _sum_transactions(db: Session, tx_type: str, start: datetime, end: datetime) -> float:
    total = (
        db.query(func.coalesce(func.sum(Transaction.amount), 0))
        .filter(
            Transaction.type == tx_type,
            Transaction.date >= start,
            Transaction.date < end,
        )
        .scalar()
    )
    return round(float(total or 0), 2)


def _count(query) -> int:
    return int(query.scalar() or 0)


# =====================================================
# MONTHLY REVENUE SERIES (oldest month first)
# =====================================================

def monthly_revenue_series(db: Session, now: datetime | None = None, months: int = REVENUE_SERIES_MONTHS):
    now = now or utcnow()
    series = []

    for offset in range(-(months - 1), 1):
        start, end = month_bounds(now, offset)
        series.append({
            "label": start.strftime("%b/%y"),
            "year": start.year,
            "month": start.month,
            "income": _sum_transactions(db, "income", start, end),
            "expense": _sum_transactions(db, "expense", start, end),
        })

    return series


# =====================================================
# DASHBOARD SNAPSHOT
# =====================================================

def empty_metrics() -> dict:
    return {
        "month_income": 0.0,
        "last_month_income": 0.0,
        "income_growth_percent": None,
        "active_clients": 0,
        "active_products": 0,
        "month_appointments": 0,
        "low_stock_count": 0,
        "monthly_revenue": [],
    }


@read_or_default(empty_metrics)
def dashboard_metrics(db: Session, now: datetime | None = None) -> dict:
    """Recomputed on every call from the server clock."""
    now = now or utcnow()
    month_start, month_end = month_bounds(now)
    last_start, last_end = month_bounds(now, -1)

    month_income = _sum_transactions(db, "income", month_start, month_end)
    last_month_income = _sum_transactions(db, "income", last_start, last_end)

    active_clients = _count(
        db.query(func.count(Client.id)).filter(Client.active == True)
    )
    active_products = _count(
        db.query(func.count(Product.id)).filter(Product.active == True)
    )
    month_appointments = _count(
        db.query(func.count(GroomingAppointment.id)).filter(
            GroomingAppointment.scheduled_at >= month_start,
            GroomingAppointment.scheduled_at < month_end,
        )
    )
    low_stock_count = _count(
        db.query(func.count(Product.id)).filter(Product.stock <= Product.min_stock)
    )

    return {
        "month_income": month_income,
        "last_month_income": last_month_income,
        "income_growth_percent": growth_percent(month_income, last_month_income),
        "active_clients": active_clients,
        "active_products": active_products,
        "month_appointments": month_appointments,
        "low_stock_count": low_stock_count,
        "monthly_revenue": monthly_revenue_series(db, now),
    }
