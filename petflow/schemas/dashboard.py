from typing import List, Optional

from pydantic import BaseModel


class MonthlyRevenuePoint(BaseModel):
    label: str
    year: int
    month: int
    income: float
    expense: float


class DashboardMetrics(BaseModel):
    month_income: float
    last_month_income: float
    # None when there is no income last month to compare against.
    income_growth_percent: Optional[float] = None
    active_clients: int
    active_products: int
    month_appointments: int
    low_stock_count: int
    monthly_revenue: List[MonthlyRevenuePoint]
