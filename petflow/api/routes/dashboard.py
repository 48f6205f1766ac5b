from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from petflow.core.dependencies import get_current_user, get_db
from petflow.schemas.dashboard import DashboardMetrics
from petflow.schemas.transaction import TransactionCreate, TransactionResponse
from petflow.services import analytics_service, transaction_service


router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("/metrics", response_model=DashboardMetrics)
def get_metrics(
    db: Session = Depends(get_db),
    user=Depends(get_current_user),
):
    return analytics_service.dashboard_metrics(db)


@router.get("/transactions", response_model=List[TransactionResponse])
def get_transactions(
    from_: Optional[datetime] = Query(None, alias="from"),
    to: Optional[datetime] = Query(None),
    db: Session = Depends(get_db),
    user=Depends(get_current_user),
):
    return transaction_service.list_transactions(db, from_, to)


@router.post(
    "/transactions",
    response_model=TransactionResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_transaction(
    payload: TransactionCreate,
    db: Session = Depends(get_db),
    user=Depends(get_current_user),
):
    return transaction_service.create_transaction(db, payload)
