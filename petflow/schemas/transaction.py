from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field


TransactionType = Literal["income", "expense"]


class TransactionCreate(BaseModel):
    type: TransactionType
    category: Optional[str] = None
    description: Optional[str] = None
    amount: float = Field(gt=0)
    date: datetime
    client_id: Optional[int] = None
    appointment_id: Optional[int] = None
    product_id: Optional[int] = None


class TransactionResponse(BaseModel):
    id: int
    type: str
    category: Optional[str] = None
    description: Optional[str] = None
    amount: float
    date: datetime
    client_id: Optional[int] = None
    appointment_id: Optional[int] = None
    product_id: Optional[int] = None
    created_at: datetime

    class Config:
        from_attributes = True
