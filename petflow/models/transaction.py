from sqlalchemy import Column, Float, ForeignKey, Integer, String, Text

from petflow.db.base import Base
from petflow.db.types import EpochDateTime, utcnow


class Transaction(Base):
    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True, index=True)

    type = Column(String, nullable=False, index=True)
    category = Column(String)
    description = Column(Text)
    amount = Column(Float, nullable=False)
    date = Column(EpochDateTime, nullable=False, index=True)

    client_id = Column(Integer, ForeignKey("clients.id"), nullable=True)
    appointment_id = Column(Integer, ForeignKey("grooming_appointments.id"), nullable=True)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=True)

    created_at = Column(EpochDateTime, nullable=False, default=utcnow)
