from sqlalchemy import Column, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from petflow.db.base import Base
from petflow.db.types import EpochDateTime, utcnow


class GroomingAppointment(Base):
    __tablename__ = "grooming_appointments"

    id = Column(Integer, primary_key=True, index=True)

    pet_id = Column(Integer, ForeignKey("pets.id"), nullable=False, index=True)
    client_id = Column(Integer, ForeignKey("clients.id"), nullable=False, index=True)

    service = Column(String, nullable=False, default="bath")
    status = Column(String, nullable=False, default="scheduled")

    scheduled_at = Column(EpochDateTime, nullable=False, index=True)
    completed_at = Column(EpochDateTime, nullable=True)

    price = Column(Float, default=0)
    notes = Column(Text)
    groomer = Column(String)

    check_in_token = Column(String, unique=True, nullable=False, index=True)

    created_at = Column(EpochDateTime, nullable=False, default=utcnow)
    updated_at = Column(EpochDateTime, nullable=False, default=utcnow, onupdate=utcnow)

    pet = relationship("Pet")
    client = relationship("Client")
