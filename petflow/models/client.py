from sqlalchemy import Boolean, Column, Integer, String, Text
from sqlalchemy.orm import relationship

from petflow.db.base import Base
from petflow.db.types import EpochDateTime, utcnow


class Client(Base):
    __tablename__ = "clients"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    phone = Column(String)
    email = Column(String)
    address = Column(String)
    tax_id = Column(String)
    notes = Column(Text)

    active = Column(Boolean, nullable=False, default=True)

    # Only appointment creation writes this.
    last_visit = Column(EpochDateTime, nullable=True, index=True)

    created_at = Column(EpochDateTime, nullable=False, default=utcnow)
    updated_at = Column(EpochDateTime, nullable=False, default=utcnow, onupdate=utcnow)

    pets = relationship("Pet", back_populates="client")
