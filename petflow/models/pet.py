from sqlalchemy import Boolean, Column, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from petflow.db.base import Base
from petflow.db.types import EpochDateTime, utcnow


class Pet(Base):
    __tablename__ = "pets"

    id = Column(Integer, primary_key=True, index=True)
    client_id = Column(Integer, ForeignKey("clients.id"), nullable=False, index=True)

    name = Column(String, nullable=False)
    species = Column(String, nullable=False, default="dog")
    breed = Column(String)
    size = Column(String, nullable=False, default="medium")
    weight = Column(Float)
    birth_date = Column(EpochDateTime)
    color = Column(String)
    observations = Column(Text)
    vaccinations = Column(Text)
    image_url = Column(String)

    active = Column(Boolean, nullable=False, default=True)

    created_at = Column(EpochDateTime, nullable=False, default=utcnow)
    updated_at = Column(EpochDateTime, nullable=False, default=utcnow, onupdate=utcnow)

    client = relationship("Client", back_populates="pets")
