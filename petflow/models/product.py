from sqlalchemy import Boolean, Column, Float, Integer, String, Text

from petflow.db.base import Base
from petflow.db.types import EpochDateTime, utcnow


class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    sku = Column(String, unique=True, nullable=False, index=True)
    description = Column(Text)
    category = Column(String, index=True)
    brand = Column(String)

    price = Column(Float, nullable=False, default=0)
    cost_price = Column(Float, default=0)

    stock = Column(Integer, nullable=False, default=0)
    min_stock = Column(Integer, nullable=False, default=5)
    unit = Column(String, default="un")

    # Comma separated, as typed in the catalog form.
    tags = Column(Text)
    image_url = Column(String)

    active = Column(Boolean, nullable=False, default=True)
    ai_generated = Column(Boolean, nullable=False, default=False)

    created_at = Column(EpochDateTime, nullable=False, default=utcnow)
    updated_at = Column(EpochDateTime, nullable=False, default=utcnow, onupdate=utcnow)

    @property
    def is_low_stock(self) -> bool:
        return (self.stock or 0) <= (self.min_stock or 0)
