from sqlalchemy import Column, Integer, String, Text

from petflow.db.base import Base
from petflow.db.types import EpochDateTime, utcnow


class MarketingCampaign(Base):
    __tablename__ = "marketing_campaigns"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    message = Column(Text, nullable=False)

    discount_percent = Column(Integer, nullable=False, default=0)
    target_days_inactive = Column(Integer, nullable=False, default=30)

    status = Column(String, nullable=False, default="draft")
    sent_count = Column(Integer, nullable=False, default=0)

    created_at = Column(EpochDateTime, nullable=False, default=utcnow)
    updated_at = Column(EpochDateTime, nullable=False, default=utcnow, onupdate=utcnow)
