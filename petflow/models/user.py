from sqlalchemy import Column, Integer, String

from petflow.db.base import Base
from petflow.db.types import EpochDateTime, utcnow


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    open_id = Column(String, unique=True, nullable=False, index=True)
    name = Column(String)
    email = Column(String)
    login_method = Column(String)
    role = Column(String, nullable=False, default="user")

    created_at = Column(EpochDateTime, nullable=False, default=utcnow)
    updated_at = Column(EpochDateTime, nullable=False, default=utcnow, onupdate=utcnow)
    last_signed_in = Column(EpochDateTime, nullable=False, default=utcnow)
