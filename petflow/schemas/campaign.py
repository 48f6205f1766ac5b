from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator


CampaignStatus = Literal["draft", "active", "paused", "completed"]


class CampaignCreate(BaseModel):
    name: str = Field(min_length=1)
    message: str = Field(min_length=1)
    discount_percent: int = Field(default=0, ge=0, le=100)
    target_days_inactive: int = Field(default=30, ge=0)
    status: CampaignStatus = "draft"


class CampaignUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    message: Optional[str] = Field(default=None, min_length=1)
    discount_percent: Optional[int] = Field(default=None, ge=0, le=100)
    target_days_inactive: Optional[int] = Field(default=None, ge=0)
    status: Optional[CampaignStatus] = None

    @field_validator("name", "message", "discount_percent", "target_days_inactive", "status")
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError("may not be null")
        return value


class CampaignResponse(BaseModel):
    id: int
    name: str
    message: str
    discount_percent: int
    target_days_inactive: int
    status: str
    sent_count: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class CampaignTarget(BaseModel):
    client_id: int
    client_name: str
    phone: Optional[str] = None
    days_inactive: Optional[int] = None
    message: str
    whatsapp_url: Optional[str] = None


class GenerateMessageRequest(BaseModel):
    pet_name: str = Field(min_length=1)
    discount_percent: int = Field(ge=0, le=100)
    days_inactive: int = Field(ge=0)


class GeneratedMessage(BaseModel):
    message: str
    ai_generated: bool
