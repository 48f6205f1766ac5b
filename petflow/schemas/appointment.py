from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field, computed_field, field_validator

from petflow.services.link_service import tracking_url


ServiceType = Literal["bath", "grooming", "bath_grooming", "nail", "ear", "full"]
AppointmentStatus = Literal[
    "scheduled", "arrived", "bathing", "grooming", "ready", "completed", "cancelled"
]


class AppointmentCreate(BaseModel):
    pet_id: int
    client_id: int
    service: ServiceType
    scheduled_at: datetime
    price: float = Field(default=0, ge=0)
    notes: Optional[str] = None
    groomer: Optional[str] = None


class AppointmentUpdate(BaseModel):
    service: Optional[ServiceType] = None
    status: Optional[AppointmentStatus] = None
    scheduled_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    price: Optional[float] = Field(default=None, ge=0)
    notes: Optional[str] = None
    groomer: Optional[str] = None

    @field_validator("service", "status", "scheduled_at")
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError("may not be null")
        return value


class AppointmentStatusUpdate(BaseModel):
    status: AppointmentStatus


class AppointmentResponse(BaseModel):
    id: int
    pet_id: int
    client_id: int
    service: str
    status: str
    scheduled_at: datetime
    completed_at: Optional[datetime] = None
    price: Optional[float] = None
    notes: Optional[str] = None
    groomer: Optional[str] = None
    check_in_token: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

    @computed_field
    @property
    def tracking_url(self) -> str:
        return tracking_url(self.check_in_token)


class TrackingPet(BaseModel):
    name: str
    species: str
    breed: Optional[str] = None
    size: str

    class Config:
        from_attributes = True


class TrackingClient(BaseModel):
    name: str

    class Config:
        from_attributes = True


class AppointmentTrackingResponse(BaseModel):
    """Public view of one appointment, reachable with its check-in token."""

    id: int
    service: str
    status: str
    scheduled_at: datetime
    completed_at: Optional[datetime] = None
    groomer: Optional[str] = None
    pet: Optional[TrackingPet] = None
    client: Optional[TrackingClient] = None

    class Config:
        from_attributes = True
