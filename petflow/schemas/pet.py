from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator


Species = Literal["dog", "cat", "bird", "other"]
PetSize = Literal["small", "medium", "large", "giant"]


class PetCreate(BaseModel):
    client_id: int
    name: str = Field(min_length=1)
    species: Species = "dog"
    breed: Optional[str] = None
    size: PetSize = "medium"
    weight: Optional[float] = Field(default=None, ge=0)
    birth_date: Optional[datetime] = None
    color: Optional[str] = None
    observations: Optional[str] = None
    vaccinations: Optional[str] = None
    image_url: Optional[str] = None


class PetUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    species: Optional[Species] = None
    breed: Optional[str] = None
    size: Optional[PetSize] = None
    weight: Optional[float] = Field(default=None, ge=0)
    birth_date: Optional[datetime] = None
    color: Optional[str] = None
    observations: Optional[str] = None
    vaccinations: Optional[str] = None
    image_url: Optional[str] = None
    active: Optional[bool] = None

    @field_validator("name", "species", "size", "active")
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError("may not be null")
        return value


class PetResponse(BaseModel):
    id: int
    client_id: int
    name: str
    species: str
    breed: Optional[str] = None
    size: str
    weight: Optional[float] = None
    birth_date: Optional[datetime] = None
    color: Optional[str] = None
    observations: Optional[str] = None
    vaccinations: Optional[str] = None
    image_url: Optional[str] = None
    active: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
