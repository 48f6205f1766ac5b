from typing import Optional

from pydantic import BaseModel


class IdentityResponse(BaseModel):
    id: int
    open_id: str
    name: Optional[str] = None
    email: Optional[str] = None
    login_method: Optional[str] = None
    role: str

    class Config:
        from_attributes = True
