from fastapi import APIRouter, Depends, Response

from petflow.core.config import settings
from petflow.core.dependencies import get_current_user
from petflow.models.user import User
from petflow.schemas.user import IdentityResponse


router = APIRouter(prefix="/auth", tags=["Auth"])


@router.get("/me", response_model=IdentityResponse)
def me(user: User = Depends(get_current_user)):
    return user


@router.post("/logout")
def logout(response: Response):
    response.delete_cookie(settings.SESSION_COOKIE_NAME, path="/")
    return {"success": True}
