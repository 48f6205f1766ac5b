from fastapi import APIRouter, Depends

from petflow.core.dependencies import get_current_user
from petflow.schemas.menu import MenuResponse
from petflow.services.menu_service import build_menu


router = APIRouter(tags=["Menu"])


@router.get("/menu", response_model=MenuResponse)
def get_menu(user=Depends(get_current_user)):
    return build_menu()
