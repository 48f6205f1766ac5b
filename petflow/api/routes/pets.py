from typing import List

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from petflow.core.dependencies import get_current_user, get_db
from petflow.schemas.pet import PetCreate, PetResponse, PetUpdate
from petflow.services import pet_service
from petflow.services.audit_service import log_action


router = APIRouter(prefix="/pets", tags=["Pets"])


@router.get("", response_model=List[PetResponse])
def list_pets(
    search: str | None = Query(None),
    db: Session = Depends(get_db),
    user=Depends(get_current_user),
):
    return pet_service.list_pets(db, search)


@router.get("/by-client/{client_id}", response_model=List[PetResponse])
def pets_by_client(
    client_id: int,
    db: Session = Depends(get_db),
    user=Depends(get_current_user),
):
    return pet_service.pets_by_client(db, client_id)


@router.get("/{pet_id}", response_model=PetResponse)
def get_pet(
    pet_id: int,
    db: Session = Depends(get_db),
    user=Depends(get_current_user),
):
    return pet_service.get_pet(db, pet_id)


@router.post("", response_model=PetResponse, status_code=status.HTTP_201_CREATED)
def create_pet(
    payload: PetCreate,
    db: Session = Depends(get_db),
    user=Depends(get_current_user),
):
    return pet_service.create_pet(db, payload)


@router.patch("/{pet_id}", response_model=PetResponse)
def update_pet(
    pet_id: int,
    payload: PetUpdate,
    db: Session = Depends(get_db),
    user=Depends(get_current_user),
):
    return pet_service.update_pet(db, pet_id, payload)


@router.delete("/{pet_id}")
def delete_pet(
    pet_id: int,
    db: Session = Depends(get_db),
    user=Depends(get_current_user),
):
    pet_service.delete_pet(db, pet_id)

    log_action(
        db=db,
        user_id=user.id,
        action="DELETE_PET",
        entity_type="Pet",
        entity_id=pet_id,
    )

    return {"message": "Pet deleted"}
