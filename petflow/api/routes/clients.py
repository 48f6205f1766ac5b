from typing import List

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from petflow.core.dependencies import get_current_user, get_db
from petflow.schemas.appointment import AppointmentResponse
from petflow.schemas.client import (
    ClientCreate,
    ClientResponse,
    ClientUpdate,
    InactiveClientResponse,
)
from petflow.schemas.pet import PetResponse
from petflow.services import client_service, pet_service
from petflow.services.audit_service import log_action
from petflow.services.marketing_service import inactive_client_rows


router = APIRouter(prefix="/clients", tags=["Clients"])


@router.get("", response_model=List[ClientResponse])
def list_clients(
    search: str | None = Query(None),
    db: Session = Depends(get_db),
    user=Depends(get_current_user),
):
    return client_service.list_clients(db, search)


@router.get("/inactive", response_model=List[InactiveClientResponse])
def inactive_clients(
    days: int = Query(30, ge=0),
    limit: int | None = Query(None, ge=1),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
    user=Depends(get_current_user),
):
    return inactive_client_rows(db, days, limit=limit, offset=offset)


@router.get("/{client_id}", response_model=ClientResponse)
def get_client(
    client_id: int,
    db: Session = Depends(get_db),
    user=Depends(get_current_user),
):
    return client_service.get_client(db, client_id)


@router.post("", response_model=ClientResponse, status_code=status.HTTP_201_CREATED)
def create_client(
    payload: ClientCreate,
    db: Session = Depends(get_db),
    user=Depends(get_current_user),
):
    return client_service.create_client(db, payload)


@router.patch("/{client_id}", response_model=ClientResponse)
def update_client(
    client_id: int,
    payload: ClientUpdate,
    db: Session = Depends(get_db),
    user=Depends(get_current_user),
):
    return client_service.update_client(db, client_id, payload)


@router.delete("/{client_id}")
def delete_client(
    client_id: int,
    db: Session = Depends(get_db),
    user=Depends(get_current_user),
):
    client_service.delete_client(db, client_id)

    log_action(
        db=db,
        user_id=user.id,
        action="DELETE_CLIENT",
        entity_type="Client",
        entity_id=client_id,
    )

    return {"message": "Client deleted"}


@router.get("/{client_id}/appointments", response_model=List[AppointmentResponse])
def client_appointments(
    client_id: int,
    db: Session = Depends(get_db),
    user=Depends(get_current_user),
):
    client_service.get_client(db, client_id)
    return client_service.client_appointments(db, client_id)


@router.get("/{client_id}/pets", response_model=List[PetResponse])
def client_pets(
    client_id: int,
    db: Session = Depends(get_db),
    user=Depends(get_current_user),
):
    return pet_service.pets_by_client(db, client_id)
