from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from petflow.core.dependencies import check_role, get_current_user, get_db, require_role
from petflow.schemas.appointment import (
    AppointmentCreate,
    AppointmentResponse,
    AppointmentStatusUpdate,
    AppointmentTrackingResponse,
    AppointmentUpdate,
)
from petflow.services import appointment_service


router = APIRouter(prefix="/grooming", tags=["Grooming"])

FORCE_STATUS_ROLES = ["admin", "manager"]


@router.get("", response_model=List[AppointmentResponse])
def list_appointments(
    from_: Optional[datetime] = Query(None, alias="from"),
    to: Optional[datetime] = Query(None),
    db: Session = Depends(get_db),
    user=Depends(get_current_user),
):
    return appointment_service.list_in_range(db, from_, to)


# Public: the tutor opens this from the shared tracking link.
@router.get("/track/{token}", response_model=Optional[AppointmentTrackingResponse])
def track_appointment(
    token: str,
    db: Session = Depends(get_db),
):
    return appointment_service.lookup_by_token(db, token)


@router.get("/{appointment_id}", response_model=AppointmentResponse)
def get_appointment(
    appointment_id: int,
    db: Session = Depends(get_db),
    user=Depends(get_current_user),
):
    return appointment_service.get_appointment(db, appointment_id)


@router.post("", response_model=AppointmentResponse, status_code=status.HTTP_201_CREATED)
def create_appointment(
    payload: AppointmentCreate,
    db: Session = Depends(get_db),
    user=Depends(get_current_user),
):
    return appointment_service.create_appointment(db, payload, user_id=user.id)


@router.patch("/{appointment_id}", response_model=AppointmentResponse)
def update_appointment(
    appointment_id: int,
    payload: AppointmentUpdate,
    db: Session = Depends(get_db),
    user=Depends(get_current_user),
):
    # A status in the body skips the ordered flow, same as PUT /status.
    if payload.status is not None:
        check_role(user, FORCE_STATUS_ROLES)

    return appointment_service.update_appointment(db, appointment_id, payload, user_id=user.id)


@router.post("/{appointment_id}/advance", response_model=AppointmentResponse)
def advance_status(
    appointment_id: int,
    db: Session = Depends(get_db),
    user=Depends(get_current_user),
):
    return appointment_service.advance_status(db, appointment_id, user_id=user.id)


@router.put("/{appointment_id}/status", response_model=AppointmentResponse)
def force_status(
    appointment_id: int,
    payload: AppointmentStatusUpdate,
    db: Session = Depends(get_db),
    user=Depends(require_role(FORCE_STATUS_ROLES)),
):
    return appointment_service.force_set_status(
        db, appointment_id, payload.status, user_id=user.id
    )


@router.post("/{appointment_id}/cancel", response_model=AppointmentResponse)
def cancel_appointment(
    appointment_id: int,
    db: Session = Depends(get_db),
    user=Depends(get_current_user),
):
    return appointment_service.cancel_appointment(db, appointment_id, user_id=user.id)


@router.delete("/{appointment_id}")
def delete_appointment(
    appointment_id: int,
    db: Session = Depends(get_db),
    user=Depends(require_role(["admin"])),
):
    appointment_service.delete_appointment(db, appointment_id, user_id=user.id)
    return {"message": "Appointment deleted"}
