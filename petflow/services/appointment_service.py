"""Grooming appointment lifecycle.

Status moves through ``STATUS_FLOW`` one step at a time via
``advance_status``. ``force_set_status`` is the administrative bypass: it can
jump anywhere, and every use is logged and written to the audit trail.
``cancelled`` and ``completed`` are terminal for the ordered flow.

Concurrent writers on the same row are last-write-wins; there is no
optimistic concurrency check.
"""

import logging
import secrets
from datetime import datetime

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from petflow.core.exceptions import InvalidStateError, NotFoundError, ValidationError
from petflow.db.guards import read_or_default
from petflow.db.types import to_naive_utc, utcnow
from petflow.models.appointment import GroomingAppointment
from petflow.models.client import Client
from petflow.models.pet import Pet
from petflow.models.transaction import Transaction
from petflow.schemas.appointment import AppointmentCreate, AppointmentUpdate
from petflow.services.audit_service import log_action

logger = logging.getLogger(__name__)

STATUS_FLOW = ["scheduled", "arrived", "bathing", "grooming", "ready", "completed"]
ALL_STATUSES = set(STATUS_FLOW) | {"cancelled"}
TERMINAL_STATUSES = {"completed", "cancelled"}
NEXT_STATUS = dict(zip(STATUS_FLOW, STATUS_FLOW[1:]))

# token_urlsafe(24) yields 32 URL-safe characters.
TOKEN_BYTES = 24
TOKEN_ATTEMPTS = 3


def generate_check_in_token() -> str:
    return secrets.token_urlsafe(TOKEN_BYTES)


def _apply_status(appointment: GroomingAppointment, status: str, now: datetime) -> None:
    appointment.status = status

    if status == "completed":
        appointment.completed_at = appointment.completed_at or now
    else:
        appointment.completed_at = None


# =====================================================
# READS
# =====================================================

def get_appointment(db: Session, appointment_id: int) -> GroomingAppointment:
    appointment = (
        db.query(GroomingAppointment)
        .filter(GroomingAppointment.id == appointment_id)
        .first()
    )
    if not appointment:
        raise NotFoundError("Appointment not found")
    return appointment


def lookup_by_token(db: Session, token: str) -> GroomingAppointment | None:
    """Public lookup. An unknown token is not an error."""
    if not token:
        return None

    return (
        db.query(GroomingAppointment)
        .options(
            joinedload(GroomingAppointment.pet),
            joinedload(GroomingAppointment.client),
        )
        .filter(GroomingAppointment.check_in_token == token)
        .first()
    )


@read_or_default()
def list_in_range(db: Session, from_dt: datetime | None = None, to_dt: datetime | None = None):
    """Appointments with ``scheduled_at`` inside the inclusive range, oldest first."""
    from_dt = to_naive_utc(from_dt)
    to_dt = to_naive_utc(to_dt)

    if from_dt and to_dt and from_dt > to_dt:
        raise ValidationError("'from' must not be after 'to'")

    query = db.query(GroomingAppointment)

    if from_dt:
        query = query.filter(GroomingAppointment.scheduled_at >= from_dt)

    if to_dt:
        query = query.filter(GroomingAppointment.scheduled_at <= to_dt)

    return query.order_by(GroomingAppointment.scheduled_at, GroomingAppointment.id).all()


# =====================================================
# CREATE
# =====================================================

def create_appointment(
    db: Session,
    data: AppointmentCreate,
    user_id: int | None = None,
) -> GroomingAppointment:
    client = db.query(Client).filter(Client.id == data.client_id).first()
    if not client:
        raise ValidationError(f"Client {data.client_id} does not exist")

    pet = db.query(Pet).filter(Pet.id == data.pet_id).first()
    if not pet:
        raise ValidationError(f"Pet {data.pet_id} does not exist")

    if pet.client_id != client.id:
        raise ValidationError(f"Pet {pet.id} does not belong to client {client.id}")

    now = utcnow()

    for attempt in range(TOKEN_ATTEMPTS):
        appointment = GroomingAppointment(
            pet_id=pet.id,
            client_id=client.id,
            service=data.service,
            status="scheduled",
            scheduled_at=to_naive_utc(data.scheduled_at),
            price=round(float(data.price or 0), 2),
            notes=data.notes,
            groomer=data.groomer,
            check_in_token=generate_check_in_token(),
        )
        db.add(appointment)

        # Appointment and last visit land in the same commit.
        client.last_visit = now

        try:
            db.commit()
            break
        except IntegrityError:
            db.rollback()
            logger.warning("Check-in token collision, retrying (attempt %s)", attempt + 1)
            client = db.query(Client).filter(Client.id == data.client_id).first()
    else:
        raise ValidationError("Could not allocate a unique check-in token")

    db.refresh(appointment)

    log_action(
        db=db,
        user_id=user_id,
        action="CREATE_APPOINTMENT",
        entity_type="Appointment",
        entity_id=appointment.id,
        details=f"{appointment.service} for pet {pet.id} at {appointment.scheduled_at.isoformat()}",
    )

    return appointment


# =====================================================
# STATUS TRANSITIONS
# =====================================================

def advance_status(
    db: Session,
    appointment_id: int,
    user_id: int | None = None,
) -> GroomingAppointment:
    """Move one step along STATUS_FLOW. Terminal appointments are left untouched."""
    appointment = get_appointment(db, appointment_id)

    if appointment.status in TERMINAL_STATUSES:
        logger.info(
            "Appointment %s already %s, advance ignored", appointment.id, appointment.status
        )
        return appointment

    next_status = NEXT_STATUS.get(appointment.status)
    if next_status is None:
        raise InvalidStateError(f"Unknown appointment status '{appointment.status}'")

    _apply_status(appointment, next_status, utcnow())
    db.commit()
    db.refresh(appointment)

    logger.info("Appointment %s advanced to %s", appointment.id, next_status)
    return appointment


def force_set_status(
    db: Session,
    appointment_id: int,
    status: str,
    user_id: int | None = None,
) -> GroomingAppointment:
    """Set any status, skipping the ordered flow. Always audited."""
    if status not in ALL_STATUSES:
        raise ValidationError(f"Invalid status '{status}'")

    appointment = get_appointment(db, appointment_id)
    previous = appointment.status

    _apply_status(appointment, status, utcnow())
    db.commit()
    db.refresh(appointment)

    logger.warning(
        "Appointment %s status forced %s -> %s by user %s",
        appointment.id, previous, status, user_id,
    )
    log_action(
        db=db,
        user_id=user_id,
        action="FORCE_SET_STATUS",
        entity_type="Appointment",
        entity_id=appointment.id,
        details=f"{previous} -> {status}",
    )

    return appointment


def cancel_appointment(
    db: Session,
    appointment_id: int,
    user_id: int | None = None,
) -> GroomingAppointment:
    appointment = get_appointment(db, appointment_id)

    if appointment.status in TERMINAL_STATUSES:
        raise InvalidStateError(f"Appointment is already {appointment.status}")

    previous = appointment.status
    _apply_status(appointment, "cancelled", utcnow())
    db.commit()
    db.refresh(appointment)

    log_action(
        db=db,
        user_id=user_id,
        action="CANCEL_APPOINTMENT",
        entity_type="Appointment",
        entity_id=appointment.id,
        details=f"Cancelled from {previous}",
    )

    return appointment


# =====================================================
# UPDATE / DELETE
# =====================================================

def update_appointment(
    db: Session,
    appointment_id: int,
    data: AppointmentUpdate,
    user_id: int | None = None,
) -> GroomingAppointment:
    appointment = get_appointment(db, appointment_id)
    changes = data.model_dump(exclude_unset=True)
    status = changes.pop("status", None)

    for field, value in changes.items():
        if field in ("scheduled_at", "completed_at"):
            value = to_naive_utc(value)
        if field == "price" and value is not None:
            value = round(float(value), 2)
        setattr(appointment, field, value)

    db.commit()

    if status is not None and status != appointment.status:
        return force_set_status(db, appointment_id, status, user_id=user_id)

    db.refresh(appointment)
    return appointment


def delete_appointment(
    db: Session,
    appointment_id: int,
    user_id: int | None = None,
) -> None:
    """Administrative cleanup. Regular cancellation goes through cancel_appointment."""
    appointment = get_appointment(db, appointment_id)

    in_ledger = (
        db.query(Transaction.id)
        .filter(Transaction.appointment_id == appointment_id)
        .first()
        is not None
    )
    if in_ledger:
        raise ValidationError("Appointment is referenced by ledger entries; cancel it instead")

    details = f"status={appointment.status} pet={appointment.pet_id} client={appointment.client_id}"
    db.delete(appointment)
    db.commit()

    logger.warning("Appointment %s hard deleted by user %s", appointment_id, user_id)
    log_action(
        db=db,
        user_id=user_id,
        action="DELETE_APPOINTMENT",
        entity_type="Appointment",
        entity_id=appointment_id,
        details=details,
    )
