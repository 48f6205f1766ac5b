import logging
from datetime import datetime, timedelta

from sqlalchemy import or_
from sqlalchemy.orm import Session

from petflow.core.exceptions import NotFoundError, ValidationError
from petflow.db.guards import read_or_default
from petflow.db.types import utcnow
from petflow.models.appointment import GroomingAppointment
from petflow.models.client import Client
from petflow.models.pet import Pet
from petflow.schemas.client import ClientCreate, ClientUpdate

logger = logging.getLogger(__name__)


@read_or_default()
def list_clients(db: Session, search: str | None = None):
    query = db.query(Client)

    if search:
        pattern = f"%{search.strip()}%"
        query = query.filter(
            or_(
                Client.name.ilike(pattern),
                Client.phone.ilike(pattern),
                Client.email.ilike(pattern),
            )
        )

    return query.order_by(Client.created_at.desc(), Client.id.desc()).all()


def get_client(db: Session, client_id: int) -> Client:
    client = db.query(Client).filter(Client.id == client_id).first()
    if not client:
        raise NotFoundError("Client not found")
    return client


def create_client(db: Session, data: ClientCreate) -> Client:
    client = Client(**data.model_dump())
    db.add(client)
    db.commit()
    db.refresh(client)
    logger.info("Created client %s", client.id)
    return client


def update_client(db: Session, client_id: int, data: ClientUpdate) -> Client:
    client = get_client(db, client_id)

    for field, value in data.model_dump(exclude_unset=True).items():
        setattr(client, field, value)

    db.commit()
    db.refresh(client)
    return client


def delete_client(db: Session, client_id: int) -> None:
    """Hard delete, allowed only for clients with no pets and no appointments."""
    client = get_client(db, client_id)

    has_pets = db.query(Pet.id).filter(Pet.client_id == client_id).first() is not None
    has_appointments = (
        db.query(GroomingAppointment.id)
        .filter(GroomingAppointment.client_id == client_id)
        .first()
        is not None
    )
    if has_pets or has_appointments:
        raise ValidationError(
            "Client has pets or appointments on record; deactivate it instead"
        )

    db.delete(client)
    db.commit()


@read_or_default()
def client_appointments(db: Session, client_id: int):
    return (
        db.query(GroomingAppointment)
        .filter(GroomingAppointment.client_id == client_id)
        .order_by(GroomingAppointment.scheduled_at.desc())
        .all()
    )


# =====================================================
# INACTIVITY
# =====================================================

@read_or_default()
def inactive_clients(
    db: Session,
    days: int,
    now: datetime | None = None,
    limit: int | None = None,
    offset: int = 0,
):
    """Clients whose last visit is older than ``days`` or who never visited."""
    if days < 0:
        raise ValidationError("days must be zero or positive")

    cutoff = (now or utcnow()) - timedelta(days=days)

    query = (
        db.query(Client)
        .filter(or_(Client.last_visit < cutoff, Client.last_visit.is_(None)))
        .order_by(Client.last_visit.is_(None).desc(), Client.last_visit, Client.id)
    )

    if offset:
        query = query.offset(offset)
    if limit is not None:
        query = query.limit(limit)

    return query.all()


def days_since_visit(client: Client, now: datetime | None = None) -> int | None:
    if client.last_visit is None:
        return None
    return max(0, ((now or utcnow()) - client.last_visit).days)
