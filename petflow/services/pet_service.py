from sqlalchemy.orm import Session

from petflow.core.exceptions import NotFoundError, ValidationError
from petflow.db.guards import read_or_default
from petflow.db.types import to_naive_utc
from petflow.models.appointment import GroomingAppointment
from petflow.models.client import Client
from petflow.models.pet import Pet
from petflow.schemas.pet import PetCreate, PetUpdate


@read_or_default()
def list_pets(db: Session, search: str | None = None):
    query = db.query(Pet)

    if search:
        query = query.filter(Pet.name.ilike(f"%{search.strip()}%"))

    return query.order_by(Pet.created_at.desc(), Pet.id.desc()).all()


@read_or_default()
def pets_by_client(db: Session, client_id: int):
    return db.query(Pet).filter(Pet.client_id == client_id).order_by(Pet.name).all()


def get_pet(db: Session, pet_id: int) -> Pet:
    pet = db.query(Pet).filter(Pet.id == pet_id).first()
    if not pet:
        raise NotFoundError("Pet not found")
    return pet


def create_pet(db: Session, data: PetCreate) -> Pet:
    if db.query(Client.id).filter(Client.id == data.client_id).first() is None:
        raise ValidationError(f"Client {data.client_id} does not exist")

    values = data.model_dump()
    values["birth_date"] = to_naive_utc(values["birth_date"])

    pet = Pet(**values)
    db.add(pet)
    db.commit()
    db.refresh(pet)
    return pet


def update_pet(db: Session, pet_id: int, data: PetUpdate) -> Pet:
    pet = get_pet(db, pet_id)

    for field, value in data.model_dump(exclude_unset=True).items():
        if field == "birth_date":
            value = to_naive_utc(value)
        setattr(pet, field, value)

    db.commit()
    db.refresh(pet)
    return pet


def delete_pet(db: Session, pet_id: int) -> None:
    pet = get_pet(db, pet_id)

    has_appointments = (
        db.query(GroomingAppointment.id)
        .filter(GroomingAppointment.pet_id == pet_id)
        .first()
        is not None
    )
    if has_appointments:
        raise ValidationError("Pet has appointments on record; deactivate it instead")

    db.delete(pet)
    db.commit()
